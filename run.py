#!/usr/bin/env python3
"""
Console Banking Entry Point

Starts the interactive banking menu. All state is in memory and is lost on exit.
"""

import sys

from console_banking.config import get_config
from console_banking.logging_config import setup_logging
from console_banking.shell import create_shell


def main() -> int:
    settings = get_config()
    setup_logging(level=settings.log_level, log_format=settings.log_format)
    
    shell = create_shell()
    try:
        shell.run()
    except KeyboardInterrupt:
        print(f"\nThank you for using {shell.service.bank.name} Banking System!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
