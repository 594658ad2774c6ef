"""
Interactive Menu Shell

Reads menu choices and arguments, turns them into requests for the
BankingService and prints the responses.
"""

from decimal import Decimal
from typing import Callable, Optional

from .bank import Bank
from .currency import parse_amount
from .service import (
    BankingService, Response, CreateSavings, CreateCurrent, Deposit, Withdraw,
    GetBalance, GetAccountInfo, GetTransactionHistory, ListAllAccounts,
    ApplyInterestToAllSavings, Exit
)


MENU_OPTIONS = (
    "Create Savings Account",
    "Create Current Account",
    "Deposit Money",
    "Withdraw Money",
    "Check Account Balance",
    "View Account Details",
    "View Transaction History",
    "View All Accounts",
    "Apply Interest to Savings Accounts",
    "Exit",
)

FIELD_LABELS = {
    "account_number": "Account Number",
    "holder_name": "Account Holder",
    "account_type": "Account Type",
    "balance": "Current Balance",
    "interest_rate": "Interest Rate",
    "minimum_balance": "Minimum Balance",
    "overdraft_limit": "Overdraft Limit",
    "overdraft_fee": "Overdraft Fee",
}
MONEY_FIELDS = {"balance", "minimum_balance", "overdraft_limit", "overdraft_fee"}


class BankingShell:
    """Numbered menu over a BankingService"""

    def __init__(
        self,
        service: BankingService,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print
    ):
        self.service = service
        self._input = input_func
        self._output = output_func

    def run(self) -> None:
        """Loop until the user chooses Exit or input ends"""
        self._output("Welcome to the Banking System!")
        while True:
            self._show_menu()
            try:
                choice = self._input("Enter your choice: ").strip()
            except EOFError:
                break
            try:
                keep_going = self.run_choice(choice)
            except EOFError:
                break
            if not keep_going:
                break

    def run_choice(self, choice: str) -> bool:
        """Handle one menu choice; returns False when the shell should stop"""
        if not choice.isdecimal() or not 1 <= int(choice) <= len(MENU_OPTIONS):
            self._output("Invalid choice! Please try again.")
            return True

        request = self._build_request(int(choice))
        if request is None:
            return True

        response = self.service.handle(request)
        self._render(request, response)
        return not isinstance(request, Exit)

    def _show_menu(self) -> None:
        self._output(f"\n========== {self.service.bank.name} Banking System ==========")
        for number, label in enumerate(MENU_OPTIONS, start=1):
            self._output(f"{number}. {label}")

    def _build_request(self, choice: int):
        if choice in (1, 2):
            account_number = self._ask("Enter account number: ")
            holder_name = self._ask("Enter account holder name: ")
            initial_balance = self._ask_amount("Enter initial deposit (0 for no deposit): ")
            if initial_balance is None:
                return None
            request_type = CreateSavings if choice == 1 else CreateCurrent
            return request_type(account_number, holder_name, initial_balance)
        if choice in (3, 4):
            account_number = self._ask("Enter account number: ")
            if self.service.bank.find_account(account_number) is None:
                self._output("Account not found!")
                return None
            prompt = "Enter deposit amount: " if choice == 3 else "Enter withdrawal amount: "
            amount = self._ask_amount(prompt)
            if amount is None:
                return None
            request_type = Deposit if choice == 3 else Withdraw
            return request_type(account_number, amount)
        if choice == 5:
            return GetBalance(self._ask("Enter account number: "))
        if choice == 6:
            return GetAccountInfo(self._ask("Enter account number: "))
        if choice == 7:
            return GetTransactionHistory(self._ask("Enter account number: "))
        if choice == 8:
            return ListAllAccounts()
        if choice == 9:
            return ApplyInterestToAllSavings()
        return Exit()

    def _ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def _ask_amount(self, prompt: str) -> Optional[Decimal]:
        text = self._ask(prompt)
        try:
            return parse_amount(text)
        except ValueError as e:
            self._output(f"Invalid amount: {e}")
            return None

    def _render(self, request, response: Response) -> None:
        if not response.ok:
            self._output(response.message)
            return

        money = self.service.format_money
        if isinstance(request, GetAccountInfo):
            info = response.data
            self._output(f"\n=== {info['account_type']} Account Information ===")
            for key, label in FIELD_LABELS.items():
                if key not in info:
                    continue
                value = info[key]
                if key in MONEY_FIELDS:
                    value = money(value)
                elif key == "interest_rate":
                    value = f"{(value * 100).normalize():f}% per annum"
                self._output(f"{label}: {value}")
            if info.get("overdrawn"):
                self._output("*** ACCOUNT OVERDRAWN ***")
        elif isinstance(request, GetTransactionHistory) and response.data:
            self._output(f"\n=== Transaction History for {request.account_number} ===")
            for transaction in response.data:
                self._output(
                    f"Type: {transaction.transaction_type.label} | "
                    f"Amount: {money(transaction.amount)} | "
                    f"Balance: {money(transaction.balance_after)} | "
                    f"Time: {transaction.timestamp.isoformat(timespec='seconds')}"
                )
        elif isinstance(request, ListAllAccounts) and response.data:
            self._output(f"\n=== {response.message} ===")
            for summary in response.data:
                self._output(
                    f"Account: {summary.account_number} | Holder: {summary.holder_name} | "
                    f"Type: {summary.account_type} | Balance: {money(summary.balance)}"
                )
        elif isinstance(request, ApplyInterestToAllSavings):
            self._output("\n=== Applying Monthly Interest ===")
            for posting in response.data:
                self._output(
                    f"Account {posting.account_number}: Interest of {money(posting.amount)} "
                    f"applied. New balance: {money(posting.balance_after)}"
                )
            self._output(response.message)
        else:
            self._output(response.message)


def create_shell(bank: Optional[Bank] = None, **kwargs) -> BankingShell:
    """Build a shell over a new (or the given) bank"""
    return BankingShell(BankingService(bank or Bank()), **kwargs)
