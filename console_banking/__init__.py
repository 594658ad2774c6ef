"""
Console Banking

An in-memory bank of savings and current accounts with per-product
withdrawal rules, monthly interest and transaction histories.
"""

__version__ = "1.0.0"
