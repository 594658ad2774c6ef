"""
Account Module

Accounts share one deposit/withdraw contract. The rules that differ between
products (withdrawal limits, post-withdrawal charges, interest accrual) live
in a product policy selected by the account's product type:

- Savings: withdrawals may not take the balance below a minimum balance,
  and monthly interest accrues at interest_rate / 12.
- Current: withdrawals may overdraw down to -overdraft_limit, and any
  withdrawal that leaves the balance negative is charged a flat fee.
"""

from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from dataclasses import dataclass, field, InitVar
from typing import Any, ClassVar, Dict, List, Optional, Tuple
from enum import Enum

from .currency import AmountLike, to_decimal
from .exceptions import BankingError, InvalidAmount, InsufficientFunds, OverdraftExceeded
from .transactions import Transaction, TransactionType
from .logging_config import get_logger, log_action


logger = get_logger("console_banking.accounts")

MONTHS_PER_YEAR = Decimal('12')


class ProductType(Enum):
    """Banking product types"""
    SAVINGS = "savings"
    CURRENT = "current"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ProductPolicy(ABC):
    """Product-specific business rules for an account"""

    product_type: ClassVar[ProductType]
    earns_interest: ClassVar[bool] = False

    @abstractmethod
    def check_withdrawal(self, balance: Decimal, amount: Decimal) -> None:
        """Raise a BankingError if withdrawing amount from balance is not allowed"""

    def charges_after_withdrawal(self, balance: Decimal) -> List[Tuple[TransactionType, Decimal]]:
        """Charges to deduct once a withdrawal has left the account at balance"""
        return []

    def monthly_interest(self, balance: Decimal) -> Optional[Decimal]:
        """Interest for one month, or None if the product earns no interest"""
        return None

    @abstractmethod
    def describe(self, balance: Decimal) -> Dict[str, Any]:
        """Product-specific fields for an account summary"""


@dataclass
class SavingsPolicy(ProductPolicy):
    """Minimum balance floor with monthly interest"""
    interest_rate: Decimal  # Annual rate, e.g. 0.04 for 4%
    minimum_balance: Decimal

    product_type: ClassVar[ProductType] = ProductType.SAVINGS
    earns_interest: ClassVar[bool] = True

    def __post_init__(self):
        self.interest_rate = to_decimal(self.interest_rate)
        self.minimum_balance = to_decimal(self.minimum_balance)

    def check_withdrawal(self, balance: Decimal, amount: Decimal) -> None:
        if balance - amount < self.minimum_balance:
            raise InsufficientFunds(
                f"Withdrawal failed: minimum balance of {self.minimum_balance} must be maintained"
            )

    def monthly_interest(self, balance: Decimal) -> Optional[Decimal]:
        return balance * self.interest_rate / MONTHS_PER_YEAR

    def describe(self, balance: Decimal) -> Dict[str, Any]:
        return {
            "interest_rate": self.interest_rate,
            "minimum_balance": self.minimum_balance,
        }


@dataclass
class CurrentPolicy(ProductPolicy):
    """Overdraft down to -overdraft_limit, flat fee whenever overdrawn by a withdrawal"""
    overdraft_limit: Decimal
    overdraft_fee: Decimal

    product_type: ClassVar[ProductType] = ProductType.CURRENT

    def __post_init__(self):
        self.overdraft_limit = to_decimal(self.overdraft_limit)
        self.overdraft_fee = to_decimal(self.overdraft_fee)

    def check_withdrawal(self, balance: Decimal, amount: Decimal) -> None:
        if balance - amount < -self.overdraft_limit:
            raise OverdraftExceeded(
                f"Withdrawal failed: overdraft limit of {self.overdraft_limit} exceeded"
            )

    def charges_after_withdrawal(self, balance: Decimal) -> List[Tuple[TransactionType, Decimal]]:
        # The fee itself is not checked against the overdraft limit
        if balance < 0:
            return [(TransactionType.OVERDRAFT_FEE, self.overdraft_fee)]
        return []

    def describe(self, balance: Decimal) -> Dict[str, Any]:
        return {
            "overdraft_limit": self.overdraft_limit,
            "overdraft_fee": self.overdraft_fee,
            "overdrawn": balance < 0,
        }


@dataclass
class Account:
    """
    Bank account holding a balance and its transaction history

    The balance only changes through deposit, withdraw and apply_interest,
    and every change appends a Transaction, so the balance always equals
    unrecorded_opening_balance plus the sum of the signed transaction amounts.
    A positive opening balance is recorded as an initial deposit; a negative
    one is carried as unrecorded_opening_balance with no transaction.
    """
    account_number: str
    holder_name: str
    policy: ProductPolicy
    initial_balance: InitVar[AmountLike] = Decimal('0')

    _balance: Decimal = field(init=False, default=Decimal('0'))
    _transactions: List[Transaction] = field(init=False, default_factory=list, repr=False)
    unrecorded_opening_balance: Decimal = field(init=False, default=Decimal('0'))
    last_error: Optional[BankingError] = field(init=False, default=None, repr=False, compare=False)

    def __post_init__(self, initial_balance: AmountLike):
        opening = to_decimal(initial_balance)
        self._balance = opening
        if opening > 0:
            self._add_transaction(TransactionType.INITIAL_DEPOSIT, opening)
        else:
            self.unrecorded_opening_balance = opening

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def product_type(self) -> ProductType:
        return self.policy.product_type

    @property
    def account_type(self) -> str:
        """Display name of the product, e.g. "Savings" """
        return self.policy.product_type.label

    @property
    def earns_interest(self) -> bool:
        return self.policy.earns_interest

    @property
    def is_overdrawn(self) -> bool:
        return self._balance < 0

    def deposit(self, amount: AmountLike) -> bool:
        """
        Credit amount to the account

        Returns:
            True if the deposit was applied, False if the amount was invalid
        """
        self.last_error = None
        try:
            amount = self._validate_amount(amount)
        except InvalidAmount as e:
            self._reject("deposit", e)
            return False

        self._balance += amount
        self._add_transaction(TransactionType.DEPOSIT, amount)

        log_action(
            logger, "info", "Deposit applied",
            action="deposit", resource=f"account:{self.account_number}",
            extra={"amount": str(amount), "balance": str(self._balance)}
        )
        return True

    def withdraw(self, amount: AmountLike) -> bool:
        """
        Debit amount from the account if the product rules allow it

        A current account left negative by the withdrawal is also charged
        its overdraft fee in the same call.

        Returns:
            True if the withdrawal was applied, False if it was rejected.
            The rejection reason is kept in last_error.
        """
        self.last_error = None
        try:
            amount = self._validate_amount(amount)
            self.policy.check_withdrawal(self._balance, amount)
        except BankingError as e:
            self._reject("withdraw", e)
            return False

        self._balance -= amount
        self._add_transaction(TransactionType.WITHDRAWAL, amount)

        for charge_type, charge in self.policy.charges_after_withdrawal(self._balance):
            self._balance -= charge
            self._add_transaction(charge_type, charge)
            log_action(
                logger, "info", f"{charge_type.label} charged",
                action="charge", resource=f"account:{self.account_number}",
                extra={"amount": str(charge), "balance": str(self._balance)}
            )

        log_action(
            logger, "info", "Withdrawal applied",
            action="withdraw", resource=f"account:{self.account_number}",
            extra={"amount": str(amount), "balance": str(self._balance)}
        )
        return True

    def apply_interest(self) -> Optional[Transaction]:
        """
        Credit one month of interest on the current balance

        Every call compounds on the balance at that moment; there is no
        once-per-period guard here.

        Returns:
            The interest transaction, or None if the product earns no interest
        """
        interest = self.policy.monthly_interest(self._balance)
        if interest is None:
            return None

        self._balance += interest
        transaction = self._add_transaction(TransactionType.INTEREST_CREDIT, interest)

        log_action(
            logger, "info", "Interest credited",
            action="apply_interest", resource=f"account:{self.account_number}",
            extra={"amount": str(interest), "balance": str(self._balance)}
        )
        return transaction

    def transaction_history(self) -> Tuple[Transaction, ...]:
        """Transactions in the order they were applied"""
        return tuple(self._transactions)

    def describe(self) -> Dict[str, Any]:
        """Account summary with the product-specific fields"""
        info = {
            "account_number": self.account_number,
            "holder_name": self.holder_name,
            "account_type": self.account_type,
            "balance": self._balance,
        }
        info.update(self.policy.describe(self._balance))
        return info

    def _add_transaction(self, transaction_type: TransactionType, amount: Decimal) -> Transaction:
        """Record an event against the balance as it stands now"""
        transaction = Transaction(transaction_type, amount, self._balance)
        self._transactions.append(transaction)
        return transaction

    def _validate_amount(self, amount: AmountLike) -> Decimal:
        try:
            value = to_decimal(amount)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidAmount(f"Invalid amount: {amount!r}") from None
        if not value.is_finite() or value <= 0:
            raise InvalidAmount(f"Amount must be positive, got {value}")
        return value

    def _reject(self, action: str, error: BankingError) -> None:
        self.last_error = error
        log_action(
            logger, "warning", str(error),
            action=action, resource=f"account:{self.account_number}",
            extra={"error": error.code, "balance": str(self._balance)}
        )
