"""
Bank Registry Module

The Bank owns its accounts in creation order. Account numbers are not
required to be unique: duplicates are stored, but lookups only ever reach the
first account with a given number.
"""

from decimal import Decimal, InvalidOperation
from dataclasses import dataclass
from typing import Iterator, List, Optional

from .accounts import Account, ProductPolicy, SavingsPolicy, CurrentPolicy
from .config import get_config
from .currency import AmountLike, to_decimal
from .exceptions import AccountNotFound
from .logging_config import get_logger, log_action


logger = get_logger("console_banking.bank")


@dataclass(frozen=True)
class AccountSummary:
    """One line of the account listing"""
    account_number: str
    holder_name: str
    account_type: str
    balance: Decimal


@dataclass(frozen=True)
class InterestPosting:
    """Interest credited to one account by a batch run"""
    account_number: str
    amount: Decimal
    balance_after: Decimal


class AccountListing:
    """
    Lazy view over a bank's accounts

    Summaries are produced on iteration, so every pass reflects the current
    balances and the view can be iterated any number of times.
    """

    def __init__(self, accounts: List[Account]):
        self._accounts = accounts

    def __iter__(self) -> Iterator[AccountSummary]:
        for account in self._accounts:
            yield AccountSummary(
                account_number=account.account_number,
                holder_name=account.holder_name,
                account_type=account.account_type,
                balance=account.balance,
            )

    def __len__(self) -> int:
        return len(self._accounts)


class Bank:
    """Registry of savings and current accounts"""

    def __init__(self, name: Optional[str] = None):
        self.name = name or get_config().bank_name
        self._accounts: List[Account] = []

    def __len__(self) -> int:
        return len(self._accounts)

    def create_savings_account(
        self,
        account_number: str,
        holder_name: str,
        initial_balance: AmountLike = Decimal('0'),
        interest_rate: Optional[AmountLike] = None,
        minimum_balance: Optional[AmountLike] = None
    ) -> Optional[Account]:
        """
        Open a savings account

        Args:
            account_number: Caller-chosen account number
            holder_name: Name of the account holder
            initial_balance: Opening balance; only a positive one records a transaction
            interest_rate: Annual rate (configured default if not given)
            minimum_balance: Withdrawal floor (configured default if not given)

        Returns:
            The new account, or None if the initial balance is not a number.
            A negative initial balance is kept as the opening balance with no
            initial deposit transaction.
        """
        settings = get_config()
        policy = SavingsPolicy(
            interest_rate=settings.default_interest_rate if interest_rate is None else interest_rate,
            minimum_balance=settings.default_minimum_balance if minimum_balance is None else minimum_balance,
        )
        return self._open_account(account_number, holder_name, policy, initial_balance)

    def create_current_account(
        self,
        account_number: str,
        holder_name: str,
        initial_balance: AmountLike = Decimal('0'),
        overdraft_limit: Optional[AmountLike] = None,
        overdraft_fee: Optional[AmountLike] = None
    ) -> Optional[Account]:
        """
        Open a current account

        Args:
            account_number: Caller-chosen account number
            holder_name: Name of the account holder
            initial_balance: Opening balance; only a positive one records a transaction
            overdraft_limit: Most the account may be overdrawn (configured default if not given)
            overdraft_fee: Fee charged when a withdrawal overdraws (configured default if not given)

        Returns:
            The new account, or None if the initial balance is not a number.
            A negative initial balance is kept as the opening balance with no
            initial deposit transaction.
        """
        settings = get_config()
        policy = CurrentPolicy(
            overdraft_limit=settings.default_overdraft_limit if overdraft_limit is None else overdraft_limit,
            overdraft_fee=settings.default_overdraft_fee if overdraft_fee is None else overdraft_fee,
        )
        return self._open_account(account_number, holder_name, policy, initial_balance)

    def find_account(self, account_number: str) -> Optional[Account]:
        """First account with the given number, or None"""
        for account in self._accounts:
            if account.account_number == account_number:
                return account
        return None

    def get_account(self, account_number: str) -> Account:
        """
        First account with the given number

        Raises:
            AccountNotFound: If no account has that number
        """
        account = self.find_account(account_number)
        if account is None:
            raise AccountNotFound(account_number)
        return account

    def list_all_accounts(self) -> AccountListing:
        """Summaries of every account in creation order"""
        return AccountListing(self._accounts)

    def apply_interest_to_all_savings(self) -> List[InterestPosting]:
        """
        Credit one month of interest to every interest-bearing account

        Accounts without the interest capability are skipped.
        """
        postings = []
        for account in self._accounts:
            if not account.earns_interest:
                continue
            transaction = account.apply_interest()
            if transaction is not None:
                postings.append(InterestPosting(
                    account_number=account.account_number,
                    amount=transaction.amount,
                    balance_after=transaction.balance_after,
                ))

        log_action(
            logger, "info", "Monthly interest applied",
            action="apply_interest_batch", resource=f"bank:{self.name}",
            extra={"accounts": len(postings)}
        )
        return postings

    def _open_account(
        self,
        account_number: str,
        holder_name: str,
        policy: ProductPolicy,
        initial_balance: AmountLike
    ) -> Optional[Account]:
        try:
            opening = to_decimal(initial_balance)
        except (InvalidOperation, TypeError, ValueError):
            opening = None
        if opening is None or not opening.is_finite():
            log_action(
                logger, "warning", "Account not opened: initial balance is not a number",
                action="create_account", resource=f"account:{account_number}",
                extra={"initial_balance": repr(initial_balance)}
            )
            return None

        if opening < 0:
            log_action(
                logger, "warning", "Negative initial balance carried without an initial deposit",
                action="create_account", resource=f"account:{account_number}",
                extra={"initial_balance": str(opening)}
            )

        if self.find_account(account_number) is not None:
            log_action(
                logger, "warning", "Duplicate account number; lookups will return the existing account",
                action="create_account", resource=f"account:{account_number}"
            )

        account = Account(account_number, holder_name, policy, opening)
        self._accounts.append(account)

        log_action(
            logger, "info", f"{account.account_type} account created",
            action="create_account", resource=f"account:{account_number}",
            extra={"holder_name": holder_name, "initial_balance": str(opening)}
        )
        return account
