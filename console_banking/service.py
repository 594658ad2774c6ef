"""
Request Handling Module

Each menu action is a request object. BankingService.handle() runs it
against a Bank and always answers with a Response; failures come back as
ok=False with an error code rather than as exceptions.
"""

from decimal import Decimal
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from .bank import Bank
from .config import get_config
from .currency import Currency, Money
from .exceptions import BankingError, InvalidAmount
from .logging_config import get_logger


logger = get_logger("console_banking.service")


@dataclass(frozen=True)
class CreateSavings:
    account_number: str
    holder_name: str
    initial_balance: Decimal = Decimal('0')


@dataclass(frozen=True)
class CreateCurrent:
    account_number: str
    holder_name: str
    initial_balance: Decimal = Decimal('0')


@dataclass(frozen=True)
class Deposit:
    account_number: str
    amount: Decimal


@dataclass(frozen=True)
class Withdraw:
    account_number: str
    amount: Decimal


@dataclass(frozen=True)
class GetBalance:
    account_number: str


@dataclass(frozen=True)
class GetAccountInfo:
    account_number: str


@dataclass(frozen=True)
class GetTransactionHistory:
    account_number: str


@dataclass(frozen=True)
class ListAllAccounts:
    pass


@dataclass(frozen=True)
class ApplyInterestToAllSavings:
    pass


@dataclass(frozen=True)
class Exit:
    pass


Request = Union[
    CreateSavings, CreateCurrent, Deposit, Withdraw, GetBalance, GetAccountInfo,
    GetTransactionHistory, ListAllAccounts, ApplyInterestToAllSavings, Exit
]


@dataclass
class Response:
    """Outcome of a request"""
    ok: bool
    message: str
    data: Any = None
    error: Optional[str] = None  # BankingError code when ok is False


class BankingService:
    """Dispatches requests to a Bank"""

    def __init__(self, bank: Bank, currency: Optional[Currency] = None):
        self.bank = bank
        self.currency = currency or Currency.from_code(get_config().currency)
        self._handlers: Dict[type, Callable[[Any], Response]] = {
            CreateSavings: self._create_savings,
            CreateCurrent: self._create_current,
            Deposit: self._deposit,
            Withdraw: self._withdraw,
            GetBalance: self._get_balance,
            GetAccountInfo: self._get_account_info,
            GetTransactionHistory: self._get_transaction_history,
            ListAllAccounts: self._list_all_accounts,
            ApplyInterestToAllSavings: self._apply_interest,
            Exit: self._exit,
        }

    def handle(self, request: Request) -> Response:
        handler = self._handlers.get(type(request))
        if handler is None:
            raise TypeError(f"Unsupported request: {type(request).__name__}")

        try:
            return handler(request)
        except BankingError as e:
            logger.debug(f"{type(request).__name__} failed: {e}")
            return self._failure(e)

    def format_money(self, amount: Decimal) -> str:
        return Money(amount, self.currency).to_string()

    def _failure(self, error: BankingError) -> Response:
        return Response(ok=False, message=str(error), error=error.code)

    def _create_savings(self, request: CreateSavings) -> Response:
        account = self.bank.create_savings_account(
            request.account_number, request.holder_name, request.initial_balance
        )
        if account is None:
            return self._failure(InvalidAmount(f"Invalid initial deposit: {request.initial_balance!r}"))
        return Response(ok=True, message="Savings account created successfully!", data=account.describe())

    def _create_current(self, request: CreateCurrent) -> Response:
        account = self.bank.create_current_account(
            request.account_number, request.holder_name, request.initial_balance
        )
        if account is None:
            return self._failure(InvalidAmount(f"Invalid initial deposit: {request.initial_balance!r}"))
        return Response(ok=True, message="Current account created successfully!", data=account.describe())

    def _deposit(self, request: Deposit) -> Response:
        account = self.bank.get_account(request.account_number)
        if not account.deposit(request.amount):
            return self._failure(account.last_error)
        return Response(
            ok=True,
            message=(f"Deposited {self.format_money(request.amount)}. "
                     f"New balance: {self.format_money(account.balance)}"),
            data={"balance": account.balance},
        )

    def _withdraw(self, request: Withdraw) -> Response:
        account = self.bank.get_account(request.account_number)
        history_before = len(account.transaction_history())
        if not account.withdraw(request.amount):
            return self._failure(account.last_error)

        posted = account.transaction_history()[history_before:]
        message = (f"Withdrew {self.format_money(request.amount)}. "
                   f"New balance: {self.format_money(account.balance)}")
        for charge in posted[1:]:
            message += f" ({charge.transaction_type.label} of {self.format_money(charge.amount)} applied)"
        return Response(
            ok=True,
            message=message,
            data={"balance": account.balance, "transactions": [t.to_dict() for t in posted]},
        )

    def _get_balance(self, request: GetBalance) -> Response:
        account = self.bank.get_account(request.account_number)
        return Response(
            ok=True,
            message=f"Current balance: {self.format_money(account.balance)}",
            data={"balance": account.balance},
        )

    def _get_account_info(self, request: GetAccountInfo) -> Response:
        account = self.bank.get_account(request.account_number)
        return Response(ok=True, message=f"{account.account_type} account information", data=account.describe())

    def _get_transaction_history(self, request: GetTransactionHistory) -> Response:
        account = self.bank.get_account(request.account_number)
        history = account.transaction_history()
        if not history:
            return Response(ok=True, message="No transactions found.", data=[])
        return Response(
            ok=True,
            message=f"{len(history)} transaction(s) for {account.account_number}",
            data=list(history),
        )

    def _list_all_accounts(self, request: ListAllAccounts) -> Response:
        summaries = list(self.bank.list_all_accounts())
        if not summaries:
            return Response(ok=True, message="No accounts found.", data=[])
        return Response(ok=True, message=f"All accounts in {self.bank.name}", data=summaries)

    def _apply_interest(self, request: ApplyInterestToAllSavings) -> Response:
        postings = self.bank.apply_interest_to_all_savings()
        return Response(
            ok=True,
            message=f"Monthly interest applied to {len(postings)} savings account(s)",
            data=postings,
        )

    def _exit(self, request: Exit) -> Response:
        return Response(
            ok=True,
            message=f"Thank you for using {self.bank.name} Banking System!",
            data={"exit": True},
        )
