"""
Transaction Record Module

Immutable records of balance-affecting events. Amounts are stored as
non-negative magnitudes; the transaction type decides the direction.
"""

from decimal import Decimal
from datetime import datetime, timezone
from dataclasses import dataclass, field
from enum import Enum
import uuid


class TransactionType(Enum):
    """Types of balance-affecting events"""
    DEPOSIT = ("deposit", "Deposit", True)
    WITHDRAWAL = ("withdrawal", "Withdrawal", False)
    INITIAL_DEPOSIT = ("initial_deposit", "Initial Deposit", True)
    INTEREST_CREDIT = ("interest_credit", "Interest Credit", True)
    OVERDRAFT_FEE = ("overdraft_fee", "Overdraft Fee", False)
    
    def __init__(self, code: str, label: str, is_credit: bool):
        self.code = code
        self.label = label
        self.is_credit = is_credit


@dataclass(frozen=True)
class Transaction:
    """
    One balance-affecting event on an account
    
    balance_after is the owning account's balance immediately after the
    event was applied.
    """
    transaction_type: TransactionType
    amount: Decimal
    balance_after: Decimal
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    
    @property
    def signed_amount(self) -> Decimal:
        """Amount from the account's perspective: credits positive, debits negative"""
        return self.amount if self.transaction_type.is_credit else -self.amount
    
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.transaction_type.code,
            "amount": str(self.amount),
            "balance_after": str(self.balance_after),
            "timestamp": self.timestamp.isoformat(),
        }
