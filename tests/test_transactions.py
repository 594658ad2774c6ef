"""
Test suite for transactions module

Tests transaction types, signed amounts and immutability of records.
"""

import dataclasses
import pytest
from decimal import Decimal
from datetime import datetime, timezone

from console_banking.transactions import Transaction, TransactionType


class TestTransactionType:
    """Test transaction type metadata"""
    
    def test_credit_types(self):
        """Test that deposits and interest increase the balance"""
        assert TransactionType.DEPOSIT.is_credit
        assert TransactionType.INITIAL_DEPOSIT.is_credit
        assert TransactionType.INTEREST_CREDIT.is_credit
    
    def test_debit_types(self):
        """Test that withdrawals and fees decrease the balance"""
        assert not TransactionType.WITHDRAWAL.is_credit
        assert not TransactionType.OVERDRAFT_FEE.is_credit
    
    def test_labels(self):
        """Test display labels"""
        assert TransactionType.INITIAL_DEPOSIT.label == "Initial Deposit"
        assert TransactionType.OVERDRAFT_FEE.label == "Overdraft Fee"
        assert TransactionType.INTEREST_CREDIT.code == "interest_credit"


class TestTransaction:
    """Test Transaction records"""
    
    def test_fields_and_timestamp(self):
        """Test that construction captures the current time"""
        before = datetime.now(timezone.utc)
        transaction = Transaction(TransactionType.DEPOSIT, Decimal('50.00'), Decimal('150.00'))
        after = datetime.now(timezone.utc)
        
        assert transaction.transaction_type == TransactionType.DEPOSIT
        assert transaction.amount == Decimal('50.00')
        assert transaction.balance_after == Decimal('150.00')
        assert before <= transaction.timestamp <= after
        assert transaction.id
    
    def test_signed_amount(self):
        """Test signed amount follows the transaction direction"""
        deposit = Transaction(TransactionType.DEPOSIT, Decimal('10'), Decimal('10'))
        fee = Transaction(TransactionType.OVERDRAFT_FEE, Decimal('25'), Decimal('-35'))
        
        assert deposit.signed_amount == Decimal('10')
        assert fee.signed_amount == Decimal('-25')
    
    def test_immutable(self):
        """Test that a transaction cannot be modified"""
        transaction = Transaction(TransactionType.WITHDRAWAL, Decimal('5'), Decimal('95'))
        
        with pytest.raises(dataclasses.FrozenInstanceError):
            transaction.amount = Decimal('500')
    
    def test_to_dict(self):
        """Test dictionary form uses strings for Decimal values"""
        transaction = Transaction(TransactionType.WITHDRAWAL, Decimal('5.25'), Decimal('94.75'))
        data = transaction.to_dict()
        
        assert data["type"] == "withdrawal"
        assert data["amount"] == "5.25"
        assert data["balance_after"] == "94.75"
        assert data["timestamp"] == transaction.timestamp.isoformat()
