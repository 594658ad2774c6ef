"""
Test suite for bank module

Tests account creation with configured defaults, lookup, listing and the
monthly interest batch.
"""

import pytest
from decimal import Decimal

from console_banking.bank import Bank, AccountSummary, InterestPosting
from console_banking.config import get_config
from console_banking.exceptions import AccountNotFound
from console_banking.transactions import TransactionType


class TestAccountCreation:
    """Test opening accounts through the bank"""
    
    def setup_method(self):
        """Set up test fixtures"""
        self.bank = Bank("Test Bank")
    
    def test_bank_name(self):
        """Test explicit and configured bank names"""
        assert self.bank.name == "Test Bank"
        assert Bank().name == get_config().bank_name
    
    def test_create_savings_with_defaults(self):
        """Test savings accounts pick up configured product defaults"""
        account = self.bank.create_savings_account("S1", "Alice", Decimal('1000'))
        settings = get_config()
        
        assert account.account_type == "Savings"
        assert account.balance == Decimal('1000')
        assert account.policy.interest_rate == settings.default_interest_rate
        assert account.policy.minimum_balance == settings.default_minimum_balance
        assert len(self.bank) == 1
    
    def test_create_current_with_overrides(self):
        """Test product parameters can be set per account"""
        account = self.bank.create_current_account(
            "C1", "Bob", overdraft_limit=Decimal('500'), overdraft_fee=Decimal('10')
        )
        
        assert account.account_type == "Current"
        assert account.balance == Decimal('0')
        assert account.transaction_history() == ()
        assert account.policy.overdraft_limit == Decimal('500')
        assert account.policy.overdraft_fee == Decimal('10')
    
    def test_default_initial_balance(self):
        """Test accounts open empty by default"""
        account = self.bank.create_savings_account("S2", "Carol")
        
        assert account.balance == Decimal('0')
        assert account.transaction_history() == ()
    
    def test_negative_initial_balance_kept(self):
        """Test a negative opening balance is stored with no initial deposit"""
        account = self.bank.create_current_account("C2", "Dave", Decimal('-50'))
        
        assert account is not None
        assert len(self.bank) == 1
        assert self.bank.find_account("C2") is account
        assert account.balance == Decimal('-50')
        assert account.transaction_history() == ()
        assert account.unrecorded_opening_balance == Decimal('-50')
    
    def test_unparseable_initial_balance(self):
        """Test a non-numeric opening balance opens no account"""
        assert self.bank.create_savings_account("S3", "Erin", "abc") is None
        assert self.bank.create_current_account("C3", "Finn", Decimal('NaN')) is None
        assert len(self.bank) == 0
    
    def test_duplicate_numbers_allowed(self):
        """Test duplicate numbers are stored but only the first is found"""
        first = self.bank.create_savings_account("DUP", "Alice", Decimal('500'))
        second = self.bank.create_current_account("DUP", "Bob", Decimal('700'))
        
        assert second is not None
        assert len(self.bank) == 2
        assert self.bank.find_account("DUP") is first
        assert [s.holder_name for s in self.bank.list_all_accounts()] == ["Alice", "Bob"]


class TestLookup:
    """Test finding accounts by number"""
    
    def setup_method(self):
        """Set up test fixtures"""
        self.bank = Bank("Test Bank")
        self.bank.create_savings_account("S1", "Alice", Decimal('1000'))
        self.bank.create_current_account("C1", "Bob")
    
    def test_find_existing(self):
        """Test lookup returns the matching account"""
        account = self.bank.find_account("C1")
        
        assert account is not None
        assert account.account_number == "C1"
    
    def test_find_missing(self):
        """Test lookup of an unknown number returns None"""
        assert self.bank.find_account("X9") is None
    
    def test_get_account_raises(self):
        """Test get_account raises for unknown numbers"""
        with pytest.raises(AccountNotFound, match="Account X9 not found") as exc_info:
            self.bank.get_account("X9")
        
        assert exc_info.value.code == "account_not_found"
        assert exc_info.value.account_number == "X9"
    
    def test_lookup_returns_live_account(self):
        """Test changes through a found account are visible to the bank"""
        self.bank.find_account("S1").deposit(Decimal('50'))
        
        assert self.bank.get_account("S1").balance == Decimal('1050')


class TestListing:
    """Test listing account summaries"""
    
    def test_empty_bank(self):
        """Test listing an empty bank"""
        listing = Bank("Empty").list_all_accounts()
        
        assert list(listing) == []
        assert len(listing) == 0
    
    def test_creation_order_and_fields(self):
        """Test summaries come back in creation order"""
        bank = Bank("Test Bank")
        bank.create_current_account("C1", "Bob", Decimal('20'))
        bank.create_savings_account("S1", "Alice", Decimal('1000'))
        
        assert list(bank.list_all_accounts()) == [
            AccountSummary("C1", "Bob", "Current", Decimal('20')),
            AccountSummary("S1", "Alice", "Savings", Decimal('1000')),
        ]
    
    def test_listing_is_restartable_and_lazy(self):
        """Test the listing can be iterated again and reflects current balances"""
        bank = Bank("Test Bank")
        bank.create_savings_account("S1", "Alice", Decimal('1000'))
        listing = bank.list_all_accounts()
        
        first_pass = list(listing)
        bank.find_account("S1").deposit(Decimal('1'))
        bank.create_current_account("C1", "Bob")
        second_pass = list(listing)
        
        assert len(first_pass) == 1
        assert first_pass[0].balance == Decimal('1000')
        assert len(second_pass) == 2
        assert second_pass[0].balance == Decimal('1001')


class TestInterestBatch:
    """Test applying interest across the bank"""
    
    def test_only_savings_accounts_earn_interest(self):
        """Test current accounts are skipped by the batch"""
        bank = Bank("Test Bank")
        savings = bank.create_savings_account("S1", "Alice", Decimal('1200'), interest_rate=Decimal('0.06'))
        current = bank.create_current_account("C1", "Bob", Decimal('1200'))
        other = bank.create_savings_account("S2", "Carol", Decimal('600'), interest_rate=Decimal('0.12'))
        
        postings = bank.apply_interest_to_all_savings()
        
        assert postings == [
            InterestPosting("S1", Decimal('6'), Decimal('1206')),
            InterestPosting("S2", Decimal('6'), Decimal('606')),
        ]
        assert savings.balance == Decimal('1206')
        assert other.balance == Decimal('606')
        assert current.balance == Decimal('1200')
        assert current.transaction_history()[-1].transaction_type == TransactionType.INITIAL_DEPOSIT
    
    def test_batch_on_empty_bank(self):
        """Test the batch on a bank with no accounts"""
        assert Bank("Empty").apply_interest_to_all_savings() == []
    
    def test_each_run_compounds(self):
        """Test running the batch twice credits interest twice"""
        bank = Bank("Test Bank")
        account = bank.create_savings_account("S1", "Alice", Decimal('1200'), interest_rate=Decimal('0.12'))
        
        bank.apply_interest_to_all_savings()
        bank.apply_interest_to_all_savings()
        
        interest = [t for t in account.transaction_history()
                    if t.transaction_type == TransactionType.INTEREST_CREDIT]
        assert [t.amount for t in interest] == [Decimal('12'), Decimal('12.12')]
