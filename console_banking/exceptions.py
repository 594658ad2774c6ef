"""
Banking Error Taxonomy

Every error here is recoverable: the account and bank layers report them as
return values, and the request layer turns them into failed responses.
"""


class BankingError(Exception):
    """Base class for banking errors"""
    
    code = "banking_error"


class InvalidAmount(BankingError):
    """Deposit or withdrawal amount is zero or negative"""
    
    code = "invalid_amount"


class InsufficientFunds(BankingError):
    """Savings withdrawal would breach the minimum balance"""
    
    code = "insufficient_funds"


class OverdraftExceeded(BankingError):
    """Current account withdrawal would breach the overdraft limit"""
    
    code = "overdraft_exceeded"


class AccountNotFound(BankingError):
    """No account matches the requested account number"""
    
    code = "account_not_found"
    
    def __init__(self, account_number: str):
        super().__init__(f"Account {account_number} not found")
        self.account_number = account_number
