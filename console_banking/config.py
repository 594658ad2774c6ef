"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class BankConfig(BaseSettings):
    """Console banking configuration"""
    
    model_config = SettingsConfigDict(
        env_prefix="BANK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )
    
    bank_name: str = "ABC Bank"
    currency: str = "USD"  # ISO 4217 code used for display
    
    # Savings product defaults
    savings_interest_rate: str = "0.04"  # Annual rate
    savings_minimum_balance: str = "100.00"
    
    # Current product defaults
    current_overdraft_limit: str = "1000.00"
    current_overdraft_fee: str = "25.00"
    
    # Logging configuration
    log_level: str = "WARNING"
    log_format: str = "json"  # json or text
    
    @property
    def default_interest_rate(self) -> Decimal:
        return Decimal(self.savings_interest_rate)
    
    @property
    def default_minimum_balance(self) -> Decimal:
        return Decimal(self.savings_minimum_balance)
    
    @property
    def default_overdraft_limit(self) -> Decimal:
        return Decimal(self.current_overdraft_limit)
    
    @property
    def default_overdraft_fee(self) -> Decimal:
        return Decimal(self.current_overdraft_fee)


# Global configuration instance
config = BankConfig()


def get_config() -> BankConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BankConfig:
    """Reload configuration from environment"""
    global config
    config = BankConfig()
    return config
