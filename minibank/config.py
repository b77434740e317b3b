"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings


class MinibankConfig(BaseSettings):
    """Minibank ledger configuration"""
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    
    # Account numbering
    account_number_prefix: str = "AC"
    account_number_max_attempts: int = 1000
    
    # Display
    currency_symbol: str = "$"
    
    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090
    
    class Config:
        env_prefix = "MINIBANK_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = MinibankConfig()


def get_config() -> MinibankConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> MinibankConfig:
    """Reload configuration from environment"""
    global config
    config = MinibankConfig()
    return config
