"""
Configuration settings for the Transport Ledger Core.

This module handles application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Transport Ledger Core"
    log_level: str = "INFO"

    # Ledger Matching
    pairing_window_seconds: int = 120  # Top-up <-> On-Trip Payment write skew tolerance
    finance_payer: str = "Finance"
    default_bank: str = "Cash"

    # Precomputed Stats Source (Circuit Breaker)
    stats_source_failure_threshold: int = 3
    stats_source_reset_timeout: int = 30

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
