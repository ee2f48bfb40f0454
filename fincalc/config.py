"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache

from pydantic_settings import BaseSettings

from fincalc.calculations.common import Frequency, PaymentTiming


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App settings
    app_name: str = "Finance Calculators"
    debug: bool = False
    log_level: str = "INFO"

    # Share links
    base_url: str = "https://finance.zytact.com"

    # Display
    currency_symbol: str = "₹"
    display_decimals: int = 2

    # Form defaults
    default_frequency: Frequency = Frequency.MONTHLY
    default_payment_timing: PaymentTiming = PaymentTiming.END

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
