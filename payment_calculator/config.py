"""Configuration management using Pydantic Settings"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "payment-calculator"
    log_level: str = "INFO"

    # Rates
    rate_overrides_file: Optional[Path] = None  # flat JSON mirroring the rate table

    # Curve
    default_sweep_steps: int = 50
    default_max_turnover: float = 100_000.0  # monthly, GBP
    max_sweep_steps: int = 500


settings = Settings()
