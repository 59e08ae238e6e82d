"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (in-memory SQLite seeded with fixtures by default)
    database_url: str = "sqlite://"
    seed_fixtures: bool = True

    # Service
    service_name: str = "loan-gateway"
    log_level: str = "INFO"

    # Credit decisioning
    reference_annual_rate: float = 10.5
    affordability_income_share: float = 0.5

    # Simulated KYC verification
    kyc_verification_min_delay_seconds: float = 5.0
    kyc_verification_max_delay_seconds: float = 10.0
    kyc_verification_timeout_seconds: float = 30.0
    kyc_verification_poll_interval_seconds: float = 0.25

    # Seed for the simulated document/verification outcomes (None = nondeterministic)
    random_seed: Optional[int] = None


settings = Settings()
