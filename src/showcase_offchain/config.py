"""
Showcase Configuration

Environment-specific settings loaded from the .env file at the project root.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


# Project root directory (two levels up from src/showcase_offchain/)
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """
    Settings for the spend showcase

    Network and credentials come from the environment, transaction
    defaults are hardcoded but may be overridden.
    """

    # ============================================================================
    # Network (loaded from .env)
    # ============================================================================

    network: Literal["testnet", "mainnet"] = "testnet"
    blockfrost_api_key: Optional[str] = None
    wallet_mnemonic: Optional[str] = None

    # ============================================================================
    # Transaction defaults
    # ============================================================================

    validity_minutes: int = 15
    min_chunk_lovelace: int = 2_000_000
    session_namespace: str = "spend_exercise"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"), env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @property
    def validity_seconds(self) -> int:
        """Upper validity bound offset, one slot per second"""
        return self.validity_minutes * 60

    @property
    def is_mainnet(self) -> bool:
        return self.network == "mainnet"


@lru_cache
def get_settings() -> Settings:
    """Global settings instance, built on first use"""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply the log level from settings to the root logger"""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
