"""Pydantic BaseSettings — chain id, allow-list source and logging."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Application ─────────────────────────────────────────────
    APP_ENV: Literal["dev", "paper", "prod"] = "dev"
    APP_NAME: str = "cosmos-eip712"
    LOG_LEVEL: str = "INFO"

    # ── Chain ───────────────────────────────────────────────────
    EIP712_CHAIN_ID: int = Field(default=2222, ge=0)
    EVM_DENOM: str = "aphoton"

    # ── Allow-list ──────────────────────────────────────────────
    # JSON or YAML list of allow-list entries. When unset the v2
    # migration list is used.
    EIP712_ALLOWLIST_PATH: Optional[str] = None


settings = Settings()
