# settings.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Literal



class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # -----------------------
    # DB
    # -----------------------
    DATABASE_URL: str = Field(default="")

    # -----------------------
    # Contract state
    # -----------------------
    STATE_BACKEND: Literal["memory", "postgres"] = "memory"
    STATE_NAMESPACE: str = Field(default="config", min_length=1)

    # address the host runs this contract instance under (transfer source)
    CONTRACT_ADDRESS: str = Field(default="cosmos2contract", min_length=1)
    PAYOUT_DENOM: str = Field(default="utree", min_length=1)


settings = Settings()


def validate_env_settings() -> None:
    """
    Refuse to start staging/prod without a durable store.
    """
    env = (settings.ENV or "").strip().lower()
    if env not in ("staging", "prod", "production"):
        return

    missing: list[str] = []
    if settings.STATE_BACKEND != "postgres":
        missing.append("STATE_BACKEND=postgres")
    if not (settings.DATABASE_URL or "").strip():
        missing.append("DATABASE_URL")

    if missing:
        raise RuntimeError(f"Missing required settings for {env}: {', '.join(missing)}")
