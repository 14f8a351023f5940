"""
config.py — Application Settings
=================================
Every tunable lives here.  Values come from the environment (prefix
STEPVIZ_) or a local .env file, falling back to the defaults below.

    from config import settings
"""

import secrets
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STEPVIZ_",
        env_file=".env",
        extra="ignore",
    )

    # ---- Environment -------------------------------------------------
    env: Literal["local", "staging", "prod"] = "local"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 5000

    # ---- Logging -----------------------------------------------------
    log_level: str = "INFO"

    # ---- Web sessions ------------------------------------------------
    secret_key: str = Field(default_factory=lambda: secrets.token_hex(32))
    max_sessions: int = Field(default=256, ge=1)

    # ---- Playback ----------------------------------------------------
    default_algorithm: str = "binary-search"
    base_interval_ms: float = Field(default=2000.0, gt=0)
    default_speed: float = Field(default=1.0, gt=0)


# Singleton settings object
settings = AppSettings()
