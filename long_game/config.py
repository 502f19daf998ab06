"""Application configuration loaded from environment variables."""

from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "long-game"
    debug: bool = False
    log_level: str = "INFO"
    max_sessions: int = 1000

    # Path engine
    default_burn_rate: float = 5.0
    funding_runway_quarters: float = 4.0
    path_starting_confidence: float = 80.0

    # Board engine
    board_starting_confidence: float = 100.0

    # Fixed seed for reproducible dice; unset draws from the OS
    rng_seed: Optional[int] = None

    model_config = {"env_prefix": "LONGGAME_"}


settings = Settings()
