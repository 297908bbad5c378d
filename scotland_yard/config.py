import logging
import sys
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SCOTLAND_YARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App config
    DEBUG: bool = False

    # Re-check state invariants after every applied move
    CHECK_INVARIANTS: bool = True

    # Classic board schedule
    DEFAULT_ROUND_COUNT: int = 24
    DEFAULT_REVEAL_ROUNDS: list[int] = [3, 8, 13, 18, 24]

    @field_validator("DEFAULT_ROUND_COUNT")
    @classmethod
    def validate_round_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError("DEFAULT_ROUND_COUNT must be at least 1")
        return v

    @field_validator("DEFAULT_REVEAL_ROUNDS")
    @classmethod
    def validate_reveal_rounds(cls, v: list[int]) -> list[int]:
        if any(r < 1 for r in v):
            raise ValueError("DEFAULT_REVEAL_ROUNDS must contain 1-based round numbers")
        return sorted(set(v))


def configure_logging(debug: bool = False) -> None:
    """Configure root logging for a host application or the test suite.

    The engine itself never calls this; it only logs through module loggers.
    """
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    logger.info("Settings loaded successfully")
    logger.debug(
        "Default schedule: rounds=%d, reveal_rounds=%s",
        settings.DEFAULT_ROUND_COUNT,
        settings.DEFAULT_REVEAL_ROUNDS,
    )
    return settings
