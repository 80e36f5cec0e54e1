"""Library configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings

from fluentval.models import CascadeMode


class Settings(BaseSettings):
    """Settings loaded from FLUENTVAL_* environment variables."""

    # Engine
    DEFAULT_CASCADE_MODE: CascadeMode = CascadeMode.CONTINUE
    CONCURRENT_ASYNC_CHAINS: bool = True

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    model_config = {"env_prefix": "FLUENTVAL_", "env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
