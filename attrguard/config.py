"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Library settings loaded from environment variables (prefix ``ATTRGUARD_``)."""

    # Default-fallback applied when neither the model nor the call decides
    USE_DEFAULTS: bool = False

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    model_config = {
        "env_prefix": "ATTRGUARD_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
