"""Environment-based configuration using pydantic-settings."""

import logging
from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Process-wide settings loaded from `IA_*` environment variables.

    Attributes:
        valid: Enforce endpoint validity in the `Interval` constructor
            (`IA_VALID`). The safe builders validate regardless.
    """

    model_config = SettingsConfigDict(env_prefix="IA_", frozen=True)

    valid: bool = False

    @field_validator("valid", mode="before")
    @classmethod
    def _present_means_enabled(cls, value: Any) -> Any:
        # `export IA_VALID=` switches checking on.
        if isinstance(value, str) and not value.strip():
            return True
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load the settings once; later calls return the same frozen object."""
    settings = Settings()
    logger.debug(
        "interval validity checking %s", "enabled" if settings.valid else "disabled"
    )
    return settings


def validity_check() -> bool:
    """Whether constructors validate endpoints when not told explicitly."""
    return get_settings().valid
