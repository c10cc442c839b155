"""Enablement gate for the MeiliSearch backend.

The backend is enabled when ``MEILI_ADDR`` is set. The values are read once
per process.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from marksift.adapters.base.exceptions import ConfigurationError


class MeiliSearchEnv(BaseSettings):
    model_config = {"case_sensitive": True, "extra": "ignore"}

    MEILI_ADDR: str | None = Field(default=None, description="MeiliSearch base URL")
    MEILI_MASTER_KEY: str | None = Field(default=None, description="Master or API key")
    MEILI_INDEX: str = Field(default="bookmarks", description="Index UID holding bookmark documents")
    MEILI_TIMEOUT: float = Field(default=30.0, gt=0, description="HTTP and task wait timeout in seconds")


@lru_cache(maxsize=1)
def get_env_config() -> MeiliSearchEnv:
    """Read the MeiliSearch settings from the environment (cached)."""
    try:
        return MeiliSearchEnv()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid MeiliSearch configuration: {e}") from e
