"""Enablement gate for the SQLite search backend.

``USE_SQLITE_SEARCH`` accepts exactly ``"true"`` or ``"false"`` and defaults
to ``"false"``. The value is read once per process.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from marksift.adapters.base.exceptions import ConfigurationError


class SQLiteSearchEnv(BaseSettings):
    model_config = {"case_sensitive": True, "extra": "ignore"}

    USE_SQLITE_SEARCH: bool = Field(default=False)

    @field_validator("USE_SQLITE_SEARCH", mode="before")
    @classmethod
    def _strict_bool(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        if v not in ("true", "false"):
            raise ValueError(f"USE_SQLITE_SEARCH must be 'true' or 'false', got {v!r}")
        return v == "true"


@lru_cache(maxsize=1)
def get_env_config() -> SQLiteSearchEnv:
    """Read the gate from the environment (cached for the process lifetime).

    Raises:
        ConfigurationError: If the variable holds anything but the two literals.
    """
    try:
        return SQLiteSearchEnv()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid SQLite search configuration: {e}") from e
