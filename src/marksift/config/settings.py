"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Environment variables (MARKSIFT_ prefix)
  2. YAML config file (if specified)
  3. Default values

Backend enablement gates (``USE_SQLITE_SEARCH``, ``MEILI_ADDR``) are not part
of these settings; each backend reads its own gate in its ``env`` module.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class DatabaseSettings(BaseModel):
    """Bookmark store configuration."""

    url: str = Field(
        default="sqlite+aiosqlite:///./marksift.db",
        description="SQLAlchemy async database URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements to the log")


class ScoringSettings(BaseModel):
    """Relevance scoring knobs for the store-backed fallback search."""

    decay_step: float = Field(default=0.1, ge=0.0, description="Baseline score lost per result position")
    title_boost: float = Field(default=0.5, ge=0.0, description="Boost when the title contains the query")
    tag_boost: float = Field(default=0.3, ge=0.0, description="Boost when any tag contains the query")
    url_boost: float = Field(default=0.0, ge=0.0, description="Boost when the link URL contains the query")


class SearchSettings(BaseModel):
    """Search behavior configuration."""

    default_limit: int = Field(default=20, ge=1, description="Page size used when the caller gives none")
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the MARKSIFT_ prefix.
    Nested settings use double underscores: MARKSIFT_SERVER__PORT=9090

    Example:
        MARKSIFT_SERVER__PORT=9090
        MARKSIFT_DATABASE__URL=sqlite+aiosqlite:////data/db.db
        MARKSIFT_SEARCH__SCORING__TITLE_BOOST=0.4
    """

    model_config = {
        "env_prefix": "MARKSIFT_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    app_name: str = Field(default="MarkSift", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    server: ServerSettings = Field(default_factory=ServerSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded from the environment once."""
    return Settings()
