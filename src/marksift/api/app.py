"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marksift import __version__
from marksift.adapters.base.registry import get_plugin_manager
from marksift.api.deps import set_engine
from marksift.api.v1.router import router as v1_router
from marksift.config.settings import Settings, get_settings
from marksift.core.engine import SearchEngine
from marksift.observability.logging import setup_logging
from marksift.store.database import create_session_factory

logger = logging.getLogger(__name__)

# Set by the CLI so that uvicorn-spawned app factories see its options
CONFIG_ENV_VAR = "MARKSIFT_CONFIG"
LOG_LEVEL_ENV_VAR = "MARKSIFT_LOG_LEVEL"


def load_settings() -> Settings:
    """Resolve the settings the server runs with.

    Uses the YAML file named by ``MARKSIFT_CONFIG``, else
    ``marksift-config.yaml`` in the working directory if present, else the
    environment. ``MARKSIFT_LOG_LEVEL`` overrides the configured log level.
    """
    config = os.environ.get(CONFIG_ENV_VAR)
    yaml_path = Path(config) if config else Path("marksift-config.yaml")
    if config or yaml_path.exists():
        logger.info("Loading configuration from %s", yaml_path)
        settings = Settings.from_yaml(yaml_path)
    else:
        settings = get_settings()

    log_level = os.environ.get(LOG_LEVEL_ENV_VAR)
    if log_level:
        observability = settings.observability.model_copy(update={"log_level": log_level})
        settings = settings.model_copy(update={"observability": observability})
    return settings


def create_app(settings: Settings | None = None, engine: SearchEngine | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.
        engine: Pre-built engine (tests). If None, one is created on startup
            around the process-wide plugin manager.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        setup_logging(settings.observability)
        logger.info("Starting MarkSift v%s", __version__)

        search_engine = engine or SearchEngine(
            settings,
            plugin_manager=get_plugin_manager(),
            session_factory=create_session_factory(settings.database.url, echo=settings.database.echo),
        )
        await search_engine.initialize()
        set_engine(search_engine)

        app.state.settings = settings
        app.state.engine = search_engine

        logger.info("MarkSift is ready (search backend: %s)", search_engine.active_backend or "none")
        yield

        logger.info("Shutting down MarkSift...")
        await search_engine.shutdown()
        set_engine(None)
        logger.info("MarkSift shutdown complete")

    app = FastAPI(
        title="MarkSift",
        description="Pluggable bookmark search with a live-store fallback backend.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/v1")

    return app
