"""Health check endpoints — Service status and plugin registrations."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from marksift import __version__
from marksift.api.deps import get_engine
from marksift.core.engine import SearchEngine

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Response models ──────────────────────────────────────────────────────


class HealthResponse(BaseModel):
    """System health check response."""

    status: str = Field(description="Health status (e.g. 'healthy')")
    version: str = Field(description="MarkSift server version")
    service: str = Field(description="Service name ('marksift')")
    active_backend: str | None = Field(description="Search provider used for queries, if any")


class PluginInfo(BaseModel):
    """One plugin registration."""

    type: str = Field(description="Capability type")
    name: str = Field(description="Display name")
    configured: bool = Field(description="Whether the provider's gate is enabled")
    initialized: bool = Field(description="Whether the provider has built its client")


class PluginsResponse(BaseModel):
    """Registered plugins in priority order."""

    plugins: list[PluginInfo] = Field(description="Registrations, first-registered first")


# ── Endpoints ────────────────────────────────────────────────────────────


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="System Health Check",
    description="Returns overall system health, server version, and the active search backend.",
)
async def health_check(
    engine: SearchEngine = Depends(get_engine),
) -> HealthResponse:
    active = engine.active_backend
    return HealthResponse(
        status="healthy" if active else "degraded",
        version=__version__,
        service="marksift",
        active_backend=active,
    )


@router.get(
    "/health/plugins",
    response_model=PluginsResponse,
    summary="Plugin Registrations",
    description="Lists every registered plugin with its configuration and initialization state.",
)
async def plugins(
    engine: SearchEngine = Depends(get_engine),
) -> PluginsResponse:
    return PluginsResponse(
        plugins=[
            PluginInfo(
                type=entry.type.value,
                name=entry.name,
                configured=entry.provider.is_configured(),
                initialized=entry.provider.has_client,
            )
            for entry in engine.plugin_manager.registrations()
        ]
    )
