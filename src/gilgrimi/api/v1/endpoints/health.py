"""
Health Check Endpoints

Provides system health and readiness endpoints for:
- Load balancer health checks
- Kubernetes probes
"""

import time

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from gilgrimi import __version__
from gilgrimi.api.dependencies import get_bot
from gilgrimi.config import get_settings
from gilgrimi.config.logging_config import get_logger
from gilgrimi.services.bot.counseling_bot import CounselingBot

logger = get_logger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response with component health."""

    ready: bool
    components: dict[str, dict]


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Basic health check endpoint for load balancers",
)
async def health_check() -> HealthResponse:
    """Returns 200 if application is running."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        environment=get_settings().env,
    )


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def liveness_check() -> HealthResponse:
    """
    Kubernetes liveness probe.

    Returns 200 if application process is alive.
    """
    return HealthResponse(
        status="alive",
        version=__version__,
        environment=get_settings().env,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Readiness including state storage and intent recognizer",
)
async def readiness_check(
    response: Response,
    bot: CounselingBot = Depends(get_bot),
) -> ReadinessResponse:
    """
    Detailed readiness check.

    State storage is required. An unconfigured or failing recognizer
    only degrades the service: every message is then treated as
    unrecognized and re-prompted.
    """
    components: dict[str, dict] = {}

    start = time.perf_counter()
    store_ok = await bot.state_store.health_check()
    components["state_store"] = {
        "healthy": store_ok,
        "latency_ms": int((time.perf_counter() - start) * 1000),
    }

    classifier = bot.classifier
    start = time.perf_counter()
    classifier_ok = await classifier.health_check()
    components["classifier"] = {
        "healthy": classifier_ok,
        "configured": classifier.is_configured(),
        "name": classifier.classifier_name,
        "latency_ms": int((time.perf_counter() - start) * 1000),
    }
    if not classifier_ok:
        logger.warning("Intent classifier degraded", classifier=classifier.classifier_name)

    if not store_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(ready=store_ok, components=components)
