"""
API v1 Router

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter

from gilgrimi.api.v1.endpoints.health import router as health_router
from gilgrimi.api.v1.endpoints.messages import router as messages_router

api_router = APIRouter()

api_router.include_router(
    health_router,
    prefix="/health",
    tags=["Health"],
)

api_router.include_router(
    messages_router,
    tags=["Messages"],
)
