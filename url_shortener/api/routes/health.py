"""Health check API routes."""

from fastapi import APIRouter
from ...schemas.url import HealthResponse

router = APIRouter(tags=["Health"])


@router.api_route(
    "/health",
    methods=["GET", "HEAD"],
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check() -> dict:
    """Liveness probe; always healthy while the process serves requests."""
    return {"status": "healthy"}
