"""Core routes for the webtool API (health check)."""

from api.schemas import HealthResponse
from fastapi import APIRouter

router = APIRouter(tags=["Core"])


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns server health status.",
)
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
