# =============================================================================
# Health API
# =============================================================================

from fastapi import APIRouter

from fibcalc.models.responses import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
)
async def health() -> HealthResponse:
    """Always healthy while the process is serving; backing stores are not probed."""
    return HealthResponse()
