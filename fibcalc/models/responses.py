# =============================================================================
# API Response Models
# =============================================================================
#
# The wire format is fixed by the existing frontend:
#   GET  /values/current → {"values": {"5": "8", "7": "Nothing yet!"}}
#   GET  /values/all     → [{"number": 5}, {"number": 7}]
#   POST /values         → {"working": true}
# =============================================================================

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health: liveness only, no dependency checks."""

    status: str = "healthy"


class WorkingResponse(BaseModel):
    """Returned once a submission has been cached, published and stored."""

    working: bool = True


class CurrentValuesResponse(BaseModel):
    values: dict[str, str] = Field(
        default_factory=dict,
        description="Index → computed value, or the placeholder while pending",
    )


class SubmissionRecord(BaseModel):
    """One row of the submission history."""

    number: int


class ErrorResponse(BaseModel):
    error: str
