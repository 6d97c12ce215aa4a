# =============================================================================
# Values API: Submit Indices and Read Results
# =============================================================================
#
# ENDPOINTS:
#   POST /values         : validate, then cache placeholder → publish → store
#   GET  /values/current : cache snapshot (index → value)
#   GET  /values/all     : every submitted index, oldest first
#
# POST returns {"working": true} without waiting for the worker. Clients
# poll /values/current until the placeholder is replaced.
#
# Error mapping:
#   - IndexTooHighError → 422 {"error": "Index too high"} (handler in main.py)
#   - cache error on /values/current → 500 {"values": {}}
#   - anything else → global 500 handler
# =============================================================================

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from fibcalc.api.deps import get_read_gateway, get_submission_gateway
from fibcalc.models.requests import SubmitIndexRequest
from fibcalc.models.responses import (
    CurrentValuesResponse,
    ErrorResponse,
    SubmissionRecord,
    WorkingResponse,
)
from fibcalc.services.reader import ReadGateway
from fibcalc.services.submission import SubmissionGateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Values"])


# ---------------------------------------------------------------------------
# GET /values/current: Cache snapshot
# ---------------------------------------------------------------------------


@router.get(
    "/values/current",
    response_model=CurrentValuesResponse,
    summary="Current computed values",
    responses={500: {"model": CurrentValuesResponse, "description": "Cache unavailable"}},
)
async def current_values(
    reader: ReadGateway = Depends(get_read_gateway),
):
    try:
        values = await reader.current_values()
    except Exception as e:
        logger.error("Error fetching values from cache: %s", e)
        return JSONResponse(status_code=500, content={"values": {}})
    return CurrentValuesResponse(values=values)


# ---------------------------------------------------------------------------
# GET /values/all: Submission history
# ---------------------------------------------------------------------------


@router.get(
    "/values/all",
    response_model=list[SubmissionRecord],
    summary="All submitted indices",
)
async def all_values(
    reader: ReadGateway = Depends(get_read_gateway),
) -> list[SubmissionRecord]:
    rows = await reader.all_submissions()
    return [SubmissionRecord(number=row.number) for row in rows]


# ---------------------------------------------------------------------------
# POST /values: Submit an index
# ---------------------------------------------------------------------------


@router.post(
    "/values",
    response_model=WorkingResponse,
    summary="Submit an index for computation",
    description=(
        "Stores a placeholder, notifies the worker and records the index. "
        "Indices above 40 are rejected with 422 and nothing is written."
    ),
    responses={422: {"model": ErrorResponse, "description": "Index too high"}},
)
async def submit_value(
    request: SubmitIndexRequest,
    gateway: SubmissionGateway = Depends(get_submission_gateway),
) -> WorkingResponse:
    await gateway.submit(request.index)
    return WorkingResponse()
