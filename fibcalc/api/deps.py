# =============================================================================
# Gateway Dependencies
# =============================================================================
#
# The lifespan in fibcalc/main.py builds one SubmissionGateway and one
# ReadGateway per process and stores them on app.state. Route handlers get
# them through these dependencies, which tests replace via
# app.dependency_overrides.
# =============================================================================

from fastapi import Request

from fibcalc.services.reader import ReadGateway
from fibcalc.services.submission import SubmissionGateway


def get_submission_gateway(request: Request) -> SubmissionGateway:
    return request.app.state.submission_gateway


def get_read_gateway(request: Request) -> ReadGateway:
    return request.app.state.read_gateway
