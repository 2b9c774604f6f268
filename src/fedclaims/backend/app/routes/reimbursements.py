"""REST endpoint for reimbursement calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from fedclaims.backend.services import (
    build_json_response,
    calculate_claim,
    parse_json_payload,
)

blueprint = Blueprint("reimbursements", __name__, url_prefix="/api/v1")


@blueprint.post("/reimbursements")
def create_reimbursement() -> tuple[Any, int]:
    """Compute the reimbursable amount for the submitted claim."""

    payload = parse_json_payload(request)
    result = calculate_claim(payload)

    return build_json_response(result)
