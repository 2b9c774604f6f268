"""REST endpoint for bank account checks."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from fedclaims.backend.app.http import VALIDATION_ERROR, problem_response
from fedclaims.backend.services import (
    build_json_response,
    check_iban,
    parse_json_payload,
)

blueprint = Blueprint("iban", __name__, url_prefix="/api/v1/iban")


@blueprint.post("/check")
def check_account() -> tuple[Any, int]:
    """Validate the submitted IBAN syntactically.

    A missing ``iban`` field is a malformed request; an empty one is reported
    as an invalid IBAN.
    """

    payload = parse_json_payload(request)
    if payload.get("iban") is None:
        return problem_response(
            VALIDATION_ERROR, status=400, message="Field 'iban' is required"
        ).to_response()

    return build_json_response(check_iban(payload))
