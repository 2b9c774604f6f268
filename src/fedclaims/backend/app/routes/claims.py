"""REST endpoint flagging claims that were probably filed twice."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from fedclaims.backend.services import (
    build_json_response,
    check_duplicates,
    parse_json_payload,
)

blueprint = Blueprint("claims", __name__, url_prefix="/api/v1/claims")


@blueprint.post("/duplicates")
def find_duplicates() -> tuple[Any, int]:
    payload = parse_json_payload(request, with_locale=False)
    return build_json_response(check_duplicates(payload))
