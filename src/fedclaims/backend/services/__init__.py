"""Service-layer helpers shared by the HTTP routes."""

from fedclaims.backend.app.services.reimbursement_service import (
    calculate_claim,
    check_duplicates,
    check_iban,
)

from .request_parser import parse_json_payload
from .response_builder import build_json_response

__all__ = [
    "build_json_response",
    "calculate_claim",
    "check_duplicates",
    "check_iban",
    "parse_json_payload",
]
