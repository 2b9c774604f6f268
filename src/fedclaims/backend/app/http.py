"""JSON error payloads shared by the Flask blueprints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from flask import jsonify

BAD_REQUEST = "bad_request"
VALIDATION_ERROR = "validation_error"
NOT_FOUND = "not_found"
CONFIGURATION_ERROR = "configuration_error"


@dataclass(frozen=True)
class ProblemResponse:
    """RFC 7807-style error body: an error code, a message and optional extras."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.extra:
            payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse`; keyword extras are merged into the body."""

    additional: Mapping[str, Any] | None = extra or None
    return ProblemResponse(error=error, status=status, message=message, extra=additional)


__all__ = [
    "BAD_REQUEST",
    "CONFIGURATION_ERROR",
    "NOT_FOUND",
    "ProblemResponse",
    "VALIDATION_ERROR",
    "problem_response",
]
