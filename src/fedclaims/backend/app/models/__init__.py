"""Typed request/result models shared across the reimbursement services.

Requests are validated with Pydantic before any calculation happens, and every
result handed back by the engine or its sibling checks is a frozen model so
callers can persist whichever fields they need without defensive copies.
"""

from __future__ import annotations

from .api import (
    TERMINAL_NEGATIVE_STATUSES,
    CalculationRequest,
    ClaimInput,
    ClaimRecord,
    ClaimStatus,
    DuplicateCheckRequest,
    ExpenseType,
    IbanCheckRequest,
    RoleTier,
    format_validation_error,
)
from .results import (
    BreakdownLine,
    DuplicateCheck,
    IbanValidation,
    ReimbursementCalculation,
)

__all__ = [
    "BreakdownLine",
    "CalculationRequest",
    "ClaimInput",
    "ClaimRecord",
    "ClaimStatus",
    "DuplicateCheck",
    "DuplicateCheckRequest",
    "ExpenseType",
    "IbanCheckRequest",
    "IbanValidation",
    "ReimbursementCalculation",
    "RoleTier",
    "TERMINAL_NEGATIVE_STATUSES",
    "format_validation_error",
]
