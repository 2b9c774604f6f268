"""Immutable result models returned by the engine and its sibling checks."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .api import ClaimRecord

__all__ = [
    "BreakdownLine",
    "ReimbursementCalculation",
    "DuplicateCheck",
    "IbanValidation",
]


class _FrozenResult(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class BreakdownLine(_FrozenResult):
    """Named contribution shown in the audit trail of a calculation."""

    description: str
    value: float


class ReimbursementCalculation(_FrozenResult):
    """Outcome of a single reimbursement calculation.

    Amounts other than the train refund are not rounded; callers round them
    when displaying or persisting. Serialised with ``by_alias=True`` the field
    names match the camelCase keys stored alongside claims.
    """

    base_amount: float = Field(alias="baseAmount")
    rate_applied: float = Field(alias="rateApplied")
    calculated_amount: float = Field(alias="calculatedAmount")
    reimbursable_amount: float = Field(alias="reimbursableAmount")
    exceeds_ceiling: bool = Field(default=False, alias="exceedsCeiling")
    requires_second_validation: bool = Field(
        default=False, alias="requiresSecondValidation"
    )
    breakdown: tuple[BreakdownLine, ...] = ()
    warnings: tuple[str, ...] = ()

    def as_payload(self, *, rounded: bool = True) -> dict[str, Any]:
        """Return the camelCase JSON payload, rounding currency when requested."""

        payload = self.model_dump(mode="json", by_alias=True)
        if not rounded:
            return payload

        for key in ("baseAmount", "calculatedAmount", "reimbursableAmount"):
            payload[key] = round(payload[key], 2)
        payload["rateApplied"] = round(payload["rateApplied"], 4)
        payload["breakdown"] = [
            {"description": line["description"], "value": round(line["value"], 2)}
            for line in payload["breakdown"]
        ]
        return payload


class DuplicateCheck(_FrozenResult):
    """Claims that look like the same expense filed twice."""

    is_duplicate: bool = Field(alias="isDuplicate")
    duplicates: tuple[ClaimRecord, ...] = ()


class IbanValidation(_FrozenResult):
    """Result of the syntactic IBAN check."""

    valid: bool
    error: str | None = None
