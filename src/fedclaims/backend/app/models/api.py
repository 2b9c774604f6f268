"""Pydantic models describing the public API surface."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from fedclaims.backend.config.schema import RateTables

__all__ = [
    "ExpenseType",
    "ClaimStatus",
    "RoleTier",
    "TERMINAL_NEGATIVE_STATUSES",
    "ClaimInput",
    "ClaimRecord",
    "CalculationRequest",
    "DuplicateCheckRequest",
    "IbanCheckRequest",
    "format_validation_error",
]


class ExpenseType(str, Enum):
    """Expense categories a claim can be filed under."""

    CAR = "car"
    TRAIN = "train"
    TRANSPORT = "transport"
    MEAL = "meal"
    HOTEL = "hotel"
    REGISTRATION = "registration"
    OTHER = "other"


class ClaimStatus(str, Enum):
    """Lifecycle states of a reimbursement claim."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    INCOMPLETE = "incomplete"
    TO_VALIDATE = "to_validate"
    VALIDATED = "validated"
    REFUSED = "refused"
    EXPORTED_FOR_PAYMENT = "exported_for_payment"
    PAID = "paid"
    CLOSED = "closed"
    DISPUTED = "disputed"


TERMINAL_NEGATIVE_STATUSES = frozenset({ClaimStatus.REFUSED, ClaimStatus.CLOSED})


class RoleTier(Enum):
    """Reimbursement tiers; each maps to the role key used by role rate rows."""

    TOP = "bn_member"
    MID = "admin_asso"
    BASE = "user"

    @classmethod
    def from_role(cls, role: str | None) -> RoleTier:
        """Return the tier for ``role``; unknown roles fall into ``BASE``."""

        normalised = (role or "").strip()
        if normalised == cls.TOP.value:
            return cls.TOP
        if normalised == cls.MID.value:
            return cls.MID
        return cls.BASE

    @property
    def rate_key(self) -> str:
        return self.value


class ClaimRecord(BaseModel):
    """Stored claim fields; extra columns from the claims table are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True, allow_inf_nan=False)

    id: str | None = None
    user_id: str | None = None
    expense_type: ExpenseType | None = None
    expense_date: date | None = None
    amount_ttc: float | None = Field(default=None, ge=0)
    distance_km: float | None = Field(default=None, ge=0)
    cv_fiscaux: int | None = Field(default=None, ge=1)
    status: ClaimStatus | None = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _coerce_identifiers(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value)

    @field_validator("expense_type", mode="before")
    @classmethod
    def _normalise_expense_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def gross_amount(self) -> float:
        return self.amount_ttc or 0.0

    @property
    def has_mileage_inputs(self) -> bool:
        return bool(self.distance_km) and bool(self.cv_fiscaux)


class ClaimInput(ClaimRecord):
    """Claim submitted for calculation; the expense category is mandatory."""

    expense_type: ExpenseType


class CalculationRequest(BaseModel):
    """Payload accepted by the reimbursement calculation service."""

    model_config = ConfigDict(extra="forbid")

    claim: ClaimInput
    requester_role: str = Field(min_length=1)
    locale: str | None = None
    reference_date: date | None = None
    rates: RateTables | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_role_alias(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        if "requester_role" not in data and "role" in data:
            copied = dict(data)
            copied["requester_role"] = copied.pop("role")
            return copied
        return data


class DuplicateCheckRequest(BaseModel):
    """Payload accepted by the duplicate detection service."""

    model_config = ConfigDict(extra="forbid")

    claim: ClaimRecord
    existing_claims: list[ClaimRecord] = Field(default_factory=list)


class IbanCheckRequest(BaseModel):
    """Payload accepted by the IBAN check service."""

    model_config = ConfigDict(extra="forbid")

    iban: str | None = None
    locale: str | None = None


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid request payload: {details}"
