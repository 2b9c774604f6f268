"""Pydantic models describing the reimbursement rate table schema."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", populate_by_name=True, allow_inf_nan=False
    )


def _coerce_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value in {0, "0", "false", "False", None}:
        return False
    if value in {1, "1", "true", "True"}:
        return True
    raise ConfigurationError("Boolean flags must be explicit true/false values")


class ValidityWindow(ImmutableModel):
    """Date range over which a rate row applies.

    ``valid_to`` is inclusive and ``None`` marks an open-ended row. Rows are
    closed by setting ``valid_to`` instead of being removed so that historical
    claims keep pointing at the rate they were computed with.
    """

    valid_from: date
    valid_to: date | None = None

    @model_validator(mode="after")
    def _validate_window(self) -> Self:
        if self.valid_to is not None and self.valid_to < self.valid_from:
            raise ConfigurationError("'valid_to' cannot precede 'valid_from'")
        return self

    def is_valid_on(self, day: date) -> bool:
        if day < self.valid_from:
            return False
        return self.valid_to is None or self.valid_to >= day

    def is_expired_on(self, day: date) -> bool:
        return self.valid_to is not None and self.valid_to < day

    def overlaps(self, other: ValidityWindow) -> bool:
        self_end = self.valid_to or date.max
        other_end = other.valid_to or date.max
        return self.valid_from <= other_end and other.valid_from <= self_end


class MileageRate(ValidityWindow):
    """Kilometric allowance for a fiscal horsepower class."""

    horsepower: int = Field(alias="cv_fiscaux", ge=1)
    rate_per_km: float

    @model_validator(mode="after")
    def _validate_rate(self) -> MileageRate:
        if self.rate_per_km <= 0:
            raise ConfigurationError("Mileage rates must be positive values")
        return self


class RoleRate(ValidityWindow):
    """Share of the base amount reimbursed for a requester role."""

    role: str
    rate: float = Field(alias="taux")

    @field_validator("role", mode="before")
    @classmethod
    def _normalise_role(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError("Role rate rows require a role identifier")
        return value.strip()

    @model_validator(mode="after")
    def _validate_rate(self) -> RoleRate:
        if self.rate < 0 or self.rate > 1:
            raise ConfigurationError("Role reimbursement rates must be between 0 and 1")
        return self


class CeilingRule(ValidityWindow):
    """Per-category reimbursement ceilings.

    Only the unit ceiling takes part in the calculation; the daily and monthly
    values are stored for administrators and reporting.
    """

    expense_type: str
    unit_ceiling: float | None = Field(default=None, alias="plafond_unitaire")
    daily_ceiling: float | None = Field(default=None, alias="plafond_journalier")
    monthly_ceiling: float | None = Field(default=None, alias="plafond_mensuel")
    requires_validation: bool = False

    @field_validator("requires_validation", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        return _coerce_boolean(value)

    @model_validator(mode="after")
    def _validate_ceilings(self) -> CeilingRule:
        for label, value in (
            ("plafond_unitaire", self.unit_ceiling),
            ("plafond_journalier", self.daily_ceiling),
            ("plafond_mensuel", self.monthly_ceiling),
        ):
            if value is not None and value < 0:
                raise ConfigurationError(f"Ceiling '{label}' must be non-negative")
        return self


class TrainRefundBand(ImmutableModel):
    """Distance band of the train refund scale, covering ``[min_km, max_km)``."""

    min_km: float = Field(alias="distance_min_km")
    max_km: float = Field(alias="distance_max_km")
    percentage: float = Field(alias="percentage_refund")
    max_amount: float | None = Field(default=None, alias="max_amount_euros")
    description: str = ""

    @model_validator(mode="after")
    def _validate_band(self) -> TrainRefundBand:
        if self.min_km < 0:
            raise ConfigurationError("Train band lower bounds must be non-negative")
        if self.max_km <= self.min_km:
            raise ConfigurationError("Train band upper bounds must exceed lower bounds")
        if self.percentage < 0 or self.percentage > 100:
            raise ConfigurationError("Train refund percentages must be between 0 and 100")
        if self.max_amount is not None and self.max_amount < 0:
            raise ConfigurationError("Train refund caps must be non-negative")
        return self

    def contains(self, distance_km: float) -> bool:
        return self.min_km <= distance_km < self.max_km

    @property
    def label(self) -> str:
        if self.description:
            return self.description
        return f"{self.min_km:g}-{self.max_km:g} km"


class RateTables(ImmutableModel):
    """Snapshot of every rate table handed to the reimbursement engine."""

    mileage: Sequence[MileageRate] = Field(default_factory=tuple)
    role_rates: Sequence[RoleRate] = Field(default_factory=tuple)
    ceilings: Sequence[CeilingRule] = Field(default_factory=tuple)
    train_bands: Sequence[TrainRefundBand] = Field(default_factory=tuple)
    meta: Mapping[str, Any] = Field(default_factory=dict)

    @field_validator("mileage", "role_rates", "ceilings", "train_bands", mode="before")
    @classmethod
    def _coerce_rows(cls, value: Any) -> Sequence[Any]:
        if value is None:
            return ()
        if isinstance(value, Mapping) or isinstance(value, str):
            raise ConfigurationError("Rate tables must be provided as lists of rows")
        return tuple(value)

    @field_validator("train_bands", mode="after")
    @classmethod
    def _sort_bands(cls, value: Sequence[TrainRefundBand]) -> Sequence[TrainRefundBand]:
        return tuple(sorted(value, key=lambda band: band.min_km))

    def valid_on(self, day: date) -> RateTables:
        """Return a snapshot restricted to the rows applicable on ``day``."""

        return self.model_copy(
            update={
                "mileage": tuple(row for row in self.mileage if row.is_valid_on(day)),
                "role_rates": tuple(
                    row for row in self.role_rates if row.is_valid_on(day)
                ),
                "ceilings": tuple(row for row in self.ceilings if row.is_valid_on(day)),
            }
        )


class RateTableManifestEntry(ImmutableModel):
    """Entry describing a rate table file in the manifest."""

    table: str
    filename: str | None = None
    notes_url: str | None = None

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.table}.yaml"


KNOWN_TABLES = ("mileage", "role_rates", "ceilings", "train_bands")


class RateTableManifest(ImmutableModel):
    """Manifest describing the available rate table files."""

    tables: Sequence[RateTableManifestEntry]

    @model_validator(mode="after")
    def _validate_tables(self) -> RateTableManifest:
        seen: set[str] = set()
        for entry in self.tables:
            if entry.table not in KNOWN_TABLES:
                raise ConfigurationError(
                    f"Unknown rate table '{entry.table}' declared in the manifest"
                )
            if entry.table in seen:
                raise ConfigurationError(
                    f"Duplicate table {entry.table} declared in the configuration manifest"
                )
            seen.add(entry.table)
        return self

    def get_entry(self, table: str) -> RateTableManifestEntry:
        for entry in self.tables:
            if entry.table == table:
                return entry
        raise KeyError(table)

    @computed_field
    @property
    def table_names(self) -> tuple[str, ...]:
        return tuple(entry.table for entry in self.tables)


__all__ = [
    "CeilingRule",
    "ConfigurationError",
    "ImmutableModel",
    "KNOWN_TABLES",
    "MileageRate",
    "RateTableManifest",
    "RateTableManifestEntry",
    "RateTables",
    "RoleRate",
    "TrainRefundBand",
    "ValidationError",
    "ValidityWindow",
]
