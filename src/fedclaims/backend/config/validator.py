"""Utilities for validating rate table data and surfacing issues."""

from __future__ import annotations

import argparse
from collections import defaultdict
from datetime import date
from typing import Callable, Iterable, Sequence, TypeVar

from .rate_tables import (
    CeilingRule,
    ConfigurationError,
    MileageRate,
    RateTables,
    RoleRate,
    TrainRefundBand,
    ValidityWindow,
    load_rate_tables,
)

_Row = TypeVar("_Row", bound=ValidityWindow)

KNOWN_ROLES = ("bn_member", "admin_asso", "user")


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _describe_window(row: ValidityWindow) -> str:
    end = row.valid_to.isoformat() if row.valid_to else "open"
    return f"{row.valid_from.isoformat()}..{end}"


def _validate_overlaps(
    scope: str,
    rows: Iterable[_Row],
    key: Callable[[_Row], object],
) -> list[str]:
    errors: list[str] = []
    grouped: dict[object, list[_Row]] = defaultdict(list)
    for row in rows:
        grouped[key(row)].append(row)

    for group_key, group in grouped.items():
        ordered = sorted(group, key=lambda row: row.valid_from)
        for index, current in enumerate(ordered):
            for other in ordered[index + 1 :]:
                if current.overlaps(other):
                    errors.append(
                        _format_scope(
                            scope,
                            (
                                f"overlapping validity for {group_key!r}: "
                                f"{_describe_window(current)} and {_describe_window(other)}"
                            ),
                        )
                    )
    return errors


def _validate_mileage(rows: Sequence[MileageRate]) -> list[str]:
    errors = _validate_overlaps("mileage", rows, lambda row: row.horsepower)
    if not rows:
        errors.append(_format_scope("mileage", "no mileage rates defined"))
    return errors


def _validate_role_rates(rows: Sequence[RoleRate]) -> list[str]:
    errors = _validate_overlaps("role_rates", rows, lambda row: row.role)
    for row in rows:
        if row.role not in KNOWN_ROLES:
            errors.append(
                _format_scope(
                    "role_rates",
                    (
                        f"role '{row.role}' is not a reimbursement tier "
                        f"(expected one of {', '.join(KNOWN_ROLES)})"
                    ),
                )
            )
    return errors


def _validate_ceilings(rows: Sequence[CeilingRule]) -> list[str]:
    errors = _validate_overlaps("ceilings", rows, lambda row: row.expense_type)
    for row in rows:
        if row.unit_ceiling == 0:
            errors.append(
                _format_scope(
                    "ceilings",
                    (
                        f"unit ceiling for '{row.expense_type}' is zero and will be "
                        "ignored; use null to declare no ceiling"
                    ),
                )
            )
    return errors


def _validate_train_bands(bands: Sequence[TrainRefundBand]) -> list[str]:
    errors: list[str] = []
    if not bands:
        return errors

    ordered = sorted(bands, key=lambda band: band.min_km)
    if ordered[0].min_km != 0:
        errors.append(
            _format_scope(
                "train_bands",
                f"first band starts at {ordered[0].min_km:g} km instead of 0",
            )
        )

    for previous, current in zip(ordered, ordered[1:]):
        if current.min_km < previous.max_km:
            errors.append(
                _format_scope(
                    "train_bands",
                    (
                        f"band {current.label!r} overlaps {previous.label!r} "
                        f"({current.min_km:g} < {previous.max_km:g})"
                    ),
                )
            )
        elif current.min_km > previous.max_km:
            errors.append(
                _format_scope(
                    "train_bands",
                    (
                        f"gap between {previous.max_km:g} km and {current.min_km:g} km "
                        "is not covered by any band"
                    ),
                )
            )

    return errors


def validate_rate_tables(tables: RateTables) -> list[str]:
    """Return a list of human-readable validation errors for ``tables``."""

    errors: list[str] = []

    errors.extend(_validate_mileage(tables.mileage))
    errors.extend(_validate_role_rates(tables.role_rates))
    errors.extend(_validate_ceilings(tables.ceilings))
    errors.extend(_validate_train_bands(tables.train_bands))

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Validate the configured rate tables and report issues helpful to "
            "administrators."
        )
    )
    parser.add_argument(
        "--on",
        type=date.fromisoformat,
        default=None,
        help="Also report the rows applicable on this ISO date (YYYY-MM-DD)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    try:
        tables = load_rate_tables()
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"failed to load rate tables: {error}")
        return 1

    issues = validate_rate_tables(tables)
    if issues:
        print(f"{len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
    else:
        print("rate tables OK")

    if args.on is not None:
        snapshot = tables.valid_on(args.on)
        print(
            f"[{args.on.isoformat()}] mileage={len(snapshot.mileage)} "
            f"role_rates={len(snapshot.role_rates)} ceilings={len(snapshot.ceilings)} "
            f"train_bands={len(snapshot.train_bands)}"
        )

    return 1 if issues else 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
