"""Test configuration utilities and shared fixtures."""

import sys
from datetime import date
from pathlib import Path

# Make ``src`` importable when pytest runs from a checkout without an editable
# install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from fedclaims.backend.app import create_app  # noqa: E402
from fedclaims.backend.config.rate_tables import (  # noqa: E402
    CeilingRule,
    MileageRate,
    RoleRate,
)


@pytest.fixture()
def app() -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def mileage_rates() -> tuple[MileageRate, ...]:
    """Current kilometric scale for the 3 to 7 CV classes."""

    return tuple(
        MileageRate(horsepower=cv, rate_per_km=rate, valid_from=date(2023, 1, 1))
        for cv, rate in ((3, 0.529), (4, 0.606), (5, 0.636), (6, 0.665), (7, 0.697))
    )


@pytest.fixture()
def role_rates() -> tuple[RoleRate, ...]:
    """Reimbursement share for each of the three tiers."""

    return tuple(
        RoleRate(role=role, rate=rate, valid_from=date(2024, 1, 1))
        for role, rate in (("bn_member", 0.80), ("admin_asso", 0.65), ("user", 0.50))
    )


@pytest.fixture()
def ceilings() -> tuple[CeilingRule, ...]:
    """Unit ceilings mirroring the packaged configuration."""

    return (
        CeilingRule(expense_type="car", monthly_ceiling=500, valid_from=date(2024, 1, 1)),
        CeilingRule(expense_type="transport", unit_ceiling=50, valid_from=date(2024, 1, 1)),
        CeilingRule(
            expense_type="meal",
            unit_ceiling=25,
            daily_ceiling=50,
            monthly_ceiling=500,
            valid_from=date(2024, 1, 1),
        ),
        CeilingRule(expense_type="hotel", unit_ceiling=120, valid_from=date(2024, 1, 1)),
        CeilingRule(
            expense_type="registration",
            requires_validation=True,
            valid_from=date(2024, 1, 1),
        ),
        CeilingRule(
            expense_type="other",
            unit_ceiling=100,
            requires_validation=True,
            valid_from=date(2024, 1, 1),
        ),
    )
