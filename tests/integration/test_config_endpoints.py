"""Integration coverage for configuration metadata endpoints."""

from http import HTTPStatus
from pathlib import Path
from shutil import copy2

import pytest
from flask.testing import FlaskClient

from fedclaims.backend.config import rate_tables
from fedclaims.backend.version import get_project_version


def test_meta_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/meta")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload == {"version": get_project_version()}


def test_rates_endpoint_returns_rows_for_date(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/rates?on=2024-06-01")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["on"] == "2024-06-01"

    mileage = {row["cv_fiscaux"]: row["rate_per_km"] for row in payload["mileage"]}
    assert mileage == {3: 0.529, 4: 0.606, 5: 0.636, 6: 0.665, 7: 0.697}

    roles = {row["role"]: row["taux"] for row in payload["role_rates"]}
    assert roles == {"bn_member": 0.8, "admin_asso": 0.65, "user": 0.5}

    meal = next(row for row in payload["ceilings"] if row["expense_type"] == "meal")
    assert meal["plafond_unitaire"] == 25.0
    assert meal["plafond_journalier"] == 50.0

    assert len(payload["train_bands"]) == 7
    assert payload["train_bands"][0]["distance_min_km"] == 0
    assert payload["train_out_of_band"] == {
        "percentage_refund": 70.0,
        "max_amount_euros": 250.0,
    }
    assert payload["second_validation_threshold"] == 500.0


def test_rates_endpoint_returns_historical_rows(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/rates?on=2022-03-01")

    payload = response.get_json()
    mileage = {row["cv_fiscaux"]: row["rate_per_km"] for row in payload["mileage"]}
    assert mileage[5] == 0.603
    roles = {row["role"]: row["taux"] for row in payload["role_rates"]}
    assert roles == {"bn_member": 0.8, "admin_asso": 0.65, "user": 0.5}


def test_rates_endpoint_rejects_invalid_date(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/rates?on=01/06/2024")

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "validation_error"


def test_default_train_bands_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/train-bands/default")

    assert response.status_code == HTTPStatus.OK
    bands = response.get_json()["train_bands"]
    assert [band["distance_max_km"] for band in bands] == [
        150,
        350,
        550,
        800,
        1200,
        2000,
        10000,
    ]


@pytest.fixture()
def missing_ceilings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the loader at a copy of the tables without ``ceilings.yaml``."""

    for path in rate_tables.CONFIG_DIRECTORY.glob("*.yaml"):
        if path.name != "ceilings.yaml":
            copy2(path, tmp_path / path.name)

    monkeypatch.setattr(rate_tables, "CONFIG_DIRECTORY", tmp_path)
    monkeypatch.setattr(rate_tables, "MANIFEST_FILE", tmp_path / "manifest.yaml")
    rate_tables.load_rate_tables.cache_clear()
    rate_tables.load_manifest.cache_clear()

    yield tmp_path

    rate_tables.load_rate_tables.cache_clear()
    rate_tables.load_manifest.cache_clear()


def test_missing_table_file_returns_not_found(
    client: FlaskClient, missing_ceilings: Path
) -> None:
    response = client.get("/api/v1/config/rates?on=2024-06-01")

    assert response.status_code == HTTPStatus.NOT_FOUND
    payload = response.get_json()
    assert payload["error"] == "not_found"
    assert "ceilings.yaml" in payload["message"]
