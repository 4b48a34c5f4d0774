"""Tests for API index and health endpoint behavior."""

from fastapi.testclient import TestClient

from pnl_ledger.bootstrap import bootstrap_create_application
from pnl_ledger.config import AppSettings
from pnl_ledger.domain import AccountingMethod


def test_api_health_reports_active_calculation_defaults() -> None:
    """Return liveness payload with configured method and precision.

    Returns:
        None: Assertions validate health payload.

    Raises:
        AssertionError: Raised when health payload deviates.
    """

    settings = AppSettings(accounting_method=AccountingMethod.LIFO, decimal_precision=3)
    client = TestClient(bootstrap_create_application(settings))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "app": "up",
        "accounting_method": "lifo",
        "decimal_precision": 3,
    }


def test_api_index_identifies_service() -> None:
    settings = AppSettings(environment_name="test")
    client = TestClient(bootstrap_create_application(settings))

    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["service"] == "trade-pnl-ledger"
    assert response.json()["environment"] == "test"
