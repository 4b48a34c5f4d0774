"""Regression tests for runtime settings loading and validation."""

from __future__ import annotations

import pytest

from pnl_ledger.config import AppSettings, SettingsLoadError, config_load_settings
from pnl_ledger.domain import AccountingMethod

_SETTINGS_ENV_NAMES = (
    "ACCOUNTING_METHOD",
    "DECIMAL_PRECISION",
    "STRICT_PARSING",
    "LOG_LEVEL",
    "API_MAX_TRADES",
)


@pytest.fixture(autouse=True)
def _clear_settings_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for environment_name in _SETTINGS_ENV_NAMES:
        monkeypatch.delenv(environment_name, raising=False)


def test_config_defaults_use_fifo_and_two_decimal_places() -> None:
    settings = AppSettings()

    assert settings.accounting_method is AccountingMethod.FIFO
    assert settings.decimal_precision == 2
    assert settings.strict_parsing is False
    assert settings.log_level == "INFO"


def test_config_reads_environment_values(monkeypatch: pytest.MonkeyPatch) -> None:
    """Load method, precision and strictness from environment variables.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate environment mapping.

    Raises:
        AssertionError: Raised when environment values are ignored.
    """

    monkeypatch.setenv("ACCOUNTING_METHOD", "LIFO")
    monkeypatch.setenv("DECIMAL_PRECISION", "4")
    monkeypatch.setenv("STRICT_PARSING", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = config_load_settings()

    assert settings.accounting_method is AccountingMethod.LIFO
    assert settings.decimal_precision == 4
    assert settings.strict_parsing is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("environment_name", "environment_value"),
    [
        ("ACCOUNTING_METHOD", "average"),
        ("DECIMAL_PRECISION", "13"),
        ("LOG_LEVEL", "chatty"),
        ("API_MAX_TRADES", "0"),
    ],
)
def test_config_wraps_validation_failures(
    monkeypatch: pytest.MonkeyPatch,
    environment_name: str,
    environment_value: str,
) -> None:
    """Raise `SettingsLoadError` for invalid environment values.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        environment_name: Environment variable to override.
        environment_value: Invalid value.

    Returns:
        None: Assertions validate error wrapping.

    Raises:
        AssertionError: Raised when invalid settings load successfully.
    """

    monkeypatch.setenv(environment_name, environment_value)

    with pytest.raises(SettingsLoadError, match="Startup configuration validation failed"):
        config_load_settings()


def test_config_explicit_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DECIMAL_PRECISION", "4")

    assert config_load_settings(decimal_precision=0).decimal_precision == 0
