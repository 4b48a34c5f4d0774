"""Application bootstrap wiring for startup validation and dependency assembly."""

import logging
import sys

from fastapi import FastAPI

from pnl_ledger.api import create_api_application
from pnl_ledger.config import AppSettings, config_load_settings
from pnl_ledger.domain import AccountingMethod
from pnl_ledger.jobs import PnlCalculationJob, PnlCalculationJobConfig

_BOOTSTRAP_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def bootstrap_configure_logging(log_level: str) -> None:
    """Route log records to stderr so CSV output on stdout stays clean.

    Args:
        log_level: Logging level name.

    Returns:
        None: Root logger is configured in place.

    Raises:
        ValueError: Raised when log level name is unknown.
    """

    logging.basicConfig(level=log_level.upper(), format=_BOOTSTRAP_LOG_FORMAT, stream=sys.stderr, force=True)


def bootstrap_create_calculation_job(
    settings: AppSettings,
    accounting_method: AccountingMethod | None = None,
    strict_parsing: bool | None = None,
) -> PnlCalculationJob:
    """Build a calculation job from settings with optional per-run overrides.

    Args:
        settings: Validated runtime settings.
        accounting_method: Optional method override.
        strict_parsing: Optional strict-parsing override.

    Returns:
        PnlCalculationJob: Configured calculation job.

    Raises:
        ValueError: Raised when configuration values are invalid.
    """

    return PnlCalculationJob(
        config=PnlCalculationJobConfig(
            accounting_method=accounting_method or settings.accounting_method,
            decimal_precision=settings.decimal_precision,
            strict_parsing=settings.strict_parsing if strict_parsing is None else strict_parsing,
            input_encoding=settings.input_encoding,
        )
    )


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()

    def bootstrap_job_factory(accounting_method: AccountingMethod, strict_parsing: bool) -> PnlCalculationJob:
        return bootstrap_create_calculation_job(
            resolved_settings,
            accounting_method=accounting_method,
            strict_parsing=strict_parsing,
        )

    return create_api_application(settings=resolved_settings, job_factory=bootstrap_job_factory)
