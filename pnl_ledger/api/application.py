"""FastAPI application factory for the PnL calculation service.

This module defines API application composition used by the `api` runtime command.
"""

from fastapi import FastAPI

from pnl_ledger.config import AppSettings

from .routers import api_create_health_router, api_create_pnl_router
from .routers.pnl import JobFactory


def create_api_application(settings: AppSettings, job_factory: JobFactory) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata and defaults.
        job_factory: Builds a calculation job for a method and strictness.

    Returns:
        FastAPI: Framework application instance with health and PnL routers.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """
    application = FastAPI(title="Trade PnL Ledger")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service identification for bootstrap verification.

        Returns:
            dict[str, str]: Service name, environment and default method.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": "trade-pnl-ledger",
            "status": "ready",
            "environment": settings.environment_name,
            "accounting_method": settings.accounting_method.value,
        }

    application.include_router(api_create_health_router(settings=settings))
    application.include_router(api_create_pnl_router(settings=settings, job_factory=job_factory))

    return application
