"""Health endpoint router composition for liveness and active configuration."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from pnl_ledger.config import AppSettings


def api_create_health_router(settings: AppSettings) -> APIRouter:
    """Create health-check router reporting liveness and calculation defaults.

    Args:
        settings: Validated runtime settings.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when settings are missing.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application health and active calculation defaults.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        payload = {
            "status": "ok",
            "app": "up",
            "accounting_method": settings.accounting_method.value,
            "decimal_precision": settings.decimal_precision,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
