"""PnL calculation API router for JSON and CSV trade payloads."""

from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Callable

from fastapi import APIRouter, Body, Query, status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field, field_validator

from pnl_ledger.adapters import adapter_format_pnl, adapter_format_results_csv
from pnl_ledger.config import AppSettings
from pnl_ledger.domain import (
    MAX_PRICE_EXPONENT,
    MAX_SYMBOL_LENGTH,
    MAX_TRADE_QUANTITY,
    MIN_PRICE_EXPONENT,
    PNL_DECIMAL_CONTEXT,
    AccountingMethod,
    PnLResult,
    Trade,
    TradeSide,
    domain_parse_accounting_method,
    domain_price_in_range,
)
from pnl_ledger.jobs import PnlCalculationJob

JobFactory = Callable[[AccountingMethod, bool], PnlCalculationJob]

_API_SIDE_ALIASES = {"B": "BUY", "S": "SELL"}


class TradePayload(BaseModel):
    """JSON trade record accepted by the calculation endpoint."""

    timestamp: int = Field(ge=0)
    symbol: str = Field(min_length=1, max_length=MAX_SYMBOL_LENGTH)
    side: TradeSide
    price: Decimal = Field(gt=0, allow_inf_nan=False)
    quantity: int = Field(gt=0, le=MAX_TRADE_QUANTITY)

    @field_validator("symbol")
    @classmethod
    def _validate_symbol(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("symbol must not be blank")
        return stripped_value

    @field_validator("price")
    @classmethod
    def _validate_price_range(cls, value: Decimal) -> Decimal:
        if not domain_price_in_range(value):
            raise ValueError(f"price exponent must be between {MIN_PRICE_EXPONENT} and {MAX_PRICE_EXPONENT}")
        return value

    @field_validator("side", mode="before")
    @classmethod
    def _normalize_side(cls, value: object) -> object:
        if isinstance(value, str):
            normalized_value = value.strip().upper()
            return _API_SIDE_ALIASES.get(normalized_value, normalized_value)
        return value

    def to_trade(self) -> Trade:
        return Trade(
            timestamp=self.timestamp,
            symbol=self.symbol,
            price=self.price,
            quantity=self.quantity,
            side=self.side,
        )


class PnlCalculationRequest(BaseModel):
    """JSON request body for one realized PnL calculation."""

    accounting_method: str | None = None
    trades: list[TradePayload] = Field(default_factory=list)


def api_create_pnl_router(settings: AppSettings, job_factory: JobFactory) -> APIRouter:
    """Create PnL router exposing JSON and CSV calculation endpoints.

    Args:
        settings: Runtime settings providing defaults and request limits.
        job_factory: Builds a calculation job for a method and strictness.

    Returns:
        APIRouter: Router exposing `/pnl` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if job_factory is None:
        raise ValueError("job_factory must not be None")

    router = APIRouter(prefix="/pnl", tags=["pnl"])

    @router.post("/calculate")
    def api_pnl_calculate(request_body: PnlCalculationRequest) -> JSONResponse:
        """Compute realized PnL for an ordered JSON trade list.

        Args:
            request_body: Trades plus optional accounting method override.

        Returns:
            JSONResponse: Result items and summary payload.

        Raises:
            RuntimeError: Raised when calculation fails unexpectedly.
        """

        accounting_method = _api_resolve_accounting_method(request_body.accounting_method, settings)
        if accounting_method is None:
            return _api_error_response(
                status.HTTP_400_BAD_REQUEST,
                "INVALID_ACCOUNTING_METHOD",
                f"unsupported accounting_method={request_body.accounting_method}",
            )
        if len(request_body.trades) > settings.api_max_trades:
            return _api_error_response(
                status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                "TOO_MANY_TRADES",
                f"trade count exceeds api_max_trades={settings.api_max_trades}",
            )

        job = job_factory(accounting_method, settings.strict_parsing)
        execution_result = job.job_execute_trades(
            (trade_payload.to_trade() for trade_payload in request_body.trades),
            source_name="api:json",
        )
        payload = {
            "accounting_method": execution_result.accounting_method.value,
            "trade_count": execution_result.trade_count,
            "items": [
                api_serialize_pnl_result(result, settings.decimal_precision) for result in execution_result.results
            ],
            "summary": api_build_pnl_summary(execution_result.results, settings.decimal_precision),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/calculate/csv")
    def api_pnl_calculate_csv(
        body: bytes = Body(default=b"", media_type="text/csv"),
        accounting_method: str | None = Query(default=None),
        strict: bool | None = Query(default=None),
    ) -> Response:
        """Compute realized PnL for a raw CSV trade body and return CSV.

        Args:
            body: Raw request body carrying `timestamp,symbol,side,price,quantity` lines.
            accounting_method: Optional method override.
            strict: Optional strict-parsing override.

        Returns:
            Response: `text/csv` result payload, or JSON error envelope.

        Raises:
            RuntimeError: Raised when calculation fails unexpectedly.
        """

        resolved_method = _api_resolve_accounting_method(accounting_method, settings)
        if resolved_method is None:
            return _api_error_response(
                status.HTTP_400_BAD_REQUEST,
                "INVALID_ACCOUNTING_METHOD",
                f"unsupported accounting_method={accounting_method}",
            )

        try:
            body_text = body.decode(settings.input_encoding)
        except UnicodeDecodeError:
            return _api_error_response(
                status.HTTP_400_BAD_REQUEST,
                "INVALID_ENCODING",
                f"request body is not valid {settings.input_encoding}",
            )

        lines = body_text.splitlines()
        if sum(1 for line in lines if line.strip()) > settings.api_max_trades:
            return _api_error_response(
                status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                "TOO_MANY_TRADES",
                f"trade count exceeds api_max_trades={settings.api_max_trades}",
            )

        strict_parsing = settings.strict_parsing if strict is None else strict
        job = job_factory(resolved_method, strict_parsing)
        execution_result = job.job_execute_lines(lines, source_name="api:csv")
        if execution_result.status != "success":
            return _api_error_response(
                status.HTTP_422_UNPROCESSABLE_ENTITY,
                execution_result.error_code or "PARSE_ERROR",
                execution_result.error_message or "trade payload could not be parsed",
            )

        return Response(
            content=adapter_format_results_csv(execution_result.results, settings.decimal_precision),
            media_type="text/csv",
            headers={"X-Skipped-Records": str(len(execution_result.issues))},
        )

    return router


def api_serialize_pnl_result(result: PnLResult, decimal_precision: int) -> dict[str, object]:
    """Serialize one PnL event to JSON payload.

    Args:
        result: PnL event.
        decimal_precision: Decimal places rendered for PnL.

    Returns:
        dict[str, object]: JSON-serializable result payload with PnL as fixed-precision text.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "timestamp": result.timestamp,
        "symbol": result.symbol,
        "pnl": adapter_format_pnl(result, decimal_precision),
    }


def api_build_pnl_summary(results: tuple[PnLResult, ...], decimal_precision: int) -> dict[str, object]:
    """Summarize realized PnL totals overall and per symbol."""

    totals_by_symbol: dict[str, Decimal] = {}
    with localcontext(PNL_DECIMAL_CONTEXT):
        for result in results:
            totals_by_symbol[result.symbol] = totals_by_symbol.get(result.symbol, Decimal("0")) + result.pnl
        total_pnl = sum(totals_by_symbol.values(), Decimal("0"))

    return {
        "result_count": len(results),
        "total_pnl": f"{total_pnl:.{decimal_precision}f}",
        "by_symbol": {
            symbol: f"{total:.{decimal_precision}f}" for symbol, total in sorted(totals_by_symbol.items())
        },
    }


def _api_resolve_accounting_method(value: str | None, settings: AppSettings) -> AccountingMethod | None:
    if value is None or not value.strip():
        return settings.accounting_method
    try:
        return domain_parse_accounting_method(value)
    except ValueError:
        return None


def _api_error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = {
        "status": "error",
        "code": code,
        "message": message,
    }
    return JSONResponse(content=payload, status_code=status_code)


__all__ = ["api_create_pnl_router", "api_serialize_pnl_result", "api_build_pnl_summary"]
