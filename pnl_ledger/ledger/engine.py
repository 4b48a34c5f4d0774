"""Realized PnL engine driving trade matching over an ordered trade sequence."""

from __future__ import annotations

import logging
from typing import Iterable

from pnl_ledger.domain import (
    DEFAULT_DECIMAL_PRECISION,
    MAX_DECIMAL_PRECISION,
    AccountingMethod,
    OpenLotSnapshot,
    PnLResult,
    Trade,
    TradeSide,
    domain_parse_accounting_method,
)

from .interfaces import PnlEnginePort
from .matching import matching_process_trade
from .position_ledger import PositionLedger

logger = logging.getLogger(__name__)


class PnlCalculationEngine(PnlEnginePort):
    """Stateful engine owning one position ledger and its emitted results.

    Trades must arrive in their original logical order: each trade matches
    against the lots left behind by every earlier trade.
    """

    def __init__(
        self,
        accounting_method: AccountingMethod | str = AccountingMethod.FIFO,
        decimal_precision: int = DEFAULT_DECIMAL_PRECISION,
    ):
        """Initialize engine with a fixed accounting method.

        Args:
            accounting_method: Lot-closing order for the engine lifetime.
            decimal_precision: Decimal places applied to emitted PnL.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when method or precision is invalid.
        """

        if isinstance(decimal_precision, bool) or not isinstance(decimal_precision, int):
            raise ValueError(f"decimal_precision must be an integer, got {decimal_precision!r}")
        if not 0 <= decimal_precision <= MAX_DECIMAL_PRECISION:
            raise ValueError(
                f"decimal_precision must be between 0 and {MAX_DECIMAL_PRECISION}, got {decimal_precision}"
            )

        self._accounting_method = domain_parse_accounting_method(accounting_method)
        self._decimal_precision = decimal_precision
        self._ledger = PositionLedger()
        self._results: list[PnLResult] = []
        self._processed_count = 0

    def engine_accounting_method(self) -> AccountingMethod:
        """Return the accounting method fixed at construction."""

        return self._accounting_method

    def engine_process(self, trades: Iterable[Trade]) -> None:
        """Process trades strictly in the given order and collect PnL events.

        Args:
            trades: Ordered trade sequence; may be empty.

        Returns:
            None: Results accumulate inside the engine.

        Raises:
            ValueError: Raised when a trade violates the trade contract.
        """

        emitted_before = len(self._results)
        processed_before = self._processed_count
        for trade in trades:
            self.engine_process_trade(trade)

        logger.debug(
            "processed trades=%s emitted=%s method=%s",
            self._processed_count - processed_before,
            len(self._results) - emitted_before,
            self._accounting_method.value,
        )

    def engine_process_trade(self, trade: Trade) -> PnLResult | None:
        """Process one trade and record its PnL event when one is emitted.

        Args:
            trade: Validated trade.

        Returns:
            PnLResult | None: Emitted event, or None when nothing was realized.

        Raises:
            ValueError: Raised when trade is not a `Trade` instance.
        """

        if not isinstance(trade, Trade):
            raise ValueError(f"trade must be a Trade instance, got {type(trade).__name__}")

        result = matching_process_trade(
            ledger=self._ledger,
            trade=trade,
            accounting_method=self._accounting_method,
            decimal_precision=self._decimal_precision,
        )
        self._processed_count += 1
        if result is not None:
            self._results.append(result)
        return result

    def engine_results(self) -> tuple[PnLResult, ...]:
        """Return accumulated results in emission order."""

        return tuple(self._results)

    def engine_extract_results(self) -> list[PnLResult]:
        """Hand over accumulated results and clear the result buffer.

        Open lots are kept, so later trades still match against them.

        Returns:
            list[PnLResult]: Results in emission order.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        extracted_results = self._results
        self._results = []
        return extracted_results

    def engine_reset(self) -> None:
        """Clear all open lots and accumulated results."""

        self._ledger.ledger_clear()
        self._results = []
        self._processed_count = 0

    def engine_processed_count(self) -> int:
        return self._processed_count

    def engine_result_count(self) -> int:
        return len(self._results)

    def engine_open_lots(self, symbol: str, side: TradeSide) -> tuple[OpenLotSnapshot, ...]:
        """Return read-only snapshots of open lots for one symbol/side.

        Args:
            symbol: Instrument identifier.
            side: Side to inspect.

        Returns:
            tuple[OpenLotSnapshot, ...]: Lot snapshots in arrival order.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return self._ledger.ledger_open_lots(symbol, side)

    def engine_open_quantity(self, symbol: str, side: TradeSide) -> int:
        return self._ledger.ledger_open_quantity(symbol, side)

    def engine_open_symbols(self) -> tuple[str, ...]:
        return self._ledger.ledger_symbols()


def engine_create(
    accounting_method: AccountingMethod | str = AccountingMethod.FIFO,
    decimal_precision: int = DEFAULT_DECIMAL_PRECISION,
) -> PnlCalculationEngine:
    """Create an empty engine for one accounting method.

    Args:
        accounting_method: Method enum member or its text name.
        decimal_precision: Decimal places applied to emitted PnL.

    Returns:
        PnlCalculationEngine: Fresh engine with an empty ledger.

    Raises:
        ValueError: Raised when method or precision is invalid.
    """

    return PnlCalculationEngine(accounting_method=accounting_method, decimal_precision=decimal_precision)
