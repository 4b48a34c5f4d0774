"""Typed interfaces for ledger-layer computations."""

from typing import Iterable, Protocol

from pnl_ledger.domain import AccountingMethod, OpenLotSnapshot, PnLResult, Trade, TradeSide


class PnlEnginePort(Protocol):
    """Port definition for realized PnL computation over ordered trades."""

    def engine_accounting_method(self) -> AccountingMethod:
        """Return the accounting method fixed for the engine lifetime.

        Returns:
            AccountingMethod: Active lot-closing policy.

        Raises:
            RuntimeError: Raised when policy metadata is unavailable.
        """

    def engine_process(self, trades: Iterable[Trade]) -> None:
        """Process trades in the given order.

        Args:
            trades: Ordered trade sequence.

        Returns:
            None: Results accumulate inside the engine.

        Raises:
            ValueError: Raised when a trade violates the trade contract.
        """

    def engine_results(self) -> tuple[PnLResult, ...]:
        """Return accumulated results in emission order.

        Returns:
            tuple[PnLResult, ...]: Read-only result view.

        Raises:
            RuntimeError: Raised when results are unavailable.
        """

    def engine_reset(self) -> None:
        """Return the engine to its initial empty state.

        Returns:
            None: State is cleared in place.

        Raises:
            RuntimeError: Raised when state cannot be cleared.
        """

    def engine_open_lots(self, symbol: str, side: TradeSide) -> tuple[OpenLotSnapshot, ...]:
        """Return open-lot snapshots for one symbol/side.

        Args:
            symbol: Instrument identifier.
            side: Side to inspect.

        Returns:
            tuple[OpenLotSnapshot, ...]: Lot snapshots in arrival order.

        Raises:
            RuntimeError: Raised when ledger state is unavailable.
        """
