"""Per-symbol, per-side open-lot queues with policy-aware access."""

from __future__ import annotations

from collections import deque

from pnl_ledger.domain import AccountingMethod, Lot, OpenLotSnapshot, TradeSide


class PositionLedger:
    """Open lots keyed by symbol and side, kept in arrival order.

    FIFO selects the queue head (oldest lot) and LIFO selects the queue tail
    (newest lot). Lots whose quantity reaches zero are removed immediately.
    """

    def __init__(self) -> None:
        self._queues: dict[str, dict[TradeSide, deque[Lot]]] = {}

    def ledger_append(self, symbol: str, side: TradeSide, lot: Lot) -> None:
        """Add one lot to the tail of the symbol/side queue.

        Args:
            symbol: Instrument identifier.
            side: Side the lot is opened on.
            lot: Lot taken over by the ledger.

        Returns:
            None: Lot is stored in place.

        Raises:
            ValueError: Raised when lot quantity is not positive.
        """

        if lot.quantity <= 0:
            raise ValueError(f"lot.quantity must be positive, got {lot.quantity}")
        self._ledger_queue(symbol, side).append(lot)

    def ledger_next_to_close(self, symbol: str, side: TradeSide, method: AccountingMethod) -> Lot | None:
        """Return the lot the accounting method closes next without removing it.

        Args:
            symbol: Instrument identifier.
            side: Side whose queue is inspected.
            method: Accounting method selecting head (FIFO) or tail (LIFO).

        Returns:
            Lot | None: Selected lot, or None when the queue is empty.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        queue = self._ledger_existing_queue(symbol, side)
        if not queue:
            return None
        return queue[0] if method is AccountingMethod.FIFO else queue[-1]

    def ledger_reduce_or_remove(
        self,
        symbol: str,
        side: TradeSide,
        method: AccountingMethod,
        amount: int,
    ) -> int:
        """Reduce the selected lot and drop it once exhausted.

        Args:
            symbol: Instrument identifier.
            side: Side whose queue is reduced.
            method: Accounting method selecting head (FIFO) or tail (LIFO).
            amount: Quantity to close, capped at the lot remaining quantity.

        Returns:
            int: Quantity actually closed.

        Raises:
            ValueError: Raised when amount is not positive or the queue is empty.
        """

        if amount <= 0:
            raise ValueError(f"amount must be positive, got {amount}")

        queue = self._ledger_existing_queue(symbol, side)
        if not queue:
            raise ValueError(f"no open {side.value} lot for symbol={symbol}")

        lot = queue[0] if method is AccountingMethod.FIFO else queue[-1]
        closed_quantity = min(amount, lot.quantity)
        lot.quantity -= closed_quantity

        if lot.quantity == 0:
            if method is AccountingMethod.FIFO:
                queue.popleft()
            else:
                queue.pop()
        return closed_quantity

    def ledger_open_lots(self, symbol: str, side: TradeSide) -> tuple[OpenLotSnapshot, ...]:
        """Return snapshots of open lots in arrival order (oldest first).

        Args:
            symbol: Instrument identifier.
            side: Side to inspect.

        Returns:
            tuple[OpenLotSnapshot, ...]: Immutable lot copies.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return tuple(
            OpenLotSnapshot(
                symbol=symbol,
                side=side,
                price=lot.price,
                quantity=lot.quantity,
                timestamp=lot.timestamp,
            )
            for lot in self._ledger_existing_queue(symbol, side)
        )

    def ledger_open_quantity(self, symbol: str, side: TradeSide) -> int:
        """Return summed open quantity for one symbol/side queue."""

        return sum(lot.quantity for lot in self._ledger_existing_queue(symbol, side))

    def ledger_symbols(self) -> tuple[str, ...]:
        """Return symbols that currently hold at least one open lot, sorted."""

        return tuple(
            sorted(symbol for symbol, queues in self._queues.items() if any(queues.values()))
        )

    def ledger_clear(self) -> None:
        """Drop every open lot."""

        self._queues.clear()

    def _ledger_queue(self, symbol: str, side: TradeSide) -> deque[Lot]:
        side_queues = self._queues.setdefault(symbol, {TradeSide.BUY: deque(), TradeSide.SELL: deque()})
        return side_queues[side]

    def _ledger_existing_queue(self, symbol: str, side: TradeSide) -> deque[Lot]:
        side_queues = self._queues.get(symbol)
        if side_queues is None:
            return deque()
        return side_queues[side]
