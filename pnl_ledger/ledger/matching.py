"""Trade matching against opposite-side open lots.

One trade closes opposite-side lots in accounting-method order, realized PnL
is summed across every closed lot and rounded once, and any unmatched
residual opens a new lot on the trade's own side.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, localcontext

from pnl_ledger.domain import (
    DEFAULT_DECIMAL_PRECISION,
    MAX_DECIMAL_PRECISION,
    PNL_DECIMAL_CONTEXT,
    PNL_EPSILON,
    AccountingMethod,
    Lot,
    PnLResult,
    Trade,
    TradeSide,
)

from .position_ledger import PositionLedger

logger = logging.getLogger(__name__)


def matching_process_trade(
    ledger: PositionLedger,
    trade: Trade,
    accounting_method: AccountingMethod,
    decimal_precision: int = DEFAULT_DECIMAL_PRECISION,
) -> PnLResult | None:
    """Apply one trade to the ledger and return its realized PnL event.

    Args:
        ledger: Position ledger mutated in place.
        trade: Validated trade.
        accounting_method: Lot-closing order for the opposite-side queue.
        decimal_precision: Decimal places applied to the aggregated PnL.

    Returns:
        PnLResult | None: One aggregated PnL event, or None when the trade only
        opens a position or its rounded PnL is within epsilon of zero.

    Raises:
        ValueError: Raised when decimal precision is out of range.
    """

    opposite_side = trade.side.opposite
    if ledger.ledger_next_to_close(trade.symbol, opposite_side, accounting_method) is None:
        ledger.ledger_append(
            trade.symbol,
            trade.side,
            Lot(price=trade.price, quantity=trade.quantity, timestamp=trade.timestamp),
        )
        return None

    remaining_quantity = trade.quantity
    total_pnl = Decimal("0")

    with localcontext(PNL_DECIMAL_CONTEXT):
        while remaining_quantity > 0:
            lot = ledger.ledger_next_to_close(trade.symbol, opposite_side, accounting_method)
            if lot is None:
                break
            close_quantity = min(remaining_quantity, lot.quantity)
            total_pnl += matching_realized_contribution(trade, lot, close_quantity)
            ledger.ledger_reduce_or_remove(trade.symbol, opposite_side, accounting_method, close_quantity)
            remaining_quantity -= close_quantity

    if remaining_quantity > 0:
        logger.debug(
            "position flip symbol=%s side=%s residual=%s timestamp=%s",
            trade.symbol,
            trade.side.value,
            remaining_quantity,
            trade.timestamp,
        )
        ledger.ledger_append(
            trade.symbol,
            trade.side,
            Lot(price=trade.price, quantity=remaining_quantity, timestamp=trade.timestamp),
        )

    rounded_pnl = matching_round_pnl(total_pnl, decimal_precision)
    if rounded_pnl.copy_abs() <= PNL_EPSILON:
        return None
    return PnLResult(timestamp=trade.timestamp, symbol=trade.symbol, pnl=rounded_pnl)


def matching_realized_contribution(trade: Trade, lot: Lot, close_quantity: int) -> Decimal:
    """Compute unrounded realized PnL for closing part of one lot.

    A sell closes a long (buy) lot and earns `trade.price - lot.price`; a buy
    closes a short (sell) lot and earns `lot.price - trade.price`.

    Args:
        trade: Closing trade.
        lot: Opposite-side lot being closed.
        close_quantity: Quantity closed against this lot.

    Returns:
        Decimal: Signed realized PnL contribution.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    with localcontext(PNL_DECIMAL_CONTEXT):
        if trade.side is TradeSide.SELL:
            return close_quantity * (trade.price - lot.price)
        return close_quantity * (lot.price - trade.price)


def matching_round_pnl(value: Decimal, decimal_precision: int = DEFAULT_DECIMAL_PRECISION) -> Decimal:
    """Round PnL half away from zero to a fixed number of decimal places.

    Args:
        value: Unrounded PnL.
        decimal_precision: Decimal places to keep.

    Returns:
        Decimal: Quantized PnL value.

    Raises:
        ValueError: Raised when decimal precision is out of range.
    """

    if isinstance(decimal_precision, bool) or not isinstance(decimal_precision, int):
        raise ValueError(f"decimal_precision must be an integer, got {decimal_precision!r}")
    if not 0 <= decimal_precision <= MAX_DECIMAL_PRECISION:
        raise ValueError(f"decimal_precision must be between 0 and {MAX_DECIMAL_PRECISION}, got {decimal_precision}")

    with localcontext(PNL_DECIMAL_CONTEXT):
        return value.quantize(Decimal(1).scaleb(-decimal_precision), rounding=ROUND_HALF_UP)
