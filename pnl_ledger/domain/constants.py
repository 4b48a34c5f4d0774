"""Shared numeric and format constants for PnL computation."""

from __future__ import annotations

from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, Context, Decimal
from typing import Final

DEFAULT_DECIMAL_PRECISION: Final[int] = 2
MAX_DECIMAL_PRECISION: Final[int] = 12

PNL_EPSILON: Final[Decimal] = Decimal("1e-9")

# Products and sums of bounded trade values stay exact under this context.
PNL_DECIMAL_CONTEXT: Final[Context] = Context(
    prec=MAX_PREC,
    rounding=ROUND_HALF_UP,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
)

MAX_TRADE_QUANTITY: Final[int] = 2**64 - 1
MIN_PRICE_EXPONENT: Final[int] = -18
MAX_PRICE_EXPONENT: Final[int] = 18

MAX_SYMBOL_LENGTH: Final[int] = 16

RESULT_CSV_HEADER: Final[tuple[str, str, str]] = ("timestamp", "symbol", "pnl")
TRADE_CSV_FIELD_COUNT: Final[int] = 5
