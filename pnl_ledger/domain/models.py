"""Typed domain models for trades, open lots and realized PnL events.

Trades and PnL results are immutable values. Lots are the only mutable
entity and are owned by one position ledger slot (symbol x side).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from .constants import MAX_PRICE_EXPONENT, MAX_TRADE_QUANTITY, MIN_PRICE_EXPONENT


class TradeSide(str, Enum):
    """Trade direction."""

    BUY = "BUY"
    SELL = "SELL"

    @property
    def opposite(self) -> "TradeSide":
        """Return the side whose open lots this side closes.

        Returns:
            TradeSide: Opposite trade side.

        Raises:
            RuntimeError: This accessor does not raise runtime errors.
        """

        return TradeSide.SELL if self is TradeSide.BUY else TradeSide.BUY


class AccountingMethod(str, Enum):
    """Lot-closing discipline applied to one engine lifetime."""

    FIFO = "fifo"
    LIFO = "lifo"


def domain_parse_accounting_method(value: str | AccountingMethod) -> AccountingMethod:
    """Resolve accounting method text into `AccountingMethod`.

    Args:
        value: Method name (`fifo` or `lifo`, case-insensitive) or enum member.

    Returns:
        AccountingMethod: Resolved accounting method.

    Raises:
        ValueError: Raised when value does not name a supported method.
    """

    if isinstance(value, AccountingMethod):
        return value
    if not isinstance(value, str):
        raise ValueError(f"unsupported accounting_method={value!r}")

    normalized_value = value.strip().lower()
    try:
        return AccountingMethod(normalized_value)
    except ValueError as error:
        raise ValueError(f"unsupported accounting_method={value!r}; expected 'fifo' or 'lifo'") from error


@dataclass(frozen=True)
class Trade:
    """Immutable trade input event.

    Attributes:
        timestamp: Trade time as an integer (processed in given order, not sorted).
        symbol: Instrument identifier.
        price: Positive execution price.
        quantity: Positive integer quantity.
        side: Trade side.
    """

    timestamp: int
    symbol: str
    price: Decimal
    quantity: int
    side: TradeSide

    def __post_init__(self) -> None:
        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int) or self.timestamp < 0:
            raise ValueError(f"trade.timestamp must be a non-negative integer, got {self.timestamp!r}")
        if not isinstance(self.symbol, str) or not self.symbol.strip():
            raise ValueError("trade.symbol must not be blank")
        if not isinstance(self.price, Decimal) or not self.price.is_finite() or self.price <= 0:
            raise ValueError(f"trade.price must be a positive Decimal, got {self.price!r}")
        if not domain_price_in_range(self.price):
            raise ValueError(
                f"trade.price exponent must be between {MIN_PRICE_EXPONENT} and {MAX_PRICE_EXPONENT}, "
                f"got {self.price!r}"
            )
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValueError(f"trade.quantity must be a positive integer, got {self.quantity!r}")
        if self.quantity > MAX_TRADE_QUANTITY:
            raise ValueError(f"trade.quantity must not exceed {MAX_TRADE_QUANTITY}, got {self.quantity}")
        if not isinstance(self.side, TradeSide):
            raise ValueError(f"trade.side must be a TradeSide, got {self.side!r}")

    @property
    def is_buy(self) -> bool:
        return self.side is TradeSide.BUY


@dataclass
class Lot:
    """Mutable open quantity held at a fixed price.

    Only `quantity` changes after creation and it only ever decreases.

    Attributes:
        price: Opening price.
        quantity: Remaining open quantity.
        timestamp: Opening trade timestamp.
    """

    price: Decimal
    quantity: int
    timestamp: int


@dataclass(frozen=True)
class OpenLotSnapshot:
    """Read-only copy of one open lot for inspection outside the ledger.

    Attributes:
        symbol: Instrument identifier.
        side: Side the lot was opened on.
        price: Opening price.
        quantity: Remaining open quantity at snapshot time.
        timestamp: Opening trade timestamp.
    """

    symbol: str
    side: TradeSide
    price: Decimal
    quantity: int
    timestamp: int


@dataclass(frozen=True)
class PnLResult:
    """Realized PnL emitted for one processed trade.

    Attributes:
        timestamp: Triggering trade timestamp.
        symbol: Instrument identifier.
        pnl: Signed realized PnL rounded to the engine precision.
    """

    timestamp: int
    symbol: str
    pnl: Decimal


def domain_price_in_range(price: Decimal) -> bool:
    """Return whether a finite price has a supported decimal exponent.

    Args:
        price: Finite price value.

    Returns:
        bool: True when the leading digit sits between `1e-18` and `1e18`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return MIN_PRICE_EXPONENT <= price.adjusted() <= MAX_PRICE_EXPONENT
