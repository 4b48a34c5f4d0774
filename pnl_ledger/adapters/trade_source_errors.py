"""Project-native typed exceptions and codes for trade source failures."""

from __future__ import annotations

from enum import Enum
from typing import Final


class TradeParseErrorCode(str, Enum):
    """Known reasons a trade record is rejected by the CSV adapter."""

    FIELD_COUNT = "FIELD_COUNT"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
    INVALID_SYMBOL = "INVALID_SYMBOL"
    INVALID_SIDE = "INVALID_SIDE"
    INVALID_NUMBER = "INVALID_NUMBER"
    NON_POSITIVE_VALUE = "NON_POSITIVE_VALUE"
    FRACTIONAL_QUANTITY = "FRACTIONAL_QUANTITY"
    INVALID_ENCODING = "INVALID_ENCODING"
    NO_TRADES = "NO_TRADES"


TRADE_PARSE_DEFAULT_MESSAGES: Final[dict[str, str]] = {
    TradeParseErrorCode.FIELD_COUNT.value: "Invalid number of CSV fields.",
    TradeParseErrorCode.INVALID_TIMESTAMP.value: "Timestamp must be a non-negative integer.",
    TradeParseErrorCode.INVALID_SYMBOL.value: "Symbol is blank or too long.",
    TradeParseErrorCode.INVALID_SIDE.value: "Trade side must be B or S.",
    TradeParseErrorCode.INVALID_NUMBER.value: "Price or quantity is not a number.",
    TradeParseErrorCode.NON_POSITIVE_VALUE.value: "Invalid price or quantity: must be positive.",
    TradeParseErrorCode.FRACTIONAL_QUANTITY.value: "Quantity must be a whole number.",
    TradeParseErrorCode.INVALID_ENCODING.value: "Trade source could not be decoded.",
    TradeParseErrorCode.NO_TRADES.value: "No valid trades found in source.",
}


class TradeSourceError(Exception):
    """Base exception for trade source adapter failures.

    Attributes:
        error_code: Optional machine-readable failure code.
    """

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.error_code = error_code


class TradeSourceNotFoundError(TradeSourceError, FileNotFoundError):
    """Trade input file is missing or cannot be opened."""


class TradeParseError(TradeSourceError, ValueError):
    """One trade record could not be converted into a valid trade.

    Attributes:
        line_number: Optional 1-based source line number.
    """

    def __init__(self, message: str, error_code: str | None = None, line_number: int | None = None):
        super().__init__(message=message, error_code=error_code)
        self.line_number = line_number


def trade_parse_default_message(error_code: str, fallback_message: str) -> str:
    """Return canonical default message for a parse error code.

    Args:
        error_code: Parse error code.
        fallback_message: Fallback message when code is unknown.

    Returns:
        str: Canonical message for known code, else provided fallback message.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return TRADE_PARSE_DEFAULT_MESSAGES.get(error_code, fallback_message)
