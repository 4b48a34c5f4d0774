"""CSV trade source adapter.

Each record is `timestamp,symbol,side,price,quantity`. Blank lines, `#`
comment lines and a `timestamp,...` header row are ignored. Lenient mode
skips invalid records and reports them as issues; strict mode stops at the
first invalid record.
"""

from __future__ import annotations

import csv
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, NoReturn

from pnl_ledger.domain import (
    MAX_SYMBOL_LENGTH,
    MAX_TRADE_QUANTITY,
    TRADE_CSV_FIELD_COUNT,
    Trade,
    TradeSide,
    domain_price_in_range,
)

from .interfaces import TradeParseIssue, TradeSourcePort, TradeSourceReadResult
from .trade_source_errors import (
    TradeParseError,
    TradeParseErrorCode,
    TradeSourceNotFoundError,
    trade_parse_default_message,
)

logger = logging.getLogger(__name__)

_ADAPTER_BUY_TOKENS = frozenset({"B", "BUY"})
_ADAPTER_SELL_TOKENS = frozenset({"S", "SELL"})
_ADAPTER_HEADER_FIRST_FIELD = "timestamp"


class CsvTradeFileSource(TradeSourcePort):
    """Trade source reading one CSV file from the local filesystem."""

    def __init__(self, path: str | Path, strict: bool = False, encoding: str = "utf-8"):
        """Initialize CSV file source.

        Args:
            path: CSV file path.
            strict: Whether the first invalid record aborts the read.
            encoding: File text encoding.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when path or encoding is blank.
        """

        if not str(path).strip():
            raise ValueError("path must not be blank")
        if not encoding.strip():
            raise ValueError("encoding must not be blank")

        self._path = Path(path)
        self._strict = strict
        self._encoding = encoding

    def adapter_source_name(self) -> str:
        return str(self._path)

    def adapter_read_trades(self) -> TradeSourceReadResult:
        return adapter_read_trade_file(self._path, strict=self._strict, encoding=self._encoding)


def adapter_read_trade_file(path: str | Path, strict: bool = False, encoding: str = "utf-8") -> TradeSourceReadResult:
    """Read and parse one CSV trade file.

    Args:
        path: CSV file path.
        strict: Whether the first invalid record aborts the read.
        encoding: File text encoding.

    Returns:
        TradeSourceReadResult: Accepted trades plus skipped-record diagnostics.

    Raises:
        TradeSourceNotFoundError: Raised when the file cannot be opened.
        TradeParseError: Raised when decoding fails or, in strict mode, for the first invalid record.
    """

    file_path = Path(path)
    try:
        with file_path.open("r", encoding=encoding, newline="") as trade_file:
            return adapter_parse_trade_lines(trade_file, strict=strict, source_name=str(file_path))
    except UnicodeDecodeError as error:
        raise TradeParseError(
            f"{trade_parse_default_message(TradeParseErrorCode.INVALID_ENCODING.value, 'decode failed')} "
            f"path={file_path} encoding={encoding}",
            error_code=TradeParseErrorCode.INVALID_ENCODING.value,
        ) from error
    except OSError as error:
        raise TradeSourceNotFoundError(f"Could not open file: {file_path}") from error


def adapter_parse_trade_lines(
    lines: Iterable[str],
    strict: bool = False,
    source_name: str = "<lines>",
) -> TradeSourceReadResult:
    """Parse CSV trade lines in source order.

    Args:
        lines: Raw text lines, with or without line terminators.
        strict: Whether the first invalid record raises instead of being skipped.
        source_name: Source identifier used in diagnostics.

    Returns:
        TradeSourceReadResult: Accepted trades plus skipped-record diagnostics.

    Raises:
        TradeParseError: Raised in strict mode for the first invalid record, or when no trades are found.
    """

    trades: list[Trade] = []
    issues: list[TradeParseIssue] = []
    line_count = 0

    for line_number, raw_line in enumerate(lines, start=1):
        line_count = line_number
        line = raw_line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        if _adapter_is_header_line(line):
            continue

        try:
            trades.append(adapter_parse_trade_line(line, line_number=line_number))
        except TradeParseError as error:
            if strict:
                raise
            logger.warning("skipping invalid trade record source=%s %s", source_name, error)
            issues.append(
                TradeParseIssue(
                    line_number=line_number,
                    error_code=error.error_code or TradeParseErrorCode.FIELD_COUNT.value,
                    message=str(error),
                )
            )

    if strict and not trades:
        raise TradeParseError(
            trade_parse_default_message(TradeParseErrorCode.NO_TRADES.value, "no trades"),
            error_code=TradeParseErrorCode.NO_TRADES.value,
        )

    return TradeSourceReadResult(
        source_name=source_name,
        trades=tuple(trades),
        issues=tuple(issues),
        line_count=line_count,
    )


def adapter_parse_trade_line(line: str, line_number: int | None = None) -> Trade:
    """Parse one CSV record into a validated trade.

    Args:
        line: CSV record text.
        line_number: Optional 1-based line number appended to error messages.

    Returns:
        Trade: Validated trade.

    Raises:
        TradeParseError: Raised when the record is malformed or violates the trade contract.
    """

    fields = [field.strip() for field in next(csv.reader([line]), [])]
    if len(fields) != TRADE_CSV_FIELD_COUNT:
        _adapter_raise_parse_error(
            TradeParseErrorCode.FIELD_COUNT,
            f"Invalid number of CSV fields: expected {TRADE_CSV_FIELD_COUNT}, got {len(fields)}",
            line_number,
        )

    timestamp_text, symbol, side_text, price_text, quantity_text = fields

    if not timestamp_text.isdecimal():
        _adapter_raise_parse_error(
            TradeParseErrorCode.INVALID_TIMESTAMP,
            f"Invalid timestamp: {timestamp_text!r}",
            line_number,
        )
    if not symbol or len(symbol) > MAX_SYMBOL_LENGTH:
        _adapter_raise_parse_error(
            TradeParseErrorCode.INVALID_SYMBOL,
            f"Invalid symbol: {symbol!r}",
            line_number,
        )

    normalized_side = side_text.upper()
    if normalized_side in _ADAPTER_BUY_TOKENS:
        side = TradeSide.BUY
    elif normalized_side in _ADAPTER_SELL_TOKENS:
        side = TradeSide.SELL
    else:
        _adapter_raise_parse_error(
            TradeParseErrorCode.INVALID_SIDE,
            f"Invalid trade side: {side_text!r}",
            line_number,
        )

    price = _adapter_parse_decimal(price_text, "price", line_number)
    quantity_value = _adapter_parse_decimal(quantity_text, "quantity", line_number)

    if price <= 0 or quantity_value <= 0:
        _adapter_raise_parse_error(
            TradeParseErrorCode.NON_POSITIVE_VALUE,
            trade_parse_default_message(TradeParseErrorCode.NON_POSITIVE_VALUE.value, "non-positive value"),
            line_number,
        )
    if not domain_price_in_range(price):
        _adapter_raise_parse_error(
            TradeParseErrorCode.INVALID_NUMBER,
            f"Price out of range: {price_text!r}",
            line_number,
        )
    if quantity_value > MAX_TRADE_QUANTITY:
        _adapter_raise_parse_error(
            TradeParseErrorCode.INVALID_NUMBER,
            f"Quantity out of range: {quantity_text!r}",
            line_number,
        )
    if quantity_value != quantity_value.to_integral_value():
        _adapter_raise_parse_error(
            TradeParseErrorCode.FRACTIONAL_QUANTITY,
            f"Quantity must be a whole number: {quantity_text!r}",
            line_number,
        )

    return Trade(
        timestamp=int(timestamp_text),
        symbol=symbol,
        price=price,
        quantity=int(quantity_value),
        side=side,
    )


def _adapter_is_header_line(line: str) -> bool:
    first_field = line.split(",", 1)[0].strip().strip('"').lower()
    return first_field == _ADAPTER_HEADER_FIRST_FIELD


def _adapter_parse_decimal(value: str, field_name: str, line_number: int | None) -> Decimal:
    try:
        parsed_value = Decimal(value)
    except InvalidOperation:
        parsed_value = None

    if parsed_value is None or not parsed_value.is_finite():
        _adapter_raise_parse_error(
            TradeParseErrorCode.INVALID_NUMBER,
            f"Invalid {field_name}: {value!r}",
            line_number,
        )
    return parsed_value


def _adapter_raise_parse_error(error_code: TradeParseErrorCode, message: str, line_number: int | None) -> NoReturn:
    if line_number is not None:
        message = f"{message} (line {line_number})"
    raise TradeParseError(message, error_code=error_code.value, line_number=line_number)
