"""Regression tests for CSV trade parsing and file reading."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from pnl_ledger.adapters import (
    CsvTradeFileSource,
    TradeParseError,
    TradeParseErrorCode,
    TradeSourceNotFoundError,
    adapter_parse_trade_line,
    adapter_parse_trade_lines,
    adapter_read_trade_file,
)
from pnl_ledger.domain import Trade, TradeSide


def test_adapters_parse_trade_line_accepts_side_variants() -> None:
    """Parse single-letter and full-word side tokens in any case.

    Returns:
        None: Assertions validate parsed trade values.

    Raises:
        AssertionError: Raised when valid records are rejected.
    """

    assert adapter_parse_trade_line("1000000000,AAPL,B,150.25,100") == Trade(
        timestamp=1000000000,
        symbol="AAPL",
        price=Decimal("150.25"),
        quantity=100,
        side=TradeSide.BUY,
    )
    assert adapter_parse_trade_line("1000000001,AAPL,s,151.00,50").side is TradeSide.SELL
    assert adapter_parse_trade_line(" 7 , MSFT , SELL , 10 , 2.0 ").quantity == 2
    assert adapter_parse_trade_line('8,"BRK,B",BUY,400,1').symbol == "BRK,B"


@pytest.mark.parametrize(
    ("line", "error_code"),
    [
        ("invalid,data", TradeParseErrorCode.FIELD_COUNT),
        ("1,AAPL,B,150,100,extra", TradeParseErrorCode.FIELD_COUNT),
        ("x,AAPL,B,150,100", TradeParseErrorCode.INVALID_TIMESTAMP),
        ("-5,AAPL,B,150,100", TradeParseErrorCode.INVALID_TIMESTAMP),
        ("1,,B,150,100", TradeParseErrorCode.INVALID_SYMBOL),
        ("1,ABCDEFGHIJKLMNOPQ,B,150,100", TradeParseErrorCode.INVALID_SYMBOL),
        ("1,AAPL,X,150,100", TradeParseErrorCode.INVALID_SIDE),
        ("1,AAPL,B,abc,100", TradeParseErrorCode.INVALID_NUMBER),
        ("1,AAPL,B,NaN,100", TradeParseErrorCode.INVALID_NUMBER),
        ("1,AAPL,B,150,", TradeParseErrorCode.INVALID_NUMBER),
        ("1,AAPL,B,0,100", TradeParseErrorCode.NON_POSITIVE_VALUE),
        ("1,AAPL,B,150,-3", TradeParseErrorCode.NON_POSITIVE_VALUE),
        ("1,AAPL,B,150,1.5", TradeParseErrorCode.FRACTIONAL_QUANTITY),
        ("1,AAPL,B,1e999999999,1", TradeParseErrorCode.INVALID_NUMBER),
        ("1,AAPL,B,1e-30,1", TradeParseErrorCode.INVALID_NUMBER),
        ("1,AAPL,B,100,1e30", TradeParseErrorCode.INVALID_NUMBER),
        ("1,AAPL,B,100,18446744073709551616", TradeParseErrorCode.INVALID_NUMBER),
    ],
)
def test_adapters_parse_trade_line_rejects_invalid_records(line: str, error_code: TradeParseErrorCode) -> None:
    """Reject malformed records with a machine-readable code.

    Args:
        line: Invalid CSV record.
        error_code: Expected parse error code.

    Returns:
        None: Assertions validate rejection codes.

    Raises:
        AssertionError: Raised when invalid records are accepted.
    """

    with pytest.raises(TradeParseError) as error_info:
        adapter_parse_trade_line(line, line_number=4)

    assert error_info.value.error_code == error_code.value
    assert error_info.value.line_number == 4
    assert "(line 4)" in str(error_info.value)


def test_adapters_parse_trade_lines_skips_comments_header_and_invalid_rows() -> None:
    """Skip non-trade lines and record invalid rows as issues in lenient mode.

    Returns:
        None: Assertions validate lenient parsing diagnostics.

    Raises:
        AssertionError: Raised when lenient parsing drops valid rows or loses issues.
    """

    lines = [
        "timestamp,symbol,side,price,quantity\n",
        "# comment\n",
        "\n",
        "1,AAPL,B,150.00,100\n",
        "2,AAPL,Q,151.00,100\n",
        "3,AAPL,S,151.00,100\r\n",
    ]

    read_result = adapter_parse_trade_lines(lines, source_name="memory")

    assert [trade.timestamp for trade in read_result.trades] == [1, 3]
    assert read_result.line_count == 6
    assert read_result.source_name == "memory"
    assert len(read_result.issues) == 1
    assert read_result.issues[0].line_number == 5
    assert read_result.issues[0].error_code == TradeParseErrorCode.INVALID_SIDE.value


def test_adapters_parse_trade_lines_strict_mode_stops_at_first_invalid_row() -> None:
    """Raise with line number in strict mode.

    Returns:
        None: Assertions validate strict parsing behavior.

    Raises:
        AssertionError: Raised when strict parsing skips invalid rows.
    """

    with pytest.raises(TradeParseError, match=r"\(line 2\)"):
        adapter_parse_trade_lines(["1,AAPL,B,150,100", "bad-row"], strict=True)

    with pytest.raises(TradeParseError) as error_info:
        adapter_parse_trade_lines(["# nothing here"], strict=True)
    assert error_info.value.error_code == TradeParseErrorCode.NO_TRADES.value

    assert adapter_parse_trade_lines([], strict=False).trades == ()


def test_adapters_read_trade_file_reads_and_reports_missing_files(tmp_path: Path) -> None:
    """Read an existing CSV file and raise a typed error for a missing one.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate file reading behavior.

    Raises:
        AssertionError: Raised when file reading deviates.
    """

    trade_file = tmp_path / "trades.csv"
    trade_file.write_text("1,AAPL,B,150,100\n2,AAPL,S,151,100\n", encoding="utf-8")

    read_result = adapter_read_trade_file(trade_file)
    source = CsvTradeFileSource(trade_file)

    assert len(read_result.trades) == 2
    assert read_result.source_name == str(trade_file)
    assert source.adapter_source_name() == str(trade_file)
    assert source.adapter_read_trades() == read_result

    with pytest.raises(TradeSourceNotFoundError, match="Could not open file"):
        adapter_read_trade_file(tmp_path / "missing.csv")


def test_adapters_read_trade_file_reports_undecodable_content(tmp_path: Path) -> None:
    trade_file = tmp_path / "binary.csv"
    trade_file.write_bytes(b"1,AAPL,B,150,100\n\xff\xfe\xfa\n")

    with pytest.raises(TradeParseError) as error_info:
        adapter_read_trade_file(trade_file, encoding="utf-8")

    assert error_info.value.error_code == TradeParseErrorCode.INVALID_ENCODING.value
