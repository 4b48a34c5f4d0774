"""Regression tests for CSV result rendering."""

from __future__ import annotations

from decimal import Decimal
import io

from pnl_ledger.adapters import adapter_format_results_csv, adapter_write_results_csv
from pnl_ledger.domain import PnLResult


def test_adapters_format_results_csv_renders_header_and_fixed_precision_rows() -> None:
    """Render header plus one row per result with fixed decimal places.

    Returns:
        None: Assertions validate CSV text output.

    Raises:
        AssertionError: Raised when output format deviates.
    """

    results = [
        PnLResult(timestamp=1000000001, symbol="AAPL", pnl=Decimal("100.00")),
        PnLResult(timestamp=1000000003, symbol="GOOGL", pnl=Decimal("-0.5")),
    ]

    assert adapter_format_results_csv(results) == (
        "timestamp,symbol,pnl\n"
        "1000000001,AAPL,100.00\n"
        "1000000003,GOOGL,-0.50\n"
    )
    assert adapter_format_results_csv(results[:1], decimal_precision=4) == (
        "timestamp,symbol,pnl\n1000000001,AAPL,100.0000\n"
    )


def test_adapters_write_results_csv_writes_header_for_empty_results() -> None:
    stream = io.StringIO()

    row_count = adapter_write_results_csv([], stream)

    assert row_count == 0
    assert stream.getvalue() == "timestamp,symbol,pnl\n"
