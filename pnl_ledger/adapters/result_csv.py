"""CSV result sink adapter for realized PnL events."""

from __future__ import annotations

import csv
import io
from typing import Iterable, TextIO

from pnl_ledger.domain import DEFAULT_DECIMAL_PRECISION, RESULT_CSV_HEADER, PnLResult


def adapter_write_results_csv(
    results: Iterable[PnLResult],
    stream: TextIO,
    decimal_precision: int = DEFAULT_DECIMAL_PRECISION,
) -> int:
    """Write `timestamp,symbol,pnl` rows with fixed-precision PnL.

    Args:
        results: PnL events in emission order.
        stream: Writable text stream.
        decimal_precision: Decimal places rendered for PnL.

    Returns:
        int: Number of result rows written (header excluded).

    Raises:
        ValueError: Raised when decimal precision is negative.
    """

    if decimal_precision < 0:
        raise ValueError(f"decimal_precision must not be negative, got {decimal_precision}")

    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(RESULT_CSV_HEADER)
    row_count = 0
    for result in results:
        writer.writerow((result.timestamp, result.symbol, adapter_format_pnl(result, decimal_precision)))
        row_count += 1
    return row_count


def adapter_format_results_csv(
    results: Iterable[PnLResult],
    decimal_precision: int = DEFAULT_DECIMAL_PRECISION,
) -> str:
    """Render results as CSV text including the header row."""

    buffer = io.StringIO()
    adapter_write_results_csv(results, buffer, decimal_precision=decimal_precision)
    return buffer.getvalue()


def adapter_format_pnl(result: PnLResult, decimal_precision: int = DEFAULT_DECIMAL_PRECISION) -> str:
    return f"{result.pnl:.{decimal_precision}f}"
