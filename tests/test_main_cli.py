"""Regression tests for CLI argument handling, output and exit codes."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from pnl_ledger import main as main_module
from pnl_ledger.main import ExitCode, main


@pytest.fixture(autouse=True)
def _isolate_cli_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for environment_name in ("ACCOUNTING_METHOD", "DECIMAL_PRECISION", "STRICT_PARSING", "LOG_LEVEL"):
        monkeypatch.delenv(environment_name, raising=False)
    monkeypatch.setattr(main_module, "bootstrap_configure_logging", lambda log_level: None)


def _write_trades(tmp_path: Path, content: str) -> Path:
    trade_file = tmp_path / "trades.csv"
    trade_file.write_text(content, encoding="utf-8")
    return trade_file


def test_main_calculate_prints_csv_results(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Print header and results for FIFO and LIFO runs.

    Args:
        tmp_path: Pytest temporary directory fixture.
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate CLI output and exit code.

    Raises:
        AssertionError: Raised when CLI output deviates.
    """

    trade_file = _write_trades(tmp_path, "0,AAPL,B,150,100\n1,AAPL,B,151,100\n2,AAPL,S,152,100\n")

    assert main(["calculate", str(trade_file), "fifo"]) == ExitCode.SUCCESS
    assert capsys.readouterr().out == "timestamp,symbol,pnl\n2,AAPL,200.00\n"

    assert main(["calculate", str(trade_file), "LIFO", "--precision", "3"]) == ExitCode.SUCCESS
    assert capsys.readouterr().out == "timestamp,symbol,pnl\n2,AAPL,100.000\n"


def test_main_calculate_maps_failures_to_exit_codes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Return distinct exit codes for method, file and parse failures.

    Args:
        tmp_path: Pytest temporary directory fixture.
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate exit-code mapping.

    Raises:
        AssertionError: Raised when failures map to wrong exit codes.
    """

    trade_file = _write_trades(tmp_path, "0,AAPL,B,150,100\nnot-a-trade\n")

    assert main(["calculate", str(trade_file), "average"]) == ExitCode.INVALID_ACCOUNTING
    assert "Invalid accounting method 'average'" in capsys.readouterr().err

    assert main(["calculate", str(tmp_path / "missing.csv"), "fifo"]) == ExitCode.FILE_NOT_FOUND
    assert "Could not open file" in capsys.readouterr().err

    assert main(["calculate", str(trade_file), "fifo", "--strict"]) == ExitCode.PARSE_ERROR
    assert "(line 2)" in capsys.readouterr().err

    assert main(["calculate", str(trade_file), "fifo", "--precision", "99"]) == ExitCode.INVALID_ARGS

    with pytest.raises(SystemExit) as exit_info:
        main(["calculate", str(trade_file)])
    assert exit_info.value.code == ExitCode.INVALID_ARGS


def test_main_calculate_empty_file_prints_header_and_warning(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    trade_file = _write_trades(tmp_path, "# no trades today\n")

    assert main(["calculate", str(trade_file), "fifo"]) == ExitCode.SUCCESS

    captured = capsys.readouterr()
    assert captured.out == "timestamp,symbol,pnl\n"
    assert "No trades found" in captured.err


def test_main_calculate_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("5,AAPL,S,151,100\n6,AAPL,B,150,100\n"))

    assert main(["calculate", "-", "fifo"]) == ExitCode.SUCCESS
    assert capsys.readouterr().out == "timestamp,symbol,pnl\n6,AAPL,100.00\n"


def test_main_calculate_handles_out_of_range_numbers(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Skip out-of-range values in lenient mode and fail with exit 3 in strict mode.

    Args:
        tmp_path: Pytest temporary directory fixture.
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate range handling at the CLI boundary.

    Raises:
        AssertionError: Raised when out-of-range records escape parsing.
    """

    trade_file = _write_trades(tmp_path, "1,AAPL,B,1e999999999,1\n2,AAPL,S,1,1\n3,AAPL,B,100,1e30\n")

    assert main(["calculate", str(trade_file), "fifo"]) == ExitCode.SUCCESS
    assert capsys.readouterr().out == "timestamp,symbol,pnl\n"

    assert main(["calculate", str(trade_file), "fifo", "--strict"]) == ExitCode.PARSE_ERROR
    assert "Price out of range" in capsys.readouterr().err
