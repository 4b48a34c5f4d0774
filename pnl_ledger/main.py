"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either computes realized PnL
for one CSV trade file or launches the FastAPI service.
"""

from __future__ import annotations

import argparse
from enum import IntEnum
import sys
from typing import NoReturn, Sequence

import uvicorn

from pnl_ledger.adapters import adapter_write_results_csv
from pnl_ledger.bootstrap import (
    bootstrap_configure_logging,
    bootstrap_create_application,
    bootstrap_create_calculation_job,
)
from pnl_ledger.config import AppSettings, SettingsLoadError, config_load_settings
from pnl_ledger.domain import domain_parse_accounting_method
from pnl_ledger.jobs import SOURCE_NOT_FOUND_CODE

STDIN_SOURCE = "-"


class ExitCode(IntEnum):
    """Process exit codes for the CLI surface."""

    SUCCESS = 0
    INVALID_ARGS = 1
    FILE_NOT_FOUND = 2
    PARSE_ERROR = 3
    INVALID_ACCOUNTING = 4


class _MainArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with `INVALID_ARGS` on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(int(ExitCode.INVALID_ARGS), f"{self.prog}: error: {message}\n")


def main_build_argument_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Parser with `calculate` and `api` commands.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    argument_parser = _MainArgumentParser(
        prog="pnl-ledger",
        description="Realized PnL calculator with FIFO/LIFO lot matching",
    )
    subparsers = argument_parser.add_subparsers(dest="command", required=True, parser_class=_MainArgumentParser)

    calculate_parser = subparsers.add_parser(
        "calculate",
        help="Compute realized PnL for a CSV trade file and print CSV results",
        epilog="Example: pnl-ledger calculate trades.csv fifo",
    )
    calculate_parser.add_argument(
        "input_file",
        type=str,
        help="Path to CSV file with `timestamp,symbol,side,price,quantity` rows, or `-` for stdin",
    )
    calculate_parser.add_argument(
        "accounting_method",
        type=str,
        help="Accounting method: `fifo` or `lifo`",
    )
    calculate_parser.add_argument(
        "--strict",
        dest="strict",
        action="store_true",
        default=None,
        help="Fail on the first invalid trade record instead of skipping it",
    )
    calculate_parser.add_argument(
        "--precision",
        dest="decimal_precision",
        type=int,
        help="Decimal places for realized PnL (default from settings, normally 2)",
    )

    subparsers.add_parser("api", help="Start the HTTP API server")
    return argument_parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run selected runtime command with validated startup configuration.

    Args:
        argv: Optional argument list; defaults to process arguments.

    Returns:
        int: Process exit code.

    Raises:
        SystemExit: Raised by argument parsing on usage errors.
    """

    argument_parser = main_build_argument_parser()
    parsed_arguments = argument_parser.parse_args(argv)

    setting_overrides: dict[str, object] = {}
    if getattr(parsed_arguments, "decimal_precision", None) is not None:
        setting_overrides["decimal_precision"] = parsed_arguments.decimal_precision

    try:
        settings = config_load_settings(**setting_overrides)
    except SettingsLoadError as error:
        print(f"Error: {error}", file=sys.stderr)
        return int(ExitCode.INVALID_ARGS)

    bootstrap_configure_logging(settings.log_level)

    if parsed_arguments.command == "api":
        uvicorn.run(
            bootstrap_create_application(settings),
            host=settings.application_host,
            port=settings.application_port,
        )
        return int(ExitCode.SUCCESS)

    return main_run_calculation(
        input_file=parsed_arguments.input_file,
        accounting_method=parsed_arguments.accounting_method,
        strict=parsed_arguments.strict,
        settings=settings,
        argument_parser=argument_parser,
    )


def main_run_calculation(
    input_file: str,
    accounting_method: str,
    strict: bool | None,
    settings: AppSettings,
    argument_parser: argparse.ArgumentParser,
) -> int:
    """Compute realized PnL for one trade source and print CSV to stdout.

    Args:
        input_file: CSV path or `-` for stdin.
        accounting_method: Method text from the command line.
        strict: Optional strict-parsing override.
        settings: Validated runtime settings.
        argument_parser: Parser used to print usage on invalid method.

    Returns:
        int: Process exit code.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    try:
        method = domain_parse_accounting_method(accounting_method)
    except ValueError:
        print(
            f"Error: Invalid accounting method '{accounting_method}'. Must be 'fifo' or 'lifo'.",
            file=sys.stderr,
        )
        argument_parser.print_usage(sys.stderr)
        return int(ExitCode.INVALID_ACCOUNTING)

    job = bootstrap_create_calculation_job(settings, accounting_method=method, strict_parsing=strict)
    if input_file == STDIN_SOURCE:
        execution_result = job.job_execute_lines(sys.stdin, source_name="<stdin>")
    else:
        execution_result = job.job_execute_file(input_file)

    if execution_result.status != "success":
        if execution_result.error_code == SOURCE_NOT_FOUND_CODE:
            print(f"Error: {execution_result.error_message}", file=sys.stderr)
            return int(ExitCode.FILE_NOT_FOUND)
        print(f"Error parsing file: {execution_result.error_message}", file=sys.stderr)
        return int(ExitCode.PARSE_ERROR)

    if execution_result.trade_count == 0:
        print("Warning: No trades found in file", file=sys.stderr)

    adapter_write_results_csv(execution_result.results, sys.stdout, decimal_precision=settings.decimal_precision)
    return int(ExitCode.SUCCESS)


if __name__ == "__main__":
    raise SystemExit(main())
