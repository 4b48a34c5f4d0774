"""Typed interfaces for trade source adapter responsibilities."""

from dataclasses import dataclass
from typing import Protocol

from pnl_ledger.domain import Trade


@dataclass(frozen=True)
class TradeParseIssue:
    """One skipped trade record captured during lenient parsing.

    Attributes:
        line_number: 1-based source line number.
        error_code: Parse error code.
        message: Human-readable rejection reason.
    """

    line_number: int
    error_code: str
    message: str


@dataclass(frozen=True)
class TradeSourceReadResult:
    """Result contract for trade source read operations.

    Attributes:
        source_name: Source identifier used in diagnostics.
        trades: Accepted trades in source order.
        issues: Rejected records in source order.
        line_count: Number of source lines read.
    """

    source_name: str
    trades: tuple[Trade, ...]
    issues: tuple[TradeParseIssue, ...]
    line_count: int


class TradeSourcePort(Protocol):
    """Port definition for reading ordered trades from one input source."""

    def adapter_source_name(self) -> str:
        """Return source identifier for diagnostics.

        Returns:
            str: Human-readable source identifier.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    def adapter_read_trades(self) -> TradeSourceReadResult:
        """Read all trades from the source in original order.

        Returns:
            TradeSourceReadResult: Accepted trades plus skipped-record diagnostics.

        Raises:
            TradeSourceNotFoundError: Raised when the source cannot be opened.
            TradeParseError: Raised in strict mode for the first invalid record.
        """
