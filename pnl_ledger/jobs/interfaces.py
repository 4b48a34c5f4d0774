"""Typed interfaces for job-layer calculation workflows."""

from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from pnl_ledger.adapters import TradeParseIssue, TradeSourcePort
from pnl_ledger.domain import AccountingMethod, PnLResult, Trade


@dataclass(frozen=True)
class PnlJobExecutionResult:
    """Result contract for one realized PnL calculation run.

    Attributes:
        job_name: Job identifier.
        status: Final execution state (`success` or `failed`).
        accounting_method: Method applied for this run.
        source_name: Trade source identifier.
        trade_count: Number of trades processed.
        results: Emitted PnL events in emission order.
        issues: Skipped trade records from lenient parsing.
        stage_timeline: Structured stage events captured during execution.
        error_code: Failure code when status is `failed`.
        error_message: Failure message when status is `failed`.
    """

    job_name: str
    status: str
    accounting_method: AccountingMethod
    source_name: str
    trade_count: int
    results: tuple[PnLResult, ...]
    issues: tuple[TradeParseIssue, ...]
    stage_timeline: tuple[dict[str, Any], ...]
    error_code: str | None = None
    error_message: str | None = None


class PnlJobPort(Protocol):
    """Port definition for running realized PnL calculations."""

    def job_execute_trades(self, trades: Iterable[Trade], source_name: str = "<trades>") -> PnlJobExecutionResult:
        """Run one calculation over already validated trades.

        Args:
            trades: Ordered trades.
            source_name: Source identifier for diagnostics.

        Returns:
            PnlJobExecutionResult: Final execution payload.

        Raises:
            RuntimeError: Raised when execution fails unexpectedly.
        """

    def job_execute_source(self, trade_source: TradeSourcePort) -> PnlJobExecutionResult:
        """Read trades from a source and run one calculation.

        Args:
            trade_source: Trade source adapter.

        Returns:
            PnlJobExecutionResult: Final execution payload.

        Raises:
            RuntimeError: Raised when execution fails unexpectedly.
        """
