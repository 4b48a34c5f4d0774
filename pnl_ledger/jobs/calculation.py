"""Job-layer realized PnL calculation with stage timeline diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Iterable

from pnl_ledger.adapters import (
    CsvTradeFileSource,
    TradeParseError,
    TradeParseIssue,
    TradeSourceNotFoundError,
    TradeSourcePort,
    adapter_parse_trade_lines,
)
from pnl_ledger.domain import (
    DEFAULT_DECIMAL_PRECISION,
    MAX_DECIMAL_PRECISION,
    AccountingMethod,
    Trade,
    domain_build_stage_event,
    domain_parse_accounting_method,
)
from pnl_ledger.ledger import engine_create

from .interfaces import PnlJobExecutionResult, PnlJobPort

logger = logging.getLogger(__name__)

SOURCE_NOT_FOUND_CODE = "SOURCE_NOT_FOUND"
PARSE_ERROR_CODE = "PARSE_ERROR"


@dataclass(frozen=True)
class PnlCalculationJobConfig:
    """Configuration values for calculation job execution.

    Attributes:
        accounting_method: Lot-closing method applied to every run.
        decimal_precision: Decimal places applied to realized PnL.
        strict_parsing: Whether the first invalid trade record fails the run.
        input_encoding: Text encoding used for file sources.
    """

    accounting_method: AccountingMethod = AccountingMethod.FIFO
    decimal_precision: int = DEFAULT_DECIMAL_PRECISION
    strict_parsing: bool = False
    input_encoding: str = "utf-8"


class PnlCalculationJob(PnlJobPort):
    """Concrete calculation job running each request on a fresh engine."""

    _JOB_NAME = "pnl_calculation"

    def __init__(self, config: PnlCalculationJobConfig):
        """Initialize calculation job.

        Args:
            config: Calculation configuration.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when config values are invalid.
        """

        if config is None:
            raise ValueError("config must not be None")
        if not config.input_encoding.strip():
            raise ValueError("config.input_encoding must not be blank")
        if isinstance(config.decimal_precision, bool) or not isinstance(config.decimal_precision, int):
            raise ValueError(f"config.decimal_precision must be an integer, got {config.decimal_precision!r}")
        if not 0 <= config.decimal_precision <= MAX_DECIMAL_PRECISION:
            raise ValueError(
                f"config.decimal_precision must be between 0 and {MAX_DECIMAL_PRECISION}, "
                f"got {config.decimal_precision}"
            )

        self._config = PnlCalculationJobConfig(
            accounting_method=domain_parse_accounting_method(config.accounting_method),
            decimal_precision=config.decimal_precision,
            strict_parsing=config.strict_parsing,
            input_encoding=config.input_encoding,
        )

    def job_config(self) -> PnlCalculationJobConfig:
        return self._config

    def job_execute_trades(self, trades: Iterable[Trade], source_name: str = "<trades>") -> PnlJobExecutionResult:
        """Run one calculation over already validated trades.

        Args:
            trades: Ordered trades.
            source_name: Source identifier for diagnostics.

        Returns:
            PnlJobExecutionResult: Final execution payload.

        Raises:
            ValueError: Raised when a trade violates the trade contract.
        """

        return self._job_run_engine(tuple(trades), source_name=source_name, issues=(), stage_timeline=[])

    def job_execute_lines(self, lines: Iterable[str], source_name: str = "<lines>") -> PnlJobExecutionResult:
        """Parse CSV lines and run one calculation.

        Args:
            lines: CSV trade lines in source order.
            source_name: Source identifier for diagnostics.

        Returns:
            PnlJobExecutionResult: Final execution payload; `failed` on strict parse errors.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        stage_timeline: list[dict[str, Any]] = [domain_build_stage_event("parse", "started", {"source": source_name})]
        try:
            read_result = adapter_parse_trade_lines(lines, strict=self._config.strict_parsing, source_name=source_name)
        except TradeParseError as error:
            return self._job_build_failed_result(
                source_name, error.error_code or PARSE_ERROR_CODE, str(error), stage_timeline, stage="parse"
            )

        stage_timeline.append(
            domain_build_stage_event(
                "parse",
                "completed",
                {"trades": len(read_result.trades), "skipped": len(read_result.issues)},
            )
        )
        return self._job_run_engine(read_result.trades, source_name, read_result.issues, stage_timeline)

    def job_execute_source(self, trade_source: TradeSourcePort) -> PnlJobExecutionResult:
        """Read trades from a source adapter and run one calculation.

        Args:
            trade_source: Trade source adapter.

        Returns:
            PnlJobExecutionResult: Final execution payload; `failed` on source or strict parse errors.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        source_name = trade_source.adapter_source_name()
        stage_timeline: list[dict[str, Any]] = [domain_build_stage_event("read", "started", {"source": source_name})]
        try:
            read_result = trade_source.adapter_read_trades()
        except TradeSourceNotFoundError as error:
            return self._job_build_failed_result(source_name, SOURCE_NOT_FOUND_CODE, str(error), stage_timeline)
        except TradeParseError as error:
            return self._job_build_failed_result(
                source_name, error.error_code or PARSE_ERROR_CODE, str(error), stage_timeline
            )

        stage_timeline.append(
            domain_build_stage_event(
                "read",
                "completed",
                {
                    "lines": read_result.line_count,
                    "trades": len(read_result.trades),
                    "skipped": len(read_result.issues),
                },
            )
        )
        return self._job_run_engine(read_result.trades, source_name, read_result.issues, stage_timeline)

    def job_execute_file(self, path: str) -> PnlJobExecutionResult:
        """Read one CSV trade file and run one calculation."""

        return self.job_execute_source(
            CsvTradeFileSource(path, strict=self._config.strict_parsing, encoding=self._config.input_encoding)
        )

    def _job_run_engine(
        self,
        trades: tuple[Trade, ...],
        source_name: str,
        issues: tuple[TradeParseIssue, ...],
        stage_timeline: list[dict[str, Any]],
    ) -> PnlJobExecutionResult:
        engine = engine_create(self._config.accounting_method, self._config.decimal_precision)
        stage_timeline.append(
            domain_build_stage_event("match", "started", {"accounting_method": self._config.accounting_method.value})
        )
        engine.engine_process(trades)
        results = engine.engine_results()
        stage_timeline.append(domain_build_stage_event("match", "completed", {"results": len(results)}))

        logger.info(
            "pnl calculation completed source=%s method=%s trades=%s results=%s skipped=%s",
            source_name,
            self._config.accounting_method.value,
            len(trades),
            len(results),
            len(issues),
        )
        return PnlJobExecutionResult(
            job_name=self._JOB_NAME,
            status="success",
            accounting_method=self._config.accounting_method,
            source_name=source_name,
            trade_count=len(trades),
            results=results,
            issues=issues,
            stage_timeline=tuple(stage_timeline),
        )

    def _job_build_failed_result(
        self,
        source_name: str,
        error_code: str,
        error_message: str,
        stage_timeline: list[dict[str, Any]],
        stage: str = "read",
    ) -> PnlJobExecutionResult:
        logger.error("pnl calculation failed source=%s code=%s message=%s", source_name, error_code, error_message)
        stage_timeline.append(domain_build_stage_event(stage, "failed", {"error_code": error_code}))
        return PnlJobExecutionResult(
            job_name=self._JOB_NAME,
            status="failed",
            accounting_method=self._config.accounting_method,
            source_name=source_name,
            trade_count=0,
            results=(),
            issues=(),
            stage_timeline=tuple(stage_timeline),
            error_code=error_code,
            error_message=error_message,
        )
