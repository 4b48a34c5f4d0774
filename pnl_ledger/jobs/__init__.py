"""Job layer package for calculation workflow orchestration."""

from .interfaces import PnlJobExecutionResult, PnlJobPort
from .calculation import (
	PARSE_ERROR_CODE,
	SOURCE_NOT_FOUND_CODE,
	PnlCalculationJob,
	PnlCalculationJobConfig,
)

__all__ = [
	"PnlJobExecutionResult",
	"PnlJobPort",
	"PnlCalculationJob",
	"PnlCalculationJobConfig",
	"PARSE_ERROR_CODE",
	"SOURCE_NOT_FOUND_CODE",
]
