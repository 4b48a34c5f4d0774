"""Adapter layer package for trade input and result output boundaries."""

from .interfaces import TradeParseIssue, TradeSourcePort, TradeSourceReadResult
from .result_csv import adapter_format_pnl, adapter_format_results_csv, adapter_write_results_csv
from .trade_csv import (
	CsvTradeFileSource,
	adapter_parse_trade_line,
	adapter_parse_trade_lines,
	adapter_read_trade_file,
)
from .trade_source_errors import (
	TradeParseError,
	TradeParseErrorCode,
	TradeSourceError,
	TradeSourceNotFoundError,
)

__all__ = [
	"CsvTradeFileSource",
	"TradeParseError",
	"TradeParseErrorCode",
	"TradeParseIssue",
	"TradeSourceError",
	"TradeSourceNotFoundError",
	"TradeSourcePort",
	"TradeSourceReadResult",
	"adapter_format_pnl",
	"adapter_format_results_csv",
	"adapter_parse_trade_line",
	"adapter_parse_trade_lines",
	"adapter_read_trade_file",
	"adapter_write_results_csv",
]
