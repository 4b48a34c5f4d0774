"""Ledger layer package for lot matching and realized PnL engine boundaries."""

from .interfaces import PnlEnginePort
from .engine import PnlCalculationEngine, engine_create
from .matching import matching_process_trade, matching_realized_contribution, matching_round_pnl
from .position_ledger import PositionLedger

__all__ = [
	"PnlEnginePort",
	"PnlCalculationEngine",
	"PositionLedger",
	"engine_create",
	"matching_process_trade",
	"matching_realized_contribution",
	"matching_round_pnl",
]
