"""Domain models used across application layer boundaries."""

from .constants import (
	DEFAULT_DECIMAL_PRECISION,
	MAX_DECIMAL_PRECISION,
	MAX_PRICE_EXPONENT,
	MAX_SYMBOL_LENGTH,
	MAX_TRADE_QUANTITY,
	MIN_PRICE_EXPONENT,
	PNL_DECIMAL_CONTEXT,
	PNL_EPSILON,
	RESULT_CSV_HEADER,
	TRADE_CSV_FIELD_COUNT,
)
from .models import (
	AccountingMethod,
	Lot,
	OpenLotSnapshot,
	PnLResult,
	Trade,
	TradeSide,
	domain_parse_accounting_method,
	domain_price_in_range,
)
from .timeline import domain_build_stage_event

__all__ = [
	"AccountingMethod",
	"DEFAULT_DECIMAL_PRECISION",
	"Lot",
	"MAX_DECIMAL_PRECISION",
	"MAX_PRICE_EXPONENT",
	"MAX_SYMBOL_LENGTH",
	"MAX_TRADE_QUANTITY",
	"MIN_PRICE_EXPONENT",
	"OpenLotSnapshot",
	"PNL_DECIMAL_CONTEXT",
	"PNL_EPSILON",
	"PnLResult",
	"RESULT_CSV_HEADER",
	"TRADE_CSV_FIELD_COUNT",
	"Trade",
	"TradeSide",
	"domain_build_stage_event",
	"domain_parse_accounting_method",
	"domain_price_in_range",
]
