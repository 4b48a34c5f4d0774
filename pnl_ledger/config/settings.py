"""Typed runtime settings with dotenv support and startup validation."""

import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pnl_ledger.domain import (
    DEFAULT_DECIMAL_PRECISION,
    MAX_DECIMAL_PRECISION,
    AccountingMethod,
    domain_parse_accounting_method,
)


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for PnL calculation, CLI and API runtime.

    Environment variable names map directly to field names in uppercase.
    Example: `accounting_method` reads from `ACCOUNTING_METHOD`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        accounting_method: Default lot-closing method (`fifo` or `lifo`).
        decimal_precision: Decimal places applied to realized PnL.
        strict_parsing: Whether the first invalid trade record aborts parsing.
        input_encoding: Text encoding used to read trade files.
        log_level: Root logging level name.
        api_max_trades: Maximum number of trades accepted per API request.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    accounting_method: AccountingMethod = Field(default=AccountingMethod.FIFO)
    decimal_precision: int = Field(default=DEFAULT_DECIMAL_PRECISION, ge=0, le=MAX_DECIMAL_PRECISION)
    strict_parsing: bool = Field(default=False)
    input_encoding: str = Field(default="utf-8", min_length=1)
    log_level: str = Field(default="INFO")
    api_max_trades: int = Field(default=100_000, ge=1)

    @field_validator("accounting_method", mode="before")
    @classmethod
    def _validate_accounting_method(cls, value: object) -> AccountingMethod:
        return domain_parse_accounting_method(value)

    @field_validator("input_encoding")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized_value), int):
            raise ValueError(f"unsupported log_level={value}")
        return normalized_value


def config_load_settings(**overrides: object) -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Args:
        **overrides: Explicit field values taking precedence over environment.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings(**overrides)
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
