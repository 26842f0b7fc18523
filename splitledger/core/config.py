"""
Configuration management for Split Ledger.
Loads environment variables and provides centralized config access.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class SettlementOrder(str, Enum):
    """Order in which settlements are netted against the debt matrix."""

    AS_GIVEN = "as_given"
    OLDEST_FIRST = "oldest_first"
    NEWEST_FIRST = "newest_first"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # =============================================================================
    # APPLICATION SETTINGS
    # =============================================================================
    app_name: str = "Split Ledger"
    version: str = "1.0.0"
    environment: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = (v or "").strip().upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL '{v}' is not a valid log level")
        return level

    # =============================================================================
    # LEDGER SETTINGS
    # =============================================================================
    settlement_order: SettlementOrder = Field(default=SettlementOrder.AS_GIVEN)
    # Allowed drift between an expense total and its payments, per payment
    payment_tolerance: Decimal = Field(default=Decimal("0.01"), ge=0)

    # =============================================================================
    # COMPUTED PROPERTIES
    # =============================================================================
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    # =============================================================================
    # PYDANTIC SETTINGS CONFIG
    # =============================================================================
    model_config = SettingsConfigDict(
        env_prefix="SPLITLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
    )


# =============================================================================
# GLOBAL SETTINGS INSTANCE
# =============================================================================
def get_settings() -> Settings:
    """
    Get application settings.

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    try:
        return Settings()
    except PydanticValidationError as e:
        fields = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
        raise ConfigurationError(
            f"Invalid configuration for: {', '.join(fields)}",
            error_code="INVALID_CONFIGURATION",
            details={"fields": fields}
        ) from e


# Global settings instance
settings = get_settings()


# =============================================================================
# CONFIGURATION UTILITIES
# =============================================================================
def validate_configuration() -> dict:
    """
    Validate all configuration settings and return status report.

    Returns:
        dict: Configuration validation report
    """
    try:
        config = get_settings()
    except ConfigurationError as e:
        return {
            "valid": False,
            "errors": [e.message],
            "warnings": [],
            "ledger": {}
        }

    status = {
        "valid": True,
        "errors": [],
        "warnings": [],
        "ledger": {
            "settlement_order": config.settlement_order.value,
            "payment_tolerance": str(config.payment_tolerance),
        }
    }

    if config.is_production and config.debug:
        status["warnings"].append("DEBUG mode enabled in production")

    if config.settlement_order is SettlementOrder.AS_GIVEN:
        status["warnings"].append(
            "Settlements are netted in caller order; results can depend on storage iteration order"
        )

    return status
