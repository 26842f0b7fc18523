"""
Tests for configuration management and validation.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from splitledger.core.config import Settings, SettlementOrder, get_settings, validate_configuration
from splitledger.core.exceptions import ConfigurationError


class TestSettings:
    """Test Settings model and validation."""

    def test_defaults(self, monkeypatch):
        """Test that settings load with sensible defaults."""
        monkeypatch.delenv("SPLITLEDGER_SETTLEMENT_ORDER", raising=False)
        monkeypatch.delenv("SPLITLEDGER_ENVIRONMENT", raising=False)
        settings = Settings(_env_file=None)

        assert settings.app_name == "Split Ledger"
        assert settings.settlement_order is SettlementOrder.AS_GIVEN
        assert settings.payment_tolerance == Decimal("0.01")
        assert settings.is_development is True

    def test_env_overrides(self, monkeypatch):
        """Test that prefixed environment variables are picked up."""
        monkeypatch.setenv("SPLITLEDGER_SETTLEMENT_ORDER", "oldest_first")
        monkeypatch.setenv("SPLITLEDGER_LOG_LEVEL", "debug")
        monkeypatch.setenv("SPLITLEDGER_ENVIRONMENT", "production")
        settings = Settings(_env_file=None)

        assert settings.settlement_order is SettlementOrder.OLDEST_FIRST
        assert settings.log_level == "DEBUG"
        assert settings.is_production is True

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        error_fields = [error["loc"][0] for error in exc_info.value.errors()]
        assert "log_level" in error_fields

    def test_invalid_settlement_order(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_SETTLEMENT_ORDER", "random")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_negative_tolerance(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_PAYMENT_TOLERANCE", "-0.01")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_raises_configuration_error(self, monkeypatch):
        """Test invalid environment values surface as a ConfigurationError."""
        monkeypatch.setenv("SPLITLEDGER_SETTLEMENT_ORDER", "random")
        with pytest.raises(ConfigurationError) as exc_info:
            get_settings()

        assert exc_info.value.error_code == "INVALID_CONFIGURATION"
        assert exc_info.value.details["fields"] == ["settlement_order"]
        assert isinstance(exc_info.value.__cause__, ValidationError)


class TestValidateConfiguration:
    """Test the configuration status report."""

    def test_valid_report(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_SETTLEMENT_ORDER", "newest_first")
        status = validate_configuration()

        assert status["valid"] is True
        assert status["ledger"]["settlement_order"] == "newest_first"
        assert status["errors"] == []

    def test_as_given_warning(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_SETTLEMENT_ORDER", "as_given")
        status = validate_configuration()
        assert any("caller order" in w for w in status["warnings"])

    def test_debug_in_production_warning(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_ENVIRONMENT", "production")
        monkeypatch.setenv("SPLITLEDGER_DEBUG", "true")
        status = validate_configuration()
        assert "DEBUG mode enabled in production" in status["warnings"]

    def test_invalid_report(self, monkeypatch):
        monkeypatch.setenv("SPLITLEDGER_LOG_LEVEL", "LOUD")
        status = validate_configuration()

        assert status["valid"] is False
        assert any("log_level" in e for e in status["errors"])
