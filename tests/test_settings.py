"""
Unit tests for chain settings.
"""

import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from errorchain import ChainSettings, ConfigurationError


class TestChainSettings:
    """Test settings defaults, validation and merging."""

    def test_defaults(self):
        settings = ChainSettings()
        assert settings.allow_unsafe_escape is False
        assert settings.warn_on_duplicate_claim is True
        assert settings.duplicate_claim_log_level == "WARNING"
        assert settings.duplicate_claim_level == logging.WARNING
        assert settings.log_captured_errors is True

    def test_log_level_normalized(self):
        assert ChainSettings(duplicate_claim_log_level="error").duplicate_claim_level == logging.ERROR

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            ChainSettings(duplicate_claim_log_level="LOUD")

    def test_from_dict(self):
        settings = ChainSettings.from_dict({"allow_unsafe_escape": True})
        assert settings.allow_unsafe_escape is True

    def test_from_dict_invalid(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ChainSettings.from_dict({"duplicate_claim_log_level": "LOUD"})
        assert exc_info.value.context.get("config_key") == "duplicate_claim_log_level"

    def test_with_overrides(self):
        settings = ChainSettings().with_overrides(allow_unsafe_escape=True)
        assert settings.allow_unsafe_escape is True

    def test_with_invalid_override(self):
        with pytest.raises(ConfigurationError):
            ChainSettings().with_overrides(duplicate_claim_log_level="LOUD")

    def test_with_overrides_keeps_other_fields(self):
        base = ChainSettings(duplicate_claim_log_level="ERROR")
        settings = base.with_overrides(warn_on_duplicate_claim=False)
        assert settings.duplicate_claim_log_level == "ERROR"
        assert settings.warn_on_duplicate_claim is False
        assert base.warn_on_duplicate_claim is True

    def test_with_unknown_override(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ChainSettings().with_overrides(allow_unsafe_escap=True)
        assert exc_info.value.context.get("config_key") == "allow_unsafe_escap"

    def test_str(self):
        assert "unsafe_escape=False" in str(ChainSettings())
