"""Chain settings model for configuring handling behavior.

This module provides a ChainSettings class for configuring how a handling
chain starts out and how it reports diagnostics.
"""

import logging
from typing import Any, Dict

from pydantic import BaseModel, ValidationError as PydanticValidationError, field_validator

from ..errors.base import ConfigurationError


class ChainSettings(BaseModel):
    """Settings for configuring handling chains.

    This class provides:
    1. The initial unsafe-escape state of new chains
    2. Duplicate-claim diagnostic options
    3. Capture logging options
    """

    # Escape settings
    allow_unsafe_escape: bool = False

    # Diagnostic settings
    warn_on_duplicate_claim: bool = True
    duplicate_claim_log_level: str = "WARNING"

    # Logging settings
    log_captured_errors: bool = True

    @field_validator("duplicate_claim_log_level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @property
    def duplicate_claim_level(self) -> int:
        """Numeric logging level for duplicate-claim diagnostics."""
        return logging.getLevelName(self.duplicate_claim_log_level)

    @classmethod
    def from_dict(cls, settings_dict: Dict[str, Any]) -> 'ChainSettings':
        """Create settings from dictionary.

        Args:
            settings_dict: Dictionary of settings

        Returns:
            ChainSettings instance

        Raises:
            ConfigurationError: If the dictionary holds invalid values
        """
        try:
            return cls(**settings_dict)
        except PydanticValidationError as e:
            first = e.errors()[0] if e.errors() else {}
            config_key = ".".join(str(part) for part in first.get("loc", ())) or None
            raise ConfigurationError(
                f"Invalid chain settings: {first.get('msg', str(e))}",
                config_key=config_key,
                cause=e
            ) from e

    def with_overrides(self, **kwargs: Any) -> 'ChainSettings':
        """Create new settings with overrides.

        Args:
            **kwargs: Settings fields to override

        Returns:
            New settings instance with overrides

        Raises:
            ConfigurationError: If a key is not a settings field or a value
                is invalid
        """
        unknown = sorted(set(kwargs) - set(type(self).model_fields))
        if unknown:
            raise ConfigurationError(
                f"Unknown chain settings: {', '.join(unknown)}",
                config_key=unknown[0]
            )
        settings_dict = self.model_dump()
        settings_dict.update(kwargs)
        return self.from_dict(settings_dict)

    def __str__(self) -> str:
        return (
            f"ChainSettings(unsafe_escape={self.allow_unsafe_escape}, "
            f"duplicate_warnings={self.warn_on_duplicate_claim})"
        )
