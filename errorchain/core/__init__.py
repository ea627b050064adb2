"""Core module for errorchain.

This package provides the handling chain together with the outcome model,
chain settings and error kind classification it relies on.
"""

from .chain import HandlingChain, handle
from .models.outcome import Outcome, OutcomeStatus, success_outcome, failure_outcome
from .models.settings import ChainSettings

from .errors import (
    BaseError,
    ErrorContext,
    ValidationError,
    ConfigurationError,
    KindCategory,
    ErrorKindRegistry,
    kind_registry,
    checked,
    unchecked,
)

__all__ = [
    # Chain
    "HandlingChain",
    "handle",

    # Outcome
    "Outcome",
    "OutcomeStatus",
    "success_outcome",
    "failure_outcome",

    # Settings
    "ChainSettings",

    # Errors
    "BaseError",
    "ErrorContext",
    "ValidationError",
    "ConfigurationError",

    # Kind classification
    "KindCategory",
    "ErrorKindRegistry",
    "kind_registry",
    "checked",
    "unchecked",
]
