"""errorchain.

Fluent, per-error-kind handling for fallible operations. An operation is run
once and its outcome is routed through a chain of handlers that rethrow,
translate or observe specific error kinds.

Key features:
1. Exact-kind and parent-kind matching on captured exceptions
2. Claim tracking so each error kind is handled at most once
3. Unchecked kinds escape instead of being silently absorbed
4. Structured configuration with pydantic settings
"""

from .core.chain import HandlingChain, handle
from .core.models.outcome import Outcome, OutcomeStatus
from .core.models.settings import ChainSettings
from .core.errors import (
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

__version__ = "0.1.0"

__all__ = [
    "handle",
    "HandlingChain",
    "Outcome",
    "OutcomeStatus",
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
