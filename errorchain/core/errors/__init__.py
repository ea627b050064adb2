"""Error handling primitives for errorchain.

This package provides the library's own structured error types and the
error kind registry used to classify captured failures.
"""

from .base import (
    BaseError,
    ErrorContext,
    ValidationError,
    ConfigurationError,
)
from .kinds import (
    KindCategory,
    ErrorKindRegistry,
    kind_registry,
    checked,
    unchecked,
    validate_kind,
    register_builtin_defaults,
    BUILTIN_UNCHECKED_KINDS,
)

__all__ = [
    "BaseError",
    "ErrorContext",
    "ValidationError",
    "ConfigurationError",
    "KindCategory",
    "ErrorKindRegistry",
    "kind_registry",
    "checked",
    "unchecked",
    "validate_kind",
    "register_builtin_defaults",
    "BUILTIN_UNCHECKED_KINDS",
]
