"""Base error classes with structured error context.

This module provides the errors raised by errorchain itself when a chain or
the kind registry is misused. Errors raised by wrapped operations are never
converted into these types.
"""

import logging
import traceback
from datetime import datetime
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ErrorContext:
    """Immutable error context with structured information.

    This class provides:
    1. Structured context information for errors
    2. Clean serialization for logging and reporting
    """

    def __init__(self, context_data: Dict[str, Any] = None):
        """Initialize error context.

        Args:
            context_data: Optional initial context data
        """
        self._data = context_data or {}
        self._timestamp = datetime.now()

    @classmethod
    def create(cls, **kwargs) -> 'ErrorContext':
        """Create a new error context with the given data."""
        return cls(kwargs)

    def add(self, **kwargs) -> 'ErrorContext':
        """Create a new context with additional data.

        Args:
            **kwargs: Additional context data

        Returns:
            New ErrorContext instance with combined data
        """
        new_data = dict(self._data)
        new_data.update(kwargs)
        return ErrorContext(new_data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value from the context data."""
        return self._data.get(key, default)

    @property
    def data(self) -> Dict[str, Any]:
        """Get the context data dictionary."""
        return dict(self._data)

    @property
    def timestamp(self) -> datetime:
        """Get the context creation timestamp."""
        return self._timestamp

    def __str__(self) -> str:
        return f"ErrorContext({self._data})"


class BaseError(Exception):
    """Base class for all errorchain errors.

    This class provides:
    1. Structured error information with context
    2. Clean serialization for logging and reporting
    3. Cause tracking for nested errors
    """

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        cause: Optional[BaseException] = None
    ):
        """Initialize error.

        Args:
            message: Error message
            context: Optional error context
            cause: Optional cause exception
        """
        self.message = message
        self.context = context or ErrorContext()
        self.cause = cause
        self.timestamp = datetime.now()

        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary.

        Returns:
            Dictionary representation of error
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.data,
            "cause": str(self.cause) if self.cause else None,
            "traceback": self._format_cause_traceback()
        }

    def _format_cause_traceback(self) -> Optional[str]:
        if self.cause is None:
            return None
        return "".join(traceback.format_exception(
            type(self.cause),
            self.cause,
            self.cause.__traceback__
        ))

    def __str__(self) -> str:
        cause_str = f" (caused by: {self.cause!r})" if self.cause else ""
        return f"{self.__class__.__name__}: {self.message}{cause_str}"


class ValidationError(BaseError):
    """Error raised when a chain operation receives an invalid argument.

    Carries the offending argument name and value in the error context.
    """

    def __init__(
        self,
        message: str,
        argument: Optional[str] = None,
        value: Any = None,
        context: Optional[ErrorContext] = None,
        cause: Optional[BaseException] = None
    ):
        """Initialize validation error.

        Args:
            message: Error message
            argument: Optional name of the invalid argument
            value: Optional invalid value
            context: Optional error context
            cause: Optional cause exception
        """
        self.argument = argument
        self.value = value

        if argument:
            context = (context or ErrorContext()).add(argument=argument, value=repr(value))

        super().__init__(message, context, cause)


class ConfigurationError(BaseError):
    """Error raised when chain settings are invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        cause: Optional[BaseException] = None
    ):
        """Initialize configuration error.

        Args:
            message: Error message
            config_key: Optional configuration key
            context: Optional error context
            cause: Optional cause exception
        """
        if context and config_key:
            context = context.add(config_key=config_key)
        elif config_key:
            context = ErrorContext.create(config_key=config_key)

        super().__init__(message, context, cause)
