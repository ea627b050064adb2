"""Outcome model for a single evaluation of a wrapped operation.

An outcome is either a success carrying the operation's value or a failure
carrying the exception it raised. It is produced once, when a chain is
created, and never changes afterwards.
"""

import enum
from typing import Any, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, model_validator

T = TypeVar('T')


class OutcomeStatus(str, enum.Enum):
    """Enumeration of possible outcome statuses."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"

    def __str__(self) -> str:
        return self.value


class Outcome(BaseModel, Generic[T]):
    """Captured result of running a fallible operation.

    This class provides:
    1. The success value or the captured exception
    2. Access to the failure's error kind
    3. Immutability once captured
    """

    status: OutcomeStatus
    value: Optional[T] = None
    error: Optional[BaseException] = None

    class Config:
        """Pydantic configuration."""
        arbitrary_types_allowed = True
        frozen = True

    @model_validator(mode="after")
    def check_consistency(self) -> 'Outcome[T]':
        """Ensure the error slot matches the status."""
        if self.status == OutcomeStatus.FAILURE and self.error is None:
            raise ValueError("Failure outcome requires an error")
        if self.status == OutcomeStatus.SUCCESS and self.error is not None:
            raise ValueError("Success outcome cannot carry an error")
        return self

    @property
    def kind(self) -> Optional[Type[BaseException]]:
        """Exact error kind of a failure, None on success."""
        if self.error is None:
            return None
        return type(self.error)

    def is_success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    def is_failure(self) -> bool:
        return self.status == OutcomeStatus.FAILURE

    def __str__(self) -> str:
        if self.is_failure():
            return f"Outcome(status={self.status}, error={self.error!r})"
        return f"Outcome(status={self.status}, value={self.value!r})"


def success_outcome(value: Any) -> Outcome:
    """Create a success outcome from a value.

    Args:
        value: Value returned by the operation

    Returns:
        Outcome holding the value
    """
    return Outcome(status=OutcomeStatus.SUCCESS, value=value)


def failure_outcome(error: BaseException) -> Outcome:
    """Create a failure outcome from a captured exception.

    Args:
        error: Exception raised by the operation

    Returns:
        Outcome holding the error
    """
    return Outcome(status=OutcomeStatus.FAILURE, error=error)
