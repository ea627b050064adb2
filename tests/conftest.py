"""
errorchain test configuration and fixtures.

Provides a small exception hierarchy mirroring the usual split between
unchecked programming failures and checked environmental ones, plus a
registry tagging it accordingly.
"""

from typing import Any, Callable, List

import pytest

from errorchain import ChainSettings, ErrorKindRegistry, KindCategory, handle


GIVEN_VALUE = "string"


class RuntimeFailure(Exception):
    """Unchecked root: escapes chains unless claimed."""


class IllegalArgument(RuntimeFailure):
    """Unchecked descendant of RuntimeFailure."""


class IllegalState(RuntimeFailure):
    """Second unchecked descendant of RuntimeFailure."""


class IoFailure(Exception):
    """Checked root: absorbed by chains unless unsafe escape is allowed."""


class FileFailure(IoFailure):
    """Checked descendant of IoFailure."""


class TranslatedError(Exception):
    """Target type for mapping functions."""

    def __init__(self, original: BaseException = None):
        super().__init__(f"translated: {original!r}")
        self.original = original


def raising(error: BaseException) -> Callable[[], Any]:
    """Build an operation that raises the given error."""
    def operation():
        raise error
    return operation


def returning(value: Any) -> Callable[[], Any]:
    """Build an operation that returns the given value."""
    return lambda: value


class Recorder:
    """Handler that records every error it is called with."""

    def __init__(self):
        self.calls: List[BaseException] = []

    def __call__(self, error: BaseException) -> None:
        self.calls.append(error)

    @property
    def called(self) -> bool:
        return bool(self.calls)


def must_not_run(error: BaseException) -> None:
    pytest.fail(f"handler must not run, got {error!r}")


@pytest.fixture
def registry() -> ErrorKindRegistry:
    """Fresh registry with RuntimeFailure tagged unchecked."""
    reg = ErrorKindRegistry()
    reg.register(RuntimeFailure, KindCategory.UNCHECKED)
    return reg


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def chain(registry):
    """Factory starting a chain over an operation with the test registry."""
    def make(operation: Callable[[], Any], settings: ChainSettings = None):
        return handle(operation, settings=settings, registry=registry)
    return make
