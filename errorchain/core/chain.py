"""Fluent handling chain for fallible operations.

A chain runs an operation once, captures its outcome, and lets the caller
attach handlers per error kind before resolving to the operation's value or
an error:

    value = (
        handle(lambda: load_config(path))
        .invoke_for(log_missing, FileNotFoundError)
        .rethrow_mapped_for(to_config_error, PermissionError, IsADirectoryError)
        .resolve_rethrowing_unclaimed(ConfigurationError)
    )

Non-terminal operations return the chain and raise only when they match.
Terminal operations return the success value, or the value slot (None) when
a failure was absorbed, or raise.

Each kind named by a chain step is recorded in a claim set. Parent matches
skip claimed kinds, the ``*_unclaimed`` terminals catch whatever was never
claimed, and the escape check re-raises unclaimed unchecked failures (or any
unclaimed failure once unsafe escape is allowed) instead of absorbing them.
"""

import logging
from typing import Any, Callable, FrozenSet, Generic, Optional, Set, Type, TypeVar

from .errors.base import ValidationError
from .errors.kinds import ErrorKindRegistry, kind_registry, validate_kind
from .models.outcome import Outcome, failure_outcome, success_outcome
from .models.settings import ChainSettings

logger = logging.getLogger(__name__)

T = TypeVar('T')

ErrorKind = Type[BaseException]
ErrorMapper = Callable[[BaseException], BaseException]
ErrorConsumer = Callable[[BaseException], None]


class HandlingChain(Generic[T]):
    """Single-use handling chain around one captured outcome.

    This class provides:
    1. Exact-kind and parent-kind matching against the captured failure
    2. Claim bookkeeping so each kind is handled at most once
    3. An escape check so unexpected unchecked failures are not swallowed

    Instances are not thread-safe and are meant to be consumed by exactly
    one terminal operation.
    """

    def __init__(
        self,
        operation: Callable[[], T],
        settings: Optional[ChainSettings] = None,
        registry: Optional[ErrorKindRegistry] = None
    ):
        """Run the operation and capture its outcome.

        Args:
            operation: Zero-argument callable to evaluate
            settings: Optional chain settings
            registry: Optional kind registry, defaults to the global one

        Raises:
            ValidationError: If operation is not callable
        """
        if not callable(operation):
            raise ValidationError(
                f"Operation must be callable, got {type(operation).__name__}",
                argument="operation",
                value=operation
            )

        self._settings = settings or ChainSettings()
        self._registry = registry if registry is not None else kind_registry
        self._claimed: Set[ErrorKind] = set()
        self._unsafe_escape = self._settings.allow_unsafe_escape
        self._outcome: Outcome = self._evaluate(operation)

    def _evaluate(self, operation: Callable[[], T]) -> Outcome:
        try:
            return success_outcome(operation())
        except BaseException as e:
            if self._settings.log_captured_errors:
                # Only the kind is logged; str() of a captured error may itself raise
                logger.debug("Captured %s from %s", type(e).__name__, _describe(operation))
            return failure_outcome(e)

    @property
    def outcome(self) -> Outcome:
        """Captured outcome of the wrapped operation."""
        return self._outcome

    @property
    def claimed_kinds(self) -> FrozenSet[ErrorKind]:
        """Kinds claimed so far by this chain."""
        return frozenset(self._claimed)

    @property
    def unsafe_escape(self) -> bool:
        """Whether unclaimed checked failures escape terminal operations."""
        return self._unsafe_escape

    @property
    def settings(self) -> ChainSettings:
        return self._settings

    # Non-terminal operations

    def rethrow_for(self, kind: ErrorKind) -> 'HandlingChain[T]':
        """Re-raise the original error if it is exactly of the given kind.

        Args:
            kind: Error kind to propagate

        Returns:
            This chain for further chaining

        Raises:
            BaseException: The captured error, unchanged, on match
        """
        if self._match_exact((kind,)):
            raise self._outcome.error
        return self

    def rethrow_mapped_for(self, map_fn: ErrorMapper, *kinds: ErrorKind) -> 'HandlingChain[T]':
        """Raise ``map_fn(error)`` if the error is exactly one of the kinds.

        An empty kind list never matches.

        Args:
            map_fn: Function mapping the captured error to the error to raise
            *kinds: Candidate error kinds

        Returns:
            This chain for further chaining

        Raises:
            BaseException: The mapped error, on match
        """
        if self._match_exact(kinds):
            self._raise_mapped(map_fn)
        return self

    def rethrow_mapped_for_parent(self, map_fn: ErrorMapper, parent_kind: ErrorKind) -> 'HandlingChain[T]':
        """Raise ``map_fn(error)`` if the error strictly descends from a parent kind.

        Args:
            map_fn: Function mapping the captured error to the error to raise
            parent_kind: Ancestor kind; the kind itself does not match

        Returns:
            This chain for further chaining

        Raises:
            BaseException: The mapped error, on match
        """
        if self._match_parent(parent_kind):
            self._raise_mapped(map_fn)
        return self

    def invoke_for(self, handler_fn: ErrorConsumer, *kinds: ErrorKind) -> 'HandlingChain[T]':
        """Call ``handler_fn(error)`` if the error is exactly one of the kinds.

        An empty kind list matches any failure.

        Args:
            handler_fn: Callback receiving the captured error
            *kinds: Candidate error kinds

        Returns:
            This chain for further chaining
        """
        if self._match_exact(kinds, any_if_empty=True):
            self._invoke(handler_fn)
        return self

    def invoke_for_parent(self, handler_fn: ErrorConsumer, parent_kind: ErrorKind) -> 'HandlingChain[T]':
        """Call ``handler_fn(error)`` if the error strictly descends from a parent kind.

        Args:
            handler_fn: Callback receiving the captured error
            parent_kind: Ancestor kind; the kind itself does not match

        Returns:
            This chain for further chaining
        """
        if self._match_parent(parent_kind):
            self._invoke(handler_fn)
        return self

    def allow_unsafe_escape(self) -> 'HandlingChain[T]':
        """Let unclaimed checked failures escape terminal operations."""
        self._unsafe_escape = True
        return self

    # Terminal operations

    def resolve_rethrowing(self, map_fn: ErrorMapper, *kinds: ErrorKind) -> Optional[T]:
        """Resolve the chain, raising ``map_fn(error)`` for the given kinds.

        An empty kind list matches any failure. Without a match the escape
        check runs and the success value is returned.

        Args:
            map_fn: Function mapping the captured error to the error to raise
            *kinds: Candidate error kinds

        Returns:
            The operation's value, or None if a failure was absorbed

        Raises:
            BaseException: The mapped error on match, or the original error
                when it escapes
        """
        if self._match_exact(kinds, any_if_empty=True):
            self._raise_mapped(map_fn)
        self._escape_unclaimed()
        return self._outcome.value

    def resolve_rethrowing_parent(self, map_fn: ErrorMapper, parent_kind: ErrorKind) -> Optional[T]:
        """Resolve the chain, raising ``map_fn(error)`` for descendants of a parent kind.

        Args:
            map_fn: Function mapping the captured error to the error to raise
            parent_kind: Ancestor kind; the kind itself does not match

        Returns:
            The operation's value, or None if a failure was absorbed

        Raises:
            BaseException: The mapped error on match, or the original error
                when it escapes
        """
        if self._match_parent(parent_kind):
            self._raise_mapped(map_fn)
        self._escape_unclaimed()
        return self._outcome.value

    def resolve_rethrowing_unclaimed(self, map_fn: ErrorMapper) -> Optional[T]:
        """Resolve the chain, raising ``map_fn(error)`` for any unclaimed failure.

        Args:
            map_fn: Function mapping the captured error to the error to raise

        Returns:
            The operation's value, or None if the failure was already claimed

        Raises:
            BaseException: The mapped error for an unclaimed failure
        """
        if self._is_unclaimed_failure():
            self._raise_mapped(map_fn)
        return self._outcome.value

    def resolve_invoking(self, handler_fn: ErrorConsumer, *kinds: ErrorKind) -> Optional[T]:
        """Resolve the chain, calling ``handler_fn(error)`` for the given kinds.

        An empty kind list matches any failure. Without a match the escape
        check runs.

        Args:
            handler_fn: Callback receiving the captured error
            *kinds: Candidate error kinds

        Returns:
            The operation's value, or None on failure

        Raises:
            BaseException: The original error when it escapes
        """
        if self._match_exact(kinds, any_if_empty=True):
            self._invoke(handler_fn)
        else:
            self._escape_unclaimed()
        return self._outcome.value

    def resolve_invoking_parent(self, handler_fn: ErrorConsumer, parent_kind: ErrorKind) -> Optional[T]:
        """Resolve the chain, calling ``handler_fn(error)`` for descendants of a parent kind.

        Args:
            handler_fn: Callback receiving the captured error
            parent_kind: Ancestor kind; the kind itself does not match

        Returns:
            The operation's value, or None on failure

        Raises:
            BaseException: The original error when it escapes
        """
        if self._match_parent(parent_kind):
            self._invoke(handler_fn)
        else:
            self._escape_unclaimed()
        return self._outcome.value

    def resolve_invoking_unclaimed(self, handler_fn: ErrorConsumer) -> Optional[T]:
        """Resolve the chain, calling ``handler_fn(error)`` for any unclaimed failure.

        Args:
            handler_fn: Callback receiving the captured error

        Returns:
            The operation's value, or None on failure
        """
        if self._is_unclaimed_failure():
            self._invoke(handler_fn)
        return self._outcome.value

    # Matching and claim bookkeeping

    def _match_exact(self, kinds, any_if_empty: bool = False) -> bool:
        """Claim the candidate kinds and test the failure against them."""
        for kind in kinds:
            validate_kind(kind, argument="kinds")
        self._claim(kinds)

        if not self._outcome.is_failure():
            return False
        if not kinds:
            return any_if_empty
        matched = self._outcome.kind in kinds
        if matched:
            logger.debug(f"{self._outcome.kind.__name__} matched exactly")
        return matched

    def _match_parent(self, parent_kind: ErrorKind) -> bool:
        """Test the failure against a parent kind, claiming it on match."""
        validate_kind(parent_kind, argument="parent_kind")
        kind = self._outcome.kind
        if kind is None or kind in self._claimed:
            return False
        if not self._registry.is_strict_descendant(kind, parent_kind):
            return False

        self._claimed.add(kind)
        logger.debug(f"{kind.__name__} matched as descendant of {parent_kind.__name__}")
        return True

    def _claim(self, kinds) -> None:
        for kind in kinds:
            if kind in self._claimed and self._settings.warn_on_duplicate_claim:
                logger.log(
                    self._settings.duplicate_claim_level,
                    f"You handled error kind {_qualified_name(kind)} more than once!"
                )
            self._claimed.add(kind)

    def _is_unclaimed_failure(self) -> bool:
        return self._outcome.is_failure() and self._outcome.kind not in self._claimed

    def _escape_unclaimed(self) -> None:
        """Raise the original error if it must not be absorbed."""
        if not self._is_unclaimed_failure():
            return

        kind = self._outcome.kind
        if not (self._unsafe_escape or self._registry.is_unchecked(kind)):
            logger.debug(f"Absorbed unclaimed {kind.__name__}")
            return

        self._claimed.add(kind)
        reason = "unsafe escape" if self._unsafe_escape else "unchecked kind"
        logger.debug(f"Escaping unclaimed {kind.__name__} ({reason})")
        _escape(self._outcome.error)

    # Handler application

    def _raise_mapped(self, map_fn: ErrorMapper) -> None:
        error = self._outcome.error
        mapped = map_fn(error)
        if mapped is error:
            raise error
        if not isinstance(mapped, BaseException):
            raise ValidationError(
                f"Error mapper must return an exception, got {type(mapped).__name__}",
                argument="map_fn",
                value=mapped,
                cause=error
            ) from error
        raise mapped from error

    def _invoke(self, handler_fn: ErrorConsumer) -> None:
        handler_fn(self._outcome.error)

    def __repr__(self) -> str:
        claimed = sorted(k.__name__ for k in self._claimed)
        return f"HandlingChain(outcome={self._outcome}, claimed={claimed}, unsafe_escape={self._unsafe_escape})"


def _escape(error: BaseException) -> None:
    """Propagate a captured error as-is, without mapping or wrapping."""
    raise error


def _qualified_name(kind: ErrorKind) -> str:
    module = kind.__module__
    if module == "builtins":
        return kind.__qualname__
    return f"{module}.{kind.__qualname__}"


def _describe(operation: Callable) -> str:
    return getattr(operation, "__qualname__", None) or type(operation).__qualname__


def handle(
    operation: Callable[[], T],
    settings: Optional[ChainSettings] = None,
    registry: Optional[ErrorKindRegistry] = None,
    **overrides: Any
) -> HandlingChain[T]:
    """Run an operation and start a handling chain over its outcome.

    The operation is called exactly once, immediately. Whatever it raises is
    captured; this function never raises on its behalf.

    Arguments are validated before the operation runs. A non-callable
    operation or an invalid settings override is rejected with an error from
    this function itself; such errors are argument validation, not captured
    failures, and the operation is never called.

    Args:
        operation: Zero-argument callable to evaluate
        settings: Optional chain settings
        registry: Optional kind registry, defaults to the global one
        **overrides: Settings fields overriding ``settings`` for this chain,
            e.g. ``allow_unsafe_escape=True``

    Returns:
        A chain whose outcome is already resolved

    Raises:
        ValidationError: If operation is not callable
        ConfigurationError: If an override is not a valid settings value
    """
    if overrides:
        settings = (settings or ChainSettings()).with_overrides(**overrides)
    return HandlingChain(operation, settings=settings, registry=registry)
