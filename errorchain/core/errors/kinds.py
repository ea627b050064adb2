"""Error kind registry.

An error kind is the class of a captured exception. Kinds relate through the
Python class hierarchy, and every kind belongs to a category that decides
whether an unclaimed failure of that kind escapes a chain on its own
(``UNCHECKED``) or is absorbed unless unsafe escape is allowed (``CHECKED``).

Categories are resolved along the kind's MRO: the nearest class carrying an
explicit tag wins. Untagged kinds deriving from ``Exception`` are checked;
everything else (``KeyboardInterrupt``, ``SystemExit``, ``GeneratorExit`` and
friends) is unchecked. The default ``kind_registry`` additionally tags the
builtin programming-error families (``RuntimeError``, ``TypeError``,
``ValueError``, ``LookupError`` and so on) as unchecked, so bugs surface
instead of being absorbed; ``OSError`` and user-defined exceptions stay
checked.
"""

import enum
import logging
from types import MappingProxyType
from typing import Dict, Mapping, Type, TypeVar

from .base import ValidationError

logger = logging.getLogger(__name__)

K = TypeVar('K', bound=Type[BaseException])


class KindCategory(str, enum.Enum):
    """Escape category of an error kind."""

    CHECKED = "CHECKED"
    UNCHECKED = "UNCHECKED"

    def escapes_by_default(self) -> bool:
        """Check if unclaimed failures of this category escape a chain."""
        return self is KindCategory.UNCHECKED

    def __str__(self) -> str:
        return self.value


def validate_kind(kind, argument: str = "kind") -> Type[BaseException]:
    """Ensure ``kind`` is an exception class.

    Args:
        kind: Candidate error kind
        argument: Argument name reported on failure

    Returns:
        The kind, unchanged

    Raises:
        ValidationError: If kind is not a subclass of BaseException
    """
    if not (isinstance(kind, type) and issubclass(kind, BaseException)):
        raise ValidationError(
            f"Expected an exception class, got {kind!r}",
            argument=argument,
            value=kind
        )
    return kind


class ErrorKindRegistry:
    """Registry of explicit kind category tags.

    This class provides:
    1. Category tagging for exception classes
    2. MRO-based category resolution
    3. The strict-descendant relation used by parent matching
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._categories: Dict[Type[BaseException], KindCategory] = {}

    def register(self, kind: Type[BaseException], category: KindCategory) -> None:
        """Tag a kind with a category.

        The tag applies to the kind and every descendant that has no nearer
        tag of its own.

        Args:
            kind: Exception class to tag
            category: Category to attach

        Raises:
            ValidationError: If kind is not an exception class
        """
        validate_kind(kind)
        category = KindCategory(category)
        previous = self._categories.get(kind)
        self._categories[kind] = category
        if previous is not None and previous != category:
            logger.debug(f"Re-tagged {kind.__name__} from {previous} to {category}")
        else:
            logger.debug(f"Tagged {kind.__name__} as {category}")

    def unregister(self, kind: Type[BaseException]) -> None:
        """Remove an explicit tag, if any."""
        self._categories.pop(kind, None)

    def clear(self) -> None:
        """Remove all explicit tags."""
        self._categories.clear()

    def registered(self) -> Mapping[Type[BaseException], KindCategory]:
        """Get a read-only view of the explicit tags."""
        return MappingProxyType(self._categories)

    def category_of(self, kind: Type[BaseException]) -> KindCategory:
        """Resolve the category of a kind.

        Args:
            kind: Exception class to classify

        Returns:
            Category of the nearest tagged class in the MRO, or the
            default category when no class in the MRO is tagged
        """
        validate_kind(kind)
        for klass in kind.__mro__:
            category = self._categories.get(klass)
            if category is not None:
                return category
        if issubclass(kind, Exception):
            return KindCategory.CHECKED
        return KindCategory.UNCHECKED

    def is_unchecked(self, kind: Type[BaseException]) -> bool:
        """Check if a kind escapes a chain when left unclaimed."""
        return self.category_of(kind).escapes_by_default()

    @staticmethod
    def is_strict_descendant(child: Type[BaseException], parent: Type[BaseException]) -> bool:
        """Check if ``child`` is a proper subclass of ``parent``."""
        return child is not parent and issubclass(child, parent)

    def __contains__(self, kind: object) -> bool:
        return kind in self._categories

    def __len__(self) -> int:
        return len(self._categories)

    def __str__(self) -> str:
        tags = ", ".join(f"{k.__name__}={v}" for k, v in self._categories.items())
        return f"ErrorKindRegistry({tags})"


# Builtin programming-error families. OSError and user-defined exceptions
# stay checked unless tagged otherwise.
BUILTIN_UNCHECKED_KINDS = (
    RuntimeError,
    TypeError,
    ValueError,
    AttributeError,
    LookupError,
    NameError,
    AssertionError,
    ArithmeticError,
)


def register_builtin_defaults(registry: ErrorKindRegistry) -> ErrorKindRegistry:
    """Tag the builtin programming-error families as unchecked.

    Args:
        registry: Registry to populate

    Returns:
        The same registry, for chaining
    """
    for kind in BUILTIN_UNCHECKED_KINDS:
        registry.register(kind, KindCategory.UNCHECKED)
    return registry


# Default registry used by chains created without an explicit one
kind_registry = register_builtin_defaults(ErrorKindRegistry())


def unchecked(kind: K) -> K:
    """Class decorator tagging an exception class as unchecked.

    Unclaimed failures of the class and its descendants escape every
    non-matching terminal chain operation.

    Example:
        @unchecked
        class InvariantViolation(Exception):
            pass
    """
    kind_registry.register(kind, KindCategory.UNCHECKED)
    return kind


def checked(kind: K) -> K:
    """Class decorator tagging an exception class as checked."""
    kind_registry.register(kind, KindCategory.CHECKED)
    return kind
