"""
chainseq.runtime.types - Core type definitions for chainseq

This module contains the fundamental types shared by the algorithms and the
sequence classes:
- SeqError: Base class of every error raised by the library
- OutOfRangeError: Positional index or sub-range outside the valid bounds
- InvalidArgumentError: Non-positive counts and conflicting options
- NullArgumentError: A required function or sequence argument is None
- Capability aliases: KeyFunc, EqFunc, Comparator

The error classes also derive from the matching built-in exception so that
callers catching IndexError, ValueError or TypeError keep working.
"""

from typing import Any, Callable

# Sentinel for missing values
_MISSING = object()

# Maps an element to the hashable value used for equality + hashing
KeyFunc = Callable[[Any], Any]

# Equality capability used by linear searches
EqFunc = Callable[[Any, Any], bool]

# Ordering capability: negative, zero or positive like cmp(a, b)
Comparator = Callable[[Any, Any], int]


class SeqError(Exception):
    """Base class for errors raised by chainseq."""

    pass


class OutOfRangeError(SeqError, IndexError):
    """Raised when an index or a sub-range falls outside a sequence."""

    def __init__(self, message: str, index: Any = None, size: int = 0):
        super().__init__(message)
        self.index = index
        self.size = size


class InvalidArgumentError(SeqError, ValueError):
    """Raised when a count is not positive or options conflict."""

    pass


class NullArgumentError(SeqError, TypeError):
    """Raised when a required argument is None."""

    def __init__(self, name: str):
        super().__init__(f"{name} must not be None")
        self.name = name
