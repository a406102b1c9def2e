"""
chainseq.runtime - The chainseq sequence engine

This package contains the sequence types and the algorithms behind them.

Submodules:
- types: Error taxonomy and capability aliases (OutOfRangeError, KeyFunc, etc.)
- core: Algorithms over a plain list backing store (index normalization,
  combinations, cycle-leader rotation, multiset intersect/difference)
- seq: The Seq and MutableSeq classes

The classes never reach into core's internals beyond its public functions,
and core has no dependency on the classes.
"""

from typing import Any

# Re-export core functions
from chainseq.runtime.core import (
    check_positive,
    check_range,
    compact_in_place,
    count_combinations,
    count_occurrences,
    iter_combination_indices,
    multiset_difference,
    multiset_intersect,
    normalize_index,
    require_not_none,
    rotate_list_in_place,
    rotated_copy,
)

# Re-export sequence types
from chainseq.runtime.seq import (
    MutableSeq,
    Seq,
    new_mutable_seq,
    new_seq,
)

# Re-export types
from chainseq.runtime.types import (
    _MISSING,
    Comparator,
    EqFunc,
    InvalidArgumentError,
    KeyFunc,
    NullArgumentError,
    OutOfRangeError,
    SeqError,
)


def is_seq(obj: Any) -> bool:
    """Check if an object is a chainseq sequence of either flavor."""
    return isinstance(obj, Seq)


def is_mutable_seq(obj: Any) -> bool:
    return isinstance(obj, MutableSeq)


__all__ = [
    # Types
    "SeqError",
    "OutOfRangeError",
    "InvalidArgumentError",
    "NullArgumentError",
    "KeyFunc",
    "EqFunc",
    "Comparator",
    "_MISSING",
    # Sequences
    "Seq",
    "MutableSeq",
    "new_seq",
    "new_mutable_seq",
    "is_seq",
    "is_mutable_seq",
    # Algorithms
    "check_positive",
    "check_range",
    "compact_in_place",
    "count_combinations",
    "count_occurrences",
    "iter_combination_indices",
    "multiset_difference",
    "multiset_intersect",
    "normalize_index",
    "require_not_none",
    "rotate_list_in_place",
    "rotated_copy",
]
