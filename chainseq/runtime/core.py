"""
chainseq.runtime.core - Core sequence algorithms

This module contains the algorithms that sit underneath Seq and MutableSeq.
They operate directly on a plain Python list (the backing store) so they can
be tested and reused independently of the sequence classes.

Categories:
- Argument checks: require_not_none, check_positive
- Index normalization: normalize_index, swap_items, check_range
- Combinations: iter_combination_indices, count_combinations
- Rotation: rotate_list_in_place, rotated_copy
- Multiset operations: count_occurrences, multiset_intersect, multiset_difference
- Compaction and scanning: compact_in_place, leading_run, distinct_items,
  find_index, find_sub_list
"""

import math
import operator
from typing import Any, Callable, Iterator, Optional

from chainseq.runtime.types import (
    EqFunc,
    InvalidArgumentError,
    KeyFunc,
    NullArgumentError,
    OutOfRangeError,
)

# =============================================================================
# Argument Checks
# =============================================================================


def require_not_none(value, name: str):
    """Return value, raising NullArgumentError if it is None."""
    if value is None:
        raise NullArgumentError(name)
    return value


def check_positive(n: int, name: str = "n") -> int:
    """Return n, raising InvalidArgumentError unless it is a positive integer."""
    n = operator.index(n)
    if n <= 0:
        raise InvalidArgumentError(f"{name} should be a positive number, got {n}")
    return n


# =============================================================================
# Index Normalization
# =============================================================================


def normalize_index(index: int, size: int) -> int:
    """
    Resolve a logical index to a physical position in a sequence of `size`.

    Negative indices count from the end: -1 is the last element. The valid
    range is [-size, size); anything else raises OutOfRangeError. Values that
    are not integers raise TypeError.
    """
    index = operator.index(index)
    if index >= size or index < -size:
        raise OutOfRangeError(
            f"Index {index}, size {size}, should be within [{-size}, {size})",
            index,
            size,
        )
    if index >= 0:
        return index
    return size + index


def swap_items(items: list, i: int, j: int) -> None:
    """Swap two elements of items, both indices normalized first."""
    size = len(items)
    i = normalize_index(i, size)
    j = normalize_index(j, size)
    items[i], items[j] = items[j], items[i]


def check_range(from_index: int, to_index: int, size: int) -> None:
    """Validate the half-open range [from_index, to_index) against size."""
    from_index = operator.index(from_index)
    to_index = operator.index(to_index)
    if from_index < 0:
        raise OutOfRangeError(f"fromIndex = {from_index}", from_index, size)
    if to_index > size:
        raise OutOfRangeError(f"toIndex = {to_index}, size {size}", to_index, size)
    if from_index > to_index:
        raise OutOfRangeError(
            f"fromIndex({from_index}) > toIndex({to_index})", from_index, size
        )


# =============================================================================
# Combinations
# =============================================================================


def count_combinations(size: int, n: int) -> int:
    """Number of n-element combinations of `size` elements (0 if n > size)."""
    if n > size:
        return 0
    return math.comb(size, n)


def iter_combination_indices(size: int, n: int) -> Iterator[list[int]]:
    """
    Yield every strictly increasing n-index vector over range(size) in
    lexicographic order (generator).

    The same list object is yielded every time and advanced in place, so
    consumers that keep a combination must copy it. n must be positive;
    callers validate that before creating the generator. Nothing is yielded
    when n > size.
    """
    if n > size:
        return
    comb = list(range(n))
    yield comb

    last_start = size - n
    while comb[0] < last_start:
        # Rightmost position that can still grow without hitting its ceiling
        k = n - 1
        while comb[k] == last_start + k:
            k -= 1
        comb[k] += 1
        # Everything to its right restarts at the smallest increasing values
        for j in range(k + 1, n):
            comb[j] = comb[j - 1] + 1
        yield comb


# =============================================================================
# Rotation
# =============================================================================


def rotate_list_in_place(items: list, distance: int) -> int:
    """
    Rotate items so the element at i ends up at (i + distance) % len(items).

    Uses cycle-leader rotation: the permutation splits into
    gcd(len, distance) cycles, each walked once while carrying a single
    displaced element. Performs exactly len(items) writes.

    Returns the number of cycles walked (0 when the rotation is a no-op).
    """
    size = len(items)
    if size == 0:
        return 0
    distance = operator.index(distance) % size
    if distance == 0:
        return 0

    cycles = 0
    moved = 0
    cycle_start = 0
    while moved != size:
        displaced = items[cycle_start]
        i = cycle_start
        while True:
            i += distance
            if i >= size:
                i -= size
            items[i], displaced = displaced, items[i]
            moved += 1
            if i == cycle_start:
                break
        cycle_start += 1
        cycles += 1
    return cycles


def rotated_copy(items: list, distance: int) -> list:
    """Return a new list equal to items rotated by distance."""
    size = len(items)
    if size == 0:
        return []
    distance = operator.index(distance) % size
    return [items[(size + i - distance) % size] for i in range(size)]


# =============================================================================
# Multiset Operations
# =============================================================================


def count_occurrences(items, key: Optional[KeyFunc] = None) -> dict[Any, int]:
    """Map each element (or key(element)) to its number of occurrences."""
    counts: dict[Any, int] = {}
    for x in items:
        k = x if key is None else key(x)
        counts[k] = counts.get(k, 0) + 1
    return counts


def _consume(counts: dict[Any, int], k) -> bool:
    """Take one occurrence of k from counts. Returns False if none are left."""
    count = counts.get(k)
    if count is None:
        return False
    if count == 1:
        del counts[k]
    else:
        counts[k] = count - 1
    return True


def multiset_intersect(items: list, other, key: Optional[KeyFunc] = None) -> list:
    """
    Elements of items that also occur in other, each kept at most as many
    times as it occurs in other, in items' order.
    """
    counts = count_occurrences(other, key)
    if not counts:
        return []
    result = []
    for x in items:
        if _consume(counts, x if key is None else key(x)):
            result.append(x)
    return result


def multiset_difference(items: list, other, key: Optional[KeyFunc] = None) -> list:
    """
    Elements of items left over once every occurrence in other has cancelled
    one matching element of items, in items' order.
    """
    counts = count_occurrences(other, key)
    if not counts:
        return list(items)
    result = []
    for x in items:
        if not _consume(counts, x if key is None else key(x)):
            result.append(x)
    return result


# =============================================================================
# Compaction and Scanning
# =============================================================================


def compact_in_place(items: list, keep: Callable[[Any, int], Any]) -> int:
    """
    Keep only the elements for which keep(element, index) is truthy,
    shifting survivors left in a single stable pass.

    keep sees every element once, in order, with its original index. If it
    raises, the list is left holding the survivors so far followed by the
    unvisited tail. Returns the number of removed elements.
    """
    size = len(items)
    write = 0
    read = 0
    try:
        while read < size:
            element = items[read]
            if keep(element, read):
                items[write] = element
                write += 1
            read += 1
    finally:
        del items[write:read]
    return size - len(items)


def leading_run(items: list, predicate: Callable[[Any, int], Any]) -> int:
    """Length of the longest prefix whose elements satisfy predicate(e, i)."""
    idx = 0
    size = len(items)
    while idx < size and predicate(items[idx], idx):
        idx += 1
    return idx


def distinct_items(items, key: Optional[KeyFunc] = None) -> list:
    """Remove duplicates, keeping first occurrences in their original order."""
    seen = set()
    result = []
    for x in items:
        k = x if key is None else key(x)
        if k not in seen:
            seen.add(k)
            result.append(x)
    return result


def find_index(items: list, value, eq: Optional[EqFunc] = None, reverse=False) -> int:
    """Index of the first (or last) element equal to value, or -1."""
    indices = range(len(items) - 1, -1, -1) if reverse else range(len(items))
    for i in indices:
        if (items[i] == value) if eq is None else eq(items[i], value):
            return i
    return -1


def find_sub_list(items: list, sub: list, reverse=False) -> int:
    """
    Index where sub first (or last) occurs as a contiguous run in items,
    or -1. The empty run matches at 0, or at len(items) when reverse.
    """
    size = len(items)
    sub_size = len(sub)
    if sub_size > size:
        return -1
    starts = range(size - sub_size, -1, -1) if reverse else range(size - sub_size + 1)
    for start in starts:
        if items[start : start + sub_size] == sub:
            return start
    return -1
