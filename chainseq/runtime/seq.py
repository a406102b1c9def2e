"""
chainseq.runtime.seq - Ordered sequence types

This module defines the two sequence flavors:
- Seq: every operation returns a new, independently owned sequence and
  leaves the receiver and its arguments untouched
- MutableSeq: a Seq that also offers *_in_place operations, which mutate
  the receiver and return it so calls can be chained

Both own a plain list as their backing store. Construction always copies the
input, so a sequence never shares its list with a caller.

Element capabilities are passed explicitly where they are needed:
- key: maps an element to the hashable value used for equality + hashing
  (intersect, difference, distinct)
- eq: equality test used by linear searches (contains, index_of)
- comparator / key / reverse: ordering used by sort
"""

import functools
import logging
from typing import Any, Callable, Iterable, Iterator, Optional

from chainseq.config import DEFAULT_REPR_LIMIT, get_config, get_random
from chainseq.runtime import core
from chainseq.runtime.types import (
    _MISSING,
    Comparator,
    EqFunc,
    InvalidArgumentError,
    KeyFunc,
)

logger = logging.getLogger(__name__)


def _unindexed(func: Callable[[Any], Any]) -> Callable[[Any, int], Any]:
    """Adapt a one-argument callable to the (element, index) calling form."""
    return lambda element, _index: func(element)


def _negate(func: Callable[[Any, int], Any]) -> Callable[[Any, int], bool]:
    return lambda element, index: not func(element, index)


def _sort_key(key: Optional[KeyFunc], comparator: Optional[Comparator]):
    """Pick the sort key from either a key function or a comparator."""
    if comparator is not None:
        if key is not None:
            raise InvalidArgumentError("sort takes either key or comparator, not both")
        return functools.cmp_to_key(comparator)
    return key


class Seq:
    """
    An ordered sequence with a functional API.

    Indices may be negative and count from the end (-1 is the last element);
    the valid range is [-len, len). Operations never mutate the receiver and
    always return a new sequence of the receiver's own class.

    Two sequences are equal when they have the same length and equal
    elements at every position, regardless of flavor. The hash is derived
    from the elements, so equal sequences hash identically.
    """

    __slots__ = ("_items",)

    def __init__(self, iterable: Iterable = ()):
        core.require_not_none(iterable, "iterable")
        self._items: list = list(iterable)

    @classmethod
    def _wrap(cls, items: list):
        """Adopt items as the backing store of a new sequence, without copying."""
        result = cls.__new__(cls)
        result._items = items
        return result

    def _new(self, items: list):
        return type(self)._wrap(items)

    # -------------------------------------------------------------------------
    # Python protocols
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __reversed__(self) -> Iterator:
        return reversed(self._items)

    def __contains__(self, value) -> bool:
        return value in self._items

    def __getitem__(self, index: int):
        return self.get(index)

    def __eq__(self, other) -> bool:
        if isinstance(other, Seq):
            return self._items == other._items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._items))

    def __add__(self, other):
        if isinstance(other, (Seq, list, tuple)):
            return self._new(self._items + list(other))
        return NotImplemented

    def __copy__(self):
        return self.copy()

    def __repr__(self):
        try:
            limit = get_config().repr_limit
        except ValueError:
            # repr never raises on a malformed CHAINSEQ_* variable
            limit = DEFAULT_REPR_LIMIT
        items = [repr(x) for x in self._items[:limit]]
        if len(self._items) > limit:
            items.append("...")
        return f"{type(self).__name__}([{', '.join(items)}])"

    def __str__(self):
        return str(self._items)

    # -------------------------------------------------------------------------
    # Size, access and conversion
    # -------------------------------------------------------------------------

    def size(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def get(self, index: int):
        """Return the element at index. A negative index counts from the end."""
        return self._items[core.normalize_index(index, len(self._items))]

    def first(self):
        """Return the first element. Raises OutOfRangeError when empty."""
        return self.get(0)

    def last(self):
        """Return the last element. Raises OutOfRangeError when empty."""
        return self.get(-1)

    def sub_seq(self, from_index: int, to_index: int):
        """
        Return the elements in [from_index, to_index) as a new sequence.

        Raises OutOfRangeError if from_index < 0, to_index > len or
        from_index > to_index. The range is never clamped.
        """
        core.check_range(from_index, to_index, len(self._items))
        return self._new(self._items[from_index:to_index])

    def copy(self):
        return self._new(list(self._items))

    def to_list(self) -> list:
        """Return the elements as a new list."""
        return list(self._items)

    def to_tuple(self) -> tuple:
        return tuple(self._items)

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def for_each(self, action: Callable[[Any], Any]) -> None:
        core.require_not_none(action, "action")
        for x in self._items:
            action(x)

    def for_each_indexed(self, action: Callable[[Any, int], Any]) -> None:
        """Call action(element, index) for every element in order."""
        core.require_not_none(action, "action")
        for i, x in enumerate(self._items):
            action(x, i)

    def for_each_reverse(self, action: Callable[[Any], Any]) -> None:
        core.require_not_none(action, "action")
        for x in reversed(self._items):
            action(x)

    # -------------------------------------------------------------------------
    # Transformations
    # -------------------------------------------------------------------------

    def map(self, func: Callable[[Any], Any]):
        core.require_not_none(func, "func")
        return self._new([func(x) for x in self._items])

    def map_indexed(self, func: Callable[[Any, int], Any]):
        """Map func(element, index) over the sequence."""
        core.require_not_none(func, "func")
        return self._new([func(x, i) for i, x in enumerate(self._items)])

    def flat_map(self, func: Callable[[Any], Iterable]):
        """Map func over the sequence and concatenate the iterables it returns."""
        core.require_not_none(func, "func")
        return self.flat_map_indexed(_unindexed(func))

    def flat_map_indexed(self, func: Callable[[Any, int], Iterable]):
        core.require_not_none(func, "func")
        result: list = []
        for i, x in enumerate(self._items):
            result.extend(core.require_not_none(func(x, i), "flat_map result"))
        return self._new(result)

    def _select(self, predicate: Callable[[Any, int], Any]):
        return self._new([x for i, x in enumerate(self._items) if predicate(x, i)])

    def filter(self, condition: Callable[[Any], Any]):
        core.require_not_none(condition, "condition")
        return self._select(_unindexed(condition))

    def filter_indexed(self, condition: Callable[[Any, int], Any]):
        core.require_not_none(condition, "condition")
        return self._select(condition)

    def reject(self, condition: Callable[[Any], Any]):
        core.require_not_none(condition, "condition")
        return self._select(_negate(_unindexed(condition)))

    def reject_indexed(self, condition: Callable[[Any, int], Any]):
        core.require_not_none(condition, "condition")
        return self._select(_negate(condition))

    def filter_while(self, condition: Callable[[Any], Any]):
        """Return the longest prefix whose elements all satisfy condition."""
        core.require_not_none(condition, "condition")
        return self.filter_while_indexed(_unindexed(condition))

    def filter_while_indexed(self, condition: Callable[[Any, int], Any]):
        core.require_not_none(condition, "condition")
        run = core.leading_run(self._items, condition)
        return self._new(self._items[:run])

    def reject_while(self, condition: Callable[[Any], Any]):
        """Drop the longest prefix whose elements all satisfy condition."""
        core.require_not_none(condition, "condition")
        return self.reject_while_indexed(_unindexed(condition))

    def reject_while_indexed(self, condition: Callable[[Any, int], Any]):
        core.require_not_none(condition, "condition")
        run = core.leading_run(self._items, condition)
        return self._new(self._items[run:])

    def distinct(self, key: Optional[KeyFunc] = None):
        """Remove duplicates, keeping the first occurrence of each element."""
        return self._new(core.distinct_items(self._items, key))

    def sort(
        self,
        key: Optional[KeyFunc] = None,
        reverse: bool = False,
        comparator: Optional[Comparator] = None,
    ):
        """
        Return a stably sorted copy.

        Args:
            key: Function extracting the value to order by
            reverse: Sort in descending order
            comparator: cmp-style function (a, b) -> int, instead of key
        """
        items = sorted(self._items, key=_sort_key(key, comparator), reverse=reverse)
        return self._new(items)

    def reverse(self):
        return self._new(self._items[::-1])

    def shuffle(self, rng=None):
        """Return a shuffled copy, using rng or the shared library generator."""
        items = list(self._items)
        (rng or get_random()).shuffle(items)
        return self._new(items)

    def sample(self, n: int, rng=None):
        """Return min(n, len) elements picked at random."""
        shuffled = self.shuffle(rng)
        return shuffled.sub_seq(0, min(n, len(self._items)))

    def append(self, *values):
        return self._new(self._items + list(values))

    def append_all(self, iterable: Iterable):
        core.require_not_none(iterable, "iterable")
        return self._new(self._items + list(iterable))

    def prepend(self, *values):
        return self._new(list(values) + self._items)

    def prepend_all(self, iterable: Iterable):
        core.require_not_none(iterable, "iterable")
        return self._new(list(iterable) + self._items)

    def repeat(self, times: int):
        """Return the sequence concatenated with itself `times` times."""
        times = core.check_positive(times, "times")
        return self._new(self._items * times)

    def compact(self):
        """Return a copy without None elements."""
        return self._new([x for x in self._items if x is not None])

    def swap(self, i: int, j: int):
        items = list(self._items)
        core.swap_items(items, i, j)
        return self._new(items)

    def rotate(self, distance: int):
        """
        Return a copy rotated by distance: the element at index i moves to
        (i + distance) % len. Negative distances rotate the other way.
        """
        return self._new(core.rotated_copy(self._items, distance))

    def each_cons(self, n: int):
        """Return every window of n consecutive elements, as a sequence of sequences."""
        n = core.check_positive(n)
        items = self._items
        return self._new(
            [self._new(items[i : i + n]) for i in range(len(items) - n + 1)]
        )

    def each_slice(self, n: int):
        """Split into consecutive slices of n elements; the last may be shorter."""
        n = core.check_positive(n)
        items = self._items
        return self._new([self._new(items[i : i + n]) for i in range(0, len(items), n)])

    # -------------------------------------------------------------------------
    # Multiset operations
    # -------------------------------------------------------------------------

    def intersect(self, other: Iterable, key: Optional[KeyFunc] = None):
        """
        Return the elements that also occur in other, as a multiset.

        Each element is kept at most as many times as it occurs in other, in
        this sequence's order: [a, a, b] intersect [a] is [a].
        """
        core.require_not_none(other, "other")
        return self._new(core.multiset_intersect(self._items, other, key))

    def difference(self, other: Iterable, key: Optional[KeyFunc] = None):
        """
        Return the elements not cancelled by an occurrence in other.

        Each occurrence in other cancels one matching element, so
        [a, a, b] difference [a] is [a, b].
        """
        core.require_not_none(other, "other")
        return self._new(core.multiset_difference(self._items, other, key))

    # -------------------------------------------------------------------------
    # Combinations
    # -------------------------------------------------------------------------

    def for_each_combination(self, n: int, action: Callable[[Any], Any]) -> None:
        """
        Call action once per n-element combination, in lexicographic index order.

        Each combination is a new sequence holding the chosen elements in
        their original relative order. Nothing is buffered, so this is the
        form to use for large inputs. Raises InvalidArgumentError if n <= 0;
        n > len simply produces no combinations.

        Groups are read from the receiver as enumeration proceeds, so an
        element replaced by the action shows up in later groups. Changing
        the receiver's length during enumeration is undefined.
        """
        core.require_not_none(action, "action")
        for group in self.iter_combinations(n):
            action(group)

    def iter_combinations(self, n: int) -> Iterator:
        """Generator form of for_each_combination. n is validated immediately."""
        n = core.check_positive(n)
        items = self._items
        return (
            self._new([items[i] for i in comb])
            for comb in core.iter_combination_indices(len(items), n)
        )

    def each_combination(self, n: int):
        """
        Return every n-element combination as a sequence of sequences.

        All C(len, n) combinations are materialized, which grows
        exponentially; prefer for_each_combination for large inputs.
        """
        n = core.check_positive(n)
        total = core.count_combinations(len(self._items), n)
        limit = get_config().combination_warn_limit
        if limit and total > limit:
            logger.warning(
                "each_combination(%d) over %d elements materializes %d groups "
                "(warn limit %d)",
                n,
                len(self._items),
                total,
                limit,
            )
        logger.debug("Materializing %d combinations of %d", total, n)
        groups: list = []
        self.for_each_combination(n, groups.append)
        return self._new(groups)

    # -------------------------------------------------------------------------
    # Queries and reductions
    # -------------------------------------------------------------------------

    def contains(self, value, eq: Optional[EqFunc] = None) -> bool:
        return core.find_index(self._items, value, eq) != -1

    def index_of(self, value, eq: Optional[EqFunc] = None) -> int:
        """Index of the first element equal to value, or -1."""
        return core.find_index(self._items, value, eq)

    def last_index_of(self, value, eq: Optional[EqFunc] = None) -> int:
        """Index of the last element equal to value, or -1."""
        return core.find_index(self._items, value, eq, reverse=True)

    def count(self, condition: Optional[Callable[[Any], Any]] = None) -> int:
        """Count the elements satisfying condition (all of them if None)."""
        if condition is None:
            return len(self._items)
        return sum(1 for x in self._items if condition(x))

    def all_match(self, condition: Callable[[Any], Any]) -> bool:
        core.require_not_none(condition, "condition")
        return all(condition(x) for x in self._items)

    def any_match(self, condition: Callable[[Any], Any]) -> bool:
        core.require_not_none(condition, "condition")
        return any(condition(x) for x in self._items)

    def none_match(self, condition: Callable[[Any], Any]) -> bool:
        core.require_not_none(condition, "condition")
        return not any(condition(x) for x in self._items)

    def find_first(self, condition: Callable[[Any], Any]):
        """Return the first element satisfying condition, or None."""
        index = self.find_first_index(condition)
        return None if index == -1 else self._items[index]

    def find_first_index(self, condition: Callable[[Any], Any]) -> int:
        core.require_not_none(condition, "condition")
        for i, x in enumerate(self._items):
            if condition(x):
                return i
        return -1

    def find_last(self, condition: Callable[[Any], Any]):
        """Return the last element satisfying condition, or None."""
        index = self.find_last_index(condition)
        return None if index == -1 else self._items[index]

    def find_last_index(self, condition: Callable[[Any], Any]) -> int:
        core.require_not_none(condition, "condition")
        for i in range(len(self._items) - 1, -1, -1):
            if condition(self._items[i]):
                return i
        return -1

    def reduce(self, func: Callable[[Any, Any], Any], initial=_MISSING):
        """
        Fold the elements left to right with func(accumulator, element).

        Without an initial value the first element seeds the accumulator and
        an empty sequence reduces to None.
        """
        core.require_not_none(func, "func")
        if initial is not _MISSING:
            return functools.reduce(func, self._items, initial)
        if not self._items:
            return None
        return functools.reduce(func, self._items)

    def reduce_reverse(self, func: Callable[[Any, Any], Any], initial=_MISSING):
        """Like reduce, but folds from the last element to the first."""
        core.require_not_none(func, "func")
        items = self._items[::-1]
        if initial is not _MISSING:
            return functools.reduce(func, items, initial)
        if not items:
            return None
        return functools.reduce(func, items)

    def join(self, separator: str = "", prefix: str = "", suffix: str = "") -> str:
        return prefix + separator.join(str(x) for x in self._items) + suffix

    def contains_sub_seq(self, other: Iterable) -> bool:
        return self.index_of_sub_seq(other) != -1

    def index_of_sub_seq(self, other: Iterable) -> int:
        """Index where other first occurs as a contiguous run, or -1."""
        core.require_not_none(other, "other")
        return core.find_sub_list(self._items, list(other))

    def last_index_of_sub_seq(self, other: Iterable) -> int:
        """Index where other last occurs as a contiguous run, or -1."""
        core.require_not_none(other, "other")
        return core.find_sub_list(self._items, list(other), reverse=True)


class MutableSeq(Seq):
    """
    A Seq that can also be changed in place.

    Every *_in_place method (and set, clear) mutates this sequence and
    returns it, so the return value aliases the receiver: no copy is made.
    The non-mutating methods inherited from Seq still return new
    MutableSeq instances.

    The hash follows the current contents, so a MutableSeq used as a dict
    key must not be mutated afterwards.
    """

    __slots__ = ()

    def __setitem__(self, index: int, value) -> None:
        self.set(index, value)

    def set(self, index: int, value):
        """Replace the element at index. A negative index counts from the end."""
        self._items[core.normalize_index(index, len(self._items))] = value
        return self

    def clear(self):
        self._items.clear()
        return self

    def append_in_place(self, *values):
        self._items.extend(values)
        return self

    def append_all_in_place(self, iterable: Iterable):
        core.require_not_none(iterable, "iterable")
        # Materialize first so appending a sequence to itself terminates
        self._items.extend(list(iterable))
        return self

    def prepend_in_place(self, *values):
        self._items[0:0] = values
        return self

    def prepend_all_in_place(self, iterable: Iterable):
        core.require_not_none(iterable, "iterable")
        self._items[0:0] = list(iterable)
        return self

    def filter_in_place(self, condition: Callable[[Any], Any]):
        """Keep only the elements satisfying condition, preserving order."""
        core.require_not_none(condition, "condition")
        core.compact_in_place(self._items, _unindexed(condition))
        return self

    def filter_indexed_in_place(self, condition: Callable[[Any, int], Any]):
        core.require_not_none(condition, "condition")
        core.compact_in_place(self._items, condition)
        return self

    def reject_in_place(self, condition: Callable[[Any], Any]):
        """Remove the elements satisfying condition, preserving order."""
        core.require_not_none(condition, "condition")
        core.compact_in_place(self._items, _negate(_unindexed(condition)))
        return self

    def reject_indexed_in_place(self, condition: Callable[[Any, int], Any]):
        core.require_not_none(condition, "condition")
        core.compact_in_place(self._items, _negate(condition))
        return self

    def filter_while_in_place(self, condition: Callable[[Any], Any]):
        core.require_not_none(condition, "condition")
        return self.filter_while_indexed_in_place(_unindexed(condition))

    def filter_while_indexed_in_place(self, condition: Callable[[Any, int], Any]):
        core.require_not_none(condition, "condition")
        del self._items[core.leading_run(self._items, condition) :]
        return self

    def reject_while_in_place(self, condition: Callable[[Any], Any]):
        core.require_not_none(condition, "condition")
        return self.reject_while_indexed_in_place(_unindexed(condition))

    def reject_while_indexed_in_place(self, condition: Callable[[Any, int], Any]):
        core.require_not_none(condition, "condition")
        del self._items[: core.leading_run(self._items, condition)]
        return self

    def distinct_in_place(self, key: Optional[KeyFunc] = None):
        self._items[:] = core.distinct_items(self._items, key)
        return self

    def sort_in_place(
        self,
        key: Optional[KeyFunc] = None,
        reverse: bool = False,
        comparator: Optional[Comparator] = None,
    ):
        self._items.sort(key=_sort_key(key, comparator), reverse=reverse)
        return self

    def shuffle_in_place(self, rng=None):
        (rng or get_random()).shuffle(self._items)
        return self

    def reverse_in_place(self):
        self._items.reverse()
        return self

    def repeat_in_place(self, times: int):
        times = core.check_positive(times, "times")
        self._items *= times
        return self

    def compact_in_place(self):
        """Remove None elements."""
        core.compact_in_place(self._items, lambda element, _index: element is not None)
        return self

    def swap_in_place(self, i: int, j: int):
        core.swap_items(self._items, i, j)
        return self

    def rotate_in_place(self, distance: int):
        """
        Rotate by distance without copying: the element at index i moves to
        (i + distance) % len, using one temporary slot.

        Rotating an empty sequence or by a multiple of len is a no-op.
        Returns the receiver.
        """
        cycles = core.rotate_list_in_place(self._items, distance)
        if cycles:
            logger.debug(
                "Rotated %d elements by %d in %d cycle(s)",
                len(self._items),
                distance,
                cycles,
            )
        return self


def new_seq(*values) -> Seq:
    """Create a Seq holding values."""
    return Seq._wrap(list(values))


def new_mutable_seq(*values) -> MutableSeq:
    """Create a MutableSeq holding values."""
    return MutableSeq._wrap(list(values))
