#!/usr/bin/env python3
"""Fuzz testing for the sequence implementation.

This tests MutableSeq against a reference Python list using random
operations to find edge cases and verify correctness. Non-mutating Seq
operations are checked against the same reference along the way.
"""

import itertools
from collections import Counter
from typing import Any

from chainseq import MutableSeq, Seq

from .fuzz import Fuzzer, random_value

PREDICATES = [
    lambda x: x is None,
    lambda x: isinstance(x, int),
    lambda x: bool(x),
    lambda x: isinstance(x, str),
]

INDEXED_PREDICATES = [
    lambda x, i: i % 2 == 0,
    lambda x, i: i < 3,
    lambda x, i: x is not None and i % 3 != 1,
]


def reference_rotate(items: list, distance: int) -> list:
    """Rotate by slicing: the element at i moves to (i + distance) % len."""
    if not items:
        return []
    d = distance % len(items)
    return items[len(items) - d :] + items[: len(items) - d]


def reference_intersect(items: list, other: list) -> list:
    counts = Counter(other)
    result = []
    for x in items:
        if counts[x] > 0:
            counts[x] -= 1
            result.append(x)
    return result


def reference_difference(items: list, other: list) -> list:
    counts = Counter(other)
    result = []
    for x in items:
        if counts[x] > 0:
            counts[x] -= 1
        else:
            result.append(x)
    return result


class MutableSeqFuzzer(Fuzzer):
    """Fuzz tester that maintains a MutableSeq and reference list."""

    name = "MutableSeq"

    max_len = 64

    def __init__(self):
        super().__init__()
        self.seq: MutableSeq = MutableSeq()
        self.reference: list = []
        self.snapshots: list[tuple[Seq, list]] = []
        self.max_size = 0

    def reset(self):
        """Reset state for a new example."""
        self.seq = MutableSeq()
        self.reference = []
        self.snapshots.clear()

    def get_stats(self) -> dict[str, Any]:
        """Return additional stats to display."""
        return {"Max seq size": self.max_size}

    def save_snapshot(self):
        """Save an immutable copy to check it never changes afterwards."""
        self.snapshots.append((Seq(self.seq), self.reference.copy()))
        # Keep only last 20 snapshots
        if len(self.snapshots) > 20:
            self.snapshots = self.snapshots[-10:]

    def check_invariants(self):
        """Verify seq matches reference."""
        # Length check
        assert len(self.seq) == len(self.reference), (
            f"Length mismatch: {len(self.seq)} vs {len(self.reference)}"
        )

        # Content check
        seq_list = self.seq.to_list()
        assert seq_list == self.reference, (
            f"Content mismatch:\n  Seq: {seq_list[:10]}...\n  "
            f"Reference: {self.reference[:10]}..."
        )

        # Spot check indexing, including negative indices
        size = len(self.reference)
        if size > 0:
            for i in [0, size - 1, size // 2]:
                assert self.seq.get(i) == self.reference[i]
                assert self.seq.get(i - size) == self.reference[i]

        # Copies taken earlier are independent of later mutation
        for old_seq, old_ref in self.snapshots[-5:]:
            assert old_seq.to_list() == old_ref, "Copy aliased its source!"

    def _random_index(self) -> int:
        size = len(self.reference)
        idx = self.rng.randint(0, size - 1)
        return idx - size if self.rng.random() < 0.5 else idx

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def do_append(self):
        """Append one or more values."""
        if len(self.reference) >= self.max_len:
            return
        self.save_snapshot()
        values = [random_value(self.rng) for _ in range(self.rng.randint(1, 5))]
        assert self.seq.append_in_place(*values) is self.seq
        self.reference.extend(values)
        self.record_op("append")

    def do_prepend(self):
        if len(self.reference) >= self.max_len:
            return
        self.save_snapshot()
        values = [random_value(self.rng) for _ in range(self.rng.randint(1, 3))]
        assert self.seq.prepend_in_place(*values) is self.seq
        self.reference[0:0] = values
        self.record_op("prepend")

    def do_set(self):
        """Update an element through a possibly negative index."""
        if not self.reference:
            return
        self.save_snapshot()
        idx = self._random_index()
        value = random_value(self.rng)
        self.seq[idx] = value
        self.reference[idx] = value
        self.record_op("set")

    def do_swap(self):
        if not self.reference:
            return
        i, j = self._random_index(), self._random_index()
        self.seq.swap_in_place(i, j)
        self.reference[i], self.reference[j] = self.reference[j], self.reference[i]
        self.record_op("swap")

    def do_rotate(self):
        """Rotate in place and compare against the copying rotate."""
        size = len(self.reference)
        distance = self.rng.randint(-2 * size - 1, 2 * size + 1)
        rotated = self.seq.rotate(distance)
        assert self.seq.rotate_in_place(distance) is self.seq
        self.reference = reference_rotate(self.reference, distance)
        assert rotated == self.seq, f"rotate({distance}) != rotate_in_place"
        self.record_op("rotate")

    def do_filter(self):
        self.save_snapshot()
        pred = self.rng.choice(PREDICATES)
        if self.rng.random() < 0.5:
            self.seq.filter_in_place(pred)
            self.reference = [x for x in self.reference if pred(x)]
            self.record_op("filter")
        else:
            self.seq.reject_in_place(pred)
            self.reference = [x for x in self.reference if not pred(x)]
            self.record_op("reject")

    def do_filter_indexed(self):
        pred = self.rng.choice(INDEXED_PREDICATES)
        self.seq.filter_indexed_in_place(pred)
        self.reference = [x for i, x in enumerate(self.reference) if pred(x, i)]
        self.record_op("filter_indexed")

    def do_while(self):
        pred = self.rng.choice(PREDICATES)
        run = 0
        while run < len(self.reference) and pred(self.reference[run]):
            run += 1
        if self.rng.random() < 0.5:
            self.seq.filter_while_in_place(pred)
            self.reference = self.reference[:run]
            self.record_op("filter_while")
        else:
            self.seq.reject_while_in_place(pred)
            self.reference = self.reference[run:]
            self.record_op("reject_while")

    def do_distinct(self):
        self.seq.distinct_in_place()
        self.reference = list(dict.fromkeys(self.reference))
        self.record_op("distinct")

    def do_reverse(self):
        assert self.seq.reverse() == Seq(self.reference[::-1])
        self.seq.reverse_in_place()
        self.reference.reverse()
        self.record_op("reverse")

    def do_repeat(self):
        if len(self.reference) * 2 > self.max_len:
            return
        self.seq.repeat_in_place(2)
        self.reference = self.reference * 2
        self.record_op("repeat")

    def do_compact(self):
        self.seq.compact_in_place()
        self.reference = [x for x in self.reference if x is not None]
        self.record_op("compact")

    def do_sort(self):
        self.seq.sort_in_place(key=repr)
        self.reference.sort(key=repr)
        self.record_op("sort")

    def do_clear(self):
        self.save_snapshot()
        self.seq.clear()
        self.reference = []
        self.record_op("clear")

    # -------------------------------------------------------------------------
    # Non-mutating checks
    # -------------------------------------------------------------------------

    def do_multiset(self):
        """Check intersect/difference against Counter-based references."""
        other = [random_value(self.rng) for _ in range(self.rng.randint(0, 10))]
        if self.reference and self.rng.random() < 0.5:
            other.extend(self.rng.choices(self.reference, k=3))
        inter = self.seq.intersect(other)
        diff = self.seq.difference(other)
        assert inter.to_list() == reference_intersect(self.reference, other)
        assert diff.to_list() == reference_difference(self.reference, other)
        assert len(inter) + len(diff) == len(self.seq)
        self.record_op("multiset")

    def do_combinations(self):
        """Check each_combination against itertools on a short prefix."""
        prefix = self.seq.sub_seq(0, min(len(self.seq), 7))
        n = self.rng.randint(1, 4)
        expected = [list(c) for c in itertools.combinations(prefix.to_list(), n)]
        actual = [group.to_list() for group in prefix.each_combination(n)]
        assert actual == expected, f"each_combination({n}) mismatch"
        self.record_op("combinations")

    def do_random_operation(self):
        """Do a random operation."""
        ops = [
            (self.do_append, 20),
            (self.do_prepend, 8),
            (self.do_set, 10),
            (self.do_swap, 6),
            (self.do_rotate, 12),
            (self.do_filter, 5),
            (self.do_filter_indexed, 3),
            (self.do_while, 4),
            (self.do_distinct, 3),
            (self.do_reverse, 3),
            (self.do_repeat, 3),
            (self.do_compact, 3),
            (self.do_sort, 2),
            (self.do_clear, 1),
            (self.do_multiset, 6),
            (self.do_combinations, 3),
        ]

        total_weight = sum(w for _, w in ops)
        r = self.rng.randint(1, total_weight)
        cumulative = 0
        for op, weight in ops:
            cumulative += weight
            if r <= cumulative:
                op()
                break

        self.max_size = max(self.max_size, len(self.reference))
