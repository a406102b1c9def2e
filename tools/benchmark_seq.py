#!/usr/bin/env python3
"""
chainseq Benchmark Suite
------------------------
Compares chainseq sequence operations against the equivalent Python
built-ins, and the in-place variants against their copying counterparts.

Usage:
    python3 tools/benchmark_seq.py --size 100000 --iter 20
"""

import argparse
import gc
import itertools
import random
import sys
import time
from collections import Counter
from typing import Callable

try:
    from chainseq import MutableSeq, Seq
except ImportError:
    print("❌ Error: Could not import 'chainseq'.")
    print("   Make sure the package is installed (pip install -e .)")
    sys.exit(1)

# --- Utilities ---


class Colors:
    BLUE = "\033[94m"
    GREEN = "\033[92m"  # Fastest / winner
    YELLOW = "\033[93m"  # Comparable (0.9x - 1.5x)
    ORANGE = "\033[38;5;208m"  # Moderately slower (1.5x - 3x)
    RED = "\033[91m"  # Slow (3x+)
    ENDC = "\033[0m"
    BOLD = "\033[1m"


def format_time(seconds: float) -> str:
    if seconds < 0.001:
        return f"{seconds * 1_000_000:.2f} µs"
    elif seconds < 1.0:
        return f"{seconds * 1000:.2f} ms"
    else:
        return f"{seconds:.4f} s"


def run_benchmark(func: Callable, iterations: int) -> float:
    # Warmup
    func()

    # Collect garbage and disable GC during timing for fairness
    gc.collect()
    gc.disable()

    try:
        start = time.perf_counter()
        for _ in range(iterations):
            func()
        end = time.perf_counter()
    finally:
        gc.enable()

    return (end - start) / iterations


def format_ratio(baseline_time: float, challenger_time: float) -> tuple[str, str]:
    """Returns (color, verdict_string) for a timing comparison."""
    ratio = challenger_time / baseline_time

    if ratio <= 1.1:
        return Colors.GREEN, "~same"
    elif ratio <= 1.5:
        return Colors.YELLOW, f"{ratio:.2f}x slower"
    elif ratio <= 3.0:
        return Colors.ORANGE, f"{ratio:.2f}x slower"
    return Colors.RED, f"{ratio:.1f}x slower"


def print_group(title: str, results: list[tuple[str, float]]):
    """
    Print a group of benchmark results sorted fastest to slowest.

    Args:
        title: Section title
        results: List of (name, time) tuples
    """
    print(f"{Colors.BOLD}--- {title} ---{Colors.ENDC}")

    if not results:
        return

    sorted_results = sorted(results, key=lambda x: x[1])
    _, baseline_time = sorted_results[0]
    col_width = max(max(len(name) for name, _ in results) + 2, 28)

    for i, (name, time_val) in enumerate(sorted_results):
        time_str = format_time(time_val)
        if i == 0:
            print(
                f"  {Colors.GREEN}{name:<{col_width}} {time_str:>12}  (fastest){Colors.ENDC}"
            )
        else:
            color, verdict = format_ratio(baseline_time, time_val)
            print(
                f"  {color}{name:<{col_width}} {time_str:>12}  ({verdict}){Colors.ENDC}"
            )

    print()


# --- Benchmark Implementations ---


def bench_rotation(size: int, iterations: int):
    data = list(range(size))
    distance = size // 3 + 1
    mutable = MutableSeq(data)
    frozen = Seq(data)

    def list_slicing():
        return data[-distance:] + data[:-distance]

    print_group(
        f"Rotate by {distance} (N={size:,})",
        [
            ("list slicing", run_benchmark(list_slicing, iterations)),
            ("Seq.rotate", run_benchmark(lambda: frozen.rotate(distance), iterations)),
            (
                "MutableSeq.rotate_in_place",
                run_benchmark(lambda: mutable.rotate_in_place(distance), iterations),
            ),
        ],
    )


def bench_multiset(size: int, iterations: int):
    rng = random.Random(0)
    a = [rng.randint(0, size // 4) for _ in range(size)]
    b = [rng.randint(0, size // 4) for _ in range(size // 2)]
    seq_a = Seq(a)

    def counter_intersect():
        return list((Counter(a) & Counter(b)).elements())

    print_group(
        f"Multiset intersect (N={size:,})",
        [
            ("Counter &", run_benchmark(counter_intersect, iterations)),
            ("Seq.intersect", run_benchmark(lambda: seq_a.intersect(b), iterations)),
        ],
    )

    def counter_difference():
        return list((Counter(a) - Counter(b)).elements())

    print_group(
        f"Multiset difference (N={size:,})",
        [
            ("Counter -", run_benchmark(counter_difference, iterations)),
            ("Seq.difference", run_benchmark(lambda: seq_a.difference(b), iterations)),
        ],
    )


def bench_combinations(iterations: int):
    data = list(range(20))
    seq = Seq(data)
    n = 4

    def consume(it):
        for _ in it:
            pass

    def with_itertools():
        consume(itertools.combinations(data, n))

    def streaming():
        consume(seq.iter_combinations(n))

    def collecting():
        seq.each_combination(n)

    print_group(
        f"Combinations C(20, {n})",
        [
            ("itertools.combinations", run_benchmark(with_itertools, iterations)),
            ("Seq.iter_combinations", run_benchmark(streaming, iterations)),
            ("Seq.each_combination", run_benchmark(collecting, iterations)),
        ],
    )


def bench_filter(size: int, iterations: int):
    data = list(range(size))

    def pred(x):
        return x % 3 != 0

    def comprehension():
        return [x for x in data if pred(x)]

    def filter_in_place():
        MutableSeq(data).filter_in_place(pred)

    print_group(
        f"Filter (N={size:,})",
        [
            ("list comprehension", run_benchmark(comprehension, iterations)),
            ("Seq.filter", run_benchmark(lambda: Seq(data).filter(pred), iterations)),
            ("MutableSeq.filter_in_place", run_benchmark(filter_in_place, iterations)),
        ],
    )


def main():
    parser = argparse.ArgumentParser(description="Benchmark chainseq operations")
    parser.add_argument("--size", type=int, default=100_000, help="Sequence size")
    parser.add_argument("--iter", type=int, default=20, help="Iterations per benchmark")
    args = parser.parse_args()

    print(f"{Colors.BLUE}chainseq benchmarks{Colors.ENDC}")
    version = sys.version.split()[0]
    print(f"Python {version}, size={args.size:,}, iterations={args.iter}")
    print()

    bench_rotation(args.size, args.iter)
    bench_multiset(args.size, args.iter)
    bench_combinations(args.iter)
    bench_filter(args.size, args.iter)


if __name__ == "__main__":
    main()
