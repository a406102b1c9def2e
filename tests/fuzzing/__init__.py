"""Fuzz testing suite for chainseq."""

from .fuzz import Fuzzer, FuzzRunner, random_value, run_suite

__all__ = ["Fuzzer", "FuzzRunner", "random_value", "run_suite"]
