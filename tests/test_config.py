"""
Tests for library configuration.
"""

import unittest
from unittest import mock

from chainseq import SeqConfig, get_config, load_config, new_seq, set_config
from chainseq.config import DEFAULT_COMBINATION_WARN_LIMIT, get_random


class TestLoadConfig(unittest.TestCase):
    """Test reading settings from the environment."""

    def test_defaults(self):
        config = load_config({})
        self.assertEqual(config.combination_warn_limit, DEFAULT_COMBINATION_WARN_LIMIT)
        self.assertIsNone(config.random_seed)
        self.assertEqual(config.repr_limit, 50)

    def test_environment_overrides(self):
        config = load_config(
            {
                "CHAINSEQ_COMBINATION_WARN_LIMIT": "10",
                "CHAINSEQ_RANDOM_SEED": "42",
                "CHAINSEQ_REPR_LIMIT": "3",
            }
        )
        self.assertEqual(config.combination_warn_limit, 10)
        self.assertEqual(config.random_seed, 42)
        self.assertEqual(config.repr_limit, 3)

    def test_blank_values_are_ignored(self):
        config = load_config({"CHAINSEQ_REPR_LIMIT": "  "})
        self.assertEqual(config.repr_limit, 50)

    def test_malformed_value_names_variable(self):
        with self.assertRaises(ValueError) as ctx:
            load_config({"CHAINSEQ_RANDOM_SEED": "abc"})
        self.assertIn("CHAINSEQ_RANDOM_SEED", str(ctx.exception))

    def test_invalid_values_rejected(self):
        with self.assertRaises(ValueError):
            load_config({"CHAINSEQ_REPR_LIMIT": "0"})
        with self.assertRaises(ValueError):
            SeqConfig(combination_warn_limit=-1)


class TestActiveConfig(unittest.TestCase):
    """Test get_config / set_config and the shared generator."""

    def setUp(self):
        self.previous = get_config()

    def tearDown(self):
        set_config(self.previous)

    def test_set_config(self):
        config = SeqConfig(repr_limit=2)
        set_config(config)
        self.assertIs(get_config(), config)
        self.assertEqual(repr(new_seq(1, 2, 3)), "Seq([1, 2, ...])")

    def test_seed_makes_shuffle_reproducible(self):
        set_config(SeqConfig(random_seed=1234))
        first = new_seq(*range(20)).shuffle()
        set_config(SeqConfig(random_seed=1234))
        second = new_seq(*range(20)).shuffle()
        self.assertEqual(first, second)

    def test_set_config_resets_generator(self):
        set_config(SeqConfig(random_seed=5))
        rng = get_random()
        self.assertIs(get_random(), rng)
        set_config(SeqConfig(random_seed=5))
        self.assertIsNot(get_random(), rng)

    def test_zero_limit_disables_warning(self):
        set_config(SeqConfig(combination_warn_limit=0))
        with self.assertNoLogs("chainseq.runtime.seq", level="WARNING"):
            new_seq(*range(10)).each_combination(5)

    def test_repr_survives_malformed_environment(self):
        """A bad CHAINSEQ_REPR_LIMIT still fails get_config but not repr."""
        with mock.patch.dict("os.environ", {"CHAINSEQ_REPR_LIMIT": "abc"}):
            set_config(None)
            self.assertEqual(repr(new_seq(1, 2)), "Seq([1, 2])")
            with self.assertRaises(ValueError):
                get_config()

    def test_set_config_none_reloads_environment(self):
        with mock.patch.dict("os.environ", {"CHAINSEQ_REPR_LIMIT": "1"}):
            set_config(None)
            self.assertEqual(get_config().repr_limit, 1)
            self.assertEqual(repr(new_seq(1, 2)), "Seq([1, ...])")


if __name__ == "__main__":
    unittest.main()
