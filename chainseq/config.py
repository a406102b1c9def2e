"""
chainseq.config - Library configuration

This module holds the settings that tune chainseq's behaviour. It provides the
SeqConfig class and module-level accessors for the active configuration.

Settings come from defaults overridden by environment variables:
    CHAINSEQ_COMBINATION_WARN_LIMIT=100000
    CHAINSEQ_RANDOM_SEED=42
    CHAINSEQ_REPR_LIMIT=50
"""

import os
import random
from dataclasses import dataclass
from typing import Mapping, Optional

# Default configuration values
DEFAULT_COMBINATION_WARN_LIMIT = 100_000
DEFAULT_REPR_LIMIT = 50
ENV_PREFIX = "CHAINSEQ_"


@dataclass
class SeqConfig:
    """
    Settings for chainseq.

    Fields:
        combination_warn_limit: each_combination logs a warning when it is
            about to materialize more groups than this (0 disables)
        random_seed: Seed for the shared random generator used by shuffle,
            shuffle_in_place and sample when no rng is passed (None seeds
            from the OS)
        repr_limit: Maximum number of elements shown by repr()
    """

    combination_warn_limit: int = DEFAULT_COMBINATION_WARN_LIMIT
    random_seed: Optional[int] = None
    repr_limit: int = DEFAULT_REPR_LIMIT

    def __post_init__(self):
        if self.combination_warn_limit < 0:
            raise ValueError("combination_warn_limit must not be negative")
        if self.repr_limit <= 0:
            raise ValueError("repr_limit must be positive")


def _env_int(environ: Mapping[str, str], name: str) -> Optional[int]:
    """Read an optional integer setting from the environment."""
    var = ENV_PREFIX + name
    raw = environ.get(var)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def load_config(environ: Optional[Mapping[str, str]] = None) -> SeqConfig:
    """
    Build a SeqConfig from defaults and CHAINSEQ_* environment variables.

    Args:
        environ: Mapping to read variables from. If None, uses os.environ.

    Returns:
        The loaded SeqConfig

    Raises:
        ValueError: If a variable is set to something that is not an integer
    """
    if environ is None:
        environ = os.environ

    config = SeqConfig()
    warn_limit = _env_int(environ, "COMBINATION_WARN_LIMIT")
    if warn_limit is not None:
        config.combination_warn_limit = warn_limit
    config.random_seed = _env_int(environ, "RANDOM_SEED")
    repr_limit = _env_int(environ, "REPR_LIMIT")
    if repr_limit is not None:
        config.repr_limit = repr_limit

    # Re-run field validation with the overrides applied
    config.__post_init__()
    return config


_config: Optional[SeqConfig] = None
_random: Optional[random.Random] = None


def get_config() -> SeqConfig:
    """Return the active configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[SeqConfig]) -> None:
    """
    Replace the active configuration and reseed the shared generator.

    Passing None reloads from the environment on the next get_config().
    """
    global _config, _random
    _config = config
    _random = None


def get_random() -> random.Random:
    """Return the shared random generator, seeded from the active config."""
    global _random
    if _random is None:
        _random = random.Random(get_config().random_seed)
    return _random
