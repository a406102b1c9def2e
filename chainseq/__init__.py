"""
chainseq - Ordered sequences with a chainable functional API

    >>> from chainseq import new_mutable_seq
    >>> new_mutable_seq(1, 2, 3, 4, 5).rotate_in_place(2).to_list()
    [4, 5, 1, 2, 3]
    >>> new_mutable_seq(1, 2, 3).each_combination(2).map(list).to_list()
    [[1, 2], [1, 3], [2, 3]]

Seq operations return new sequences; MutableSeq adds *_in_place variants
that mutate and return the receiver.
"""

from chainseq.config import SeqConfig, get_config, load_config, set_config
from chainseq.runtime import (
    InvalidArgumentError,
    MutableSeq,
    NullArgumentError,
    OutOfRangeError,
    Seq,
    SeqError,
    is_mutable_seq,
    is_seq,
    new_mutable_seq,
    new_seq,
)

__version__ = "0.1.0"

__all__ = [
    "Seq",
    "MutableSeq",
    "new_seq",
    "new_mutable_seq",
    "is_seq",
    "is_mutable_seq",
    "SeqError",
    "OutOfRangeError",
    "InvalidArgumentError",
    "NullArgumentError",
    "SeqConfig",
    "get_config",
    "load_config",
    "set_config",
]
