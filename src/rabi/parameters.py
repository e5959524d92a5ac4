# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT
"""Defaults and validation of code scheme parameters."""
import os
import logging
from typing import Any
from typing import Optional

from . import common_types as ct

logger = logging.getLogger(__name__)

MIN_TOTAL_LENGTH  = 2
MIN_REDUNDANCY    = 1
MIN_ALPHABET_SIZE = 2

DEFAULT_NUM_TRIALS  = 10
DEFAULT_PARALLELISM = 1
DEFAULT_MAX_POOL_SIZE = 2 ** 24

# defaults for the advisory tables (rabi how-many)
DEFAULT_TOTAL_LENGTH  = 5
DEFAULT_REDUNDANCY    = 2
DEFAULT_ALPHABET_SIZE = 6

DEFAULT_NUM_TRIALS    = int(os.getenv("RABI_NUM_TRIALS") or DEFAULT_NUM_TRIALS)
DEFAULT_PARALLELISM   = int(os.getenv("RABI_PARALLELISM") or DEFAULT_PARALLELISM)
MAX_POOL_SIZE         = int(os.getenv("RABI_MAX_POOL_SIZE") or DEFAULT_MAX_POOL_SIZE)


def _is_int(val: Any) -> bool:
    # bool is a subclass of int, but True/False are not sensible sizes
    return isinstance(val, int) and not isinstance(val, bool)


def validate_redundancy(redundancy: Any, total_length: Optional[int] = None) -> int:
    if not _is_int(redundancy):
        errmsg = f"Invalid redundancy={redundancy!r}, must be an integer"
        raise ct.InvalidParameter(errmsg)

    if redundancy < MIN_REDUNDANCY:
        errmsg = f"Invalid redundancy={redundancy}, the code must be robust to at least one erasure"
        raise ct.InvalidParameter(errmsg)

    if total_length is not None and redundancy >= total_length:
        errmsg = (
            f"Invalid redundancy={redundancy}, the code cannot be robust to a number"
            f" of erasures equal to or greater than total_length={total_length}"
        )
        raise ct.InvalidParameter(errmsg)

    return redundancy


def validate_total_length(total_length: Any) -> int:
    if not _is_int(total_length):
        errmsg = f"Invalid total_length={total_length!r}, must be an integer"
        raise ct.InvalidParameter(errmsg)

    if total_length < MIN_TOTAL_LENGTH:
        errmsg = f"Invalid total_length={total_length}, must be >= {MIN_TOTAL_LENGTH}"
        raise ct.InvalidParameter(errmsg)

    return total_length


def validate_alphabet_size(alphabet_size: Any) -> int:
    if not _is_int(alphabet_size):
        errmsg = f"Invalid alphabet_size={alphabet_size!r}, must be an integer"
        raise ct.InvalidParameter(errmsg)

    if alphabet_size < MIN_ALPHABET_SIZE:
        errmsg = f"Invalid alphabet_size={alphabet_size}, must be >= {MIN_ALPHABET_SIZE}"
        raise ct.InvalidParameter(errmsg)

    return alphabet_size


def validate_num_trials(num_trials: Any) -> int:
    if not _is_int(num_trials) or num_trials < 1:
        errmsg = f"Invalid num_trials={num_trials!r}, must be a positive integer"
        raise ct.InvalidParameter(errmsg)

    return num_trials


def validate_parallelism(parallelism: Any) -> ct.Parallelism:
    if not _is_int(parallelism) or parallelism < 1:
        errmsg = f"Invalid parallelism={parallelism!r}, must be a positive integer"
        raise ct.InvalidParameter(errmsg)

    return parallelism


def init_code_params(total_length: Any, redundancy: Any, alphabet_size: Any) -> ct.CodeParams:
    """Validate in the order: redundancy, total_length, alphabet_size.

    The redundancy check covers the lower bound of total_length, so an
    explicit length check only catches non-integer lengths.
    """
    if not _is_int(total_length):
        errmsg = f"Invalid total_length={total_length!r}, must be an integer"
        raise ct.InvalidParameter(errmsg)

    validate_redundancy(redundancy, total_length)
    validate_total_length(total_length)
    validate_alphabet_size(alphabet_size)
    return ct.CodeParams(total_length, redundancy, alphabet_size)


def validate_pool_size(total_length: int, alphabet_size: int) -> int:
    pool_size = alphabet_size ** total_length
    if pool_size > MAX_POOL_SIZE:
        errmsg = (
            f"Candidate pool too large: {alphabet_size}**{total_length} = {pool_size}"
            f" sequences (limit {MAX_POOL_SIZE}, set RABI_MAX_POOL_SIZE to change)."
        )
        raise ct.InvalidParameter(errmsg)

    return pool_size
