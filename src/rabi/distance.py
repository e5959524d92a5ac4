# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

"""Hamming distance between codes.

https://en.wikipedia.org/wiki/Hamming_distance
"""

import itertools
from typing import Sequence

import numpy as np

from . import common_types as ct


def hamming(a: Sequence[int], b: Sequence[int]) -> int:
    """Number of positions at which a and b differ."""
    if len(a) != len(b):
        errmsg = f"Cannot compare sequences of different length ({len(a)} != {len(b)})"
        raise ct.InvalidInput(errmsg)

    return sum(1 for sa, sb in zip(a, b) if sa != sb)


def hamming_batch(code: np.ndarray, pool: np.ndarray) -> np.ndarray:
    """Distance of code to every row of pool.

    Returns an integer array with one entry per row.
    """
    if pool.ndim != 2 or code.shape != (pool.shape[1],):
        errmsg = f"Cannot compare code of shape {code.shape} with pool of shape {pool.shape}"
        raise ct.InvalidInput(errmsg)

    return np.count_nonzero(pool != code, axis=1)


def min_distance(codes: Sequence[Sequence[int]]) -> int:
    """Smallest pairwise distance of a set of codes.

    Sets with fewer than two codes have no pairs, in which case the
    code length (i.e. the largest possible distance) is returned, or 0
    for an empty set.
    """
    if len(codes) == 0:
        return 0
    if len(codes) == 1:
        return len(codes[0])

    matrix = np.asarray(codes)
    return min(
        int(hamming_batch(matrix[i], matrix[i + 1 :]).min())
        for i in range(len(matrix) - 1)
    )


def agreement(a: Sequence[int], b: Sequence[int]) -> int:
    """Number of positions at which a and b are equal."""
    return len(a) - hamming(a, b)


def is_separated(codes: Sequence[Sequence[int]], redundancy: int) -> bool:
    """True if every pair of codes differs in more than redundancy positions."""
    return all(hamming(a, b) > redundancy for a, b in itertools.combinations(codes, 2))
