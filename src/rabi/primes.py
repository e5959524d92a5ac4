# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT
"""Prime helpers for alphabet sizes used by rabi.gf.FieldGFP."""
import logging
from typing import Iterator

logger = logging.getLogger(__name__)

SMALL_PRIMES = [
    2,
    3,
    5,
    7,
    11,
    13,
    17,
    19,
    23,
    29,
    31,
    37,
    41,
    43,
    47,
    53,
    59,
    61,
    67,
    71,
    73,
    79,
    83,
    89,
    97,
    101,
    103,
    107,
    109,
    113,
    127,
    131,
    137,
    139,
    149,
    151,
    157,
    163,
    167,
    173,
    179,
    181,
    191,
    193,
    197,
    199,
    211,
    223,
    227,
    229,
    233,
    239,
    241,
    251,
    257,
    263,
    269,
    271,
    277,
    281,
    283,
    293,
    307,
]

# Jim Sinclair, deterministic for n < 2**64
_mr_js_bases = {2, 325, 9375, 28178, 450775, 9780504, 1795265022}


def _is_composite(n: int, r: int, x: int) -> bool:
    for _ in range(r - 1):
        x = pow(x, 2, n)
        if x == n - 1:
            return False
    return True


def is_prime(n: int) -> bool:
    """Primality test for alphabet sizes.

    Trial division by SMALL_PRIMES, followed by Miller-Rabin with a
    fixed set of bases. Alphabets are small in practice (the number of
    paint colours or band types available), so the second stage is
    only reached for unusual inputs.
    """
    if n < 2:
        return False

    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    if n < max(SMALL_PRIMES) ** 2:
        return True

    if n >= 2 ** 64:
        raise NotImplementedError(f"Primality test not exact for n={n}")

    r = 0
    d = n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for a in _mr_js_bases:
        a = a % n
        if a == 0:
            continue
        x = pow(a, d, n)
        if x not in (1, n - 1) and _is_composite(n, r, x):
            return False

    return True


def iter_primes_below(n: int) -> Iterator[int]:
    """Yield primes p < n in descending order."""
    for candidate in range(n - 1, 1, -1):
        if is_prime(candidate):
            yield candidate


def previous_prime(n: int) -> int:
    """Largest prime strictly smaller than n."""
    if n <= 2:
        raise ValueError(f"No prime smaller than {n}")

    return next(iter_primes_below(n))


def prime_at_most(n: int) -> int:
    """Return n if it is prime, otherwise the nearest smaller prime."""
    if is_prime(n):
        return n
    else:
        p = previous_prime(n)
        logger.debug(f"nearest prime below {n} is {p}")
        return p
