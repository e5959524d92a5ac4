# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

"""Reed Solomon style code construction by polynomial oversampling.

Each message of k = total_length - redundancy symbols is read as the
coefficients of a polynomial of degree < k over GF(alphabet_size).
The codeword is that polynomial evaluated at x = 0, 1, ..., n - 1.

Two distinct polynomials of degree < k agree on at most k - 1 points,
so two codewords differ in at least n - (k - 1) = redundancy + 1
positions. The number of codewords, alphabet_size ** k, meets the
Singleton bound, so no larger set with this distance exists.

For background on polynomial oversampling:
https://en.wikipedia.org/wiki/Erasure_code#Polynomial_oversampling
"""

import logging
import itertools
from typing import Iterator

from . import gf
from . import polynom
from . import common_types as ct

logger = logging.getLogger(__name__)


def iter_messages(message_len: int, alphabet_size: int) -> Iterator[ct.Code]:
    """All messages in canonical order (first symbol varies fastest)."""
    for message in itertools.product(range(alphabet_size), repeat=message_len):
        yield message[::-1]


def iter_codewords(params: ct.CodeParams) -> Iterator[ct.Code]:
    total_length, redundancy, alphabet_size = params

    field       = gf.FieldGFP(alphabet_size)
    message_len = total_length - redundancy
    assert 0 < message_len <= total_length <= alphabet_size

    for message in iter_messages(message_len, alphabet_size):
        yield tuple(polynom.oversample(field, message, num_points=total_length))


def exact_codes(params: ct.CodeParams) -> ct.Codes:
    """Build the full code for params.

    Expects params to be validated already: alphabet_size prime and
    redundancy < total_length <= alphabet_size.
    """
    codes = list(iter_codewords(params))

    message_len = params.total_length - params.redundancy
    assert len(codes) == params.alphabet_size ** message_len
    logger.info(f"exact construction: {len(codes)} codes for {params}")
    return codes
