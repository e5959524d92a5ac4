# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

"""Simple codes with a single checksum symbol.

The last symbol is chosen so that the sum of all symbols is a multiple
of the alphabet size. If exactly one symbol is lost it can be
recovered from that equation. This does NOT extend to two or more
erasures, use rabi.exact or rabi.greedy for that.
"""

import logging

from . import exact
from . import parameters
from . import common_types as ct

logger = logging.getLogger(__name__)


def checksum_symbol(prefix: ct.Code, alphabet_size: int) -> ct.Symbol:
    return (alphabet_size - (sum(prefix) % alphabet_size)) % alphabet_size


def checksum_codes(total_length: int, alphabet_size: int) -> ct.Codes:
    parameters.validate_total_length(total_length)
    parameters.validate_alphabet_size(alphabet_size)
    parameters.validate_pool_size(total_length - 1, alphabet_size)

    prefixes = exact.iter_messages(total_length - 1, alphabet_size)
    codes    = [prefix + (checksum_symbol(prefix, alphabet_size),) for prefix in prefixes]

    assert len(codes) == alphabet_size ** (total_length - 1)
    logger.info(f"Each ID sequence sums to a multiple of {alphabet_size}.")
    return codes
