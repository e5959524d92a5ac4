# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

"""Public API to generate ID code schemes.

All functions return a list of codes (tuples of integer symbols) where
any two codes differ in more than `redundancy` positions. A marked
animal can therefore still be identified uniquely after `redundancy`
of its marks have been lost.

Which function to use:

    generate_exact_code
        Largest possible scheme, but requires a prime alphabet size and
        total_length <= alphabet_size (parameters are adjusted with a
        warning otherwise).
    generate_greedy_code
        Any alphabet size and length, slow and not necessarily optimal.
    generate_greedy_code_from_candidates
        Like generate_greedy_code, but starts from sequences chosen by
        the caller, e.g. to exclude colour combinations.
    generate_checksum_code
        Robust to exactly one erasure.

Use rabi.labels.codes_to_labels to turn symbols into colour names.
"""

import logging
import threading
import warnings
from typing import Any
from typing import Tuple
from typing import Optional

from . import exact
from . import space
from . import greedy
from . import primes
from . import checksum
from . import parameters
from . import common_types as ct

logger = logging.getLogger(__name__)


def _warn(msg: str, category: type) -> None:
    logger.debug(msg)
    warnings.warn(msg, category, stacklevel=3)


def normalize_exact_params(
    total_length: Any, redundancy: Any, alphabet_size: Any
) -> ct.CodeParams:
    """Validate and adjust parameters for the exact construction.

    A non-prime alphabet is lowered to the nearest smaller prime, a
    total_length larger than the alphabet is clamped. Each adjustment
    emits a warning (PrimalityAdjustment, LengthClamped).
    """
    params = parameters.init_code_params(total_length, redundancy, alphabet_size)

    # upper bound before any adjustment, lowering the alphabet or
    # clamping the length never makes the pool larger
    max_message_len = max(min(params.total_length, params.alphabet_size) - params.redundancy, 1)
    parameters.validate_pool_size(max_message_len, params.alphabet_size)

    prime = primes.prime_at_most(params.alphabet_size)
    if prime != params.alphabet_size:
        msg = (
            "Reed-Solomon codes require the alphabet size to be a prime number."
            f" Automatically adjusting to use an alphabet size {prime} instead"
            f" of the entered value of {params.alphabet_size}."
        )
        _warn(msg, ct.PrimalityAdjustment)
        params = params._replace(alphabet_size=prime)

    if params.total_length > params.alphabet_size:
        msg = (
            "Reed-Solomon coding requires the total length of the ID to be less"
            " than or equal to the alphabet size. total_length being changed to"
            f" {params.alphabet_size} instead of {params.total_length}."
        )
        _warn(msg, ct.LengthClamped)
        params = params._replace(total_length=params.alphabet_size)

        # no message symbols would be left
        parameters.validate_redundancy(params.redundancy, params.total_length)

    parameters.validate_pool_size(params.total_length - params.redundancy, params.alphabet_size)
    return params


def generate_exact_code(total_length: int, redundancy: int, alphabet_size: int) -> ct.Codes:
    """Maximum size code scheme by polynomial oversampling.

    :param total_length: number of positions to be marked on the animal
    :param redundancy: number of erasures that can occur without
        disrupting unique identification
    :param alphabet_size: number of distinct marks (colours) available,
        should be prime
    """
    _, codes = build_exact_code(total_length, redundancy, alphabet_size)
    return codes


def build_exact_code(
    total_length: int, redundancy: int, alphabet_size: int
) -> Tuple[ct.CodeParams, ct.Codes]:
    """Like generate_exact_code, also returns the adjusted parameters."""
    params = normalize_exact_params(total_length, redundancy, alphabet_size)
    return (params, exact.exact_codes(params))


def generate_greedy_code(
    total_length : int,
    redundancy   : int,
    alphabet_size: int,
    num_trials   : int = parameters.DEFAULT_NUM_TRIALS,
    *,
    seed       : Optional[int] = None,
    parallelism: ct.Parallelism = parameters.DEFAULT_PARALLELISM,
    timeout    : Optional[ct.Seconds] = None,
    cancel     : Optional[threading.Event] = None,
    progress_cb: ct.MaybeProgressCallback = None,
) -> ct.Codes:
    """Code scheme from all possible sequences by randomized pruning.

    The pruning is random, so the result is likely smaller than the
    theoretical maximum. The best of num_trials attempts is returned.
    """
    params = parameters.init_code_params(total_length, redundancy, alphabet_size)
    parameters.validate_num_trials(num_trials)
    parameters.validate_parallelism(parallelism)

    pool = space.enumerate_pool(params.total_length, params.alphabet_size)
    return greedy.greedy_codes(
        pool,
        params.redundancy,
        num_trials,
        seed=seed,
        parallelism=parallelism,
        timeout=timeout,
        cancel=cancel,
        progress_cb=progress_cb,
    )


def generate_greedy_code_from_candidates(
    candidates: Any,
    redundancy: int,
    num_trials: int = parameters.DEFAULT_NUM_TRIALS,
    *,
    alphabet_size: Optional[int] = None,
    seed         : Optional[int] = None,
    parallelism  : ct.Parallelism = parameters.DEFAULT_PARALLELISM,
    timeout      : Optional[ct.Seconds] = None,
    cancel       : Optional[threading.Event] = None,
    progress_cb  : ct.MaybeProgressCallback = None,
) -> ct.Codes:
    """Code scheme from a list of acceptable sequences.

    Instead of pruning ALL possible sequences, the caller can apply
    constraints first (e.g. only odd colours at the first position) and
    pass the remaining sequences as candidates.

    :param candidates: list of sequences, or a matrix where each row is
        a sequence. Symbols should be in range(alphabet_size).
    """
    parameters.validate_redundancy(redundancy)
    parameters.validate_num_trials(num_trials)
    parameters.validate_parallelism(parallelism)

    pool = space.init_candidate_pool(candidates, alphabet_size=alphabet_size)
    if len(pool) > 0:
        parameters.validate_redundancy(redundancy, pool.total_length)

    return greedy.greedy_codes(
        pool,
        redundancy,
        num_trials,
        seed=seed,
        parallelism=parallelism,
        timeout=timeout,
        cancel=cancel,
        progress_cb=progress_cb,
    )


def generate_checksum_code(total_length: int, alphabet_size: int) -> ct.Codes:
    """Codes where the symbols of each sum to a multiple of alphabet_size.

    Only robust to a single erasure.
    """
    return checksum.checksum_codes(total_length, alphabet_size)
