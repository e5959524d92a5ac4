# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

"""Randomized greedy construction of codes with a minimum distance.

Think of every candidate as a vertex of a conflict graph, with an edge
between any two candidates that are too similar (distance <=
redundancy). A valid code is an independent set of this graph. Finding
a maximum independent set is NP-hard, so each trial builds a maximal
one greedily:

    1. pick a random surviving candidate and accept it
    2. drop every survivor within distance <= redundancy of it
    3. repeat until no candidates survive

The trial with the most accepted codes wins. More trials cost more time
but never make the best result smaller.
"""

import time
import logging
import warnings
import threading
import concurrent.futures
from typing import List
from typing import Optional
from typing import NamedTuple

import numpy as np

from . import distance
from . import parameters
from . import space
from . import common_types as ct

logger = logging.getLogger(__name__)


class TrialResult(NamedTuple):
    trial_idx: int
    # row indexes into the candidate pool, in order of acceptance
    indexes  : List[int]
    completed: bool


class StopSignal:
    """Combines an optional timeout with an optional cancel event."""

    def __init__(
        self,
        timeout: Optional[ct.Seconds]      = None,
        cancel : Optional[threading.Event] = None,
    ) -> None:
        if timeout is None:
            self.deadline: Optional[float] = None
        else:
            self.deadline = time.monotonic() + timeout
        self.cancel = cancel

    def is_set(self) -> bool:
        if self.cancel is not None and self.cancel.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline


def run_trial(
    pool      : space.CandidatePool,
    redundancy: int,
    rng       : np.random.Generator,
    trial_idx : int = 0,
    stop      : Optional[StopSignal] = None,
) -> TrialResult:
    # Each trial works on a private copy of the candidates which is
    # compacted in place, survivors always occupy work[:num_alive].
    work      = pool.matrix.copy()
    row_ids   = np.arange(len(pool))
    num_alive = len(pool)
    accepted: List[int] = []

    while num_alive > 0:
        if stop is not None and stop.is_set():
            logger.debug(f"trial {trial_idx} interrupted with {num_alive} candidates left")
            return TrialResult(trial_idx, accepted, completed=False)

        pick = int(rng.integers(num_alive))
        accepted.append(int(row_ids[pick]))

        chosen = work[pick].copy()
        dists  = distance.hamming_batch(chosen, work[:num_alive])
        # survival is strictly distance > redundancy, this also drops
        # the chosen candidate itself (distance 0)
        survivors = dists > redundancy

        new_num_alive           = int(np.count_nonzero(survivors))
        work[:new_num_alive]    = work[:num_alive][survivors]
        row_ids[:new_num_alive] = row_ids[:num_alive][survivors]
        num_alive = new_num_alive

    logger.debug(f"trial {trial_idx}: {len(accepted)} codes")
    return TrialResult(trial_idx, accepted, completed=True)


def best_result(results: List[TrialResult]) -> TrialResult:
    """Largest result, ties go to the lowest trial index."""
    if not results:
        raise ValueError("best_result requires at least one result")

    return max(results, key=lambda res: (len(res.indexes), -res.trial_idx))


def init_rngs(num_trials: int, seed: Optional[int] = None) -> List[np.random.Generator]:
    # Trial i gets the same generator for a given seed, no matter how
    # many trials are run in total.
    seed_seq = np.random.SeedSequence(seed)
    logger.debug(f"greedy search entropy: {seed_seq.entropy}")
    return [np.random.default_rng(child) for child in seed_seq.spawn(num_trials)]


def _run_trials(
    pool       : space.CandidatePool,
    redundancy : int,
    rngs       : List[np.random.Generator],
    stop       : StopSignal,
    parallelism: ct.Parallelism,
    progress_cb: ct.MaybeProgressCallback,
) -> List[TrialResult]:
    progress_incr = 100 / len(rngs)
    results: List[TrialResult] = []

    if parallelism == 1:
        for trial_idx, rng in enumerate(rngs):
            results.append(run_trial(pool, redundancy, rng, trial_idx, stop))
            if progress_cb:
                progress_cb(progress_incr)
        return results

    with concurrent.futures.ThreadPoolExecutor(max_workers=parallelism) as executor:
        futures = [
            executor.submit(run_trial, pool, redundancy, rng, trial_idx, stop)
            for trial_idx, rng in enumerate(rngs)
        ]
        for future in concurrent.futures.as_completed(futures):
            results.append(future.result())
            if progress_cb:
                progress_cb(progress_incr)

    return results


def greedy_codes(
    pool       : space.CandidatePool,
    redundancy : int,
    num_trials : int = parameters.DEFAULT_NUM_TRIALS,
    seed       : Optional[int] = None,
    parallelism: ct.Parallelism = 1,
    timeout    : Optional[ct.Seconds] = None,
    cancel     : Optional[threading.Event] = None,
    progress_cb: ct.MaybeProgressCallback = None,
) -> ct.Codes:
    """Best of num_trials greedy constructions over pool.

    Every pair of returned codes has a distance > redundancy. If the
    search is stopped by timeout or cancel, the best (possibly
    partial, but still valid) result found so far is returned.
    """
    parameters.validate_num_trials(num_trials)
    parameters.validate_parallelism(parallelism)

    if len(pool) == 0:
        warnings.warn("Empty candidate pool, no codes generated.", ct.DegenerateResult)
        return []

    rngs    = init_rngs(num_trials, seed)
    stop    = StopSignal(timeout, cancel)
    results = _run_trials(pool, redundancy, rngs, stop, parallelism, progress_cb)
    best    = best_result(results)

    num_completed = sum(1 for res in results if res.completed)
    if num_completed < num_trials:
        msg = (
            f"Search interrupted after {num_completed} of {num_trials} trials,"
            f" returning the best of what was found ({len(best.indexes)} codes)."
        )
        logger.debug(msg)
        warnings.warn(msg, ct.SearchInterrupted)

    codes = [pool.code_at(idx) for idx in best.indexes]
    if not codes:
        warnings.warn("No codes generated.", ct.DegenerateResult)

    logger.info(f"greedy construction: best of {num_trials} trials has {len(codes)} codes")
    return codes
