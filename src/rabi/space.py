# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

"""Sequence space and candidate pools.

A candidate pool is a row-major matrix where each row is one candidate
code. It is either the full enumeration of alphabet_size ** total_length
sequences, or a subset chosen by the caller to reflect additional
constraints (e.g. only odd colours at the first position).
"""

import logging
from typing import Any
from typing import Iterator
from typing import Optional
from typing import NamedTuple

import numpy as np

from . import parameters
from . import common_types as ct

logger = logging.getLogger(__name__)

# dtype used while validating, pools store the smallest dtype that
# holds every symbol of the alphabet
SYMBOL_DTYPE = np.int64


class CandidatePool(NamedTuple):

    # shape (num_candidates, total_length), read-only
    matrix       : np.ndarray
    alphabet_size: int

    @property
    def total_length(self) -> int:
        return int(self.matrix.shape[1])

    def __len__(self) -> int:
        return int(self.matrix.shape[0])

    def code_at(self, idx: int) -> ct.Code:
        return tuple(int(s) for s in self.matrix[idx])

    def iter_codes(self) -> Iterator[ct.Code]:
        for row in self.matrix.tolist():
            yield tuple(row)


def pool_dtype(alphabet_size: int) -> np.dtype:
    max_symbol = min(alphabet_size - 1, int(np.iinfo(SYMBOL_DTYPE).max))
    return np.min_scalar_type(max_symbol)


def _readonly(matrix: np.ndarray) -> np.ndarray:
    matrix.setflags(write=False)
    return matrix


def enumerate_matrix(total_length: int, alphabet_size: int) -> np.ndarray:
    """All sequences of total_length over range(alphabet_size).

    Rows are in itertools.product order, the last position varies
    fastest, so row i is the base alphabet_size representation of i.
    """
    num_rows = alphabet_size ** total_length
    indexes  = np.arange(num_rows, dtype=SYMBOL_DTYPE)
    columns  = [
        (indexes // (alphabet_size ** (total_length - 1 - pos))) % alphabet_size
        for pos in range(total_length)
    ]
    return np.stack(columns, axis=1)


def enumerate_pool(total_length: int, alphabet_size: int) -> CandidatePool:
    parameters.validate_total_length(total_length)
    parameters.validate_alphabet_size(alphabet_size)
    pool_size = parameters.validate_pool_size(total_length, alphabet_size)
    logger.debug(f"enumerating {pool_size} candidates ({alphabet_size}**{total_length})")

    matrix = enumerate_matrix(total_length, alphabet_size).astype(pool_dtype(alphabet_size))
    return CandidatePool(_readonly(matrix), alphabet_size)


def _as_matrix(candidates: Any) -> np.ndarray:
    if isinstance(candidates, CandidatePool):
        return candidates.matrix

    if not isinstance(candidates, np.ndarray):
        try:
            candidates = [list(c) for c in candidates]
        except TypeError as ex:
            errmsg = "Invalid candidates, expected a list of sequences or a matrix"
            raise ct.InvalidInput(errmsg) from ex

        if len(candidates) == 0:
            return np.zeros((0, 0), dtype=SYMBOL_DTYPE)

    try:
        matrix = np.array(candidates)
    except ValueError as ex:
        errmsg = "Invalid candidates, all sequences must have the same length"
        raise ct.InvalidInput(errmsg) from ex

    if matrix.ndim != 2:
        if matrix.size == 0:
            return np.zeros((0, 0), dtype=SYMBOL_DTYPE)
        errmsg = (
            "Invalid candidates, expected a list of sequences or a matrix where"
            f" each row is a sequence, got an array with {matrix.ndim} dimension(s)"
        )
        raise ct.InvalidInput(errmsg)

    return matrix


def _as_symbols(matrix: np.ndarray) -> np.ndarray:
    if matrix.size == 0:
        return matrix.astype(SYMBOL_DTYPE)

    if matrix.dtype == np.bool_ or not (
        np.issubdtype(matrix.dtype, np.integer) or np.issubdtype(matrix.dtype, np.floating)
    ):
        raise ct.InvalidInput(f"Invalid candidates, symbols must be integers, got {matrix.dtype}")

    if np.issubdtype(matrix.dtype, np.floating):
        # matrices from spreadsheets often hold whole numbers as floats
        if not np.all(np.isfinite(matrix)) or not np.all(matrix == np.round(matrix)):
            raise ct.InvalidInput("Invalid candidates, symbols must be whole numbers")

    return matrix.astype(SYMBOL_DTYPE)


def init_candidate_pool(
    candidates   : Any,
    alphabet_size: Optional[int] = None,
    total_length : Optional[int] = None,
) -> CandidatePool:
    """Validate candidates and build a CandidatePool.

    :param candidates: a list of sequences or a 2D matrix (one sequence
        per row).
    :param alphabet_size: if given, every symbol must be in
        range(alphabet_size). Otherwise the alphabet is inferred as the
        largest symbol + 1.
    :param total_length: if given, every sequence must have this length.
    """
    matrix = _as_symbols(_as_matrix(candidates))

    if len(matrix) > 0 and matrix.shape[1] == 0:
        raise ct.InvalidInput("Invalid candidates, sequences must not be empty")

    if total_length is not None and len(matrix) > 0 and matrix.shape[1] != total_length:
        errmsg = f"Invalid candidates, expected sequences of length {total_length}, got {matrix.shape[1]}"
        raise ct.InvalidInput(errmsg)

    if len(matrix) > 0 and matrix.min() < 0:
        raise ct.InvalidInput("Invalid candidates, symbols must not be negative")

    max_symbol = int(matrix.max()) if matrix.size else 0

    if alphabet_size is None:
        alphabet_size = max(max_symbol + 1, parameters.MIN_ALPHABET_SIZE)
    else:
        try:
            parameters.validate_alphabet_size(alphabet_size)
        except ct.InvalidParameter as ex:
            raise ct.InvalidInput(str(ex)) from ex

        if max_symbol >= alphabet_size:
            errmsg = (
                f"Invalid candidates, symbol {max_symbol} out of range"
                f" for alphabet_size={alphabet_size}"
            )
            raise ct.InvalidInput(errmsg)

    logger.debug(f"candidate pool with {len(matrix)} sequences, alphabet_size={alphabet_size}")
    matrix = np.ascontiguousarray(matrix, dtype=pool_dtype(alphabet_size))
    return CandidatePool(_readonly(matrix), alphabet_size)
