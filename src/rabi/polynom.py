# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

"""Polynomial evaluation over a prime field.

Reed-Solomon style oversampling treats a message as the coefficients
of a polynomial and samples that polynomial at more points than there
are coefficients. See https://research.swtch.com/field for a gentle
introduction.
"""

from typing import List
from typing import Callable
from typing import Sequence

from . import gf

Coefficients = List[gf.GFP]


def poly_eval_fn(field: gf.FieldGFP, coeffs: Coefficients) -> Callable[[int], int]:
    """Return function to evaluate polynomial at x."""
    # The coefficients of the polynomial are ordered in ascending
    # powers of x, so coeffs = [2, 5, 3] represents 2x° + 5x¹ + 3x²

    def eval_at(at_x: int) -> int:
        """Evaluate polynomial at x (Horner's method)."""
        x = field[at_x]
        y = field[0]
        for coeff in reversed(coeffs):
            y = y * x + coeff
        return y.val

    return eval_at


def message_coeffs(field: gf.FieldGFP, message: Sequence[int]) -> Coefficients:
    return [field[m] for m in message]


def oversample(field: gf.FieldGFP, message: Sequence[int], num_points: int) -> List[int]:
    """Evaluate the message polynomial at x = 0, 1, ..., num_points - 1."""
    if num_points > field.order:
        errmsg = f"Cannot sample {num_points} distinct points in GF({field.order})"
        raise ValueError(errmsg)

    eval_at = poly_eval_fn(field, message_coeffs(field, message))
    return [eval_at(x) for x in range(num_points)]
