# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

"""Prime field GF(p) for codeword evaluation.

Only addition and multiplication are needed: a codeword is a message
polynomial evaluated with Horner's method, which never divides.
Symbols are plain integers everywhere else in rabi.
"""

from typing import Union

from . import primes

Operand = Union[int, 'GFP']


class GFP:
    """Element of GF(order), with order prime."""

    __slots__ = ('val', 'order')

    val  : int
    order: int

    def __init__(self, val: int, order: int) -> None:
        self.val   = val % order
        self.order = order

    def _operand_val(self, other: Operand) -> int:
        if isinstance(other, GFP):
            if other.order != self.order:
                errmsg = f"Mixed fields GF({self.order}) and GF({other.order})"
                raise ValueError(errmsg)
            return other.val
        elif isinstance(other, int):
            return other
        else:
            raise TypeError(f"Invalid operand {other!r} for GF({self.order})")

    def __add__(self, other: Operand) -> 'GFP':
        return GFP(self.val + self._operand_val(other), self.order)

    __radd__ = __add__

    def __mul__(self, other: Operand) -> 'GFP':
        return GFP(self.val * self._operand_val(other), self.order)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (GFP, int)):
            return self.val == self._operand_val(other) % self.order
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.val, self.order))

    def __repr__(self) -> str:
        return f"GFP({self.val}, order={self.order})"


class FieldGFP:

    order: int

    def __init__(self, order: int) -> None:
        if not primes.is_prime(order):
            raise ValueError(f"Invalid field order {order}, must be prime")
        self.order = order

    def __getitem__(self, val: int) -> GFP:
        return GFP(val, self.order)

    def __repr__(self) -> str:
        return f"FieldGFP({self.order})"
