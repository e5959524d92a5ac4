# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT
"""Types used across multiple modules."""

from typing import Any
from typing import List
from typing import Tuple
from typing import Callable
from typing import Optional
from typing import NamedTuple

# from typing import TypeAlias
TypeAlias = Any

Symbol: TypeAlias = int
Code  : TypeAlias = Tuple[Symbol, ...]
Codes : TypeAlias = List[Code]

Label       : TypeAlias = str
Labels      : TypeAlias = List[Label]
LabeledCode : TypeAlias = Tuple[Label, ...]
LabeledCodes: TypeAlias = List[LabeledCode]


class CodeParams(NamedTuple):
    total_length : int
    redundancy   : int
    alphabet_size: int


ProgressIncrement    : TypeAlias = float
ProgressCallback     : TypeAlias = Callable[[ProgressIncrement], None]
MaybeProgressCallback: TypeAlias = Optional[ProgressCallback]

Seconds    : TypeAlias = float
Parallelism: TypeAlias = int


class InvalidParameter(ValueError):
    """Relationship between length, redundancy and alphabet violated."""


class InvalidInput(ValueError):
    """Malformed candidate pool or label list."""


class PrimalityAdjustment(UserWarning):
    """Alphabet size lowered to the nearest smaller prime."""


class LengthClamped(UserWarning):
    """Total length reduced to the alphabet size."""


class DegenerateResult(UserWarning):
    """An empty set of codes was produced."""


class SearchInterrupted(UserWarning):
    """Greedy search stopped early by a timeout or cancellation."""
