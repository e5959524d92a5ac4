# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

"""Assistance with choosing ID scheme parameters.

Tabulates the maximum number of unique and robust IDs

    max # of IDs = alphabet_size ** (total_length - redundancy)

for parameter combinations around the given values. The exact
construction (rabi.codes.generate_exact_code) reaches these values.
Combinations it does not accept are marked, other generators can be
used for them but may not reach the maximum.
"""

from typing import List
from typing import Optional
from typing import NamedTuple

from . import primes
from . import parameters

SPREAD = 2

EXACT_UNSUPPORTED_NOTE = (
    "*: This indicates this parameter combination is outside"
    " what generate_exact_code accepts as input"
)


class Cell(NamedTuple):
    max_ids          : Optional[int]
    exact_unsupported: bool


class AdvisoryTable(NamedTuple):
    redundancy    : int
    total_lengths : List[int]
    alphabet_sizes: List[int]
    # rows indexed by total_length, columns by alphabet_size
    cells         : List[List[Cell]]


def _around(val: int, min_val: int) -> List[int]:
    return [v for v in range(val - SPREAD, val + SPREAD + 1) if v >= min_val]


def max_ids(total_length: int, redundancy: int, alphabet_size: int) -> Optional[int]:
    message_len = total_length - redundancy
    if message_len < 0:
        return None
    else:
        return alphabet_size ** message_len


def is_exact_supported(total_length: int, alphabet_size: int) -> bool:
    return total_length <= alphabet_size and primes.is_prime(alphabet_size)


def how_many(
    total_length : int = parameters.DEFAULT_TOTAL_LENGTH,
    redundancy   : int = parameters.DEFAULT_REDUNDANCY,
    alphabet_size: int = parameters.DEFAULT_ALPHABET_SIZE,
) -> List[AdvisoryTable]:
    total_lengths  = _around(total_length , min_val=1)
    redundancies   = _around(redundancy   , min_val=1)
    alphabet_sizes = _around(alphabet_size, min_val=parameters.MIN_ALPHABET_SIZE)

    tables = []
    for red in redundancies:
        cells = [
            [
                Cell(max_ids(length, red, alpha), not is_exact_supported(length, alpha))
                for alpha in alphabet_sizes
            ]
            for length in total_lengths
        ]
        tables.append(AdvisoryTable(red, total_lengths, alphabet_sizes, cells))
    return tables


def _fmt_cell(cell: Cell) -> str:
    if cell.max_ids is None:
        return "NA"
    elif cell.exact_unsupported:
        return f"{cell.max_ids}*"
    else:
        return str(cell.max_ids)


def format_table(table: AdvisoryTable) -> List[str]:
    row_labels = [f"length: {length}" for length in table.total_lengths]
    col_labels = [f"alphabet: {alpha}" for alpha in table.alphabet_sizes]
    rows       = [[_fmt_cell(cell) for cell in row] for row in table.cells]

    label_width = max(len(label) for label in row_labels)
    col_widths  = [
        max([len(col_labels[i])] + [len(row[i]) for row in rows])
        for i in range(len(col_labels))
    ]

    header = " " * label_width + "  " + "  ".join(
        label.rjust(width) for label, width in zip(col_labels, col_widths)
    )
    lines = [f"redundancy: {table.redundancy}", header]
    for row_label, row in zip(row_labels, rows):
        cells = "  ".join(val.rjust(width) for val, width in zip(row, col_widths))
        lines.append(row_label.ljust(label_width) + "  " + cells)
    return lines


def format_how_many(tables: List[AdvisoryTable]) -> str:
    blocks = ["\n".join(format_table(table)) for table in tables]
    return "\n\n".join(blocks + [EXACT_UNSUPPORTED_NOTE])
