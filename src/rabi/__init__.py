# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT
"""rabi: Robust Animal-Based IDs.

A cli app and library to generate colour (or symbol) coding schemes
used to mark and identify individual animals. Codes remain unique even
after some of their marks are lost.
"""

__version__ = "2022.1009-beta"

from .codes import generate_exact_code
from .codes import generate_greedy_code
from .codes import generate_checksum_code
from .codes import generate_greedy_code_from_candidates
from .labels import codes_to_labels
from .labels import labels_to_codes
from .advisory import how_many
from .advisory import format_how_many

__all__ = [
    'generate_exact_code',
    'generate_greedy_code',
    'generate_checksum_code',
    'generate_greedy_code_from_candidates',
    'codes_to_labels',
    'labels_to_codes',
    'how_many',
    'format_how_many',
]
