# This file is part of the rabi project
#
# Copyright (c) 2019-2022 Andrew Burchill - MIT License
# SPDX-License-Identifier: MIT

"""Map numeric codes to human readable labels (e.g. colour names)."""

import logging
from typing import Dict
from typing import List
from typing import Iterable
from typing import Optional
from typing import Sequence

import pylev

from . import common_types as ct

logger = logging.getLogger(__name__)

FUZZY_MATCH_MAX_DIST = 2


def _normalize(label: str) -> str:
    return label.strip().lower()


def validate_labels(labels: Sequence[ct.Label], alphabet_size: Optional[int] = None) -> ct.Labels:
    labels = [str(label) for label in labels]

    if alphabet_size is not None and len(labels) != alphabet_size:
        errmsg = (
            f"Invalid labels, expected one label per symbol"
            f" (alphabet_size={alphabet_size}), got {len(labels)}"
        )
        raise ct.InvalidInput(errmsg)

    normalized = [_normalize(label) for label in labels]
    if len(set(normalized)) != len(normalized):
        raise ct.InvalidInput(f"Invalid labels, duplicate entries in {labels}")

    if any(label == "" for label in normalized):
        raise ct.InvalidInput("Invalid labels, empty label")

    return labels


def codes_to_labels(
    codes        : Iterable[ct.Code],
    labels       : Optional[Sequence[ct.Label]],
    alphabet_size: Optional[int] = None,
) -> List:
    """Replace each symbol s with labels[s].

    If labels is None the codes are returned unchanged, so the mapping
    can be done at any later time.
    """
    codes = [tuple(code) for code in codes]
    if labels is None:
        return codes

    labels = validate_labels(labels, alphabet_size)

    labeled: ct.LabeledCodes = []
    for code in codes:
        for symbol in code:
            if not 0 <= symbol < len(labels):
                errmsg = f"Invalid code {code}, no label for symbol {symbol} ({len(labels)} labels)"
                raise ct.InvalidInput(errmsg)
        labeled.append(tuple(labels[symbol] for symbol in code))
    return labeled


def fuzzy_match(label: str, labels: Sequence[ct.Label]) -> int:
    """Index of the label closest to label.

    Only unambiguous matches within FUZZY_MATCH_MAX_DIST are accepted.
    """
    needle = _normalize(label)

    def dist_fn(candidate: str) -> int:
        dist = pylev.damerau_levenshtein(needle, _normalize(candidate))
        assert isinstance(dist, int)
        return dist

    dists = sorted((dist_fn(candidate), idx) for idx, candidate in enumerate(labels))
    best_dist, best_idx = dists[0]
    is_ambiguous = len(dists) > 1 and dists[1][0] == best_dist

    if best_dist <= FUZZY_MATCH_MAX_DIST and not is_ambiguous:
        logger.info(f"Interpreting label '{label}' as '{labels[best_idx]}'")
        return best_idx
    else:
        errmsg = f"Unknown label: {label}"
        raise ct.InvalidInput(errmsg, label)


def labels_to_codes(labeled_codes: Iterable[Sequence[ct.Label]], labels: Sequence[ct.Label]) -> ct.Codes:
    """Inverse of codes_to_labels."""
    labels = validate_labels(labels)
    index: Dict[str, int] = {_normalize(label): idx for idx, label in enumerate(labels)}

    codes: ct.Codes = []
    for labeled_code in labeled_codes:
        symbols = []
        for label in labeled_code:
            key = _normalize(label)
            if key in index:
                symbols.append(index[key])
            else:
                symbols.append(fuzzy_match(label, labels))
        codes.append(tuple(symbols))
    return codes
