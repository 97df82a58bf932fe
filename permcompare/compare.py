from __future__ import annotations

import logging
from typing import List, Mapping, NamedTuple, Sequence

from .extract import extract_names
from .normalize import fold

logger = logging.getLogger(__name__)

# case-folded permission name -> description
DescriptionTable = Mapping[str, str]


class ComparisonRow(NamedTuple):
    name: str
    description: str


def missing_names(primary_names: Sequence[str], mirror_names: Sequence[str]) -> List[str]:
    """Mirror names the primary lacks, case-fold ascending."""
    primary_keys = {fold(name) for name in primary_names}

    missing = [name for name in mirror_names if fold(name) not in primary_keys]
    logger.debug(
        "compared %d primary / %d mirror names, %d missing",
        len(primary_keys), len(mirror_names), len(missing),
    )
    return sorted(missing, key=fold)


def compare_names(
    primary_names: Sequence[str],
    mirror_names: Sequence[str],
    descriptions: DescriptionTable,
) -> List[ComparisonRow]:
    """Same as `compare`, over names already taken from `extract_names`."""
    return [
        ComparisonRow(name, descriptions.get(fold(name), ""))
        for name in missing_names(primary_names, mirror_names)
    ]


def compare(
    primary_text: str,
    mirror_text: str,
    descriptions: DescriptionTable,
) -> List[ComparisonRow]:
    """
    Report what the mirror has that the primary lacks.

    Matching is case-insensitive; each name is annotated from `descriptions`
    (empty string when absent). An empty list means nothing is missing.
    """
    return compare_names(extract_names(primary_text), extract_names(mirror_text), descriptions)
