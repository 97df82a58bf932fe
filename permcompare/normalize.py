"""
Line-level normalization for pasted permission reports.

Responsibilities:
- one shared case-fold key for every comparison site
- date / action-date row predicates
- splitting a raw line into ordered field tokens
"""

from __future__ import annotations

import re
from typing import List

from .rules import (
    ACTION_WORDS,
    DATE_PATTERN,
    MULTI_SPACE_PATTERN,
    TOKEN_DELIMITER_COMMA,
    TOKEN_DELIMITER_TAB,
)

_DATE_RE = re.compile(DATE_PATTERN)
_ACTION_PREFIX_RE = re.compile(
    r"(?:" + "|".join(sorted(ACTION_WORDS)) + r")\s+", re.IGNORECASE
)
_MULTI_SPACE_RE = re.compile(MULTI_SPACE_PATTERN)


def fold(value: str) -> str:
    """Case-fold key used for set membership, sorting and description lookup."""
    return value.casefold()


def is_action_word(value: str) -> bool:
    return fold(value.strip()) in ACTION_WORDS


def is_date(value: str) -> bool:
    """True when the whole value is a bare D/D/Y date like 3/14/2024 or 12/1/24."""
    return _DATE_RE.fullmatch(value) is not None


def is_action_date_row(line: str) -> bool:
    """
    True for audit rows such as "add 3/14/2024" or "Remove   1/2/24".

    Composed from the verb prefix check and `is_date` on the remainder.
    """
    match = _ACTION_PREFIX_RE.match(line)
    if match is None:
        return False
    return is_date(line[match.end():])


def _split_trimmed(line: str, delimiter: str) -> List[str]:
    return [part.strip() for part in line.split(delimiter) if part.strip()]


def tokenize_line(line: str) -> List[str]:
    """
    Split one raw line into ordered tokens.

    Rules (first match wins):
    - tab present: split on tabs, whatever the token count
    - runs of 2+ whitespace, only if that yields more than one token
    - comma present: split on commas
    - otherwise the trimmed line is the only token (possibly "")
    """
    if TOKEN_DELIMITER_TAB in line:
        return _split_trimmed(line, TOKEN_DELIMITER_TAB)

    tokens = [part.strip() for part in _MULTI_SPACE_RE.split(line.strip()) if part.strip()]
    if len(tokens) > 1:
        return tokens

    if TOKEN_DELIMITER_COMMA in line:
        return _split_trimmed(line, TOKEN_DELIMITER_COMMA)

    return [line.strip()]
