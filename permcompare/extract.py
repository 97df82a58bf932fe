"""
Permission set name extraction.

Turns pasted report text (one record per line, any of the tokenizer's
shapes) into a deduplicated, display-cased list of permission set names.
Header rows, action/date rows and metadata columns are discarded.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .normalize import fold, is_action_date_row, is_action_word, is_date, tokenize_line
from .rules import HEADER_ACTION_MARKER, HEADER_MARKER, NOISE_MARKERS


def _is_noise_token(token: str) -> bool:
    if is_action_word(token) or is_date(token):
        return True
    folded = fold(token)
    return any(marker in folded for marker in NOISE_MARKERS)


def extract_name(line: str) -> Optional[str]:
    """
    Return the canonical permission set name on one raw line, or None.

    Scan the tokens for the first one that is not an action word, a date or a
    metadata column. When every token is noise, reconsider the first token and
    keep it unless it is itself an action word or a date.
    """
    trimmed = line.strip()
    if not trimmed:
        return None

    folded = fold(trimmed)
    if HEADER_MARKER in folded and HEADER_ACTION_MARKER in folded:
        return None
    if is_action_date_row(trimmed):
        return None

    tokens = tokenize_line(line)
    if not tokens:
        return None

    for token in tokens:
        token = token.strip()
        if not token or _is_noise_token(token):
            continue
        if HEADER_MARKER in fold(token):
            # header fragment mid-row: the whole line is metadata
            return None
        return token

    fallback = tokens[0].strip()
    if not fallback or is_action_word(fallback) or is_date(fallback):
        return None
    return fallback


def _canonical_name(line: str) -> Optional[str]:
    # A name taken from a tab column can re-tokenize ("Foo, Bar" -> "Foo");
    # keep only a form that extracts to itself.
    name = extract_name(line)
    while name is not None:
        again = extract_name(name)
        if again == name:
            return name
        name = again
    return None


def extract_names(text: str) -> List[str]:
    """
    Extract names from every line of `text`, first occurrence wins.

    Uniqueness is by case-fold key; the casing of the first occurrence is kept.
    """
    seen: Dict[str, str] = {}
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    for line in text.split("\n"):
        name = _canonical_name(line)
        if name is None:
            continue
        seen.setdefault(fold(name), name)
    return list(seen.values())


def sanitize_text(text: str) -> str:
    """Cleaned text to write back into an input box: one name per line."""
    return "\n".join(extract_names(text))
