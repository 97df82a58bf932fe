"""
Permission set reference table loading.

Responsibilities:
- encoding detection + decode (charset-normalizer)
- newline normalization
- delimiter detection from the header row
- name -> description mapping keyed by case-fold
- per-row warnings for rows that cannot contribute
"""

from __future__ import annotations

import csv
import hashlib
import io
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Tuple, Union

from charset_normalizer import from_bytes

from .compare import DescriptionTable
from .normalize import fold
from .rules import (
    REFERENCE_DEFAULT_DELIMITER,
    REFERENCE_DELIMITERS,
    REFERENCE_DESCRIPTION_COLUMN,
    REFERENCE_MIN_COLUMNS,
    REFERENCE_NAME_COLUMN,
)

logger = logging.getLogger(__name__)


class DescriptionLoadError(Exception):
    """Raised when the reference table file cannot be read."""
    pass


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def decode_reference_bytes(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode reference table bytes to text with LF newlines.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is dropped rather than kept as part of the header.
    - If decode fails, fall back to UTF-8, then to replacement characters.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and (decode_used.lower().replace("-", "_") in ("utf_8", "utf8")):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        decode_fallback = True

    text = text.replace("\r\n", "\n").replace("\r", "\n")

    return text, {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }


def _detect_delimiter(header: str) -> str:
    if not header:
        return REFERENCE_DEFAULT_DELIMITER
    try:
        return csv.Sniffer().sniff(header, delimiters=REFERENCE_DELIMITERS).delimiter
    except csv.Error:
        return REFERENCE_DEFAULT_DELIMITER


def parse_reference_table(text: str) -> Tuple[DescriptionTable, List[Dict[str, Any]]]:
    """
    Parse reference table text into a case-folded name -> description mapping.

    The first row is a header. Name is the 3rd column, description the 4th.
    Quoted fields follow CSV rules, so doubled quotes unescape to one.
    """
    warnings: List[Dict[str, Any]] = []
    table: Dict[str, str] = {}

    delimiter = _detect_delimiter(text.split("\n", 1)[0])
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)

    for i, row in enumerate(reader):
        if i == 0 or not row:
            continue

        if len(row) < REFERENCE_MIN_COLUMNS:
            warnings.append({
                "row": i + 1,
                "column": None,
                "issue": "row_too_short",
                "value": str(len(row)),
                "action": "skipped",
            })
            continue

        name = row[REFERENCE_NAME_COLUMN].strip()
        if not name:
            warnings.append({
                "row": i + 1,
                "column": str(REFERENCE_NAME_COLUMN + 1),
                "issue": "empty_name",
                "value": None,
                "action": "skipped",
            })
            continue

        table[fold(name)] = row[REFERENCE_DESCRIPTION_COLUMN].strip()

    for warning in warnings:
        logger.debug("reference row %s %s, skipped", warning["row"], warning["issue"])

    return MappingProxyType(table), warnings


def load_descriptions_bytes(raw: bytes) -> Dict[str, Any]:
    """
    Decode and parse an uploaded reference table.

    Returns a dict with the table plus a report matching the API envelope.
    """
    text, encoding = decode_reference_bytes(raw)
    table, warnings = parse_reference_table(text)
    logger.info(
        "loaded %d permission set descriptions (%s, %d rows skipped)",
        len(table), encoding["decode_used"], len(warnings),
    )
    return {
        "table": table,
        "sha256": _sha256_hex(raw),
        "encoding": encoding,
        "warnings": warnings,
    }


def load_descriptions(file_path: Union[str, Path]) -> DescriptionTable:
    """
    Load the reference table from disk.

    Raises:
        DescriptionLoadError: If the file is missing or cannot be read.
    """
    path = Path(file_path)

    if not path.exists():
        raise DescriptionLoadError(f"File not found: {file_path}")

    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DescriptionLoadError(f"Failed to read reference file: {e}")

    return load_descriptions_bytes(raw)["table"]
