"""
Permission-set extraction rules.

This file exists to make the heuristics explicit and enforceable.
Keyword matches are English-only.
"""

ACTION_WORDS = frozenset({"add", "del", "delete", "remove"})

# Substrings marking metadata columns rather than names
NOISE_MARKERS = ("expires on", "date assigned")

# A token containing this is never a name; the whole line is dropped
HEADER_MARKER = "permission set name"
HEADER_ACTION_MARKER = "action"

# D{1,2}/D{1,2}/D{2,4}, ASCII digits only
DATE_PATTERN = r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{2,4}"

TOKEN_DELIMITER_TAB = "\t"
TOKEN_DELIMITER_COMMA = ","
MULTI_SPACE_PATTERN = r"\s{2,}"

# Reference table: header row, then name in the 3rd column, description in the 4th
REFERENCE_NAME_COLUMN = 2
REFERENCE_DESCRIPTION_COLUMN = 3
REFERENCE_MIN_COLUMNS = 4
REFERENCE_DELIMITERS = [",", ";", "\t", "|"]
REFERENCE_DEFAULT_DELIMITER = ","

EMPTY_RESULT_TITLE = "No missing permissions."
EMPTY_RESULT_DETAIL = "The user already has all permission sets listed for the mirror user."
