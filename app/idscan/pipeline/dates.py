from __future__ import annotations

import re

COMPACT_DATE_RE = re.compile(r"[0-9]{6}")
# Two-digit years up to this value are 20xx, the rest 19xx (1930-2029).
CENTURY_PIVOT = 29


def normalize_compact_date(value: str) -> str:
    """Convert an MRZ-style YYMMDD string to YYYY-MM-DD.

    Returns "" for anything that is not exactly six ASCII digits. Month and
    day are copied verbatim, so impossible calendar dates pass through.
    """
    if not value or not COMPACT_DATE_RE.fullmatch(value):
        return ""
    yy = int(value[0:2])
    year = 2000 + yy if yy <= CENTURY_PIVOT else 1900 + yy
    return f"{year}-{value[2:4]}-{value[4:6]}"
