from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..schemas import MRZRecord
from .dates import normalize_compact_date

LOGGER = logging.getLogger(__name__)

TD3_LINE_LENGTH = 44
LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
WHITESPACE_RE = re.compile(r"\s+")
FILLER_RUN_RE = re.compile(r"<+")
SEX_CODES = {"F": "Female", "M": "Male"}


def extract_td3_lines(text: str) -> List[str]:
    """Return the first two 44-character lines after whitespace removal."""
    lines: List[str] = []
    for raw in LINE_SPLIT_RE.split(text or ""):
        line = WHITESPACE_RE.sub("", raw).upper()
        if len(line) == TD3_LINE_LENGTH:
            lines.append(line)
        if len(lines) == 2:
            break
    return lines


def _clean_name(value: str) -> str:
    return FILLER_RUN_RE.sub(" ", value).strip()


def _split_names(name_field: str) -> tuple[str, str]:
    primary, _, secondary = name_field.partition("<<")
    return _clean_name(primary), _clean_name(secondary)


def parse_mrz(text: str) -> Optional[MRZRecord]:
    lines = extract_td3_lines(text)
    if len(lines) < 2:
        return None
    line1, line2 = lines

    # Check digits (positions 9, 19, 27, 42, 43 of line 2) are not verified.
    last_name, first_name = _split_names(line1[5:])
    record = MRZRecord(
        document_type=line1[0:1],
        issuing_country=line1[2:5],
        last_name=last_name,
        first_name=first_name,
        document_number=line2[0:9].replace("<", ""),
        nationality=line2[10:13].replace("<", ""),
        date_of_birth=normalize_compact_date(line2[13:19]),
        sex=SEX_CODES.get(line2[20:21], "Unspecified"),
        date_of_expiry=normalize_compact_date(line2[21:27]),
    )
    LOGGER.debug("MRZ decoded document number %s", record.document_number)
    return record


class MRZParser:
    name = "mrz"

    def try_parse(self, text: str) -> Optional[MRZRecord]:
        return parse_mrz(text)
