from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from ..schemas import ThaiIDRecord

LOGGER = logging.getLogger(__name__)

LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
NON_DIGIT_RE = re.compile(r"[^0-9]")
ID_NUMBER_RE = re.compile(r"\b[0-9]{13}\b", re.ASCII)
DOB_RE = re.compile(r"\b([0-9]{2})[/-]([0-9]{2})[/-]([0-9]{4})\b", re.ASCII)
THAI_RUN_RE = re.compile(r"[\u0E00-\u0E7F]{2,}")
NAME_LABEL_RE = re.compile(r"(Name|Surname|Mr\.?|Mrs\.?|Miss|Given|Last)", re.IGNORECASE)
NAME_LINE_RE = re.compile(r"^[A-Z][a-z]+\s+[A-Z][a-z]+")
NAME_PAIR_RE = re.compile(r"([A-Z][a-z]+)\s+([A-Z][a-z]+)")


def _find_id_number(text: str) -> Optional[str]:
    # Boundaries are evaluated on the digits-only stream, so the whole
    # stream has to be the 13-digit number.
    match = ID_NUMBER_RE.search(NON_DIGIT_RE.sub("", text))
    return match.group(0) if match else None


def _find_date_of_birth(text: str) -> Optional[str]:
    match = DOB_RE.search(text)
    if not match:
        return None
    day, month, year = match.groups()
    return f"{year}-{month}-{day}"


def _first_line(lines: List[str], pattern: re.Pattern) -> Optional[str]:
    return next((line for line in lines if pattern.search(line)), None)


def parse_thai_id(text: str) -> Optional[ThaiIDRecord]:
    """Best-effort field detection for Thai national ID card text.

    Each detector runs independently; only the fields it finds are set.
    Returns None when nothing was detected.
    """
    text = text or ""
    fields: Dict[str, str] = {}

    id_number = _find_id_number(text)
    if id_number:
        fields["id_number"] = id_number

    dob = _find_date_of_birth(text)
    if dob:
        fields["date_of_birth"] = dob

    lines = [line.strip() for line in LINE_SPLIT_RE.split(text) if line.strip()]
    thai_line = _first_line(lines, THAI_RUN_RE)
    if thai_line:
        fields["name_th"] = thai_line

    name_line = _first_line(lines, NAME_LABEL_RE) or _first_line(lines, NAME_LINE_RE)
    if name_line:
        pair = NAME_PAIR_RE.search(name_line)
        if pair:
            fields["first_name_en"], fields["last_name_en"] = pair.group(1), pair.group(2)

    if not fields:
        return None
    LOGGER.debug("Thai ID detectors matched %s", sorted(fields))
    return ThaiIDRecord(**fields)


class ThaiIDParser:
    name = "thai_id"

    def try_parse(self, text: str) -> Optional[ThaiIDRecord]:
        return parse_thai_id(text)
