from __future__ import annotations

from typing import Iterable

from ..schemas import FORM_COLUMNS, FormFields

CSV_FILENAME = "customer_ocr.csv"
CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


def _quote(value: str) -> str:
    return '"' + (value or "").replace('"', '""') + '"'


def to_csv(rows: Iterable[FormFields]) -> str:
    # Header is bare; every data value is quoted. No trailing newline.
    lines = [",".join(FORM_COLUMNS)]
    lines.extend(",".join(_quote(value) for value in row.row()) for row in rows)
    return "\n".join(lines)
