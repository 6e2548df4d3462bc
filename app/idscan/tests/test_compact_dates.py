from __future__ import annotations

import re

import pytest

from idscan.pipeline.dates import normalize_compact_date


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("900101", "1990-01-01"),
        ("250101", "2025-01-01"),
        ("291231", "2029-12-31"),
        ("300101", "1930-01-01"),
        ("000229", "2000-02-29"),
        ("991399", "1999-13-99"),
    ],
)
def test_century_window_and_verbatim_month_day(raw: str, expected: str) -> None:
    assert normalize_compact_date(raw) == expected


@pytest.mark.parametrize("raw", ["", "90010", "9001011", "90O101", "<<<<<<", " 90101", "٩٠٠١٠١"])
def test_malformed_input_yields_empty_string(raw: str) -> None:
    assert normalize_compact_date(raw) == ""


def test_output_shape_for_every_year() -> None:
    for yy in range(100):
        value = normalize_compact_date(f"{yy:02d}0615")
        assert re.fullmatch(r"\d{4}-06-15", value)
        assert int(value[:4]) == (2000 + yy if yy <= 29 else 1900 + yy)
