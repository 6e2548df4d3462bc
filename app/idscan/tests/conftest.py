import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


MRZ_LINE1 = "P<THADOE<<JOHN" + "<" * 30
MRZ_LINE2 = "AB12345670THA9001015M2501017" + "<" * 14 + "04"

THAI_ID_TEXT = "\n".join(
    [
        "ชื่อตัวและชื่อสกุล นาย สมชาย ใจดี",
        "Identification Number 1 2345 67890 12 3",
        "Mr. Somchai Jaidee",
    ]
)


@pytest.fixture
def mrz_text() -> str:
    return "\n".join(["PASSPORT", "KINGDOM OF THAILAND", MRZ_LINE1, MRZ_LINE2])


@pytest.fixture
def thai_id_text() -> str:
    return THAI_ID_TEXT


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "customers.json"


@pytest.fixture
def mrz_lines() -> tuple:
    return MRZ_LINE1, MRZ_LINE2
