from __future__ import annotations

from pathlib import Path

import pytest

from idscan.export.csv_export import to_csv
from idscan.export.form import populate_form
from idscan.export.storage import CustomerStore, StorageError
from idscan.pipeline.mrz import parse_mrz
from idscan.pipeline.thai_id import parse_thai_id
from idscan.schemas import EmptyRecord, FormFields


def test_populate_from_mrz(mrz_text: str) -> None:
    form = populate_form(parse_mrz(mrz_text))
    assert form.first_name == "JOHN"
    assert form.last_name == "DOE"
    assert form.gender == "Male"
    assert form.nationality == "THA"
    assert form.passport_number == "AB1234567"
    assert form.dob == "1990-01-01"
    assert form.expiry_date == "2025-01-01"
    assert form.id_number == ""
    assert form.issue_date == ""
    assert form.address == ""


def test_populate_from_thai_id(thai_id_text: str) -> None:
    form = populate_form(parse_thai_id(thai_id_text))
    assert form.first_name == "Somchai"
    assert form.last_name == "Jaidee"
    assert form.id_number == "1234567890123"
    assert form.passport_number == ""
    assert form.address == ""


def test_populate_from_empty_record() -> None:
    assert populate_form(EmptyRecord()) == FormFields()


def test_csv_layout_and_quoting() -> None:
    form = FormFields(first_name='Jo "JJ"', last_name="Doe, Jr", address="")
    csv_text = to_csv([form])
    header, row = csv_text.split("\n")
    assert header == (
        "first_name,last_name,gender,nationality,id_number,passport_number,dob,issue_date,expiry_date,address"
    )
    assert row == '"Jo ""JJ""","Doe, Jr","","","","","","","",""'
    assert not csv_text.endswith("\n")


def test_csv_header_only_without_rows() -> None:
    assert to_csv([]).count("\n") == 0


def test_store_appends_with_timestamp(store_path: Path) -> None:
    store = CustomerStore(store_path, "ttx_customers")
    assert store.list() == []
    first = store.append(FormFields(first_name="A"))
    store.append(FormFields(first_name="B"))
    assert first.ts.endswith("Z")
    entries = store.list()
    assert [entry.first_name for entry in entries] == ["A", "B"]
    assert '"ttx_customers"' in store_path.read_text(encoding="utf-8")


def test_store_rejects_corrupt_file(store_path: Path) -> None:
    store_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        CustomerStore(store_path, "ttx_customers").list()


@pytest.mark.parametrize(
    "payload",
    [
        '{"ttx_customers": [1]}',
        '{"ttx_customers": ["John"]}',
        '{"ttx_customers": [{"first_name": "A"}]}',
        '{"ttx_customers": {"first_name": "A"}}',
    ],
)
def test_store_rejects_malformed_entries(store_path: Path, payload: str) -> None:
    store_path.write_text(payload, encoding="utf-8")
    with pytest.raises(StorageError):
        CustomerStore(store_path, "ttx_customers").list()
