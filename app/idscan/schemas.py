from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

FORM_COLUMNS = (
    "first_name",
    "last_name",
    "gender",
    "nationality",
    "id_number",
    "passport_number",
    "dob",
    "issue_date",
    "expiry_date",
    "address",
)


class RecognizedPage(BaseModel):
    """OCR output for one input image, in selection order."""

    model_config = ConfigDict(frozen=True)

    source_id: str
    text: str = ""


class MRZRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    document_type: str = ""
    issuing_country: str = ""
    last_name: str = ""
    first_name: str = ""
    document_number: str = ""
    nationality: str = ""
    date_of_birth: str = ""
    sex: str = "Unspecified"
    date_of_expiry: str = ""


class ThaiIDRecord(BaseModel):
    """Sparse record: a field is None when its detector found nothing."""

    model_config = ConfigDict(frozen=True)

    id_number: Optional[str] = None
    date_of_birth: Optional[str] = None
    name_th: Optional[str] = None
    first_name_en: Optional[str] = None
    last_name_en: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class EmptyRecord(BaseModel):
    model_config = ConfigDict(frozen=True)


ExtractedRecord = Union[MRZRecord, ThaiIDRecord, EmptyRecord]


class FormFields(BaseModel):
    first_name: str = ""
    last_name: str = ""
    gender: str = ""
    nationality: str = ""
    id_number: str = ""
    passport_number: str = ""
    dob: str = ""
    issue_date: str = ""
    expiry_date: str = ""
    address: str = ""

    def row(self) -> List[str]:
        return [getattr(self, column) for column in FORM_COLUMNS]


class StoredCustomer(FormFields):
    ts: str


class PagesPayload(BaseModel):
    pages: List[RecognizedPage] = Field(default_factory=list)


class CSVPayload(BaseModel):
    rows: List[FormFields] = Field(default_factory=list)


class ExtractionResponse(BaseModel):
    run_id: Optional[str] = None
    pages: List[RecognizedPage] = Field(default_factory=list)
    raw_text: str = ""
    document_kind: str = "none"
    source_id: Optional[str] = None
    record: dict = Field(default_factory=dict)
    form: FormFields = Field(default_factory=FormFields)


def dump_record(record: ExtractedRecord) -> dict:
    """Serialize a record the way consumers see it: sparse records drop absent keys."""
    return record.model_dump(exclude_none=True)
