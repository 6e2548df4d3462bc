from __future__ import annotations

from ..schemas import ExtractedRecord, FormFields, MRZRecord, ThaiIDRecord


def populate_form(record: ExtractedRecord) -> FormFields:
    """Copy recognized fields into the editable customer form.

    Issue date and address are never recognized and stay blank for manual entry.
    """
    if isinstance(record, MRZRecord):
        return FormFields(
            first_name=record.first_name,
            last_name=record.last_name,
            gender=record.sex,
            nationality=record.nationality,
            passport_number=record.document_number,
            dob=record.date_of_birth,
            expiry_date=record.date_of_expiry,
        )
    if isinstance(record, ThaiIDRecord):
        return FormFields(
            first_name=record.first_name_en or "",
            last_name=record.last_name_en or "",
            id_number=record.id_number or "",
            dob=record.date_of_birth or "",
        )
    return FormFields()
