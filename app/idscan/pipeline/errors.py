from __future__ import annotations


class UnsupportedDocumentError(ValueError):
    pass


class OCRError(RuntimeError):
    def __init__(self, source_id: str, message: str) -> None:
        super().__init__(f"OCR failed for {source_id}: {message}")
        self.source_id = source_id
