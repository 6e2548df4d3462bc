from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List

from idscan.export.csv_export import to_csv
from idscan.export.storage import CustomerStore
from idscan.main import build_response
from idscan.pipeline.errors import OCRError, UnsupportedDocumentError
from idscan.pipeline.ingest import load_images
from idscan.pipeline.ocr import recognize_pages
from idscan.schemas import RecognizedPage


def _pages_from_text_files(paths: List[Path]) -> List[RecognizedPage]:
    return [RecognizedPage(source_id=path.name, text=path.read_text(encoding="utf-8")) for path in paths]


def _pages_from_images(paths: List[Path], lang: str | None) -> List[RecognizedPage]:
    images = []
    for path in paths:
        images.extend(load_images(path))
    return recognize_pages(images, lang)


def main() -> None:
    parser = argparse.ArgumentParser(description="Extract passport / Thai ID fields from scanned images.")
    parser.add_argument("paths", nargs="+", type=Path, help="Images or PDFs, in page order")
    parser.add_argument("--text", action="store_true", help="Treat inputs as pre-recognized UTF-8 text files")
    parser.add_argument("--lang", default=None, help="Tesseract language override (default from config)")
    parser.add_argument("--csv", action="store_true", help="Print the form as CSV instead of JSON")
    parser.add_argument("--save", action="store_true", help="Append the form to the local customer store")
    args = parser.parse_args()

    try:
        pages = _pages_from_text_files(args.paths) if args.text else _pages_from_images(args.paths, args.lang)
    except (UnsupportedDocumentError, OCRError) as exc:
        parser.exit(2, f"error: {exc}\n")
    response = build_response(pages)
    if args.save:
        CustomerStore().append(response.form)
    if args.csv:
        print(to_csv([response.form]))
    else:
        print(json.dumps(response.model_dump(exclude={"run_id"}), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
