from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

import anyio
from fastapi import FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .config import CONFIG
from .export.csv_export import CSV_FILENAME, CSV_MEDIA_TYPE, to_csv
from .export.form import populate_form
from .export.storage import CustomerStore, StorageError
from .pipeline.extractor import DocumentExtractor
from .pipeline.errors import OCRError, UnsupportedDocumentError
from .pipeline.ingest import SourceImage, load_image_bytes
from .pipeline.ocr import combined_text, recognize_pages
from .schemas import (
    CSVPayload,
    EmptyRecord,
    ExtractionResponse,
    FormFields,
    PagesPayload,
    RecognizedPage,
    dump_record,
)

RUNS_DIR = CONFIG.runs_dir

logging.basicConfig(level=CONFIG.log_level, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
LOGGER = logging.getLogger("idscan")

EXTRACTOR = DocumentExtractor()

app = FastAPI(title="ID Scan")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_store() -> CustomerStore:
    return CustomerStore(CONFIG.storage.path, CONFIG.storage.key)


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


def _create_run_dir() -> Path:
    run_id = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S") + "_" + uuid.uuid4().hex[:8]
    run_dir = RUNS_DIR / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    (run_dir / "inputs").mkdir(exist_ok=True)
    return run_dir


def _log_run(run_dir: Path, message: str) -> None:
    timestamp = datetime.now(timezone.utc).isoformat()
    with (run_dir / "run.log").open("a") as f:
        f.write(f"[{timestamp}] {message}\n")


def _write_json_artifact(run_dir: Path, filename: str, payload: Dict) -> None:
    path = run_dir / filename
    with path.open("w") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def _save_upload(data: bytes, run_dir: Path, idx: int, name: str) -> Path:
    path = run_dir / "inputs" / f"{idx:02d}_{Path(name).name}"
    path.write_bytes(data)
    _log_run(run_dir, f"Saved upload: {name}")
    return path


def build_response(pages: Sequence[RecognizedPage], run_id: Optional[str] = None) -> ExtractionResponse:
    match = EXTRACTOR.find_match(pages)
    record = match.record if match else EmptyRecord()
    return ExtractionResponse(
        run_id=run_id,
        pages=list(pages),
        raw_text=combined_text(pages),
        document_kind=match.parser if match else "none",
        source_id=match.source_id if match else None,
        record=dump_record(record),
        form=populate_form(record),
    )


def _unique_name(name: str, used: Set[str]) -> str:
    # Repeated file names get a counter so every page keeps a distinct source id.
    candidate, path, counter = name, Path(name), 1
    while candidate in used:
        counter += 1
        candidate = f"{path.stem} ({counter}){path.suffix}"
    used.add(candidate)
    return candidate


def _load_uploads(uploads: List[Tuple[str, bytes]]) -> List[SourceImage]:
    images: List[SourceImage] = []
    for name, data in uploads:
        images.extend(load_image_bytes(data, name))
    return images


def _recognize_uploads(uploads: List[Tuple[str, bytes]]) -> List[RecognizedPage]:
    return recognize_pages(_load_uploads(uploads))


@app.post("/extract")
async def extract(files: Optional[List[UploadFile]] = File(None)):
    run_dir = _create_run_dir()
    _log_run(run_dir, "Starting extraction")
    uploads: List[Tuple[str, bytes]] = []
    used: Set[str] = set()
    for idx, upload in enumerate(files or [], start=1):
        name = _unique_name(upload.filename or f"upload_{idx}", used)
        data = await upload.read()
        _save_upload(data, run_dir, idx, name)
        uploads.append((name, data))

    try:
        # Decoding and OCR block; the extractor only runs once every page is recognized.
        pages = await anyio.to_thread.run_sync(_recognize_uploads, uploads)
    except UnsupportedDocumentError as exc:
        _log_run(run_dir, f"Rejected input: {exc}")
        return JSONResponse({"error": str(exc), "run_id": run_dir.name}, status_code=400)
    except OCRError as exc:
        LOGGER.error("OCR failed: %s", exc)
        _log_run(run_dir, f"OCR failed: {exc}")
        return JSONResponse({"error": str(exc), "run_id": run_dir.name}, status_code=502)

    _log_run(run_dir, f"OCR complete: {len(pages)} page(s)")
    (run_dir / "ocr.txt").write_text(combined_text(pages), encoding="utf-8")
    response = build_response(pages, run_id=run_dir.name)
    if response.document_kind == "none":
        _log_run(run_dir, "Extraction: no document pattern recognized")
    else:
        _log_run(run_dir, f"Extraction: {response.document_kind} from {response.source_id}")
    _write_json_artifact(run_dir, "extracted.json", response.model_dump())
    _log_run(run_dir, "Extraction complete")
    return JSONResponse(response.model_dump())


@app.post("/parse")
async def parse(payload: PagesPayload):
    return JSONResponse(build_response(payload.pages).model_dump())


@app.post("/export_csv")
async def export_csv(payload: CSVPayload):
    return Response(
        content=to_csv(payload.rows),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )


@app.post("/customers")
async def save_customer(form: FormFields):
    try:
        entry = get_store().append(form)
    except StorageError as exc:
        LOGGER.error("Customer store unavailable: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=500)
    return JSONResponse(entry.model_dump())


@app.get("/customers")
async def list_customers():
    try:
        entries = get_store().list()
    except StorageError as exc:
        LOGGER.error("Customer store unavailable: %s", exc)
        return JSONResponse({"error": str(exc)}, status_code=500)
    return JSONResponse([entry.model_dump() for entry in entries])
