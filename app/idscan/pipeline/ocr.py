from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import pytesseract
from PIL import Image

from ..config import CONFIG
from ..schemas import RecognizedPage
from .errors import OCRError
from .ingest import SourceImage

LOGGER = logging.getLogger(__name__)

if CONFIG.ocr.tesseract_cmd:
    pytesseract.pytesseract.tesseract_cmd = CONFIG.ocr.tesseract_cmd


def _run_tesseract(image: Image.Image, lang: Optional[str]) -> str:
    try:
        return pytesseract.image_to_string(image, lang=lang)
    except pytesseract.TesseractError:
        if lang:
            LOGGER.warning("OCR language %s failed; retrying default OCR.", lang)
            return pytesseract.image_to_string(image)
        raise


def ocr_image(source_id: str, image: Image.Image, lang: Optional[str] = None) -> RecognizedPage:
    """Recognize a single image and wrap the text as a page."""
    try:
        text = _run_tesseract(image, lang if lang is not None else CONFIG.ocr.lang)
    except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError) as exc:
        raise OCRError(source_id, str(exc)) from exc
    LOGGER.debug("OCR extracted %d characters from %s", len(text), source_id)
    return RecognizedPage(source_id=source_id, text=text)


def recognize_pages(images: Sequence[SourceImage], lang: Optional[str] = None) -> List[RecognizedPage]:
    # One image at a time, in selection order; page order must be reproducible.
    return [ocr_image(source_id, image, lang) for source_id, image in images]


def combined_text(pages: Sequence[RecognizedPage]) -> str:
    text = "\n\n".join(f"[{page.source_id}]\n{page.text.strip()}" for page in pages)
    return text or "(no text)"
