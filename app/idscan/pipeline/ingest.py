from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Callable, List, Tuple

from pdf2image import convert_from_bytes, convert_from_path
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
)
from PIL import Image, ImageOps

from ..config import CONFIG
from .errors import OCRError, UnsupportedDocumentError

LOGGER = logging.getLogger(__name__)


SUPPORTED_IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".webp"}

SourceImage = Tuple[str, Image.Image]


def _prepare(image: Image.Image) -> Image.Image:
    # Honor EXIF orientation so OCR sees the page upright as photographed.
    image = ImageOps.exif_transpose(image)
    if image.mode not in {"RGB", "L"}:
        image = image.convert("RGB")
    return image


def _render_pdf(name: str, render: Callable[[], List[Image.Image]]) -> List[SourceImage]:
    try:
        pages = render()
    except (PDFPageCountError, PDFSyntaxError) as exc:
        raise UnsupportedDocumentError(f"Unreadable PDF {name}: {exc}") from exc
    except (PDFInfoNotInstalledError, PDFPopplerTimeoutError) as exc:
        # Poppler is the rendering engine; its absence is an engine failure, not bad input.
        raise OCRError(name, f"PDF rendering unavailable: {exc}") from exc
    return [(f"{name}#p{idx}", _prepare(page)) for idx, page in enumerate(pages, start=1)]


def load_images(path: Path) -> List[SourceImage]:
    """Load an image or PDF file as (source_id, image) pairs."""
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        LOGGER.info("Rendering PDF %s to images", path)
        return _render_pdf(path.name, lambda: convert_from_path(str(path), dpi=CONFIG.ocr.pdf_dpi))
    if suffix in SUPPORTED_IMAGE_EXTS:
        LOGGER.info("Loading image %s", path)
        try:
            image = Image.open(path)
            image.load()
        except OSError as exc:
            raise UnsupportedDocumentError(f"Unreadable image {path.name}: {exc}") from exc
        return [(path.name, _prepare(image))]
    raise UnsupportedDocumentError(f"Unsupported file type: {suffix or path.name}")


def load_image_bytes(data: bytes, name: str) -> List[SourceImage]:
    suffix = Path(name).suffix.lower()
    if suffix == ".pdf":
        LOGGER.info("Rendering uploaded PDF %s to images", name)
        return _render_pdf(name, lambda: convert_from_bytes(data, dpi=CONFIG.ocr.pdf_dpi))
    if suffix in SUPPORTED_IMAGE_EXTS:
        try:
            image = Image.open(BytesIO(data))
            image.load()
        except OSError as exc:
            raise UnsupportedDocumentError(f"Unreadable image {name}: {exc}") from exc
        return [(name, _prepare(image))]
    raise UnsupportedDocumentError(f"Unsupported file type: {suffix or name}")
