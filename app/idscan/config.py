from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

BASE_DIR = Path(__file__).parent


def _parse_env_line(line: str) -> Optional[Tuple[str, str]]:
    stripped = line.strip()
    if stripped.startswith("export "):
        stripped = stripped[len("export ") :]
    key, sep, value = stripped.partition("=")
    if not sep or stripped.startswith("#") or not key.strip():
        return None
    return key.strip(), value.strip().strip("\"'")


def load_env_file(*paths: Path) -> Optional[Path]:
    """Seed os.environ from the first existing .env file; real env vars win."""
    for env_path in paths:
        if not env_path.is_file():
            continue
        try:
            lines = env_path.read_text(encoding="utf-8").splitlines()
        except OSError:
            continue
        for parsed in filter(None, map(_parse_env_line, lines)):
            os.environ.setdefault(*parsed)
        return env_path
    return None


load_env_file(BASE_DIR.parents[1] / ".env", Path.cwd() / ".env")


@dataclass(frozen=True)
class OCRConfig:
    # Combined English + Thai models; Tesseract joins languages with "+".
    lang: str = os.getenv("IDSCAN_OCR_LANG", "eng+tha")
    tesseract_cmd: Optional[str] = os.getenv("IDSCAN_TESSERACT_CMD") or None
    pdf_dpi: int = int(os.getenv("IDSCAN_PDF_DPI", "300"))


@dataclass(frozen=True)
class StorageConfig:
    path: Path = Path(os.getenv("IDSCAN_STORE_PATH", str(BASE_DIR / "data" / "customers.json")))
    key: str = os.getenv("IDSCAN_STORE_KEY", "ttx_customers")


@dataclass(frozen=True)
class AppConfig:
    log_level: str = os.getenv("IDSCAN_LOG_LEVEL", "INFO")
    runs_dir: Path = Path(os.getenv("IDSCAN_RUNS_DIR", str(BASE_DIR / "runs")))
    ocr: OCRConfig = field(default_factory=OCRConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


CONFIG = AppConfig()
