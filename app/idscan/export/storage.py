from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from ..config import CONFIG
from ..schemas import FormFields, StoredCustomer

LOGGER = logging.getLogger(__name__)


class StorageError(RuntimeError):
    pass


def _timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CustomerStore:
    """Append-only list of saved customer forms kept under one key in a JSON file."""

    def __init__(self, path: Optional[Path] = None, key: Optional[str] = None) -> None:
        self.path = Path(path) if path is not None else CONFIG.storage.path
        self.key = key or CONFIG.storage.key

    def _read(self) -> Dict[str, list]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as exc:
            raise StorageError(f"Customer store {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict) or not isinstance(payload.get(self.key, []), list):
            raise StorageError(f"Customer store {self.path} has an unexpected layout")
        return payload

    def _write(self, payload: Dict[str, list]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def list(self) -> List[StoredCustomer]:
        entries = self._read().get(self.key, [])
        try:
            return [StoredCustomer(**entry) for entry in entries]
        except (TypeError, ValidationError) as exc:
            raise StorageError(f"Customer store {self.path} holds a malformed entry: {exc}") from exc

    def append(self, form: FormFields) -> StoredCustomer:
        payload = self._read()
        entry = StoredCustomer(**form.model_dump(), ts=_timestamp())
        payload.setdefault(self.key, []).append(entry.model_dump())
        self._write(payload)
        LOGGER.info("Saved customer record (%d total)", len(payload[self.key]))
        return entry
