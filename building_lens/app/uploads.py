"""Process-local store for uploaded images awaiting analysis."""
from __future__ import annotations

import uuid
from pathlib import Path
from threading import RLock
from typing import Dict


class UploadStore:
    def __init__(self, root: Path) -> None:
        self.root = root
        self._paths: Dict[str, Path] = {}
        self._lock = RLock()

    def save(self, filename: str, data: bytes) -> str:
        image_id = uuid.uuid4().hex
        suffix = Path(filename or "").suffix.lower() or ".jpg"
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.root / f"{image_id}{suffix}"
        path.write_bytes(data)
        with self._lock:
            self._paths[image_id] = path
        return image_id

    def resolve(self, image_id: str) -> Path:
        with self._lock:
            path = self._paths.get(image_id)
        if path is None or not path.exists():
            raise KeyError(image_id)
        return path

    def clear(self) -> None:
        with self._lock:
            paths = list(self._paths.values())
            self._paths.clear()
        for path in paths:
            path.unlink(missing_ok=True)
        if self.root.exists() and not any(self.root.iterdir()):
            self.root.rmdir()
