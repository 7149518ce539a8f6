"""File-backed implementation of PersistencePort.

Each key is stored in its own file under the data directory. Writes go
to a temporary file first and are moved into place with ``os.replace``,
so a reader never sees a half-written file.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from fridge.domain.ports.persistence_port import PersistencePort

_SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class FilePersistence(PersistencePort):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir

    # --- PersistencePort interface --------------------------------------------

    def read_bytes(self, key: str) -> bytes | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def write_bytes(self, key: str, data: bytes) -> None:
        path = self._path_for(key)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_bytes(data)
        os.replace(tmp_path, path)

    # --- File helpers ---------------------------------------------------------

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY_RE.match(key) or key in (".", ".."):
            raise ValueError(f"Unsupported storage key: {key!r}")
        return self._data_dir / key
