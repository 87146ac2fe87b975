"""
JSON File Storage Implementation

DESIGN DECISION: The whole key-value namespace lives in a single JSON
object on disk, one entry per key, standing in for browser local
storage:
1. No database setup required
2. Data survives restarts
3. Users can open the file and read their data

TRADEOFFS:
- Every write rewrites the whole file
- No locking: two processes writing at once lose one update
- Not suitable for more than one team's worth of data

Writes go to a temporary file that is then renamed over the existing one,
so a crash mid-write leaves the previous contents intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from worktrack.services.storage.interface import (
    CorruptedDataError,
    KeyValueStore,
    StorageUnavailableError,
)


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """
    File-backed key-value namespace.

    The file is re-read on every access so that separate processes
    pointed at the same path see each other's writes.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        """Read the namespace. A missing or empty file is an empty namespace."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageUnavailableError(
                f"Cannot read storage file {self._path}: {e}"
            ) from e

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptedDataError(
                f"Storage file {self._path} is not valid JSON: {e}"
            ) from e

        if not isinstance(data, dict):
            raise CorruptedDataError(
                f"Storage file {self._path} must hold a JSON object, "
                f"found {type(data).__name__}"
            )

        for key, value in data.items():
            if not isinstance(value, str):
                raise CorruptedDataError(
                    f"Storage key {key!r} holds a {type(value).__name__}, expected a string"
                )

        return data

    def _dump(self, data: dict[str, str]) -> None:
        """Atomically replace the file with the given namespace."""
        # Serialize before touching the disk
        payload = json.dumps(data, ensure_ascii=False, indent=2)

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=str(self._path.parent),
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageUnavailableError(
                f"Cannot write storage file {self._path}: {e}"
            ) from e

        logger.debug("storage_file_written", path=str(self._path), keys=len(data))

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Values must be strings, got {type(value).__name__}")
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)

    def keys(self) -> list[str]:
        return list(self._load())
