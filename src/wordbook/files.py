"""Read and write the two JSON documents under the app-data directory.

Layout:
    <data_dir>/
        words.json    # [{"id":1, "vocabulary":..., "meaning":..., ...}, ...]
        date.json     # [{"date":"2026-10-18", "add":1, "update":0, "quiz":null}, ...]

Every write replaces the whole document: the payload goes to <name>.tmp under
an exclusive flock and is then renamed over the target.
"""

from __future__ import annotations

import fcntl
import json
import logging
from pathlib import Path
from typing import Any

from wordbook.errors import IOFailure, ParseFailure

WORDS_FILE = "words.json"
DATES_FILE = "date.json"

logger = logging.getLogger("wordbook.files")


class FileStore:
    """Whole-document JSON persistence rooted at a host-supplied directory."""

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def path_for(self, name: str) -> Path:
        return self.data_dir / name

    @property
    def words_path(self) -> Path:
        return self.path_for(WORDS_FILE)

    @property
    def dates_path(self) -> Path:
        return self.path_for(DATES_FILE)

    # ------------------------------------------------------------------
    # Raw bytes
    # ------------------------------------------------------------------

    def read(self, path: Path) -> bytes | None:
        """Return file contents, or None if the file does not exist."""
        if not path.exists():
            return None
        try:
            with path.open("rb") as f:
                fcntl.flock(f, fcntl.LOCK_SH)
                return f.read()
        except OSError as exc:
            msg = f"Failed to read file {path}: {exc}"
            raise IOFailure(msg) from exc

    def write(self, path: Path, data: bytes) -> None:
        """Create missing parent directories, then atomically replace path."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Failed to create directory {path.parent}: {exc}"
            raise IOFailure(msg) from exc

        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            with tmp.open("wb") as f:
                fcntl.flock(f, fcntl.LOCK_EX)
                f.write(data)
            tmp.replace(path)
        except OSError as exc:
            msg = f"Failed to write file {path}: {exc}"
            raise IOFailure(msg) from exc
        logger.debug("wrote %d bytes to %s", len(data), path)

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def read_json(self, name: str) -> Any:
        """Parse a document by logical name. None when the file is missing."""
        path = self.path_for(name)
        raw = self.read(path)
        if raw is None:
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            msg = f"Failed to parse JSON in {path}: {exc}"
            raise ParseFailure(msg) from exc

    def write_json(self, name: str, obj: Any) -> None:
        text = json.dumps(obj, ensure_ascii=False, indent=2)
        self.write(self.path_for(name), text.encode("utf-8"))
