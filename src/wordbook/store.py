"""Shared plumbing for the two in-memory collections.

Each collection owns one exclusive lock. Mutations hold it across the whole
find-mutate-serialize-write sequence, so the file on disk always reflects the
last mutation that acquired the lock.
"""

from __future__ import annotations

import contextlib
import threading
from typing import TYPE_CHECKING, Any

from wordbook.errors import LockFailure, ParseFailure

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from wordbook.files import FileStore


class LockedListStore:
    """A list of records mirrored to one JSON document."""

    label = "records"

    def __init__(self, files: FileStore, filename: str, *, lock_timeout: float = 5.0) -> None:
        self.files = files
        self.filename = filename
        self.lock_timeout = lock_timeout
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self.files.path_for(self.filename)

    @contextlib.contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self.lock_timeout):
            msg = f"Failed to lock {self.label}: timed out after {self.lock_timeout}s"
            raise LockFailure(msg)
        try:
            yield
        finally:
            self._lock.release()

    def _write(self, records: list[Any]) -> None:
        """Serialize records and overwrite the document. Caller holds the lock."""
        self.files.write_json(self.filename, [r.to_dict() for r in records])

    def _read(self, parse: Callable[[Any], Any]) -> list[Any] | None:
        """Parse the document into records, or None if it does not exist."""
        raw = self.files.read_json(self.filename)
        if raw is None:
            return None
        if not isinstance(raw, list):
            msg = f"Failed to parse JSON in {self.path}: expected an array, got {type(raw).__name__}"
            raise ParseFailure(msg)
        return [parse(item) for item in raw]
