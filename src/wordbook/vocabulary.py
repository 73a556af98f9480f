"""VocabularyStore: ordered in-memory word list mirrored to words.json.

Id policies:
    last   next id = id of the last element + 1 (1 when empty). After deleting
           the newest word its id is handed out again.
    max    next id = highest id ever observed + 1. Ids are never reused.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING

from wordbook.errors import InvalidArgument, NotFound
from wordbook.files import WORDS_FILE
from wordbook.models import VocabularyEntry
from wordbook.store import LockedListStore

if TYPE_CHECKING:
    from wordbook.files import FileStore

ID_POLICIES = ("last", "max")

logger = logging.getLogger("wordbook.vocabulary")


class VocabularyStore(LockedListStore):
    """Vocabulary entries guarded by one exclusive lock."""

    label = "words"

    def __init__(
        self,
        files: FileStore,
        *,
        id_policy: str = "last",
        lock_timeout: float = 5.0,
    ) -> None:
        if id_policy not in ID_POLICIES:
            msg = f"Invalid id policy: {id_policy!r} (expected one of: {', '.join(ID_POLICIES)})"
            raise InvalidArgument(msg)
        super().__init__(files, WORDS_FILE, lock_timeout=lock_timeout)
        self.id_policy = id_policy
        self._words: list[VocabularyEntry] = []
        self._high_water = 0

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list(self) -> list[VocabularyEntry]:
        """Snapshot copy of all entries in insertion order."""
        with self._locked():
            return copy.deepcopy(self._words)

    def get_by_id(self, entry_id: int) -> VocabularyEntry:
        with self._locked():
            return copy.deepcopy(self._find(entry_id))

    def categories(self) -> dict[str, int]:
        """Entry count per category, in first-seen order."""
        counts: dict[str, int] = {}
        with self._locked():
            for w in self._words:
                counts[w.category] = counts.get(w.category, 0) + 1
        return counts

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def add(
        self,
        vocabulary: str,
        meaning: str,
        translate: str,
        category: str,
        example: str | None = None,
    ) -> VocabularyEntry:
        """Append a new entry and persist.

        The append is not rolled back if the write fails: the entry stays
        visible in memory and the IOFailure propagates.
        """
        with self._locked():
            entry = VocabularyEntry(
                id=self._next_id(),
                vocabulary=vocabulary,
                meaning=meaning,
                translate=translate,
                category=category,
                example=example,
            )
            self._words.append(entry)
            self._high_water = max(self._high_water, entry.id)
            self._write(self._words)
            return copy.deepcopy(entry)

    def update(
        self,
        entry_id: int,
        vocabulary: str,
        meaning: str,
        translate: str,
        category: str,
        example: str | None = None,
    ) -> None:
        """Replace every field except the id, then persist."""
        with self._locked():
            entry = self._find(entry_id)
            entry.vocabulary = vocabulary
            entry.meaning = meaning
            entry.translate = translate
            entry.category = category
            entry.example = example
            self._write(self._words)

    def delete(self, entry_id: int) -> None:
        """Remove the first entry with entry_id. Missing ids are ignored."""
        with self._locked():
            for i, w in enumerate(self._words):
                if w.id == entry_id:
                    del self._words[i]
                    break
            self._write(self._words)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        with self._locked():
            self._write(self._words)

    def load(self) -> int:
        """Replace the in-memory list with words.json. Returns the entry count.

        A missing file leaves the list as it is; a malformed one raises
        ParseFailure without touching it.
        """
        with self._locked():
            words = self._read(VocabularyEntry.from_dict)
            if words is None:
                logger.info("no words file at %s", self.path)
                return len(self._words)
            self._words = words
            self._high_water = max([self._high_water, *(w.id for w in words)])
            logger.info("loaded %d words from %s", len(words), self.path)
            return len(words)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _find(self, entry_id: int) -> VocabularyEntry:
        for w in self._words:
            if w.id == entry_id:
                return w
        msg = f"Word not found: {entry_id}"
        raise NotFound(msg)

    def _next_id(self) -> int:
        if self.id_policy == "max":
            return self._high_water + 1
        if not self._words:
            return 1
        return self._words[-1].id + 1
