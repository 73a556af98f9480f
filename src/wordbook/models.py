"""Records held by the vocabulary and activity stores."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any

from wordbook.errors import InvalidArgument, ParseFailure

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class ActivityMode(enum.Enum):
    """Which daily counter an activity event increments."""

    ADD = "add"
    UPDATE = "update"
    QUIZ = "quiz"

    @classmethod
    def parse(cls, value: str | ActivityMode) -> ActivityMode:
        if isinstance(value, ActivityMode):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            msg = f"Invalid mode: {value!r} (expected one of: {valid})"
            raise InvalidArgument(msg) from None


def _require(d: dict[str, Any], key: str, kind: type | tuple[type, ...], record: str) -> Any:
    if key not in d:
        msg = f"{record}: missing field {key!r}"
        raise ParseFailure(msg)
    value = d[key]
    # bool is an int subclass; JSON true/false is never a valid count or id
    if isinstance(value, bool) or not isinstance(value, kind):
        msg = f"{record}: field {key!r} has unexpected value {value!r}"
        raise ParseFailure(msg)
    return value


def _optional(d: dict[str, Any], key: str, kind: type, record: str) -> Any:
    value = d.get(key)
    if value is None:
        return None
    return _require(d, key, kind, record)


@dataclass
class VocabularyEntry:
    """A single word from words.json."""

    id: int
    vocabulary: str
    meaning: str
    translate: str
    category: str
    example: str | None = None

    @classmethod
    def from_dict(cls, d: Any) -> VocabularyEntry:
        if not isinstance(d, dict):
            msg = f"word entry must be an object, got {type(d).__name__}"
            raise ParseFailure(msg)
        entry_id = _require(d, "id", int, "word")
        if entry_id < 0:
            msg = f"word: id must be non-negative, got {entry_id}"
            raise ParseFailure(msg)
        return cls(
            id=entry_id,
            vocabulary=_require(d, "vocabulary", str, "word"),
            meaning=_require(d, "meaning", str, "word"),
            translate=_require(d, "translate", str, "word"),
            category=_require(d, "category", str, "word"),
            example=_optional(d, "example", str, "word"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "vocabulary": self.vocabulary,
            "meaning": self.meaning,
            "translate": self.translate,
            "category": self.category,
            "example": self.example,
        }


@dataclass
class DailyActivity:
    """Per-day counters from date.json. quiz stays None until the first quiz event."""

    date: str
    add: int = 0
    update: int = 0
    quiz: int | None = None

    @classmethod
    def new_day(cls, date: str) -> DailyActivity:
        """Default entry inserted the first time a date sees any activity."""
        return cls(date=date, add=1, update=0, quiz=None)

    @classmethod
    def from_dict(cls, d: Any) -> DailyActivity:
        if not isinstance(d, dict):
            msg = f"date entry must be an object, got {type(d).__name__}"
            raise ParseFailure(msg)
        date = _require(d, "date", str, "date")
        if not DATE_RE.match(date):
            msg = f"date: expected YYYY-MM-DD, got {date!r}"
            raise ParseFailure(msg)
        return cls(
            date=date,
            add=_require(d, "add", int, "date"),
            update=_require(d, "update", int, "date"),
            quiz=_optional(d, "quiz", int, "date"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "add": self.add,
            "update": self.update,
            "quiz": self.quiz,
        }

    def bump(self, mode: ActivityMode) -> None:
        if mode is ActivityMode.ADD:
            self.add += 1
        elif mode is ActivityMode.UPDATE:
            self.update += 1
        else:
            self.quiz = (self.quiz or 0) + 1
