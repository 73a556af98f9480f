"""Command surface: the only entry point the UI layer calls into.

Commands (named after the desktop shell's invoke handlers):
    get_words()                                                  → [word]
    get_words_by_id(id)                                          → word
    add_word(vocabulary, meaning, translate, category, example?) → None
    update_word(id, vocabulary, meaning, translate, category, example?) → None
    delete_word(id)                                              → None
    save_words_to_file()                                         → None
    get_dates(sort?)                                             → [day]
    add_date(date, add, update, quiz?, mode)                     → None
    save_dates_to_file()                                         → None
    get_categories()                                             → {category: count}
    record_quiz()                                                → None

The transport collaborator calls invoke(name, arguments), which turns every
WordbookError into an error envelope instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date as _date
from typing import TYPE_CHECKING, Any

from wordbook.activity import ActivityStore
from wordbook.errors import InvalidArgument, WordbookError
from wordbook.files import FileStore
from wordbook.models import ActivityMode
from wordbook.vocabulary import VocabularyStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from wordbook.config import WordbookConfig

logger = logging.getLogger("wordbook.commands")

_WORD_FIELDS = {
    "vocabulary": {"type": "string"},
    "meaning": {"type": "string", "description": "Definition in the study language"},
    "translate": {"type": "string"},
    "category": {"type": "string"},
    "example": {"type": ["string", "null"], "description": "Usage example (optional)"},
}


def command_defs() -> list[dict[str, Any]]:
    return [
        {
            "name": "get_words",
            "description": "List every vocabulary entry in insertion order.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "get_words_by_id",
            "description": "Fetch one vocabulary entry by id.",
            "inputSchema": {
                "type": "object",
                "properties": {"id": {"type": "integer"}},
                "required": ["id"],
            },
        },
        {
            "name": "add_word",
            "description": "Add a vocabulary entry and count it in today's activity.",
            "inputSchema": {
                "type": "object",
                "properties": dict(_WORD_FIELDS),
                "required": ["vocabulary", "meaning", "translate", "category"],
            },
        },
        {
            "name": "update_word",
            "description": "Replace every field of an existing entry, keeping its id.",
            "inputSchema": {
                "type": "object",
                "properties": {"id": {"type": "integer"}, **_WORD_FIELDS},
                "required": ["id", "vocabulary", "meaning", "translate", "category"],
            },
        },
        {
            "name": "delete_word",
            "description": "Delete an entry by id. Unknown ids are ignored.",
            "inputSchema": {
                "type": "object",
                "properties": {"id": {"type": "integer"}},
                "required": ["id"],
            },
        },
        {
            "name": "save_words_to_file",
            "description": "Write the full word list to words.json.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "get_dates",
            "description": "List daily activity counters.",
            "inputSchema": {
                "type": "object",
                "properties": {"sort": {"type": "boolean", "default": False}},
            },
        },
        {
            "name": "add_date",
            "description": (
                "Record one activity event for a date. Only date and mode are used; "
                "the counts in the payload are ignored."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "date": {"type": "string", "description": "YYYY-MM-DD"},
                    "add": {"type": "integer"},
                    "update": {"type": "integer"},
                    "quiz": {"type": ["integer", "null"]},
                    "mode": {"type": "string", "enum": [m.value for m in ActivityMode]},
                },
                "required": ["date", "add", "update", "mode"],
            },
        },
        {
            "name": "save_dates_to_file",
            "description": "Write the full activity list to date.json.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "get_categories",
            "description": "Count vocabulary entries per category.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "record_quiz",
            "description": "Count one quiz event for today.",
            "inputSchema": {"type": "object", "properties": {}},
        },
    ]


@dataclass
class AppState:
    """Both stores plus the file store they share."""

    files: FileStore
    words: VocabularyStore
    dates: ActivityStore

    @classmethod
    def open(
        cls,
        cfg: WordbookConfig,
        *,
        today: Callable[[], _date] = _date.today,
    ) -> AppState:
        """Build the stores and load both files before returning."""
        files = FileStore(cfg.data_dir)
        state = cls(
            files=files,
            words=VocabularyStore(
                files,
                id_policy=cfg.store.id_policy,
                lock_timeout=cfg.store.lock_timeout,
            ),
            dates=ActivityStore(files, lock_timeout=cfg.store.lock_timeout, today=today),
        )
        state.load()
        return state

    def load(self) -> None:
        self.words.load()
        self.dates.load()


class CommandSurface:
    def __init__(self, state: AppState) -> None:
        self.state = state

    # ------------------------------------------------------------------
    # Words
    # ------------------------------------------------------------------

    def get_words(self) -> list[dict[str, Any]]:
        return [w.to_dict() for w in self.state.words.list()]

    def get_words_by_id(self, id: int) -> dict[str, Any]:  # noqa: A002
        return self.state.words.get_by_id(id).to_dict()

    def add_word(
        self,
        vocabulary: str,
        meaning: str,
        translate: str,
        category: str,
        example: str | None = None,
    ) -> None:
        """Append, persist, then count one add for today.

        Not atomic: if the date step fails the word is already stored.
        """
        self.state.words.add(vocabulary, meaning, translate, category, example)
        self.state.dates.record(ActivityMode.ADD)

    def update_word(
        self,
        id: int,  # noqa: A002
        vocabulary: str,
        meaning: str,
        translate: str,
        category: str,
        example: str | None = None,
    ) -> None:
        self.state.words.update(id, vocabulary, meaning, translate, category, example)

    def delete_word(self, id: int) -> None:  # noqa: A002
        self.state.words.delete(id)

    def save_words_to_file(self) -> None:
        self.state.words.save()

    def get_categories(self) -> dict[str, int]:
        return self.state.words.categories()

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------

    def get_dates(self, sort: bool = False) -> list[dict[str, Any]]:
        return [d.to_dict() for d in self.state.dates.list(sort=sort)]

    def add_date(
        self,
        date: str,
        add: int,
        update: int,
        mode: str,
        quiz: int | None = None,
    ) -> None:
        # add/update/quiz are part of the payload shape but the store derives
        # counts itself; only date and mode matter.
        del add, update, quiz
        self.state.dates.upsert(date, mode)

    def save_dates_to_file(self) -> None:
        self.state.dates.save()

    def record_quiz(self) -> None:
        self.state.dates.record(ActivityMode.QUIZ)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def call(self, name: str, arguments: dict[str, Any] | None = None) -> Any:
        """Dispatch a command by name. Raises WordbookError on failure."""
        defs = {d["name"]: d for d in command_defs()}
        if name not in defs:
            msg = f"Unknown command: {name}"
            raise InvalidArgument(msg)
        args = dict(arguments or {})
        schema = defs[name]["inputSchema"]
        missing = [k for k in schema.get("required", []) if k not in args]
        if missing:
            msg = f"{name}: missing argument(s): {', '.join(missing)}"
            raise InvalidArgument(msg)
        known = schema.get("properties", {})
        unknown = [k for k in args if k not in known]
        if unknown:
            msg = f"{name}: unexpected argument(s): {', '.join(unknown)}"
            raise InvalidArgument(msg)
        if "id" in args:
            args["id"] = _as_int(name, args["id"])
        for key, value in args.items():
            _check_type(name, key, value, known[key])
        return getattr(self, name)(**args)

    def invoke(self, name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a command and wrap the outcome for the UI transport."""
        try:
            result = self.call(name, arguments)
        except WordbookError as exc:
            logger.warning("command %s failed: %s", name, exc)
            return {"error": str(exc), "kind": exc.kind, "isError": True}
        return {"result": result, "isError": False}


def _as_int(command: str, value: Any) -> int:
    if isinstance(value, bool):
        msg = f"{command}: id must be an integer, got {value!r}"
        raise InvalidArgument(msg)
    try:
        return int(value)
    except (TypeError, ValueError):
        msg = f"{command}: id must be an integer, got {value!r}"
        raise InvalidArgument(msg) from None


_JSON_TYPES: dict[str, type] = {
    "string": str,
    "integer": int,
    "boolean": bool,
    "null": type(None),
}


def _check_type(command: str, key: str, value: Any, prop: dict[str, Any]) -> None:
    """Reject values the inputSchema does not allow, before anything is mutated."""
    declared = prop.get("type")
    if declared is None:
        return
    allowed = [declared] if isinstance(declared, str) else list(declared)
    for t in allowed:
        # bool is an int subclass; true/false is never a count or id
        if t == "integer" and isinstance(value, bool):
            continue
        if isinstance(value, _JSON_TYPES[t]):
            return
    msg = f"{command}: {key} must be {' or '.join(allowed)}, got {value!r}"
    raise InvalidArgument(msg)
