"""Backend state for a vocabulary-learning app: words and daily activity as JSON.

Layout (under the host-supplied app-data directory):
    words.json    # vocabulary entries, whole-document rewrite on every change
    date.json     # per-day add/update/quiz counters

Usage:
    state = AppState.open(load_config())
    surface = CommandSurface(state)
    surface.add_word("run", "(verb) move fast", "courir", "verb")
    surface.invoke("get_words", {})
"""

from wordbook.activity import ActivityStore
from wordbook.commands import AppState, CommandSurface, command_defs
from wordbook.config import WordbookConfig, init_config, load_config
from wordbook.errors import (
    InvalidArgument,
    IOFailure,
    LockFailure,
    NotFound,
    ParseFailure,
    WordbookError,
)
from wordbook.files import FileStore
from wordbook.models import ActivityMode, DailyActivity, VocabularyEntry
from wordbook.vocabulary import VocabularyStore

__all__ = [
    "ActivityMode",
    "ActivityStore",
    "AppState",
    "CommandSurface",
    "DailyActivity",
    "FileStore",
    "IOFailure",
    "InvalidArgument",
    "LockFailure",
    "NotFound",
    "ParseFailure",
    "VocabularyEntry",
    "VocabularyStore",
    "WordbookConfig",
    "WordbookError",
    "command_defs",
    "init_config",
    "load_config",
]
