"""Test fixtures for wordbook."""

from datetime import date

import pytest

from wordbook.activity import ActivityStore
from wordbook.commands import AppState, CommandSurface
from wordbook.config import WordbookConfig
from wordbook.files import FileStore
from wordbook.vocabulary import VocabularyStore

TODAY = date(2026, 10, 18)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep config lookup and the default data dir inside tmp_path."""
    monkeypatch.delenv("WORDBOOK_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    yield tmp_path


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "appdata" / "wordbook"


@pytest.fixture
def files(data_dir):
    return FileStore(data_dir)


@pytest.fixture
def words(files):
    return VocabularyStore(files)


@pytest.fixture
def dates(files):
    return ActivityStore(files, today=lambda: TODAY)


@pytest.fixture
def config(tmp_path, data_dir):
    return WordbookConfig(root=tmp_path, data_dir=data_dir)


@pytest.fixture
def surface(config):
    return CommandSurface(AppState.open(config, today=lambda: TODAY))
