"""Tests for the vocabulary store."""

import json
import threading

import pytest

from wordbook.errors import InvalidArgument, IOFailure, LockFailure, NotFound, ParseFailure
from wordbook.files import FileStore
from wordbook.models import VocabularyEntry
from wordbook.vocabulary import VocabularyStore


def _add(store, word="run", category="verb", example=None):
    return store.add(word, f"meaning of {word}", f"translation of {word}", category, example)


def _on_disk(files):
    return json.loads(files.words_path.read_text(encoding="utf-8"))


class TestIds:
    def test_ids_are_sequential(self, words):
        """Adds without deletions get ids 1..n in call order."""
        for i in range(5):
            _add(words, f"w{i}")
        assert [w.id for w in words.list()] == [1, 2, 3, 4, 5]

    def test_first_id_is_one(self, words):
        assert _add(words).id == 1

    def test_last_policy_reuses_id_after_deleting_newest(self, words):
        """The next id follows the last element, not the historical max."""
        _add(words, "a")
        _add(words, "b")
        words.delete(2)
        assert _add(words, "c").id == 2

    def test_last_policy_follows_last_element_after_load(self, files):
        files.write_json("words.json", [
            {"id": 7, "vocabulary": "a", "meaning": "", "translate": "", "category": "", "example": None},
            {"id": 3, "vocabulary": "b", "meaning": "", "translate": "", "category": "", "example": None},
        ])
        store = VocabularyStore(files)
        store.load()
        assert _add(store).id == 4

    def test_max_policy_never_reuses(self, files):
        store = VocabularyStore(files, id_policy="max")
        _add(store, "a")
        _add(store, "b")
        store.delete(2)
        assert _add(store, "c").id == 3

    def test_max_policy_uses_highest_loaded_id(self, files):
        files.write_json("words.json", [
            {"id": 7, "vocabulary": "a", "meaning": "", "translate": "", "category": "", "example": None},
            {"id": 3, "vocabulary": "b", "meaning": "", "translate": "", "category": "", "example": None},
        ])
        store = VocabularyStore(files, id_policy="max")
        store.load()
        assert _add(store).id == 8

    def test_unknown_policy_rejected(self, files):
        with pytest.raises(InvalidArgument):
            VocabularyStore(files, id_policy="random")

    def test_concurrent_adds_get_unique_ids(self, words):
        """The lock covers id generation and append."""
        threads = [threading.Thread(target=_add, args=(words, f"w{i}")) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert sorted(w.id for w in words.list()) == list(range(1, 21))


class TestReadOps:
    def test_list_is_a_snapshot(self, words):
        """Mutating the returned list or entries does not touch the store."""
        _add(words)
        snapshot = words.list()
        snapshot[0].vocabulary = "changed"
        snapshot.clear()
        assert words.list()[0].vocabulary == "run"

    def test_get_by_id(self, words):
        _add(words, "a")
        _add(words, "b", example="b is for bee")
        entry = words.get_by_id(2)
        assert entry.vocabulary == "b"
        assert entry.example == "b is for bee"

    def test_get_by_id_missing(self, words):
        with pytest.raises(NotFound, match="Word not found: 9"):
            words.get_by_id(9)

    def test_categories(self, words):
        _add(words, "run", "verb")
        _add(words, "cat", "noun")
        _add(words, "walk", "verb")
        assert words.categories() == {"verb": 2, "noun": 1}


class TestMutations:
    def test_add_persists(self, words, files):
        _add(words, "run", example="I run daily")
        assert _on_disk(files) == [{
            "id": 1,
            "vocabulary": "run",
            "meaning": "meaning of run",
            "translate": "translation of run",
            "category": "verb",
            "example": "I run daily",
        }]

    def test_update_replaces_fields_keeps_id(self, words, files):
        _add(words, "run", example="old")
        words.update(1, "sprint", "run fast", "sprinter", "verb", None)
        assert words.get_by_id(1) == VocabularyEntry(1, "sprint", "run fast", "sprinter", "verb", None)
        assert _on_disk(files)[0]["vocabulary"] == "sprint"

    def test_update_missing_changes_nothing(self, words, files):
        _add(words)
        before = files.words_path.read_bytes()
        with pytest.raises(NotFound):
            words.update(42, "x", "x", "x", "x")
        assert words.list() == [words.get_by_id(1)]
        assert files.words_path.read_bytes() == before

    def test_delete_then_get_is_not_found(self, words):
        _add(words, "a")
        _add(words, "b")
        words.delete(1)
        with pytest.raises(NotFound):
            words.get_by_id(1)
        assert [w.id for w in words.list()] == [2]

    def test_delete_missing_is_noop(self, words, files):
        """Deleting an unknown id is not an error and still persists."""
        _add(words)
        words.delete(99)
        assert len(words.list()) == 1
        assert len(_on_disk(files)) == 1

    def test_failed_write_keeps_in_memory_append(self, tmp_path):
        """add() is not atomic: the entry stays in memory when the write fails."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = VocabularyStore(FileStore(blocker / "data"))
        with pytest.raises(IOFailure):
            _add(store)
        assert [w.vocabulary for w in store.list()] == ["run"]


class TestPersistence:
    def test_save_load_round_trip(self, words, files):
        """A fresh store loads exactly what was saved, in order."""
        _add(words, "b")
        _add(words, "a", example="ex")
        _add(words, "c")
        words.delete(2)
        words.save()

        fresh = VocabularyStore(files)
        assert fresh.load() == 2
        assert fresh.list() == words.list()

    def test_load_missing_file_leaves_empty(self, words):
        assert words.load() == 0
        assert words.list() == []

    def test_load_replaces_wholesale(self, words, files):
        _add(words, "stale")
        files.write_json("words.json", [])
        words.load()
        assert words.list() == []

    def test_load_malformed_raises_and_keeps_state(self, words, files):
        _add(words)
        files.write(files.words_path, b"{oops")
        with pytest.raises(ParseFailure):
            words.load()
        assert len(words.list()) == 1

    def test_load_wrong_shape(self, words, files):
        files.write_json("words.json", {"id": 1})
        with pytest.raises(ParseFailure, match="expected an array"):
            words.load()

    def test_load_missing_field(self, words, files):
        files.write_json("words.json", [{"id": 1, "vocabulary": "run"}])
        with pytest.raises(ParseFailure, match="missing field 'meaning'"):
            words.load()

    def test_load_accepts_absent_example(self, words, files):
        """example may be omitted entirely, as the desktop client writes it."""
        files.write_json("words.json", [
            {"id": 1, "vocabulary": "run", "meaning": "m", "translate": "t", "category": "verb"},
        ])
        words.load()
        assert words.get_by_id(1).example is None


class TestLocking:
    def test_lock_timeout_raises_lock_failure(self, files):
        store = VocabularyStore(files, lock_timeout=0.01)
        store._lock.acquire()
        try:
            with pytest.raises(LockFailure, match="Failed to lock words"):
                store.list()
        finally:
            store._lock.release()
        assert store.list() == []
