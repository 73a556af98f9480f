"""Tests for the wordbook CLI."""

import json

import pytest
from click.testing import CliRunner

from wordbook.cli import cli


@pytest.fixture
def run(data_dir):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, ["--data-dir", str(data_dir), *args])

    return _run


class TestWords:
    def test_add_and_list(self, run):
        result = run("words", "add", "run", "(verb) move fast", "courir", "verb")
        assert result.exit_code == 0, result.output
        assert "Added #1 run" in result.output

        result = run("words", "list", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output)[0]["translate"] == "courir"

    def test_table_list(self, run):
        run("words", "add", "run", "m", "courir", "verb", "--example", "I run.")
        result = run("words", "list")
        assert result.exit_code == 0
        assert "courir" in result.output

    def test_list_empty(self, run):
        result = run("words", "list")
        assert "No words yet." in result.output

    def test_show_missing_fails(self, run):
        result = run("words", "show", "7")
        assert result.exit_code != 0
        assert "Word not found: 7" in result.output

    def test_update_and_show(self, run):
        run("words", "add", "run", "m", "courir", "verb")
        result = run("words", "update", "1", "sprint", "m2", "sprinter", "verb", "--example", "Go!")
        assert result.exit_code == 0
        result = run("words", "show", "1")
        assert "sprint" in result.output
        assert "Go!" in result.output

    def test_delete_missing_succeeds(self, run):
        result = run("words", "delete", "5")
        assert result.exit_code == 0

    def test_categories(self, run):
        run("words", "add", "run", "m", "t", "verb")
        run("words", "add", "walk", "m", "t", "verb")
        result = run("words", "categories")
        assert "2  verb" in result.output


class TestDates:
    def test_add_word_counts_today(self, run):
        run("words", "add", "run", "m", "t", "verb")
        result = run("dates", "list")
        assert result.exit_code == 0
        assert "    1" in result.output

    def test_record_explicit_date(self, run):
        result = run("dates", "record", "quiz", "--date", "2026-01-02")
        assert result.exit_code == 0
        result = run("call", "get_dates")
        envelope = json.loads(result.output)
        assert envelope["result"] == [{"date": "2026-01-02", "add": 1, "update": 0, "quiz": 1}]

    def test_record_rejects_unknown_mode(self, run):
        result = run("dates", "record", "bogus")
        assert result.exit_code != 0

    def test_quiz(self, run):
        assert run("quiz").exit_code == 0
        envelope = json.loads(run("call", "get_dates").output)
        assert envelope["result"][0]["quiz"] == 1


class TestCall:
    def test_lists_commands(self, run):
        result = run("call")
        assert "get_words_by_id" in result.output

    def test_error_envelope_exit_code(self, run):
        result = run("call", "get_words_by_id", '{"id": 1}')
        assert result.exit_code == 1
        assert json.loads(result.output)["kind"] == "NotFound"

    def test_bad_json(self, run):
        result = run("call", "get_words", "{nope")
        assert result.exit_code != 0
        assert "not valid JSON" in result.output


class TestInit:
    def test_init(self, isolated_env):
        result = CliRunner().invoke(cli, ["init", "--dir", str(isolated_env), "--data-dir", "/srv/words"])
        assert result.exit_code == 0
        assert (isolated_env / "wordbook.toml").exists()
        assert "/srv/words" in result.output
