"""wordbook CLI — inspect and edit the vocabulary store from a terminal.

Commands:
    wordbook init                      create wordbook.toml
    wordbook words list                table of all words
    wordbook words show ID             one word
    wordbook words add VOCAB MEANING TRANSLATE CATEGORY [--example TEXT]
    wordbook words update ID VOCAB MEANING TRANSLATE CATEGORY [--example TEXT]
    wordbook words delete ID
    wordbook words categories          word count per category
    wordbook dates list [--sorted]     daily activity counters
    wordbook dates record MODE [--date YYYY-MM-DD]
    wordbook quiz                      count one quiz for today
    wordbook call NAME [JSON]          run any command, print the JSON envelope
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

from wordbook.commands import AppState, CommandSurface, command_defs
from wordbook.config import WordbookConfig, init_config, load_config
from wordbook.errors import WordbookError
from wordbook.models import ActivityMode

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_cfg(data_dir: str | None) -> WordbookConfig:
    try:
        cfg = load_config()
    except WordbookError as exc:
        raise click.ClickException(str(exc)) from exc
    if data_dir:
        cfg.data_dir = Path(data_dir).expanduser().resolve()
    return cfg


def _surface(ctx: click.Context) -> CommandSurface:
    """Open the stores once per invocation and cache the surface on ctx.obj."""
    obj = ctx.ensure_object(dict)
    if "surface" not in obj:
        cfg = _load_cfg(obj.get("data_dir"))
        if not obj.get("verbose"):
            logging.getLogger().setLevel(cfg.logging.level)
        try:
            obj["surface"] = CommandSurface(AppState.open(cfg))
        except WordbookError as exc:
            raise click.ClickException(str(exc)) from exc
    return obj["surface"]


def _run(ctx: click.Context, name: str, **arguments: Any) -> Any:
    surface = _surface(ctx)
    try:
        return surface.call(name, arguments)
    except WordbookError as exc:
        raise click.ClickException(str(exc)) from exc


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="wordbook")
@click.option("--data-dir", default=None, help="Override the app-data directory")
@click.option("--verbose", "-v", is_flag=True, help="Log at INFO level")
@click.pass_context
def cli(ctx: click.Context, data_dir: str | None, verbose: bool) -> None:
    """wordbook — vocabulary and daily activity store."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# wordbook init
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--dir", "root", default=".", show_default=True, help="Directory for wordbook.toml")
@click.option("--data-dir", "init_data_dir", default=None, help="App-data directory to record")
def init(root: str, init_data_dir: str | None) -> None:
    """Create wordbook.toml in the given directory."""
    root_path = Path(root).resolve()
    try:
        config_path = init_config(root_path, data_dir=init_data_dir)
        click.echo(f"Created {config_path}")
    except FileExistsError:
        click.echo("wordbook.toml already exists — skipping init")
    try:
        cfg = load_config(root_path)
    except WordbookError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Data dir : {cfg.data_dir}")


# ---------------------------------------------------------------------------
# wordbook words
# ---------------------------------------------------------------------------


@cli.group()
def words() -> None:
    """Vocabulary entries."""


@words.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@click.pass_context
def words_list(ctx: click.Context, as_json: bool) -> None:
    """Show all words in insertion order."""
    rows = _run(ctx, "get_words")
    if as_json:
        click.echo(json.dumps(rows, ensure_ascii=False, indent=2))
        return
    if not rows:
        click.echo("No words yet.")
        return

    from rich.console import Console
    from rich.markup import escape as _markup_escape
    from rich.table import Table

    table = Table(title=f"wordbook — {len(rows)} words", show_header=True, header_style="bold")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Vocabulary", style="bold")
    table.add_column("Meaning")
    table.add_column("Translate")
    table.add_column("Category")
    table.add_column("Example")
    for r in rows:
        table.add_row(
            str(r["id"]),
            _markup_escape(r["vocabulary"]),
            _markup_escape(r["meaning"]),
            _markup_escape(r["translate"]),
            _markup_escape(r["category"]),
            _markup_escape(r["example"] or ""),
        )
    Console().print(table)


@words.command("show")
@click.argument("word_id", type=int)
@click.pass_context
def words_show(ctx: click.Context, word_id: int) -> None:
    """Show one word by id."""
    w = _run(ctx, "get_words_by_id", id=word_id)
    click.echo(f"#{w['id']} {w['vocabulary']}  [{w['category']}]")
    click.echo(f"  meaning   : {w['meaning']}")
    click.echo(f"  translate : {w['translate']}")
    if w["example"]:
        click.echo(f"  example   : {w['example']}")


@words.command("add")
@click.argument("vocabulary")
@click.argument("meaning")
@click.argument("translate")
@click.argument("category")
@click.option("--example", default=None, help="Usage example")
@click.pass_context
def words_add(
    ctx: click.Context,
    vocabulary: str,
    meaning: str,
    translate: str,
    category: str,
    example: str | None,
) -> None:
    """Add a word and count it in today's activity."""
    _run(
        ctx,
        "add_word",
        vocabulary=vocabulary,
        meaning=meaning,
        translate=translate,
        category=category,
        example=example,
    )
    added = _run(ctx, "get_words")[-1]
    click.echo(f"Added #{added['id']} {added['vocabulary']}")


@words.command("update")
@click.argument("word_id", type=int)
@click.argument("vocabulary")
@click.argument("meaning")
@click.argument("translate")
@click.argument("category")
@click.option("--example", default=None, help="Usage example")
@click.pass_context
def words_update(
    ctx: click.Context,
    word_id: int,
    vocabulary: str,
    meaning: str,
    translate: str,
    category: str,
    example: str | None,
) -> None:
    """Replace every field of a word, keeping its id."""
    _run(
        ctx,
        "update_word",
        id=word_id,
        vocabulary=vocabulary,
        meaning=meaning,
        translate=translate,
        category=category,
        example=example,
    )
    click.echo(f"Updated #{word_id}")


@words.command("delete")
@click.argument("word_id", type=int)
@click.pass_context
def words_delete(ctx: click.Context, word_id: int) -> None:
    """Delete a word by id (no error if it does not exist)."""
    _run(ctx, "delete_word", id=word_id)
    click.echo(f"Deleted #{word_id}")


@words.command("categories")
@click.pass_context
def words_categories(ctx: click.Context) -> None:
    """Word count per category."""
    counts = _run(ctx, "get_categories")
    if not counts:
        click.echo("No words yet.")
        return
    for category, n in sorted(counts.items(), key=lambda kv: -kv[1]):
        click.echo(f"{n:>5}  {category or '(uncategorized)'}")


# ---------------------------------------------------------------------------
# wordbook dates
# ---------------------------------------------------------------------------


@cli.group()
def dates() -> None:
    """Daily activity counters."""


@dates.command("list")
@click.option("--sorted", "sort", is_flag=True, help="Sort by date")
@click.pass_context
def dates_list(ctx: click.Context, sort: bool) -> None:
    """Show add/update/quiz counts per day."""
    rows = _run(ctx, "get_dates", sort=sort)
    if not rows:
        click.echo("No activity yet.")
        return
    click.echo(f"{'Date':<10}  {'Add':>5}  {'Update':>6}  {'Quiz':>5}")
    click.echo("-" * 32)
    for r in rows:
        quiz = "-" if r["quiz"] is None else str(r["quiz"])
        click.echo(f"{r['date']:<10}  {r['add']:>5}  {r['update']:>6}  {quiz:>5}")


@dates.command("record")
@click.argument("mode", type=click.Choice([m.value for m in ActivityMode]))
@click.option("--date", "day", default=None, help="YYYY-MM-DD (default: today)")
@click.pass_context
def dates_record(ctx: click.Context, mode: str, day: str | None) -> None:
    """Count one activity event."""
    surface = _surface(ctx)
    day = day or surface.state.dates.today()
    _run(ctx, "add_date", date=day, add=0, update=0, mode=mode)
    click.echo(f"Recorded {mode} on {day}")


@cli.command()
@click.pass_context
def quiz(ctx: click.Context) -> None:
    """Count one quiz for today."""
    _run(ctx, "record_quiz")
    click.echo("Recorded quiz")


# ---------------------------------------------------------------------------
# wordbook call
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("name", required=False)
@click.argument("arguments", required=False, default="{}")
@click.pass_context
def call(ctx: click.Context, name: str | None, arguments: str) -> None:
    """Invoke a command by NAME with a JSON object of ARGUMENTS.

    Without NAME, list the available commands.
    """
    if name is None:
        for d in command_defs():
            click.echo(f"{d['name']:<20} {d['description']}")
        return
    try:
        args = json.loads(arguments)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"ARGUMENTS is not valid JSON: {exc}") from exc
    if not isinstance(args, dict):
        raise click.ClickException("ARGUMENTS must be a JSON object")
    envelope = _surface(ctx).invoke(name, args)
    click.echo(json.dumps(envelope, ensure_ascii=False, indent=2))
    if envelope["isError"]:
        ctx.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
