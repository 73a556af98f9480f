"""WordbookConfig: where the data lives and how the stores behave.

Lookup order for the app-data directory (first hit wins):

    WORDBOOK_DATA_DIR      environment variable set by the host shell
    .env                   WORDBOOK_DATA_DIR=... next to wordbook.toml
    wordbook.toml          [storage] data_dir
    default                $XDG_DATA_HOME/wordbook or ~/.local/share/wordbook

wordbook.toml example:

    [storage]
    data_dir = "~/.local/share/wordbook"

    [store]
    id_policy = "last"      # last | max
    lock_timeout = 5.0      # seconds, -1 waits forever

    [logging]
    level = "WARNING"
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from wordbook.errors import InvalidArgument, ParseFailure
from wordbook.vocabulary import ID_POLICIES

_CONFIG_FILENAME = "wordbook.toml"
_ENV_DATA_DIR = "WORDBOOK_DATA_DIR"
_APP_NAME = "wordbook"


def default_data_dir() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / _APP_NAME


@dataclass
class StoreConfig:
    id_policy: str = "last"
    lock_timeout: float = 5.0


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class WordbookConfig:
    """Resolved configuration."""

    root: Path                      # directory searched for wordbook.toml
    data_dir: Path = field(default_factory=default_data_dir)
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def config_path(self) -> Path:
        return self.root / _CONFIG_FILENAME


def _dotenv_data_dir(root: Path) -> str | None:
    """WORDBOOK_DATA_DIR from a .env beside wordbook.toml, if the host shell wrote one."""
    env_file = root / ".env"
    if not env_file.exists():
        return None
    found: str | None = None
    for line in env_file.read_text().splitlines():
        key, sep, value = line.strip().partition("=")
        if sep and key.strip() == _ENV_DATA_DIR:
            found = value.strip().strip('"').strip("'") or None
    return found


def _parse_lock_timeout(value: Any, config_path: Path) -> float:
    try:
        timeout = None if isinstance(value, bool) else float(value)
    except (TypeError, ValueError):
        timeout = None
    # threading.Lock.acquire only accepts -1 or a non-negative timeout
    if timeout is None or (timeout < 0 and timeout != -1):
        msg = f"Invalid lock_timeout in {config_path}: {value!r} (expected seconds >= 0, or -1)"
        raise InvalidArgument(msg)
    return timeout


def load_config(root: Path | str | None = None) -> WordbookConfig:
    """Load wordbook.toml from root (or search upward from cwd if root is None)."""
    start = Path(root) if root else Path.cwd()
    # nearest ancestor holding wordbook.toml; start itself when there is none
    root_path = next(
        (d for d in (start, *start.parents) if (d / _CONFIG_FILENAME).exists()),
        start,
    )
    config_path = root_path / _CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.exists():
        try:
            with config_path.open("rb") as f:
                raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Failed to parse {config_path}: {exc}"
            raise ParseFailure(msg) from exc

    storage_section = raw.get("storage", {})
    store_section = raw.get("store", {})
    log_section = raw.get("logging", {})

    data_dir_raw = (
        os.environ.get(_ENV_DATA_DIR)
        or _dotenv_data_dir(root_path)
        or storage_section.get("data_dir")
    )
    if data_dir_raw:
        data_dir = Path(str(data_dir_raw)).expanduser()
        if not data_dir.is_absolute():
            data_dir = root_path / data_dir
    else:
        data_dir = default_data_dir()

    id_policy = str(store_section.get("id_policy", "last"))
    if id_policy not in ID_POLICIES:
        msg = f"Invalid id_policy in {config_path}: {id_policy!r} (expected one of: {', '.join(ID_POLICIES)})"
        raise InvalidArgument(msg)

    return WordbookConfig(
        root=root_path,
        data_dir=data_dir,
        store=StoreConfig(
            id_policy=id_policy,
            lock_timeout=_parse_lock_timeout(store_section.get("lock_timeout", 5.0), config_path),
        ),
        logging=LoggingConfig(
            level=str(log_section.get("level", "WARNING")).upper(),
        ),
    )


def init_config(root: Path, data_dir: Path | str | None = None) -> Path:
    """Write a default wordbook.toml at root. Raises if already exists."""
    config_path = root / _CONFIG_FILENAME
    if config_path.exists():
        msg = f"wordbook.toml already exists at {config_path}"
        raise FileExistsError(msg)

    if data_dir is not None:
        storage_line = f'data_dir = "{Path(data_dir).as_posix()}"'
    else:
        storage_line = f'# data_dir = "{default_data_dir().as_posix()}"   # default'

    content = f"""\
[storage]
{storage_line}
# WORDBOOK_DATA_DIR in the environment or .env overrides this

[store]
# id_policy = "last"     # last: next id follows the last word; max: never reuse ids
# lock_timeout = 5.0     # seconds to wait for a store lock, -1 waits forever

[logging]
# level = "WARNING"
"""
    root.mkdir(parents=True, exist_ok=True)
    config_path.write_text(content)
    return config_path
