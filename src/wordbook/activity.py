"""ActivityStore: per-day counters mirrored to date.json."""

from __future__ import annotations

import copy
import logging
from datetime import date as _date
from typing import TYPE_CHECKING

from wordbook.errors import InvalidArgument
from wordbook.files import DATES_FILE
from wordbook.models import DATE_RE, ActivityMode, DailyActivity
from wordbook.store import LockedListStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from wordbook.files import FileStore


logger = logging.getLogger("wordbook.activity")


class ActivityStore(LockedListStore):
    """Daily activity counters, at most one entry per date."""

    label = "dates"

    def __init__(
        self,
        files: FileStore,
        *,
        lock_timeout: float = 5.0,
        today: Callable[[], _date] = _date.today,
    ) -> None:
        super().__init__(files, DATES_FILE, lock_timeout=lock_timeout)
        self._today = today
        self._days: list[DailyActivity] = []

    def list(self, *, sort: bool = False) -> list[DailyActivity]:
        with self._locked():
            days = copy.deepcopy(self._days)
        if sort:
            days.sort(key=lambda d: d.date)
        return days

    def get(self, date: str) -> DailyActivity | None:
        with self._locked():
            day = self._find(date)
            return copy.deepcopy(day) if day is not None else None

    def today(self) -> str:
        return self._today().isoformat()

    def upsert(self, date: str, mode: str | ActivityMode) -> DailyActivity:
        """Count one event of kind mode on date, then persist.

        An existing entry has the named counter incremented. A new date starts
        from add=1, update=0 regardless of mode; a quiz event also sets quiz=1
        so the first quiz is never lost.
        """
        parsed = ActivityMode.parse(mode)
        if not isinstance(date, str) or not DATE_RE.match(date):
            msg = f"Invalid date: {date!r} (expected YYYY-MM-DD)"
            raise InvalidArgument(msg)

        with self._locked():
            day = self._find(date)
            if day is None:
                day = DailyActivity.new_day(date)
                if parsed is ActivityMode.QUIZ:
                    day.quiz = 1
                self._days.append(day)
            else:
                day.bump(parsed)
            self._write(self._days)
            return copy.deepcopy(day)

    def record(self, mode: str | ActivityMode) -> DailyActivity:
        """Upsert for today's local date."""
        return self.upsert(self.today(), mode)

    def save(self) -> None:
        with self._locked():
            self._write(self._days)

    def load(self) -> int:
        with self._locked():
            days = self._read(DailyActivity.from_dict)
            if days is None:
                logger.info("no dates file at %s", self.path)
                return len(self._days)
            self._days = days
            logger.info("loaded %d days from %s", len(days), self.path)
            return len(days)

    def _find(self, date: str) -> DailyActivity | None:
        for d in self._days:
            if d.date == date:
                return d
        return None
