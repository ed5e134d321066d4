"""Occurrence iteration over a schedule.

The iterator keeps a single cursor, truncated to the minute, and moves it
forward on every ``next()`` call until all five fields of the schedule hold.
Whole months, days and hours that cannot match are skipped in one step.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Generic, TypeVar

from cron_parser.config import DEFAULT_CONFIG, CronConfig
from cron_parser.errors import CronSearchLimitError, CronUsageError
from cron_parser.schedule import Schedule

logger = logging.getLogger(__name__)

T = TypeVar("T")

ONE_MINUTE = timedelta(minutes=1)
ONE_HOUR = timedelta(hours=1)
ONE_DAY = timedelta(days=1)


# =============================================================================
# Contract
# =============================================================================


class HasNext(ABC, Generic[T]):
    """A pull-based, infinite, forward-only sequence.

    ``next()`` advances and returns the new position; ``current()`` reads it
    again without advancing. Instances are also Python iterators, so
    ``itertools.islice(it, 5)`` takes the next five values.
    """

    @abstractmethod
    def next(self) -> T:
        """Advance and return the next value."""

    @abstractmethod
    def current(self) -> T:
        """Return the value produced by the last ``next()`` call."""

    def __iter__(self) -> "HasNext[T]":
        return self

    def __next__(self) -> T:
        return self.next()


# =============================================================================
# Calendar Jumps
# =============================================================================


def _start_of_next_month(dt: datetime) -> datetime:
    if dt.month == 12:
        return dt.replace(year=dt.year + 1, month=1, day=1, hour=0, minute=0)
    return dt.replace(month=dt.month + 1, day=1, hour=0, minute=0)


def _start_of_next_day(dt: datetime) -> datetime:
    return (dt + ONE_DAY).replace(hour=0, minute=0)


def _start_of_next_hour(dt: datetime) -> datetime:
    return (dt + ONE_HOUR).replace(minute=0)


def _misses(values: tuple[int, ...] | None, value: int) -> bool:
    return values is not None and value not in values


# =============================================================================
# Cron Iterator
# =============================================================================


class CronIterator(HasNext[datetime]):
    """Iterator over the occurrences of a schedule.

    The start time is never returned itself, even if it matches. Not safe
    for concurrent use.

    Example:
        >>> it = CronIterator(Schedule.parse("*/15 * * * *"), datetime(2021, 1, 1, 0, 5))
        >>> it.next()
        datetime.datetime(2021, 1, 1, 0, 15)
        >>> it.next()
        datetime.datetime(2021, 1, 1, 0, 30)
    """

    def __init__(
        self,
        schedule: Schedule,
        start_time: datetime,
        config: CronConfig | None = None,
    ) -> None:
        """Initialize iterator.

        Args:
            schedule: Schedule to iterate over.
            start_time: Reference time; seconds and below are dropped.
            config: Search settings (default: ``DEFAULT_CONFIG``).
        """
        self._schedule = schedule
        self._config = config or DEFAULT_CONFIG
        self._cursor = start_time.replace(second=0, microsecond=0)
        self._next_called = False

    @property
    def schedule(self) -> Schedule:
        return self._schedule

    def next(self) -> datetime:
        """Advance to the next occurrence and return it.

        Raises:
            CronSearchLimitError: If the schedule is degenerate or has no
                occurrence within the configured search limit. The cursor is
                left where it was.
        """
        schedule = self._schedule
        limit = self._config.search_limit

        if schedule.is_degenerate:
            logger.warning("Schedule has a field with no legal value: %r", schedule)
            raise CronSearchLimitError(
                "Schedule can never fire: a field has no legal value",
                schedule=schedule,
            )

        try:
            found = self._search(self._cursor + ONE_MINUTE, limit)
        except (OverflowError, ValueError):
            # a calendar jump ran past datetime.max
            found = None

        if found is None:
            logger.warning(
                "No occurrence of %r within %s after %s", schedule, limit, self._cursor
            )
            raise CronSearchLimitError(
                f"No occurrence found within {limit.days} days after {self._cursor.isoformat()}",
                schedule=schedule,
                limit=limit,
            )

        self._cursor = found
        self._next_called = True
        logger.debug("Next occurrence: %s", found)
        return found

    def _search(self, candidate: datetime, limit: timedelta) -> datetime | None:
        schedule = self._schedule
        latest = datetime.max.replace(tzinfo=candidate.tzinfo)
        deadline = candidate + limit if candidate <= latest - limit else latest

        while candidate <= deadline:
            if _misses(schedule.months, candidate.month):
                candidate = _start_of_next_month(candidate)
            elif _misses(schedule.weekdays, candidate.isoweekday()):
                candidate = _start_of_next_day(candidate)
            elif _misses(schedule.days, candidate.day):
                candidate = _start_of_next_day(candidate)
            elif _misses(schedule.hours, candidate.hour):
                candidate = _start_of_next_hour(candidate)
            elif _misses(schedule.minutes, candidate.minute):
                candidate = candidate + ONE_MINUTE
            else:
                return candidate

        return None

    def current(self) -> datetime:
        """Return the last occurrence produced by ``next()``.

        Raises:
            CronUsageError: If ``next()`` has not been called yet.
        """
        if not self._next_called:
            raise CronUsageError("current() called before next()")
        return self._cursor

    def __repr__(self) -> str:
        return f"CronIterator({self._schedule!r}, cursor={self._cursor.isoformat()})"
