"""Exceptions raised by cron_parser.

Malformed expressions and misuse of an iterator are programming errors, so
they are raised eagerly and never recovered from inside the library.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cron_parser.schedule import Schedule


class CronError(Exception):
    """Base exception for all cron_parser errors."""


class CronParseError(CronError, ValueError):
    """Raised when a cron expression or one of its fields cannot be parsed.

    Attributes:
        expression: The full expression being parsed (may be empty when a
            single field was parsed on its own).
        fragment: The offending piece of text.
    """

    def __init__(self, message: str, expression: str = "", fragment: str = "") -> None:
        self.expression = expression
        self.fragment = fragment
        super().__init__(message)


class CronUsageError(CronError, RuntimeError):
    """Raised when an iterator is used out of order."""


class CronSearchLimitError(CronError, RuntimeError):
    """Raised when no occurrence can be found for a schedule.

    Attributes:
        schedule: The schedule that could not be satisfied.
        limit: The search span that was exhausted, or None when the schedule
            was rejected before searching.
    """

    def __init__(
        self,
        message: str,
        schedule: "Schedule | None" = None,
        limit: timedelta | None = None,
    ) -> None:
        self.schedule = schedule
        self.limit = limit
        super().__init__(message)
