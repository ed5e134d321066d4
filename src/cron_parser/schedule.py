"""Schedule assembly.

A Schedule holds the normalized value set of each of the five cron fields.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from cron_parser.fields import FIELD_RANGES, FieldType, parse_constraint
from cron_parser.grammar import split_expression

logger = logging.getLogger(__name__)


def _normalize(constraint: Any, field_type: FieldType) -> tuple[int, ...] | None:
    """Parse a constraint and keep only values legal for the field."""
    values = parse_constraint(constraint)
    if values is None:
        return None

    low, high = FIELD_RANGES[field_type]
    legal = [v for v in values if low <= v <= high]
    if field_type is FieldType.DAY_OF_WEEK:
        legal = [7 if v == 0 else v for v in legal]
    return tuple(sorted(set(legal)))


@dataclass(frozen=True)
class Schedule:
    """Normalized value sets for the five cron fields.

    Each attribute is None when the field is unconstrained, otherwise an
    ascending tuple of legal values. Weekdays use Monday=1 through Sunday=7.
    No cross-field validation is done: day 31 simply never matches in a
    shorter month.

    Example:
        >>> schedule = Schedule.parse("*/15 9-17 * * 1-5")
        >>> schedule.minutes
        (0, 15, 30, 45)
        >>> schedule.matches(datetime(2021, 1, 4, 9, 30))
        True
    """

    minutes: tuple[int, ...] | None = None
    hours: tuple[int, ...] | None = None
    days: tuple[int, ...] | None = None
    months: tuple[int, ...] | None = None
    weekdays: tuple[int, ...] | None = None

    @classmethod
    def from_constraints(
        cls,
        minutes: Any = None,
        hours: Any = None,
        days: Any = None,
        months: Any = None,
        weekdays: Any = None,
    ) -> "Schedule":
        """Assemble a schedule from raw field constraints.

        Each argument may be None, an int, a sequence of ints, cron text, or
        a constraint variant from ``cron_parser.fields``.

        Raises:
            CronParseError: If any field cannot be parsed.
        """
        schedule = cls(
            minutes=_normalize(minutes, FieldType.MINUTE),
            hours=_normalize(hours, FieldType.HOUR),
            days=_normalize(days, FieldType.DAY_OF_MONTH),
            months=_normalize(months, FieldType.MONTH),
            weekdays=_normalize(weekdays, FieldType.DAY_OF_WEEK),
        )
        logger.debug("Assembled %r", schedule)
        return schedule

    @classmethod
    def parse(cls, expression: str) -> "Schedule":
        """Validate and parse a five-field cron expression.

        Raises:
            CronParseError: If the expression is malformed.
        """
        minute, hour, day, month, weekday = split_expression(expression)
        return cls.from_constraints(
            minutes=minute, hours=hour, days=day, months=month, weekdays=weekday
        )

    def field_values(self, field_type: FieldType) -> tuple[int, ...] | None:
        """Get the normalized values of one field."""
        return {
            FieldType.MINUTE: self.minutes,
            FieldType.HOUR: self.hours,
            FieldType.DAY_OF_MONTH: self.days,
            FieldType.MONTH: self.months,
            FieldType.DAY_OF_WEEK: self.weekdays,
        }[field_type]

    @property
    def is_degenerate(self) -> bool:
        """True if some constrained field has no legal value left."""
        return any(
            values is not None and not values
            for values in (self.minutes, self.hours, self.days, self.months, self.weekdays)
        )

    def matches(self, dt: datetime) -> bool:
        """Check if a datetime satisfies all five fields.

        Day-of-month and weekday must both match when both are constrained.
        """
        return (
            _allows(self.months, dt.month)
            and _allows(self.weekdays, dt.isoweekday())
            and _allows(self.days, dt.day)
            and _allows(self.hours, dt.hour)
            and _allows(self.minutes, dt.minute)
        )


def _allows(values: tuple[int, ...] | None, value: int) -> bool:
    return values is None or value in values
