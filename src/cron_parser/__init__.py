"""Cron expression parsing and occurrence iteration.

Parses a five-field cron expression (minute, hour, day of month, month,
weekday) and produces the times at which it fires, one at a time, from a
reference point. Nothing is executed; callers own dispatch.

Usage:
    >>> from datetime import datetime
    >>> from cron_parser import Cron
    >>>
    >>> it = Cron().parse("0 0 1 * *", datetime(2021, 1, 15, 10, 30))
    >>> it.next()
    datetime.datetime(2021, 2, 1, 0, 0)
    >>> it.current()
    datetime.datetime(2021, 2, 1, 0, 0)
"""

from cron_parser.config import CronConfig
from cron_parser.cron import Cron, parse
from cron_parser.errors import (
    CronError,
    CronParseError,
    CronSearchLimitError,
    CronUsageError,
)
from cron_parser.fields import (
    FieldType,
    Many,
    Single,
    Text,
    Unconstrained,
    parse_constraint,
)
from cron_parser.grammar import (
    is_valid_expression,
    split_expression,
    validate_expression,
)
from cron_parser.iterator import CronIterator, HasNext
from cron_parser.schedule import Schedule

__version__ = "0.1.0"

__all__ = [
    # Core
    "Cron",
    "parse",
    "Schedule",
    # Iterator
    "HasNext",
    "CronIterator",
    "CronConfig",
    # Fields
    "FieldType",
    "Unconstrained",
    "Single",
    "Many",
    "Text",
    "parse_constraint",
    # Validation
    "split_expression",
    "validate_expression",
    "is_valid_expression",
    # Errors
    "CronError",
    "CronParseError",
    "CronUsageError",
    "CronSearchLimitError",
]
