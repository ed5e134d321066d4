"""Public entry point: turn a cron string into an occurrence iterator."""

from __future__ import annotations

import logging
from datetime import datetime

from cron_parser.config import CronConfig
from cron_parser.errors import CronParseError
from cron_parser.iterator import CronIterator, HasNext
from cron_parser.schedule import Schedule

logger = logging.getLogger(__name__)


class Cron:
    """Factory for occurrence iterators.

    Example:
        >>> it = Cron().parse("0 9 * * 1-5", datetime(2021, 1, 8, 10, 0))
        >>> it.next()
        datetime.datetime(2021, 1, 11, 9, 0)
    """

    def __init__(self, config: CronConfig | None = None) -> None:
        """Initialize factory.

        Args:
            config: Search settings (default: read from the environment).
        """
        self._config = config if config is not None else CronConfig.from_env()

    def parse(self, cron_string: str, start_time: datetime | None = None) -> HasNext[datetime]:
        """Parse ``cron_string`` and return an iterator over its occurrences.

        Args:
            cron_string: Five-field cron expression.
            start_time: Reference time (default: now). Never returned itself.

        Returns:
            Iterator yielding occurrences after ``start_time``.

        Raises:
            CronParseError: If the expression is empty or malformed.
        """
        if not cron_string:
            raise CronParseError("Cron expression must not be empty", cron_string)
        if start_time is None:
            start_time = datetime.now()

        schedule = Schedule.parse(cron_string)
        logger.debug("Parsed %r starting from %s", cron_string, start_time)
        return CronIterator(schedule, start_time, self._config)


def parse(
    cron_string: str,
    start_time: datetime | None = None,
    config: CronConfig | None = None,
) -> HasNext[datetime]:
    """Shortcut for ``Cron(config).parse(cron_string, start_time)``."""
    return Cron(config).parse(cron_string, start_time)
