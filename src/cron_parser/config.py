"""Configuration for occurrence iteration.

Environment Variables:
    CRON_PARSER_SEARCH_LIMIT_DAYS: Maximum span, in days, searched for a single
        occurrence before giving up (default: 146097, one Gregorian cycle).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta

# The Gregorian calendar repeats every 400 years (146097 days, a whole number
# of weeks), so a schedule with no match in that span never matches.
GREGORIAN_CYCLE = timedelta(days=146097)

SEARCH_LIMIT_ENV = "CRON_PARSER_SEARCH_LIMIT_DAYS"


@dataclass(frozen=True)
class CronConfig:
    """Settings for a CronIterator.

    Attributes:
        search_limit: How far past the cursor a single advance may search.
    """

    search_limit: timedelta = field(default=GREGORIAN_CYCLE)

    def __post_init__(self) -> None:
        if self.search_limit <= timedelta(0):
            raise ValueError(f"search_limit must be positive, got {self.search_limit}")

    @classmethod
    def from_env(cls) -> "CronConfig":
        """Create configuration from environment variables."""
        raw = os.environ.get(SEARCH_LIMIT_ENV)
        if raw is None or not raw.strip():
            return cls()

        try:
            days = int(raw)
        except ValueError:
            raise ValueError(f"{SEARCH_LIMIT_ENV} must be an integer, got {raw!r}") from None

        return cls(search_limit=timedelta(days=days))


DEFAULT_CONFIG = CronConfig()
