"""Tests for occurrence iteration."""

from datetime import datetime, timedelta, timezone
from itertools import islice

import pytest

from cron_parser import (
    CronConfig,
    CronIterator,
    CronSearchLimitError,
    CronUsageError,
    HasNext,
    Schedule,
)


def iterate(expression: str, start: datetime, config: CronConfig | None = None) -> CronIterator:
    return CronIterator(Schedule.parse(expression), start, config)


# =============================================================================
# Basic Advance Tests
# =============================================================================


class TestCronIteratorNext:
    """Tests for CronIterator.next."""

    def test_first_of_month(self):
        """Test midnight on the 1st from the middle of a month."""
        it = iterate("0 0 1 * *", datetime(2021, 1, 15, 10, 30))
        assert it.next() == datetime(2021, 2, 1, 0, 0)
        assert it.next() == datetime(2021, 3, 1, 0, 0)

    def test_every_quarter_hour(self):
        it = iterate("*/15 * * * *", datetime(2021, 1, 1, 0, 5))
        assert it.next() == datetime(2021, 1, 1, 0, 15)
        assert it.next() == datetime(2021, 1, 1, 0, 30)
        assert it.next() == datetime(2021, 1, 1, 0, 45)
        assert it.next() == datetime(2021, 1, 1, 1, 0)

    def test_weekdays_skip_weekend(self):
        """Test 9am Mon-Fri from a Friday morning lands on Monday."""
        it = iterate("0 9 * * 1-5", datetime(2021, 1, 8, 10, 0))  # Friday
        assert it.next() == datetime(2021, 1, 11, 9, 0)
        assert it.next() == datetime(2021, 1, 12, 9, 0)

    def test_every_minute(self):
        it = iterate("* * * * *", datetime(2021, 1, 1, 23, 59))
        assert it.next() == datetime(2021, 1, 2, 0, 0)

    def test_hour_skip(self):
        it = iterate("30 14 * * *", datetime(2021, 1, 1, 15, 0))
        assert it.next() == datetime(2021, 1, 2, 14, 30)

    def test_sunday_as_zero(self):
        it = iterate("0 0 * * 0", datetime(2021, 1, 8, 12, 0))  # Friday
        assert it.next() == datetime(2021, 1, 10, 0, 0)

    def test_month_list(self):
        it = iterate("0 6 1 1,7 *", datetime(2021, 2, 1))
        assert it.next() == datetime(2021, 7, 1, 6, 0)
        assert it.next() == datetime(2022, 1, 1, 6, 0)


# =============================================================================
# Cursor Tests
# =============================================================================


class TestCronIteratorCursor:
    """Tests for start time handling and current()."""

    def test_start_never_returned(self):
        """Test a start time that matches is skipped."""
        it = iterate("0 0 * * *", datetime(2021, 1, 1, 0, 0))
        assert it.next() == datetime(2021, 1, 2, 0, 0)

    def test_start_truncated_to_minute(self):
        """Test seconds are dropped before advancing."""
        it = iterate("*/15 * * * *", datetime(2021, 1, 1, 0, 14, 59, 999999))
        assert it.next() == datetime(2021, 1, 1, 0, 15)

    def test_truncated_start_matching_is_skipped(self):
        it = iterate("*/15 * * * *", datetime(2021, 1, 1, 0, 15, 30))
        assert it.next() == datetime(2021, 1, 1, 0, 30)

    def test_current_before_next(self):
        """Test reading current() before any advance is a usage error."""
        it = iterate("* * * * *", datetime(2021, 1, 1))
        with pytest.raises(CronUsageError):
            it.current()

    def test_current_after_next(self):
        it = iterate("0 12 * * *", datetime(2021, 1, 1))
        occurrence = it.next()
        assert it.current() == occurrence
        assert it.current() == datetime(2021, 1, 1, 12, 0)

    def test_timezone_preserved(self):
        """Test aware start times keep their tzinfo."""
        it = iterate("0 0 * * *", datetime(2021, 1, 1, 5, 0, tzinfo=timezone.utc))
        assert it.next() == datetime(2021, 1, 2, 0, 0, tzinfo=timezone.utc)

    def test_schedule_property(self):
        schedule = Schedule.parse("0 0 * * *")
        assert CronIterator(schedule, datetime(2021, 1, 1)).schedule is schedule


# =============================================================================
# Calendar Tests
# =============================================================================


class TestCronIteratorCalendar:
    """Tests for month, year and leap-year rollover."""

    def test_year_rollover(self):
        it = iterate("0 0 1 1 *", datetime(2021, 6, 1))
        assert it.next() == datetime(2022, 1, 1, 0, 0)

    def test_december_to_january(self):
        it = iterate("0 0 * 1 *", datetime(2021, 12, 15))
        assert it.next() == datetime(2022, 1, 1, 0, 0)

    def test_leap_day(self):
        """Test Feb 29 is only found in leap years."""
        it = iterate("0 12 29 2 *", datetime(2021, 1, 1))
        assert it.next() == datetime(2024, 2, 29, 12, 0)
        assert it.next() == datetime(2028, 2, 29, 12, 0)

    def test_day_31_skips_short_months(self):
        it = iterate("0 0 31 * *", datetime(2021, 4, 1))
        assert it.next() == datetime(2021, 5, 31, 0, 0)
        assert it.next() == datetime(2021, 7, 31, 0, 0)

    def test_day_and_weekday_combined_with_and(self):
        """Test day-of-month and weekday must both hold."""
        it = iterate("0 0 13 * 5", datetime(2021, 1, 1))
        assert it.next() == datetime(2021, 8, 13, 0, 0)
        assert it.next() == datetime(2022, 5, 13, 0, 0)


# =============================================================================
# Sequence Property Tests
# =============================================================================


class TestCronIteratorSequence:
    """Tests for properties of the whole occurrence sequence."""

    @pytest.mark.parametrize(
        "expression",
        ["*/7 */3 * * *", "0,30 8-18 * * 1-5", "15 0 1,15 * *", "0 0 * 2 0"],
    )
    def test_strictly_increasing_whole_minutes(self, expression):
        start = datetime(2020, 12, 31, 22, 17, 45)
        it = iterate(expression, start)
        schedule = it.schedule
        previous = start.replace(second=0, microsecond=0)
        for _ in range(200):
            occurrence = it.next()
            assert occurrence > previous
            assert occurrence.second == 0
            assert occurrence.microsecond == 0
            assert schedule.matches(occurrence)
            previous = occurrence

    def test_no_occurrence_skipped(self):
        """Test every matching minute in a day is produced."""
        start = datetime(2021, 3, 1)
        it = iterate("*/10 9 * * *", start - timedelta(minutes=1))
        assert list(islice(it, 6)) == [
            datetime(2021, 3, 1, 9, minute) for minute in range(0, 60, 10)
        ]

    def test_python_iterator_protocol(self):
        it = iterate("0 * * * *", datetime(2021, 1, 1))
        assert isinstance(it, HasNext)
        assert iter(it) is it
        assert next(it) == datetime(2021, 1, 1, 1, 0)
        assert list(islice(it, 2)) == [
            datetime(2021, 1, 1, 2, 0),
            datetime(2021, 1, 1, 3, 0),
        ]


# =============================================================================
# Search Limit Tests
# =============================================================================


class TestCronIteratorSearchLimit:
    """Tests for schedules that can never fire."""

    def test_unsatisfiable_schedule(self):
        """Test Feb 31 exhausts a full calendar cycle."""
        it = iterate("0 0 31 2 *", datetime(2021, 1, 1))
        with pytest.raises(CronSearchLimitError) as exc:
            it.next()
        assert exc.value.limit == CronConfig().search_limit
        assert exc.value.schedule == it.schedule

    def test_custom_limit(self):
        """Test a rare occurrence outside a short limit is not found."""
        config = CronConfig(search_limit=timedelta(days=365))
        it = iterate("0 12 29 2 *", datetime(2021, 1, 1), config)
        with pytest.raises(CronSearchLimitError):
            it.next()

    def test_failure_leaves_cursor(self):
        """Test a failed search does not move the cursor or count as an advance."""
        config = CronConfig(search_limit=timedelta(days=30))
        it = iterate("0 0 31 2 *", datetime(2021, 1, 1), config)
        with pytest.raises(CronSearchLimitError):
            it.next()
        with pytest.raises(CronUsageError):
            it.current()

    def test_degenerate_schedule(self):
        """Test a field with no legal value fails without searching."""
        it = CronIterator(Schedule.from_constraints(minutes=[99]), datetime(2021, 1, 1))
        with pytest.raises(CronSearchLimitError) as exc:
            it.next()
        assert exc.value.limit is None

    def test_end_of_calendar(self):
        """Test running past datetime.max is reported as a search failure."""
        it = iterate("0 0 1 1 *", datetime(9999, 12, 31, 23, 0))
        with pytest.raises(CronSearchLimitError):
            it.next()

    def test_near_end_of_calendar(self):
        """Test a cursor closer than the search limit to datetime.max still advances."""
        it = CronIterator(Schedule.parse("* * * * *"), datetime(9700, 1, 1))
        assert it.next() == datetime(9700, 1, 1, 0, 1)

    def test_near_end_of_calendar_aware(self):
        start = datetime(9999, 12, 31, 22, 0, tzinfo=timezone.utc)
        it = iterate("30 23 * * *", start)
        assert it.next() == datetime(9999, 12, 31, 23, 30, tzinfo=timezone.utc)
