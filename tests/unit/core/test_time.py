"""Tests for ActusDate, recurrence periods and period arithmetic."""

from datetime import date

import jax
import pytest

from pamsched.core.time import (
    ActusDate,
    PeriodUnit,
    RecurrencePeriod,
    add_period,
    parse_cycle,
    parse_iso_date,
)
from pamsched.core.types import EndOfMonthConvention
from pamsched.exceptions import DateTimeError, InvalidPeriodError


class TestActusDate:
    """Test ActusDate construction, ordering and conversions."""

    def test_valid_date(self):
        dt = ActusDate(2024, 2, 29)
        assert (dt.year, dt.month, dt.day) == (2024, 2, 29)

    @pytest.mark.parametrize(
        ("year", "month", "day"),
        [(2023, 2, 29), (2024, 13, 1), (2024, 4, 31), (0, 1, 1), (2024, 1, 0)],
    )
    def test_invalid_components_raise(self, year, month, day):
        with pytest.raises(ValueError):
            ActusDate(year, month, day)

    def test_ordering_is_chronological(self):
        assert ActusDate(2024, 1, 31) < ActusDate(2024, 2, 1)
        assert ActusDate(2023, 12, 31) < ActusDate(2024, 1, 1)
        assert max(ActusDate(2024, 5, 1), ActusDate(2024, 4, 30)) == ActusDate(2024, 5, 1)

    def test_hashable(self):
        assert len({ActusDate(2024, 1, 1), ActusDate(2024, 1, 1)}) == 1

    def test_is_frozen(self):
        dt = ActusDate(2024, 1, 1)
        with pytest.raises(AttributeError):
            dt.day = 2  # type: ignore[misc]

    def test_iso_round_trip(self):
        assert ActusDate.from_iso("2024-03-15").to_iso() == "2024-03-15"
        assert str(ActusDate(2024, 3, 5)) == "2024-03-05"

    def test_from_date_and_to_date(self):
        assert ActusDate.from_date(date(2024, 6, 30)) == ActusDate(2024, 6, 30)
        assert ActusDate(2024, 6, 30).to_date() == date(2024, 6, 30)

    def test_coerce(self):
        expected = ActusDate(2024, 1, 15)
        assert ActusDate.coerce(expected) is expected
        assert ActusDate.coerce(date(2024, 1, 15)) == expected
        assert ActusDate.coerce("2024-01-15") == expected

    def test_coerce_rejects_other_types(self):
        with pytest.raises(DateTimeError):
            ActusDate.coerce(20240115)  # type: ignore[arg-type]

    def test_end_of_month(self):
        assert ActusDate(2024, 2, 29).is_end_of_month()
        assert not ActusDate(2023, 2, 28).add_days(-1).is_end_of_month()
        assert ActusDate(2023, 2, 10).end_of_month() == ActusDate(2023, 2, 28)

    def test_add_days_and_days_between(self):
        start = ActusDate(2024, 2, 28)
        assert start.add_days(2) == ActusDate(2024, 3, 1)
        assert start.days_between(ActusDate(2024, 3, 1)) == 2
        assert ActusDate(2024, 3, 1).days_between(start) == -2

    def test_weekday(self):
        assert ActusDate(2024, 11, 9).weekday() == 5  # Saturday

    def test_pytree_round_trip(self):
        dt = ActusDate(2024, 7, 1)
        leaves, treedef = jax.tree_util.tree_flatten(dt)
        assert leaves == [2024, 7, 1]
        assert jax.tree_util.tree_unflatten(treedef, leaves) == dt


class TestParseIsoDate:
    """Test ISO 8601 parsing."""

    def test_date_only(self):
        assert parse_iso_date("2025-01-01") == ActusDate(2025, 1, 1)

    def test_midnight_timestamp(self):
        assert parse_iso_date("2013-01-01T00:00:00") == ActusDate(2013, 1, 1)
        assert parse_iso_date("2013-01-01 00:00:00") == ActusDate(2013, 1, 1)

    def test_non_midnight_rejected(self):
        with pytest.raises(DateTimeError):
            parse_iso_date("2013-01-01T12:30:00")

    @pytest.mark.parametrize("text", ["2024/01/01", "01-01-2024", "2024-1-1", "", "2023-02-29"])
    def test_invalid_strings(self, text):
        with pytest.raises(DateTimeError):
            parse_iso_date(text)


class TestParseCycle:
    """Test the recurrence period grammar."""

    @pytest.mark.parametrize(
        ("text", "count", "unit"),
        [
            ("3M", 3, PeriodUnit.MONTH),
            ("P3M", 3, PeriodUnit.MONTH),
            ("P3ML0", 3, PeriodUnit.MONTH),
            ("P6ML1", 6, PeriodUnit.MONTH),
            ("1Y", 1, PeriodUnit.YEAR),
            ("P1Y", 1, PeriodUnit.YEAR),
            ("P1YL1", 1, PeriodUnit.YEAR),
            ("1Q", 3, PeriodUnit.MONTH),
            ("2H", 12, PeriodUnit.MONTH),
            ("3M-", 3, PeriodUnit.MONTH),
            ("1Y+", 1, PeriodUnit.YEAR),
            (" p12m ", 12, PeriodUnit.MONTH),
        ],
    )
    def test_accepted_forms(self, text, count, unit):
        assert parse_cycle(text) == RecurrencePeriod(count, unit)

    @pytest.mark.parametrize("text", ["", "M", "3", "3D", "1W", "P", "PXM", "3ML2", "-3M", "P3M0"])
    def test_rejected_forms(self, text):
        with pytest.raises(InvalidPeriodError):
            parse_cycle(text)

    def test_zero_count_rejected(self):
        with pytest.raises(InvalidPeriodError):
            parse_cycle("P0M")

    def test_non_string_rejected(self):
        with pytest.raises(InvalidPeriodError):
            parse_cycle(3)  # type: ignore[arg-type]


class TestRecurrencePeriod:
    """Test the canonical period value."""

    def test_months(self):
        assert RecurrencePeriod(2, PeriodUnit.YEAR).months == 24
        assert RecurrencePeriod(6, PeriodUnit.MONTH).months == 6

    def test_non_positive_count_raises(self):
        with pytest.raises(InvalidPeriodError):
            RecurrencePeriod(0, PeriodUnit.MONTH)
        with pytest.raises(InvalidPeriodError):
            RecurrencePeriod(-1, PeriodUnit.YEAR)

    def test_str(self):
        assert str(RecurrencePeriod.parse("P1Q")) == "3M"


class TestAddPeriod:
    """Test month arithmetic."""

    def test_simple_months(self):
        assert add_period(ActusDate(2024, 1, 15), "3M") == ActusDate(2024, 4, 15)

    def test_year(self):
        assert add_period(ActusDate(2024, 1, 15), "P1Y") == ActusDate(2025, 1, 15)

    def test_clips_to_month_end(self):
        assert add_period(ActusDate(2024, 1, 31), "1M") == ActusDate(2024, 2, 29)
        assert add_period(ActusDate(2024, 2, 29), "1Y") == ActusDate(2025, 2, 28)

    def test_times_multiplies_from_start(self):
        start = ActusDate(2024, 1, 31)
        assert add_period(start, "1M", times=2) == ActusDate(2024, 3, 31)

    def test_end_of_month_convention(self):
        start = ActusDate(2024, 4, 30)
        assert add_period(start, "1M") == ActusDate(2024, 5, 30)
        assert add_period(start, "1M", EndOfMonthConvention.EOM) == ActusDate(2024, 5, 31)

    def test_end_of_month_ignored_for_mid_month(self):
        start = ActusDate(2024, 4, 15)
        assert add_period(start, "1M", EndOfMonthConvention.EOM) == ActusDate(2024, 5, 15)

    def test_method_delegates(self):
        assert ActusDate(2024, 1, 15).add_period("6M") == ActusDate(2024, 7, 15)
