"""Day count convention implementations.

Year fractions are not needed to build a schedule; they are provided for the
valuation layer that consumes it (accrual of interest between events).

References:
    ACTUS Technical Specification v1.1, Section 3.6 (Day Count Conventions)
    ISDA 2006 Definitions
"""

from __future__ import annotations

import calendar
from abc import ABC, abstractmethod

from pamsched.core.time import ActusDate
from pamsched.core.types import DayCountConvention


class DayCounter(ABC):
    """Computes the year fraction between two dates under one convention."""

    convention: DayCountConvention

    @abstractmethod
    def year_fraction(self, start: ActusDate, end: ActusDate) -> float:
        """Year fraction from ``start`` to ``end`` (negative if reversed)."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Actual360(DayCounter):
    """Actual/360: actual days / 360."""

    convention = DayCountConvention.A360

    def year_fraction(self, start: ActusDate, end: ActusDate) -> float:
        return start.days_between(end) / 360.0


class Actual365Fixed(DayCounter):
    """Actual/365 Fixed: actual days / 365."""

    convention = DayCountConvention.A365

    def year_fraction(self, start: ActusDate, end: ActusDate) -> float:
        return start.days_between(end) / 365.0


class Thirty360E(DayCounter):
    """30E/360 (Eurobond basis).

    Days = (Y2-Y1)*360 + (M2-M1)*30 + (D2-D1), with day 31 treated as 30 on
    both ends.

    References:
        ISDA 2006 Section 4.16(g)
    """

    convention = DayCountConvention.E30360

    def year_fraction(self, start: ActusDate, end: ActusDate) -> float:
        d1 = min(start.day, 30)
        d2 = min(end.day, 30)
        days = (end.year - start.year) * 360 + (end.month - start.month) * 30 + (d2 - d1)
        return days / 360.0


class ActualActualISDA(DayCounter):
    """Actual/Actual ISDA.

    The period is split at year boundaries; the days falling in each calendar
    year are divided by that year's length (365 or 366).

    References:
        ISDA 2006 Section 4.16(b)
    """

    convention = DayCountConvention.AA

    def year_fraction(self, start: ActusDate, end: ActusDate) -> float:
        if end < start:
            return -self.year_fraction(end, start)

        total = 0.0
        current = start
        while current.year < end.year:
            next_year = ActusDate(current.year + 1, 1, 1)
            total += current.days_between(next_year) / _days_in_year(current.year)
            current = next_year

        if current < end:
            total += current.days_between(end) / _days_in_year(end.year)
        return total


class ActualActualICMA(ActualActualISDA):
    """Actual/Actual ICMA, computed with the ISDA split.

    A faithful ICMA fraction needs the coupon period; schedules do not carry
    it, so the ISDA year split is used instead.
    """

    convention = DayCountConvention.AAICMA


def _days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


_DAY_COUNTERS: dict[DayCountConvention, type[DayCounter]] = {
    DayCountConvention.A360: Actual360,
    DayCountConvention.A365: Actual365Fixed,
    DayCountConvention.E30360: Thirty360E,
    DayCountConvention.AA: ActualActualISDA,
    DayCountConvention.AAICMA: ActualActualICMA,
}


def get_day_counter(name: DayCountConvention | str) -> DayCounter:
    """Return the day counter for a convention name or member.

    Raises:
        UnsupportedConventionError: If the name is not recognized

    Example:
        >>> get_day_counter("ACT/360").year_fraction(ActusDate(2024, 1, 1), ActusDate(2024, 12, 31))
        1.0138888888888888
    """
    return _DAY_COUNTERS[DayCountConvention.parse(name)]()


def year_fraction(
    start: ActusDate,
    end: ActusDate,
    convention: DayCountConvention | str,
) -> float:
    """Calculate year fraction between two dates using specified convention.

    Example:
        >>> year_fraction(ActusDate(2024, 1, 15), ActusDate(2024, 7, 15), DayCountConvention.A365)
        0.4986301369863014

    References:
        ACTUS Technical Specification v1.1, Section 3.6
    """
    return get_day_counter(convention).year_fraction(start, end)
