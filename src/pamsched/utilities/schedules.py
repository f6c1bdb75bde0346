"""Schedule generation utilities for PAM contracts.

This module expands (anchor, period) pairs into date sequences. Each
occurrence is the previous one plus the period, so a day clipped to a short
month end (Jan 31 -> Feb 29) carries into later occurrences unless the EOM
convention applies.

References:
    ACTUS Technical Specification v1.1, Section 3 (Schedule Generation)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from pamsched.core.time import ActusDate, RecurrencePeriod, add_period, parse_cycle
from pamsched.core.types import BusinessDayConvention, Calendar, Cycle, EndOfMonthConvention
from pamsched.utilities.calendars import BusinessDayAdjuster


@dataclass(frozen=True)
class CycleSequence:
    """Lazy, finite and restartable sequence of cycle occurrences.

    Iterating yields the anchor, then repeatedly adds the period while the
    occurrence does not exceed ``upper_bound``. Iteration also stops when the
    next date would pass year 9999. Each ``iter()`` call starts over from the
    anchor.

    Attributes:
        anchor: First occurrence
        period: Recurrence period
        upper_bound: Last admissible date (inclusive)
        end_of_month_convention: EOM keeps month-end anchors on month ends

    Example:
        >>> seq = CycleSequence(ActusDate(2024, 1, 31), parse_cycle("1M"), ActusDate(2024, 3, 31))
        >>> [str(d) for d in seq]
        ['2024-01-31', '2024-02-29', '2024-03-29']
    """

    anchor: ActusDate
    period: RecurrencePeriod
    upper_bound: ActusDate
    end_of_month_convention: EndOfMonthConvention = EndOfMonthConvention.SD

    def __iter__(self) -> Iterator[ActusDate]:
        occurrence = self.anchor
        while occurrence <= self.upper_bound:
            yield occurrence
            try:
                occurrence = add_period(occurrence, self.period, self.end_of_month_convention)
            except (ValueError, OverflowError):
                # past year 9999
                return

    def to_list(self) -> list[ActusDate]:
        """Materialize all occurrences."""
        return list(self)


def expand_cycle(
    anchor: ActusDate,
    period: RecurrencePeriod | Cycle,
    upper_bound: ActusDate,
    end_of_month_convention: EndOfMonthConvention = EndOfMonthConvention.SD,
) -> CycleSequence:
    """Expand an anchor and a recurrence period into a bounded sequence of dates.

    The sequence is empty when the anchor lies after the upper bound and is
    strictly increasing otherwise.

    Args:
        anchor: First occurrence
        period: RecurrencePeriod or period text (``3M``, ``P1Y``, ``P6ML0``...)
        upper_bound: Inclusive upper bound
        end_of_month_convention: How to treat month-end anchors

    Raises:
        InvalidPeriodError: If the period text is invalid or not positive

    Example:
        >>> [str(d) for d in expand_cycle(ActusDate(2024, 4, 1), "3M", ActusDate(2025, 1, 1))]
        ['2024-04-01', '2024-07-01', '2024-10-01', '2025-01-01']
    """
    if not isinstance(period, RecurrencePeriod):
        period = parse_cycle(period)
    return CycleSequence(anchor, period, upper_bound, end_of_month_convention)


def generate_schedule(
    start: ActusDate | None,
    cycle: Cycle | None,
    end: ActusDate | None,
    end_of_month_convention: EndOfMonthConvention = EndOfMonthConvention.SD,
    business_day_convention: BusinessDayConvention = BusinessDayConvention.NONE,
    calendar: Calendar | str | None = None,
    adjuster: BusinessDayAdjuster | None = None,
) -> list[ActusDate]:
    """Generate a regular schedule S(s, c, T) as a list of dates.

    Without a cycle the schedule is the single start date; without a start or
    end it is empty. A business day convention other than NONE adjusts every
    date; dates collapsing onto the same business day appear once.

    Args:
        start: Schedule start date (anchor)
        cycle: Cycle text (e.g., '3M', '1Y', 'P6ML0')
        end: Schedule end date (inclusive)
        end_of_month_convention: How to handle month-end dates
        business_day_convention: How to adjust non-business days
        calendar: Holiday calendar name
        adjuster: Adjuster to use, a default BusinessDayAdjuster otherwise

    Returns:
        List of dates in chronological order

    Example:
        >>> generate_schedule(ActusDate(2024, 1, 15), "6M", ActusDate(2025, 1, 15))
        [ActusDate(year=2024, month=1, day=15), ActusDate(year=2024, month=7, day=15), ActusDate(year=2025, month=1, day=15)]
    """
    if start is None or end is None:
        return []

    if cycle is None or cycle == "":
        return [start]

    dates = expand_cycle(start, cycle, end, end_of_month_convention).to_list()

    if business_day_convention != BusinessDayConvention.NONE:
        adjuster = adjuster or BusinessDayAdjuster()
        dates = [adjuster.adjust(d, business_day_convention, calendar) for d in dates]

    return sorted(set(dates))
