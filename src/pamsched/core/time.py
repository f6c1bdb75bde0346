"""Date and recurrence-period handling for PAM contracts.

This module provides the ActusDate value type and the canonical
RecurrencePeriod used by cycle expansion.

Key features:
- ISO 8601 date parsing, including the ``T00:00:00`` suffix of ACTUS test files
- A single parser for recurrence periods (``3M``, ``P1Y``, ``P6ML0``...)
- Month arithmetic with month-end clipping and an optional end-of-month rule
- JAX pytree registration so dates can travel inside pytrees

References:
    ACTUS Technical Specification v1.1, Section 3 (Time)
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

import jax
from dateutil.relativedelta import relativedelta

from pamsched.core.types import Cycle, EndOfMonthConvention
from pamsched.exceptions import DateTimeError, InvalidPeriodError


@dataclass(frozen=True, order=True)
class ActusDate:
    """Immutable calendar date used for every contract and event date.

    Ordering compares (year, month, day), which is chronological order.

    Attributes:
        year: Year (1-9999)
        month: Month (1-12)
        day: Day of month, valid for the given month

    Example:
        >>> ActusDate.from_iso("2024-01-15").add_period("3M")
        ActusDate(year=2024, month=4, day=15)
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        """Validate date components."""
        if not 1 <= self.year <= 9999:
            raise ValueError(f"Year must be 1-9999, got {self.year}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be 1-12, got {self.month}")
        last_day = calendar.monthrange(self.year, self.month)[1]
        if not 1 <= self.day <= last_day:
            raise ValueError(
                f"Day must be 1-{last_day} for {self.year:04d}-{self.month:02d}, got {self.day}"
            )

    @classmethod
    def from_iso(cls, iso_string: str) -> ActusDate:
        """Parse an ISO 8601 date string.

        Example:
            >>> ActusDate.from_iso("2024-01-15T00:00:00")
            ActusDate(year=2024, month=1, day=15)
        """
        return parse_iso_date(iso_string)

    @classmethod
    def from_date(cls, value: date) -> ActusDate:
        """Convert a ``datetime.date`` (or ``datetime``) to ActusDate."""
        return cls(value.year, value.month, value.day)

    @classmethod
    def coerce(cls, value: ActusDate | date | str) -> ActusDate:
        """Convert any supported date-like value to ActusDate.

        Raises:
            DateTimeError: If the value is not date-like
        """
        if isinstance(value, ActusDate):
            return value
        if isinstance(value, date):
            return cls.from_date(value)
        if isinstance(value, str):
            return parse_iso_date(value)
        raise DateTimeError(
            f"Unsupported date value: {value!r}", context={"type": type(value).__name__}
        )

    def to_iso(self) -> str:
        """Return the ``YYYY-MM-DD`` representation."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_date(self) -> date:
        """Return the equivalent ``datetime.date``."""
        return date(self.year, self.month, self.day)

    def weekday(self) -> int:
        """Day of week, Monday=0 ... Sunday=6."""
        return self.to_date().weekday()

    def is_end_of_month(self) -> bool:
        """Check if this date is the last day of its month.

        Example:
            >>> ActusDate(2024, 2, 29).is_end_of_month()
            True
        """
        return self.day == calendar.monthrange(self.year, self.month)[1]

    def end_of_month(self) -> ActusDate:
        """Return the last day of this date's month."""
        return ActusDate(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def add_days(self, days: int) -> ActusDate:
        """Return the date ``days`` calendar days later (negative moves back)."""
        return ActusDate.from_date(self.to_date() + timedelta(days=days))

    def add_period(
        self,
        period: RecurrencePeriod | Cycle,
        end_of_month_convention: EndOfMonthConvention = EndOfMonthConvention.SD,
    ) -> ActusDate:
        """Add a recurrence period to this date. See :func:`add_period`."""
        return add_period(self, period, end_of_month_convention)

    def days_between(self, other: ActusDate) -> int:
        """Actual days from this date to ``other`` (negative if earlier)."""
        return (other.to_date() - self.to_date()).days

    def __str__(self) -> str:
        return self.to_iso()


def _actus_date_flatten(dt: ActusDate) -> tuple[tuple[int, int, int], None]:
    return ((dt.year, dt.month, dt.day), None)


def _actus_date_unflatten(aux_data: None, children: tuple[int, int, int]) -> ActusDate:
    # Bypass validation: JAX may rebuild pytrees with placeholder leaves.
    obj = object.__new__(ActusDate)
    for name, value in zip(("year", "month", "day"), children, strict=True):
        object.__setattr__(obj, name, value)
    return obj


jax.tree_util.register_pytree_node(ActusDate, _actus_date_flatten, _actus_date_unflatten)


_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?:[T ](\d{2}):(\d{2}):(\d{2}))?$")


def parse_iso_date(iso_string: str) -> ActusDate:
    """Parse ISO 8601 text into an ActusDate.

    Supports ``YYYY-MM-DD``, ``YYYY-MM-DDTHH:MM:SS`` and the space-separated
    variant. A time part is accepted but must be midnight, since events are
    scheduled on whole days.

    Raises:
        DateTimeError: If the string is not a valid date

    Example:
        >>> parse_iso_date("2025-01-01T00:00:00")
        ActusDate(year=2025, month=1, day=1)
    """
    match = _ISO_DATE.match(iso_string.strip())
    if not match:
        raise DateTimeError(
            f"Invalid ISO 8601 date format: {iso_string}. Expected YYYY-MM-DD",
            context={"date_string": iso_string},
        )
    year, month, day = (int(g) for g in match.groups()[:3])
    time_part = match.groups()[3:]
    if time_part[0] is not None and any(int(g) != 0 for g in time_part):
        raise DateTimeError(
            "Only midnight timestamps are supported for schedule dates",
            context={"date_string": iso_string},
        )
    try:
        return ActusDate(year, month, day)
    except ValueError as exc:
        raise DateTimeError(str(exc), context={"date_string": iso_string}) from exc


class PeriodUnit(str, Enum):
    """Unit of a recurrence period."""

    MONTH = "M"
    YEAR = "Y"


@dataclass(frozen=True)
class RecurrencePeriod:
    """Canonical recurrence interval: ``count`` months or years.

    Attributes:
        count: Positive number of units
        unit: MONTH or YEAR

    Example:
        >>> RecurrencePeriod.parse("P3ML0")
        RecurrencePeriod(count=3, unit=<PeriodUnit.MONTH: 'M'>)
    """

    count: int
    unit: PeriodUnit

    def __post_init__(self) -> None:
        if self.count <= 0:
            raise InvalidPeriodError(
                f"Recurrence period must be positive, got {self.count}{self.unit.value}",
                context={"count": self.count, "unit": self.unit.value},
            )

    @classmethod
    def parse(cls, cycle: Cycle) -> RecurrencePeriod:
        """Parse period text. See :func:`parse_cycle`."""
        return parse_cycle(cycle)

    @property
    def months(self) -> int:
        """Length of the period in months."""
        return self.count * 12 if self.unit == PeriodUnit.YEAR else self.count

    def times(self, k: int) -> relativedelta:
        """Offset of the k-th occurrence from the anchor."""
        return relativedelta(months=self.months * k)

    def __str__(self) -> str:
        return f"{self.count}{self.unit.value}"


# Optional duration designator, count, unit, optional ACTUS stub (L0/L1) or +/- stub.
_CYCLE_PATTERN = re.compile(r"^P?(\d+)([MQHY])(?:L[01]|[-+])?$")
_UNIT_MONTHS = {"M": 1, "Q": 3, "H": 6}


def parse_cycle(cycle: Cycle) -> RecurrencePeriod:
    """Parse recurrence period text into a RecurrencePeriod.

    Accepted grammar (case-insensitive): an optional ``P`` designator, a
    positive integer, a unit (``M`` month, ``Q`` quarter, ``H`` half-year,
    ``Y`` year) and an optional stub marker (``L0``, ``L1``, ``-`` or ``+``)
    that is accepted but does not change the expansion. Quarters and
    half-years are normalized to months.

    Raises:
        InvalidPeriodError: If the text does not match the grammar or the
            count is zero

    Example:
        >>> parse_cycle("1Q")
        RecurrencePeriod(count=3, unit=<PeriodUnit.MONTH: 'M'>)
        >>> parse_cycle("P1Y")
        RecurrencePeriod(count=1, unit=<PeriodUnit.YEAR: 'Y'>)
    """
    if not isinstance(cycle, str):
        raise InvalidPeriodError(
            f"Recurrence period must be a string, got {type(cycle).__name__}",
            context={"cycle": cycle},
        )
    match = _CYCLE_PATTERN.match(cycle.strip().upper())
    if not match:
        raise InvalidPeriodError(
            f"Invalid cycle format: {cycle}. Expected e.g. '3M', 'P1Y' or 'P6ML0'",
            context={"cycle": cycle},
        )
    count_str, unit = match.groups()
    count = int(count_str)
    if unit == "Y":
        return RecurrencePeriod(count, PeriodUnit.YEAR)
    return RecurrencePeriod(count * _UNIT_MONTHS[unit], PeriodUnit.MONTH)


def add_period(
    dt: ActusDate,
    period: RecurrencePeriod | Cycle,
    end_of_month_convention: EndOfMonthConvention = EndOfMonthConvention.SD,
    times: int = 1,
) -> ActusDate:
    """Add ``times`` recurrence periods to a date.

    Days that do not exist in the target month are clipped to its last day
    (Jan 31 + 1M = Feb 29 in a leap year). With the EOM convention, a date on
    the last day of its month always lands on the last day of the target month.

    Example:
        >>> add_period(ActusDate(2024, 4, 30), "1M", EndOfMonthConvention.EOM)
        ActusDate(year=2024, month=5, day=31)

    References:
        ACTUS Technical Specification v1.1, Section 3.2, 3.3
    """
    if not isinstance(period, RecurrencePeriod):
        period = parse_cycle(period)

    result = ActusDate.from_date(dt.to_date() + period.times(times))
    if end_of_month_convention == EndOfMonthConvention.EOM and dt.is_end_of_month():
        result = result.end_of_month()
    return result
