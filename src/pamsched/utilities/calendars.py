"""Business day calendars and date adjustment for PAM schedules.

This module provides holiday calendars, the immutable HolidayTable that maps
calendar names to holiday dates, and the BusinessDayAdjuster that moves
scheduled dates off non-business days.

References:
    ACTUS Technical Specification v1.1, Section 3.4 (Business Day Conventions)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
from datetime import date
from typing import Protocol, runtime_checkable

from pamsched.core.time import ActusDate
from pamsched.core.types import BusinessDayConvention, Calendar

DateLike = ActusDate | date | str
CalendarName = Calendar | str | None


def is_weekend(dt: ActusDate) -> bool:
    """Check if a date falls on Saturday or Sunday.

    Example:
        >>> is_weekend(ActusDate(2024, 11, 9))  # Saturday
        True
    """
    return dt.weekday() >= 5


class HolidayCalendar(ABC):
    """Abstract base class for holiday calendars.

    A holiday calendar determines which dates are business days and provides
    navigation to the nearest business day in either direction.
    """

    @abstractmethod
    def is_business_day(self, dt: ActusDate) -> bool:
        """Check if a date is a business day.

        Example:
            >>> WeekendCalendar().is_business_day(ActusDate(2024, 1, 15))  # Monday
            True
        """

    def is_holiday(self, dt: ActusDate) -> bool:
        """Check if a date is not a business day."""
        return not self.is_business_day(dt)

    def next_business_day(self, dt: ActusDate) -> ActusDate:
        """Get the first business day on or after the given date.

        Example:
            >>> WeekendCalendar().next_business_day(ActusDate(2024, 11, 9))
            ActusDate(year=2024, month=11, day=11)
        """
        current = dt
        while not self.is_business_day(current):
            current = current.add_days(1)
        return current

    def previous_business_day(self, dt: ActusDate) -> ActusDate:
        """Get the last business day on or before the given date.

        Example:
            >>> WeekendCalendar().previous_business_day(ActusDate(2024, 11, 10))
            ActusDate(year=2024, month=11, day=8)
        """
        current = dt
        while not self.is_business_day(current):
            current = current.add_days(-1)
        return current


class WeekendCalendar(HolidayCalendar):
    """Calendar where Monday to Friday are business days and there are no holidays."""

    def is_business_day(self, dt: ActusDate) -> bool:
        return not is_weekend(dt)


class HolidayListCalendar(HolidayCalendar):
    """Weekend calendar with an additional fixed set of holiday dates.

    Attributes:
        holidays: Frozen set of non-business dates
    """

    def __init__(self, holidays: Iterable[DateLike] = ()) -> None:
        self.holidays: frozenset[ActusDate] = frozenset(ActusDate.coerce(h) for h in holidays)

    def is_business_day(self, dt: ActusDate) -> bool:
        return not is_weekend(dt) and dt not in self.holidays


def _calendar_key(name: CalendarName) -> str | None:
    if name is None:
        return None
    if isinstance(name, Calendar):
        return name.value
    return str(name).strip().upper()


class HolidayTable(Mapping[str, frozenset[ActusDate]]):
    """Immutable mapping from calendar name to its holiday dates.

    Names are case-insensitive. Looking up a calendar the table does not
    know through :meth:`holidays_for` yields an empty set, so only weekends
    are skipped for it.

    Example:
        >>> table = HolidayTable({"TARGET": ["2024-12-25", "2024-12-26"]})
        >>> ActusDate(2024, 12, 25) in table.holidays_for(Calendar.TARGET)
        True
    """

    def __init__(self, calendars: Mapping[str, Iterable[DateLike]] | None = None) -> None:
        self._calendars: dict[str, frozenset[ActusDate]] = {}
        for name, dates in (calendars or {}).items():
            key = _calendar_key(name)
            if key is None:
                continue
            merged = self._calendars.get(key, frozenset())
            self._calendars[key] = merged | frozenset(ActusDate.coerce(d) for d in dates)

    def __getitem__(self, name: str) -> frozenset[ActusDate]:
        return self._calendars[_calendar_key(name)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._calendars)

    def __len__(self) -> int:
        return len(self._calendars)

    def __repr__(self) -> str:
        counts = ", ".join(f"{name}={len(dates)}" for name, dates in self._calendars.items())
        return f"HolidayTable({counts})"

    def holidays_for(self, name: CalendarName) -> frozenset[ActusDate]:
        """Return the holidays of a calendar, empty for unknown or absent names."""
        key = _calendar_key(name)
        if key is None:
            return frozenset()
        return self._calendars.get(key, frozenset())

    def calendar_for(self, name: CalendarName) -> HolidayCalendar:
        """Build a HolidayCalendar for the named calendar."""
        holidays = self.holidays_for(name)
        if not holidays:
            return WeekendCalendar()
        return HolidayListCalendar(holidays)

    def merged(self, calendars: Mapping[str, Iterable[DateLike]]) -> HolidayTable:
        """Return a new table with additional holidays merged in.

        Holidays of calendars present in both tables are united.
        """
        combined: dict[str, set[ActusDate]] = {k: set(v) for k, v in self._calendars.items()}
        for name, dates in calendars.items():
            key = _calendar_key(name)
            if key is None:
                continue
            combined.setdefault(key, set()).update(ActusDate.coerce(d) for d in dates)
        return HolidayTable(combined)


@runtime_checkable
class CalendarSource(Protocol):
    """Anything that can supply holiday dates keyed by calendar name.

    Implementations may read files, databases or services; the adjuster only
    requires the mapping returned by :meth:`load`.
    """

    def load(self) -> Mapping[str, Iterable[DateLike]]:
        """Return holiday dates keyed by calendar name."""
        ...


class StaticCalendarSource:
    """CalendarSource serving an in-memory mapping.

    Example:
        >>> source = StaticCalendarSource({"ZURICH": ["2025-08-01"]})
        >>> adjuster = BusinessDayAdjuster().load_calendar(source)
    """

    def __init__(self, calendars: Mapping[str, Iterable[DateLike]]) -> None:
        self._calendars = {name: tuple(dates) for name, dates in calendars.items()}

    def load(self) -> Mapping[str, Iterable[DateLike]]:
        return self._calendars


DEFAULT_HOLIDAY_TABLE = HolidayTable(
    {
        # Fixed holidays only; moveable feasts are supplied through load_calendar.
        Calendar.TARGET.value: [
            "2024-01-01",
            "2024-12-25",
            "2024-12-26",
            "2025-01-01",
            "2025-12-25",
            "2025-12-26",
        ],
        Calendar.NEW_YORK.value: [
            "2024-01-01",
            "2024-07-04",
            "2024-12-25",
            "2025-01-01",
            "2025-07-04",
            "2025-12-25",
        ],
        Calendar.LONDON.value: [
            "2024-01-01",
            "2024-12-25",
            "2024-12-26",
            "2025-01-01",
            "2025-12-25",
            "2025-12-26",
        ],
    }
)


class BusinessDayAdjuster:
    """Move dates off weekends and holidays according to a convention.

    The adjuster is immutable: its holiday table is fixed at construction and
    :meth:`load_calendar` returns a new adjuster.

    Args:
        holidays: Holiday table to consult, defaults to DEFAULT_HOLIDAY_TABLE

    Example:
        >>> adjuster = BusinessDayAdjuster()
        >>> adjuster.adjust(ActusDate(2024, 11, 30), "SCMF", Calendar.TARGET)
        ActusDate(year=2024, month=11, day=29)

    References:
        ACTUS Technical Specification v1.1, Section 3.4
    """

    def __init__(self, holidays: HolidayTable = DEFAULT_HOLIDAY_TABLE) -> None:
        self._holidays = holidays

    @property
    def holidays(self) -> HolidayTable:
        return self._holidays

    def calendar(self, name: CalendarName = None) -> HolidayCalendar:
        """Return the holiday calendar used for ``name``."""
        return self._holidays.calendar_for(name)

    def is_business_day(self, dt: DateLike, calendar: CalendarName = None) -> bool:
        """Check whether a date is neither a weekend nor a holiday of ``calendar``."""
        return self.calendar(calendar).is_business_day(ActusDate.coerce(dt))

    def adjust(
        self,
        dt: DateLike,
        convention: BusinessDayConvention | str | None,
        calendar: CalendarName = None,
    ) -> ActusDate:
        """Adjust a date according to a business day convention.

        Args:
            dt: Date to adjust
            convention: Convention member or name (``SCF``, ``MF``, ``Following``...)
            calendar: Calendar name; unknown or absent names only skip weekends

        Returns:
            The adjusted date; unchanged for NONE or if already a business day

        Raises:
            UnsupportedConventionError: If the convention name is not recognized
        """
        convention = BusinessDayConvention.parse(convention)
        dt = ActusDate.coerce(dt)
        if convention == BusinessDayConvention.NONE:
            return dt

        cal = self.calendar(calendar)
        if convention == BusinessDayConvention.FOLLOWING:
            return cal.next_business_day(dt)
        if convention == BusinessDayConvention.PRECEDING:
            return cal.previous_business_day(dt)
        if convention == BusinessDayConvention.MODIFIED_FOLLOWING:
            adjusted = cal.next_business_day(dt)
            if adjusted.month != dt.month:
                adjusted = cal.previous_business_day(dt)
            return adjusted
        # MODIFIED_PRECEDING
        adjusted = cal.previous_business_day(dt)
        if adjusted.month != dt.month:
            adjusted = cal.next_business_day(dt)
        return adjusted

    def load_calendar(self, source: CalendarSource) -> BusinessDayAdjuster:
        """Return a new adjuster whose table also contains the source's holidays.

        Example:
            >>> custom = BusinessDayAdjuster().load_calendar(
            ...     StaticCalendarSource({"TARGET": ["2025-04-18"]})
            ... )
            >>> custom.is_business_day("2025-04-18", "TARGET")
            False
        """
        return BusinessDayAdjuster(self._holidays.merged(source.load()))


def get_calendar(name: CalendarName, holidays: HolidayTable = DEFAULT_HOLIDAY_TABLE) -> HolidayCalendar:
    """Get a holiday calendar by name from a holiday table.

    Example:
        >>> cal = get_calendar("NEW_YORK")
        >>> cal.is_business_day(ActusDate(2024, 7, 4))
        False
    """
    return holidays.calendar_for(name)
