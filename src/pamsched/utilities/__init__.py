"""Utility functions for schedules, calendars and day count conventions."""

from pamsched.utilities.calendars import (
    DEFAULT_HOLIDAY_TABLE,
    BusinessDayAdjuster,
    CalendarSource,
    HolidayCalendar,
    HolidayListCalendar,
    HolidayTable,
    StaticCalendarSource,
    WeekendCalendar,
    get_calendar,
    is_weekend,
)
from pamsched.utilities.conventions import (
    Actual360,
    Actual365Fixed,
    ActualActualICMA,
    ActualActualISDA,
    DayCounter,
    Thirty360E,
    get_day_counter,
    year_fraction,
)
from pamsched.utilities.schedules import CycleSequence, expand_cycle, generate_schedule

__all__ = [
    # Schedule generation
    "CycleSequence",
    "expand_cycle",
    "generate_schedule",
    # Calendars
    "HolidayCalendar",
    "WeekendCalendar",
    "HolidayListCalendar",
    "HolidayTable",
    "DEFAULT_HOLIDAY_TABLE",
    "CalendarSource",
    "StaticCalendarSource",
    "BusinessDayAdjuster",
    "get_calendar",
    "is_weekend",
    # Day count conventions
    "DayCounter",
    "Actual360",
    "Actual365Fixed",
    "Thirty360E",
    "ActualActualISDA",
    "ActualActualICMA",
    "get_day_counter",
    "year_fraction",
]
