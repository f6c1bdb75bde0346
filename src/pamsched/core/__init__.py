"""Core type definitions and fundamental structures for PAM contracts.

This module provides the foundational types, enumerations, and data structures
used throughout the pamsched package.
"""

from pamsched.core.attributes import ACTUS_LONG_NAME_MAP, ATTRIBUTE_MAP, ContractTerms
from pamsched.core.events import ContractEvent, EventSchedule, sort_events, tau
from pamsched.core.time import (
    ActusDate,
    PeriodUnit,
    RecurrencePeriod,
    add_period,
    parse_cycle,
    parse_iso_date,
)
from pamsched.core.types import (
    # Type aliases
    Amount,
    # Enumerations
    BusinessDayConvention,
    Calendar,
    ContractRole,
    Cycle,
    DayCountConvention,
    EndOfMonthConvention,
    EVENT_SEQUENCE_ORDER,
    EventType,
    Rate,
    ScalingEffect,
)

__all__ = [
    # Type aliases
    "Amount",
    "Rate",
    "Cycle",
    # Enumerations
    "EventType",
    "EVENT_SEQUENCE_ORDER",
    "ContractRole",
    "DayCountConvention",
    "BusinessDayConvention",
    "EndOfMonthConvention",
    "Calendar",
    "ScalingEffect",
    # Time
    "ActusDate",
    "PeriodUnit",
    "RecurrencePeriod",
    "add_period",
    "parse_cycle",
    "parse_iso_date",
    # Events
    "ContractEvent",
    "EventSchedule",
    "sort_events",
    "tau",
    # Attributes
    "ContractTerms",
    "ATTRIBUTE_MAP",
    "ACTUS_LONG_NAME_MAP",
]
