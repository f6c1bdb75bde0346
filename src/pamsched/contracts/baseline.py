"""Minimal PAM event set used as a reference for the full scheduler.

The baseline generator produces only IED, the interest payment occurrences
and MD, with no status-date floor, purchase, termination, reclassification or
business day adjustment. On the events both produce, it agrees with
:func:`pamsched.contracts.pam.schedule_pam_events`.
"""

from __future__ import annotations

from pamsched.core.attributes import ContractTerms
from pamsched.core.events import ContractEvent, EventSchedule, sort_events
from pamsched.core.time import ActusDate, add_period
from pamsched.core.types import EventType
from pamsched.utilities.schedules import expand_cycle

# Bound for interest occurrences when the contract has no maturity date
DEFAULT_TERM = "5Y"


def _default_bound(initial_exchange: ActusDate) -> ActusDate:
    try:
        return add_period(initial_exchange, DEFAULT_TERM)
    except (ValueError, OverflowError):
        return ActusDate(9999, 12, 31)


def generate_baseline_schedule(terms: ContractTerms) -> EventSchedule:
    """Generate IED, IP occurrences and MD directly from the terms.

    Interest occurrences run from the interest anchor up to the maturity
    date, or five years after the initial exchange when maturity is absent.
    An occurrence on the maturity date is represented by MD.

    Example:
        >>> [e.event_type.value for e in generate_baseline_schedule(terms)]
        ['IED', 'IP', 'IP', 'IP', 'MD']
    """

    def event(event_type: EventType, event_time: ActusDate) -> ContractEvent:
        return ContractEvent(event_type, event_time, terms.currency, contract_id=terms.contract_id)

    maturity = terms.maturity_date
    events = [event(EventType.IED, terms.initial_exchange_date)]

    anchor, cycle = terms.interest_payment_anchor, terms.interest_payment_cycle
    if anchor is not None and cycle is not None:
        bound = maturity or _default_bound(terms.initial_exchange_date)
        events.extend(
            event(EventType.IP, occurrence)
            for occurrence in expand_cycle(anchor, cycle, bound, terms.end_of_month_convention)
            if occurrence != maturity
        )

    if maturity is not None:
        events.append(event(EventType.MD, maturity))

    return EventSchedule(events=tuple(sort_events(events)), contract_id=terms.contract_id)
