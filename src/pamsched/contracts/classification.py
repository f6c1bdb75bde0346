"""Reclassification passes applied to candidate PAM events.

Each pass takes a tuple of events and returns a new tuple; events are never
modified in place, a reclassified event is a new event of another kind.
"""

from __future__ import annotations

from collections.abc import Sequence

from pamsched.core.events import ContractEvent
from pamsched.core.time import ActusDate
from pamsched.core.types import EventType


def capitalize_interest(
    events: Sequence[ContractEvent],
    capitalization_end_date: ActusDate | None,
) -> tuple[ContractEvent, ...]:
    """Turn interest payments on or before the capitalization end date into IPCI.

    Interest falling in the capitalization period is added to the notional
    instead of being paid out.

    Args:
        events: Candidate events
        capitalization_end_date: IPCED, or None to leave events unchanged

    Returns:
        Events with every IP dated ``<= capitalization_end_date`` retyped to IPCI

    Example:
        >>> ip = ContractEvent(EventType.IP, ActusDate(2024, 7, 1), "USD")
        >>> capitalize_interest((ip,), ActusDate(2025, 1, 1))[0].event_type
        <EventType.IPCI: 'IPCI'>
    """
    if capitalization_end_date is None:
        return tuple(events)
    return tuple(
        e.retyped(EventType.IPCI)
        if e.event_type == EventType.IP and e.event_time <= capitalization_end_date
        else e
        for e in events
    )


def fix_next_rate_reset(
    events: Sequence[ContractEvent],
    status_date: ActusDate,
    next_reset_rate: float | None,
) -> tuple[ContractEvent, ...]:
    """Mark the first rate reset after the status date as already fixed.

    When the next reset rate is known, the earliest RR strictly after the
    status date becomes RRF. At most one event is retyped; later resets stay RR.

    Args:
        events: Candidate events, in any order
        status_date: Contract status date
        next_reset_rate: RRNXT, or None to leave events unchanged

    Returns:
        Events with at most one RR retyped to RRF
    """
    if next_reset_rate is None:
        return tuple(events)

    target: int | None = None
    for index, event in enumerate(events):
        if event.event_type != EventType.RR or event.event_time <= status_date:
            continue
        if target is None or event.event_time < events[target].event_time:
            target = index

    if target is None:
        return tuple(events)
    return tuple(
        e.retyped(EventType.RRF) if index == target else e for index, e in enumerate(events)
    )
