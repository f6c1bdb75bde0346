"""Contract event structures for PAM contracts.

ContractEvent is an immutable value object; reclassifying an event produces a
new event of a different kind. EventSchedule is the ordered, read-only
sequence handed to downstream consumers (valuation, reporting).

References:
    ACTUS Technical Specification v1.1, Section 2.5, 2.9 (Events)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

import pandas as pd

from pamsched.core.time import ActusDate
from pamsched.core.types import EventType


@dataclass(frozen=True)
class ContractEvent:
    """A single scheduled contract event.

    Attributes:
        event_type: Kind of event (IED, IP, MD, ...)
        event_time: Scheduled date (τ operator)
        currency: Currency of the payoff
        payoff: Cash flow placeholder (φ operator); computed by a payoff
            component outside the scheduler, zero until then
        contract_id: Identifier of the contract that produced the event

    Example:
        >>> event = ContractEvent(EventType.IP, ActusDate(2024, 4, 15), "USD")
        >>> event.retyped(EventType.IPCI).event_type
        <EventType.IPCI: 'IPCI'>
    """

    event_type: EventType
    event_time: ActusDate
    currency: str
    payoff: Decimal = field(default=Decimal("0"))
    contract_id: str = ""

    @property
    def sequence(self) -> int:
        """Same-date ordering rank derived from the event type."""
        return self.event_type.sequence

    def sort_key(self) -> tuple[ActusDate, int]:
        """Chronological key with the event-type rank as tie-break."""
        return (self.event_time, self.sequence)

    def retyped(self, event_type: EventType) -> ContractEvent:
        """Return a copy of this event with a different kind."""
        return replace(self, event_type=event_type)

    def moved_to(self, event_time: ActusDate) -> ContractEvent:
        """Return a copy of this event on a different date."""
        return replace(self, event_time=event_time)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "event_type": self.event_type.value,
            "event_time": self.event_time.to_iso(),
            "payoff": str(self.payoff),
            "currency": self.currency,
            "contract_id": self.contract_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContractEvent:
        """Create a ContractEvent from the output of :meth:`to_dict`."""
        return cls(
            event_type=EventType(data["event_type"]),
            event_time=ActusDate.from_iso(data["event_time"]),
            currency=data["currency"],
            payoff=Decimal(str(data.get("payoff", "0"))),
            contract_id=data.get("contract_id", ""),
        )


def sort_events(events: Iterable[ContractEvent]) -> list[ContractEvent]:
    """Sort events by date, then by event-type rank.

    The sort is stable, so events with equal date and kind keep their input
    order.
    """
    return sorted(events, key=ContractEvent.sort_key)


@dataclass(frozen=True)
class EventSchedule:
    """Immutable, ordered sequence of events for one contract.

    Attributes:
        events: Events in chronological order
        contract_id: Associated contract identifier
    """

    events: tuple[ContractEvent, ...]
    contract_id: str

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[ContractEvent]:
        return iter(self.events)

    def __getitem__(self, index: int) -> ContractEvent:
        return self.events[index]

    def filter_by_type(self, *event_types: EventType) -> EventSchedule:
        """Return the events of the given kinds.

        Example:
            >>> interest = schedule.filter_by_type(EventType.IP, EventType.IPCI)
        """
        wanted = set(event_types)
        return EventSchedule(
            tuple(e for e in self.events if e.event_type in wanted), self.contract_id
        )

    def filter_by_time_range(self, start: ActusDate, end: ActusDate) -> EventSchedule:
        """Return the events with ``start <= date <= end``."""
        return EventSchedule(
            tuple(e for e in self.events if start <= e.event_time <= end), self.contract_id
        )

    def get_times(self) -> list[ActusDate]:
        """Extract all event dates."""
        return [e.event_time for e in self.events]

    def event_types(self) -> list[EventType]:
        """Extract all event kinds, in schedule order."""
        return [e.event_type for e in self.events]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "contract_id": self.contract_id,
            "events": [e.to_dict() for e in self.events],
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Tabulate the schedule for reporting.

        Returns:
            DataFrame with one row per event and columns ``contract_id``,
            ``event_time`` (``datetime.date``), ``event_type``, ``payoff``
            and ``currency``
        """
        return pd.DataFrame(
            {
                "contract_id": [e.contract_id or self.contract_id for e in self.events],
                "event_time": [e.event_time.to_date() for e in self.events],
                "event_type": [e.event_type.value for e in self.events],
                "payoff": [e.payoff for e in self.events],
                "currency": [e.currency for e in self.events],
            },
            columns=["contract_id", "event_time", "event_type", "payoff", "currency"],
        )


def tau(event: ContractEvent | EventSchedule) -> ActusDate | list[ActusDate]:
    """τ operator: the date(s) of an event or schedule."""
    if isinstance(event, ContractEvent):
        return event.event_time
    return event.get_times()
