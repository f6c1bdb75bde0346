"""Principal at Maturity (PAM) event scheduler.

The scheduler turns static contract terms into the ordered sequence of
lifecycle events between the status date and a projection horizon. It runs as
a fixed pipeline of pure stages over tuples of candidate events:

1. Seed IED and the candidate MD
2. Expand the IP, PR, RR, FP and SC cycles up to min(MD, horizon)
3. Add PRD
4. Retype IP on or before the capitalization end date to IPCI
5. Retype the first RR after the status date to RRF when the next rate is known
6. Cut at the termination date (dropping MD, adding TD) or at the horizon
7. Drop events before the status date
8. Sort by date, then event-type rank
9. Optionally move dates to business days and sort again

Every stage is exposed as a function so it can be tested on its own.

Example:
    >>> from pamsched.core import ContractTerms
    >>> terms = ContractTerms(
    ...     contract_id="PAM-001",
    ...     status_date="2024-01-01",
    ...     initial_exchange_date="2024-01-01",
    ...     maturity_date="2025-01-01",
    ...     notional_principal=100000,
    ...     nominal_interest_rate=0.05,
    ...     interest_payment_anchor="2024-04-01",
    ...     interest_payment_cycle="3M",
    ... )
    >>> [e.event_type.value for e in schedule_pam_events("2030-01-01", terms)]
    ['IED', 'IP', 'IP', 'IP', 'MD']

References:
    ACTUS Technical Specification v1.1, Section 7.1 (PAM)
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from pamsched.contracts.classification import capitalize_interest, fix_next_rate_reset
from pamsched.core.attributes import ContractTerms, check_date_order
from pamsched.core.events import ContractEvent, EventSchedule, sort_events
from pamsched.core.time import ActusDate
from pamsched.core.types import BusinessDayConvention, EventType
from pamsched.logging_config import get_logger
from pamsched.utilities.calendars import BusinessDayAdjuster
from pamsched.utilities.schedules import expand_cycle

logger = get_logger(__name__)

# (event type, anchor field, cycle field) of each recurring event stream
CYCLE_DEFINITIONS: tuple[tuple[EventType, str, str], ...] = (
    (EventType.IP, "interest_payment_anchor", "interest_payment_cycle"),
    (EventType.PR, "principal_redemption_anchor", "principal_redemption_cycle"),
    (EventType.RR, "rate_reset_anchor", "rate_reset_cycle"),
    (EventType.FP, "fee_payment_anchor", "fee_payment_cycle"),
    (EventType.SC, "scaling_index_anchor", "scaling_index_cycle"),
)


def _event(terms: ContractTerms, event_type: EventType, event_time: ActusDate) -> ContractEvent:
    return ContractEvent(
        event_type=event_type,
        event_time=event_time,
        currency=terms.currency,
        contract_id=terms.contract_id,
    )


def cycle_upper_bound(terms: ContractTerms, projection_horizon: ActusDate) -> ActusDate:
    """Last date a cycle occurrence may fall on: min(MD, horizon)."""
    if terms.maturity_date is None:
        return projection_horizon
    return min(terms.maturity_date, projection_horizon)


def seed_fixed_events(terms: ContractTerms) -> tuple[ContractEvent, ...]:
    """IED at the initial exchange date and a candidate MD if maturity is set."""
    events = [_event(terms, EventType.IED, terms.initial_exchange_date)]
    if terms.maturity_date is not None:
        events.append(_event(terms, EventType.MD, terms.maturity_date))
    return tuple(events)


def expand_cycle_events(
    terms: ContractTerms, projection_horizon: ActusDate
) -> tuple[ContractEvent, ...]:
    """Emit one event per occurrence of every configured cycle.

    A cycle contributes only when both its anchor and its period are set. The
    scaling-index cycle additionally requires a scaling effect. An interest
    payment falling exactly on the maturity date is covered by MD and is not
    emitted.

    Raises:
        InvalidPeriodError: If a cycle period is invalid
    """
    upper_bound = cycle_upper_bound(terms, projection_horizon)
    events: list[ContractEvent] = []
    for event_type, anchor_field, cycle_field in CYCLE_DEFINITIONS:
        if event_type == EventType.SC and terms.scaling_effect is None:
            continue
        anchor = getattr(terms, anchor_field)
        cycle = getattr(terms, cycle_field)
        if anchor is None or cycle is None:
            continue
        for occurrence in expand_cycle(anchor, cycle, upper_bound, terms.end_of_month_convention):
            if event_type == EventType.IP and occurrence == terms.maturity_date:
                continue
            events.append(_event(terms, event_type, occurrence))
    return tuple(events)


def add_purchase_event(
    events: Sequence[ContractEvent], terms: ContractTerms
) -> tuple[ContractEvent, ...]:
    """Append PRD at the purchase date if one is set."""
    if terms.purchase_date is None:
        return tuple(events)
    return (*events, _event(terms, EventType.PRD, terms.purchase_date))


def apply_termination(
    events: Sequence[ContractEvent],
    terms: ContractTerms,
    projection_horizon: ActusDate,
) -> tuple[ContractEvent, ...]:
    """Cut the schedule at its effective horizon.

    With a termination date, events after it and the MD event are dropped and
    a TD event is appended. Without one, events after the projection horizon
    are dropped.
    """
    termination_date = terms.termination_date
    if termination_date is None:
        return tuple(e for e in events if e.event_time <= projection_horizon)

    kept = tuple(
        e for e in events if e.event_time <= termination_date and e.event_type != EventType.MD
    )
    return (*kept, _event(terms, EventType.TD, termination_date))


def apply_status_date_floor(
    events: Sequence[ContractEvent], status_date: ActusDate
) -> tuple[ContractEvent, ...]:
    """Drop events dated before the status date."""
    return tuple(e for e in events if e.event_time >= status_date)


def adjust_business_days(
    events: Sequence[ContractEvent],
    terms: ContractTerms,
    adjuster: BusinessDayAdjuster,
) -> tuple[ContractEvent, ...]:
    """Move event dates to business days using the terms' convention and calendar.

    Returns the events re-sorted, since adjustment can make distinct dates
    coincide or cross.
    """
    convention = terms.business_day_convention
    if convention == BusinessDayConvention.NONE:
        return tuple(events)
    adjusted = (
        e.moved_to(adjuster.adjust(e.event_time, convention, terms.calendar)) for e in events
    )
    return tuple(sort_events(adjusted))


class PAMEventScheduler:
    """Event scheduler for Principal at Maturity contracts.

    The scheduler holds no per-contract state and may be shared between
    threads; :meth:`schedule` is a pure function of its arguments.

    Args:
        adjuster: Business day adjuster used when terms carry a convention,
            a default BusinessDayAdjuster otherwise

    Example:
        >>> scheduler = PAMEventScheduler()
        >>> schedule = scheduler.schedule(ActusDate(2030, 1, 1), terms)
    """

    def __init__(self, adjuster: BusinessDayAdjuster | None = None) -> None:
        self.adjuster = adjuster or BusinessDayAdjuster()

    def schedule(
        self,
        projection_horizon: ActusDate | date | str,
        terms: ContractTerms,
    ) -> EventSchedule:
        """Generate the event schedule of a contract.

        Args:
            projection_horizon: Last date of interest
            terms: Contract terms

        Returns:
            EventSchedule ordered by date, then event-type rank

        Raises:
            InvalidTermsError: If maturity precedes the initial exchange
            InvalidPeriodError: If a cycle period is invalid
            UnsupportedConventionError: If a convention is not recognized
        """
        horizon = ActusDate.coerce(projection_horizon)
        check_date_order(terms)

        events = seed_fixed_events(terms) + expand_cycle_events(terms, horizon)
        events = add_purchase_event(events, terms)
        events = capitalize_interest(events, terms.capitalization_end_date)
        events = fix_next_rate_reset(events, terms.status_date, terms.next_reset_rate)
        events = apply_termination(events, terms, horizon)
        events = apply_status_date_floor(events, terms.status_date)
        events = tuple(sort_events(events))
        events = adjust_business_days(events, terms, self.adjuster)

        logger.debug(
            "Generated PAM schedule",
            extra={
                "contract_id": terms.contract_id,
                "num_events": len(events),
                "horizon": horizon.to_iso(),
            },
        )
        return EventSchedule(events=events, contract_id=terms.contract_id)


def schedule_pam_events(
    projection_horizon: ActusDate | date | str,
    terms: ContractTerms,
    adjuster: BusinessDayAdjuster | None = None,
) -> EventSchedule:
    """Generate the event schedule of a PAM contract.

    Shorthand for ``PAMEventScheduler(adjuster).schedule(projection_horizon, terms)``.
    """
    return PAMEventScheduler(adjuster).schedule(projection_horizon, terms)
