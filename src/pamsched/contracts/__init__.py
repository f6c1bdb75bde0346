"""PAM contract event scheduling.

This module provides:
- The staged PAM event scheduler (PAMEventScheduler, schedule_pam_events)
- Reclassification passes (interest capitalization, rate-reset fixing)
- The baseline generator producing the minimal IED/IP/MD event set

Example:
    >>> from pamsched.contracts import schedule_pam_events
    >>> schedule = schedule_pam_events("2030-01-01", terms)
    >>> schedule.to_dataframe()
"""

from pamsched.contracts.baseline import generate_baseline_schedule
from pamsched.contracts.classification import capitalize_interest, fix_next_rate_reset
from pamsched.contracts.pam import (
    CYCLE_DEFINITIONS,
    PAMEventScheduler,
    add_purchase_event,
    adjust_business_days,
    apply_status_date_floor,
    apply_termination,
    cycle_upper_bound,
    expand_cycle_events,
    schedule_pam_events,
    seed_fixed_events,
)

__all__ = [
    # Scheduler
    "PAMEventScheduler",
    "schedule_pam_events",
    "CYCLE_DEFINITIONS",
    # Stages
    "cycle_upper_bound",
    "seed_fixed_events",
    "expand_cycle_events",
    "add_purchase_event",
    "apply_termination",
    "apply_status_date_floor",
    "adjust_business_days",
    # Reclassification
    "capitalize_interest",
    "fix_next_rate_reset",
    # Baseline
    "generate_baseline_schedule",
]
