"""pamsched: lifecycle event scheduling for ACTUS Principal-at-Maturity contracts.

Given the static terms of a PAM contract, pamsched deterministically generates
the ordered sequence of lifecycle events (IED, IP, IPCI, RR, RRF, FP, SC, PRD,
TD, MD...) between the status date and a projection horizon.

Basic usage:
    >>> import pamsched
    >>> terms = pamsched.ContractTerms(
    ...     contract_id="PAM-001",
    ...     status_date="2024-01-01",
    ...     initial_exchange_date="2024-01-01",
    ...     maturity_date="2029-01-01",
    ...     notional_principal=100000,
    ... )
    >>> [e.event_type.value for e in pamsched.schedule_pam_events("2030-01-01", terms)]
    ['IED', 'MD']
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

# Import core exceptions for convenient access
from pamsched.exceptions import (
    ActusException,
    ConfigurationError,
    DateTimeError,
    EngineError,
    InvalidPeriodError,
    InvalidTermsError,
    ObserverError,
    UnsupportedConventionError,
)
from pamsched.logging_config import configure_logging, get_logger
from pamsched.contracts import PAMEventScheduler, generate_baseline_schedule, schedule_pam_events
from pamsched.core import (
    ActusDate,
    BusinessDayConvention,
    ContractEvent,
    ContractTerms,
    EventSchedule,
    EventType,
    RecurrencePeriod,
)
from pamsched.engine import PortfolioScheduleResult, schedule_portfolio
from pamsched.utilities import BusinessDayAdjuster, HolidayTable

# Public API
__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Exceptions
    "ActusException",
    "ConfigurationError",
    "DateTimeError",
    "EngineError",
    "InvalidPeriodError",
    "InvalidTermsError",
    "ObserverError",
    "UnsupportedConventionError",
    # Logging
    "configure_logging",
    "get_logger",
    # Data model
    "ActusDate",
    "RecurrencePeriod",
    "ContractTerms",
    "ContractEvent",
    "EventSchedule",
    "EventType",
    "BusinessDayConvention",
    # Scheduling
    "PAMEventScheduler",
    "schedule_pam_events",
    "generate_baseline_schedule",
    "schedule_portfolio",
    "PortfolioScheduleResult",
    "BusinessDayAdjuster",
    "HolidayTable",
]
