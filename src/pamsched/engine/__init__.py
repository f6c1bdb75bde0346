"""Portfolio scheduling engine."""

from pamsched.engine.batch import (
    ENV_MAX_WORKERS,
    ContractFailure,
    PortfolioScheduleResult,
    chunk_indices,
    resolve_max_workers,
    schedule_portfolio,
)

__all__ = [
    "schedule_portfolio",
    "PortfolioScheduleResult",
    "ContractFailure",
    "resolve_max_workers",
    "chunk_indices",
    "ENV_MAX_WORKERS",
]
