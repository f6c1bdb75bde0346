"""Portfolio scheduling across a worker pool.

Scheduling one contract is a pure function of its terms, so a portfolio is
scheduled by fanning independent calls out to a ``concurrent.futures`` pool.
Contracts are split into one chunk per worker; each chunk is scheduled
sequentially inside its worker. A contract whose terms fail to schedule is
reported in the result, keyed by its input position, and does not fail the
batch.

Example:
    >>> result = schedule_portfolio(contracts, "2030-01-01", max_workers=4)
    >>> result.failures
    {}
    >>> result.to_dataframe().groupby("event_type").size()
"""

from __future__ import annotations

import multiprocessing
import os
import time
from collections.abc import Sequence
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date

import pandas as pd

from pamsched.contracts.pam import PAMEventScheduler
from pamsched.core.attributes import ContractTerms
from pamsched.core.events import EventSchedule
from pamsched.core.time import ActusDate
from pamsched.exceptions import ActusException, ConfigurationError, EngineError
from pamsched.logging_config import get_logger, get_performance_logger
from pamsched.utilities.calendars import BusinessDayAdjuster

logger = get_logger(__name__)
perf_logger = get_performance_logger("engine.batch")

ENV_MAX_WORKERS = "PAMSCHED_MAX_WORKERS"

SCHEDULE_COLUMNS = ["contract_id", "event_time", "event_type", "payoff", "currency"]


@dataclass(frozen=True)
class ContractFailure:
    """A contract that could not be scheduled.

    Attributes:
        index: Position of the contract in the input sequence
        contract_id: Identifier of the contract
        error_type: Exception class name (e.g. ``InvalidTermsError``)
        message: Rendered exception message
    """

    index: int
    contract_id: str
    error_type: str
    message: str


@dataclass(frozen=True)
class PortfolioScheduleResult:
    """Outcome of scheduling a portfolio.

    Attributes:
        schedules: Schedules of the successful contracts, in input order
        failures: Failed contracts keyed by input index
        duration_ms: Wall-clock time of the batch
    """

    schedules: tuple[EventSchedule, ...]
    failures: dict[int, ContractFailure] = field(default_factory=dict)
    duration_ms: float = 0.0

    @property
    def num_contracts(self) -> int:
        return len(self.schedules) + len(self.failures)

    @property
    def num_events(self) -> int:
        return sum(len(s) for s in self.schedules)

    @property
    def succeeded(self) -> bool:
        """True when every contract was scheduled."""
        return not self.failures

    def get(self, contract_id: str) -> EventSchedule | None:
        """Return the schedule of a contract, None if it failed or is unknown."""
        for schedule in self.schedules:
            if schedule.contract_id == contract_id:
                return schedule
        return None

    def to_dataframe(self) -> pd.DataFrame:
        """Concatenate all schedules into one DataFrame."""
        frames = [s.to_dataframe() for s in self.schedules if len(s)]
        if not frames:
            return pd.DataFrame(columns=SCHEDULE_COLUMNS)
        return pd.concat(frames, ignore_index=True)


def resolve_max_workers(max_workers: int | None = None) -> int:
    """Determine the pool size.

    An explicit value wins; otherwise ``PAMSCHED_MAX_WORKERS`` is read, and
    the CPU count is used when it is unset.

    Raises:
        ConfigurationError: If the value is not a positive integer
    """
    source = "max_workers"
    if max_workers is None:
        raw = os.getenv(ENV_MAX_WORKERS, "").strip()
        if not raw:
            return os.cpu_count() or 1
        source = ENV_MAX_WORKERS
        try:
            max_workers = int(raw)
        except ValueError:
            raise ConfigurationError(
                f"{ENV_MAX_WORKERS} must be an integer, got {raw!r}",
                context={"source": source},
            ) from None
    if max_workers < 1:
        raise ConfigurationError(
            f"Worker count must be at least 1, got {max_workers}",
            context={"source": source},
        )
    return max_workers


def chunk_indices(n_items: int, n_chunks: int) -> list[range]:
    """Split ``range(n_items)`` into ``n_chunks`` contiguous, nearly equal ranges."""
    k, m = divmod(n_items, n_chunks)
    return [range(i * k + min(i, m), (i + 1) * k + min(i + 1, m)) for i in range(n_chunks)]


ChunkResult = list[tuple[int, EventSchedule | None, ContractFailure | None]]


def _schedule_chunk(args: tuple) -> ChunkResult:
    """Schedule a chunk of contracts inside a worker.

    Args:
        args: Tuple of (indexed_contracts, projection_horizon, adjuster)

    Returns:
        One (index, schedule, failure) entry per contract
    """
    indexed_contracts, horizon, adjuster = args
    scheduler = PAMEventScheduler(adjuster)
    results: ChunkResult = []
    for index, terms in indexed_contracts:
        try:
            results.append((index, scheduler.schedule(horizon, terms), None))
        except ActusException as exc:
            failure = ContractFailure(index, terms.contract_id, type(exc).__name__, str(exc))
            results.append((index, None, failure))
    return results


def _make_executor(use_processes: bool, max_workers: int) -> Executor:
    if use_processes:
        # spawn avoids fork() after JAX has started its threads
        ctx = multiprocessing.get_context("spawn")
        return ProcessPoolExecutor(max_workers=max_workers, mp_context=ctx)
    return ThreadPoolExecutor(max_workers=max_workers)


def schedule_portfolio(
    contracts: Sequence[ContractTerms],
    projection_horizon: ActusDate | date | str,
    max_workers: int | None = None,
    use_processes: bool = True,
    adjuster: BusinessDayAdjuster | None = None,
) -> PortfolioScheduleResult:
    """Schedule many contracts in parallel.

    Args:
        contracts: Contract terms to schedule
        projection_horizon: Horizon applied to every contract
        max_workers: Pool size; defaults to ``PAMSCHED_MAX_WORKERS`` or the CPU count
        use_processes: Use a spawn-based process pool, else a thread pool
        adjuster: Business day adjuster shared by all contracts

    Returns:
        PortfolioScheduleResult with schedules in input order

    Raises:
        ConfigurationError: If the worker count is invalid
        EngineError: If the pool itself fails
    """
    horizon = ActusDate.coerce(projection_horizon)
    workers = resolve_max_workers(max_workers)
    adjuster = adjuster or BusinessDayAdjuster()

    start = time.perf_counter()
    if not contracts:
        return PortfolioScheduleResult(schedules=())

    indexed = list(enumerate(contracts))
    n_chunks = min(workers, len(indexed))
    chunks = [[indexed[i] for i in r] for r in chunk_indices(len(indexed), n_chunks)]

    collected: ChunkResult = []
    try:
        with _make_executor(use_processes, n_chunks) as executor:
            futures = [
                executor.submit(_schedule_chunk, (chunk, horizon, adjuster)) for chunk in chunks
            ]
            for future in as_completed(futures):
                collected.extend(future.result())
    except Exception as exc:
        raise EngineError(
            f"Portfolio scheduling failed: {exc}",
            context={"num_contracts": len(indexed), "workers": n_chunks},
        ) from exc

    collected.sort(key=lambda item: item[0])
    schedules = tuple(s for _, s, _ in collected if s is not None)
    failures = {f.index: f for _, _, f in collected if f is not None}

    for failure in failures.values():
        logger.warning(
            "Contract could not be scheduled: %s",
            failure.message,
            extra={"contract_id": failure.contract_id, "error_type": failure.error_type},
        )

    duration_ms = (time.perf_counter() - start) * 1000
    perf_logger.debug(
        "Portfolio scheduled",
        extra={
            "num_contracts": len(indexed),
            "num_failures": len(failures),
            "workers": n_chunks,
            "use_processes": use_processes,
            "duration_ms": duration_ms,
        },
    )
    return PortfolioScheduleResult(schedules=schedules, failures=failures, duration_ms=duration_ms)
