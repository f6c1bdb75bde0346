#!/usr/bin/env python3
"""
PAM Event Schedule Example
==========================

This example shows how to generate the lifecycle event schedule of Principal
at Maturity (PAM) loans with pamsched, from a single bullet loan to a
portfolio scheduled across worker processes.

What You'll Learn:
-----------------
1. How to describe a PAM contract with ContractTerms
2. How cycles, capitalization and rate fixings shape the schedule
3. How status and termination dates bound the schedule
4. How business day conventions and custom holiday calendars move dates
5. How to schedule a whole portfolio in parallel and export it to pandas

Example: $100,000 loan at 5% annual interest, 5-year term, quarterly interest payments
"""

import random
import time

from pamsched import (
    ActusDate,
    BusinessDayAdjuster,
    ContractTerms,
    EventType,
    schedule_pam_events,
    schedule_portfolio,
)
from pamsched.utilities import StaticCalendarSource, year_fraction

HORIZON = ActusDate(2035, 1, 1)


def print_schedule(schedule) -> None:
    for event in schedule:
        print(f"    {event.event_time.to_iso()}  {event.event_type.value:<5}")


def example_1_basic_pam_loan():
    """
    Example 1: Basic PAM Loan
    -------------------------
    A 5-year loan with quarterly interest payments. The interest payment on
    the maturity date is covered by the MD event.
    """
    print("=" * 80)
    print("Example 1: Basic PAM Loan - $100,000 at 5% for 5 years")
    print("=" * 80)

    terms = ContractTerms(
        contract_id="PAM-001",
        status_date="2024-01-01",
        initial_exchange_date="2024-01-15",
        maturity_date="2029-01-15",
        notional_principal=100_000,
        nominal_interest_rate=0.05,
        interest_payment_anchor="2024-04-15",
        interest_payment_cycle="3M",
        day_count_convention="ACT/360",
    )
    schedule = schedule_pam_events(HORIZON, terms)

    print(f"\n  Events: {len(schedule)}")
    print(f"  Interest payments: {len(schedule.filter_by_type(EventType.IP))}")
    print("\n  First year:")
    print_schedule(schedule.filter_by_time_range(ActusDate(2024, 1, 1), ActusDate(2024, 12, 31)))

    times = schedule.filter_by_type(EventType.IP).get_times()
    fractions = [year_fraction(a, b, terms.day_count_convention) for a, b in zip(times, times[1:])]
    print(f"\n  Accrual fractions (ACT/360), first three: {[round(f, 4) for f in fractions[:3]]}")


def example_2_capitalization_and_fixing():
    """
    Example 2: Capitalized Interest and a Fixed Rate Reset
    ------------------------------------------------------
    Interest up to the capitalization end date becomes IPCI. With the next
    reset rate known, the first reset after the status date becomes RRF.
    """
    print("\n" + "=" * 80)
    print("Example 2: Capitalization and Rate Fixing")
    print("=" * 80)

    terms = ContractTerms(
        contract_id="PAM-002",
        status_date="2024-01-01",
        initial_exchange_date="2024-01-01",
        maturity_date="2027-01-01",
        notional_principal=250_000,
        nominal_interest_rate=0.04,
        interest_payment_anchor="2024-07-01",
        interest_payment_cycle="6M",
        capitalization_end_date="2025-01-01",
        rate_reset_anchor="2024-07-01",
        rate_reset_cycle="1Y",
        next_reset_rate=0.045,
    )
    print_schedule(schedule_pam_events(HORIZON, terms))


def example_3_status_and_termination():
    """
    Example 3: Status Date and Early Termination
    --------------------------------------------
    Events before the status date are dropped; a termination date cuts the
    schedule and replaces maturity with TD.
    """
    print("\n" + "=" * 80)
    print("Example 3: Status Date and Termination")
    print("=" * 80)

    terms = ContractTerms(
        contract_id="PAM-003",
        status_date="2025-06-01",
        initial_exchange_date="2024-01-01",
        maturity_date="2030-01-01",
        notional_principal=50_000,
        nominal_interest_rate=0.06,
        interest_payment_anchor="2024-07-01",
        interest_payment_cycle="6M",
        termination_date="2027-03-31",
    )
    print_schedule(schedule_pam_events(HORIZON, terms))


def example_4_business_days():
    """
    Example 4: Business Day Adjustment
    ----------------------------------
    Dates falling on weekends or calendar holidays move to business days.
    Extra holidays are loaded from a calendar source into a new adjuster.
    """
    print("\n" + "=" * 80)
    print("Example 4: Business Day Adjustment (TARGET, modified following)")
    print("=" * 80)

    terms = ContractTerms(
        contract_id="PAM-004",
        status_date="2024-01-01",
        initial_exchange_date="2024-01-01",
        maturity_date="2025-12-31",
        notional_principal=1_000_000,
        nominal_interest_rate=0.035,
        interest_payment_anchor="2024-03-31",
        interest_payment_cycle="3M",
        business_day_convention="SCMF",
        calendar="TARGET",
    )
    print("\n  Default TARGET holidays:")
    print_schedule(schedule_pam_events(HORIZON, terms))

    easter = StaticCalendarSource({"TARGET": ["2024-03-29", "2024-04-01", "2025-04-18"]})
    adjuster = BusinessDayAdjuster().load_calendar(easter)
    print("\n  With Easter holidays loaded:")
    print_schedule(schedule_pam_events(HORIZON, terms, adjuster).filter_by_type(EventType.IP))


def generate_random_portfolio(n_loans: int, seed: int = 42) -> list[ContractTerms]:
    """Generate a synthetic portfolio of PAM loans originated 2020-2024."""
    rng = random.Random(seed)
    portfolio = []
    for i in range(n_loans):
        year, month = rng.randint(2020, 2024), rng.randint(1, 12)
        origination = ActusDate(year, month, 15)
        cycle = rng.choice(["1M", "3M", "6M"])
        portfolio.append(
            ContractTerms(
                contract_id=f"LOAN-{i:06d}",
                status_date=ActusDate(2025, 6, 1),
                initial_exchange_date=origination,
                maturity_date=ActusDate(year + rng.randint(3, 10), month, 15),
                notional_principal=round(rng.uniform(50_000, 500_000), -3),
                nominal_interest_rate=round(rng.uniform(0.03, 0.08), 4),
                interest_payment_anchor=origination.add_period(cycle),
                interest_payment_cycle=cycle,
            )
        )
    return portfolio


def example_5_portfolio():
    """
    Example 5: Portfolio Scheduling
    -------------------------------
    Schedule many loans across a spawn-based process pool and collect every
    event into one DataFrame.
    """
    print("\n" + "=" * 80)
    print("Example 5: Portfolio Scheduling")
    print("=" * 80)

    portfolio = generate_random_portfolio(1_000)

    t0 = time.perf_counter()
    sequential = [schedule_pam_events(HORIZON, terms) for terms in portfolio]
    seq_elapsed = time.perf_counter() - t0

    result = schedule_portfolio(portfolio, HORIZON, max_workers=4)

    print(f"\n  Loans:          {result.num_contracts:,}")
    print(f"  Events:         {result.num_events:,}")
    print(f"  Sequential:     {seq_elapsed:.2f}s")
    print(f"  Parallel:       {result.duration_ms / 1000:.2f}s")
    print(f"  Same schedules: {tuple(sequential) == result.schedules}")

    df = result.to_dataframe()
    print("\n  Events by type:")
    print(df.groupby("event_type").size().to_string())


def main():
    example_1_basic_pam_loan()
    example_2_capitalization_and_fixing()
    example_3_status_and_termination()
    example_4_business_days()
    example_5_portfolio()


if __name__ == "__main__":
    main()
