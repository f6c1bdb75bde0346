"""Pytest configuration and shared fixtures for pamsched tests.

This module provides common fixtures and configuration for all tests.
"""

from collections.abc import Callable
from typing import Any

import jax
import pytest

from pamsched.core import ActusDate, ContractTerms
from pamsched.utilities import BusinessDayAdjuster, HolidayTable


@pytest.fixture
def sample_dates() -> dict[str, ActusDate]:
    """Provide common date fixtures for testing.

    Returns:
        Dictionary of commonly used dates in tests
    """
    return {
        "status_date": ActusDate(2024, 1, 1),
        "initial_exchange": ActusDate(2024, 1, 1),
        "maturity": ActusDate(2029, 1, 1),
        "horizon": ActusDate(2030, 12, 31),
        "saturday": ActusDate(2024, 11, 9),
        "sunday": ActusDate(2024, 11, 10),
    }


@pytest.fixture
def sample_contract_terms() -> dict[str, Any]:
    """Provide keyword arguments for a plain five-year PAM contract.

    Returns:
        Dictionary accepted by ContractTerms
    """
    return {
        "contract_id": "TEST-001",
        "currency": "USD",
        "contract_role": "RPA",
        "status_date": "2024-01-01",
        "initial_exchange_date": "2024-01-01",
        "maturity_date": "2029-01-01",
        "notional_principal": 100000,
        "nominal_interest_rate": 0.05,
    }


@pytest.fixture
def make_terms(sample_contract_terms: dict[str, Any]) -> Callable[..., ContractTerms]:
    """Factory building ContractTerms from the sample terms plus overrides.

    Example:
        >>> terms = make_terms(interest_payment_cycle="3M", interest_payment_anchor="2024-04-01")
    """

    def _make(**overrides: Any) -> ContractTerms:
        return ContractTerms(**{**sample_contract_terms, **overrides})

    return _make


@pytest.fixture
def adjuster() -> BusinessDayAdjuster:
    """Business day adjuster over the default holiday table."""
    return BusinessDayAdjuster()


@pytest.fixture
def empty_adjuster() -> BusinessDayAdjuster:
    """Business day adjuster without any holidays (weekends only)."""
    return BusinessDayAdjuster(HolidayTable())


@pytest.fixture(autouse=True)
def reset_jax_config() -> None:
    """Clear JAX caches after each test.

    This ensures tests don't interfere with each other's JAX state.
    """
    yield
    jax.clear_caches()


# Configure pytest markers
def pytest_configure(config: Any) -> None:
    """Configure custom pytest markers.

    Args:
        config: Pytest configuration object
    """
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
