"""
Pytest configuration and shared fixtures for the mortgage planner tests.

Canonical loan: $300K at 5% for 360 months, first payment 2025-01-01.
"""

from datetime import date

import pytest

from mortgage_planner.config import reset_global_settings
from mortgage_planner.models.loan import LoanTerms, PastPrepayment
from mortgage_planner.models.mortgage_amortization import compute_baseline_mortgage
from mortgage_planner.models.scenario import MortgageScenarioContext


@pytest.fixture(autouse=True)
def clean_global_settings():
    """Make sure no test leaks a cached Settings instance into another."""
    reset_global_settings()
    yield
    reset_global_settings()


@pytest.fixture
def base_terms() -> LoanTerms:
    """Standard 30-year fixed mortgage."""
    return LoanTerms(
        principal=300000,
        annual_rate=0.05,
        term_months=360,
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def short_terms() -> LoanTerms:
    """Five-year loan that pays off early in the 2030s."""
    return LoanTerms(
        principal=50000,
        annual_rate=0.05,
        term_months=60,
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def two_prepayments():
    """Two historical $5K prepayments."""
    return [
        PastPrepayment(date=date(2026, 1, 1), amount=5000),
        PastPrepayment(date=date(2027, 1, 1), amount=5000),
    ]


@pytest.fixture
def base_context(base_terms) -> MortgageScenarioContext:
    """Scenario context two years into the canonical loan."""
    return MortgageScenarioContext(
        terms=base_terms, past_prepayments=[], as_of_date=date(2027, 1, 1)
    )


@pytest.fixture
def base_baseline(base_terms):
    """Baseline path of the canonical loan."""
    return compute_baseline_mortgage(base_terms)
