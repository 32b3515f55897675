"""
Tests for mortgage amortization calculations.

This module tests the contractual payment, the baseline schedule, the
schedule with past prepayments, their comparison and the flat-extra
optimisation summary.
"""

from datetime import date

import numpy as np
import pytest
from pydantic import ValidationError

from mortgage_planner.models import mortgage_amortization
from mortgage_planner.models.errors import InvalidInputError, NegativeAmortizationError
from mortgage_planner.models.loan import LoanTerms, PastPrepayment, create_sample_terms
from mortgage_planner.models.mortgage_amortization import (
    PAYOFF_EPSILON,
    compare_baseline_with_prepayments,
    compute_baseline_mortgage,
    compute_monthly_payment,
    compute_mortgage_with_prepayments,
    summarize_mortgage_optimization,
)


class TestMonthlyPayment:
    """Test cases for compute_monthly_payment."""

    def test_standard_mortgage(self, base_terms):
        """Test $300K at 5% for 30 years."""
        payment = compute_monthly_payment(base_terms)

        # Expected payment is approximately $1,610.46
        assert abs(payment - 1610.46) < 0.01

    def test_six_percent(self):
        """Test $300K at 6% for 30 years."""
        terms = LoanTerms(
            principal=300000, annual_rate=0.06, term_months=360, start_date=date(2025, 1, 1)
        )
        assert abs(compute_monthly_payment(terms) - 1798.65) < 0.01

    def test_zero_rate(self):
        """Test zero interest divides principal evenly over the term."""
        terms = LoanTerms(
            principal=360000, annual_rate=0.0, term_months=360, start_date=date(2025, 1, 1)
        )
        assert compute_monthly_payment(terms) == 1000.0

    def test_non_positive_principal(self):
        """Test a non-positive principal is rejected."""
        terms = LoanTerms.model_construct(
            principal=0.0, annual_rate=0.05, term_months=360, start_date=date(2025, 1, 1)
        )
        with pytest.raises(InvalidInputError, match="principal"):
            compute_monthly_payment(terms)

    def test_non_positive_term(self):
        """Test a non-positive term is rejected."""
        terms = LoanTerms.model_construct(
            principal=1000.0, annual_rate=0.05, term_months=0, start_date=date(2025, 1, 1)
        )
        with pytest.raises(InvalidInputError, match="term_months"):
            compute_monthly_payment(terms)

    def test_terms_validation(self):
        """Test LoanTerms rejects invalid values at construction."""
        with pytest.raises(ValidationError):
            LoanTerms(principal=-1, annual_rate=0.05, term_months=360, start_date="2025-01-01")
        with pytest.raises(ValidationError):
            LoanTerms(principal=1000, annual_rate=-0.01, term_months=360, start_date="2025-01-01")
        with pytest.raises(ValidationError):
            LoanTerms(principal=1000, annual_rate=0.05, term_months=0, start_date="2025-01-01")

    def test_invalid_input_is_value_error(self):
        """Test InvalidInputError can be caught as ValueError."""
        assert issubclass(InvalidInputError, ValueError)


class TestBaselineMortgage:
    """Test cases for the baseline amortization schedule."""

    def test_reasonable_path(self, base_terms):
        """Test the canonical loan pays off within its term."""
        baseline = compute_baseline_mortgage(base_terms)

        assert 300 < len(baseline.schedule) <= 360
        assert baseline.months == len(baseline.schedule)
        assert baseline.total_interest > 0

    def test_monotonic_payoff(self, base_terms):
        """Test the balance never increases and reaches zero at the end."""
        baseline = compute_baseline_mortgage(base_terms)

        for entry in baseline.schedule:
            assert entry.payment > 0
            assert entry.interest >= 0
            assert entry.principal > 0
        for previous, current in zip(baseline.schedule, baseline.schedule[1:]):
            assert current.remaining <= previous.remaining
        assert baseline.schedule[-1].remaining <= PAYOFF_EPSILON

    def test_interest_plus_principal_equals_payment(self, base_terms):
        """Test each row splits the payment into interest and principal."""
        baseline = compute_baseline_mortgage(base_terms)

        for entry in baseline.schedule:
            assert np.isclose(entry.interest + entry.principal, entry.payment)

    def test_first_payment_mostly_interest(self, base_terms):
        """Test the first month's interest is principal times monthly rate."""
        first = compute_baseline_mortgage(base_terms).schedule[0]

        assert np.isclose(first.interest, 300000 * 0.05 / 12)
        assert first.date == date(2025, 1, 1)

    def test_dates_and_payoff(self, base_terms):
        """Test payment dates step monthly and payoff is the last date."""
        baseline = compute_baseline_mortgage(base_terms)

        assert baseline.schedule[1].date == date(2025, 2, 1)
        assert baseline.schedule[12].date == date(2026, 1, 1)
        assert baseline.payoff_date == baseline.schedule[-1].date
        assert baseline.payoff_date == date(2054, 12, 1)

    def test_total_interest_is_sum(self, base_terms):
        """Test total interest equals the sum of the rows."""
        baseline = compute_baseline_mortgage(base_terms)

        assert np.isclose(
            baseline.total_interest, sum(e.interest for e in baseline.schedule)
        )

    def test_zero_rate_schedule(self):
        """Test a zero-rate loan accrues no interest."""
        terms = LoanTerms(
            principal=12000, annual_rate=0, term_months=12, start_date=date(2025, 1, 1)
        )
        baseline = compute_baseline_mortgage(terms)

        assert len(baseline.schedule) == 12
        assert baseline.total_interest == 0
        assert all(e.principal == 1000 for e in baseline.schedule)

    def test_end_of_month_start_date(self):
        """Test a start on the 31st clamps in short months."""
        terms = LoanTerms(
            principal=12000, annual_rate=0.05, term_months=12, start_date=date(2025, 1, 31)
        )
        schedule = compute_baseline_mortgage(terms).schedule

        assert schedule[1].date == date(2025, 2, 28)
        assert schedule[2].date == date(2025, 3, 31)


class TestMortgageWithPrepayments:
    """Test cases for the schedule including past prepayments."""

    def test_prepayments_reduce_interest(self, base_terms, two_prepayments):
        """Test prepayments lower total interest and do not lengthen the loan."""
        actual = compute_mortgage_with_prepayments(base_terms, two_prepayments)
        baseline = compute_baseline_mortgage(base_terms)

        assert actual.total_interest < baseline.total_interest
        assert len(actual.schedule) <= len(baseline.schedule)

    def test_no_prepayments_matches_baseline(self, base_terms):
        """Test an empty log reproduces the baseline."""
        actual = compute_mortgage_with_prepayments(base_terms, [])
        baseline = compute_baseline_mortgage(base_terms)

        assert len(actual.schedule) == len(baseline.schedule)
        assert np.isclose(actual.total_interest, baseline.total_interest)

    def test_prepayment_applied_on_matching_date(self, base_terms):
        """Test a prepayment on a due date is added to that period."""
        prepayments = [PastPrepayment(date=date(2025, 3, 1), amount=1000)]
        actual = compute_mortgage_with_prepayments(base_terms, prepayments)
        payment = compute_monthly_payment(base_terms)

        march = actual.schedule[2]
        assert march.date == date(2025, 3, 1)
        assert np.isclose(march.payment, payment + 1000)
        # Recorded principal excludes the extra
        assert np.isclose(march.interest + march.principal, payment)

    def test_prepayment_between_dates_rolls_forward(self, base_terms):
        """Test a mid-month prepayment applies on the next due date."""
        prepayments = [PastPrepayment(date=date(2025, 1, 15), amount=1000)]
        actual = compute_mortgage_with_prepayments(base_terms, prepayments)
        payment = compute_monthly_payment(base_terms)

        assert np.isclose(actual.schedule[0].payment, payment)
        assert np.isclose(actual.schedule[1].payment, payment + 1000)

    def test_prepayments_sorted_and_consumed_once(self, base_terms):
        """Test unordered prepayments on the same period are summed once."""
        prepayments = [
            PastPrepayment(date=date(2025, 2, 1), amount=300),
            PastPrepayment(date=date(2025, 1, 20), amount=200),
        ]
        actual = compute_mortgage_with_prepayments(base_terms, prepayments)
        payment = compute_monthly_payment(base_terms)

        assert np.isclose(actual.schedule[1].payment, payment + 500)
        assert np.isclose(actual.schedule[2].payment, payment)

    def test_surplus_prepayment_caps_principal(self):
        """Test a prepayment larger than the balance is capped."""
        terms = LoanTerms(
            principal=10000, annual_rate=0, term_months=10, start_date=date(2025, 1, 1)
        )
        prepayments = [PastPrepayment(date=date(2025, 1, 1), amount=9500)]
        actual = compute_mortgage_with_prepayments(terms, prepayments)

        assert len(actual.schedule) == 1
        entry = actual.schedule[0]
        assert entry.remaining == 0
        assert entry.principal == 500
        assert entry.payment == 10500
        assert actual.payoff_date == date(2025, 1, 1)

    def test_negative_amortization_raises(self, base_terms, monkeypatch):
        """Test a payment below the accruing interest is rejected."""
        monkeypatch.setattr(
            mortgage_amortization, "compute_monthly_payment", lambda terms: 100.0
        )
        with pytest.raises(NegativeAmortizationError):
            compute_mortgage_with_prepayments(base_terms, [])

    def test_inputs_not_mutated(self, base_terms):
        """Test the caller's prepayment list keeps its order."""
        prepayments = [
            PastPrepayment(date=date(2027, 1, 1), amount=100),
            PastPrepayment(date=date(2026, 1, 1), amount=100),
        ]
        compute_mortgage_with_prepayments(base_terms, prepayments)

        assert prepayments[0].date == date(2027, 1, 1)


class TestComparison:
    """Test cases for compare_baseline_with_prepayments."""

    def test_interest_saved(self, base_terms, two_prepayments):
        """Test prepayments produce positive savings."""
        comparison = compare_baseline_with_prepayments(base_terms, two_prepayments)

        assert comparison.interest_saved > 0
        assert comparison.months_saved >= 0
        assert np.isclose(
            comparison.interest_saved,
            comparison.baseline.total_interest - comparison.actual.total_interest,
        )
        assert comparison.months_saved == (
            len(comparison.baseline.schedule) - len(comparison.actual.schedule)
        )

    def test_no_prepayments(self, base_terms):
        """Test an empty log saves nothing."""
        comparison = compare_baseline_with_prepayments(base_terms, [])

        assert abs(comparison.interest_saved) < 1e-6
        assert comparison.months_saved == 0


class TestOptimizationSummary:
    """Test cases for summarize_mortgage_optimization."""

    def test_zero_extra(self):
        """Test a zero extra payment reports no savings."""
        summary = summarize_mortgage_optimization(create_sample_terms(), 0)

        assert abs(summary.interest_saved) < 0.01
        assert summary.months_saved == 0
        assert summary.new_term_months == summary.baseline_term_months

    def test_positive_extra(self):
        """Test a positive extra shortens the loan and lowers interest."""
        summary = summarize_mortgage_optimization(create_sample_terms(), 200)

        assert summary.new_term_months < summary.baseline_term_months
        assert summary.new_total_interest < summary.baseline_total_interest
        assert summary.interest_saved > 0
        assert summary.months_saved > 0
        assert abs(summary.baseline_monthly_payment - 1610.46) < 0.01

    def test_negative_extra(self):
        """Test a negative extra payment is rejected."""
        with pytest.raises(InvalidInputError):
            summarize_mortgage_optimization(create_sample_terms(), -50)
