"""
Mortgage amortization calculations.

This module builds the contractual (baseline) amortization schedule, replays
historical prepayments into an "actual" schedule, and compares the two. It
also summarizes the effect of a flat extra monthly payment.
"""

import logging
from typing import Iterable, List

from .dates import add_months
from .errors import InvalidInputError, NegativeAmortizationError
from .loan import (
    AmortizationEntry,
    LoanTerms,
    MortgageBaselineResult,
    MortgageComparisonResult,
    MortgageHistoryResult,
    MortgageOptimizationSummary,
    PastPrepayment,
)

logger = logging.getLogger(__name__)

# Balance below which the loan is considered repaid
PAYOFF_EPSILON = 1e-6


def compute_monthly_payment(terms: LoanTerms) -> float:
    """
    Calculate the fixed contractual monthly payment.

    Uses the standard annuity formula:

        payment = P * r * (1 + r)^n / ((1 + r)^n - 1)

    where ``P`` is the principal, ``r`` the monthly rate and ``n`` the term in
    months. With a zero rate the payment is simply ``P / n``.

    Args:
        terms: Loan terms

    Returns:
        Monthly payment amount

    Raises:
        InvalidInputError: If the principal or term is not positive
    """
    if terms.principal <= 0:
        raise InvalidInputError("principal must be positive")
    if terms.term_months <= 0:
        raise InvalidInputError("term_months must be positive")

    monthly_rate = terms.annual_rate / 12
    if monthly_rate == 0:
        return terms.principal / terms.term_months

    factor = (1 + monthly_rate) ** terms.term_months
    return terms.principal * monthly_rate * factor / (factor - 1)


def _total_interest(schedule: Iterable[AmortizationEntry]) -> float:
    return sum(entry.interest for entry in schedule)


def compute_baseline_mortgage(terms: LoanTerms) -> MortgageBaselineResult:
    """
    Build the amortization schedule assuming no prepayments.

    Args:
        terms: Loan terms

    Returns:
        Baseline schedule, total interest and payoff date
    """
    payment = compute_monthly_payment(terms)
    monthly_rate = terms.monthly_rate

    schedule: List[AmortizationEntry] = []
    remaining = terms.principal
    payoff_date = terms.start_date

    for month in range(terms.term_months):
        if remaining <= PAYOFF_EPSILON:
            break

        payment_date = add_months(terms.start_date, month)
        interest = remaining * monthly_rate if monthly_rate > 0 else 0.0
        principal = payment - interest
        remaining = max(0.0, remaining - principal)

        schedule.append(
            AmortizationEntry(
                date=payment_date,
                payment=payment,
                interest=interest,
                principal=principal,
                remaining=remaining,
            )
        )
        payoff_date = payment_date

    return MortgageBaselineResult(
        schedule=schedule,
        total_interest=_total_interest(schedule),
        payoff_date=payoff_date,
    )


def compute_mortgage_with_prepayments(
    terms: LoanTerms, prepayments: Iterable[PastPrepayment]
) -> MortgageHistoryResult:
    """
    Build the amortization schedule including past prepayments.

    Payments fall on the same day-of-month as ``terms.start_date``. A
    prepayment may be dated on any calendar day; it is applied as extra
    principal on the first payment date on or after it, and each prepayment
    is applied exactly once.

    Args:
        terms: Loan terms
        prepayments: Historical extra principal payments, in any order

    Returns:
        Actual schedule, total interest and payoff date

    Raises:
        NegativeAmortizationError: If the payment does not cover the interest
    """
    payment = compute_monthly_payment(terms)
    monthly_rate = terms.monthly_rate
    pending = sorted(prepayments, key=lambda p: p.date)

    schedule: List[AmortizationEntry] = []
    cursor = 0
    remaining = terms.principal
    payoff_date = terms.start_date

    for month in range(terms.term_months):
        if remaining <= PAYOFF_EPSILON:
            break

        payment_date = add_months(terms.start_date, month)
        interest = remaining * monthly_rate if monthly_rate > 0 else 0.0
        principal = payment - interest
        if principal < 0:
            raise NegativeAmortizationError(
                "Monthly payment too low to amortize the loan"
            )

        extra = 0.0
        while cursor < len(pending) and pending[cursor].date <= payment_date:
            extra += pending[cursor].amount
            cursor += 1

        total_principal = principal + extra
        if total_principal > remaining:
            # Extra is applied first against the remaining balance
            total_principal = remaining
            principal = max(0.0, total_principal - extra)

        remaining = max(0.0, remaining - total_principal)

        schedule.append(
            AmortizationEntry(
                date=payment_date,
                payment=payment + extra,
                interest=interest,
                principal=principal,
                remaining=remaining,
            )
        )
        payoff_date = payment_date

    if cursor < len(pending):
        logger.debug(
            f"{len(pending) - cursor} prepayment(s) dated after payoff {payoff_date} ignored"
        )

    return MortgageHistoryResult(
        schedule=schedule,
        total_interest=_total_interest(schedule),
        payoff_date=payoff_date,
    )


def compare_baseline_with_prepayments(
    terms: LoanTerms, prepayments: Iterable[PastPrepayment]
) -> MortgageComparisonResult:
    """
    Compare the baseline path with the path including past prepayments.

    Args:
        terms: Loan terms
        prepayments: Historical extra principal payments

    Returns:
        Both paths plus interest and months saved by the prepayments
    """
    baseline = compute_baseline_mortgage(terms)
    actual = compute_mortgage_with_prepayments(terms, prepayments)

    return MortgageComparisonResult(
        baseline=baseline,
        actual=actual,
        interest_saved=baseline.total_interest - actual.total_interest,
        months_saved=baseline.months - actual.months,
    )


def _simulate_with_flat_extra(
    terms: LoanTerms, payment: float, extra: float
) -> List[AmortizationEntry]:
    monthly_rate = terms.monthly_rate
    schedule: List[AmortizationEntry] = []
    remaining = terms.principal

    for month in range(terms.term_months):
        if remaining <= PAYOFF_EPSILON:
            break

        interest = remaining * monthly_rate if monthly_rate > 0 else 0.0
        principal = payment - interest
        if principal < 0:
            raise NegativeAmortizationError(
                "Monthly payment too low to amortize the loan"
            )

        total_principal = min(principal + extra, remaining)
        remaining = max(0.0, remaining - total_principal)

        schedule.append(
            AmortizationEntry(
                date=add_months(terms.start_date, month),
                payment=interest + total_principal,
                interest=interest,
                principal=total_principal,
                remaining=remaining,
            )
        )

    return schedule


def summarize_mortgage_optimization(
    terms: LoanTerms, extra_monthly_payment: float
) -> MortgageOptimizationSummary:
    """
    Summarize the impact of paying a flat extra amount every month.

    Args:
        terms: Loan terms
        extra_monthly_payment: Extra principal added to every payment

    Returns:
        Baseline and accelerated totals with the resulting savings

    Raises:
        InvalidInputError: If the extra amount is negative
    """
    if extra_monthly_payment < 0:
        raise InvalidInputError("extra_monthly_payment cannot be negative")

    monthly_payment = compute_monthly_payment(terms)
    baseline = compute_baseline_mortgage(terms)
    accelerated = _simulate_with_flat_extra(terms, monthly_payment, extra_monthly_payment)

    new_total_interest = _total_interest(accelerated)
    new_term_months = len(accelerated)

    return MortgageOptimizationSummary(
        baseline_monthly_payment=monthly_payment,
        baseline_total_interest=baseline.total_interest,
        baseline_term_months=baseline.months,
        new_total_interest=new_total_interest,
        new_term_months=new_term_months,
        interest_saved=baseline.total_interest - new_total_interest,
        months_saved=max(0, baseline.months - new_term_months),
    )
