"""
Scenario runner for forward-looking mortgage optimisation.

Given the original terms, past prepayments, an as-of date and a set of
scenarios, the runner produces:

- the baseline path (no prepayments at all),
- the actual path (past prepayments, then no future extras),
- one path per active scenario (past prepayments, then the scenario's
  future extras),

together with interest and months saved against both the baseline and the
actual path.
"""

import datetime
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from .dates import add_months
from .effective_rate import (
    DEFAULT_ITERATIONS,
    DEFAULT_UPPER_BOUND,
    solve_effective_annual_rate,
)
from .errors import ConvergenceError, InvalidInputError, NegativeAmortizationError
from .loan import AmortizationEntry, LoanTerms, MortgageHistoryResult
from .mortgage_amortization import (
    compute_baseline_mortgage,
    compute_monthly_payment,
    compute_mortgage_with_prepayments,
)
from .scenario import (
    MortgageScenarioConfig,
    MortgageScenarioContext,
    MortgageScenarioRunResult,
    MortgageScenarioSummary,
)
from .scenario_patterns import build_extra_by_date_map

logger = logging.getLogger(__name__)

# Balance below which a simulated future is considered paid off
FUTURE_PAYOFF_THRESHOLD = 0.01

# Months allowed beyond the contractual term before giving up
SAFETY_EXTENSION_MONTHS = 600


class FutureSimulationResult(BaseModel):
    """Simulated schedule after the as-of point."""

    model_config = ConfigDict(frozen=True)

    future_schedule: List[AmortizationEntry]
    total_interest_future: float


def slice_schedule_up_to(
    schedule: Sequence[AmortizationEntry], as_of_date: datetime.date
) -> Tuple[List[AmortizationEntry], datetime.date]:
    """
    Split off the entries dated on or before ``as_of_date``.

    Returns:
        The past entries and the effective as-of date: the date of the last
        past entry, or the first scheduled date when as-of precedes it

    Raises:
        InvalidInputError: If the schedule is empty
    """
    if len(schedule) == 0:
        raise InvalidInputError("Schedule is empty")

    past: List[AmortizationEntry] = []
    for entry in schedule:
        if entry.date > as_of_date:
            break
        past.append(entry)

    if not past:
        return past, schedule[0].date
    return past, past[-1].date


def simulate_future_from_as_of(
    terms: LoanTerms,
    remaining_at_as_of: float,
    effective_as_of: datetime.date,
    extra_by_date: Dict[datetime.date, float],
) -> FutureSimulationResult:
    """
    Continue the loan from the as-of point at the contractual payment.

    The first future payment falls one month after ``effective_as_of``. An
    extra amount is applied on the first payment date on or after its own
    date, and total principal is capped at the remaining balance.

    Args:
        terms: Original loan terms (rate and contractual payment)
        remaining_at_as_of: Balance at the as-of point
        effective_as_of: Schedule date the as-of date snapped to
        extra_by_date: Extra principal keyed by date

    Returns:
        Future schedule and the interest it accrues

    Raises:
        NegativeAmortizationError: If the payment does not cover the interest
        ConvergenceError: If the loan is not repaid within the step budget
    """
    monthly_payment = compute_monthly_payment(terms)
    monthly_rate = terms.monthly_rate
    extras = sorted(extra_by_date.items())
    max_steps = terms.term_months + SAFETY_EXTENSION_MONTHS

    future_schedule: List[AmortizationEntry] = []
    remaining = remaining_at_as_of
    total_interest = 0.0
    cursor = 0
    step = 1

    while remaining > FUTURE_PAYOFF_THRESHOLD and step <= max_steps:
        payment_date = add_months(effective_as_of, step)
        interest = remaining * monthly_rate if monthly_rate > 0 else 0.0
        principal = monthly_payment - interest
        if principal <= 0:
            raise NegativeAmortizationError(
                "Monthly payment is too small to amortize the loan"
            )

        extra = 0.0
        while cursor < len(extras) and extras[cursor][0] <= payment_date:
            extra += extras[cursor][1]
            cursor += 1

        total_principal = min(principal + extra, remaining)
        remaining = max(0.0, remaining - total_principal)
        total_interest += interest

        future_schedule.append(
            AmortizationEntry(
                date=payment_date,
                payment=interest + total_principal,
                interest=interest,
                principal=total_principal,
                remaining=remaining,
            )
        )
        step += 1

    if remaining > FUTURE_PAYOFF_THRESHOLD:
        raise ConvergenceError(
            f"Future simulation did not converge within {max_steps} months "
            f"(remaining balance {remaining:.2f})"
        )

    return FutureSimulationResult(
        future_schedule=future_schedule, total_interest_future=total_interest
    )


def _effective_rate(
    schedule: Sequence[AmortizationEntry],
    principal: float,
    upper_bound: float,
    iterations: int,
) -> Optional[float]:
    if not schedule:
        return None
    return solve_effective_annual_rate(
        schedule, principal, upper_bound=upper_bound, iterations=iterations
    ).annual_rate


def run_mortgage_scenarios(
    context: MortgageScenarioContext,
    scenario_configs: Iterable[MortgageScenarioConfig],
    *,
    rate_upper_bound: float = DEFAULT_UPPER_BOUND,
    rate_iterations: int = DEFAULT_ITERATIONS,
) -> MortgageScenarioRunResult:
    """
    Evaluate future extra-payment scenarios against the baseline and actual paths.

    Args:
        context: Loan terms, past prepayments and as-of date
        scenario_configs: Scenarios to evaluate; inactive or empty ones are skipped
        rate_upper_bound: Upper end of the effective-rate search bracket
        rate_iterations: Bisection steps for the effective-rate search

    Returns:
        Baseline, actual and per-scenario results

    Raises:
        NegativeAmortizationError: If a payment does not cover accruing interest
        ConvergenceError: If a simulated future does not pay off
    """
    terms = context.terms

    # Phase 1: ground truth up to as-of
    baseline = compute_baseline_mortgage(terms)
    history = compute_mortgage_with_prepayments(terms, context.past_prepayments)
    past_schedule, effective_as_of = slice_schedule_up_to(
        history.schedule, context.as_of_date
    )

    if past_schedule:
        remaining_at_as_of = past_schedule[-1].remaining
        interest_so_far = sum(entry.interest for entry in past_schedule)
    else:
        logger.debug(
            f"As-of {context.as_of_date} precedes first payment; "
            f"snapping to {effective_as_of}"
        )
        remaining_at_as_of = terms.principal
        interest_so_far = 0.0
    months_so_far = len(past_schedule)

    # Phase 2: actual path continued with no future extras
    actual_future = simulate_future_from_as_of(
        terms, remaining_at_as_of, effective_as_of, {}
    )
    actual_schedule = past_schedule + actual_future.future_schedule
    actual_total_interest = interest_so_far + actual_future.total_interest_future
    actual_payoff = actual_schedule[-1].date if actual_schedule else baseline.payoff_date
    actual_rate = _effective_rate(
        actual_schedule, terms.principal, rate_upper_bound, rate_iterations
    )

    # Phase 3: scenarios
    summaries: List[MortgageScenarioSummary] = []
    for config in scenario_configs:
        if not config.active or not config.patterns:
            continue

        extra_by_date = build_extra_by_date_map(baseline, context, config.patterns)
        future = simulate_future_from_as_of(
            terms, remaining_at_as_of, effective_as_of, extra_by_date
        )

        schedule = past_schedule + future.future_schedule
        total_interest = interest_so_far + future.total_interest_future
        payoff_date = schedule[-1].date if schedule else baseline.payoff_date

        summary = MortgageScenarioSummary(
            scenario_id=config.id,
            scenario_name=config.name,
            schedule=schedule,
            total_interest=total_interest,
            payoff_date=payoff_date,
            effective_annual_rate=_effective_rate(
                schedule, terms.principal, rate_upper_bound, rate_iterations
            ),
            interest_saved_vs_baseline=baseline.total_interest - total_interest,
            months_saved_vs_baseline=baseline.months - len(schedule),
            interest_saved_vs_actual=actual_total_interest - total_interest,
            months_saved_vs_actual=len(actual_schedule) - len(schedule),
        )
        logger.debug(
            f"Scenario {config.id}: {len(extra_by_date)} extra date(s), "
            f"payoff {payoff_date}, interest saved vs actual "
            f"{summary.interest_saved_vs_actual:.2f}"
        )
        summaries.append(summary)

    return MortgageScenarioRunResult(
        as_of_date=context.as_of_date,
        effective_as_of_date=effective_as_of,
        baseline=baseline,
        actual=MortgageHistoryResult(
            schedule=actual_schedule,
            total_interest=actual_total_interest,
            payoff_date=actual_payoff,
        ),
        actual_interest_so_far=interest_so_far,
        actual_months_so_far=months_so_far,
        actual_effective_annual_rate=actual_rate,
        scenarios=summaries,
    )
