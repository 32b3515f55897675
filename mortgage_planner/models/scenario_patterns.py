"""
Expansion of scenario patterns into dated extra-principal amounts.

Each pattern yields candidate (date, amount) pairs. Candidates on or before
the as-of date, or after the baseline payoff date, are dropped; amounts that
land on the same date are summed.
"""

import datetime
import logging
from typing import Dict, Iterable, Iterator, Tuple

from .dates import add_days, clamp_day
from .loan import MortgageBaselineResult
from .scenario import (
    BiweeklyScenarioPattern,
    MonthlyScenarioPattern,
    MortgageScenarioContext,
    OneTimeScenarioPattern,
    ScenarioPattern,
    YearlyScenarioPattern,
)

logger = logging.getLogger(__name__)

BIWEEKLY_STEP_DAYS = 14

Candidate = Tuple[datetime.date, float]


def _expand_one_time(pattern: OneTimeScenarioPattern) -> Iterator[Candidate]:
    yield pattern.date, pattern.amount


def _expand_monthly(
    pattern: MonthlyScenarioPattern,
    baseline: MortgageBaselineResult,
    context: MortgageScenarioContext,
) -> Iterator[Candidate]:
    """Walk the baseline's payment months after max(start_date, as_of_date)."""
    start = max(pattern.start_date, context.as_of_date)
    day = pattern.specific_day_of_month or context.terms.due_day

    for entry in baseline.schedule:
        if entry.date <= start:
            continue
        if entry.date > baseline.payoff_date:
            break

        if pattern.day_of_month_strategy == "same-as-due-date":
            target = entry.date
        else:
            target = clamp_day(entry.date.year, entry.date.month, day)

        if pattern.until_date is not None and target > pattern.until_date:
            continue

        yield target, pattern.amount


def _expand_yearly(
    pattern: YearlyScenarioPattern,
    baseline: MortgageBaselineResult,
    context: MortgageScenarioContext,
) -> Iterator[Candidate]:
    first_year = max(pattern.first_year, context.as_of_date.year)
    if pattern.last_year is not None:
        last_year = pattern.last_year
    else:
        last_year = baseline.payoff_date.year + 1

    for year in range(first_year, last_year + 1):
        target = clamp_day(year, pattern.month, pattern.day)
        if target <= context.as_of_date:
            continue
        if target > baseline.payoff_date:
            break
        yield target, pattern.amount


def _expand_biweekly(
    pattern: BiweeklyScenarioPattern,
    baseline: MortgageBaselineResult,
    context: MortgageScenarioContext,
) -> Iterator[Candidate]:
    """Step 14 days from the anchor; the anchor, not as-of, fixes the phase."""
    limit = baseline.payoff_date
    if pattern.until_date is not None and pattern.until_date < limit:
        limit = pattern.until_date

    start_boundary = context.as_of_date
    if pattern.start_date is not None and pattern.start_date > start_boundary:
        start_boundary = pattern.start_date

    current = pattern.anchor_date
    while current <= limit:
        if current >= start_boundary and current > context.as_of_date:
            yield current, pattern.amount
        current = add_days(current, BIWEEKLY_STEP_DAYS)


def expand_pattern(
    pattern: ScenarioPattern,
    baseline: MortgageBaselineResult,
    context: MortgageScenarioContext,
) -> Iterator[Candidate]:
    """
    Expand a single pattern into candidate (date, amount) pairs.

    Candidates are not yet filtered against the as-of and payoff bounds.

    Raises:
        TypeError: For an unknown pattern type
    """
    if isinstance(pattern, OneTimeScenarioPattern):
        return _expand_one_time(pattern)
    elif isinstance(pattern, MonthlyScenarioPattern):
        return _expand_monthly(pattern, baseline, context)
    elif isinstance(pattern, YearlyScenarioPattern):
        return _expand_yearly(pattern, baseline, context)
    elif isinstance(pattern, BiweeklyScenarioPattern):
        return _expand_biweekly(pattern, baseline, context)
    raise TypeError(f"Unsupported scenario pattern: {type(pattern).__name__}")


def build_extra_by_date_map(
    baseline: MortgageBaselineResult,
    context: MortgageScenarioContext,
    patterns: Iterable[ScenarioPattern],
) -> Dict[datetime.date, float]:
    """
    Build the extra-principal amounts of a scenario keyed by date.

    Only strictly-future, in-term dates are kept: a date is dropped if it is
    on or before ``context.as_of_date`` or after ``baseline.payoff_date``.

    Args:
        baseline: Baseline path; supplies payment months and payoff date
        context: Scenario context (terms and as-of date)
        patterns: Patterns of one scenario

    Returns:
        Date-ordered mapping of date to summed extra amount
    """
    extra_by_date: Dict[datetime.date, float] = {}

    for pattern in patterns:
        if pattern.amount <= 0:
            continue
        for target, amount in expand_pattern(pattern, baseline, context):
            if target <= context.as_of_date or target > baseline.payoff_date:
                continue
            extra_by_date[target] = extra_by_date.get(target, 0.0) + amount

    logger.debug(f"Expanded {len(extra_by_date)} extra payment date(s)")
    return dict(sorted(extra_by_date.items()))
