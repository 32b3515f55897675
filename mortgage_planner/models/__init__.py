"""Data models and calculation engine for mortgage scenarios."""

from .errors import (
    ConvergenceError,
    InvalidInputError,
    MortgageEngineError,
    NegativeAmortizationError,
)
from .loan import (
    AmortizationEntry,
    LoanTerms,
    MortgageBaselineResult,
    MortgageComparisonRequest,
    MortgageComparisonResult,
    MortgageHistoryResult,
    MortgageOptimizationSummary,
    PastPrepayment,
    PastPrepaymentLog,
    create_sample_terms,
)
from .mortgage_amortization import (
    compare_baseline_with_prepayments,
    compute_baseline_mortgage,
    compute_monthly_payment,
    compute_mortgage_with_prepayments,
    summarize_mortgage_optimization,
)
from .effective_rate import (
    EffectiveRateResult,
    compute_effective_annual_rate_from_schedule,
    solve_effective_annual_rate,
)
from .scenario import (
    BiweeklyScenarioPattern,
    MonthlyScenarioPattern,
    MortgageScenarioConfig,
    MortgageScenarioContext,
    MortgageScenarioRequest,
    MortgageScenarioRunResult,
    MortgageScenarioSummary,
    OneTimeScenarioPattern,
    ScenarioPattern,
    YearlyScenarioPattern,
)
from .scenario_patterns import build_extra_by_date_map
from .scenario_runner import run_mortgage_scenarios

__all__ = [
    "MortgageEngineError",
    "InvalidInputError",
    "NegativeAmortizationError",
    "ConvergenceError",
    "LoanTerms",
    "AmortizationEntry",
    "PastPrepayment",
    "PastPrepaymentLog",
    "MortgageBaselineResult",
    "MortgageHistoryResult",
    "MortgageComparisonRequest",
    "MortgageComparisonResult",
    "MortgageOptimizationSummary",
    "create_sample_terms",
    "compute_monthly_payment",
    "compute_baseline_mortgage",
    "compute_mortgage_with_prepayments",
    "compare_baseline_with_prepayments",
    "summarize_mortgage_optimization",
    "EffectiveRateResult",
    "solve_effective_annual_rate",
    "compute_effective_annual_rate_from_schedule",
    "ScenarioPattern",
    "OneTimeScenarioPattern",
    "MonthlyScenarioPattern",
    "YearlyScenarioPattern",
    "BiweeklyScenarioPattern",
    "MortgageScenarioConfig",
    "MortgageScenarioContext",
    "MortgageScenarioRequest",
    "MortgageScenarioSummary",
    "MortgageScenarioRunResult",
    "build_extra_by_date_map",
    "run_mortgage_scenarios",
]
