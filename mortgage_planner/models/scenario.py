"""
Pydantic models for forward-looking mortgage scenarios.

A scenario is a named, toggleable bundle of future extra-payment patterns.
Patterns are pure data; ``scenario_patterns`` turns them into concrete
extra-principal amounts on specific dates and ``scenario_runner`` evaluates
each scenario against the baseline and actual paths.
"""

import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .loan import (
    AmortizationEntry,
    LoanTerms,
    MortgageBaselineResult,
    MortgageHistoryResult,
    PastPrepayment,
)


class BaseScenarioPattern(BaseModel):
    """Fields shared by every extra-payment pattern."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(default=None, description="Pattern identifier")
    label: Optional[str] = Field(default=None, description="Display label")
    amount: float = Field(
        ..., description="Extra principal per occurrence; <= 0 is a no-op"
    )


class OneTimeScenarioPattern(BaseScenarioPattern):
    """A single lump-sum extra payment."""

    kind: Literal["oneTime"] = "oneTime"
    date: datetime.date = Field(..., description="Date of the lump-sum payment")


class MonthlyScenarioPattern(BaseScenarioPattern):
    """
    A monthly extra payment.

    Applied either on the contractual due date of each month or on a fixed
    day-of-month (clamped to the month's length).
    """

    kind: Literal["monthly"] = "monthly"
    start_date: datetime.date = Field(..., description="First month to apply")
    until_date: Optional[datetime.date] = Field(
        default=None, description="Last date (inclusive) an extra may land on"
    )
    day_of_month_strategy: Literal["same-as-due-date", "specific-day"] = Field(
        default="same-as-due-date", description="How the day within each month is chosen"
    )
    specific_day_of_month: Optional[int] = Field(
        default=None,
        ge=1,
        le=31,
        description="Day of month for 'specific-day'; defaults to the loan due day",
    )


class YearlyScenarioPattern(BaseScenarioPattern):
    """A yearly extra payment, e.g. a bonus every April 1st."""

    kind: Literal["yearly"] = "yearly"
    month: int = Field(..., ge=1, le=12, description="Calendar month (1-12)")
    day: int = Field(..., ge=1, le=31, description="Day of month, clamped by calendar")
    first_year: int = Field(..., ge=1900, le=2200, description="First year to apply")
    last_year: Optional[int] = Field(
        default=None, ge=1900, le=2200, description="Last year; until payoff if omitted"
    )

    @model_validator(mode="after")
    def validate_year_range(self):
        if self.last_year is not None and self.last_year < self.first_year:
            raise ValueError("last_year must be >= first_year")
        return self


class BiweeklyScenarioPattern(BaseScenarioPattern):
    """An extra payment every 14 days, phased by an anchor date (e.g. a paycheck)."""

    kind: Literal["biweekly"] = "biweekly"
    anchor_date: datetime.date = Field(..., description="Fixes the 14-day cadence")
    start_date: Optional[datetime.date] = Field(
        default=None, description="First date the pattern may apply"
    )
    until_date: Optional[datetime.date] = Field(
        default=None, description="Last date (inclusive) the pattern may apply"
    )


ScenarioPattern = Annotated[
    Union[
        OneTimeScenarioPattern,
        MonthlyScenarioPattern,
        YearlyScenarioPattern,
        BiweeklyScenarioPattern,
    ],
    Field(discriminator="kind"),
]


class MortgageScenarioConfig(BaseModel):
    """A named bundle of future extra-payment patterns."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Scenario identifier")
    name: str = Field(..., description="Scenario name")
    description: Optional[str] = Field(default=None, description="Free-form description")
    active: bool = Field(default=True, description="Inactive scenarios are not evaluated")
    patterns: List[ScenarioPattern] = Field(
        default_factory=list, description="Extra-payment patterns"
    )


class MortgageScenarioContext(BaseModel):
    """Inputs shared by every scenario in a run."""

    model_config = ConfigDict(frozen=True)

    terms: LoanTerms
    past_prepayments: List[PastPrepayment] = Field(
        default_factory=list, description="Extra principal already paid"
    )
    as_of_date: datetime.date = Field(
        ..., description="Pivot between actual history and simulated future"
    )


class MortgageScenarioRequest(BaseModel):
    """A complete scenario run request."""

    model_config = ConfigDict(frozen=True)

    context: MortgageScenarioContext
    scenarios: List[MortgageScenarioConfig] = Field(default_factory=list)


class MortgageScenarioSummary(BaseModel):
    """Result of one scenario: actual history up to as-of plus the simulated future."""

    model_config = ConfigDict(frozen=True)

    scenario_id: str
    scenario_name: str
    schedule: List[AmortizationEntry] = Field(
        ..., description="Past entries followed by the simulated future"
    )
    total_interest: float
    payoff_date: datetime.date
    effective_annual_rate: Optional[float] = None

    interest_saved_vs_baseline: float
    months_saved_vs_baseline: int

    interest_saved_vs_actual: float
    months_saved_vs_actual: int


class MortgageScenarioRunResult(BaseModel):
    """Baseline, actual and per-scenario paths for one as-of date."""

    model_config = ConfigDict(frozen=True)

    as_of_date: datetime.date
    effective_as_of_date: datetime.date = Field(
        ..., description="Schedule date the as-of date snapped to"
    )
    baseline: MortgageBaselineResult
    actual: MortgageHistoryResult = Field(
        ..., description="Past entries followed by the future with no extras"
    )
    actual_interest_so_far: float
    actual_months_so_far: int
    actual_effective_annual_rate: Optional[float] = None
    scenarios: List[MortgageScenarioSummary] = Field(default_factory=list)
