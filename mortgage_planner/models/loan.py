"""
Pydantic models for mortgage terms, amortization schedules and their results.

All models are immutable: the engine builds new objects for every call and
never mutates its inputs.
"""

import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LoanTerms(BaseModel):
    """Original contractual terms of a fixed-rate mortgage."""

    model_config = ConfigDict(frozen=True)

    principal: float = Field(..., gt=0, description="Original loan amount")
    annual_rate: float = Field(
        ..., ge=0, description="Nominal annual rate as a decimal (0.05 = 5%)"
    )
    term_months: int = Field(..., gt=0, description="Contractual term in months")
    start_date: datetime.date = Field(
        ..., description="First payment date; fixes the contractual due day"
    )

    @property
    def monthly_rate(self) -> float:
        """Periodic monthly rate."""
        return self.annual_rate / 12

    @property
    def due_day(self) -> int:
        """Contractual day-of-month on which payments fall due."""
        return self.start_date.day


class AmortizationEntry(BaseModel):
    """A single payment period in an amortization schedule."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(..., description="Payment date")
    payment: float = Field(..., description="Total amount paid this period")
    interest: float = Field(..., description="Interest portion of the payment")
    principal: float = Field(..., description="Principal portion of the payment")
    remaining: float = Field(..., ge=0, description="Balance after this payment")


class PastPrepayment(BaseModel):
    """Extra principal the borrower has already paid."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(..., description="Date the prepayment was made")
    amount: float = Field(..., gt=0, description="Extra principal amount")
    note: Optional[str] = Field(default=None, description="Free-form note")


PastPrepaymentLog = List[PastPrepayment]


class MortgageBaselineResult(BaseModel):
    """Amortization path assuming no prepayments."""

    model_config = ConfigDict(frozen=True)

    schedule: List[AmortizationEntry] = Field(
        ..., description="One entry per payment period"
    )
    total_interest: float = Field(..., ge=0, description="Sum of interest paid")
    payoff_date: datetime.date = Field(..., description="Date of the final payment")

    @property
    def months(self) -> int:
        """Number of payments in the schedule."""
        return len(self.schedule)


class MortgageHistoryResult(MortgageBaselineResult):
    """Amortization path including extra principal payments."""


class MortgageComparisonResult(BaseModel):
    """Baseline path compared with the path including past prepayments."""

    model_config = ConfigDict(frozen=True)

    baseline: MortgageBaselineResult
    actual: MortgageHistoryResult
    interest_saved: float = Field(..., description="Baseline minus actual interest")
    months_saved: int = Field(..., description="Baseline minus actual payment count")


class MortgageOptimizationSummary(BaseModel):
    """Impact of adding a flat extra amount to every monthly payment."""

    model_config = ConfigDict(frozen=True)

    baseline_monthly_payment: float = Field(..., description="Contractual payment")
    baseline_total_interest: float = Field(..., ge=0)
    baseline_term_months: int = Field(..., ge=0)
    new_total_interest: float = Field(..., ge=0)
    new_term_months: int = Field(..., ge=0)
    interest_saved: float = Field(..., description="Interest avoided by the extra")
    months_saved: int = Field(..., ge=0, description="Payments avoided by the extra")


class MortgageComparisonRequest(BaseModel):
    """Terms plus prepayment log for a baseline-vs-actual comparison."""

    model_config = ConfigDict(frozen=True)

    terms: LoanTerms
    past_prepayments: List[PastPrepayment] = Field(default_factory=list)


def create_sample_terms() -> LoanTerms:
    """Create a sample 30-year mortgage for testing purposes."""
    return LoanTerms(
        principal=300000.0,
        annual_rate=0.05,
        term_months=360,
        start_date=datetime.date(2025, 1, 1),
    )
