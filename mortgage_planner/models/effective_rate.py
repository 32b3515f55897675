"""
Effective annual rate implied by an amortization schedule.

The schedule is treated as a cashflow stream from the borrower's side:

    CF_0 = +principal         (loan disbursed)
    CF_t = -payment_t         (each payment, t >= 1)

The monthly rate ``r`` that zeroes ``NPV(r) = sum CF_t / (1 + r)^t`` is found
by bisection and annualized as ``(1 + r)^12 - 1``.
"""

import logging
from typing import Sequence

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidInputError
from .loan import AmortizationEntry

logger = logging.getLogger(__name__)

DEFAULT_UPPER_BOUND = 0.2
DEFAULT_ITERATIONS = 60


class EffectiveRateResult(BaseModel):
    """Outcome of the effective-rate search."""

    model_config = ConfigDict(frozen=True)

    annual_rate: float = Field(..., description="Effective annual rate (0 on fallback)")
    monthly_rate: float = Field(..., description="Monthly rate found by bisection")
    converged: bool = Field(
        ..., description="False when NPV has no sign change in the search bracket"
    )


def _cashflows(schedule: Sequence[AmortizationEntry], principal: float) -> NDArray[np.float64]:
    payments = np.array([entry.payment for entry in schedule], dtype=np.float64)
    return np.concatenate(([principal], -payments))


def _npv(cashflows: NDArray[np.float64], monthly_rate: float) -> float:
    periods = np.arange(cashflows.size, dtype=np.float64)
    return float(np.sum(cashflows / np.power(1 + monthly_rate, periods)))


def solve_effective_annual_rate(
    schedule: Sequence[AmortizationEntry],
    principal: float,
    *,
    upper_bound: float = DEFAULT_UPPER_BOUND,
    iterations: int = DEFAULT_ITERATIONS,
) -> EffectiveRateResult:
    """
    Solve for the effective annual rate of a schedule.

    Args:
        schedule: Amortization entries, one per month
        principal: Amount originally disbursed
        upper_bound: Upper end of the monthly-rate search bracket
        iterations: Number of bisection steps

    Returns:
        EffectiveRateResult; ``converged`` is False and the rate is 0 when
        the root is not bracketed by ``[0, upper_bound]``

    Raises:
        InvalidInputError: If the schedule is empty or principal is not positive
    """
    if len(schedule) == 0:
        raise InvalidInputError("Schedule is empty")
    if principal <= 0:
        raise InvalidInputError("principal must be positive")

    cashflows = _cashflows(schedule, principal)

    lo, hi = 0.0, upper_bound
    npv_lo = _npv(cashflows, lo)
    npv_hi = _npv(cashflows, hi)

    if npv_lo * npv_hi > 0:
        logger.warning(
            f"Effective rate not bracketed by [0, {upper_bound}] "
            f"(NPV {npv_lo:.2f} / {npv_hi:.2f}); falling back to 0"
        )
        return EffectiveRateResult(annual_rate=0.0, monthly_rate=0.0, converged=False)

    for _ in range(iterations):
        mid = (lo + hi) / 2
        npv_mid = _npv(cashflows, mid)
        if npv_mid == 0:
            lo = hi = mid
            break
        if npv_mid * npv_lo > 0:
            lo = mid
        else:
            hi = mid

    monthly_rate = (lo + hi) / 2
    return EffectiveRateResult(
        annual_rate=(1 + monthly_rate) ** 12 - 1,
        monthly_rate=monthly_rate,
        converged=True,
    )


def compute_effective_annual_rate_from_schedule(
    schedule: Sequence[AmortizationEntry], principal: float
) -> float:
    """
    Effective annual rate of a schedule, or 0 if the search does not bracket a root.

    Use ``solve_effective_annual_rate`` to tell a genuine 0% loan apart from
    a failed search.
    """
    return solve_effective_annual_rate(schedule, principal).annual_rate
