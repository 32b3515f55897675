"""
Scenario service for running mortgage scenario requests.

This service is the boundary between JSON-like payloads (from a UI or a
persistence layer) and the pure scenario engine: it validates the payload,
passes the configured solver settings to the engine explicitly, logs the run
and returns JSON-ready output.
"""

import logging
from typing import Any, Dict, Optional

from mortgage_planner.config import Settings, get_global_settings
from mortgage_planner.models.loan import MortgageComparisonRequest
from mortgage_planner.models.mortgage_amortization import (
    compare_baseline_with_prepayments,
)
from mortgage_planner.models.scenario import MortgageScenarioRequest
from mortgage_planner.models.scenario_runner import run_mortgage_scenarios

logger = logging.getLogger(__name__)


class MortgageScenarioService:
    """Service for validating and running mortgage scenario requests."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize the scenario service.

        Args:
            settings: Settings providing solver parameters (defaults to global settings)
        """
        self.settings = settings or get_global_settings()
        self.logger = logging.getLogger(__name__)

    def run(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Run all scenarios in a request payload.

        Args:
            payload: Dictionary with ``context`` and ``scenarios`` keys

        Returns:
            JSON-ready dictionary of the run result

        Raises:
            pydantic.ValidationError: If the payload is malformed
            MortgageEngineError: If the engine cannot produce a schedule
        """
        request = MortgageScenarioRequest.model_validate(payload)
        active = [s.id for s in request.scenarios if s.active]

        try:
            self.logger.info(
                f"Running {len(active)} active scenario(s) as of "
                f"{request.context.as_of_date}"
            )
            result = run_mortgage_scenarios(
                request.context,
                request.scenarios,
                rate_upper_bound=self.settings.rate_search_upper_bound,
                rate_iterations=self.settings.rate_bisection_iterations,
            )
            self.logger.info(
                f"Completed scenario run; actual payoff {result.actual.payoff_date}"
            )
            return result.model_dump(mode="json")

        except Exception as e:
            self.logger.error(f"Scenario run failed: {str(e)}")
            raise

    def compare(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Compare the baseline with the path including past prepayments.

        Args:
            payload: Dictionary with ``terms`` and ``past_prepayments`` keys

        Returns:
            JSON-ready dictionary of the comparison
        """
        request = MortgageComparisonRequest.model_validate(payload)

        try:
            comparison = compare_baseline_with_prepayments(
                request.terms, request.past_prepayments
            )
            self.logger.info(
                f"Prepayments save {comparison.interest_saved:.2f} interest "
                f"and {comparison.months_saved} month(s)"
            )
            return comparison.model_dump(mode="json")

        except Exception as e:
            self.logger.error(f"Comparison failed: {str(e)}")
            raise
