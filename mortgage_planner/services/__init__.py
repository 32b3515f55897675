"""Services wrapping the mortgage scenario engine."""

from .scenario_service import MortgageScenarioService

__all__ = ["MortgageScenarioService"]
