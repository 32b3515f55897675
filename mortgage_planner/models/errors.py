"""
Exceptions raised by the mortgage scenario engine.

Every failure aborts the whole computation for that call; the engine never
returns a partially-filled schedule.
"""


class MortgageEngineError(Exception):
    """Base exception for mortgage engine errors."""


class InvalidInputError(MortgageEngineError, ValueError):
    """Raised for caller bugs such as a non-positive principal or term."""


class NegativeAmortizationError(MortgageEngineError):
    """Raised when the payment does not cover the interest accruing on the balance."""


class ConvergenceError(MortgageEngineError):
    """Raised when a forward simulation exhausts its step budget without payoff."""
