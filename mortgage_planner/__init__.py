"""Mortgage scenario engine: baseline, actual and what-if amortization paths."""

__version__ = "0.1.0"
