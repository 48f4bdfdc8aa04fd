"""Deterministic climate risk zone engine."""

__version__ = "0.1.0"
