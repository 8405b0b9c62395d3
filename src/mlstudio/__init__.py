"""
mlstudio: in-memory model lifecycle simulator.

This package provides a dataset registry, analytics transforms,
simulated training runs, evaluation metrics, and a rule-based
prediction scorer for the loan approval demo.
"""

from importlib.metadata import version

__version__ = version("mlstudio")

__all__ = ["__version__"]
