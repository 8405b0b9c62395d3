"""
Data schemas for tabular inputs.

Pandera models describing the expected structure of dataset rows.
"""

from mlstudio.schemas.loan import (
    DEFAULT_OPTIONS,
    HOME_OWNERSHIP_OPTIONS,
    LOAN_PURPOSE_OPTIONS,
    LOAN_TERMS,
    LoanApplicationSchema,
)

__all__ = [
    "DEFAULT_OPTIONS",
    "HOME_OWNERSHIP_OPTIONS",
    "LOAN_PURPOSE_OPTIONS",
    "LOAN_TERMS",
    "LoanApplicationSchema",
]
