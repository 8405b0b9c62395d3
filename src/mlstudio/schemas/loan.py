"""
Pandera schemas for loan application tables.

Used to check the generated sample dataset before it is registered.
"""

import pandera.pandas as pa
from pandera.typing import Series

HOME_OWNERSHIP_OPTIONS = ["RENT", "MORTGAGE", "OWN"]
LOAN_PURPOSE_OPTIONS = [
    "DEBT_CONSOLIDATION",
    "CREDIT_CARD",
    "HOME_IMPROVEMENT",
    "MAJOR_PURCHASE",
    "MEDICAL",
    "EDUCATION",
]
DEFAULT_OPTIONS = ["yes", "no"]
LOAN_TERMS = [36, 60, 120]


class LoanApplicationSchema(pa.DataFrameModel):
    """
    Schema for loan application rows.

    One row per application, with the approval decision as target.
    """

    id: Series[str] = pa.Field(unique=True, description="Application identifier")
    age: Series[int] = pa.Field(ge=18, le=100)
    income: Series[int] = pa.Field(ge=0, description="Annual income in dollars")
    loan_amount: Series[int] = pa.Field(ge=0)
    loan_term: Series[int] = pa.Field(isin=LOAN_TERMS, description="Term in months")
    credit_score: Series[int] = pa.Field(ge=300, le=850)
    employment_length: Series[int] = pa.Field(ge=0, description="Years employed")
    home_ownership: Series[str] = pa.Field(isin=HOME_OWNERSHIP_OPTIONS)
    loan_purpose: Series[str] = pa.Field(isin=LOAN_PURPOSE_OPTIONS)
    debt_to_income: Series[float] = pa.Field(ge=0.0, le=1.0)
    has_default: Series[str] = pa.Field(isin=DEFAULT_OPTIONS)
    approved: Series[bool]

    class Config:
        """Schema configuration."""

        name = "LoanApplicationSchema"
        strict = False
        coerce = True
