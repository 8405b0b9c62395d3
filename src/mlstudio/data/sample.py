"""
Built-in loan approval sample dataset.

Generates synthetic loan applications with a rule-based approval label.
Risky applications are approved 30% of the time, all others 80%.
"""

import numpy as np
import pandas as pd

from mlstudio.data.datasets import Dataset, Feature, FeatureType
from mlstudio.schemas.loan import (
    DEFAULT_OPTIONS,
    HOME_OWNERSHIP_OPTIONS,
    LOAN_PURPOSE_OPTIONS,
    LOAN_TERMS,
    LoanApplicationSchema,
)
from mlstudio.utils.logging import get_logger

log = get_logger(__name__)

SAMPLE_DATASET_ID = "default-dataset"
SAMPLE_TARGET_COLUMN = "approved"

LOAN_FEATURES: tuple[Feature, ...] = (
    Feature("age", FeatureType.NUMERIC, 0.15),
    Feature("income", FeatureType.NUMERIC, 0.25),
    Feature("loan_amount", FeatureType.NUMERIC, 0.2),
    Feature("loan_term", FeatureType.NUMERIC, 0.1),
    Feature("credit_score", FeatureType.NUMERIC, 0.3),
    Feature("employment_length", FeatureType.NUMERIC, 0.12),
    Feature("home_ownership", FeatureType.CATEGORICAL, 0.08),
    Feature("loan_purpose", FeatureType.CATEGORICAL, 0.05),
    Feature("debt_to_income", FeatureType.NUMERIC, 0.18),
    Feature("has_default", FeatureType.CATEGORICAL, 0.07),
)


def _is_high_risk(frame: pd.DataFrame) -> pd.Series:
    """Flag applications matching any of the rejection risk rules."""
    return (
        (frame["credit_score"] < 600)
        | (frame["debt_to_income"] > 0.45)
        | (frame["has_default"] == "yes")
        | ((frame["loan_amount"] > 40_000) & (frame["income"] < 80_000))
        | (
            (frame["age"] < 30)
            & (frame["loan_amount"] > 30_000)
            & (frame["employment_length"] < 5)
        )
    )


def generate_loan_data(
    n_rows: int = 1000,
    rng: np.random.Generator | None = None,
) -> pd.DataFrame:
    """
    Generate synthetic loan applications.

    Args:
        n_rows: Number of applications.
        rng: Random source. A fresh unseeded Generator if None.

    Returns:
        DataFrame conforming to LoanApplicationSchema.
    """
    if rng is None:
        rng = np.random.default_rng()

    frame = pd.DataFrame(
        {
            "id": [f"loan-{i + 1}" for i in range(n_rows)],
            "age": rng.integers(25, 65, size=n_rows),
            "income": rng.integers(30_000, 180_000, size=n_rows),
            "loan_amount": rng.integers(5_000, 55_000, size=n_rows),
            "loan_term": rng.choice(LOAN_TERMS, size=n_rows),
            "credit_score": rng.integers(450, 800, size=n_rows),
            "employment_length": rng.integers(1, 16, size=n_rows),
            "home_ownership": rng.choice(HOME_OWNERSHIP_OPTIONS, size=n_rows),
            "loan_purpose": rng.choice(LOAN_PURPOSE_OPTIONS, size=n_rows),
            "debt_to_income": np.round(rng.uniform(0.1, 0.6, size=n_rows), 2),
            "has_default": rng.choice(DEFAULT_OPTIONS, size=n_rows),
        }
    )

    approval_threshold = np.where(_is_high_risk(frame), 0.7, 0.2)
    frame["approved"] = rng.random(size=n_rows) > approval_threshold

    validated = LoanApplicationSchema.validate(frame)
    log.debug(
        "Generated loan data",
        n_rows=n_rows,
        approval_rate=float(validated["approved"].mean()) if n_rows else 0.0,
    )
    return validated


def build_sample_dataset(
    n_rows: int = 1000,
    seed: int | None = None,
) -> Dataset:
    """Build the default loan approval dataset."""
    rows = generate_loan_data(n_rows, np.random.default_rng(seed))
    return Dataset.from_frame(
        dataset_id=SAMPLE_DATASET_ID,
        name="Loan Approval Dataset",
        description="Default dataset for loan approval prediction",
        rows=rows,
        features=list(LOAN_FEATURES),
        target_column=SAMPLE_TARGET_COLUMN,
    )
