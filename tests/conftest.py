"""Pytest configuration and shared fixtures."""

from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from mlstudio.config.settings import DatasetConfig, EngineConfig, SimulationConfig
from mlstudio.data.datasets import Dataset, DatasetRegistry, Feature, FeatureType
from mlstudio.engine import Engine
from mlstudio.modeling.models import ModelRegistry


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fast_simulation() -> SimulationConfig:
    """Simulation settings without latency and with seeded predictions."""
    return SimulationConfig(epoch_delay_s=0.0, prediction_delay_s=0.0, random_state=7)


@pytest.fixture
def sample_rows() -> pd.DataFrame:
    """Small loan table with numeric, string-numeric and categorical columns."""
    return pd.DataFrame(
        {
            "id": ["a", "b", "c", "d", "e", "f"],
            "credit_score": [450, 500, 600, 650, 700, 800],
            "income": [30000, 45000, 60000, 80000, 120000, 150000],
            "debt_to_income": ["0.10", "0.20", "0.25", "0.40", "0.55", "0.60"],
            "home_ownership": ["RENT", "OWN", "RENT", "MORTGAGE", "OWN", "RENT"],
            "approved": [False, False, True, True, True, True],
        }
    )


@pytest.fixture
def sample_dataset(sample_rows: pd.DataFrame) -> Dataset:
    """Dataset wrapping sample_rows."""
    return Dataset.from_frame(
        dataset_id="loans-small",
        name="Small loans",
        rows=sample_rows,
        features=[
            Feature("credit_score", FeatureType.NUMERIC, 0.3),
            Feature("income", FeatureType.NUMERIC, 0.25),
            Feature("debt_to_income", FeatureType.NUMERIC, 0.18),
            Feature("home_ownership", FeatureType.CATEGORICAL, 0.08),
        ],
        target_column="approved",
        description="Fixture dataset",
        created_at=datetime(2024, 5, 1),
    )


@pytest.fixture
def dataset_registry(sample_dataset: Dataset) -> DatasetRegistry:
    """Registry with sample_dataset registered and selected."""
    registry = DatasetRegistry()
    registry.register(sample_dataset)
    registry.select(sample_dataset.id)
    return registry


@pytest.fixture
def model_registry() -> ModelRegistry:
    """Empty model registry."""
    return ModelRegistry()


@pytest.fixture
def engine(fast_simulation: SimulationConfig) -> Engine:
    """Engine with a small seeded sample dataset and no latency."""
    config = EngineConfig(
        simulation=fast_simulation,
        datasets=DatasetConfig(sample_rows=200, sample_seed=3),
    )
    return Engine(config)
