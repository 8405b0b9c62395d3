"""Tests for the rule-based prediction scorer."""

import asyncio
from datetime import datetime

import numpy as np
import pytest
from pydantic import ValidationError

from mlstudio.config.settings import SimulationConfig
from mlstudio.errors import NoActiveModelError
from mlstudio.modeling.inference import (
    PredictionInput,
    PredictionResult,
    PredictionScorer,
    rule_adjustment,
    score,
)
from mlstudio.modeling.models import Model, ModelRegistry


@pytest.fixture
def active_registry(model_registry: ModelRegistry) -> ModelRegistry:
    """Registry with one active model."""
    model_registry.register(
        Model(
            id="model-1",
            name="Model 1",
            description="",
            algorithm="Random Forest",
            created_at=datetime(2024, 5, 1),
            dataset_id="default-dataset",
        )
    )
    model_registry.activate("model-1")
    return model_registry


class TestPredictionInput:
    """Tests for input validation."""

    def test_form_defaults(self) -> None:
        """Test the default application."""
        application = PredictionInput()
        assert application.credit_score == 720
        assert application.income == 80_000
        assert application.has_default == "no"

    def test_invalid_default_flag(self) -> None:
        """Test that has_default only accepts yes/no."""
        with pytest.raises(ValidationError):
            PredictionInput(has_default="maybe")

    def test_negative_income(self) -> None:
        """Test that negative amounts are rejected."""
        with pytest.raises(ValidationError):
            PredictionInput(income=-1)


class TestRules:
    """Tests for the additive rules."""

    @pytest.mark.parametrize(
        ("changes", "expected"),
        [
            ({}, 0.2),
            ({"credit_score": 700}, 0.0),
            ({"credit_score": 650}, 0.0),
            ({"credit_score": 600}, 0.0),
            ({"credit_score": 599}, -0.2),
            ({"income": 80_001}, 0.35),
            ({"income": 40_000}, 0.2),
            ({"income": 39_999}, 0.05),
            ({"loan_amount": 200_000}, 0.2),
            ({"loan_amount": 200_001}, 0.1),
            ({"debt_to_income": 0.4}, 0.2),
            ({"debt_to_income": 0.41}, 0.0),
            ({"has_default": "yes"}, -0.05),
        ],
    )
    def test_single_rule(self, changes: dict, expected: float) -> None:
        """Test each threshold with strict comparisons."""
        application = PredictionInput(**changes)
        assert rule_adjustment(application) == pytest.approx(expected)

    def test_all_negative_rules_clamp_to_zero(self) -> None:
        """Test the lower clamp."""
        application = PredictionInput(
            credit_score=550,
            income=30_000,
            loan_amount=250_000,
            debt_to_income=0.5,
            has_default="yes",
        )
        result = score(application, jitter=-0.05)
        assert result.probability == 0.0
        assert not result.approved
        assert result.confidence == 1.0

    def test_best_case(self) -> None:
        """Test the most favourable application."""
        application = PredictionInput(credit_score=780, income=120_000)
        result = score(application, jitter=0.0)
        assert result.probability == pytest.approx(0.85)
        assert result.confidence == pytest.approx(0.7)

    @pytest.mark.parametrize("jitter", [-0.05, -0.02, 0.0, 0.03, 0.0499])
    def test_default_application_approved_for_any_jitter(self, jitter: float) -> None:
        """Test that 0.70 +/- 0.05 is always approved."""
        application = PredictionInput(
            credit_score=720,
            income=80_000,
            loan_amount=30_000,
            debt_to_income=0.25,
            has_default="no",
        )
        result = score(application, jitter)
        assert result.probability == pytest.approx(0.7 + jitter)
        assert result.approved

    def test_boundary_is_not_approved(self) -> None:
        """Test that exactly 0.5 is a rejection with zero confidence."""
        result = PredictionResult.from_probability(0.5)
        assert not result.approved
        assert result.confidence == 0.0


class TestPredictionScorer:
    """Tests for the async scorer."""

    def test_no_active_model(self, model_registry: ModelRegistry) -> None:
        """Test that predicting without an active model fails."""
        scorer = PredictionScorer(model_registry, SimulationConfig(prediction_delay_s=0))
        with pytest.raises(NoActiveModelError):
            asyncio.run(scorer.predict(PredictionInput()))

    def test_predict(
        self, active_registry: ModelRegistry, fast_simulation: SimulationConfig
    ) -> None:
        """Test a prediction stays within the jitter band."""
        scorer = PredictionScorer(active_registry, fast_simulation)
        result = asyncio.run(scorer.predict(PredictionInput()))

        assert result.approved
        assert result.probability == pytest.approx(0.7, abs=0.05)
        assert result.confidence == pytest.approx(abs(result.probability - 0.5) * 2)

    def test_seeded_scorers_agree(self, active_registry: ModelRegistry) -> None:
        """Test that equal seeds give equal prediction sequences."""
        settings = SimulationConfig(prediction_delay_s=0)

        async def run(seed: int) -> list[float]:
            scorer = PredictionScorer(
                active_registry, settings, rng=np.random.default_rng(seed)
            )
            return [(await scorer.predict(PredictionInput())).probability for _ in range(5)]

        assert asyncio.run(run(3)) == asyncio.run(run(3))
        assert asyncio.run(run(3)) != asyncio.run(run(4))
