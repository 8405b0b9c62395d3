"""
Rule-based loan approval scoring.

The active model only gates access; the score itself is an additive
rule set on top of a 0.5 base probability, plus seeded jitter.
"""

import asyncio
from dataclasses import dataclass
from typing import Literal

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from mlstudio.config.settings import SimulationConfig
from mlstudio.errors import NoActiveModelError
from mlstudio.modeling.models import Model, ModelRegistry
from mlstudio.utils.logging import get_logger

log = get_logger(__name__)

BASE_PROBABILITY = 0.5
DECISION_THRESHOLD = 0.5
PREDICTION_JITTER = 0.05


class PredictionInput(BaseModel):
    """Feature vector of one loan application."""

    model_config = ConfigDict(frozen=True)

    age: int = Field(default=35, ge=0)
    income: float = Field(default=80_000, ge=0, description="Annual income ($)")
    loan_amount: float = Field(default=30_000, ge=0)
    loan_term: int = Field(default=60, ge=0, description="Term in months")
    credit_score: int = Field(default=720, ge=0)
    employment_length: int = Field(default=8, ge=0, description="Years employed")
    home_ownership: str = Field(default="RENT")
    loan_purpose: str = Field(default="DEBT_CONSOLIDATION")
    debt_to_income: float = Field(default=0.25, ge=0)
    has_default: Literal["yes", "no"] = Field(default="no")


@dataclass(frozen=True)
class PredictionResult:
    """
    Approval decision.

    Attributes:
        approved: Whether probability exceeds 0.5.
        probability: Approval probability in [0, 1].
        confidence: Distance from the decision boundary, scaled to [0, 1].
    """

    approved: bool
    probability: float
    confidence: float

    @classmethod
    def from_probability(cls, probability: float) -> "PredictionResult":
        """Derive decision and confidence from a probability."""
        return cls(
            approved=probability > DECISION_THRESHOLD,
            probability=probability,
            confidence=abs(probability - DECISION_THRESHOLD) * 2,
        )


def rule_adjustment(application: PredictionInput) -> float:
    """
    Sum of the rule adjustments for an application.

    Credit score and income rules are each two-way exclusive.
    """
    adjustment = 0.0

    if application.credit_score > 700:
        adjustment += 0.2
    elif application.credit_score < 600:
        adjustment -= 0.2

    if application.income > 80_000:
        adjustment += 0.15
    elif application.income < 40_000:
        adjustment -= 0.15

    if application.loan_amount > 200_000:
        adjustment -= 0.1

    if application.debt_to_income > 0.4:
        adjustment -= 0.2

    if application.has_default == "yes":
        adjustment -= 0.25

    return adjustment


def score(application: PredictionInput, jitter: float = 0.0) -> PredictionResult:
    """
    Score an application.

    Args:
        application: Feature vector.
        jitter: Noise added before clamping to [0, 1].

    Returns:
        PredictionResult.
    """
    probability = BASE_PROBABILITY + rule_adjustment(application) + jitter
    probability = min(1.0, max(0.0, probability))
    return PredictionResult.from_probability(probability)


class PredictionScorer:
    """
    Scores applications against the active model.

    Jitter is drawn from the scorer's own Generator so a seeded scorer
    gives reproducible sequences of predictions.
    """

    def __init__(
        self,
        models: ModelRegistry,
        settings: SimulationConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.models = models
        self.settings = settings or SimulationConfig()
        self.rng = rng or np.random.default_rng(self.settings.random_state)

    def require_model(self) -> Model:
        """Return the active model or raise NoActiveModelError."""
        model = self.models.active()
        if model is None:
            raise NoActiveModelError()
        return model

    async def predict(self, application: PredictionInput) -> PredictionResult:
        """
        Score an application after the simulated latency.

        Raises:
            NoActiveModelError: If no model is active.
        """
        model = self.require_model()
        await asyncio.sleep(self.settings.prediction_delay_s)

        jitter = float(self.rng.uniform(-PREDICTION_JITTER, PREDICTION_JITTER))
        result = score(application, jitter)
        log.info(
            "Prediction made",
            model_id=model.id,
            approved=result.approved,
            probability=f"{result.probability:.3f}",
        )
        return result
