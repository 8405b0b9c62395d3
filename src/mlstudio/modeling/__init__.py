"""
Modeling layer for training and inference.

Provides the model registry, the simulated training orchestrator and
the rule-based prediction scorer.
"""

from mlstudio.modeling.inference import (
    PredictionInput,
    PredictionResult,
    PredictionScorer,
    score,
)
from mlstudio.modeling.models import Model, ModelRegistry, ModelStatus
from mlstudio.modeling.training import (
    TrainingOrchestrator,
    TrainingResult,
    TrainingState,
    TrainingStep,
)

__all__ = [
    "Model",
    "ModelRegistry",
    "ModelStatus",
    "PredictionInput",
    "PredictionResult",
    "PredictionScorer",
    "TrainingOrchestrator",
    "TrainingResult",
    "TrainingState",
    "TrainingStep",
    "score",
]
