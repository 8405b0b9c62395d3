"""
Simulated model training.

Runs an epoch-based training simulation against the active dataset.
Loss and accuracy follow fixed curves with seeded jitter, and the final
evaluation metrics are baseline values with seeded jitter. Only one run
may be in flight at a time.
"""

import asyncio
import time
import uuid
from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import numpy as np

from mlstudio.config.settings import SimulationConfig, TrainingConfig
from mlstudio.data.datasets import Dataset, DatasetRegistry
from mlstudio.errors import TrainingAlreadyInProgressError
from mlstudio.evaluation.metrics import ConfusionMatrix, EvaluationMetrics
from mlstudio.modeling.models import Model, ModelRegistry, ModelStatus
from mlstudio.utils.logging import get_logger, log_context

log = get_logger(__name__)

DEFAULT_DESCRIPTION = "Trained model for loan approval prediction"
DEFAULT_VERSION = "1.0"

# Loss curve: INITIAL_LOSS * LOSS_DECAY**epoch + U[0, LOSS_JITTER)
INITIAL_LOSS = 0.5
LOSS_DECAY = 0.85
LOSS_JITTER = 0.05

# Accuracy curve: BASE + GAIN * epoch / n_epochs + U[-JITTER, JITTER)
BASE_ACCURACY = 0.7
ACCURACY_GAIN = 0.2
ACCURACY_JITTER = 0.025

# Final metrics: name -> (baseline, jitter half-width)
METRIC_BASELINES: dict[str, tuple[float, float]] = {
    "accuracy": (0.89, 0.02),
    "precision": (0.87, 0.025),
    "recall": (0.85, 0.03),
    "f1_score": (0.86, 0.025),
    "auc": (0.91, 0.015),
}

# Confusion matrix: cell -> (baseline, exclusive upper bound of the jitter)
CONFUSION_BASELINES: dict[str, tuple[int, int]] = {
    "true_positives": (430, 20),
    "false_positives": (60, 15),
    "true_negatives": (440, 20),
    "false_negatives": (70, 15),
}


class TrainingState(str, Enum):
    """State of the training orchestrator."""

    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class TrainingStep:
    """
    Loss and accuracy observed after one epoch.

    Attributes:
        epoch: 1-based epoch number.
        loss: Training loss (>= 0).
        accuracy: Training accuracy in [0, 1].
    """

    epoch: int
    loss: float
    accuracy: float

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return {"epoch": self.epoch, "loss": self.loss, "accuracy": self.accuracy}


@dataclass(frozen=True)
class TrainingResult:
    """
    Outcome of a completed training run.

    Attributes:
        model: The registered, now active model.
        metrics: Evaluation metrics of the model.
        history: All steps of the run in epoch order.
        duration_s: Wall-clock duration of the run.
    """

    model: Model
    metrics: EvaluationMetrics
    history: tuple[TrainingStep, ...]
    duration_s: float


def simulate_step(epoch: int, n_epochs: int, rng: np.random.Generator) -> TrainingStep:
    """Draw the loss and accuracy of one epoch."""
    loss = INITIAL_LOSS * LOSS_DECAY**epoch + rng.uniform(0.0, LOSS_JITTER)
    accuracy = (
        BASE_ACCURACY
        + ACCURACY_GAIN * (epoch / n_epochs)
        + rng.uniform(-ACCURACY_JITTER, ACCURACY_JITTER)
    )
    return TrainingStep(epoch=epoch, loss=float(loss), accuracy=float(accuracy))


def simulate_metrics(rng: np.random.Generator) -> EvaluationMetrics:
    """Draw end-of-run evaluation metrics around their baselines."""
    scalars = {
        name: float(base + rng.uniform(-half_width, half_width))
        for name, (base, half_width) in METRIC_BASELINES.items()
    }
    cells = {
        name: int(base + rng.integers(0, spread))
        for name, (base, spread) in CONFUSION_BASELINES.items()
    }
    return EvaluationMetrics(**scalars, confusion_matrix=ConfusionMatrix(**cells))


class TrainingOrchestrator:
    """
    Drives simulated training runs.

    State machine IDLE -> RUNNING -> IDLE. The orchestrator owns the step
    history of the latest run and the evaluation metrics of every model it
    trained. History is reset when a new run starts.
    """

    def __init__(
        self,
        datasets: DatasetRegistry,
        models: ModelRegistry,
        settings: SimulationConfig | None = None,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            datasets: Registry providing the active dataset.
            models: Registry receiving trained models.
            settings: Epoch count and simulated latency.
        """
        self.datasets = datasets
        self.models = models
        self.settings = settings or SimulationConfig()
        self._state = TrainingState.IDLE
        self._history: list[TrainingStep] = []
        self._metrics: dict[str, EvaluationMetrics] = {}
        self._subscribers: list[asyncio.Queue[TrainingStep | None]] = []

    @property
    def state(self) -> TrainingState:
        """Current state."""
        return self._state

    @property
    def is_training(self) -> bool:
        """Whether a run is in flight."""
        return self._state is TrainingState.RUNNING

    @property
    def history(self) -> tuple[TrainingStep, ...]:
        """Snapshot of the current (or last) run's steps."""
        return tuple(self._history)

    @property
    def current_metrics(self) -> EvaluationMetrics | None:
        """Metrics of the active model, if it was trained here."""
        active = self.models.active()
        if active is None:
            return None
        return self._metrics.get(active.id)

    def metrics_for(self, model_id: str) -> EvaluationMetrics | None:
        """Metrics recorded for a model, or None."""
        return self._metrics.get(model_id)

    async def start(self, config: TrainingConfig) -> TrainingResult:
        """
        Run one simulated training to completion.

        Args:
            config: Run configuration; ``config.seed`` seeds all jitter.

        Returns:
            TrainingResult with the new active model and its metrics.

        Raises:
            TrainingAlreadyInProgressError: If another run is in flight.
            NoActiveDatasetError: If no dataset is selected.
        """
        # No await before the state flip: a second start() sees RUNNING
        if self._state is TrainingState.RUNNING:
            raise TrainingAlreadyInProgressError()
        dataset = self.datasets.active()

        self._state = TrainingState.RUNNING
        self._history = []
        rng = np.random.default_rng(config.seed)
        run_id = f"run-{uuid.uuid4().hex[:8]}"
        started = time.perf_counter()

        try:
            with log_context(run_id=run_id, dataset_id=dataset.id):
                log.info(
                    "Starting training",
                    algorithm=config.resolved_algorithm(),
                    n_epochs=self.settings.n_epochs,
                    training_percentage=config.training_percentage,
                    seed=config.seed,
                )
                await self._run_epochs(rng)

                model = self._build_model(config, dataset)
                metrics = simulate_metrics(rng)
                self._commit(model, metrics)

                duration_s = time.perf_counter() - started
                log.info(
                    "Training complete",
                    model_id=model.id,
                    accuracy=f"{metrics.accuracy:.4f}",
                    auc=f"{metrics.auc:.4f}",
                    duration_s=f"{duration_s:.2f}",
                )
        finally:
            self._state = TrainingState.IDLE
            self._publish(None)

        return TrainingResult(
            model=model,
            metrics=metrics,
            history=self.history,
            duration_s=duration_s,
        )

    async def _run_epochs(self, rng: np.random.Generator) -> None:
        """Simulate each epoch after its latency and publish the step."""
        n_epochs = self.settings.n_epochs
        for epoch in range(1, n_epochs + 1):
            await asyncio.sleep(self.settings.epoch_delay_s)
            step = simulate_step(epoch, n_epochs, rng)
            self._history.append(step)
            self._publish(step)
            log.debug("Epoch complete", **step.to_dict())

    def _build_model(self, config: TrainingConfig, dataset: Dataset) -> Model:
        """Create the model record for a finished run."""
        return Model(
            id=f"model-{uuid.uuid4().hex[:12]}",
            name=config.model_name or f"Model {len(self.models) + 1}",
            description=config.description or DEFAULT_DESCRIPTION,
            algorithm=config.resolved_algorithm(),
            created_at=datetime.now(),
            dataset_id=dataset.id,
            parameters=config.resolved_parameters(),
            version=DEFAULT_VERSION,
            status=ModelStatus.ACTIVE,
        )

    def _commit(self, model: Model, metrics: EvaluationMetrics) -> None:
        """Store metrics, register and activate the model without yielding."""
        self._metrics[model.id] = metrics
        self.models.register(model)
        self.models.activate(model.id)

    def _publish(self, step: TrainingStep | None) -> None:
        """Push a step (or the end-of-run marker) to every watcher."""
        for queue in self._subscribers:
            queue.put_nowait(step)

    async def watch(self) -> AsyncIterator[TrainingStep]:
        """
        Iterate over the steps of the current run.

        Yields the steps already recorded, then each new step as it is
        produced, and stops when the run ends. When no run is in flight
        only the recorded history is yielded.
        """
        queue: asyncio.Queue[TrainingStep | None] = asyncio.Queue()
        recorded = list(self._history)
        live = self.is_training
        if live:
            self._subscribers.append(queue)

        try:
            for step in recorded:
                yield step
            if not live:
                return
            while True:
                step = await queue.get()
                if step is None:
                    return
                yield step
        finally:
            if queue in self._subscribers:
                self._subscribers.remove(queue)
