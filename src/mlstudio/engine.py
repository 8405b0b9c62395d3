"""
Engine facade.

Wires the dataset registry, model registry, training orchestrator and
prediction scorer together. Callers create an Engine and pass it
around explicitly; there is no module-level instance.
"""

from dataclasses import dataclass

from mlstudio.analytics.charts import ChartFrame
from mlstudio.analytics.transform import Histogram, histogram, rank_by_importance
from mlstudio.config.settings import EngineConfig, TrainingConfig
from mlstudio.data.datasets import Dataset, DatasetRegistry, Feature
from mlstudio.data.sample import build_sample_dataset
from mlstudio.evaluation.metrics import EvaluationMetrics
from mlstudio.modeling.inference import PredictionInput, PredictionResult, PredictionScorer
from mlstudio.modeling.models import Model, ModelRegistry
from mlstudio.modeling.training import TrainingOrchestrator, TrainingResult
from mlstudio.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class EngineSummary:
    """Dashboard counters."""

    n_datasets: int
    n_models: int
    active_dataset_id: str | None
    active_model_id: str | None
    is_training: bool
    accuracy: float | None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary."""
        return {
            "n_datasets": self.n_datasets,
            "n_models": self.n_models,
            "active_dataset_id": self.active_dataset_id,
            "active_model_id": self.active_model_id,
            "is_training": self.is_training,
            "accuracy": self.accuracy,
        }


class Engine:
    """
    In-memory analytics and simulation engine.

    Attributes:
        config: Engine configuration.
        datasets: Dataset registry.
        models: Model registry.
        trainer: Training orchestrator.
        scorer: Prediction scorer.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        """
        Initialize engine.

        Registers and selects the loan sample dataset unless disabled in
        ``config.datasets``.

        Args:
            config: Engine configuration (defaults if None).
        """
        self.config = config or EngineConfig()
        self.datasets = DatasetRegistry()
        self.models = ModelRegistry()
        self.trainer = TrainingOrchestrator(
            self.datasets, self.models, self.config.simulation
        )
        self.scorer = PredictionScorer(self.models, self.config.simulation)

        if self.config.datasets.load_sample:
            sample = build_sample_dataset(
                n_rows=self.config.datasets.sample_rows,
                seed=self.config.datasets.sample_seed,
            )
            self.datasets.register(sample)
            self.datasets.select(sample.id)

    # Datasets

    def add_dataset(self, dataset: Dataset, *, select: bool = False) -> Dataset:
        """Register a dataset, optionally making it active."""
        self.datasets.register(dataset)
        if select:
            self.datasets.select(dataset.id)
        return dataset

    def select_dataset(self, dataset_id: str) -> Dataset:
        """Make a dataset active."""
        return self.datasets.select(dataset_id)

    def feature_importance(self, limit: int | None = None) -> list[Feature]:
        """Active dataset's features ranked by importance."""
        return rank_by_importance(self.datasets.active_features(), limit)

    def histogram(self, feature_name: str) -> Histogram:
        """Histogram of a feature of the active dataset."""
        return histogram(
            self.datasets.active(),
            feature_name,
            bin_count=self.config.analytics.bin_count,
        )

    @property
    def chart_frame(self) -> ChartFrame:
        """Chart geometry from the configuration."""
        return ChartFrame.from_config(self.config.analytics.chart)

    # Training and evaluation

    async def train(self, config: TrainingConfig | None = None) -> TrainingResult:
        """Run a simulated training on the active dataset."""
        return await self.trainer.start(config or TrainingConfig())

    @property
    def evaluation_metrics(self) -> EvaluationMetrics | None:
        """Metrics of the active model."""
        return self.trainer.current_metrics

    # Models and prediction

    def activate_model(self, model_id: str) -> Model:
        """Make a model active."""
        return self.models.activate(model_id)

    def archive_model(self, model_id: str) -> Model:
        """Archive a model."""
        return self.models.archive(model_id)

    async def predict(self, application: PredictionInput) -> PredictionResult:
        """Score an application with the active model."""
        return await self.scorer.predict(application)

    def summary(self) -> EngineSummary:
        """Counters for a dashboard view."""
        active_model = self.models.active()
        metrics = self.evaluation_metrics
        return EngineSummary(
            n_datasets=len(self.datasets),
            n_models=len(self.models),
            active_dataset_id=(
                self.datasets.active().id if self.datasets.has_active else None
            ),
            active_model_id=active_model.id if active_model else None,
            is_training=self.trainer.is_training,
            accuracy=metrics.accuracy if metrics else None,
        )
