"""
Typed configuration models using Pydantic.

Every tunable of the engine lives here: simulated latencies, epoch
counts, chart geometry and logging. Processing code never hardcodes them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ALGORITHM = "Random Forest"
DEFAULT_PARAMETERS: dict[str, Any] = {
    "max_depth": 10,
    "n_estimators": 100,
    "criterion": "gini",
}


class SimulationConfig(BaseModel):
    """Timing and randomness of the simulated training and prediction."""

    model_config = ConfigDict(frozen=True)

    n_epochs: int = Field(default=10, ge=1, description="Epochs per training run")
    epoch_delay_s: float = Field(
        default=0.5, ge=0.0, description="Simulated latency of one epoch"
    )
    prediction_delay_s: float = Field(
        default=0.8, ge=0.0, description="Simulated latency of one prediction"
    )
    random_state: int | None = Field(
        default=None, description="Seed for prediction jitter (None = fresh entropy)"
    )


class ChartConfig(BaseModel):
    """Pixel geometry shared by the chart transforms."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(default=600.0, gt=0)
    height: float = Field(default=300.0, gt=0)
    margin_top: float = Field(default=20.0, ge=0)
    margin_right: float = Field(default=30.0, ge=0)
    margin_bottom: float = Field(default=40.0, ge=0)
    margin_left: float = Field(default=60.0, ge=0)


class AnalyticsConfig(BaseModel):
    """Exploration transforms configuration."""

    model_config = ConfigDict(frozen=True)

    bin_count: int = Field(default=10, ge=1, description="Numeric histogram bins")
    top_features: int = Field(
        default=10, ge=1, description="Features shown in importance charts"
    )
    chart: ChartConfig = Field(default_factory=ChartConfig)


class DatasetConfig(BaseModel):
    """Built-in sample dataset configuration."""

    model_config = ConfigDict(frozen=True)

    load_sample: bool = Field(
        default=True, description="Register and select the loan sample on startup"
    )
    sample_rows: int = Field(default=1000, ge=0)
    sample_seed: int | None = Field(default=7)


class LoggingConfig(BaseModel):
    """Logging output configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is a standard logging level name."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            msg = f"Log level must be one of {sorted(valid)}, got: {v!r}"
            raise ValueError(msg)
        return v.upper()


class TrainingConfig(BaseModel):
    """Configuration of a single training run.

    Empty names and descriptions fall back to generated defaults when the
    model is built; ``parameters=None`` selects the Random Forest defaults.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_name: str | None = Field(default=None, description="Display name")
    description: str | None = Field(default=None)
    algorithm: str | None = Field(default=None)
    parameters: dict[str, Any] | None = Field(default=None)
    training_percentage: int = Field(
        default=80, ge=50, le=90, description="Share of rows used for training"
    )
    seed: int = Field(default=42, description="Seed for all simulated jitter")

    @property
    def test_percentage(self) -> int:
        """Share of rows held out for evaluation."""
        return 100 - self.training_percentage

    def resolved_algorithm(self) -> str:
        """Algorithm name with the default applied."""
        return self.algorithm or DEFAULT_ALGORITHM

    def resolved_parameters(self) -> dict[str, Any]:
        """Hyperparameters with the default applied (always a fresh dict)."""
        if self.parameters is None:
            return dict(DEFAULT_PARAMETERS)
        return dict(self.parameters)


class EngineConfig(BaseModel):
    """Complete engine configuration."""

    model_config = ConfigDict(frozen=True)

    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    datasets: DatasetConfig = Field(default_factory=DatasetConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
