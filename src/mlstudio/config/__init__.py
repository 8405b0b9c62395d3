"""
Configuration management with typed Pydantic models.

Provides the engine configuration, the per-run training configuration,
and YAML loading with environment variable interpolation.
"""

from mlstudio.config.loader import load_config, load_training_config
from mlstudio.config.settings import (
    DEFAULT_ALGORITHM,
    DEFAULT_PARAMETERS,
    AnalyticsConfig,
    ChartConfig,
    DatasetConfig,
    EngineConfig,
    LoggingConfig,
    SimulationConfig,
    TrainingConfig,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_PARAMETERS",
    "AnalyticsConfig",
    "ChartConfig",
    "DatasetConfig",
    "EngineConfig",
    "LoggingConfig",
    "SimulationConfig",
    "TrainingConfig",
    "load_config",
    "load_training_config",
]
