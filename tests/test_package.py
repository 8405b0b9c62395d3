"""Basic package tests to verify installation."""


def test_package_imports() -> None:
    """Verify the main package can be imported."""
    import mlstudio

    assert mlstudio.__version__


def test_config_module_imports() -> None:
    """Verify config module structure is correct."""
    from mlstudio.config import (
        AnalyticsConfig,
        EngineConfig,
        LoggingConfig,
        SimulationConfig,
        TrainingConfig,
        load_config,
        load_training_config,
    )

    assert EngineConfig is not None
    assert SimulationConfig is not None
    assert AnalyticsConfig is not None
    assert LoggingConfig is not None
    assert TrainingConfig is not None
    assert load_config is not None
    assert load_training_config is not None


def test_layer_modules_import() -> None:
    """Verify each layer exposes its public names."""
    from mlstudio.analytics import histogram, linear_scale, rank_by_importance
    from mlstudio.data import DatasetRegistry, build_sample_dataset
    from mlstudio.evaluation import gini_coefficient, true_positive_rate
    from mlstudio.modeling import ModelRegistry, PredictionScorer, TrainingOrchestrator

    assert histogram is not None
    assert linear_scale is not None
    assert rank_by_importance is not None
    assert DatasetRegistry is not None
    assert build_sample_dataset is not None
    assert gini_coefficient is not None
    assert true_positive_rate is not None
    assert ModelRegistry is not None
    assert PredictionScorer is not None
    assert TrainingOrchestrator is not None
