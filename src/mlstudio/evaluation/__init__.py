"""
Evaluation layer.

Metric records of trained models and the pure functions derived from a
confusion matrix.
"""

from mlstudio.evaluation.metrics import (
    ConfusionMatrix,
    EvaluationMetrics,
    cell_intensities,
    color_intensity,
    discrimination_label,
    false_positive_rate,
    gini_coefficient,
    summarize_metrics,
    true_positive_rate,
)

__all__ = [
    "ConfusionMatrix",
    "EvaluationMetrics",
    "cell_intensities",
    "color_intensity",
    "discrimination_label",
    "false_positive_rate",
    "gini_coefficient",
    "summarize_metrics",
    "true_positive_rate",
]
