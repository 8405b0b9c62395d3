"""
Evaluation metrics for binary classifiers.

Provides the confusion matrix and metric records produced by training
runs, and the pure functions derived from them: true/false positive
rates, Gini coefficient and the cell intensities of the matrix view.
"""

from dataclasses import dataclass

from mlstudio.errors import DegenerateDomainError
from mlstudio.utils.logging import get_logger

log = get_logger(__name__)

# AUC above this is reported as excellent discrimination
EXCELLENT_AUC_THRESHOLD = 0.9

MIN_INTENSITY = 0.1
MAX_INTENSITY = 0.9


@dataclass(frozen=True)
class ConfusionMatrix:
    """
    Counts of a binary classifier's outcomes.

    Attributes:
        true_positives: Positives predicted as positive.
        false_positives: Negatives predicted as positive.
        true_negatives: Negatives predicted as negative.
        false_negatives: Positives predicted as negative.
    """

    true_positives: int
    false_positives: int
    true_negatives: int
    false_negatives: int

    def __post_init__(self) -> None:
        for name in (
            "true_positives",
            "false_positives",
            "true_negatives",
            "false_negatives",
        ):
            if getattr(self, name) < 0:
                msg = f"{name} must be >= 0, got {getattr(self, name)}"
                raise ValueError(msg)

    @property
    def total(self) -> int:
        """Number of classified samples."""
        return (
            self.true_positives
            + self.false_positives
            + self.true_negatives
            + self.false_negatives
        )

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary."""
        return {
            "true_positives": self.true_positives,
            "false_positives": self.false_positives,
            "true_negatives": self.true_negatives,
            "false_negatives": self.false_negatives,
        }


@dataclass(frozen=True)
class EvaluationMetrics:
    """
    Classification metrics of a trained model.

    Attributes:
        accuracy: Share of correct predictions.
        precision: Share of predicted positives that are positive.
        recall: Share of positives that were found.
        f1_score: Harmonic mean of precision and recall.
        auc: Area under the ROC curve.
        confusion_matrix: Outcome counts on the held-out rows.
    """

    accuracy: float
    precision: float
    recall: float
    f1_score: float
    auc: float
    confusion_matrix: ConfusionMatrix

    def to_dict(self) -> dict[str, float | dict[str, int]]:
        """Convert to dictionary."""
        return {
            "accuracy": self.accuracy,
            "precision": self.precision,
            "recall": self.recall,
            "f1_score": self.f1_score,
            "auc": self.auc,
            "confusion_matrix": self.confusion_matrix.to_dict(),
        }

    def __str__(self) -> str:
        """String representation."""
        return (
            f"Acc={self.accuracy:.1%}, Prec={self.precision:.1%}, "
            f"Rec={self.recall:.1%}, F1={self.f1_score:.1%}, AUC={self.auc:.3f}"
        )


def true_positive_rate(matrix: ConfusionMatrix) -> float:
    """Sensitivity ``tp / (tp + fn)``, 0 when there are no positives."""
    denominator = matrix.true_positives + matrix.false_negatives
    if denominator == 0:
        return 0.0
    return matrix.true_positives / denominator


def false_positive_rate(matrix: ConfusionMatrix) -> float:
    """Fall-out ``fp / (fp + tn)``, 0 when there are no negatives."""
    denominator = matrix.false_positives + matrix.true_negatives
    if denominator == 0:
        return 0.0
    return matrix.false_positives / denominator


def gini_coefficient(auc: float) -> float:
    """Gini coefficient ``2 * auc - 1``."""
    return 2 * auc - 1


def discrimination_label(auc: float) -> str:
    """Qualitative rating of an AUC: 'excellent' above 0.9, else 'good'."""
    return "excellent" if auc > EXCELLENT_AUC_THRESHOLD else "good"


def color_intensity(value: float, max_value: float) -> float:
    """
    Normalize a value into ``[0.1, 0.9]`` for intensity-weighted display.

    Formula: min(0.9, value / max_value * 0.8 + 0.1)

    Raises:
        DegenerateDomainError: If ``max_value`` is zero.
    """
    if max_value == 0:
        raise DegenerateDomainError(0.0, max_value)
    return min(MAX_INTENSITY, value / max_value * 0.8 + MIN_INTENSITY)


def cell_intensities(matrix: ConfusionMatrix) -> dict[str, float]:
    """
    Display intensity of each confusion-matrix cell.

    Cells are normalized against half the total count. An all-zero matrix
    renders every cell at the minimum intensity.
    """
    cells = matrix.to_dict()
    half_total = matrix.total * 0.5
    if half_total == 0:
        return {name: MIN_INTENSITY for name in cells}
    return {name: color_intensity(count, half_total) for name, count in cells.items()}


def summarize_metrics(metrics: EvaluationMetrics) -> dict[str, float | str]:
    """
    Flatten metrics and their derived rates for reports.

    Returns:
        Scalar metrics plus tpr, fpr, gini and discrimination.
    """
    matrix = metrics.confusion_matrix
    summary: dict[str, float | str] = {
        "accuracy": metrics.accuracy,
        "precision": metrics.precision,
        "recall": metrics.recall,
        "f1_score": metrics.f1_score,
        "auc": metrics.auc,
        "tpr": true_positive_rate(matrix),
        "fpr": false_positive_rate(matrix),
        "gini": gini_coefficient(metrics.auc),
        "discrimination": discrimination_label(metrics.auc),
    }
    log.debug("Summarized metrics", **summary)
    return summary
