"""
Exploration transforms over datasets.

Pure functions: feature-importance ranking, histogram binning for
categorical and numeric features, and linear scaling between a data
domain and a display range.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from mlstudio.data.datasets import Dataset, Feature, FeatureType
from mlstudio.errors import DegenerateDomainError, UnknownFeatureError
from mlstudio.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_BIN_COUNT = 10
MISSING_LABEL = "missing"


def rank_by_importance(
    features: Iterable[Feature],
    limit: int | None = None,
) -> list[Feature]:
    """
    Sort features by descending importance.

    The sort is stable, so features with equal importance keep their
    input order.

    Args:
        features: Features to rank.
        limit: Keep only the top ``limit`` features.

    Returns:
        Ranked features.
    """
    ranked = sorted(features, key=lambda f: f.importance, reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked


def importance_pairs(
    features: Iterable[Feature],
    limit: int | None = None,
) -> list[tuple[str, float]]:
    """Ranked ``(name, importance)`` pairs for bar charts."""
    return [(f.name, f.importance) for f in rank_by_importance(features, limit)]


@dataclass(frozen=True)
class HistogramBucket:
    """One histogram bar: a category or a ``lo-hi`` range, and its count."""

    label: str
    count: int


@dataclass(frozen=True)
class Histogram:
    """
    Binned distribution of one feature.

    Attributes:
        feature: Feature name.
        kind: Feature type the binning was chosen for.
        buckets: Ordered buckets. Empty when there is nothing to show.
        bin_width: Width of numeric bins (None for categorical).
    """

    feature: str
    kind: FeatureType
    buckets: tuple[HistogramBucket, ...] = field(default_factory=tuple)
    bin_width: float | None = None

    @property
    def has_data(self) -> bool:
        """False when the histogram should render as a placeholder."""
        return len(self.buckets) > 0

    @property
    def total(self) -> int:
        """Sum of all bucket counts."""
        return sum(b.count for b in self.buckets)

    def pairs(self) -> list[tuple[str, int]]:
        """Buckets as ``(label, count)`` pairs."""
        return [(b.label, b.count) for b in self.buckets]


def _categorical_buckets(values: pd.Series) -> tuple[HistogramBucket, ...]:
    """Count occurrences per category in first-seen order, missing included."""
    labels = values.astype(str).where(values.notna(), MISSING_LABEL)
    counts = labels.value_counts()
    return tuple(HistogramBucket(cat, int(counts[cat])) for cat in labels.unique())


def _numeric_buckets(
    values: np.ndarray,
    bin_count: int,
) -> tuple[tuple[HistogramBucket, ...], float]:
    """Equal-width bins between min and max, max landing in the last bin."""
    lo = float(values.min())
    hi = float(values.max())
    # Halved so hi - lo cannot overflow for finite extremes
    half_span = hi / 2 - lo / 2
    bin_width = 2 * (half_span / bin_count)

    if half_span == 0:
        # Single-valued feature: everything goes into the first bin
        indices = np.zeros(len(values), dtype=int)
    else:
        fraction = (values / 2 - lo / 2) / half_span
        indices = np.floor(fraction * bin_count).astype(int)
        indices = np.clip(indices, 0, bin_count - 1)

    counts = np.bincount(indices, minlength=bin_count)
    edges = [2 * (lo / 2 + half_span * i / bin_count) for i in range(bin_count + 1)]
    buckets = tuple(
        HistogramBucket(f"{edges[i]:.1f}-{edges[i + 1]:.1f}", int(counts[i]))
        for i in range(bin_count)
    )
    return buckets, bin_width


def histogram(
    dataset: Dataset,
    feature_name: str,
    bin_count: int = DEFAULT_BIN_COUNT,
) -> Histogram:
    """
    Bin one feature of a dataset.

    Categorical features are counted per distinct value, with missing
    values counted under ``"missing"``, so the counts sum to the row
    count. Numeric features are split into ``bin_count`` equal-width bins
    between their minimum and maximum. Numeric strings are coerced; only
    finite parsed values are binned, so missing, unparseable and infinite
    values are left out of the total.

    Args:
        dataset: Dataset to read rows from.
        feature_name: Declared feature to bin.
        bin_count: Number of numeric bins.

    Returns:
        Histogram, empty when the dataset has no values for the feature.

    Raises:
        UnknownFeatureError: If the feature is not declared on the dataset.
    """
    feature = dataset.feature(feature_name)
    if feature is None:
        raise UnknownFeatureError(feature_name, dataset.id)

    if feature_name not in dataset.rows.columns or dataset.rows.empty:
        log.debug("No data for histogram", feature=feature_name)
        return Histogram(feature=feature_name, kind=feature.type)

    column = dataset.rows[feature_name]

    if feature.type == FeatureType.CATEGORICAL:
        buckets = _categorical_buckets(column)
        return Histogram(feature=feature_name, kind=feature.type, buckets=buckets)

    values = pd.to_numeric(column, errors="coerce").dropna().to_numpy(dtype=float)
    values = values[np.isfinite(values)]
    if len(values) == 0:
        log.debug("No numeric values for histogram", feature=feature_name)
        return Histogram(feature=feature_name, kind=feature.type)

    buckets, bin_width = _numeric_buckets(values, bin_count)
    return Histogram(
        feature=feature_name,
        kind=feature.type,
        buckets=buckets,
        bin_width=bin_width,
    )


def linear_scale(
    domain_min: float,
    domain_max: float,
    range_min: float,
    range_max: float,
    value: float,
) -> float:
    """
    Map ``value`` from the data domain onto the display range.

    Raises:
        DegenerateDomainError: If ``domain_min == domain_max``.
    """
    if domain_max == domain_min:
        raise DegenerateDomainError(domain_min, domain_max)
    fraction = (value - domain_min) / (domain_max - domain_min)
    return range_min + fraction * (range_max - range_min)


@dataclass(frozen=True)
class LinearScale:
    """
    Reusable domain-to-range mapping for chart axes.

    A zero-width domain yields a constant scale that maps every value to
    the middle of the range.
    """

    domain_min: float
    domain_max: float
    range_min: float
    range_max: float

    @classmethod
    def fit(
        cls,
        values: Iterable[float],
        range_min: float,
        range_max: float,
    ) -> "LinearScale":
        """Scale whose domain spans the min and max of ``values``."""
        data = np.asarray(list(values), dtype=float)
        if data.size == 0:
            return cls(0.0, 0.0, range_min, range_max)
        return cls(float(data.min()), float(data.max()), range_min, range_max)

    @property
    def is_degenerate(self) -> bool:
        """Whether the domain has zero width."""
        return self.domain_max == self.domain_min

    def __call__(self, value: float) -> float:
        if self.is_degenerate:
            return (self.range_min + self.range_max) / 2
        return linear_scale(
            self.domain_min,
            self.domain_max,
            self.range_min,
            self.range_max,
            value,
        )
