"""
Analytics transforms for data exploration and charts.

Pure, stateless functions used by the engine and by renderers.
"""

from mlstudio.analytics.charts import (
    AxisTick,
    Bar,
    ChartFrame,
    bar_chart_geometry,
    line_chart_points,
    svg_path,
    y_axis_ticks,
)
from mlstudio.analytics.transform import (
    DEFAULT_BIN_COUNT,
    Histogram,
    HistogramBucket,
    LinearScale,
    histogram,
    importance_pairs,
    linear_scale,
    rank_by_importance,
)

__all__ = [
    "DEFAULT_BIN_COUNT",
    "AxisTick",
    "Bar",
    "ChartFrame",
    "Histogram",
    "HistogramBucket",
    "LinearScale",
    "bar_chart_geometry",
    "histogram",
    "importance_pairs",
    "line_chart_points",
    "linear_scale",
    "rank_by_importance",
    "svg_path",
    "y_axis_ticks",
]
