"""
Chart geometry for line and bar charts.

Turns ``(x, y)`` data points into pixel coordinates inside a chart frame
with margins. Rendering itself is left to the caller.
"""

import numbers
from collections.abc import Sequence
from dataclasses import dataclass

from mlstudio.analytics.transform import LinearScale
from mlstudio.config.settings import ChartConfig

Point = tuple[float | str, float]

Y_TICK_FRACTIONS = (0.0, 0.25, 0.5, 0.75, 1.0)


@dataclass(frozen=True)
class ChartFrame:
    """Outer size and margins of a chart, in pixels."""

    width: float = 600.0
    height: float = 300.0
    margin_top: float = 20.0
    margin_right: float = 30.0
    margin_bottom: float = 40.0
    margin_left: float = 60.0

    @classmethod
    def from_config(cls, config: ChartConfig) -> "ChartFrame":
        """Build a frame from the chart section of the engine config."""
        return cls(**config.model_dump())

    @property
    def chart_width(self) -> float:
        """Plot area width."""
        return self.width - self.margin_left - self.margin_right

    @property
    def chart_height(self) -> float:
        """Plot area height."""
        return self.height - self.margin_top - self.margin_bottom

    @property
    def baseline(self) -> float:
        """Pixel y of the x-axis."""
        return self.margin_top + self.chart_height


@dataclass(frozen=True)
class Bar:
    """A bar rectangle with its category label."""

    label: str
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class AxisTick:
    """Y-axis tick position and the data value it represents."""

    y: float
    value: float


def _x_values(points: Sequence[Point]) -> list[float]:
    # Categorical x positions fall back to the point index
    return [
        float(x) if isinstance(x, numbers.Real) else float(i)
        for i, (x, _) in enumerate(points)
    ]


def line_chart_points(
    points: Sequence[Point],
    frame: ChartFrame | None = None,
) -> list[tuple[float, float]]:
    """
    Pixel coordinates of a line chart's vertices.

    The x domain spans the data's x values, the y domain its y values;
    y is inverted so larger values sit higher.

    Returns:
        One ``(px, py)`` pair per point, empty when there are no points.
    """
    if not points:
        return []
    frame = frame or ChartFrame()

    xs = _x_values(points)
    ys = [float(y) for _, y in points]
    x_scale = LinearScale.fit(xs, frame.margin_left, frame.margin_left + frame.chart_width)
    y_scale = LinearScale.fit(ys, frame.baseline, frame.margin_top)

    return [(x_scale(x), y_scale(y)) for x, y in zip(xs, ys, strict=True)]


def svg_path(coordinates: Sequence[tuple[float, float]]) -> str:
    """SVG path data joining the coordinates with straight segments."""
    return " ".join(
        f"{'M' if i == 0 else 'L'} {x} {y}" for i, (x, y) in enumerate(coordinates)
    )


def bar_chart_geometry(
    points: Sequence[Point],
    frame: ChartFrame | None = None,
) -> list[Bar]:
    """
    Bar rectangles for a bar chart.

    Bars take two thirds of each slot, with half a bar width of spacing.
    Heights are proportional to the largest y value.

    Returns:
        One Bar per point, empty when there are no points.
    """
    if not points:
        return []
    frame = frame or ChartFrame()

    y_max = max(float(y) for _, y in points)
    bar_width = frame.chart_width / len(points) / 1.5
    spacing = bar_width / 2

    bars = []
    for i, (label, y) in enumerate(points):
        height = float(y) / y_max * frame.chart_height if y_max > 0 else 0.0
        bars.append(
            Bar(
                label=str(label),
                x=frame.margin_left + i * (bar_width + spacing) + spacing,
                y=frame.baseline - height,
                width=bar_width,
                height=height,
            )
        )
    return bars


def y_axis_ticks(y_max: float, frame: ChartFrame | None = None) -> list[AxisTick]:
    """Ticks at 0, 25, 50, 75 and 100 percent of ``y_max``."""
    frame = frame or ChartFrame()
    return [
        AxisTick(y=frame.baseline - frame.chart_height * fraction, value=y_max * fraction)
        for fraction in Y_TICK_FRACTIONS
    ]
