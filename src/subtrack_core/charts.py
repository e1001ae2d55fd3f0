"""Proportional segments and scaling for pie, bar and line charts.

Zero totals are valid here: they produce zero-width segments or minimum-height
bars, never a division error.
"""

from collections.abc import Sequence

from .descriptive import Sample
from .models import ChartBounds, DistributionSegment

FULL_CIRCLE = 360.0


def _segments(values: Sample, span: float) -> list[DistributionSegment]:
    numbers = [float(v) for v in values]
    total = sum(numbers)

    segments = []
    cursor = 0.0
    for value in numbers:
        pct = value / total * 100 if total > 0 else 0.0
        width = pct / 100 * span
        segments.append(
            DistributionSegment(
                value=value, percentage=pct, start=cursor, end=cursor + width
            )
        )
        cursor += width
    return segments


def pie_segments(values: Sample) -> list[DistributionSegment]:
    """
    Percentage and start/end angle of each pie slice.

    Angles accumulate in input order from 0 to 360 degrees.
    """
    return _segments(values, FULL_CIRCLE)


def stacked_bar_segments(
    values: Sample, total_width: float
) -> list[DistributionSegment]:
    """Percentage and start/end offset of each piece of a stacked bar."""
    return _segments(values, total_width)


def bar_heights(
    values: Sample, max_height: float, min_bar_height: float = 0.0
) -> list[float]:
    """
    Bar heights proportional to the largest value.

    Every bar is at least min_bar_height tall. When the largest value is not
    positive (e.g. all zeros) every bar gets min_bar_height.
    """
    numbers = [float(v) for v in values]
    if not numbers:
        return []

    max_value = max(numbers)
    if max_value <= 0:
        return [min_bar_height for _ in numbers]

    return [max(min_bar_height, value / max_value * max_height) for value in numbers]


def chart_bounds(
    values: Sequence[float],
    height: float,
    padding_top: float = 0.0,
    padding_bottom: float = 0.0,
) -> ChartBounds:
    """Vertical bounds and pixels-per-unit scale for a line chart."""
    numbers = [float(v) for v in values]
    if not numbers:
        return ChartBounds(min=0.0, max=0.0, scale=1.0)

    low = min(numbers)
    high = max(numbers)
    spread = high - low
    available = height - padding_top - padding_bottom

    return ChartBounds(
        min=low, max=high, scale=1.0 if spread == 0 else available / spread
    )
