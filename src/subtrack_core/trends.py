"""Order-sensitive trend indicators over spending series.

Unlike the descriptive statistics, everything here depends on input order and
returns values in the order of the series.

Output lengths differ on purpose:
- moving_average and exponential_moving_average return one value per point
- momentum_index skips the warm-up window and returns len(series) - period
"""

import logging
import math

from . import descriptive
from .exceptions import InvalidSmoothingFactorError, InvalidWindowError
from .models import TrendDirection, TrendSummary

logger = logging.getLogger(__name__)

DEFAULT_MOMENTUM_PERIOD = 14
DEFAULT_OUTLIER_THRESHOLD = 2.5
DEFAULT_STABLE_THRESHOLD = 5.0  # percent

Series = descriptive.Sample


def moving_average(series: Series, window: int) -> list[float]:
    """
    Trailing moving average.

    Point i averages series[max(0, i - window + 1) : i + 1], so the first
    window - 1 points average over a shorter window. The output has the same
    length as the input.

    Raises:
        InvalidWindowError: If window < 1
    """
    if window < 1:
        raise InvalidWindowError(f"Window must be at least 1, got {window}")

    values = [float(x) for x in series]
    result = []
    for i in range(len(values)):
        start = max(0, i - window + 1)
        result.append(descriptive.mean(values[start : i + 1]))
    return result


def exponential_moving_average(series: Series, alpha: float) -> list[float]:
    """
    Exponential moving average seeded with the first point.

    ema[0] = series[0]
    ema[i] = alpha * series[i] + (1 - alpha) * ema[i - 1]

    Raises:
        InvalidSmoothingFactorError: If alpha is outside (0, 1]
    """
    if not 0 < alpha <= 1:
        raise InvalidSmoothingFactorError(
            f"Smoothing factor must be in (0, 1], got {alpha}"
        )

    result: list[float] = []
    for x in series:
        value = float(x)
        if not result:
            result.append(value)
        else:
            result.append(alpha * value + (1 - alpha) * result[-1])
    return result


def momentum_index(
    series: Series, period: int = DEFAULT_MOMENTUM_PERIOD
) -> list[float]:
    """
    RSI-style momentum index on a 0-100 scale.

    For each index i from period to len(series) - 1, averages the gains and
    losses of the `period` point-to-point changes ending at series[i]. When
    the average loss is zero the index is 100.

    Returns:
        len(series) - period values (empty if the series is not longer than
        the period)

    Raises:
        InvalidWindowError: If period < 1
    """
    if period < 1:
        raise InvalidWindowError(f"Period must be at least 1, got {period}")

    values = [float(x) for x in series]
    changes = [values[i] - values[i - 1] for i in range(1, len(values))]
    gains = [max(0.0, change) for change in changes]
    losses = [max(0.0, -change) for change in changes]

    result = []
    for i in range(period, len(values)):
        avg_gain = descriptive.mean(gains[i - period : i])
        avg_loss = descriptive.mean(losses[i - period : i])

        if avg_loss == 0:
            result.append(100.0)
        else:
            rs = avg_gain / avg_loss
            result.append(100 - 100 / (1 + rs))
    return result


def linear_slope(series: Series) -> float:
    """Least-squares slope of the series against its index; 0.0 below 2 points."""
    values = [float(x) for x in series]
    n = len(values)
    if n < 2:
        return 0.0

    xs = range(n)
    sum_x = math.fsum(xs)
    sum_y = math.fsum(values)
    sum_xy = math.fsum(x * y for x, y in zip(xs, values))
    sum_x2 = math.fsum(x * x for x in xs)

    return (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)


def analyze_trend(
    series: Series, stable_threshold: float = DEFAULT_STABLE_THRESHOLD
) -> TrendSummary:
    """
    Summarize the direction of a spending series.

    The slope is projected over the length of the series and expressed as a
    percentage of the series mean. Changes smaller than stable_threshold
    percent count as STABLE. The forecast extends the fitted line one step
    past the last point.

    Fewer than two points is always STABLE with the single value (or 0) as
    forecast.
    """
    values = [float(x) for x in series]
    if len(values) < 2:
        return TrendSummary(
            direction=TrendDirection.STABLE,
            slope=0.0,
            percentage_change=0.0,
            absolute_change=0.0,
            forecast=values[0] if values else 0.0,
        )

    n = len(values)
    slope = linear_slope(values)
    average = descriptive.mean(values)
    change = slope * n / average * 100 if average > 0 else 0.0

    if abs(change) < stable_threshold:
        direction = TrendDirection.STABLE
    elif change > 0:
        direction = TrendDirection.INCREASING
    else:
        direction = TrendDirection.DECREASING

    # Fitted line passes through (mean index, mean value)
    intercept = average - slope * (n - 1) / 2
    forecast = intercept + slope * n

    return TrendSummary(
        direction=direction,
        slope=slope,
        percentage_change=abs(change),
        absolute_change=values[-1] - values[0],
        forecast=forecast,
    )


def detect_outliers(
    series: Series, threshold: float = DEFAULT_OUTLIER_THRESHOLD
) -> list[int]:
    """
    Indexes of points more than `threshold` standard deviations from the mean.

    Uses the population standard deviation. A constant series has no outliers.
    """
    values = [float(x) for x in series]
    std = descriptive.standard_deviation(values)
    if std == 0:
        return []

    mu = descriptive.mean(values)
    outliers = [i for i, x in enumerate(values) if abs(x - mu) / std > threshold]
    if outliers:
        logger.debug(f"Found {len(outliers)} outliers beyond {threshold} std devs")
    return outliers
