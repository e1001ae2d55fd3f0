"""Descriptive statistics over spending samples.

Every function accepts any finite sequence of numbers and returns floats. An
empty sample yields a zero sentinel (0.0, or [] for mode) instead of raising.
Sums go through math.fsum, which is correctly rounded, so order-independent
statistics do not change when the sample is shuffled.

Variance is the population variance (divisor n).
"""

import math
from collections import Counter
from collections.abc import Sequence
from decimal import Decimal

from .exceptions import InvalidPercentileError, MismatchedLengthError
from .models import SampleStatistics

Sample = Sequence[float | Decimal]


def _floats(sample: Sample) -> list[float]:
    return [float(x) for x in sample]


def mean(sample: Sample) -> float:
    """Arithmetic mean; 0.0 for an empty sample."""
    values = _floats(sample)
    if not values:
        return 0.0
    return math.fsum(values) / len(values)


def median(sample: Sample) -> float:
    """Middle value, or the average of the middle pair for even-length samples."""
    values = sorted(_floats(sample))
    n = len(values)
    if n == 0:
        return 0.0

    mid = n // 2
    if n % 2 == 0:
        return (values[mid - 1] + values[mid]) / 2
    return values[mid]


def mode(sample: Sample) -> list[float]:
    """All values tied for the highest frequency, ascending. [] when empty."""
    counts = Counter(_floats(sample))
    if not counts:
        return []
    top = max(counts.values())
    return sorted(value for value, count in counts.items() if count == top)


def value_range(sample: Sample) -> float:
    """max - min; 0.0 for an empty sample."""
    values = _floats(sample)
    if not values:
        return 0.0
    return max(values) - min(values)


def variance(sample: Sample) -> float:
    """Population variance (divisor n); 0.0 for an empty sample."""
    values = _floats(sample)
    if not values:
        return 0.0
    mu = mean(values)
    return math.fsum((x - mu) ** 2 for x in values) / len(values)


def standard_deviation(sample: Sample) -> float:
    """Square root of the population variance."""
    return math.sqrt(variance(sample))


def percentile(sample: Sample, p: float) -> float:
    """
    Percentile with linear interpolation between order statistics.

    The rank is p/100 * (n - 1), so percentile 0 is the minimum and
    percentile 100 the maximum.

    Args:
        sample: Observations in any order
        p: Percentile in [0, 100]

    Returns:
        Interpolated value; 0.0 for an empty sample

    Raises:
        InvalidPercentileError: If p is outside [0, 100]
    """
    if not 0 <= p <= 100:
        raise InvalidPercentileError(f"Percentile must be between 0 and 100, got {p}")

    values = sorted(_floats(sample))
    if not values:
        return 0.0

    rank = (p / 100) * (len(values) - 1)
    lower = math.floor(rank)
    upper = math.ceil(rank)
    weight = rank - lower

    if lower == upper:
        return values[lower]
    return values[lower] * (1 - weight) + values[upper] * weight


def correlation(x: Sample, y: Sample) -> float:
    """
    Pearson correlation coefficient.

    Returns 0.0 when either series has zero variance (including empty series).

    Raises:
        MismatchedLengthError: If x and y differ in length
    """
    if len(x) != len(y):
        raise MismatchedLengthError(
            f"Series must have the same length, got {len(x)} and {len(y)}"
        )

    xs = _floats(x)
    ys = _floats(y)
    if not xs:
        return 0.0

    mean_x = mean(xs)
    mean_y = mean(ys)
    dx = [v - mean_x for v in xs]
    dy = [v - mean_y for v in ys]

    numerator = math.fsum(a * b for a, b in zip(dx, dy))
    denom_x = math.fsum(a * a for a in dx)
    denom_y = math.fsum(b * b for b in dy)

    if denom_x == 0 or denom_y == 0:
        return 0.0
    return numerator / math.sqrt(denom_x * denom_y)


def weighted_average(values: Sample, weights: Sample) -> float:
    """
    Average of values weighted by weights; 0.0 when the weights sum to zero.

    Raises:
        MismatchedLengthError: If values and weights differ in length
    """
    if len(values) != len(weights):
        raise MismatchedLengthError(
            f"Values and weights must have the same length, "
            f"got {len(values)} and {len(weights)}"
        )

    total_weight = math.fsum(_floats(weights))
    if total_weight == 0:
        return 0.0
    weighted_sum = math.fsum(float(v) * float(w) for v, w in zip(values, weights))
    return weighted_sum / total_weight


def percentage_change(old: float, new: float) -> float:
    """
    Relative change from old to new, in percent.

    From a zero baseline any increase counts as 100% and anything else as 0.
    """
    if old == 0:
        return 100.0 if new > 0 else 0.0
    return (float(new) - float(old)) / float(old) * 100


def summarize(sample: Sample) -> SampleStatistics:
    """Every descriptive statistic for a sample; min and max are 0.0 when empty."""
    values = _floats(sample)
    return SampleStatistics(
        mean=mean(values),
        median=median(values),
        mode=mode(values),
        range=value_range(values),
        variance=variance(values),
        standard_deviation=standard_deviation(values),
        min=min(values) if values else 0.0,
        max=max(values) if values else 0.0,
        sum=math.fsum(values),
        count=len(values),
    )
