"""Dated series aggregation and the pairwise correlation primitive."""

import math
from collections import defaultdict
from collections.abc import Callable
from datetime import date

from .. import config
from ..models.insights import (
    AggregationMode,
    CorrelationResult,
    MetricPoint,
    SessionStrength,
)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


AGGREGATORS: dict[AggregationMode, Callable[[list[float]], float]] = {
    AggregationMode.SUM: sum,
    AggregationMode.MAX: max,
    AggregationMode.AVERAGE: _mean,
}


def aggregate_session_strength_by_date(
    scores: list[SessionStrength],
    mode: AggregationMode = config.STRENGTH_AGGREGATION_MODE,
) -> list[MetricPoint]:
    """Combine per-exercise session scores into one strength value per date.

    Args:
        scores: Session scores, any order, any number of exercises per date
        mode: How scores on the same date are combined

    Returns:
        One point per date present in the input, sorted ascending. Dates
        without sessions are not emitted.
    """
    combine = AGGREGATORS[AggregationMode(mode)]

    by_date: dict[date, list[float]] = defaultdict(list)
    for score in scores:
        by_date[score.date].append(score.session_strength)

    return [
        MetricPoint(date=day, value=float(combine(values)))
        for day, values in sorted(by_date.items())
    ]


def normalize_series(
    points: list[MetricPoint],
    mode: AggregationMode = AggregationMode.AVERAGE,
) -> list[MetricPoint]:
    """Sort a series ascending and fold duplicate dates into one point.

    Non-null readings on the same date are combined with ``mode``. A date
    whose readings are all null is kept as a single null point.
    """
    combine = AGGREGATORS[AggregationMode(mode)]

    by_date: dict[date, list[float]] = {}
    for point in points:
        values = by_date.setdefault(point.date, [])
        if point.value is not None and math.isfinite(point.value):
            values.append(float(point.value))

    return [
        MetricPoint(date=day, value=float(combine(values)) if values else None)
        for day, values in sorted(by_date.items())
    ]


def _is_reading(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def align_series(
    series_a: list[MetricPoint],
    series_b: list[MetricPoint],
) -> list[tuple[date, float, float]]:
    """Inner-join two series on exact date, keeping only dates where both have a finite value."""
    values_b = {p.date: p.value for p in series_b if _is_reading(p.value)}
    pairs = []
    for point in series_a:
        if not _is_reading(point.value) or point.date not in values_b:
            continue
        pairs.append((point.date, point.value, values_b[point.date]))
    return sorted(pairs, key=lambda p: p[0])


def pearson(xs: list[float], ys: list[float]) -> float | None:
    """Pearson product-moment correlation.

    Returns None when either side is constant or the coefficient cannot be
    represented as a finite number.
    """
    if len(set(xs)) < 2 or len(set(ys)) < 2:
        return None

    # Scale into [-1, 1] so squaring large readings cannot overflow
    scale_x = max(abs(x) for x in xs)
    scale_y = max(abs(y) for y in ys)
    if not (math.isfinite(scale_x) and math.isfinite(scale_y)):
        return None
    xs = [x / scale_x for x in xs]
    ys = [y / scale_y for y in ys]

    n = len(xs)
    mean_x = sum(xs) / n
    mean_y = sum(ys) / n

    cov = sum((x - mean_x) * (y - mean_y) for x, y in zip(xs, ys))
    var_x = sum((x - mean_x) ** 2 for x in xs)
    var_y = sum((y - mean_y) ** 2 for y in ys)

    if var_x == 0 or var_y == 0:
        return None

    r = cov / math.sqrt(var_x * var_y)
    if not math.isfinite(r):
        return None
    return max(-1.0, min(1.0, r))


def interpret_correlation(r: float) -> str:
    """Classify a coefficient by sign and magnitude.

    |r| >= STRONG_CORRELATION is strong, >= MODERATE_CORRELATION moderate,
    anything else weak.
    """
    magnitude = abs(r)
    if magnitude >= config.STRONG_CORRELATION:
        strength = "Strong"
    elif magnitude >= config.MODERATE_CORRELATION:
        strength = "Moderate"
    else:
        strength = "Weak"

    if r > 0:
        direction = "positive"
    elif r < 0:
        direction = "negative"
    else:
        return "No linear relationship"

    return f"{strength} {direction} relationship"


def correlate(
    series_a: list[MetricPoint],
    series_b: list[MetricPoint],
    label: str = "",
) -> CorrelationResult:
    """Correlate two dated series on the dates they share.

    Fewer than MIN_OVERLAP_DAYS paired readings never produce a number:
    ``value`` is None and the interpretation says why.
    """
    pairs = align_series(series_a, series_b)
    overlap = len(pairs)

    if overlap < config.MIN_OVERLAP_DAYS:
        return CorrelationResult(
            label=label,
            value=None,
            interpretation=(
                f"Not enough data: {overlap} overlapping "
                f"{'day' if overlap == 1 else 'days'} "
                f"(need at least {config.MIN_OVERLAP_DAYS})"
            ),
            overlap_days=overlap,
        )

    r = pearson([a for _, a, _ in pairs], [b for _, _, b in pairs])
    if r is None:
        return CorrelationResult(
            label=label,
            value=None,
            interpretation="Undefined: one of the series is constant over the overlapping days",
            overlap_days=overlap,
        )

    return CorrelationResult(
        label=label,
        value=r,
        interpretation=interpret_correlation(r),
        overlap_days=overlap,
    )
