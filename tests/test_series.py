"""Tests for series aggregation and correlation."""

from datetime import date, timedelta

import pytest

from gainsight.engine.insights_view import build_insights_view
from gainsight.engine.series import (
    aggregate_session_strength_by_date,
    align_series,
    correlate,
    interpret_correlation,
    normalize_series,
    pearson,
)
from gainsight.models.insights import AggregationMode, MetricPoint, SessionStrength


def daily(values, start=date(2024, 1, 1)):
    """One point per consecutive day starting at ``start``."""
    return [MetricPoint(date=start + timedelta(days=i), value=v) for i, v in enumerate(values)]


def score(day, exercise, value):
    return SessionStrength(
        date=day, exercise_name=exercise, session_strength=value, set_summary=""
    )


class TestAggregateSessionStrength:
    """Tests for aggregate_session_strength_by_date."""

    @pytest.fixture
    def same_day(self):
        return [
            score(date(2024, 1, 1), "Squat", 100),
            score(date(2024, 1, 1), "Bench Press", 50),
        ]

    def test_sum(self, same_day):
        """Test sum mode adds every exercise on the date."""
        points = aggregate_session_strength_by_date(same_day, AggregationMode.SUM)
        assert points == [MetricPoint(date=date(2024, 1, 1), value=150)]

    def test_max(self, same_day):
        """Test max mode keeps the peak exercise."""
        points = aggregate_session_strength_by_date(same_day, AggregationMode.MAX)
        assert points == [MetricPoint(date=date(2024, 1, 1), value=100)]

    def test_average(self, same_day):
        """Test average mode takes the mean."""
        points = aggregate_session_strength_by_date(same_day, AggregationMode.AVERAGE)
        assert points == [MetricPoint(date=date(2024, 1, 1), value=75)]

    def test_mode_accepts_string_value(self, same_day):
        """Test the enum value string selects the same mode."""
        points = aggregate_session_strength_by_date(same_day, "max")
        assert points[0].value == 100

    def test_sorted_without_synthesized_dates(self):
        """Test output is ascending and only has dates present in the input."""
        scores = [
            score(date(2024, 1, 10), "Squat", 120),
            score(date(2024, 1, 1), "Squat", 100),
            score(date(2024, 1, 5), "Squat", 110),
        ]
        points = aggregate_session_strength_by_date(scores, AggregationMode.SUM)
        assert [p.date for p in points] == [
            date(2024, 1, 1),
            date(2024, 1, 5),
            date(2024, 1, 10),
        ]

    def test_empty(self):
        """Test no scores give no points."""
        assert aggregate_session_strength_by_date([], AggregationMode.SUM) == []


class TestNormalizeSeries:
    """Tests for normalize_series."""

    def test_sorts_and_folds_duplicates(self):
        """Test duplicate dates are combined and the result is sorted."""
        points = [
            MetricPoint(date=date(2024, 1, 3), value=80),
            MetricPoint(date=date(2024, 1, 1), value=81),
            MetricPoint(date=date(2024, 1, 3), value=82),
        ]
        result = normalize_series(points)
        assert result == [
            MetricPoint(date=date(2024, 1, 1), value=81),
            MetricPoint(date=date(2024, 1, 3), value=81),
        ]

    def test_null_readings_are_skipped(self):
        """Test nulls do not drag a duplicate date's value."""
        points = [
            MetricPoint(date=date(2024, 1, 1), value=None),
            MetricPoint(date=date(2024, 1, 1), value=2000),
            MetricPoint(date=date(2024, 1, 2), value=None),
        ]
        result = normalize_series(points, AggregationMode.SUM)
        assert result == [
            MetricPoint(date=date(2024, 1, 1), value=2000),
            MetricPoint(date=date(2024, 1, 2), value=None),
        ]


class TestAlignSeries:
    """Tests for align_series."""

    def test_inner_join_on_non_null_dates(self):
        """Test only dates with a value on both sides are kept."""
        a = daily([1, 2, None, 4])
        b = daily([10, None, 30, 40, 50])
        pairs = align_series(a, b)
        assert pairs == [
            (date(2024, 1, 1), 1, 10),
            (date(2024, 1, 4), 4, 40),
        ]


class TestCorrelate:
    """Tests for the correlation primitive."""

    def test_below_minimum_overlap_is_null(self):
        """Test fewer than five paired days never produce a number."""
        result = correlate(daily([1, 2, 3, 4]), daily([2, 4, 6, 8]), label="a vs b")

        assert result.value is None
        assert result.overlap_days == 4
        assert result.label == "a vs b"
        assert "Not enough data" in result.interpretation

    def test_overlap_counts_only_non_null_pairs(self):
        """Test null readings are not counted as overlap."""
        a = daily([1, 2, 3, 4, 5, 6])
        b = daily([1, None, 3, None, 5, 6])
        result = correlate(a, b)

        assert result.overlap_days == 4
        assert result.value is None

    def test_identical_series(self):
        """Test a series correlates perfectly with itself."""
        series = daily([80, 81, 79, 82, 83, 80])
        result = correlate(series, list(series))

        assert result.value == pytest.approx(1.0)
        assert result.overlap_days == 6
        assert result.interpretation == "Strong positive relationship"

    def test_perfect_negative(self):
        """Test an inverted series correlates at -1."""
        result = correlate(daily([1, 2, 3, 4, 5]), daily([5, 4, 3, 2, 1]))

        assert result.value == pytest.approx(-1.0)
        assert result.interpretation == "Strong negative relationship"

    def test_value_within_bounds(self):
        """Test the coefficient never leaves [-1, 1]."""
        a = daily([0.1 * i for i in range(10)])
        result = correlate(a, a)
        assert -1.0 <= result.value <= 1.0

    def test_symmetric(self):
        """Test swapping arguments gives the same value."""
        a = daily([180, 179.5, 181, 178, 177.5, 179, 176])
        b = daily([2500, 2300, 2700, 2100, 2000, 2400, 1900])

        assert correlate(a, b).value == correlate(b, a).value
        assert correlate(a, b).overlap_days == correlate(b, a).overlap_days

    def test_constant_series_is_undefined(self):
        """Test zero variance gives no value instead of dividing by zero."""
        result = correlate(daily([2000] * 6), daily([1, 2, 3, 4, 5, 6]))

        assert result.value is None
        assert result.overlap_days == 6
        assert "constant" in result.interpretation

    def test_empty_series(self):
        """Test empty input is insufficient data, not an error."""
        result = correlate([], [])
        assert result.value is None
        assert result.overlap_days == 0

    def test_non_finite_readings_are_dropped(self):
        """Test NaN and infinite readings never produce a coefficient."""
        a = daily([1, 2, 3, float("nan"), 5, 6, float("inf")])
        b = daily([6, 5, 4, 3, 2, 1, 0])
        result = correlate(a, b)

        assert result.overlap_days == 5
        assert result.value < -0.9
        assert result.interpretation == "Strong negative relationship"

    def test_large_values_do_not_overflow(self):
        """Test huge finite readings still correlate without raising."""
        a = daily([1e160 * i for i in range(1, 7)])
        b = daily([2000 + 100 * i for i in range(6)])
        result = correlate(a, b)

        assert result.value == pytest.approx(1.0)

    def test_large_values_in_view(self):
        """Test the view builder handles huge readings."""
        view = build_insights_view(
            daily([1e160 * i for i in range(1, 7)]),
            daily([2000 + 100 * i for i in range(6)]),
            [],
        )
        assert view.correlations[0].value == pytest.approx(1.0)


class TestPearson:
    """Tests for the raw coefficient."""

    def test_nan_is_not_a_coefficient(self):
        """Test a NaN input gives None rather than a clamped number."""
        assert pearson([1, 2, float("nan"), 4, 5], [5, 4, 3, 2, 1]) is None

    def test_constant(self):
        assert pearson([3, 3, 3], [1, 2, 3]) is None


class TestInterpretCorrelation:
    """Tests for interpretation bands."""

    def test_bands(self):
        """Test the fixed strong/moderate/weak thresholds."""
        assert interpret_correlation(0.6) == "Strong positive relationship"
        assert interpret_correlation(-0.45) == "Moderate negative relationship"
        assert interpret_correlation(0.3) == "Moderate positive relationship"
        assert interpret_correlation(0.1) == "Weak positive relationship"
        assert interpret_correlation(0.0) == "No linear relationship"


class TestSparseOverlapScenario:
    """Bodyweight and strength logged on only three shared days."""

    def test_bodyweight_strength_correlation_is_null(self):
        """Test the payload reports no value and three overlap days."""
        bodyweight = [
            MetricPoint(date=date(2024, 1, 1), value=180),
            MetricPoint(date=date(2024, 1, 8), value=179),
            MetricPoint(date=date(2024, 1, 15), value=178),
        ]
        strength = [
            MetricPoint(date=date(2024, 1, 1), value=1000),
            MetricPoint(date=date(2024, 1, 8), value=1050),
            MetricPoint(date=date(2024, 1, 15), value=1100),
        ]
        view = build_insights_view(bodyweight, [], strength)

        result = next(c for c in view.correlations if c.label == "Bodyweight vs. strength")
        assert result.value is None
        assert result.overlap_days == 3
