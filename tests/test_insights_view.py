"""Tests for the insights view builder."""

from datetime import date, timedelta

from gainsight.engine.insights_view import build_insights_view
from gainsight.models.insights import MetricPoint, SessionStrength


def daily(values, start=date(2024, 3, 1)):
    return [MetricPoint(date=start + timedelta(days=i), value=v) for i, v in enumerate(values)]


def on(days: dict[date, float]) -> list[MetricPoint]:
    return [MetricPoint(date=d, value=v) for d, v in days.items()]


def labels(view) -> list[str]:
    return [f.label for f in view.facts]


class TestFacts:
    """Tests for per-series facts."""

    def test_empty_series_contribute_no_facts(self):
        """Test only series with readings produce facts."""
        view = build_insights_view(daily([80, 79.5]), [], None)

        assert labels(view)
        assert all("odyweight" in label for label in labels(view))

    def test_bodyweight_facts(self):
        """Test latest value and trailing change."""
        bodyweight = daily([80 - 0.1 * i for i in range(30)])
        view = build_insights_view(bodyweight, [], [], as_of=date(2024, 3, 30))

        facts = {f.label: f for f in view.facts}
        assert facts["Latest bodyweight"].value == "77.1 kg"
        assert facts["Latest bodyweight"].detail == "Logged 2024-03-30"
        assert facts["Bodyweight change (7d)"].value == "-0.6 kg"
        assert facts["Bodyweight change (30d)"].value == "-2.9 kg"
        assert "Bodyweight trend (14d)" in facts

    def test_calorie_facts(self):
        """Test latest intake and window averages."""
        calories = daily([2000, 2200, 2400])
        view = build_insights_view([], calories, [])

        facts = {f.label: f for f in view.facts}
        assert facts["Latest calorie intake"].value == "2,400 kcal"
        assert facts["Average calories (7d)"].value == "2,200 kcal"
        assert facts["Average calories (7d)"].detail == "Across 3 logged days"

    def test_strength_facts(self):
        """Test latest score and training day count."""
        strength = on({date(2024, 3, 1): 300, date(2024, 3, 4): 320, date(2024, 3, 8): 330})
        view = build_insights_view([], [], strength)

        facts = {f.label: f for f in view.facts}
        assert facts["Latest strength score"].value == "330"
        assert facts["Training days (30d)"].value == "3"
        assert facts["Strength change (7d)"].value == "+10"

    def test_windows_need_two_readings_for_a_change(self):
        """Test a change fact is only emitted when it can be computed."""
        view = build_insights_view(daily([80]), [], [])
        assert labels(view) == ["Latest bodyweight"]

    def test_latest_fact_respects_as_of(self):
        """Test readings after the reference day are not reported as latest."""
        bodyweight = daily([80, 81, 82, 83])
        view = build_insights_view(bodyweight, [], [], as_of=date(2024, 3, 2))

        facts = {f.label: f for f in view.facts}
        assert facts["Latest bodyweight"].value == "81 kg"
        assert facts["Latest bodyweight"].detail == "Logged 2024-03-02"

    def test_no_facts_before_first_reading(self):
        """Test a series that starts after the reference day adds no facts."""
        view = build_insights_view([], daily([2000, 2100]), [], as_of=date(2024, 2, 1))
        assert view.facts == []


class TestCorrelations:
    """Tests for correlation pairs in the payload."""

    def test_three_labelled_pairs(self):
        """Test every pair is reported even without data."""
        view = build_insights_view([], [], [], as_of=date(2024, 1, 1))

        assert [c.label for c in view.correlations] == [
            "Bodyweight vs. calorie intake",
            "Bodyweight vs. strength",
            "Calorie intake vs. strength",
        ]
        assert all(c.value is None for c in view.correlations)

    def test_correlation_with_enough_overlap(self):
        """Test a computed correlation when five days overlap."""
        bodyweight = daily([80, 80.5, 81, 81.5, 82])
        calories = daily([2000, 2200, 2400, 2600, 2800])
        view = build_insights_view(bodyweight, calories, [])

        result = view.correlations[0]
        assert result.overlap_days == 5
        assert abs(result.value - 1.0) < 1e-9


class TestImprovements:
    """Tests for detected improvements."""

    def test_strength_improvement(self):
        """Test a higher recent strength average is reported."""
        strength = on({
            date(2024, 3, 5): 100,
            date(2024, 3, 10): 100,
            date(2024, 3, 15): 100,
            date(2024, 3, 20): 110,
            date(2024, 3, 25): 110,
            date(2024, 3, 30): 110,
        })
        view = build_insights_view([], [], strength, as_of=date(2024, 3, 30))

        assert any("up 10.0%" in line for line in view.improvements)

    def test_training_consistency(self):
        """Test more training days than the previous window is reported."""
        strength = on({
            date(2024, 3, 5): 100,
            date(2024, 3, 10): 100,
            date(2024, 3, 18): 100,
            date(2024, 3, 21): 100,
            date(2024, 3, 25): 100,
            date(2024, 3, 28): 100,
        })
        view = build_insights_view([], [], strength, as_of=date(2024, 3, 30))

        assert any("Trained on 4 days" in line for line in view.improvements)

    def test_no_history_no_consistency_claim(self):
        """Test a brand new user is not told they improved from zero."""
        strength = on({date(2024, 3, 25): 100, date(2024, 3, 28): 100})
        view = build_insights_view([], [], strength, as_of=date(2024, 3, 30))

        assert view.improvements == []

    def test_bodyweight_is_never_an_improvement(self):
        """Test bodyweight change is a neutral fact, not an improvement."""
        bodyweight = daily([90 - 0.2 * i for i in range(30)])
        view = build_insights_view(bodyweight, [], [], as_of=date(2024, 3, 30))

        assert not any("bodyweight" in line.lower() for line in view.improvements)
        assert "Bodyweight trend (14d)" in labels(view)


class TestAchievements:
    """Tests for milestones across the full history."""

    def test_longest_logging_streak(self):
        """Test consecutive logged days across all series."""
        bodyweight = on({
            date(2024, 1, 1): 80,
            date(2024, 1, 2): 80,
            date(2024, 1, 10): 80,
        })
        calories = on({date(2024, 1, 3): 2000, date(2024, 1, 4): 2000, date(2024, 1, 5): 2000})
        view = build_insights_view(bodyweight, calories, [])

        streak = next(a for a in view.achievements if a.title == "Longest logging streak")
        assert streak.period == "2024-01-01 to 2024-01-05"
        assert streak.detail.startswith("5 consecutive days")

    def test_short_streak_is_not_an_achievement(self):
        """Test two logged days in a row are below the streak minimum."""
        view = build_insights_view(daily([80, 80]), [], [])
        assert view.achievements == []

    def test_exercise_best_from_full_history(self):
        """Test a best session long before the recent window is still found."""
        scores = [
            SessionStrength(date(2023, 6, 1), "Bench Press", 100, "5×85"),
            SessionStrength(date(2023, 6, 8), "Bench Press", 110, "5×95"),
            SessionStrength(date(2024, 1, 15), "Bench Press", 105, "5×90"),
            SessionStrength(date(2024, 1, 15), "Squat", 150, "5×130"),
        ]
        strength = on({s.date: s.session_strength for s in scores[:3]})
        view = build_insights_view([], [], strength, session_scores=scores)

        best = next(a for a in view.achievements if a.title == "New best: Bench Press")
        assert best.period == "2023-06-08"
        assert "up from 100" in best.detail
        assert "5×95" in best.detail
        assert not any(a.title == "New best: Squat" for a in view.achievements)

    def test_best_training_day(self):
        """Test the best daily strength score beating an earlier day."""
        strength = on({date(2024, 1, 1): 1000, date(2024, 1, 8): 1100, date(2024, 1, 15): 1050})
        view = build_insights_view([], [], strength)

        best = next(a for a in view.achievements if a.title == "Best training day")
        assert best.period == "2024-01-08"


class TestSuggestions:
    """Tests for rule-based suggestions."""

    def test_nothing_logged(self):
        """Test an empty history gets one getting-started suggestion."""
        view = build_insights_view([], [], [])

        assert view.facts == []
        assert view.achievements == []
        assert len(view.suggestions) == 1
        assert view.suggestions[0].startswith("Start logging")

    def test_stale_bodyweight(self):
        """Test a missing weigh-in in the last week triggers a reminder."""
        bodyweight = on({date(2024, 1, 1): 80})
        strength = on({date(2024, 1, 20): 1000})
        view = build_insights_view(bodyweight, [], strength)

        assert any("No bodyweight entries in the last 7 days" in s for s in view.suggestions)
        assert not any("No workouts logged" in s for s in view.suggestions)

    def test_stale_workouts(self):
        """Test a week without workouts triggers a reminder."""
        view = build_insights_view(
            on({date(2024, 1, 20): 80}), [], on({date(2024, 1, 1): 1000})
        )
        assert any("No workouts logged in the last 7 days" in s for s in view.suggestions)

    def test_strength_decline(self):
        """Test a strength drop suggests recovery."""
        strength = on({
            date(2024, 3, 5): 100,
            date(2024, 3, 10): 100,
            date(2024, 3, 20): 90,
            date(2024, 3, 28): 90,
        })
        view = build_insights_view([], [], strength, as_of=date(2024, 3, 30))

        assert any("down 10.0%" in s for s in view.suggestions)

    def test_sparse_overlap_suggestion(self):
        """Test sparse shared days suggest logging on the same days."""
        view = build_insights_view(daily([80, 81]), daily([2000, 2100]), [])
        assert any("same days" in s for s in view.suggestions)

    def test_empty_series_does_not_count_as_sparse_overlap(self):
        """Test a pair with a missing series does not trigger the same-days suggestion."""
        bodyweight = daily([80 + 0.1 * i for i in range(10)])
        strength = daily([300 + 5 * (i % 3) for i in range(10)])
        view = build_insights_view(bodyweight, [], strength)

        assert not any("same days" in s for s in view.suggestions)
        assert any("calorie intake" in s for s in view.suggestions)


class TestPurity:
    """Tests that the builder holds no state."""

    def test_idempotent(self):
        """Test identical input gives identical output."""
        bodyweight = daily([80, 80.4, 79.8, 80.1, 80.6, 80.2])
        calories = daily([2100, 2500, 1900, 2300, 2600, 2200])
        strength = daily([1000, None, 1040, None, 1080, 1100])

        first = build_insights_view(bodyweight, calories, strength)
        second = build_insights_view(bodyweight, calories, strength)

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_inputs_are_not_mutated(self):
        """Test unsorted input is left as given."""
        strength = [
            MetricPoint(date=date(2024, 1, 8), value=1100),
            MetricPoint(date=date(2024, 1, 1), value=1000),
        ]
        snapshot = list(strength)
        build_insights_view([], [], strength)
        assert strength == snapshot
