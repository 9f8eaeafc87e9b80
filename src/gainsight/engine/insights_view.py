"""Build the insights payload from bodyweight, calorie and strength series.

Window lengths and trigger thresholds come from ``gainsight.config``. The
reference day for every trailing window is ``as_of``; when it is not given the
latest date found in any series is used, so the same input always produces
the same payload.
"""

from collections import defaultdict
from datetime import date, timedelta

from .. import config
from ..models.insights import (
    Achievement,
    CorrelationResult,
    InsightFact,
    InsightsView,
    MetricPoint,
    SessionStrength,
)
from ..utils.units import format_number, format_signed
from .series import correlate, normalize_series


def _readings(series: list[MetricPoint] | None) -> list[MetricPoint]:
    """Sorted, de-duplicated, non-null readings of a series."""
    if not series:
        return []
    return [p for p in normalize_series(series) if p.value is not None]


def _window(
    readings: list[MetricPoint], as_of: date, days: int, offset: int = 0
) -> list[MetricPoint]:
    """Readings in the ``days``-long window ending ``offset`` days before as_of."""
    end = as_of - timedelta(days=offset)
    start = end - timedelta(days=days)
    return [p for p in readings if start < p.date <= end]


def _mean(points: list[MetricPoint]) -> float:
    return sum(p.value for p in points) / len(points)


def _percent_change(recent: list[MetricPoint], previous: list[MetricPoint]) -> float | None:
    """Change of the recent mean relative to the previous mean, in percent."""
    if not recent or not previous:
        return None
    baseline = _mean(previous)
    if baseline <= 0:
        return None
    return (_mean(recent) - baseline) / baseline * 100


def _up_to(readings: list[MetricPoint], as_of: date) -> list[MetricPoint]:
    return [p for p in readings if p.date <= as_of]


def _has_history_before(readings: list[MetricPoint], cutoff: date) -> bool:
    return any(p.date <= cutoff for p in readings)


def _bodyweight_facts(readings: list[MetricPoint], as_of: date) -> list[InsightFact]:
    latest = readings[-1]
    facts = [
        InsightFact(
            label="Latest bodyweight",
            value=f"{format_number(latest.value)} kg",
            detail=f"Logged {latest.date.isoformat()}",
        )
    ]

    for days in (config.SHORT_WINDOW_DAYS, config.LONG_WINDOW_DAYS):
        window = _window(readings, as_of, days)
        if len(window) < 2:
            continue
        facts.append(
            InsightFact(
                label=f"Bodyweight change ({days}d)",
                value=format_signed(window[-1].value - window[0].value, " kg"),
                detail=f"{window[0].date.isoformat()} to {window[-1].date.isoformat()}",
            )
        )

    # Reported as a neutral trend: better or worse depends on the user's goal
    recent = _window(readings, as_of, config.TREND_WINDOW_DAYS)
    previous = _window(
        readings, as_of, config.TREND_WINDOW_DAYS, offset=config.TREND_WINDOW_DAYS
    )
    if recent and previous:
        facts.append(
            InsightFact(
                label=f"Bodyweight trend ({config.TREND_WINDOW_DAYS}d)",
                value=format_signed(_mean(recent) - _mean(previous), " kg"),
                detail=(
                    f"Average of the last {config.TREND_WINDOW_DAYS} days compared "
                    f"with the {config.TREND_WINDOW_DAYS} days before"
                ),
            )
        )

    return facts


def _calorie_facts(readings: list[MetricPoint], as_of: date) -> list[InsightFact]:
    latest = readings[-1]
    facts = [
        InsightFact(
            label="Latest calorie intake",
            value=f"{latest.value:,.0f} kcal",
            detail=f"Logged {latest.date.isoformat()}",
        )
    ]

    for days in (config.SHORT_WINDOW_DAYS, config.LONG_WINDOW_DAYS):
        window = _window(readings, as_of, days)
        if not window:
            continue
        facts.append(
            InsightFact(
                label=f"Average calories ({days}d)",
                value=f"{_mean(window):,.0f} kcal",
                detail=f"Across {len(window)} logged {'day' if len(window) == 1 else 'days'}",
            )
        )

    return facts


def _strength_facts(readings: list[MetricPoint], as_of: date) -> list[InsightFact]:
    latest = readings[-1]
    facts = [
        InsightFact(
            label="Latest strength score",
            value=format_number(latest.value),
            detail=f"Training day {latest.date.isoformat()}",
        )
    ]

    for days in (config.SHORT_WINDOW_DAYS, config.LONG_WINDOW_DAYS):
        window = _window(readings, as_of, days)
        if len(window) < 2:
            continue
        facts.append(
            InsightFact(
                label=f"Strength change ({days}d)",
                value=format_signed(window[-1].value - window[0].value),
                detail=f"{window[0].date.isoformat()} to {window[-1].date.isoformat()}",
            )
        )

    training_days = len(_window(readings, as_of, config.LONG_WINDOW_DAYS))
    facts.append(
        InsightFact(
            label=f"Training days ({config.LONG_WINDOW_DAYS}d)",
            value=str(training_days),
            detail=f"Days with at least one weighted set in the last {config.LONG_WINDOW_DAYS} days",
        )
    )

    return facts


def _improvements(
    strength: list[MetricPoint], logged_days: list[MetricPoint], as_of: date
) -> list[str]:
    window = config.TREND_WINDOW_DAYS
    cutoff = as_of - timedelta(days=window)
    improvements = []

    recent = _window(strength, as_of, window)
    previous = _window(strength, as_of, window, offset=window)
    change = _percent_change(recent, previous)
    if change is not None and change >= config.STRENGTH_IMPROVEMENT_PCT:
        improvements.append(
            f"Average strength score up {change:.1f}% over the last {window} days "
            f"compared with the previous {window} days."
        )

    if _has_history_before(strength, cutoff) and len(recent) > len(previous):
        improvements.append(
            f"Trained on {len(recent)} days in the last {window} days, "
            f"up from {len(previous)} in the {window} days before."
        )

    recent_logged = _window(logged_days, as_of, window)
    previous_logged = _window(logged_days, as_of, window, offset=window)
    if _has_history_before(logged_days, cutoff) and len(recent_logged) > len(previous_logged):
        improvements.append(
            f"Logged something on {len(recent_logged)} of the last {window} days, "
            f"up from {len(previous_logged)}."
        )

    return improvements


def _longest_streak(days: list[date]) -> tuple[date, date, int] | None:
    """Longest run of consecutive days. Ties go to the most recent run."""
    if not days:
        return None

    best = (days[0], days[0], 1)
    run_start = days[0]
    for previous, current in zip(days, days[1:]):
        if current - previous != timedelta(days=1):
            run_start = current
        length = (current - run_start).days + 1
        if length >= best[2]:
            best = (run_start, current, length)
    return best


def _exercise_bests(scores: list[SessionStrength]) -> list[Achievement]:
    """Per-exercise all-time best sessions that beat an earlier session."""
    by_exercise: dict[str, list[SessionStrength]] = defaultdict(list)
    for score in scores:
        by_exercise[score.exercise_name].append(score)

    found = []
    for name, sessions in by_exercise.items():
        sessions.sort(key=lambda s: s.date)
        best = max(sessions, key=lambda s: s.session_strength)
        earlier = [s.session_strength for s in sessions if s.date < best.date]
        if not earlier or best.session_strength <= max(earlier):
            continue
        found.append(
            (
                best.date,
                name,
                Achievement(
                    period=best.date.isoformat(),
                    title=f"New best: {name}",
                    detail=(
                        f"Estimated 1RM {format_number(best.session_strength)} "
                        f"({best.set_summary}), up from {format_number(max(earlier))}"
                    ),
                ),
            )
        )

    found.sort(key=lambda item: (-item[0].toordinal(), item[1]))
    return [achievement for _, _, achievement in found]


def _achievements(
    strength: list[MetricPoint],
    logged_days: list[MetricPoint],
    session_scores: list[SessionStrength] | None,
) -> list[Achievement]:
    achievements = []

    streak = _longest_streak([p.date for p in logged_days])
    if streak and streak[2] >= config.MIN_STREAK_DAYS:
        start, end, length = streak
        achievements.append(
            Achievement(
                period=f"{start.isoformat()} to {end.isoformat()}",
                title="Longest logging streak",
                detail=f"{length} consecutive days with at least one entry",
            )
        )

    if len(strength) >= 2:
        best = max(strength, key=lambda p: p.value)
        earlier = [p.value for p in strength if p.date < best.date]
        if earlier and best.value > max(earlier):
            achievements.append(
                Achievement(
                    period=best.date.isoformat(),
                    title="Best training day",
                    detail=(
                        f"Daily strength score {format_number(best.value)}, "
                        f"up from a previous best of {format_number(max(earlier))}"
                    ),
                )
            )

    if session_scores:
        achievements.extend(_exercise_bests(session_scores))

    return achievements[: config.MAX_ACHIEVEMENTS]


def _suggestions(
    bodyweight: list[MetricPoint],
    calories: list[MetricPoint],
    strength: list[MetricPoint],
    correlations: list[CorrelationResult],
    as_of: date,
) -> list[str]:
    stale = config.STALE_LOG_DAYS
    suggestions = []

    if not bodyweight:
        suggestions.append("Log your bodyweight to start tracking its trend.")
    elif not _window(bodyweight, as_of, stale):
        suggestions.append(
            f"No bodyweight entries in the last {stale} days. Log a weigh-in to keep the trend current."
        )

    if not calories:
        suggestions.append("Log your calorie intake to see how it relates to training.")
    elif not _window(calories, as_of, stale):
        suggestions.append(
            f"No calorie entries in the last {stale} days. Log today's intake."
        )

    if not strength:
        suggestions.append("Log a weighted workout to start building your strength history.")
    elif not _window(strength, as_of, stale):
        suggestions.append(
            f"No workouts logged in the last {stale} days. Schedule a session to keep your momentum."
        )

    window = config.TREND_WINDOW_DAYS
    change = _percent_change(
        _window(strength, as_of, window), _window(strength, as_of, window, offset=window)
    )
    if change is not None and change <= -config.STRENGTH_DECLINE_PCT:
        suggestions.append(
            f"Average strength score is down {abs(change):.1f}% versus the previous "
            f"{window} days. Consider a lighter week and check sleep and recovery."
        )

    # Pairs with an empty side are covered by the missing-log suggestions above
    pairs = [(bodyweight, calories), (bodyweight, strength), (calories, strength)]
    sparse = [
        c for (a, b), c in zip(pairs, correlations)
        if a and b and c.value is None and c.overlap_days < config.MIN_OVERLAP_DAYS
    ]
    if sparse:
        suggestions.append(
            "Log bodyweight, calories and workouts on the same days to unlock correlation insights."
        )

    return suggestions


def build_insights_view(
    bodyweight_series: list[MetricPoint] | None,
    calories_series: list[MetricPoint] | None,
    strength_series: list[MetricPoint] | None,
    session_scores: list[SessionStrength] | None = None,
    as_of: date | None = None,
) -> InsightsView:
    """Build the insights payload.

    Args:
        bodyweight_series: Bodyweight in kg per date
        calories_series: Total kcal per date
        strength_series: Daily strength score per date
        session_scores: Per-exercise session scores, used for per-exercise
            best-session achievements
        as_of: Reference day for trailing windows (defaults to the latest
            date present in any series)

    Returns:
        InsightsView with facts, correlations, improvements, achievements
        and suggestions. A missing series is treated as empty.
    """
    bodyweight = _readings(bodyweight_series)
    calories = _readings(calories_series)
    strength = _readings(strength_series)

    correlations = [
        correlate(bodyweight, calories, label="Bodyweight vs. calorie intake"),
        correlate(bodyweight, strength, label="Bodyweight vs. strength"),
        correlate(calories, strength, label="Calorie intake vs. strength"),
    ]

    all_dates = sorted({p.date for p in bodyweight + calories + strength})
    if as_of is None:
        if not all_dates:
            return InsightsView(
                correlations=correlations,
                suggestions=[
                    "Start logging workouts and bodyweight to unlock your insights."
                ],
            )
        as_of = all_dates[-1]

    facts = []
    for readings, build_facts in (
        (bodyweight, _bodyweight_facts),
        (calories, _calorie_facts),
        (strength, _strength_facts),
    ):
        # Facts describe the series as of the reference day
        known = _up_to(readings, as_of)
        if known:
            facts.extend(build_facts(known, as_of))

    # One point per day with any entry, for streaks and logging consistency
    logged_days = [MetricPoint(date=d, value=1.0) for d in all_dates]

    if not all_dates:
        suggestions = ["Start logging workouts and bodyweight to unlock your insights."]
    else:
        suggestions = _suggestions(bodyweight, calories, strength, correlations, as_of)

    return InsightsView(
        facts=facts,
        correlations=correlations,
        improvements=_improvements(strength, logged_days, as_of),
        achievements=_achievements(strength, logged_days, session_scores),
        suggestions=suggestions,
    )
