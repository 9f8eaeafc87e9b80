"""Strength scoring: raw weighted sets to one score per exercise per day.

The score for a session is the best Epley estimated one-rep max among that
day's sets for the exercise. It rewards load directly and volume through the
rep term, and it never decreases when weight or reps go up.
"""

import math
from collections import defaultdict
from datetime import date

from ..models.insights import SessionStrength
from ..models.logs import SetLog
from ..utils.units import format_number


def estimated_one_rep_max(weight: float, reps: float) -> float:
    """Estimate a one-rep max using the Epley formula.

    A single rep is already a one-rep max, so it counts as the weight itself.
    """
    if reps == 1:
        return weight
    return weight * (1 + reps / 30)


def parse_set(row: SetLog) -> tuple[float, float] | None:
    """Reps and weight of a set as numbers, or None if it cannot be scored."""
    try:
        reps = float(row.reps)
        weight = float(row.weight)
    except (TypeError, ValueError):
        return None

    if not (math.isfinite(reps) and math.isfinite(weight)):
        return None
    if reps <= 0 or weight <= 0:
        return None
    return reps, weight


def format_set_summary(sets: list[tuple[int, float, float]]) -> str:
    """Render (set_number, reps, weight) as "5×135, 5×140", ordered by set number."""
    ordered = sorted(sets, key=lambda s: s[0])
    return ", ".join(f"{format_number(reps)}×{format_number(weight)}" for _, reps, weight in ordered)


def compute_session_strength_by_exercise_date(
    rows: list[SetLog],
) -> list[SessionStrength]:
    """Fold raw set logs into one strength score per (date, exercise).

    Args:
        rows: Weighted set records, weights in a single unit

    Returns:
        One SessionStrength per (date, exercise) that had at least one valid
        set. Groups with no valid set are left out. Order is not guaranteed.
    """
    groups: dict[tuple[date, str], list[tuple[int, float, float]]] = defaultdict(list)
    muscle_groups: dict[tuple[date, str], str | None] = {}

    for row in rows:
        key = (row.session_date, row.exercise_name)
        if key not in muscle_groups or muscle_groups[key] is None:
            muscle_groups[key] = row.muscle_group
        parsed = parse_set(row)
        if parsed is None:
            continue
        groups[key].append((row.set_number, *parsed))

    scores = []
    for (session_date, exercise_name), sets in groups.items():
        best = max(estimated_one_rep_max(weight, reps) for _, reps, weight in sets)
        scores.append(
            SessionStrength(
                date=session_date,
                exercise_name=exercise_name,
                muscle_group=muscle_groups.get((session_date, exercise_name)),
                session_strength=best,
                set_summary=format_set_summary(sets),
            )
        )

    return scores
