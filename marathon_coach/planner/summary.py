"""Compact summary of the last completed week, carried into the next chunk."""

from collections.abc import Sequence

from pydantic import BaseModel

from marathon_coach.plans.types import DayRecord
from marathon_coach.plans.volume import compute_weekly_volume_miles


class WeekSummary(BaseModel):
    """Continuity context for the next chunk request.

    Attributes:
        week: Week number summarized
        total_miles: Total run miles that week
        paces: Target paces of the week's runs, in date order
        workout_types: Distinct run types, in first-seen order
    """

    week: int
    total_miles: float
    paces: list[str]
    workout_types: list[str]

    def to_text(self) -> str:
        paces = ", ".join(self.paces) if self.paces else "N/A"
        types = ", ".join(self.workout_types) if self.workout_types else "rest week"
        return (
            f"Total weekly mileage: {self.total_miles:.1f} miles. "
            f"Average paces: {paces}. Workout types: {types}."
        )


def summarize_week(days: Sequence[DayRecord], week: int) -> WeekSummary | None:
    """Summarize one week of reconciled days; None when the week has no days."""
    week_days = sorted((d for d in days if d.week == week), key=lambda d: d.date)
    if not week_days:
        return None

    runs = [d for d in week_days if d.is_run]
    workout_types: list[str] = []
    for run in runs:
        if run.workout_type.value not in workout_types:
            workout_types.append(run.workout_type.value)

    return WeekSummary(
        week=week,
        total_miles=compute_weekly_volume_miles(runs),
        paces=[r.target_pace for r in runs if r.target_pace],
        workout_types=workout_types,
    )


def summarize_last_week(days: Sequence[DayRecord]) -> WeekSummary | None:
    """Summary of the latest week present in ``days``."""
    if not days:
        return None
    return summarize_week(days, max(d.week for d in days))
