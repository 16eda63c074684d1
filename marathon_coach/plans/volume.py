"""Weekly volume computation - miles-only."""

from collections.abc import Iterable

from marathon_coach.plans.types import DayRecord


def compute_weekly_volume_miles(days: Iterable[DayRecord]) -> float:
    """Sum run distance in miles (rest days contribute nothing).

    Args:
        days: Day records, usually one week

    Returns:
        Total volume in miles, rounded to 2 decimals
    """
    total_miles = 0.0
    for day in days:
        if day.is_run:
            total_miles += day.distance_miles
    return round(total_miles, 2)


def volume_by_week(days: Iterable[DayRecord]) -> dict[int, float]:
    """Weekly volume keyed by week number."""
    weeks: dict[int, list[DayRecord]] = {}
    for day in days:
        weeks.setdefault(day.week, []).append(day)
    return {week: compute_weekly_volume_miles(week_days) for week, week_days in sorted(weeks.items())}
