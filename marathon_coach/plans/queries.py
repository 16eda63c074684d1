"""Read helpers over a stored training plan."""

from datetime import date

from marathon_coach.plans.types import DayRecord, TrainingPlan


def todays_workout(plan: TrainingPlan, today: date) -> DayRecord | None:
    """The plan day for ``today``, or None outside the plan window."""
    offset = (today - plan.start_date).days
    if 0 <= offset < len(plan.days) and plan.days[offset].date == today:
        return plan.days[offset]
    for day in plan.days:
        if day.date == today:
            return day
    return None


def days_by_week(plan: TrainingPlan) -> dict[int, list[DayRecord]]:
    """Plan days grouped by week number, each week ordered by date."""
    weeks: dict[int, list[DayRecord]] = {}
    for day in plan.days:
        weeks.setdefault(day.week, []).append(day)
    return {week: sorted(week_days, key=lambda d: d.date) for week, week_days in sorted(weeks.items())}


def current_week(plan: TrainingPlan, today: date) -> int | None:
    """Week number containing ``today``, or None outside the plan window."""
    day = todays_workout(plan, today)
    return day.week if day else None
