"""Validators for plan requests and reconciled plans.

Request validation runs before any generation work and raises. Plan
validation reports every violated invariant so a caller can log them all:
- exactly total_weeks x 7 days, contiguous from start_date
- week/day_in_week derived from date offset
- exactly days_per_week runs and 7 - days_per_week rest days per week
- long run only on day 7, at most one per week
- rest days carry no distance and no pace
"""

from datetime import date, timedelta

from marathon_coach.config.settings import settings
from marathon_coach.planner.errors import PlanValidationError
from marathon_coach.plans.scheduler import weeks_until_race
from marathon_coach.plans.types import TrainingPlan, WorkoutType

MIN_DAYS_PER_WEEK = 3
MAX_DAYS_PER_WEEK = 6


def validate_days_per_week(days_per_week: int) -> None:
    """Raises:
    PlanValidationError: If days_per_week is outside 3-6
    """
    if not MIN_DAYS_PER_WEEK <= days_per_week <= MAX_DAYS_PER_WEEK:
        raise PlanValidationError(
            f"days_per_week must be between {MIN_DAYS_PER_WEEK} and {MAX_DAYS_PER_WEEK}, got {days_per_week}"
        )


def validate_plan_request(
    start_date: date,
    marathon_date: date,
    days_per_week: int,
    min_weeks: int | None = None,
) -> int:
    """Validate a plan request and return the plan length in weeks.

    Args:
        start_date: First day of the plan (usually today)
        marathon_date: Race day
        days_per_week: Requested runs per week
        min_weeks: Minimum plan length (defaults to settings.min_plan_weeks)

    Returns:
        Total plan weeks

    Raises:
        PlanValidationError: If the race is in the past, too close, or
            days_per_week is out of range
    """
    min_weeks = settings.min_plan_weeks if min_weeks is None else min_weeks

    if marathon_date <= start_date:
        raise PlanValidationError(f"Marathon date {marathon_date} must be after {start_date}")

    total_weeks = weeks_until_race(start_date, marathon_date)
    if total_weeks < min_weeks:
        raise PlanValidationError(
            f"Marathon date must be at least {min_weeks} weeks away. Currently {total_weeks} weeks."
        )

    validate_days_per_week(days_per_week)
    return total_weeks


def validate_plan(plan: TrainingPlan) -> list[str]:
    """Check a plan against its structural invariants.

    Args:
        plan: Plan to check

    Returns:
        Violation messages; empty when the plan is valid
    """
    violations: list[str] = []

    expected_days = plan.total_weeks * 7
    if len(plan.days) != expected_days:
        violations.append(f"Expected {expected_days} days, found {len(plan.days)}")

    for index, day in enumerate(plan.days):
        expected_date = plan.start_date + timedelta(days=index)
        if day.date != expected_date:
            violations.append(f"Day {index + 1}: expected date {expected_date}, found {day.date}")
            # Offsets are meaningless past the first gap
            break
        week, day_in_week = divmod(index, 7)
        if (day.week, day.day_in_week) != (week + 1, day_in_week + 1):
            violations.append(
                f"{day.date}: expected week {week + 1} day {day_in_week + 1}, "
                f"found week {day.week} day {day.day_in_week}"
            )
        if not day.is_run and (day.distance_miles != 0 or day.target_pace):
            violations.append(f"{day.date}: rest day has distance or pace")

    rest_days = 7 - plan.days_per_week
    for week in range(1, plan.total_weeks + 1):
        week_days = [d for d in plan.days if d.week == week]
        runs = sum(1 for d in week_days if d.is_run)
        rests = len(week_days) - runs
        if runs != plan.days_per_week:
            violations.append(f"Week {week}: expected {plan.days_per_week} runs, found {runs}")
        if rests != rest_days:
            violations.append(f"Week {week}: expected {rest_days} rest days, found {rests}")

        long_runs = [d for d in week_days if d.workout_type == WorkoutType.LONG]
        if len(long_runs) > 1:
            violations.append(f"Week {week}: expected at most one long run, found {len(long_runs)}")
        for long_run in long_runs:
            if long_run.day_in_week != 7:
                violations.append(f"Week {week}: long run on day {long_run.day_in_week}, expected day 7")

    return violations
