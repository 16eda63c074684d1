"""Weekly mileage schedule and training phases.

Pure functions that shape a plan's volume curve:
- Build: ~3% growth per effective week, capped at +80% over baseline
- Step-back: every 4th week before the taper runs at 75%
- Taper: linear decay from 70% to 30% of theoretical peak (baseline x 1.8)
"""

import math
from datetime import date

from pydantic import BaseModel

from marathon_coach.physiology.calculator import round_half_up
from marathon_coach.plans.types import TrainingPhase, WorkoutType

BUILD_RATE_PER_WEEK = 0.03
MAX_BUILD_FACTOR = 1.8
STEP_BACK_INTERVAL = 4
STEP_BACK_FACTOR = 0.75
TAPER_START_FACTOR = 0.7
TAPER_DROP = 0.4
TAPER_FLOOR = 0.3


class WeekTarget(BaseModel):
    """Scheduled volume for one plan week."""

    week: int
    phase: TrainingPhase
    target_miles: int
    is_step_back: bool


def taper_start_week(total_weeks: int) -> int:
    """First taper week: the later of (total - 3) and floor(total x 0.85)."""
    return max(total_weeks - 3, math.floor(total_weeks * 0.85))


def is_step_back_week(week: int, total_weeks: int) -> bool:
    return week % STEP_BACK_INTERVAL == 0 and week < taper_start_week(total_weeks)


def weekly_target_miles(week: int, total_weeks: int, baseline_miles: float) -> int:
    """Target mileage for a plan week.

    Args:
        week: Week number (1-based)
        total_weeks: Plan length in weeks
        baseline_miles: Runner's current weekly mileage

    Returns:
        Target miles for the week, rounded half-up to whole miles
    """
    taper_start = taper_start_week(total_weeks)
    peak_week = taper_start - 1

    target = baseline_miles
    if week <= peak_week:
        effective_weeks = (week // STEP_BACK_INTERVAL) * 3 + week % STEP_BACK_INTERVAL
        factor = 1 + effective_weeks * BUILD_RATE_PER_WEEK
        target = baseline_miles * min(factor, MAX_BUILD_FACTOR)

    if is_step_back_week(week, total_weeks):
        target *= STEP_BACK_FACTOR

    if week >= taper_start:
        taper_week = week - taper_start + 1
        taper_weeks = total_weeks - taper_start + 1
        progress = (taper_week - 1) / (taper_weeks - 1) if taper_weeks > 1 else 0.0
        taper_factor = TAPER_START_FACTOR - progress * TAPER_DROP
        target = baseline_miles * MAX_BUILD_FACTOR * max(taper_factor, TAPER_FLOOR)

    return round_half_up(target)


def training_phase(week: int, total_weeks: int) -> TrainingPhase:
    """Phase label from the week's position in the plan."""
    if week >= taper_start_week(total_weeks):
        return TrainingPhase.TAPER
    if week >= math.floor(total_weeks * 0.5):
        return TrainingPhase.PEAK
    if week >= math.floor(total_weeks * 0.25):
        return TrainingPhase.BUILD
    return TrainingPhase.BASE


_ALWAYS = [WorkoutType.EASY, WorkoutType.RECOVERY, WorkoutType.LONG]

_PHASE_WORKOUTS: dict[TrainingPhase, list[WorkoutType]] = {
    TrainingPhase.BASE: [*_ALWAYS],
    TrainingPhase.BUILD: [
        *_ALWAYS,
        WorkoutType.TEMPO,
        WorkoutType.INTERVAL,
        WorkoutType.FARTLEK,
        WorkoutType.HILL_REPEATS,
    ],
    TrainingPhase.PEAK: [
        *_ALWAYS,
        WorkoutType.TEMPO,
        WorkoutType.INTERVAL,
        WorkoutType.PROGRESSION,
        WorkoutType.MARATHON_PACE,
        WorkoutType.YASSO_800S,
    ],
    TrainingPhase.TAPER: [*_ALWAYS, WorkoutType.TEMPO],
}


def eligible_workout_types(phase: TrainingPhase) -> list[WorkoutType]:
    """Run types the producer may use in a phase (rest is always allowed)."""
    return list(_PHASE_WORKOUTS[phase])


def phase_guidance(phase: TrainingPhase, target_miles: int) -> str:
    """Coaching guidance for a phase, quoting the week's mileage target."""
    if phase == TrainingPhase.BASE:
        return (
            "Focus on aerobic foundation (Zone 2). Workouts: easy runs, recovery runs, "
            "building long run gradually. Add strides 2-3x/week. "
            f"Target: {target_miles} miles this week."
        )
    if phase == TrainingPhase.BUILD:
        return (
            "Increase volume and introduce quality workouts. Workouts: easy, tempo, fartlek, "
            "hillRepeats (1x/week), longer long runs. "
            f"Target: {target_miles} miles this week."
        )
    if phase == TrainingPhase.PEAK:
        return (
            "Maximum volume and marathon-specific training. Workouts: marathonPace runs, "
            "yasso800s, progression runs, longest long runs (18-22 miles). "
            f"Target: {target_miles} miles this week (PEAK VOLUME)."
        )
    return (
        "TAPER - Reduce volume 40-60%, maintain intensity. Workouts: easy, short tempo, strides. "
        "Long run max 10-12 miles. Focus on rest, nutrition, race prep. "
        f"Target: {target_miles} miles this week."
    )


def build_schedule(total_weeks: int, baseline_miles: float) -> list[WeekTarget]:
    """Week-by-week targets for the whole plan."""
    return [
        WeekTarget(
            week=week,
            phase=training_phase(week, total_weeks),
            target_miles=weekly_target_miles(week, total_weeks, baseline_miles),
            is_step_back=is_step_back_week(week, total_weeks),
        )
        for week in range(1, total_weeks + 1)
    ]


def weeks_until_race(start_date: date, race_date: date) -> int:
    """Whole plan weeks between start and race day (partial weeks round up)."""
    days = (race_date - start_date).days
    return math.ceil(days / 7)
