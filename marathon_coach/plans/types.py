"""Training plan schema.

This module defines the persisted shape of a training plan:
- All distances are MILES
- Week and day-in-week are derived from the date, never trusted from a producer
- A plan is a contiguous 7 x total_weeks day grid
"""

from datetime import date as date_type
from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field


class WorkoutType(StrEnum):
    """Workout vocabulary. Values match the producer's camelCase type names."""

    REST = "rest"
    EASY = "easy"
    RECOVERY = "recovery"
    LONG = "long"
    TEMPO = "tempo"
    INTERVAL = "interval"
    MARATHON_PACE = "marathonPace"
    PROGRESSION = "progression"
    FARTLEK = "fartlek"
    HILL_REPEATS = "hillRepeats"
    YASSO_800S = "yasso800s"

    @property
    def is_run(self) -> bool:
        return self is not WorkoutType.REST


class TrainingPhase(StrEnum):
    BASE = "Base"
    BUILD = "Build"
    PEAK = "Peak"
    TAPER = "Taper"


class DayRecord(BaseModel):
    """One calendar day of a training plan.

    Attributes:
        date: Calendar date
        week: Week number (1..total_weeks), derived from date offset
        day_in_week: Day within the week (1..7); long runs sit on day 7
        workout_type: Workout type (rest or a run type)
        distance_miles: Distance in miles (0 for rest)
        target_pace: "M:SS" per mile, empty for rest
        description: Free-text workout description
        hr_zone: Free-text target HR zone (e.g., "zone2", "zone4-5")
    """

    date: date_type
    week: int = Field(ge=1)
    day_in_week: int = Field(ge=1, le=7)
    workout_type: WorkoutType
    distance_miles: float = Field(default=0.0, ge=0)
    target_pace: str = ""
    description: str = ""
    hr_zone: str | None = None

    @property
    def is_run(self) -> bool:
        return self.workout_type.is_run


class TrainingPlan(BaseModel):
    """A complete, reconciled training plan handed to the plan store.

    Attributes:
        runner_id: Owner of the plan
        start_date: Date of week 1, day 1
        goal_marathon_date: Race day
        total_weeks: Number of weeks in the plan
        days_per_week: Runs per week (3-6)
        days: Exactly total_weeks x 7 day records, one per calendar day
        created_at: Generation timestamp
        warnings: Degradations accepted while generating the plan
    """

    runner_id: str
    start_date: date_type
    goal_marathon_date: date_type
    total_weeks: int = Field(ge=1)
    days_per_week: int = Field(ge=1, le=7)
    days: list[DayRecord]
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    warnings: list[str] = Field(default_factory=list)
