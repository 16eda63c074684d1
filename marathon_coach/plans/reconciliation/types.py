"""Reconciliation input/output models.

This module defines the data structures for:
- Draft days as parsed from producer output (any field may be missing)
- Reconciliation outcomes (invariant-respecting days plus warnings)
"""

from datetime import date as date_type

from pydantic import BaseModel, Field

from marathon_coach.plans.types import DayRecord, WorkoutType


class DraftDay(BaseModel):
    """A producer-supplied day before reconciliation.

    Week and day hints are kept for logging only; reconciliation always
    recomputes them from the date.

    Attributes:
        date: Calendar date (None when missing or unparsable)
        workout_type: Coerced workout type
        distance_miles: Distance in miles
        target_pace: "M:SS" per mile
        description: Free-text description
        hr_zone: Free-text HR zone
        week_hint: Week number the producer claimed
        day_hint: Day-in-week the producer claimed
    """

    date: date_type | None = None
    workout_type: WorkoutType = WorkoutType.REST
    distance_miles: float = 0.0
    target_pace: str = ""
    description: str = ""
    hr_zone: str | None = None
    week_hint: int | None = None
    day_hint: int | None = None

    @classmethod
    def from_record(cls, record: DayRecord) -> "DraftDay":
        return cls(
            date=record.date,
            workout_type=record.workout_type,
            distance_miles=record.distance_miles,
            target_pace=record.target_pace,
            description=record.description,
            hr_zone=record.hr_zone,
            week_hint=record.week,
            day_hint=record.day_in_week,
        )


class ReconciliationOutcome(BaseModel):
    """Reconciled days for a week window.

    Attributes:
        days: Exactly 7 days per week in the window, sorted by date
        warnings: Degradations accepted along the way (dropped, filled,
            converted days and run shortfalls)
    """

    days: list[DayRecord]
    warnings: list[str] = Field(default_factory=list)
