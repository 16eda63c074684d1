"""Workout type catalog.

Static coaching metadata per workout type. Used to fill missing HR zones on
producer output and to describe the vocabulary to the producer.
"""

from pydantic import BaseModel

from marathon_coach.plans.types import WorkoutType


class WorkoutTypeInfo(BaseModel):
    hr_zone: str
    pace_description: str
    purpose: str
    example: str | None = None


WORKOUT_CATALOG: dict[WorkoutType, WorkoutTypeInfo] = {
    WorkoutType.EASY: WorkoutTypeInfo(
        hr_zone="zone2",
        pace_description="conversational pace",
        purpose="aerobic development, recovery",
    ),
    WorkoutType.RECOVERY: WorkoutTypeInfo(
        hr_zone="zone1",
        pace_description="very easy, shuffle pace",
        purpose="active recovery",
    ),
    WorkoutType.LONG: WorkoutTypeInfo(
        hr_zone="zone2",
        pace_description="easy pace with final miles at marathon pace",
        purpose="endurance, mental toughness, glycogen depletion training",
    ),
    WorkoutType.TEMPO: WorkoutTypeInfo(
        hr_zone="zone3",
        pace_description="comfortably hard, threshold pace",
        purpose="lactate threshold improvement",
    ),
    WorkoutType.INTERVAL: WorkoutTypeInfo(
        hr_zone="zone4-5",
        pace_description="hard effort with recovery jogs",
        purpose="VO2max development, speed",
    ),
    WorkoutType.YASSO_800S: WorkoutTypeInfo(
        hr_zone="zone4-5",
        pace_description="Marathon goal time (hours:minutes) as 800m time (minutes:seconds)",
        purpose="Marathon predictor workout, speed endurance",
        example="Target 3:30 marathon? Run 800s in 3:30 each",
    ),
    WorkoutType.MARATHON_PACE: WorkoutTypeInfo(
        hr_zone="zone3",
        pace_description="exact goal marathon pace",
        purpose="Race-specific training, pacing practice",
    ),
    WorkoutType.FARTLEK: WorkoutTypeInfo(
        hr_zone="zone2-4",
        pace_description="unstructured speed play, alternating fast/slow",
        purpose="Fun speed work, mental engagement",
    ),
    WorkoutType.HILL_REPEATS: WorkoutTypeInfo(
        hr_zone="zone4",
        pace_description="hard uphill effort, easy jog down",
        purpose="Leg strength, running economy",
    ),
    WorkoutType.PROGRESSION: WorkoutTypeInfo(
        hr_zone="zone2-3",
        pace_description="start easy, finish at tempo or faster",
        purpose="Race simulation, negative split practice",
    ),
}


def workout_info(workout_type: WorkoutType) -> WorkoutTypeInfo | None:
    """Catalog entry for a run type; None for rest."""
    return WORKOUT_CATALOG.get(workout_type)


def describe_vocabulary(types: list[WorkoutType]) -> str:
    """One line per type, e.g. "- tempo: zone3, comfortably hard... - lactate threshold"."""
    lines = []
    for workout_type in types:
        info = WORKOUT_CATALOG.get(workout_type)
        if info is None:
            continue
        lines.append(f"- {workout_type.value}: {info.hr_zone}, {info.pace_description} - {info.purpose}")
    return "\n".join(lines)
