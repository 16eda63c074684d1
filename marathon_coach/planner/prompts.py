"""Prompt text for the LLM workout producer."""

from itertools import groupby
from typing import TYPE_CHECKING

from marathon_coach.athletes.models import DerivedMetrics, NormalizedProfile
from marathon_coach.physiology.time_format import format_minutes
from marathon_coach.plans.workout_types import describe_vocabulary

if TYPE_CHECKING:
    from marathon_coach.planner.producer import ChunkRequest

SYSTEM_PROMPT = """You are an elite marathon coach using advanced training science.

Rules:
- Generate EXACTLY 7 days per week. No more, no less.
- Dates are YYYY-MM-DD and increase by exactly one day per object.
- Each week has exactly the requested number of runs; every other day is rest.
- Rest days have distance 0 and an empty targetPace.
- The long run is on day 7 of each week.
- Every run has a target pace in M:SS per mile.
- Never increase weekly mileage by more than 10% from the previous week.
- Output ONLY a JSON array of day objects. No prose, no code fences.
"""

DAY_SCHEMA = (
    '{"date":"YYYY-MM-DD","type":"easy","distance":5.0,"targetPace":"8:30",'
    '"description":"Easy run","hrZone":"zone2","week":1,"day":1}'
)


def build_athlete_summary(profile: NormalizedProfile, metrics: DerivedMetrics) -> str:
    """Athlete and physiology block shared by every chunk request."""
    best = metrics.best_result
    zones = "\n".join(
        f"- Zone {z.zone} ({z.label}): {z.min}-{z.max} bpm - {z.description}" for z in metrics.heart_rate_zones
    )
    return f"""ATHLETE PROFILE (Data Quality: {metrics.data_quality}):
- Fitness Level: {metrics.fitness_level}
- Reference PR: {format_minutes(best.time_minutes)} for {best.distance_km:g}km (source: {best.source.value})
- VDOT Score: {metrics.vdot_score}
- Current Weekly Mileage: {profile.weekly_mileage:g} mi/week ({metrics.mileage_tax_descriptor})
- Age/Gender: {profile.age}/{profile.gender.value} (age-grading factor: {metrics.age_grading_factor:.3f})
- Max Heart Rate: {metrics.max_heart_rate} bpm

HEART RATE ZONES:
{zones}

TRAINING PACES (Riegel exponent {metrics.riegel_exponent}):
- Predicted Marathon Pace: {metrics.adjusted_marathon_pace}/mile
- Easy Run Pace: {metrics.training_paces.easy}/mile
- Tempo Pace: {metrics.training_paces.tempo}/mile
- Interval Pace: {metrics.training_paces.interval}/mile"""


def _phase_blocks(request: "ChunkRequest") -> str:
    """One block per run of consecutive weeks sharing a phase."""
    blocks = []
    for _, group in groupby(request.week_vocabulary, key=lambda v: v.phase):
        weeks = list(group)
        first, last = weeks[0], weeks[-1]
        span = f"Week {first.week}" if first is last else f"Weeks {first.week}-{last.week}"
        blocks.append(
            f"{span}: {first.phase.value} Phase - {first.guidance}\n"
            f"Only these run types in {span.lower()}:\n{describe_vocabulary(first.eligible_types)}"
        )
    return "\n\n".join(blocks)


def build_chunk_prompt(request: "ChunkRequest") -> str:
    """Build the user prompt for one chunk."""
    rest_days = 7 - request.days_per_week
    targets = "\n".join(
        f"- Week {t.week} ({t.phase.value}): {t.target_miles} miles"
        + (" (STEP-BACK WEEK - reduced volume)" if t.is_step_back else "")
        for t in request.week_targets
    )

    prompt = f"""Generate weeks {request.start_week}-{request.end_week} of a {request.total_weeks}-week \
marathon training plan starting on {request.chunk_start_date.isoformat()} with the marathon on \
{request.marathon_date.isoformat()}.

{request.athlete_summary}

WEEKLY MILEAGE TARGETS:
{targets}

PHASES AND ALLOWED WORKOUT TYPES:
{_phase_blocks(request)}

REQUIREMENTS:
- Output EXACTLY {request.expected_days} objects ({request.end_week - request.start_week + 1} weeks x 7 days)
- Each week: EXACTLY {request.days_per_week} runs and EXACTLY {rest_days} rest days (type "rest", distance 0)
- Start with {request.chunk_start_date.isoformat()} and increase the date by exactly 1 day per object
- Object shape: {DAY_SCHEMA}"""

    if request.previous_week is not None:
        prompt += (
            f"\n\nPrevious week summary for gradual progression: {request.previous_week.to_text()}"
            f"\n\nEnsure gradual progression from the previous week while keeping EXACTLY "
            f"{request.days_per_week} runs per week."
        )
    return prompt
