"""Run service - wires a plan day to a live tracker and persists the result."""

from loguru import logger
from pydantic import BaseModel, Field

from marathon_coach.config.settings import settings
from marathon_coach.physiology.conditions import heat_adjustment, recovery_adjustment
from marathon_coach.physiology.time_format import pace_to_seconds, seconds_to_pace
from marathon_coach.plans.types import DayRecord
from marathon_coach.stores import AudioCueSink, SensorStream, SessionStore
from marathon_coach.tracking.runner import RunSessionRunner
from marathon_coach.tracking.session import GeoFix, HeartRateReading, RunSession
from marathon_coach.tracking.tracker import LiveRunTracker


class RunTarget(BaseModel):
    """What the runner is coached against today.

    Attributes:
        target_pace: Target pace after the heat adjustment
        distance_miles: Planned distance after the recovery adjustment
        notes: Human-readable adjustment explanations
    """

    target_pace: str
    distance_miles: float
    notes: list[str] = Field(default_factory=list)


def plan_run_target(
    day: DayRecord | None,
    temperature_f: float | None = None,
    recovery_score: float | None = None,
) -> RunTarget:
    """Resolve today's target pace and distance.

    A day without a pace (rest or missing) falls back to the default easy pace.
    """
    base_pace = (day.target_pace if day else "") or settings.default_target_pace
    pace_seconds = pace_to_seconds(base_pace) or pace_to_seconds(settings.default_target_pace) or 0
    distance = day.distance_miles if day else 0.0
    notes: list[str] = []

    if temperature_f is not None:
        heat = heat_adjustment(temperature_f)
        pace_seconds += heat.seconds_per_mile
        notes.append(heat.description)

    if recovery_score is not None:
        recovery = recovery_adjustment(recovery_score)
        distance = round(distance * recovery.factor, 1)
        notes.append(recovery.description)

    return RunTarget(target_pace=seconds_to_pace(pace_seconds), distance_miles=distance, notes=notes)


def start_run(
    target: RunTarget,
    *,
    max_heart_rate: int | None = None,
    cue_sink: AudioCueSink | None = None,
    gps: SensorStream[GeoFix] | None = None,
    heart_rate: SensorStream[HeartRateReading] | None = None,
) -> RunSessionRunner:
    """Build a runner for today's target; call ``await runner.start()`` to begin."""
    tracker = LiveRunTracker(
        target_pace=target.target_pace,
        max_heart_rate=max_heart_rate,
        cue_sink=cue_sink,
    )
    return RunSessionRunner(tracker, gps=gps, heart_rate=heart_rate)


async def finish_and_save_run(
    runner_id: str,
    run: RunSessionRunner,
    session_store: SessionStore,
) -> tuple[RunSession, str]:
    """Finalize the run and hand it to the session store.

    Store failures propagate unchanged; the finalized session is not retried.
    """
    session = await run.finish()
    session_id = await session_store.save_session(runner_id, session)
    logger.info(
        "Run saved",
        runner_id=runner_id,
        session_id=session_id,
        distance_miles=round(session.total_distance_miles, 2),
        elapsed_seconds=session.elapsed_seconds,
    )
    return session, session_id
