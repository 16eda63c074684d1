"""Tests for day-of run targets and run persistence."""

from datetime import date

import pytest

from marathon_coach.plans.types import DayRecord, WorkoutType
from marathon_coach.services.run_service import finish_and_save_run, plan_run_target, start_run
from marathon_coach.tracking.session import SessionStatus


def tempo_day() -> DayRecord:
    return DayRecord(
        date=date(2026, 3, 4),
        week=9,
        day_in_week=3,
        workout_type=WorkoutType.TEMPO,
        distance_miles=8.0,
        target_pace="8:00",
        hr_zone="zone3",
    )


def test_target_follows_the_plan_day():
    target = plan_run_target(tempo_day())
    assert target.target_pace == "8:00"
    assert target.distance_miles == 8.0
    assert target.notes == []


def test_missing_day_falls_back_to_default_pace():
    target = plan_run_target(None)
    assert target.target_pace == "9:00"
    assert target.distance_miles == 0.0


def test_heat_slows_the_target_pace():
    target = plan_run_target(tempo_day(), temperature_f=75)
    assert target.target_pace == "8:20"
    assert target.notes == ["Add 20 sec/mile, hydrate more"]


def test_poor_recovery_shortens_the_run():
    target = plan_run_target(tempo_day(), recovery_score=40)
    assert target.distance_miles == 6.0
    assert target.notes == ["Poor recovery - easy day or rest"]


@pytest.mark.asyncio
async def test_finish_and_save_run(session_store, cue_sink):
    run = start_run(plan_run_target(tempo_day()), max_heart_rate=185, cue_sink=cue_sink)
    await run.start()

    session, session_id = await finish_and_save_run("runner-1", run, session_store)

    assert session_id == "session-1"
    assert session.status == SessionStatus.COMPLETED
    assert session.target_pace == "8:00"
    assert session_store.sessions == [("runner-1", session)]
    assert run.tracker.max_heart_rate == 185
