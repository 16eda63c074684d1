"""Tests for plan generation orchestration.

Covers:
- End-to-end generation with a scripted producer and fake stores
- Validation before any store or producer work
- Unknown runner
- Overall timeout
- Store failures propagating unchanged
"""

import asyncio
from datetime import date, timedelta
from unittest.mock import AsyncMock

import pytest

from marathon_coach.planner.errors import ChunkParseError, GenerationTimeoutError, PlanValidationError
from marathon_coach.planner.state import GenerationStatus
from marathon_coach.plans.validators import validate_plan
from marathon_coach.services.plan_service import generate_plan_for_runner
from marathon_coach.stores import PersistenceError

TODAY = date(2026, 1, 5)
RACE_DAY = TODAY + timedelta(days=84)


@pytest.mark.asyncio
async def test_generates_and_saves_twelve_week_plan(profile_store, plan_store, scripted_producer):
    producer = scripted_producer()

    plan, plan_id = await generate_plan_for_runner(
        "runner-1",
        RACE_DAY,
        4,
        profile_store=profile_store,
        plan_store=plan_store,
        producer=producer,
        today=TODAY,
        sleep=AsyncMock(),
    )

    assert plan_id == "plan-1"
    assert plan_store.plans == [plan]
    assert plan.total_weeks == 12
    assert plan.start_date == TODAY
    assert plan.goal_marathon_date == RACE_DAY
    assert len(plan.days) == 84
    assert validate_plan(plan) == []

    metrics = profile_store.metrics["runner-1"]
    assert metrics.accuracy_score == 50 + 10 + 3
    assert "ATHLETE PROFILE" in producer.requests[0].athlete_summary
    # Baseline comes from the profile's weekly mileage
    assert producer.requests[0].week_targets[0].target_miles == 31

    statuses = [p.status for runner_id, p in profile_store.progress if runner_id == "runner-1"]
    assert statuses[0] == GenerationStatus.GENERATING_CHUNK
    assert statuses[-1] == GenerationStatus.DONE


@pytest.mark.asyncio
async def test_invalid_request_fails_before_any_work(profile_store, plan_store, scripted_producer):
    producer = scripted_producer()

    with pytest.raises(PlanValidationError, match="at least 12 weeks away"):
        await generate_plan_for_runner(
            "runner-1",
            TODAY + timedelta(days=70),
            4,
            profile_store=profile_store,
            plan_store=plan_store,
            producer=producer,
            today=TODAY,
        )

    assert profile_store.get_calls == 0
    assert producer.requests == []
    assert plan_store.plans == []


@pytest.mark.asyncio
async def test_invalid_days_per_week(profile_store, plan_store, scripted_producer):
    with pytest.raises(PlanValidationError, match="days_per_week"):
        await generate_plan_for_runner(
            "runner-1",
            RACE_DAY,
            7,
            profile_store=profile_store,
            plan_store=plan_store,
            producer=scripted_producer(),
            today=TODAY,
        )


@pytest.mark.asyncio
async def test_unknown_runner(profile_store, plan_store, scripted_producer):
    with pytest.raises(PlanValidationError, match="Runner ghost not found"):
        await generate_plan_for_runner(
            "ghost",
            RACE_DAY,
            4,
            profile_store=profile_store,
            plan_store=plan_store,
            producer=scripted_producer(),
            today=TODAY,
        )


@pytest.mark.asyncio
async def test_timeout_raises_and_saves_nothing(profile_store, plan_store):
    class StalledProducer:
        async def generate(self, request):
            await asyncio.sleep(10)
            return []

    with pytest.raises(GenerationTimeoutError) as exc_info:
        await generate_plan_for_runner(
            "runner-1",
            RACE_DAY,
            4,
            profile_store=profile_store,
            plan_store=plan_store,
            producer=StalledProducer(),
            today=TODAY,
            timeout_seconds=0.05,
        )

    assert (exc_info.value.start_week, exc_info.value.end_week) == (1, 12)
    assert plan_store.plans == []


@pytest.mark.asyncio
async def test_chunk_failure_saves_nothing(profile_store, plan_store, scripted_producer):
    producer = scripted_producer({5: "not a plan"})

    with pytest.raises(ChunkParseError, match="Weeks 5-8"):
        await generate_plan_for_runner(
            "runner-1",
            RACE_DAY,
            4,
            profile_store=profile_store,
            plan_store=plan_store,
            producer=producer,
            today=TODAY,
            sleep=AsyncMock(),
        )

    assert plan_store.plans == []
    assert profile_store.progress[-1][1].status == GenerationStatus.FAILED


@pytest.mark.asyncio
async def test_store_failure_propagates(profile_store, failing_plan_store, scripted_producer):
    with pytest.raises(PersistenceError, match="write rejected"):
        await generate_plan_for_runner(
            "runner-1",
            RACE_DAY,
            4,
            profile_store=profile_store,
            plan_store=failing_plan_store,
            producer=scripted_producer(),
            today=TODAY,
            sleep=AsyncMock(),
        )
