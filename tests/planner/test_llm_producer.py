"""Tests for the LLM-backed workout producer and its prompts.

The pydantic-ai agent is mocked; no model is called.
"""

from datetime import date, timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from marathon_coach.athletes.metrics import derive_metrics
from marathon_coach.athletes.models import ManualPRs, RunnerProfile
from marathon_coach.physiology.constants import PhysiologyConstants
from marathon_coach.planner.producer import ChunkRequest, LLMWorkoutProducer, WeekVocabulary
from marathon_coach.planner.prompts import build_athlete_summary, build_chunk_prompt
from marathon_coach.planner.summary import WeekSummary
from marathon_coach.plans.scheduler import build_schedule
from marathon_coach.services.llm.model import get_model

START = date(2026, 1, 5)


def chunk_request(previous_week: WeekSummary | None = None) -> ChunkRequest:
    schedule = build_schedule(12, 30)
    return ChunkRequest(
        runner_id="runner-1",
        start_week=5,
        end_week=8,
        total_weeks=12,
        days_per_week=4,
        chunk_start_date=START + timedelta(days=28),
        marathon_date=START + timedelta(days=84),
        athlete_summary="ATHLETE PROFILE (Data Quality: LOW)",
        week_targets=schedule[4:8],
        week_vocabulary=[WeekVocabulary.for_target(t) for t in schedule[4:8]],
        previous_week=previous_week,
    )


def mock_agent(output="[]"):
    agent = MagicMock()
    agent.run = AsyncMock(return_value=SimpleNamespace(output=output))
    return agent


def test_chunk_prompt_states_window_and_counts():
    prompt = build_chunk_prompt(chunk_request())

    assert "Generate weeks 5-8 of a 12-week" in prompt
    assert "starting on 2026-02-02" in prompt
    assert "Output EXACTLY 28 objects" in prompt
    assert "EXACTLY 4 runs and EXACTLY 3 rest days" in prompt
    assert "Week 8 (Peak)" in prompt
    assert "STEP-BACK WEEK" in prompt
    assert "hillRepeats" in prompt
    assert "Previous week summary" not in prompt


def test_chunk_prompt_gives_each_phase_its_own_vocabulary():
    prompt = build_chunk_prompt(chunk_request())

    build_block = prompt.split("Week 5: Build Phase")[1].split("Weeks 6-8: Peak Phase")[0]
    peak_block = prompt.split("Weeks 6-8: Peak Phase")[1].split("REQUIREMENTS:")[0]
    assert "hillRepeats" in build_block
    assert "yasso800s" not in build_block
    assert "yasso800s" in peak_block
    assert "hillRepeats" not in peak_block


def test_chunk_prompt_includes_previous_week_summary():
    summary = WeekSummary(week=4, total_miles=24.0, paces=["9:00", "9:30"], workout_types=["easy", "long"])

    prompt = build_chunk_prompt(chunk_request(previous_week=summary))

    assert (
        "Previous week summary for gradual progression: Total weekly mileage: 24.0 miles. "
        "Average paces: 9:00, 9:30. Workout types: easy, long."
    ) in prompt


def test_athlete_summary_lists_paces_and_zones():
    profile = RunnerProfile(runner_id="r", age=30, weekly_mileage=25, manual_prs=ManualPRs(five_k="22:30"))
    metrics = derive_metrics(profile, PhysiologyConstants())

    summary = build_athlete_summary(profile.normalize(), metrics)

    assert "Reference PR: 22:30 for 5km (source: manual_5k)" in summary
    assert f"Predicted Marathon Pace: {metrics.adjusted_marathon_pace}/mile" in summary
    assert "Zone 5 (VO2max)" in summary
    assert "Data Quality: MEDIUM" in summary


@pytest.mark.asyncio
async def test_producer_returns_agent_output():
    agent = mock_agent('[{"date": "2026-02-02", "type": "easy"}]')
    producer = LLMWorkoutProducer(agent=agent)

    output = await producer.generate(chunk_request())

    assert output == '[{"date": "2026-02-02", "type": "easy"}]'
    prompt = agent.run.await_args.args[0]
    assert "Generate weeks 5-8" in prompt


@pytest.mark.asyncio
async def test_producer_wraps_agent_failure():
    agent = MagicMock()
    agent.run = AsyncMock(side_effect=TimeoutError("upstream timeout"))
    producer = LLMWorkoutProducer(agent=agent)

    with pytest.raises(RuntimeError, match="Failed to generate weeks 5-8: upstream timeout"):
        await producer.generate(chunk_request())


def test_get_model_identifier():
    assert get_model("openai", "gpt-4o") == "openai:gpt-4o"


def test_get_model_rejects_unknown_provider():
    with pytest.raises(ValueError, match="Unsupported LLM provider"):
        get_model("nonexistent", "model")
