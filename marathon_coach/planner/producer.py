"""Workout producer contract and the default LLM-backed producer."""

from datetime import date
from typing import Any, Protocol

from loguru import logger
from pydantic import BaseModel
from pydantic_ai import Agent

from marathon_coach.planner.prompts import SYSTEM_PROMPT, build_chunk_prompt
from marathon_coach.planner.summary import WeekSummary
from marathon_coach.plans.scheduler import WeekTarget, eligible_workout_types, phase_guidance
from marathon_coach.plans.types import TrainingPhase, WorkoutType
from marathon_coach.services.llm.model import get_model


class WeekVocabulary(BaseModel):
    """Phase label and eligible run types for one week of a chunk."""

    week: int
    phase: TrainingPhase
    guidance: str
    eligible_types: list[WorkoutType]

    @classmethod
    def for_target(cls, target: WeekTarget) -> "WeekVocabulary":
        return cls(
            week=target.week,
            phase=target.phase,
            guidance=phase_guidance(target.phase, target.target_miles),
            eligible_types=eligible_workout_types(target.phase),
        )


class ChunkRequest(BaseModel):
    """Everything the producer needs to generate one chunk.

    Attributes:
        runner_id: Runner the plan is for
        start_week: First week of the chunk
        end_week: Last week of the chunk (inclusive)
        total_weeks: Plan length in weeks
        days_per_week: Runs per week
        chunk_start_date: Date of the chunk's first day
        marathon_date: Race day
        athlete_summary: Athlete/physiology text block
        week_targets: Scheduled mileage per week in the chunk
        week_vocabulary: Phase, guidance and allowed run types per week
        previous_week: Summary of the last completed week (None for the first chunk)
    """

    runner_id: str
    start_week: int
    end_week: int
    total_weeks: int
    days_per_week: int
    chunk_start_date: date
    marathon_date: date
    athlete_summary: str
    week_targets: list[WeekTarget]
    week_vocabulary: list[WeekVocabulary]
    previous_week: WeekSummary | None = None

    @property
    def phase(self) -> TrainingPhase:
        return self.week_vocabulary[0].phase

    @property
    def expected_days(self) -> int:
        return (self.end_week - self.start_week + 1) * 7


class WorkoutProducer(Protocol):
    """External generator of day objects for a chunk.

    Output may be malformed, oversized or undersized; reconciliation is the
    sole contract for tolerating it.
    """

    async def generate(self, request: ChunkRequest) -> list[Any] | str: ...


class LLMWorkoutProducer:
    """WorkoutProducer backed by a pydantic-ai agent returning raw text."""

    def __init__(self, agent: Agent | None = None, model: str | None = None) -> None:
        self._agent = agent
        self._model = model

    def _get_agent(self) -> Agent:
        if self._agent is None:
            self._agent = Agent(
                model=self._model or get_model(),
                system_prompt=SYSTEM_PROMPT,
                output_type=str,
            )
        return self._agent

    async def generate(self, request: ChunkRequest) -> list[Any] | str:
        """Generate one chunk of day objects.

        Raises:
            RuntimeError: If the agent call fails
        """
        prompt = build_chunk_prompt(request)
        logger.debug(
            "Calling LLM for chunk generation",
            runner_id=request.runner_id,
            start_week=request.start_week,
            end_week=request.end_week,
            prompt_chars=len(prompt),
        )

        try:
            result = await self._get_agent().run(prompt)
        except Exception as e:
            logger.error(
                "LLM chunk generation failed",
                error_type=type(e).__name__,
                error_message=str(e),
                start_week=request.start_week,
                end_week=request.end_week,
            )
            raise RuntimeError(f"Failed to generate weeks {request.start_week}-{request.end_week}: {e}") from e

        return result.output
