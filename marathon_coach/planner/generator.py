"""Chunked plan generation.

Drives the workout producer over bounded week chunks, strictly in order:

    for each chunk:
        wait the inter-chunk delay (not before the first chunk)
        ask the producer for the chunk, with a summary of the previous week
        parse, pad or fail, then reconcile the chunk
    reconcile the assembled plan once more

There is no fan-out: later chunks depend on the summary of earlier ones.
Nothing is persisted here, so a failed or timed-out generation can simply be
retried from the first chunk.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import date

from loguru import logger
from pydantic import BaseModel, Field

from marathon_coach.config.settings import settings
from marathon_coach.planner.chunks import ChunkWindow, plan_chunks
from marathon_coach.planner.errors import ChunkUndersizedError, GenerationFailure
from marathon_coach.planner.parsing import (
    coerce_draft_days,
    minimum_usable_days,
    pad_with_rest,
    parse_day_array,
)
from marathon_coach.planner.producer import ChunkRequest, WeekVocabulary, WorkoutProducer
from marathon_coach.planner.progress import (
    emit_chunk_complete,
    emit_chunk_failed,
    emit_chunk_start,
    emit_plan_summary,
)
from marathon_coach.planner.state import GenerationProgress, GenerationState, GenerationStatus
from marathon_coach.planner.summary import summarize_last_week
from marathon_coach.plans.reconciliation.reconcile import reconcile_chunk, reconcile_plan
from marathon_coach.plans.reconciliation.types import DraftDay
from marathon_coach.plans.scheduler import WeekTarget, build_schedule
from marathon_coach.plans.types import DayRecord, TrainingPlan

ProgressCallback = Callable[[GenerationProgress], Awaitable[None]]
SleepFn = Callable[[float], Awaitable[None]]


class PlanRequest(BaseModel):
    """A validated request to generate a plan.

    Attributes:
        runner_id: Runner the plan is for
        start_date: Plan day 1
        marathon_date: Race day
        total_weeks: Plan length in weeks
        days_per_week: Runs per week
        baseline_miles: Current weekly mileage (drives the schedule)
        athlete_summary: Athlete/physiology block given to the producer
    """

    runner_id: str
    start_date: date
    marathon_date: date
    total_weeks: int = Field(ge=1)
    days_per_week: int = Field(ge=1, le=7)
    baseline_miles: float
    athlete_summary: str = ""


class GenerationResult(BaseModel):
    """Reconciled days plus every degradation accepted on the way."""

    days: list[DayRecord]
    warnings: list[str] = Field(default_factory=list)

    def to_plan(self, request: PlanRequest) -> TrainingPlan:
        return TrainingPlan(
            runner_id=request.runner_id,
            start_date=request.start_date,
            goal_marathon_date=request.marathon_date,
            total_weeks=request.total_weeks,
            days_per_week=request.days_per_week,
            days=self.days,
            warnings=self.warnings,
        )


class ChunkedPlanGenerator:
    """Generate a plan chunk by chunk from an untrusted workout producer.

    Args:
        producer: Workout producer
        chunk_weeks: Maximum weeks per chunk
        chunk_delay_seconds: Pause before every chunk except the first
        min_fill_ratio: Smallest fraction of expected days a chunk may return
        sleep: Async sleep used for the inter-chunk delay
        on_progress: Optional async callback receiving progress records
    """

    def __init__(
        self,
        producer: WorkoutProducer,
        *,
        chunk_weeks: int | None = None,
        chunk_delay_seconds: float | None = None,
        min_fill_ratio: float | None = None,
        sleep: SleepFn = asyncio.sleep,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self._producer = producer
        self._chunk_weeks = chunk_weeks or settings.chunk_weeks
        self._chunk_delay = settings.chunk_delay_seconds if chunk_delay_seconds is None else chunk_delay_seconds
        self._min_fill_ratio = settings.min_chunk_fill_ratio if min_fill_ratio is None else min_fill_ratio
        self._sleep = sleep
        self._on_progress = on_progress

    async def _report(self, state: GenerationState) -> None:
        if self._on_progress is not None:
            await self._on_progress(state.progress())

    def _chunk_request(
        self,
        request: PlanRequest,
        window: ChunkWindow,
        schedule: list[WeekTarget],
        state: GenerationState,
    ) -> ChunkRequest:
        week_targets = schedule[window.start_week - 1 : window.end_week]
        return ChunkRequest(
            runner_id=request.runner_id,
            start_week=window.start_week,
            end_week=window.end_week,
            total_weeks=request.total_weeks,
            days_per_week=request.days_per_week,
            chunk_start_date=window.start_date(request.start_date),
            marathon_date=request.marathon_date,
            athlete_summary=request.athlete_summary,
            week_targets=week_targets,
            week_vocabulary=[WeekVocabulary.for_target(t) for t in week_targets],
            previous_week=summarize_last_week(state.days),
        )

    async def _produce_chunk(
        self,
        request: PlanRequest,
        window: ChunkWindow,
        chunk_request: ChunkRequest,
    ) -> tuple[list[DraftDay], list[str]]:
        """Call the producer and turn its output into draft days.

        Raises:
            GenerationFailure: Producer error, unparsable or undersized output
        """
        try:
            output = await self._producer.generate(chunk_request)
        except GenerationFailure:
            raise
        except Exception as e:
            raise GenerationFailure(window.start_week, window.end_week, f"producer error: {e}") from e

        items = parse_day_array(output, window.start_week, window.end_week)
        drafts = coerce_draft_days(items)

        expected = window.expected_days
        minimum = minimum_usable_days(expected, self._min_fill_ratio)
        if len(drafts) < minimum:
            raise ChunkUndersizedError(window.start_week, window.end_week, len(drafts), expected)

        warnings: list[str] = []
        if len(drafts) < expected:
            message = (
                f"Weeks {window.start_week}-{window.end_week}: producer returned {len(drafts)} of "
                f"{expected} days, padded {expected - len(drafts)} rest day(s)"
            )
            logger.warning(message, runner_id=request.runner_id)
            warnings.append(message)
            drafts = pad_with_rest(drafts, expected, window.start_date(request.start_date))

        return drafts, warnings

    async def generate(self, request: PlanRequest) -> GenerationResult:
        """Generate and reconcile a full plan.

        Args:
            request: Validated plan request

        Returns:
            GenerationResult with exactly total_weeks x 7 days

        Raises:
            GenerationFailure: If any chunk fails (names the failing week range)
        """
        schedule = build_schedule(request.total_weeks, request.baseline_miles)
        windows = plan_chunks(request.total_weeks, self._chunk_weeks)
        state = GenerationState(
            runner_id=request.runner_id,
            total_weeks=request.total_weeks,
            days_per_week=request.days_per_week,
        )

        logger.info(
            "Starting chunked plan generation",
            runner_id=request.runner_id,
            total_weeks=request.total_weeks,
            days_per_week=request.days_per_week,
            chunks=len(windows),
        )

        for window in windows:
            if window.index > 0:
                await self._sleep(self._chunk_delay)

            state = state.advance(GenerationStatus.GENERATING_CHUNK, chunk_index=window.index)
            await self._report(state)
            start_time = emit_chunk_start(request.runner_id, window, request.total_weeks)

            chunk_request = self._chunk_request(request, window, schedule, state)
            try:
                drafts, chunk_warnings = await self._produce_chunk(request, window, chunk_request)
            except GenerationFailure as e:
                emit_chunk_failed(request.runner_id, window, start_time, str(e))
                state = state.advance(GenerationStatus.FAILED, error=str(e))
                await self._report(state)
                raise

            state = state.advance(GenerationStatus.RECONCILING)
            outcome = reconcile_chunk(
                drafts,
                window.start_week,
                window.end_week,
                request.days_per_week,
                request.start_date,
            )
            state = state.replace(
                days=state.days + tuple(outcome.days),
                warnings=state.warnings + tuple(chunk_warnings) + tuple(outcome.warnings),
                current_week=window.end_week,
            )
            emit_chunk_complete(
                request.runner_id,
                window,
                request.total_weeks,
                start_time,
                summary={"days": len(outcome.days), "warnings": len(chunk_warnings) + len(outcome.warnings)},
            )

        state = state.advance(GenerationStatus.FINALIZING)
        final = reconcile_plan(list(state.days), request.total_weeks, request.days_per_week, request.start_date)
        state = state.advance(
            GenerationStatus.DONE,
            days=tuple(final.days),
            warnings=state.warnings + tuple(w for w in final.warnings if w not in state.warnings),
        )
        await self._report(state)

        emit_plan_summary(
            request.runner_id,
            request.total_weeks,
            day_count=len(state.days),
            run_count=sum(1 for d in state.days if d.is_run),
            warnings=list(state.warnings),
        )
        return GenerationResult(days=list(state.days), warnings=list(state.warnings))
