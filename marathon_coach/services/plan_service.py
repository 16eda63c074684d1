"""Plan service - orchestration layer for training plan generation.

This service provides the entry point for plan generation. It handles:
- Request validation (before any generation work)
- Deriving and handing back runner metrics
- Chunked generation under a caller timeout
- Persistence (via the plan store)

Nothing is persisted until the whole plan is assembled and reconciled, so a
failed or timed-out generation can be retried from scratch.
"""

import asyncio
from datetime import date
from functools import partial

from loguru import logger

from marathon_coach.athletes.metrics import derive_metrics
from marathon_coach.config.settings import settings
from marathon_coach.planner.errors import GenerationTimeoutError, PlanValidationError
from marathon_coach.planner.generator import ChunkedPlanGenerator, PlanRequest, SleepFn
from marathon_coach.planner.producer import LLMWorkoutProducer, WorkoutProducer
from marathon_coach.planner.prompts import build_athlete_summary
from marathon_coach.plans.types import TrainingPlan
from marathon_coach.plans.validators import validate_plan, validate_plan_request
from marathon_coach.stores import PlanStore, ProfileStore


async def generate_plan_for_runner(
    runner_id: str,
    marathon_date: date,
    days_per_week: int,
    *,
    profile_store: ProfileStore,
    plan_store: PlanStore,
    producer: WorkoutProducer | None = None,
    today: date | None = None,
    timeout_seconds: float | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> tuple[TrainingPlan, str]:
    """Generate and persist a marathon training plan.

    Args:
        runner_id: Runner identity in the profile store
        marathon_date: Race day
        days_per_week: Runs per week (3-6)
        profile_store: Profile collaborator
        plan_store: Plan collaborator (deactivates prior plans on save)
        producer: Workout producer (defaults to the LLM producer)
        today: Plan start date (defaults to today)
        timeout_seconds: Overall generation timeout (defaults to settings)
        sleep: Async sleep used between chunks

    Returns:
        Tuple of (persisted plan, plan id)

    Raises:
        PlanValidationError: Invalid request or unknown runner
        GenerationFailure: A chunk failed, or the timeout was exceeded
    """
    start_date = today or date.today()
    total_weeks = validate_plan_request(start_date, marathon_date, days_per_week)

    profile = await profile_store.get_profile(runner_id)
    if profile is None:
        raise PlanValidationError(f"Runner {runner_id} not found")

    metrics = derive_metrics(profile)
    await profile_store.save_derived_metrics(runner_id, metrics)

    normalized = profile.normalize()
    request = PlanRequest(
        runner_id=runner_id,
        start_date=start_date,
        marathon_date=marathon_date,
        total_weeks=total_weeks,
        days_per_week=days_per_week,
        baseline_miles=normalized.weekly_mileage,
        athlete_summary=build_athlete_summary(normalized, metrics),
    )

    generator = ChunkedPlanGenerator(
        producer or LLMWorkoutProducer(),
        sleep=sleep,
        on_progress=partial(profile_store.update_generation_progress, runner_id),
    )

    timeout = settings.generation_timeout_seconds if timeout_seconds is None else timeout_seconds
    try:
        result = await asyncio.wait_for(generator.generate(request), timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.error("Plan generation timed out", runner_id=runner_id, timeout_seconds=timeout)
        raise GenerationTimeoutError(1, total_weeks, f"generation exceeded {timeout:g}s") from e

    plan = result.to_plan(request)
    violations = validate_plan(plan)
    if violations:
        logger.warning("Plan accepted with invariant deviations", runner_id=runner_id, violations=violations)

    plan_id = await plan_store.save_plan(plan)
    logger.info(
        "Training plan generated",
        runner_id=runner_id,
        plan_id=plan_id,
        total_weeks=total_weeks,
        days_per_week=days_per_week,
        warnings=len(plan.warnings),
    )
    return plan, plan_id
