"""Generation progress logging.

One structured "generation_progress" log line per chunk transition. The
generator separately forwards a GenerationProgress record to an optional
callback so the profile store can show "week N of M" to the runner.
"""

import time

from loguru import logger

from marathon_coach.planner.chunks import ChunkWindow


def emit_generation_progress(
    runner_id: str,
    step: str,
    status: str,
    *,
    percent: int | None = None,
    summary: dict[str, object] | None = None,
    error: str | None = None,
    duration_ms: int | None = None,
) -> None:
    """Log one progress event; optional fields are omitted when unset.

    Args:
        runner_id: Runner the plan is generated for
        step: "weeks_<start>_<end>" for a chunk, "finalize" for the plan
        status: "in_progress", "completed" or "failed"
        percent: Share of plan weeks generated (0-100)
        summary: Step counters (days, warnings, ...)
        error: Failure message for a failed step
        duration_ms: Wall time spent on the step
    """
    optional = {
        "percent": percent,
        "summary": summary or None,
        "error": error or None,
        "duration_ms": duration_ms,
    }
    fields = {key: value for key, value in optional.items() if value is not None}
    logger.info("generation_progress", runner_id=runner_id, step=step, status=status, **fields)


def chunk_step(window: ChunkWindow) -> str:
    return f"weeks_{window.start_week}_{window.end_week}"


def chunk_percent(window: ChunkWindow, total_weeks: int, *, done: bool) -> int:
    weeks_done = window.end_week if done else window.start_week - 1
    return int(weeks_done * 100 / total_weeks) if total_weeks else 0


def emit_chunk_start(runner_id: str, window: ChunkWindow, total_weeks: int) -> float:
    """Emit chunk start event and return start time.

    Returns:
        Start time (monotonic) for duration calculation
    """
    emit_generation_progress(
        runner_id=runner_id,
        step=chunk_step(window),
        status="in_progress",
        percent=chunk_percent(window, total_weeks, done=False),
    )
    return time.monotonic()


def emit_chunk_complete(
    runner_id: str,
    window: ChunkWindow,
    total_weeks: int,
    start_time: float,
    summary: dict[str, object] | None = None,
) -> None:
    duration_ms = int((time.monotonic() - start_time) * 1000)

    emit_generation_progress(
        runner_id=runner_id,
        step=chunk_step(window),
        status="completed",
        percent=chunk_percent(window, total_weeks, done=True),
        summary=summary,
        duration_ms=duration_ms,
    )


def emit_chunk_failed(
    runner_id: str,
    window: ChunkWindow,
    start_time: float | None,
    error: str,
) -> None:
    """Emit chunk failure event.

    Args:
        runner_id: Runner identifier
        window: Failing chunk
        start_time: Optional start time for duration calculation
        error: Error message
    """
    duration_ms = None
    if start_time is not None:
        duration_ms = int((time.monotonic() - start_time) * 1000)

    emit_generation_progress(
        runner_id=runner_id,
        step=chunk_step(window),
        status="failed",
        error=error,
        duration_ms=duration_ms,
    )


def emit_plan_summary(runner_id: str, total_weeks: int, day_count: int, run_count: int, warnings: list[str]) -> None:
    """Emit final plan summary after completion."""
    emit_generation_progress(
        runner_id=runner_id,
        step="finalize",
        status="completed",
        percent=100,
        summary={
            "total_weeks": total_weeks,
            "days": day_count,
            "runs": run_count,
            "warnings": len(warnings),
        },
    )
