"""Chunked generation state (single source of truth).

State is immutable. Each transition produces a new instance through
``advance()``, which checks the transition is legal and logs it.

    idle -> generating_chunk -> reconciling -> generating_chunk | finalizing -> done
    any non-terminal state -> failed
"""

from dataclasses import dataclass, replace
from enum import StrEnum

from loguru import logger
from pydantic import BaseModel

from marathon_coach.planner.errors import PlannerInvariantError
from marathon_coach.plans.types import DayRecord


class GenerationStatus(StrEnum):
    IDLE = "idle"
    GENERATING_CHUNK = "generating_chunk"
    RECONCILING = "reconciling"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS: dict[GenerationStatus, frozenset[GenerationStatus]] = {
    GenerationStatus.IDLE: frozenset({GenerationStatus.GENERATING_CHUNK, GenerationStatus.FAILED}),
    GenerationStatus.GENERATING_CHUNK: frozenset({GenerationStatus.RECONCILING, GenerationStatus.FAILED}),
    GenerationStatus.RECONCILING: frozenset(
        {GenerationStatus.GENERATING_CHUNK, GenerationStatus.FINALIZING, GenerationStatus.FAILED}
    ),
    GenerationStatus.FINALIZING: frozenset({GenerationStatus.DONE, GenerationStatus.FAILED}),
    GenerationStatus.DONE: frozenset(),
    GenerationStatus.FAILED: frozenset(),
}


class GenerationProgress(BaseModel):
    """Progress record handed to the profile store while generating."""

    current_week: int
    total_weeks: int
    status: GenerationStatus


@dataclass(frozen=True)
class GenerationState:
    """Immutable generation state.

    Attributes:
        runner_id: Runner the plan is generated for
        total_weeks: Plan length in weeks
        days_per_week: Runs per week
        status: Current state machine status
        current_week: Last week fully generated (0 before the first chunk)
        chunk_index: Index of the chunk being worked on
        days: Reconciled days accumulated so far
        warnings: Degradations accepted so far
        error: Failure message when status is failed
    """

    runner_id: str
    total_weeks: int
    days_per_week: int
    status: GenerationStatus = GenerationStatus.IDLE
    current_week: int = 0
    chunk_index: int = 0
    days: tuple[DayRecord, ...] = ()
    warnings: tuple[str, ...] = ()
    error: str | None = None

    def replace(self, **changes: object) -> "GenerationState":
        """Create a new state instance with updated fields."""
        return replace(self, **changes)

    def advance(self, status: GenerationStatus, **changes: object) -> "GenerationState":
        """Transition to ``status``, applying ``changes``.

        Raises:
            PlannerInvariantError: If the transition is not allowed
        """
        if status not in _TRANSITIONS[self.status]:
            raise PlannerInvariantError(f"Illegal generation transition {self.status} -> {status}")

        new_state = self.replace(status=status, **changes)
        logger.debug(
            "Generation state transition",
            runner_id=self.runner_id,
            from_status=self.status.value,
            to_status=status.value,
            chunk_index=new_state.chunk_index,
            current_week=new_state.current_week,
        )
        return new_state

    @property
    def is_terminal(self) -> bool:
        return self.status in {GenerationStatus.DONE, GenerationStatus.FAILED}

    def progress(self) -> GenerationProgress:
        return GenerationProgress(
            current_week=self.current_week,
            total_weeks=self.total_weeks,
            status=self.status,
        )
