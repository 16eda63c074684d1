"""External collaborator interfaces.

Persistence, audio and sensor hardware live outside this package. The core
reaches them only through these protocols. Store failures propagate to the
caller unchanged; implementations conventionally raise PersistenceError.
"""

from collections.abc import AsyncIterator
from typing import Protocol, TypeVar

from marathon_coach.athletes.models import DerivedMetrics, RunnerProfile
from marathon_coach.planner.producer import WorkoutProducer
from marathon_coach.planner.state import GenerationProgress
from marathon_coach.plans.types import TrainingPlan
from marathon_coach.tracking.session import RunSession

T_co = TypeVar("T_co", covariant=True)

__all__ = [
    "AudioCueSink",
    "PersistenceError",
    "PlanStore",
    "ProfileStore",
    "SensorStream",
    "SessionStore",
    "WorkoutProducer",
]


class PersistenceError(Exception):
    """Raised by store implementations when a write is rejected."""

    pass


class ProfileStore(Protocol):
    async def get_profile(self, runner_id: str) -> RunnerProfile | None: ...

    async def save_derived_metrics(self, runner_id: str, metrics: DerivedMetrics) -> None: ...

    async def update_generation_progress(self, runner_id: str, progress: GenerationProgress) -> None: ...


class PlanStore(Protocol):
    async def save_plan(self, plan: TrainingPlan) -> str:
        """Persist a plan, deactivating any prior active plan; returns the plan id."""
        ...


class SessionStore(Protocol):
    async def save_session(self, runner_id: str, session: RunSession) -> str:
        """Persist a finalized run session; returns the session id."""
        ...


class AudioCueSink(Protocol):
    """Fire-and-forget speech output."""

    def announce(self, text: str) -> None: ...


class SensorStream(Protocol[T_co]):
    """A device stream (GPS or heart rate).

    ``connect()`` raises SensorUnavailableError when permission or hardware is
    missing. ``events()`` yields readings until the stream is closed.
    """

    async def connect(self) -> None: ...

    def events(self) -> AsyncIterator[T_co]: ...

    async def close(self) -> None: ...
