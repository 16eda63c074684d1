"""Root conftest for all tests.

Shared fakes for the external collaborators (profile/plan/session stores,
audio sink, workout producer) and a builder for well-formed producer output.
"""

from datetime import timedelta
from typing import Any

import pytest
from loguru import logger

from marathon_coach.athletes.models import DerivedMetrics, RunnerProfile
from marathon_coach.planner.producer import ChunkRequest
from marathon_coach.planner.state import GenerationProgress
from marathon_coach.plans.types import TrainingPlan
from marathon_coach.stores import PersistenceError
from marathon_coach.tracking.session import RunSession


@pytest.fixture(autouse=True)
def _quiet_logger():
    """Keep loguru output out of test reports; tests that inspect logs add their own sink."""
    logger.remove()
    yield
    logger.remove()


class FakeProfileStore:
    def __init__(self, profiles: dict[str, RunnerProfile] | None = None) -> None:
        self.profiles = profiles or {}
        self.metrics: dict[str, DerivedMetrics] = {}
        self.progress: list[tuple[str, GenerationProgress]] = []
        self.get_calls = 0

    async def get_profile(self, runner_id: str) -> RunnerProfile | None:
        self.get_calls += 1
        return self.profiles.get(runner_id)

    async def save_derived_metrics(self, runner_id: str, metrics: DerivedMetrics) -> None:
        self.metrics[runner_id] = metrics

    async def update_generation_progress(self, runner_id: str, progress: GenerationProgress) -> None:
        self.progress.append((runner_id, progress))


class FakePlanStore:
    def __init__(self, error: Exception | None = None) -> None:
        self.plans: list[TrainingPlan] = []
        self.error = error

    async def save_plan(self, plan: TrainingPlan) -> str:
        if self.error is not None:
            raise self.error
        self.plans.append(plan)
        return f"plan-{len(self.plans)}"


class FakeSessionStore:
    def __init__(self) -> None:
        self.sessions: list[tuple[str, RunSession]] = []

    async def save_session(self, runner_id: str, session: RunSession) -> str:
        self.sessions.append((runner_id, session))
        return f"session-{len(self.sessions)}"


class RecordingCueSink:
    def __init__(self) -> None:
        self.cues: list[str] = []

    def announce(self, text: str) -> None:
        self.cues.append(text)


def well_formed_chunk(request: ChunkRequest, *, week_override: int | None = None) -> list[dict[str, Any]]:
    """Producer output that already satisfies every plan invariant.

    Runs sit at the start of each week except the long run, which is day 7.
    """
    days: list[dict[str, Any]] = []
    runs = request.days_per_week
    for offset in range(request.expected_days):
        day_date = request.chunk_start_date + timedelta(days=offset)
        week = request.start_week + offset // 7
        day_in_week = offset % 7 + 1
        if day_in_week == 7:
            item = {"type": "long", "distance": 10.0, "targetPace": "9:30", "description": "Long run"}
        elif day_in_week <= runs - 1:
            item = {"type": "easy", "distance": 5.0, "targetPace": "9:00", "description": "Easy run"}
        else:
            item = {"type": "rest", "distance": 0, "targetPace": "", "description": "Rest"}
        item.update(
            {
                "date": day_date.isoformat(),
                "week": week_override if week_override is not None else week,
                "day": day_in_week,
            }
        )
        days.append(item)
    return days


class ScriptedProducer:
    """WorkoutProducer that records requests and answers from a script.

    ``script`` maps a chunk's start week to either output (list/str), an
    exception to raise, or a callable taking the request. Unscripted chunks
    get well-formed output.
    """

    def __init__(self, script: dict[int, Any] | None = None) -> None:
        self.script = script or {}
        self.requests: list[ChunkRequest] = []

    async def generate(self, request: ChunkRequest) -> list[Any] | str:
        self.requests.append(request)
        answer = self.script.get(request.start_week)
        if answer is None:
            return well_formed_chunk(request)
        if isinstance(answer, Exception):
            raise answer
        if callable(answer):
            return answer(request)
        return answer


@pytest.fixture
def profile_store() -> FakeProfileStore:
    return FakeProfileStore(
        {
            "runner-1": RunnerProfile(runner_id="runner-1", age=35, weekly_mileage=30.0),
        }
    )


@pytest.fixture
def plan_store() -> FakePlanStore:
    return FakePlanStore()


@pytest.fixture
def failing_plan_store() -> FakePlanStore:
    return FakePlanStore(error=PersistenceError("write rejected"))


@pytest.fixture
def session_store() -> FakeSessionStore:
    return FakeSessionStore()


@pytest.fixture
def cue_sink() -> RecordingCueSink:
    return RecordingCueSink()


@pytest.fixture
def scripted_producer():
    """Factory fixture: ``scripted_producer({5: "not json"})``."""
    return ScriptedProducer


@pytest.fixture
def chunk_builder():
    """Builder for well-formed producer output for a ChunkRequest."""
    return well_formed_chunk
