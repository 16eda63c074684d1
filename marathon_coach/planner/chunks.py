"""Split a plan into bounded week chunks for the workout producer."""

from dataclasses import dataclass
from datetime import date, timedelta

from marathon_coach.config.settings import settings


@dataclass(frozen=True)
class ChunkWindow:
    """A contiguous week range requested in one producer call.

    Attributes:
        index: 0-based chunk position
        start_week: First week (1-based, inclusive)
        end_week: Last week (inclusive)
    """

    index: int
    start_week: int
    end_week: int

    @property
    def weeks(self) -> int:
        return self.end_week - self.start_week + 1

    @property
    def expected_days(self) -> int:
        return self.weeks * 7

    def start_date(self, plan_start: date) -> date:
        return plan_start + timedelta(days=(self.start_week - 1) * 7)

    def end_date(self, plan_start: date) -> date:
        return self.start_date(plan_start) + timedelta(days=self.expected_days - 1)


def plan_chunks(total_weeks: int, chunk_weeks: int | None = None) -> list[ChunkWindow]:
    """Split weeks 1..total_weeks into windows of at most ``chunk_weeks``.

    Args:
        total_weeks: Plan length in weeks
        chunk_weeks: Maximum weeks per chunk (defaults to settings.chunk_weeks)

    Returns:
        Ordered chunk windows covering every week exactly once
    """
    size = max(1, chunk_weeks or settings.chunk_weeks)
    windows: list[ChunkWindow] = []
    start = 1
    while start <= total_weeks:
        end = min(start + size - 1, total_weeks)
        windows.append(ChunkWindow(index=len(windows), start_week=start, end_week=end))
        start = end + 1
    return windows
