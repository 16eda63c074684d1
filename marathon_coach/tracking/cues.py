"""Coaching cue rules.

Milestones are edge-triggered: each fires once when its integer count goes
up. Pace and heart-rate alerts are interval-gated per category; the gate
only resets when a cue actually fires, so the first alert of a run can fire
immediately.
"""

from enum import StrEnum

from marathon_coach.physiology.constants import KM_PER_MILE

SLOW_DOWN_CUE = "You are ahead of pace. Slow down."
SPEED_UP_CUE = "Pick up the pace."
HEART_RATE_HIGH_CUE = "Heart rate too high. Breathe and slow down."

HIGH_HEART_RATE_ZONE = 4


class CueCategory(StrEnum):
    KILOMETER = "kilometer"
    MILE = "mile"
    PACE = "pace"
    HEART_RATE = "heart_rate"


def milestone_text(count: int, unit: str, pace: str) -> str:
    plural = "s" if count > 1 else ""
    return f"{count} {unit}{plural} completed. Average pace {pace} per mile."


class CueGate:
    """Milestone counters and per-category alert timestamps for one session.

    Args:
        interval_seconds: Minimum gap between two alerts of the same category
        tolerance_seconds: Pace deviation (sec/mile) tolerated before alerting
    """

    def __init__(self, interval_seconds: float, tolerance_seconds: float) -> None:
        self.interval_seconds = interval_seconds
        self.tolerance_seconds = tolerance_seconds
        self.last_kilometer = 0
        self.last_mile = 0
        self._last_alert: dict[CueCategory, float] = {}

    def _alert_allowed(self, category: CueCategory, now: float) -> bool:
        last = self._last_alert.get(category)
        return last is None or now - last > self.interval_seconds

    def _mark(self, category: CueCategory, now: float) -> None:
        self._last_alert[category] = now

    def milestones(self, distance_miles: float, pace: str) -> list[tuple[CueCategory, str]]:
        """Kilometer then mile milestone cues crossed since the last call."""
        cues: list[tuple[CueCategory, str]] = []

        kilometers = int(distance_miles * KM_PER_MILE)
        if kilometers > self.last_kilometer and kilometers > 0:
            cues.append((CueCategory.KILOMETER, milestone_text(kilometers, "kilometer", pace)))
            self.last_kilometer = kilometers

        miles = int(distance_miles)
        if miles > self.last_mile and miles > 0:
            cues.append((CueCategory.MILE, milestone_text(miles, "mile", pace)))
            self.last_mile = miles

        return cues

    def pace_alert(self, smoothed_sec: int | None, target_sec: int | None, now: float) -> str | None:
        """Slow-down / speed-up cue when smoothed pace strays from target."""
        if smoothed_sec is None or target_sec is None:
            return None
        if not self._alert_allowed(CueCategory.PACE, now):
            return None

        # Positive means faster than target
        difference = target_sec - smoothed_sec
        if difference > self.tolerance_seconds:
            self._mark(CueCategory.PACE, now)
            return SLOW_DOWN_CUE
        if difference < -self.tolerance_seconds:
            self._mark(CueCategory.PACE, now)
            return SPEED_UP_CUE
        return None

    def heart_rate_alert(self, zone: int | None, now: float) -> str | None:
        if zone is None or zone < HIGH_HEART_RATE_ZONE:
            return None
        if not self._alert_allowed(CueCategory.HEART_RATE, now):
            return None
        self._mark(CueCategory.HEART_RATE, now)
        return HEART_RATE_HIGH_CUE
