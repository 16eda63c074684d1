"""Live run tracker.

A synchronous state object with one update method per event source. Nothing
here awaits, so when every call is made from one event loop (see
RunSessionRunner) the session accumulators are never updated concurrently.

States: idle -> tracking (start) -> idle (finish or cancel).
"""

import math
from dataclasses import dataclass
from enum import StrEnum

from loguru import logger

from marathon_coach.athletes.models import DEFAULT_AGE
from marathon_coach.config.settings import settings
from marathon_coach.physiology.calculator import heart_rate_zone, max_heart_rate, round_half_up
from marathon_coach.physiology.time_format import NO_PACE, format_duration, pace_to_seconds, seconds_to_pace
from marathon_coach.stores import AudioCueSink
from marathon_coach.tracking.cues import CueGate
from marathon_coach.tracking.errors import TrackerStateError
from marathon_coach.tracking.geo import haversine_miles
from marathon_coach.tracking.session import GeoFix, HeartRateSample, PaceSample, RunSession, SessionStatus

ZERO_PACE = "0:00"


class TrackerStatus(StrEnum):
    IDLE = "idle"
    TRACKING = "tracking"


@dataclass(frozen=True)
class TrackerSnapshot:
    """Display values at a point in time."""

    status: TrackerStatus
    elapsed_seconds: int
    elapsed: str
    distance_miles: float
    current_pace: str
    smoothed_pace: str
    average_pace: str
    target_pace: str
    current_heart_rate: int | None
    current_zone: int | None


class LiveRunTracker:
    """Single-session run tracker with rate-limited coaching cues.

    Args:
        target_pace: Target pace ("M:SS"); the default easy pace when empty
        max_heart_rate: Max HR used for zone classification
        cue_sink: Optional audio sink; cues are skipped without one
        smoothing_window_seconds: Trailing window for smoothed pace
        cue_interval_seconds: Minimum gap between alerts of one category
        pace_tolerance_seconds: Allowed deviation from target before alerting
    """

    def __init__(
        self,
        target_pace: str | None = None,
        max_heart_rate: int | None = None,
        cue_sink: AudioCueSink | None = None,
        *,
        smoothing_window_seconds: float | None = None,
        cue_interval_seconds: float | None = None,
        pace_tolerance_seconds: float | None = None,
    ) -> None:
        self.target_pace = target_pace or settings.default_target_pace
        self.max_heart_rate = max_heart_rate or _default_max_heart_rate()
        self._cue_sink = cue_sink
        self._smoothing_window = smoothing_window_seconds or settings.smoothing_window_seconds
        self._cue_interval = settings.cue_interval_seconds if cue_interval_seconds is None else cue_interval_seconds
        self._pace_tolerance = (
            settings.pace_tolerance_seconds if pace_tolerance_seconds is None else pace_tolerance_seconds
        )

        self.status = TrackerStatus.IDLE
        self.session: RunSession | None = None
        self._reset()

    def _reset(self) -> None:
        self._last_fix: GeoFix | None = None
        self._current_pace = NO_PACE
        self._smoothed_pace_sec: float | None = None
        self._current_hr: int | None = None
        self._current_zone: int | None = None
        self._gate = CueGate(self._cue_interval, self._pace_tolerance)

    def _require_tracking(self, operation: str) -> RunSession:
        if self.status != TrackerStatus.TRACKING or self.session is None:
            raise TrackerStateError(f"Cannot {operation} while {self.status.value}")
        return self.session

    # -- events -------------------------------------------------------------

    def start(self, now: float) -> RunSession:
        """Begin a session, resetting every accumulator.

        Raises:
            TrackerStateError: If a session is already being tracked
        """
        if self.status == TrackerStatus.TRACKING:
            raise TrackerStateError("Cannot start while tracking")

        self._reset()
        self.session = RunSession(start_time=now, target_pace=self.target_pace)
        self.status = TrackerStatus.TRACKING
        logger.info("Run tracking started", target_pace=self.target_pace, max_heart_rate=self.max_heart_rate)
        return self.session

    def ingest_fix(self, fix: GeoFix) -> PaceSample | None:
        """Accumulate distance from a GPS fix and record instantaneous pace.

        Returns:
            The pace sample, or None when no pace could be computed (first
            fix, no movement, or non-increasing timestamp)
        """
        session = self._require_tracking("ingest GPS")
        session.gps_track.append(fix)

        previous, self._last_fix = self._last_fix, fix
        if previous is None:
            return None

        distance_miles = haversine_miles(previous.latitude, previous.longitude, fix.latitude, fix.longitude)
        session.total_distance_miles += distance_miles

        sample = None
        time_delta = fix.timestamp - previous.timestamp
        if time_delta > 0 and distance_miles > 0:
            sample = PaceSample(pace_sec_per_mile=time_delta / distance_miles, timestamp=fix.timestamp)
            session.pace_samples.append(sample)
            self._current_pace = seconds_to_pace(sample.pace_sec_per_mile)

        self._evaluate_cues(fix.timestamp)
        return sample

    def ingest_heart_rate(self, bpm: int, timestamp: float) -> HeartRateSample:
        """Classify and record a heart-rate reading."""
        session = self._require_tracking("ingest heart rate")
        sample = HeartRateSample(bpm=bpm, timestamp=timestamp, zone=heart_rate_zone(bpm, self.max_heart_rate))
        session.heart_rate_samples.append(sample)
        self._current_hr = bpm
        self._current_zone = sample.zone

        self._evaluate_cues(timestamp)
        return sample

    def tick(self, now: float) -> TrackerSnapshot:
        """Advance elapsed time and recompute smoothed pace.

        Smoothed pace is the mean of pace samples newer than the trailing
        window. When the window is empty the previous value is kept.
        """
        session = self._require_tracking("tick")
        session.elapsed_seconds = max(0, math.floor(now - session.start_time))

        cutoff = now - self._smoothing_window
        recent = [s.pace_sec_per_mile for s in session.pace_samples if s.timestamp > cutoff]
        if recent:
            self._smoothed_pace_sec = sum(recent) / len(recent)

        self._evaluate_cues(now)
        return self.snapshot()

    def finish(self, now: float) -> RunSession:
        """Finalize the session and return it for persistence.

        Raises:
            TrackerStateError: If no session is being tracked
        """
        session = self._require_tracking("finish")
        session.end_time = now
        session.elapsed_seconds = max(0, math.floor(now - session.start_time))

        if session.heart_rate_samples:
            bpms = [s.bpm for s in session.heart_rate_samples]
            session.average_heart_rate = round_half_up(sum(bpms) / len(bpms))
            session.max_heart_rate = max(bpms)

        average = self.average_pace
        smoothed = self.smoothed_pace
        if average != NO_PACE:
            session.average_pace = average
        elif smoothed != NO_PACE:
            session.average_pace = smoothed
        else:
            session.average_pace = ZERO_PACE

        session.status = SessionStatus.COMPLETED
        self.status = TrackerStatus.IDLE
        self.session = None

        logger.info(
            "Run tracking finished",
            elapsed_seconds=session.elapsed_seconds,
            distance_miles=round(session.total_distance_miles, 2),
            average_pace=session.average_pace,
            average_heart_rate=session.average_heart_rate,
        )
        return session

    def cancel(self) -> None:
        """Discard the active session, if any."""
        if self.session is not None:
            self.session.status = SessionStatus.CANCELLED
            logger.info("Run tracking cancelled", elapsed_seconds=self.session.elapsed_seconds)
        self.session = None
        self.status = TrackerStatus.IDLE
        self._reset()

    # -- derived values -----------------------------------------------------

    @property
    def average_pace(self) -> str:
        """Session-to-date pace; "--:--" until there is distance and elapsed time."""
        if self.session is None or self.session.total_distance_miles <= 0 or self.session.elapsed_seconds <= 0:
            return NO_PACE
        return seconds_to_pace(self.session.elapsed_seconds / self.session.total_distance_miles)

    @property
    def smoothed_pace(self) -> str:
        if self._smoothed_pace_sec is None:
            return NO_PACE
        return seconds_to_pace(self._smoothed_pace_sec)

    def snapshot(self) -> TrackerSnapshot:
        session = self.session
        elapsed = session.elapsed_seconds if session else 0
        return TrackerSnapshot(
            status=self.status,
            elapsed_seconds=elapsed,
            elapsed=format_duration(elapsed),
            distance_miles=session.total_distance_miles if session else 0.0,
            current_pace=self._current_pace,
            smoothed_pace=self.smoothed_pace,
            average_pace=self.average_pace,
            target_pace=self.target_pace,
            current_heart_rate=self._current_hr,
            current_zone=self._current_zone,
        )

    # -- cues ---------------------------------------------------------------

    def _evaluate_cues(self, now: float) -> None:
        session = self.session
        if session is None or self._cue_sink is None:
            return

        average = self.average_pace
        milestone_pace = average if average != NO_PACE else self.smoothed_pace
        for _category, text in self._gate.milestones(session.total_distance_miles, milestone_pace):
            self._announce(text)

        pace_cue = self._gate.pace_alert(pace_to_seconds(self.smoothed_pace), pace_to_seconds(self.target_pace), now)
        if pace_cue:
            self._announce(pace_cue)

        hr_cue = self._gate.heart_rate_alert(self._current_zone, now)
        if hr_cue:
            self._announce(hr_cue)

    def _announce(self, text: str) -> None:
        try:
            self._cue_sink.announce(text)
        except Exception as e:
            logger.warning("Audio cue failed", cue=text, error_type=type(e).__name__, error_message=str(e))


def _default_max_heart_rate() -> int:
    return max_heart_rate(DEFAULT_AGE)
