"""Live run session records.

Timestamps are epoch seconds (float) throughout.
"""

from enum import StrEnum

from pydantic import BaseModel, Field


class SessionStatus(StrEnum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class GeoFix(BaseModel):
    """One GPS position.

    Attributes:
        latitude: Degrees
        longitude: Degrees
        timestamp: Epoch seconds
        altitude: Meters, when reported
        accuracy: Horizontal accuracy in meters, when reported
    """

    latitude: float
    longitude: float
    timestamp: float
    altitude: float | None = None
    accuracy: float | None = None


class HeartRateReading(BaseModel):
    """Raw reading delivered by a heart-rate stream."""

    bpm: int
    timestamp: float


class HeartRateSample(BaseModel):
    bpm: int
    timestamp: float
    zone: int = Field(ge=1, le=5)


class PaceSample(BaseModel):
    pace_sec_per_mile: float
    timestamp: float


class RunSession(BaseModel):
    """A live run, mutated while active and finalized on finish.

    Attributes:
        start_time: Session start (epoch seconds)
        end_time: Finish time, None until finished
        elapsed_seconds: Whole seconds since start, frozen at finish
        total_distance_miles: Accumulated haversine distance
        average_pace: Final pace ("M:SS"); average, else smoothed, else "0:00"
        average_heart_rate: Mean bpm over all samples, None without samples
        max_heart_rate: Max bpm over all samples, None without samples
        target_pace: Target pace the run was coached against
        gps_track: Every fix received, in order
        heart_rate_samples: Every zone-classified HR sample, in order
        pace_samples: Instantaneous pace samples, in order
        status: active / completed / cancelled
    """

    start_time: float
    end_time: float | None = None
    elapsed_seconds: int = 0
    total_distance_miles: float = 0.0
    average_pace: str | None = None
    average_heart_rate: int | None = None
    max_heart_rate: int | None = None
    target_pace: str
    gps_track: list[GeoFix] = Field(default_factory=list)
    heart_rate_samples: list[HeartRateSample] = Field(default_factory=list)
    pace_samples: list[PaceSample] = Field(default_factory=list)
    status: SessionStatus = SessionStatus.ACTIVE
