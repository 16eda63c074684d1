"""Runner profile and derived fitness metrics.

RunnerProfile mirrors what the profile store holds: sparse, optional fields.
``RunnerProfile.normalize()`` is the only place defaults are applied, so every
downstream calculation agrees on "age 30, male, 25 mi/week" when data is
missing.
"""

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field

from marathon_coach.physiology.calculator import max_heart_rate
from marathon_coach.physiology.constants import get_physiology_constants
from marathon_coach.physiology.time_format import parse_time_to_minutes
from marathon_coach.physiology.types import HeartRateZone, TrainingPaces

DEFAULT_AGE = 30
DEFAULT_WEEKLY_MILEAGE = 25.0

HALF_MARATHON_KM = 21.0975


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ResultSource(StrEnum):
    """Where the reference race result came from, in priority order."""

    WEARABLE = "wearable_auto"
    MANUAL_5K = "manual_5k"
    MANUAL_10K = "manual_10k"
    MANUAL_HALF = "manual_half"
    ESTIMATE = "estimate"


FitnessLevel = Literal["beginner", "intermediate", "advanced"]


class ManualPRs(BaseModel):
    """Self-reported personal records as "MM:SS" or "H:MM:SS" strings."""

    five_k: str | None = None
    ten_k: str | None = None
    half_marathon: str | None = None

    def any_present(self) -> bool:
        return bool(self.five_k or self.ten_k or self.half_marathon)


class BestResult(BaseModel):
    """The single race result every prediction is anchored to."""

    time_minutes: float = Field(gt=0)
    distance_km: float = Field(gt=0)
    source: ResultSource


class RunnerProfile(BaseModel):
    """Runner profile as supplied by the profile store (read-only to the core).

    Attributes:
        runner_id: Store identity
        age: Age in years
        gender: Gender (drives the grading factor)
        weekly_mileage: Average weekly mileage over the last 4 weeks
        max_heart_rate: Measured max HR; Tanaka estimate when absent
        wearable_connected: Strava link or Terra key present
        wearable_best_5k_minutes: Best 5K found in wearable activities
        manual_prs: Self-reported PRs
        fitness_level: Optional self-assessed or wearable-derived level
    """

    runner_id: str
    age: int | None = None
    gender: Gender | None = None
    weekly_mileage: float | None = None
    max_heart_rate: int | None = None
    wearable_connected: bool = False
    wearable_best_5k_minutes: float | None = None
    manual_prs: ManualPRs = Field(default_factory=ManualPRs)
    fitness_level: FitnessLevel | None = None

    def best_result(self) -> BestResult:
        """Select exactly one reference result by strict priority.

        wearable 5K > manual 5K > manual 10K > manual half > generic estimate.
        Lower-priority results are ignored even when present.
        """
        if self.wearable_connected and self.wearable_best_5k_minutes:
            return BestResult(
                time_minutes=self.wearable_best_5k_minutes,
                distance_km=5,
                source=ResultSource.WEARABLE,
            )

        candidates = (
            (self.manual_prs.five_k, 5.0, ResultSource.MANUAL_5K),
            (self.manual_prs.ten_k, 10.0, ResultSource.MANUAL_10K),
            (self.manual_prs.half_marathon, HALF_MARATHON_KM, ResultSource.MANUAL_HALF),
        )
        for time_str, distance_km, source in candidates:
            minutes = parse_time_to_minutes(time_str)
            if minutes > 0:
                return BestResult(time_minutes=minutes, distance_km=distance_km, source=source)

        return BestResult(
            time_minutes=get_physiology_constants().generic_5k_minutes,
            distance_km=5,
            source=ResultSource.ESTIMATE,
        )

    def normalize(self) -> "NormalizedProfile":
        """Apply every default once and pick the reference result."""
        age = self.age or DEFAULT_AGE
        weekly_mileage = self.weekly_mileage or DEFAULT_WEEKLY_MILEAGE
        return NormalizedProfile(
            runner_id=self.runner_id,
            age=age,
            gender=self.gender or Gender.MALE,
            weekly_mileage=weekly_mileage,
            max_heart_rate=self.max_heart_rate or max_heart_rate(age),
            best_result=self.best_result(),
            wearable_connected=self.wearable_connected,
            has_manual_prs=self.manual_prs.any_present(),
            fitness_level=self.fitness_level,
        )


class NormalizedProfile(BaseModel):
    """RunnerProfile with all defaults resolved."""

    runner_id: str
    age: int
    gender: Gender
    weekly_mileage: float
    max_heart_rate: int
    best_result: BestResult
    wearable_connected: bool
    has_manual_prs: bool
    fitness_level: FitnessLevel | None = None


class DerivedMetrics(BaseModel):
    """Fitness metrics derived from a profile; always recomputed, never diffed.

    Attributes:
        vdot_score: VDOT rounded to one decimal
        predicted_marathon_pace: Riegel marathon pace per mile ("M:SS")
        adjusted_marathon_pace: Predicted pace after age/gender grading
        training_paces: Easy/tempo/interval paces
        heart_rate_zones: Five HR zones from max HR
        accuracy_score: 0-100 confidence in the prediction
        mileage_tax_descriptor: Which Riegel exponent band applied
        riegel_exponent: The exponent itself
        age_grading_factor: Multiplier applied to predicted pace
        max_heart_rate: Max HR used for zones
        best_result: Reference race result
        data_quality: HIGH / MEDIUM / LOW label for the data behind the prediction
        equivalent_5k_pace: Reference result scaled to a 5K time
        fitness_level: Stated level, or classified from the equivalent 5K
    """

    vdot_score: float
    predicted_marathon_pace: str
    adjusted_marathon_pace: str
    adjusted_marathon_pace_seconds: float
    training_paces: TrainingPaces
    heart_rate_zones: list[HeartRateZone]
    accuracy_score: int
    mileage_tax_descriptor: str
    riegel_exponent: float
    age_grading_factor: float
    max_heart_rate: int
    best_result: BestResult
    data_quality: str
    equivalent_5k_pace: str
    fitness_level: FitnessLevel
