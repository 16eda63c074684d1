"""Day-of adjustments for weather and recovery.

Both lookups are explainable bands rather than models, so the runner can be
told exactly why a target moved.
"""

from pydantic import BaseModel

# (max temperature F inclusive, seconds/mile to add, description)
HEAT_BANDS: tuple[tuple[float, int, str], ...] = (
    (50, 0, "Ideal conditions"),
    (60, 0, "Good conditions"),
    (70, 10, "Add 10 sec/mile"),
    (80, 20, "Add 20 sec/mile, hydrate more"),
    (90, 40, "Add 40 sec/mile, consider early morning"),
)
EXTREME_HEAT = (60, "Add 60+ sec/mile, consider treadmill or rest")

# (min recovery score inclusive, intensity factor, description)
RECOVERY_BANDS: tuple[tuple[float, float, str], ...] = (
    (80, 1.1, "Excellent recovery - can push harder today"),
    (67, 1.0, "Good recovery - normal training"),
    (50, 0.9, "Moderate recovery - reduce intensity 10%"),
    (33, 0.75, "Poor recovery - easy day or rest"),
)
VERY_LOW_RECOVERY = (0.5, "Very low recovery - recommend rest day")


class HeatAdjustment(BaseModel):
    seconds_per_mile: int
    description: str


class RecoveryAdjustment(BaseModel):
    factor: float
    description: str


def heat_adjustment(temperature_f: float) -> HeatAdjustment:
    """Seconds per mile to add to a target pace at the given temperature."""
    for max_temp, seconds, description in HEAT_BANDS:
        if temperature_f <= max_temp:
            return HeatAdjustment(seconds_per_mile=seconds, description=description)
    seconds, description = EXTREME_HEAT
    return HeatAdjustment(seconds_per_mile=seconds, description=description)


def recovery_adjustment(recovery_score: float | None) -> RecoveryAdjustment:
    """Intensity factor from a wearable recovery score (0-100).

    A missing (or zero) score means no data, so the plan is followed as written.
    """
    if not recovery_score:
        return RecoveryAdjustment(factor=1.0, description="No recovery data - following standard plan")
    for min_score, factor, description in RECOVERY_BANDS:
        if recovery_score >= min_score:
            return RecoveryAdjustment(factor=factor, description=description)
    factor, description = VERY_LOW_RECOVERY
    return RecoveryAdjustment(factor=factor, description=description)
