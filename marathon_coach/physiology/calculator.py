"""Physiology calculator - pure, stateless prediction functions.

This module is the single place where race performances are turned into
fitness metrics:
- VDOT (Jack Daniels' Running Formula approximation)
- Riegel marathon prediction with a mileage-adjusted exponent ("mileage tax")
- Age/gender grading
- Training paces and heart-rate zones

Nothing here raises for well-typed input. Garbage in, garbage out: these are
predictive heuristics and callers pre-validate.
"""

import math

from marathon_coach.physiology.constants import (
    MARATHON_DISTANCE_KM,
    MARATHON_DISTANCE_MILES,
    PhysiologyConstants,
    get_physiology_constants,
)
from marathon_coach.physiology.time_format import seconds_to_pace
from marathon_coach.physiology.types import HeartRateZone, MileageTax, TrainingPaces

# (zone, label, lower %, upper %, description)
HEART_RATE_ZONE_BANDS: tuple[tuple[int, str, float, float, str], ...] = (
    (1, "Recovery", 0.50, 0.60, "Very light, conversation pace"),
    (2, "Easy/Aerobic", 0.60, 0.70, "Building aerobic base"),
    (3, "Tempo", 0.70, 0.80, "Comfortably hard"),
    (4, "Threshold", 0.80, 0.90, "Hard, limited conversation"),
    (5, "VO2max", 0.90, 1.00, "Maximum effort"),
)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's)."""
    return math.floor(value + 0.5)


def vdot(time_minutes: float, distance_km: float) -> float:
    """Estimate VDOT from a race performance.

    Args:
        time_minutes: Race time in minutes (> 0)
        distance_km: Race distance in kilometers (> 0)

    Returns:
        VDOT score (unrounded)
    """
    velocity_m_per_min = distance_km / time_minutes * 1000
    percent_vo2max = (
        0.8
        + 0.1894393 * math.exp(-0.012778 * time_minutes)
        + 0.2989558 * math.exp(-0.1932605 * time_minutes)
    )
    vo2_at_velocity = -4.60 + 0.182258 * velocity_m_per_min + 0.000104 * velocity_m_per_min**2
    return vo2_at_velocity / percent_vo2max


def riegel_exponent(
    weekly_mileage: float,
    constants: PhysiologyConstants | None = None,
) -> MileageTax:
    """Select the Riegel exponent for a runner's weekly mileage.

    Low-volume runners are assumed to fade more over the marathon than pure
    Riegel scaling predicts, so they get a larger exponent.
    """
    constants = constants or get_physiology_constants()
    for band in constants.mileage_bands:
        upper_ok = band.max_weekly_miles is None or weekly_mileage < band.max_weekly_miles
        if weekly_mileage >= band.min_weekly_miles and upper_ok:
            return MileageTax(exponent=band.exponent, description=band.description)
    return MileageTax(
        exponent=constants.standard_riegel_exponent,
        description=constants.standard_riegel_description,
    )


def predicted_marathon_minutes(
    pr_time_minutes: float,
    pr_distance_km: float,
    weekly_mileage: float,
    constants: PhysiologyConstants | None = None,
) -> float:
    """Predict marathon finish time in minutes: T2 = T1 * (42.195 / D1) ** exponent."""
    exponent = riegel_exponent(weekly_mileage, constants).exponent
    return pr_time_minutes * (MARATHON_DISTANCE_KM / pr_distance_km) ** exponent


def predicted_marathon_pace(
    pr_time_minutes: float,
    pr_distance_km: float,
    weekly_mileage: float,
    constants: PhysiologyConstants | None = None,
) -> float:
    """Predict marathon pace.

    Args:
        pr_time_minutes: Reference race time in minutes
        pr_distance_km: Reference race distance in kilometers
        weekly_mileage: Current weekly mileage (selects the Riegel exponent)
        constants: Optional constants override

    Returns:
        Predicted marathon pace in seconds per mile
    """
    marathon_minutes = predicted_marathon_minutes(pr_time_minutes, pr_distance_km, weekly_mileage, constants)
    return marathon_minutes / MARATHON_DISTANCE_MILES * 60


def age_gender_grading_factor(
    age: int,
    gender: str,
    constants: PhysiologyConstants | None = None,
) -> float:
    """Multiplicative pace adjustment for age and gender.

    Each age band above 40/50/60 adds its own per-year slowdown on top of the
    full bands below it. Female runners get a flat additional factor modeling
    the elite women's-vs-men's marathon gap.
    """
    constants = constants or get_physiology_constants()

    factor = 1.0
    if age < constants.young_age_limit:
        factor = constants.young_age_factor
    else:
        thresholds = sorted(constants.age_slowdown_per_year)
        for i, threshold in enumerate(thresholds):
            if age <= threshold:
                break
            band_end = thresholds[i + 1] if i + 1 < len(thresholds) else age
            years = min(age, band_end) - threshold
            factor += years * constants.age_slowdown_per_year[threshold]

    if gender == "female":
        factor *= constants.female_factor

    return factor


def training_paces(
    adjusted_marathon_pace_sec: float,
    constants: PhysiologyConstants | None = None,
) -> TrainingPaces:
    """Derive easy/tempo/interval paces from the graded marathon pace."""
    constants = constants or get_physiology_constants()
    return TrainingPaces(
        easy=seconds_to_pace(adjusted_marathon_pace_sec * constants.easy_pace_ratio),
        tempo=seconds_to_pace(adjusted_marathon_pace_sec * constants.tempo_pace_ratio),
        interval=seconds_to_pace(adjusted_marathon_pace_sec * constants.interval_pace_ratio),
    )


def max_heart_rate(age: int) -> int:
    """Tanaka max heart rate: 208 - 0.7 * age."""
    return round_half_up(208 - 0.7 * age)


def heart_rate_zones(max_hr: int) -> list[HeartRateZone]:
    """Five percentage-of-max heart-rate zones."""
    zones: list[HeartRateZone] = []
    for zone, label, lower, upper, description in HEART_RATE_ZONE_BANDS:
        zones.append(
            HeartRateZone(
                zone=zone,
                label=label,
                min=round_half_up(max_hr * lower),
                max=max_hr if zone == 5 else round_half_up(max_hr * upper),
                description=description,
            )
        )
    return zones


def heart_rate_zone(bpm: float, max_hr: int) -> int:
    """Classify a heart rate into zone 1-5 by percentage of max.

    Below zone 1's floor still reports zone 1; at or above 90% is zone 5.
    """
    if max_hr <= 0:
        return 1
    fraction = bpm / max_hr
    for zone, _label, _lower, upper, _description in HEART_RATE_ZONE_BANDS[:-1]:
        if fraction < upper:
            return zone
    return 5
