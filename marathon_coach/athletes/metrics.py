"""Derive fitness metrics from a runner profile.

This is the only entry point that turns a RunnerProfile into DerivedMetrics.
Metrics have no identity of their own and are always recomputed from the
profile.
"""

from loguru import logger

from marathon_coach.athletes.accuracy import accuracy_score, data_quality_label
from marathon_coach.athletes.models import DerivedMetrics, FitnessLevel, RunnerProfile
from marathon_coach.physiology.calculator import (
    age_gender_grading_factor,
    heart_rate_zones,
    predicted_marathon_pace,
    riegel_exponent,
    training_paces,
    vdot,
)
from marathon_coach.physiology.constants import PhysiologyConstants, get_physiology_constants
from marathon_coach.physiology.time_format import format_minutes, seconds_to_pace

ADVANCED_5K_MINUTES = 22.0
INTERMEDIATE_5K_MINUTES = 26.0


def equivalent_5k_minutes(time_minutes: float, distance_km: float, constants: PhysiologyConstants) -> float:
    """Scale a race result to a 5K time with the standard Riegel exponent."""
    return time_minutes * (5.0 / distance_km) ** constants.standard_riegel_exponent


def classify_fitness_level(five_k_minutes: float) -> FitnessLevel:
    """Fitness level from a 5K time: under 22 advanced, under 26 intermediate."""
    if five_k_minutes < ADVANCED_5K_MINUTES:
        return "advanced"
    if five_k_minutes < INTERMEDIATE_5K_MINUTES:
        return "intermediate"
    return "beginner"


def derive_metrics(
    profile: RunnerProfile,
    constants: PhysiologyConstants | None = None,
) -> DerivedMetrics:
    """Compute VDOT, predicted paces, HR zones and accuracy for a runner.

    Args:
        profile: Raw runner profile (defaults are applied here via normalize())
        constants: Optional physiology constants override

    Returns:
        DerivedMetrics for the profile
    """
    constants = constants or get_physiology_constants()
    normalized = profile.normalize()
    best = normalized.best_result

    mileage_tax = riegel_exponent(normalized.weekly_mileage, constants)
    predicted_sec = predicted_marathon_pace(
        best.time_minutes,
        best.distance_km,
        normalized.weekly_mileage,
        constants,
    )
    grading = age_gender_grading_factor(normalized.age, normalized.gender.value, constants)
    adjusted_sec = predicted_sec * grading

    five_k_minutes = equivalent_5k_minutes(best.time_minutes, best.distance_km, constants)
    fitness_level = normalized.fitness_level or classify_fitness_level(five_k_minutes)

    metrics = DerivedMetrics(
        vdot_score=round(vdot(best.time_minutes, best.distance_km), 1),
        predicted_marathon_pace=seconds_to_pace(predicted_sec),
        adjusted_marathon_pace=seconds_to_pace(adjusted_sec),
        adjusted_marathon_pace_seconds=adjusted_sec,
        training_paces=training_paces(adjusted_sec, constants),
        heart_rate_zones=heart_rate_zones(normalized.max_heart_rate),
        accuracy_score=accuracy_score(profile),
        mileage_tax_descriptor=mileage_tax.description,
        riegel_exponent=mileage_tax.exponent,
        age_grading_factor=grading,
        max_heart_rate=normalized.max_heart_rate,
        best_result=best,
        data_quality=data_quality_label(profile),
        equivalent_5k_pace=format_minutes(five_k_minutes),
        fitness_level=fitness_level,
    )

    logger.debug(
        "Derived runner metrics",
        runner_id=profile.runner_id,
        source=best.source.value,
        vdot=metrics.vdot_score,
        marathon_pace=metrics.adjusted_marathon_pace,
        accuracy=metrics.accuracy_score,
    )
    return metrics
