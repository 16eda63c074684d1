"""Empirical physiology constants.

The Riegel mileage bands, age-grading slopes and training-pace ratios are
tunable. Defaults live here; a YAML file named by
``settings.physiology_config_path`` may override any subset of them.
"""

from functools import lru_cache
from pathlib import Path

import yaml
from loguru import logger
from pydantic import BaseModel, Field

from marathon_coach.config.settings import settings

MARATHON_DISTANCE_KM = 42.195
MARATHON_DISTANCE_MILES = 26.2
METERS_PER_MILE = 1609.34
KM_PER_MILE = 1.60934


class MileageBand(BaseModel):
    """Riegel exponent applied below ``max_weekly_miles`` (exclusive).

    Attributes:
        min_weekly_miles: Inclusive lower bound of the band
        max_weekly_miles: Exclusive upper bound (None = unbounded)
        exponent: Riegel exponent for runners in this band
        description: Human-readable "mileage tax" label
    """

    min_weekly_miles: float = 0.0
    max_weekly_miles: float | None = None
    exponent: float
    description: str


DEFAULT_MILEAGE_BANDS: list[MileageBand] = [
    MileageBand(max_weekly_miles=20, exponent=1.10, description="HEAVY FATIGUE PENALTY (< 20 mi/week)"),
    MileageBand(min_weekly_miles=20, max_weekly_miles=30, exponent=1.08, description="FATIGUE PENALTY applied (< 30 mi/week)"),
    MileageBand(min_weekly_miles=50, max_weekly_miles=70, exponent=1.05, description="endurance bonus (50-70 mi/week)"),
    MileageBand(min_weekly_miles=70, exponent=1.04, description="ELITE endurance bonus (70+ mi/week)"),
]


class PhysiologyConstants(BaseModel):
    """Tunable constants for the physiology calculator."""

    mileage_bands: list[MileageBand] = Field(default_factory=lambda: list(DEFAULT_MILEAGE_BANDS))
    standard_riegel_exponent: float = 1.06
    standard_riegel_description: str = "standard endurance base"

    young_age_limit: int = 25
    young_age_factor: float = 0.98
    age_slowdown_per_year: dict[int, float] = Field(
        default_factory=lambda: {40: 0.005, 50: 0.008, 60: 0.01},
    )
    female_factor: float = 1.05

    easy_pace_ratio: float = 1.15
    tempo_pace_ratio: float = 0.95
    interval_pace_ratio: float = 0.85

    generic_5k_minutes: float = 25.0


def load_physiology_constants(path: str | Path | None = None) -> PhysiologyConstants:
    """Load physiology constants, applying YAML overrides when a file is given.

    Args:
        path: Optional YAML path. Keys match PhysiologyConstants fields.

    Returns:
        PhysiologyConstants with overrides applied
    """
    if path is None:
        return PhysiologyConstants()

    config_path = Path(path)
    if not config_path.exists():
        logger.warning("Physiology config not found, using defaults", path=str(config_path))
        return PhysiologyConstants()

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Physiology config must be a mapping, got {type(raw).__name__}")

    constants = PhysiologyConstants.model_validate(raw)
    logger.info("Loaded physiology constants", path=str(config_path), keys=sorted(raw.keys()))
    return constants


@lru_cache(maxsize=1)
def get_physiology_constants() -> PhysiologyConstants:
    """Process-wide constants, loaded once from settings."""
    return load_physiology_constants(settings.physiology_config_path)
