"""Physiology result models."""

from pydantic import BaseModel


class MileageTax(BaseModel):
    """Riegel exponent selected from weekly volume.

    Attributes:
        exponent: Riegel fatigue exponent
        description: Which mileage band applied
    """

    exponent: float
    description: str


class TrainingPaces(BaseModel):
    """Training paces per mile as "M:SS" strings."""

    easy: str
    tempo: str
    interval: str


class HeartRateZone(BaseModel):
    """One heart-rate zone in bpm.

    Attributes:
        zone: Zone number (1-5)
        label: Short zone name (e.g., "Threshold")
        min: Lower bound in bpm
        max: Upper bound in bpm
        description: How the zone should feel
    """

    zone: int
    label: str
    min: int
    max: int
    description: str
