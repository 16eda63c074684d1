"""Prediction confidence score.

Purely additive so the score can be explained to the runner line by line.
"""

from marathon_coach.athletes.models import RunnerProfile

BASE_SCORE = 50
WEARABLE_POINTS = 20
MANUAL_PR_POINTS = 15
WEEKLY_MILEAGE_POINTS = 10
AGE_POINTS = 3
GENDER_POINTS = 2


def accuracy_score(profile: RunnerProfile) -> int:
    """Score profile completeness from 0 to 100.

    Reads the raw profile; defaults applied by ``normalize()`` do not count
    as data.
    """
    score = BASE_SCORE

    if profile.wearable_connected:
        score += WEARABLE_POINTS
    if profile.manual_prs.any_present():
        score += MANUAL_PR_POINTS
    if profile.weekly_mileage and profile.weekly_mileage > 0:
        score += WEEKLY_MILEAGE_POINTS
    if profile.age:
        score += AGE_POINTS
    if profile.gender:
        score += GENDER_POINTS

    return min(100, score)


def data_quality_label(profile: RunnerProfile) -> str:
    """Coarse label given to the workout producer alongside the metrics."""
    if profile.wearable_connected:
        return "HIGH (wearable connected)"
    if profile.manual_prs.any_present():
        return "MEDIUM (manual PRs provided)"
    return "LOW (using estimates)"
