"""Tests for runner profiles, accuracy scoring and derived metrics.

Covers:
- Reference result priority (wearable > 5K > 10K > half > estimate)
- Default application in normalize()
- Additive accuracy score and data-quality label
- derive_metrics end to end
"""

import pytest

from marathon_coach.athletes import DerivedMetrics, Gender, ManualPRs, RunnerProfile, accuracy_score, derive_metrics
from marathon_coach.athletes.accuracy import data_quality_label
from marathon_coach.athletes.metrics import classify_fitness_level
from marathon_coach.athletes.models import HALF_MARATHON_KM, ResultSource
from marathon_coach.physiology.calculator import predicted_marathon_pace
from marathon_coach.physiology.constants import PhysiologyConstants
from marathon_coach.physiology.time_format import seconds_to_pace


def test_wearable_result_wins_over_manual_prs():
    profile = RunnerProfile(
        runner_id="r",
        wearable_connected=True,
        wearable_best_5k_minutes=21.0,
        manual_prs=ManualPRs(five_k="19:00"),
    )
    best = profile.best_result()
    assert best.source == ResultSource.WEARABLE
    assert best.time_minutes == 21.0


def test_wearable_without_a_result_falls_through_to_manual():
    profile = RunnerProfile(runner_id="r", wearable_connected=True, manual_prs=ManualPRs(five_k="22:30"))
    best = profile.best_result()
    assert best.source == ResultSource.MANUAL_5K
    assert best.time_minutes == pytest.approx(22.5)


def test_manual_priority_ignores_lower_results():
    profile = RunnerProfile(runner_id="r", manual_prs=ManualPRs(ten_k="45:00", half_marathon="1:40:00"))
    best = profile.best_result()
    assert best.source == ResultSource.MANUAL_10K
    assert best.distance_km == 10.0


def test_half_marathon_used_when_only_result():
    best = RunnerProfile(runner_id="r", manual_prs=ManualPRs(half_marathon="1:45:30")).best_result()
    assert best.source == ResultSource.MANUAL_HALF
    assert best.distance_km == HALF_MARATHON_KM
    assert best.time_minutes == pytest.approx(105.5)


def test_malformed_pr_is_skipped():
    best = RunnerProfile(runner_id="r", manual_prs=ManualPRs(five_k="fast", ten_k="50:00")).best_result()
    assert best.source == ResultSource.MANUAL_10K


def test_generic_estimate_without_any_result():
    best = RunnerProfile(runner_id="r").best_result()
    assert best.source == ResultSource.ESTIMATE
    assert best.time_minutes == 25.0
    assert best.distance_km == 5


def test_normalize_applies_defaults():
    normalized = RunnerProfile(runner_id="r").normalize()
    assert normalized.age == 30
    assert normalized.gender == Gender.MALE
    assert normalized.weekly_mileage == 25.0
    assert normalized.max_heart_rate == 187
    assert normalized.has_manual_prs is False


def test_normalize_keeps_measured_max_heart_rate():
    assert RunnerProfile(runner_id="r", age=50, max_heart_rate=181).normalize().max_heart_rate == 181


def test_accuracy_base_only_profile_is_50():
    assert accuracy_score(RunnerProfile(runner_id="r")) == 50


def test_accuracy_full_profile_is_100():
    profile = RunnerProfile(
        runner_id="r",
        age=40,
        gender=Gender.FEMALE,
        weekly_mileage=35,
        wearable_connected=True,
        manual_prs=ManualPRs(five_k="24:00"),
    )
    assert accuracy_score(profile) == 100


def test_accuracy_is_additive():
    profile = RunnerProfile(runner_id="r", age=33, wearable_connected=True)
    assert accuracy_score(profile) == 50 + 20 + 3


def test_accuracy_ignores_zero_mileage():
    assert accuracy_score(RunnerProfile(runner_id="r", weekly_mileage=0)) == 50


def test_data_quality_labels():
    assert data_quality_label(RunnerProfile(runner_id="r", wearable_connected=True)).startswith("HIGH")
    assert data_quality_label(RunnerProfile(runner_id="r", manual_prs=ManualPRs(ten_k="50:00"))).startswith("MEDIUM")
    assert data_quality_label(RunnerProfile(runner_id="r")).startswith("LOW")


@pytest.mark.parametrize(
    ("minutes", "level"),
    [(18.0, "advanced"), (21.99, "advanced"), (22.0, "intermediate"), (25.9, "intermediate"), (26.0, "beginner")],
)
def test_classify_fitness_level(minutes, level):
    assert classify_fitness_level(minutes) == level


def test_derive_metrics_for_manual_5k_runner():
    constants = PhysiologyConstants()
    profile = RunnerProfile(
        runner_id="r",
        age=30,
        gender=Gender.MALE,
        weekly_mileage=25,
        manual_prs=ManualPRs(five_k="22:30"),
    )

    metrics = derive_metrics(profile, constants)

    expected_sec = predicted_marathon_pace(22.5, 5.0, 25, constants)
    assert isinstance(metrics, DerivedMetrics)
    assert metrics.riegel_exponent == 1.08
    assert metrics.predicted_marathon_pace == seconds_to_pace(expected_sec)
    assert metrics.age_grading_factor == 1.0
    assert metrics.adjusted_marathon_pace == metrics.predicted_marathon_pace
    assert metrics.accuracy_score == 80
    assert metrics.data_quality.startswith("MEDIUM")
    assert metrics.equivalent_5k_pace == "22:30"
    assert metrics.fitness_level == "intermediate"
    assert metrics.max_heart_rate == 187
    assert len(metrics.heart_rate_zones) == 5
    assert metrics.vdot_score == round(metrics.vdot_score, 1)


def test_derive_metrics_applies_grading_factor():
    constants = PhysiologyConstants()
    profile = RunnerProfile(
        runner_id="r",
        age=45,
        gender=Gender.FEMALE,
        weekly_mileage=25,
        manual_prs=ManualPRs(five_k="22:30"),
    )

    metrics = derive_metrics(profile, constants)

    predicted_sec = predicted_marathon_pace(22.5, 5.0, 25, constants)
    assert metrics.age_grading_factor == pytest.approx(1.07625)
    assert metrics.adjusted_marathon_pace_seconds == pytest.approx(predicted_sec * 1.07625)
    assert metrics.adjusted_marathon_pace == seconds_to_pace(predicted_sec * 1.07625)


def test_derive_metrics_keeps_stated_fitness_level():
    profile = RunnerProfile(runner_id="r", fitness_level="advanced")
    assert derive_metrics(profile, PhysiologyConstants()).fitness_level == "advanced"


def test_derive_metrics_is_deterministic():
    profile = RunnerProfile(runner_id="r", manual_prs=ManualPRs(ten_k="48:00"))
    assert derive_metrics(profile, PhysiologyConstants()) == derive_metrics(profile, PhysiologyConstants())
