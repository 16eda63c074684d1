"""Tests for the physiology calculator and its tunable constants.

Covers:
- Riegel mileage bands ("mileage tax")
- Marathon pace prediction
- Age/gender grading
- Training paces, max heart rate and heart-rate zones
- VDOT
- YAML constant overrides
"""

import pytest

from marathon_coach.physiology.calculator import (
    age_gender_grading_factor,
    heart_rate_zone,
    heart_rate_zones,
    max_heart_rate,
    predicted_marathon_pace,
    riegel_exponent,
    training_paces,
    vdot,
)
from marathon_coach.physiology.constants import PhysiologyConstants, load_physiology_constants
from marathon_coach.physiology.time_format import seconds_to_pace


@pytest.mark.parametrize(
    ("weekly_mileage", "exponent"),
    [
        (0, 1.10),
        (19.9, 1.10),
        (20, 1.08),
        (25, 1.08),
        (30, 1.06),
        (49.9, 1.06),
        (50, 1.05),
        (69.9, 1.05),
        (70, 1.04),
        (120, 1.04),
    ],
)
def test_riegel_exponent_bands(weekly_mileage, exponent):
    assert riegel_exponent(weekly_mileage, PhysiologyConstants()).exponent == exponent


def test_riegel_descriptions_name_the_band():
    constants = PhysiologyConstants()
    assert "FATIGUE PENALTY" in riegel_exponent(25, constants).description
    assert riegel_exponent(40, constants).description == "standard endurance base"


def test_predicted_pace_for_22_30_5k_at_25_miles():
    """A 22:30 5K at 25 mi/week uses the 1.08 exponent."""
    constants = PhysiologyConstants()
    expected_minutes = 22.5 * (42.195 / 5) ** 1.08
    expected_sec = expected_minutes / 26.2 * 60

    pace_sec = predicted_marathon_pace(22.5, 5, 25, constants)

    assert pace_sec == pytest.approx(expected_sec)
    assert seconds_to_pace(pace_sec) == seconds_to_pace(expected_sec)


def test_predicted_pace_slows_as_mileage_drops():
    constants = PhysiologyConstants()
    high = predicted_marathon_pace(22.5, 5, 60, constants)
    low = predicted_marathon_pace(22.5, 5, 15, constants)
    assert low > high


@pytest.mark.parametrize(
    ("age", "gender", "factor"),
    [
        (24, "male", 0.98),
        (30, "male", 1.0),
        (40, "male", 1.0),
        (45, "female", 1.025 * 1.05),
        (55, "male", 1.09),
        (65, "male", 1.18),
        (30, "other", 1.0),
    ],
)
def test_age_gender_grading_factor(age, gender, factor):
    assert age_gender_grading_factor(age, gender, PhysiologyConstants()) == pytest.approx(factor)


def test_age_45_female_factor_is_1_07625():
    assert age_gender_grading_factor(45, "female", PhysiologyConstants()) == pytest.approx(1.07625)


def test_training_paces_from_adjusted_pace():
    paces = training_paces(480, PhysiologyConstants())
    assert paces.easy == "9:12"
    assert paces.tempo == "7:36"
    assert paces.interval == "6:48"


def test_max_heart_rate_tanaka():
    assert max_heart_rate(30) == 187
    # 208 - 31.5 = 176.5 rounds half-up
    assert max_heart_rate(45) == 177


def test_heart_rate_zones_from_max():
    zones = heart_rate_zones(200)
    assert [z.zone for z in zones] == [1, 2, 3, 4, 5]
    assert (zones[0].min, zones[0].max) == (100, 120)
    assert (zones[3].min, zones[3].max) == (160, 180)
    assert (zones[4].min, zones[4].max) == (180, 200)
    assert zones[3].label == "Threshold"


@pytest.mark.parametrize(
    ("bpm", "zone"),
    [(80, 1), (100, 1), (119, 1), (120, 2), (140, 3), (159, 3), (160, 4), (179, 4), (180, 5), (210, 5)],
)
def test_heart_rate_zone_classification(bpm, zone):
    assert heart_rate_zone(bpm, 200) == zone


def test_vdot_for_20_minute_5k():
    assert round(vdot(20.0, 5.0), 1) == pytest.approx(49.8)


def test_vdot_improves_with_faster_time():
    assert vdot(18.0, 5.0) > vdot(22.0, 5.0)


def test_load_constants_without_path_uses_defaults():
    assert load_physiology_constants(None) == PhysiologyConstants()


def test_load_constants_missing_file_uses_defaults(tmp_path):
    assert load_physiology_constants(tmp_path / "missing.yaml") == PhysiologyConstants()


def test_load_constants_applies_yaml_overrides(tmp_path):
    path = tmp_path / "physiology.yaml"
    path.write_text(
        "easy_pace_ratio: 1.2\n"
        "mileage_bands:\n"
        "  - max_weekly_miles: 40\n"
        "    exponent: 1.09\n"
        "    description: custom band\n",
        encoding="utf-8",
    )

    constants = load_physiology_constants(path)

    assert constants.easy_pace_ratio == 1.2
    assert constants.tempo_pace_ratio == PhysiologyConstants().tempo_pace_ratio
    assert riegel_exponent(35, constants).exponent == 1.09
    assert riegel_exponent(45, constants).exponent == constants.standard_riegel_exponent


def test_load_constants_rejects_non_mapping(tmp_path):
    path = tmp_path / "physiology.yaml"
    path.write_text("- not\n- a mapping\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_physiology_constants(path)
