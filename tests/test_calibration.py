"""Tests for the anchor set and runtime calibration setters."""

import math

import pytest

from ultrasonic_flowmeter import calibration as CAL
from ultrasonic_flowmeter.anchors import ANCHORS, ORIGINS


def test_no_drift_from_anchors():
    for k in ("SOUND_SPEED_M_S", "P2_POSITION", "P2_WEIGHT", "P4_OUTER_POSITION",
              "P4_INNER_POSITION", "P4_WEIGHT", "DEMO_PIPE_DIAMETER_M", "DEMO_TRUE_VELOCITY_M_S"):
        assert float(ANCHORS[k]) == getattr(CAL, k)


def test_origins_refer_to_anchors():
    assert set(ORIGINS) <= set(ANCHORS)


def test_angles():
    assert CAL.ANGLE_45 == math.pi / 4.0
    assert CAL.ANGLE_60 == math.pi / 3.0


def test_set_sound_speed():
    CAL.set_sound_speed(1500)
    assert CAL.SOUND_SPEED_M_S == 1500.0
    with pytest.raises(ValueError):
        CAL.set_sound_speed(0.0)
    with pytest.raises(ValueError):
        CAL.set_sound_speed(float("nan"))


def test_strict_mode_and_reset():
    CAL.set_strict_mode(True)
    CAL.set_sound_speed(1400.0)
    assert CAL.STRICT_MODE is True
    CAL.reset()
    assert CAL.STRICT_MODE is False
    assert CAL.SOUND_SPEED_M_S == 1480.0
