"""Shared fixtures for the flow meter test suite."""

import pytest

from ultrasonic_flowmeter import calibration as CAL
from ultrasonic_flowmeter.geometry import build_2path, build_4path


@pytest.fixture(autouse=True)
def _reset_calibration():
    """Every test starts from anchor values and non-strict mode."""
    CAL.reset()
    yield
    CAL.reset()


@pytest.fixture
def pipe_diameter():
    """Reference pipe: 100 mm."""
    return 0.1


@pytest.fixture
def true_velocity():
    return 2.0


@pytest.fixture
def config_2path(pipe_diameter):
    return build_2path(pipe_diameter)


@pytest.fixture
def config_4path(pipe_diameter):
    return build_4path(pipe_diameter)
