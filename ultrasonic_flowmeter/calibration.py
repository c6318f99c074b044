"""
Centralized runtime constants for the flow meter.

Values are sourced from anchors.ANCHORS. The setters below are the only
supported way to change them at runtime (tests, tools, CLI flags).
"""
import math

from .anchors import ANCHORS

# --- Acoustics ---
SOUND_SPEED_M_S: float = float(ANCHORS["SOUND_SPEED_M_S"])  # [m/s]

# --- Demonstration defaults ---
DEMO_PIPE_DIAMETER_M: float = float(ANCHORS["DEMO_PIPE_DIAMETER_M"])      # [m]
DEMO_TRUE_VELOCITY_M_S: float = float(ANCHORS["DEMO_TRUE_VELOCITY_M_S"])  # [m/s]

# --- Unit factors ---
L_PER_M3: float = float(ANCHORS["L_PER_M3"])
S_PER_MIN: float = float(ANCHORS["S_PER_MIN"])
S_PER_H: float = float(ANCHORS["S_PER_H"])

# --- Canonical path layouts ---
ANGLE_45: float = math.pi / 4.0
ANGLE_60: float = math.pi / 3.0

P2_POSITION: float = float(ANCHORS["P2_POSITION"])
P2_WEIGHT: float = float(ANCHORS["P2_WEIGHT"])

P4_OUTER_POSITION: float = float(ANCHORS["P4_OUTER_POSITION"])
P4_INNER_POSITION: float = float(ANCHORS["P4_INNER_POSITION"])
P4_WEIGHT: float = float(ANCHORS["P4_WEIGHT"])

# --- Degenerate input policy ---
# False: non-positive transit times and zero-sine angles yield 0.0 velocity.
# True: they raise DegenerateMeasurementError and configs are validated.
STRICT_MODE: bool = False


def set_sound_speed(c_m_s: float) -> None:
	"""Override the speed of sound used by the measurement simulator.
	Pass a positive value, e.g. 1500.0 for sea water.
	"""
	global SOUND_SPEED_M_S
	if not c_m_s > 0:
		raise ValueError("c_m_s must be > 0")
	SOUND_SPEED_M_S = float(c_m_s)


def set_strict_mode(enabled: bool) -> None:
	"""Switch the module-wide default for degenerate input handling."""
	global STRICT_MODE
	STRICT_MODE = bool(enabled)


def reset() -> None:
	"""Restore every mutable value to its anchor."""
	global SOUND_SPEED_M_S, STRICT_MODE
	SOUND_SPEED_M_S = float(ANCHORS["SOUND_SPEED_M_S"])
	STRICT_MODE = False
