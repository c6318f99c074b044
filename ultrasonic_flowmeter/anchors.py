"""
Frozen anchor set for flow meter constants with brief origin notes.

These values document the reference demonstration and the canonical path
layouts. Tests assert no drift relative to these values; update this file
deliberately together with the golden numbers in tests/.
"""

ANCHORS: dict[str, float | int | str] = {
    # Acoustics
    "SOUND_SPEED_M_S": 1480.0,    # water, m/s

    # Demonstration inputs
    "DEMO_PIPE_DIAMETER_M": 0.1,  # 100 mm
    "DEMO_TRUE_VELOCITY_M_S": 2.0,

    # Unit factors (from m^3/s)
    "L_PER_M3": 1000.0,
    "S_PER_MIN": 60.0,
    "S_PER_H": 3600.0,

    # 2-path layout
    "P2_POSITION": 0.25,
    "P2_WEIGHT": 0.5,

    # 4-path layout
    "P4_OUTER_POSITION": 0.35,
    "P4_INNER_POSITION": 0.15,
    "P4_WEIGHT": 0.25,
}

# Origins (free-text for docs)
ORIGINS: dict[str, str] = {
    "SOUND_SPEED_M_S": "Speed of sound in water, room temperature approximation",
    "P2_POSITION": "Two 45° chords at ±0.25 D, equal weights",
    "P4_OUTER_POSITION": "Outer 60° chords sample near the wall",
    "P4_INNER_POSITION": "Inner 45° chords sample near the centre",
}
