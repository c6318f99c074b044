"""
Canonical acoustic path layouts.

Builders are pure and total: they never validate the diameter. Call
validate_config() when a config comes from an untrusted source.
"""
from __future__ import annotations

import math
from typing import Callable, Dict

from . import calibration as CAL
from . import formulas as F
from .errors import InvalidConfiguration
from .schemas import AcousticPath, FlowMeterConfig


def _chord(position: float, angle: float, pipe_diameter: float, weight: float) -> AcousticPath:
    return AcousticPath(
        position=position,
        angle=angle,
        length=F.chord_length(pipe_diameter, angle),
        weight=weight,
    )


def build_2path(pipe_diameter: float) -> FlowMeterConfig:
    """Two 45° chords at ±0.25 D, weight 0.5 each. Fast, lower accuracy."""
    paths = (
        _chord(CAL.P2_POSITION, CAL.ANGLE_45, pipe_diameter, CAL.P2_WEIGHT),
        _chord(-CAL.P2_POSITION, CAL.ANGLE_45, pipe_diameter, CAL.P2_WEIGHT),
    )
    return FlowMeterConfig(pipe_diameter=pipe_diameter, paths=paths)


def build_4path(pipe_diameter: float) -> FlowMeterConfig:
    """Four chords, weight 0.25 each.

    Paths 1-2 sit at 60° and ±0.35 D (near the wall), paths 3-4 at 45° and
    ±0.15 D (near the centre).
    """
    paths = (
        _chord(CAL.P4_OUTER_POSITION, CAL.ANGLE_60, pipe_diameter, CAL.P4_WEIGHT),
        _chord(-CAL.P4_OUTER_POSITION, CAL.ANGLE_60, pipe_diameter, CAL.P4_WEIGHT),
        _chord(CAL.P4_INNER_POSITION, CAL.ANGLE_45, pipe_diameter, CAL.P4_WEIGHT),
        _chord(-CAL.P4_INNER_POSITION, CAL.ANGLE_45, pipe_diameter, CAL.P4_WEIGHT),
    )
    return FlowMeterConfig(pipe_diameter=pipe_diameter, paths=paths)


TOPOLOGIES: Dict[str, Callable[[float], FlowMeterConfig]] = {
    "2-path": build_2path,
    "4-path": build_4path,
}

_ALIASES = {"2": "2-path", "4": "4-path", "2path": "2-path", "4path": "4-path"}


def normalize_topology(topology: str | int) -> str:
    key = str(topology).strip().lower()
    key = _ALIASES.get(key, key)
    if key not in TOPOLOGIES:
        raise InvalidConfiguration(
            f"unknown topology {topology!r}; expected one of {sorted(TOPOLOGIES)}"
        )
    return key


def build_config(topology: str | int, pipe_diameter: float) -> FlowMeterConfig:
    """Build the named layout ("2-path" or "4-path")."""
    return TOPOLOGIES[normalize_topology(topology)](pipe_diameter)


def validate_config(config: FlowMeterConfig) -> FlowMeterConfig:
    """Fail fast on configs that can only produce non-physical results.

    Returns the config unchanged so calls can be chained.
    """
    if not config.pipe_diameter > 0:
        raise InvalidConfiguration(f"pipe_diameter must be > 0 (got {config.pipe_diameter})")
    if not config.paths:
        raise InvalidConfiguration("config has no acoustic paths")
    for i, p in enumerate(config.paths, start=1):
        if not p.length > 0:
            raise InvalidConfiguration(f"path {i}: length must be > 0 (got {p.length})")
        if math.sin(p.angle) == 0:
            raise InvalidConfiguration(f"path {i}: angle {p.angle} rad is parallel to the pipe axis")
    return config
