"""
Flow integration over a set of acoustic paths (backend-only, no printing).
Uses formulas and centralized calibration constants.
"""
from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence

from . import calibration as CAL
from . import formulas as F
from .errors import DegenerateMeasurementError, InvalidArgument
from .geometry import TOPOLOGIES, validate_config
from .schemas import AcousticPath, FlowMeterConfig, FlowResult, PathMeasurement

logger = logging.getLogger(__name__)


def _strict(strict: Optional[bool]) -> bool:
    return CAL.STRICT_MODE if strict is None else bool(strict)


def path_velocity(path: AcousticPath, measurement: PathMeasurement, *, strict: Optional[bool] = None) -> float:
    """Axial velocity [m/s] seen by one path.

    Non-positive transit times and zero-sine angles give 0.0, or raise
    DegenerateMeasurementError when strict.
    """
    if _strict(strict):
        reason = F.degenerate_reason(path.angle, measurement.t_upstream, measurement.t_downstream)
        if reason is not None:
            raise DegenerateMeasurementError(reason)
    return F.transit_time_velocity(path.length, path.angle, measurement.t_upstream, measurement.t_downstream)


def integrate_flow(config: FlowMeterConfig, measurements: Sequence[PathMeasurement], *,
                   strict: Optional[bool] = None) -> FlowResult:
    """Weighted multi-path integration:
        Q = (π * D² / 4) * Σ(w_i * v_i)

    measurements[i] must belong to config.paths[i].
    """
    measurements = list(measurements)
    if len(measurements) != config.num_paths:
        raise InvalidArgument(
            f"got {len(measurements)} measurements for {config.num_paths} paths"
        )
    is_strict = _strict(strict)
    if is_strict:
        validate_config(config)

    velocities: List[float] = []
    weighted_sum = 0.0
    for i, (path, m) in enumerate(zip(config.paths, measurements)):
        reason = F.degenerate_reason(path.angle, m.t_upstream, m.t_downstream)
        if reason is not None:
            if is_strict:
                raise DegenerateMeasurementError(reason, index=i)
            logger.debug("path %d degenerate (%s); velocity set to 0.0", i + 1, reason)
        v = path_velocity(path, m, strict=False)
        velocities.append(v)
        weighted_sum += path.weight * v

    return FlowResult(
        path_velocities=tuple(velocities),
        volumetric_flow=config.area * weighted_sum,
    )


def simulate_measurements(config: FlowMeterConfig, true_velocity: float,
                          sound_speed: Optional[float] = None) -> List[PathMeasurement]:
    """Ideal transit times for a uniform axial velocity, one per path.

    The flow-aligned path component is L * sin(θ); sound speed defaults to
    calibration.SOUND_SPEED_M_S.
    """
    c = CAL.SOUND_SPEED_M_S if sound_speed is None else float(sound_speed)
    if not c > abs(true_velocity):
        raise InvalidArgument(f"sound speed {c} m/s must exceed |true velocity| {abs(true_velocity)} m/s")
    out = []
    for path in config.paths:
        t_up, t_down = F.transit_times(path.length * math.sin(path.angle), true_velocity, c)
        out.append(PathMeasurement(t_upstream=t_up, t_downstream=t_down))
    return out


def expected_flow(config: FlowMeterConfig, true_velocity: float) -> float:
    """Volumetric flow [m³/s] of a uniform profile at true_velocity."""
    return config.area * true_velocity


def compare_topologies(pipe_diameter: float, true_velocity: float,
                       sound_speed: Optional[float] = None) -> Dict[str, Dict[str, float]]:
    """Run every canonical layout on simulated data and report its deviation."""
    out: Dict[str, Dict[str, float]] = {}
    for name, build in TOPOLOGIES.items():
        config = build(pipe_diameter)
        result = integrate_flow(config, simulate_measurements(config, true_velocity, sound_speed))
        q_true = expected_flow(config, true_velocity)
        out[name] = {
            "volumetric_flow_m3s": result.volumetric_flow,
            "expected_flow_m3s": q_true,
            "deviation_pct": F.percent_change(result.volumetric_flow, q_true),
            "liters_per_minute": result.liters_per_minute,
        }
    return out
