"""
Thin, stable API for the command line and other front ends.

Contracts:
  - compute_flow(inputs) -> dict
  - simulate(inputs) -> dict
  - compare(pipe_diameter_m, true_velocity_m_s) -> dict
  - demo_transcript(pipe_diameter_m, true_velocity_m_s) -> str

Dict inputs are validated via Pydantic schemas; validation failures surface
as BackendError.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional
import logging
import math

from pydantic import ValidationError

from . import analysis as A
from . import calibration as CAL
from . import formulas as F
from . import io
from .errors import FlowMeterError, InvalidConfiguration
from .geometry import build_config, validate_config, TOPOLOGIES
from .schemas import (
    AcousticPath, FlowMeterConfig, PathMeasurement,
    FlowInputs, SimulationInputs,
)


class BackendError(FlowMeterError):
    """Raised when API input validation fails in a controlled way."""
    pass


def _validate(model, data: Dict[str, Any]):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise BackendError(f"invalid {model.__name__}: {e}") from e


def _config_from_inputs(inp: FlowInputs) -> FlowMeterConfig:
    if inp.topology is not None:
        return build_config(inp.topology, inp.pipe_diameter_m)
    paths = []
    for p in inp.paths or []:
        angle = F.deg_to_rad(p.angle_deg)
        if p.length_m is not None:
            length = p.length_m
        elif math.sin(angle) == 0:
            raise InvalidConfiguration(f"path at {p.angle_deg}° is parallel to the pipe axis; give length_m")
        else:
            length = F.chord_length(inp.pipe_diameter_m, angle)
        paths.append(AcousticPath(position=p.position, angle=angle, length=length, weight=p.weight))
    return FlowMeterConfig(pipe_diameter=inp.pipe_diameter_m, paths=tuple(paths))


def compute_flow(inputs: Dict[str, Any], *, strict: Optional[bool] = None,
                 validate: bool = False) -> Dict[str, Any]:
    """Integrate flow from a FlowInputs-shaped dict.

    ``strict`` overrides the flag carried in the inputs. ``validate`` checks
    the geometry without changing how degenerate measurements are handled.
    """
    inp = _validate(FlowInputs, inputs)
    config = _config_from_inputs(inp)
    if validate:
        validate_config(config)
    measurements = [PathMeasurement(t_upstream=m.t_upstream, t_downstream=m.t_downstream)
                    for m in inp.measurements]
    try:
        result = A.integrate_flow(config, measurements, strict=inp.strict if strict is None else strict)
    except FlowMeterError:
        raise
    except Exception:
        logging.getLogger(__name__).exception("compute_flow failed")
        raise
    out = io.result_to_dict(config, result)
    out["weight_sum"] = config.weight_sum
    return out


def simulate(inputs: Dict[str, Any]) -> Dict[str, Any]:
    """Ideal measurements for a SimulationInputs-shaped dict."""
    inp = _validate(SimulationInputs, inputs)
    config = build_config(inp.topology, inp.pipe_diameter_m)
    ms = A.simulate_measurements(config, inp.true_velocity_m_s, inp.sound_speed_m_s)
    return {
        "pipe_diameter_m": inp.pipe_diameter_m,
        "topology": inp.topology,
        "true_velocity_m_s": inp.true_velocity_m_s,
        "sound_speed_m_s": inp.sound_speed_m_s or CAL.SOUND_SPEED_M_S,
        "measurements": [m.model_dump() for m in ms],
    }


def compare(pipe_diameter_m: float, true_velocity_m_s: float,
            sound_speed_m_s: Optional[float] = None) -> Dict[str, Any]:
    """2-path vs 4-path on the same simulated flow."""
    try:
        return A.compare_topologies(pipe_diameter_m, true_velocity_m_s, sound_speed_m_s)
    except FlowMeterError:
        raise
    except Exception:
        logging.getLogger(__name__).exception("compare failed")
        raise


def demo_transcript(pipe_diameter_m: Optional[float] = None,
                    true_velocity_m_s: Optional[float] = None) -> str:
    """Full console transcript for every canonical layout."""
    d = CAL.DEMO_PIPE_DIAMETER_M if pipe_diameter_m is None else pipe_diameter_m
    v = CAL.DEMO_TRUE_VELOCITY_M_S if true_velocity_m_s is None else true_velocity_m_s
    blocks: List[str] = ["=== Ultrasonic Multipath Flow Meter ===", ""]
    for n, name in enumerate(TOPOLOGIES):
        config = build_config(name, d)
        ms = A.simulate_measurements(config, v)
        result = A.integrate_flow(config, ms)
        if n:
            blocks += ["", ""]
        blocks += [
            f"### {name.upper()} CONFIGURATION ###",
            "",
            io.format_config(config),
            "",
            io.format_measurements(ms, v),
            "",
            io.format_results(result),
        ]
    blocks += ["", "=== End of Demonstration ==="]
    return "\n".join(blocks)
