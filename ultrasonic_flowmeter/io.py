"""
Text transcript formatting and lightweight measurement parsers.

Formatters return strings; printing is left to the caller. Parsers accept
decimal commas and return dicts consumable by the api module.
"""
from __future__ import annotations

import csv
from typing import Any, Dict, List, Sequence

from . import formulas as F
from .schemas import FlowMeterConfig, FlowResult, PathMeasurement


def _norm_number(s: str) -> float:
    s_clean = s.strip().replace("\u00A0", "").replace(" ", "").replace(",", ".")
    try:
        return float(s_clean)
    except ValueError as e:
        raise ValueError(f"Invalid numeric value: '{s}'") from e


def parse_measurements_csv(text: str) -> List[Dict[str, float]]:
    """Read rows of ``t_upstream;t_downstream`` (comma or semicolon separated).

    A header row is required. Decimal commas need the semicolon separator.
    """
    lines = [ln for ln in text.splitlines() if ln.strip()]
    if not lines:
        return []
    delim = ";" if ";" in lines[0] else ","
    reader = csv.DictReader(lines, delimiter=delim)
    fields = {(f or "").strip().lower(): f for f in (reader.fieldnames or [])}
    missing = [k for k in ("t_upstream", "t_downstream") if k not in fields]
    if missing:
        raise ValueError(f"Invalid measurement CSV: missing columns {missing}")
    out: List[Dict[str, float]] = []
    for n, row in enumerate(reader, start=1):
        up, down = row.get(fields["t_upstream"]), row.get(fields["t_downstream"])
        if up is None or down is None:
            raise ValueError(f"Invalid measurement CSV: row {n} has fewer fields than the header")
        out.append({
            "t_upstream": _norm_number(up),
            "t_downstream": _norm_number(down),
        })
    return out


def format_config(config: FlowMeterConfig) -> str:
    lines = [
        "Flow Meter Configuration:",
        f"  Pipe diameter: {config.pipe_diameter:.3f} m",
        f"  Number of paths: {config.num_paths}",
        f"  Pipe area: {config.area:.6f} m²",
        "",
        "Acoustic Paths:",
    ]
    for i, p in enumerate(config.paths, start=1):
        lines += [
            f"  Path {i}:",
            f"    Position: {p.position:.2f} D",
            f"    Angle: {F.rad_to_deg(p.angle):.2f}° ({p.angle:.4f} rad)",
            f"    Path length: {p.length:.4f} m",
            f"    Weight: {p.weight:.3f}",
        ]
    return "\n".join(lines)


def format_measurements(measurements: Sequence[PathMeasurement], true_velocity: float) -> str:
    lines = [f"Simulated Measurements (True flow velocity: {true_velocity:.2f} m/s):"]
    for i, m in enumerate(measurements, start=1):
        lines.append(
            f"  Path {i}: t_upstream = {m.t_upstream:.8f} s, "
            f"t_downstream = {m.t_downstream:.8f} s, Δt = {m.delta_t:.2e} s"
        )
    return "\n".join(lines)


def format_results(result: FlowResult) -> str:
    lines = ["Flow Calculation Results:"]
    for i, v in enumerate(result.path_velocities, start=1):
        lines.append(f"  Path {i} velocity: {v:.4f} m/s")
    lines += [
        "",
        "Volumetric Flow Rate:",
        f"  {result.volumetric_flow:.6f} m³/s",
        f"  {result.liters_per_minute:.4f} L/min",
        f"  {result.liters_per_second:.2f} L/s",
    ]
    return "\n".join(lines)


def result_to_dict(config: FlowMeterConfig, result: FlowResult) -> Dict[str, Any]:
    """Flatten a result for JSON/CSV output."""
    return {
        "pipe_diameter_m": config.pipe_diameter,
        "num_paths": config.num_paths,
        "path_velocities_m_s": list(result.path_velocities),
        "volumetric_flow_m3s": result.volumetric_flow,
        "liters_per_second": result.liters_per_second,
        "liters_per_minute": result.liters_per_minute,
        "cubic_meters_per_hour": F.to_cubic_meters_per_hour(result.volumetric_flow),
    }
