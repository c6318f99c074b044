"""
Command line for the flow meter backend.

Usage examples:
  python -m ultrasonic_flowmeter
  python -m ultrasonic_flowmeter demo --diameter 0.2 --velocity 1.5
  python -m ultrasonic_flowmeter compute --input flow.json --output result.csv
  python -m ultrasonic_flowmeter simulate --topology 4-path --diameter 0.1 --velocity 2

Commands:
  - demo (default): prints the 2-path and 4-path demonstration transcript
  - compute: integrates flow from JSON inputs (see schemas.FlowInputs)
  - simulate: writes ideal transit times for a layout and velocity
  - compare: 2-path vs 4-path deviation from the true flow
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List
import csv
import os

from . import api
from . import calibration as CAL
from . import io
from .anchors import ANCHORS
from .errors import FlowMeterError, InvalidArgument


def _read_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise InvalidArgument(f"cannot read {path}: {e}") from e


def _read_measurements_csv(path: str) -> List[Dict[str, float]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return io.parse_measurements_csv(f.read())
    except (OSError, ValueError) as e:
        raise InvalidArgument(f"cannot read {path}: {e}") from e


def _fail_on_drift() -> None:
    guarded = ["SOUND_SPEED_M_S", "P2_WEIGHT", "P4_WEIGHT", "P2_POSITION", "P4_OUTER_POSITION", "P4_INNER_POSITION"]
    mismatches: List[str] = []
    for k in guarded:
        if float(ANCHORS[k]) != float(getattr(CAL, k)):
            mismatches.append(f"{k}: anchors={ANCHORS[k]!r} vs calibration={getattr(CAL,k)!r}")
    if mismatches:
        raise SystemExit("Calibration drift detected (anchors vs runtime):\n" + "\n".join(" - "+m for m in mismatches))


def _write_output(obj: Any, path: str | None) -> None:
    if not path:
        json.dump(obj, sys.stdout, ensure_ascii=False)
        sys.stdout.write("\n")
        return
    ext = os.path.splitext(path)[1].lower()
    if ext == ".json":
        with open(path, "w", encoding="utf-8") as f:
            json.dump(obj, f, ensure_ascii=False, indent=2)
    elif ext == ".csv":
        if all(not isinstance(v, list) for v in obj.values()):
            with open(path, "w", newline="", encoding="utf-8") as f:
                w = csv.writer(f)
                w.writerow(list(obj.keys()))
                w.writerow([obj[k] for k in obj.keys()])
        else:
            # one row per list element; scalars only on the first row
            keys = list(obj.keys())
            n = max(len(v) if isinstance(v, list) else 1 for v in obj.values())
            with open(path, "w", newline="", encoding="utf-8") as f:
                w = csv.writer(f)
                w.writerow(keys)
                for i in range(n):
                    row = []
                    for k in keys:
                        v = obj[k]
                        if isinstance(v, list):
                            row.append(v[i] if i < len(v) else "")
                        else:
                            row.append(v if i == 0 else "")
                    w.writerow(row)
    else:
        raise SystemExit(f"Unsupported output extension: {ext} (use .json or .csv)")


def cmd_demo(args: argparse.Namespace) -> int:
    if args.fail_on_drift:
        _fail_on_drift()
    print(api.demo_transcript(args.diameter, args.velocity))
    return 0


def cmd_compute(args: argparse.Namespace) -> int:
    if args.fail_on_drift:
        _fail_on_drift()
    data = _read_json(args.input)
    if args.measurements_csv:
        data["measurements"] = _read_measurements_csv(args.measurements_csv)
    out = api.compute_flow(data, strict=True if args.strict else None, validate=args.validate)
    _write_output(out, args.output)
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    out = api.simulate({
        "topology": args.topology,
        "pipe_diameter_m": args.diameter,
        "true_velocity_m_s": args.velocity,
        "sound_speed_m_s": args.sound_speed,
    })
    if args.output and args.output.lower().endswith(".csv"):
        # flat table: one row per path
        ms = out["measurements"]
        out = {
            "t_upstream": [m["t_upstream"] for m in ms],
            "t_downstream": [m["t_downstream"] for m in ms],
        }
    _write_output(out, args.output)
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    if args.fail_on_drift:
        _fail_on_drift()
    out = api.compare(args.diameter, args.velocity, args.sound_speed)
    if args.output and args.output.lower().endswith(".csv"):
        names = list(out.keys())
        flat: Dict[str, Any] = {"topology": names}
        for field in out[names[0]]:
            flat[field] = [out[n][field] for n in names]
        out = flat
    _write_output(out, args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ultrasonic_flowmeter", description="Transit-time multipath flow meter")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd")

    p_demo = sub.add_parser("demo", help="Print the 2-path and 4-path demonstration")
    p_demo.add_argument("--diameter", type=float, default=None, help="Pipe diameter [m] (default 0.1)")
    p_demo.add_argument("--velocity", type=float, default=None, help="True flow velocity [m/s] (default 2.0)")
    p_demo.add_argument("--fail-on-drift", action="store_true", help="Fail if calibration differs from anchors")
    p_demo.set_defaults(func=cmd_demo)

    p_cmp_flow = sub.add_parser("compute", help="Compute flow from a JSON input file")
    p_cmp_flow.add_argument("--input", required=True, help="Path to JSON input file")
    p_cmp_flow.add_argument("--measurements-csv", required=False, help="Read measurements from CSV instead of the JSON")
    p_cmp_flow.add_argument("--output", required=False, help="Output file (.json or .csv)")
    p_cmp_flow.add_argument("--strict", action="store_true", help="Raise on degenerate measurements instead of using 0.0")
    p_cmp_flow.add_argument("--validate", action="store_true", help="Reject non-physical geometry before integrating")
    p_cmp_flow.add_argument("--fail-on-drift", action="store_true", help="Fail if calibration differs from anchors")
    p_cmp_flow.set_defaults(func=cmd_compute)

    p_sim = sub.add_parser("simulate", help="Write ideal transit times for a layout")
    p_sim.add_argument("--topology", choices=["2-path", "4-path"], default="2-path")
    p_sim.add_argument("--diameter", type=float, required=True, help="Pipe diameter [m]")
    p_sim.add_argument("--velocity", type=float, required=True, help="True flow velocity [m/s]")
    p_sim.add_argument("--sound-speed", type=float, default=None, help="Speed of sound [m/s] (default 1480)")
    p_sim.add_argument("--output", required=False, help="Output file (.json or .csv)")
    p_sim.set_defaults(func=cmd_simulate)

    p_cmp = sub.add_parser("compare", help="Compare 2-path and 4-path against the true flow")
    p_cmp.add_argument("--diameter", type=float, required=True, help="Pipe diameter [m]")
    p_cmp.add_argument("--velocity", type=float, required=True, help="True flow velocity [m/s]")
    p_cmp.add_argument("--sound-speed", type=float, default=None, help="Speed of sound [m/s] (default 1480)")
    p_cmp.add_argument("--output", required=False, help="Output file (.json or .csv)")
    p_cmp.add_argument("--fail-on-drift", action="store_true", help="Fail if calibration differs from anchors")
    p_cmp.set_defaults(func=cmd_compare)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")
    if args.cmd is None:
        args = parser.parse_args(["demo"] if argv is None else list(argv) + ["demo"])
    try:
        return args.func(args)
    except FlowMeterError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
