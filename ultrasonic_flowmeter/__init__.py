"""
ultrasonic_flowmeter - transit-time multipath ultrasonic flow calculation.
"""

__version__ = "0.1.0"

from .errors import FlowMeterError, InvalidArgument, InvalidConfiguration, DegenerateMeasurementError
from .schemas import AcousticPath, FlowMeterConfig, PathMeasurement, FlowResult
from .formulas import to_liters_per_second, to_liters_per_minute, pipe_area
from .geometry import build_2path, build_4path, build_config, validate_config, TOPOLOGIES
from .analysis import (
    path_velocity,
    integrate_flow,
    simulate_measurements,
    expected_flow,
    compare_topologies,
)

__all__ = [
    "__version__",
    "FlowMeterError", "InvalidArgument", "InvalidConfiguration", "DegenerateMeasurementError",
    "AcousticPath", "FlowMeterConfig", "PathMeasurement", "FlowResult",
    "to_liters_per_second", "to_liters_per_minute", "pipe_area",
    "build_2path", "build_4path", "build_config", "validate_config", "TOPOLOGIES",
    "path_velocity", "integrate_flow", "simulate_measurements", "expected_flow",
    "compare_topologies",
]
