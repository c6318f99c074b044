from __future__ import annotations
from typing import Optional, List, Tuple, Annotated, Literal
from pydantic import BaseModel, Field, ConfigDict, model_validator

from . import formulas as F

# Common helpers
Positive = Annotated[float, Field(gt=0)]
Normalized = Annotated[float, Field(ge=-1.0, le=1.0)]
Fraction = Annotated[float, Field(ge=0.0, le=1.0)]

Topology = Literal["2-path", "4-path"]


# Core records. No range checks: degenerate paths and measurements stay
# constructible.
class AcousticPath(BaseModel):
    model_config = ConfigDict(frozen=True)
    position: float  # offset across the diameter, normalized to -1..1
    angle: float     # from pipe axis [rad]
    length: float    # acoustic travel distance [m]
    weight: float    # integration weight


class FlowMeterConfig(BaseModel):
    model_config = ConfigDict(frozen=True)
    pipe_diameter: float  # [m]
    paths: Tuple[AcousticPath, ...]

    @property
    def num_paths(self) -> int:
        return len(self.paths)

    @property
    def area(self) -> float:
        return F.pipe_area(self.pipe_diameter)

    @property
    def weight_sum(self) -> float:
        return sum(p.weight for p in self.paths)


class PathMeasurement(BaseModel):
    model_config = ConfigDict(frozen=True)
    t_upstream: float    # against the flow [s]
    t_downstream: float  # with the flow [s]

    @property
    def delta_t(self) -> float:
        return self.t_upstream - self.t_downstream


class FlowResult(BaseModel):
    model_config = ConfigDict(frozen=True)
    path_velocities: Tuple[float, ...]  # [m/s], same order as config.paths
    volumetric_flow: float              # [m³/s]

    @property
    def liters_per_second(self) -> float:
        return F.to_liters_per_second(self.volumetric_flow)

    @property
    def liters_per_minute(self) -> float:
        return F.to_liters_per_minute(self.volumetric_flow)


# JSON input models
class PathInput(BaseModel):
    model_config = ConfigDict(extra="forbid")
    position: Normalized
    angle_deg: Annotated[float, Field(ge=0.0, le=180.0)]
    weight: Fraction
    # defaults to a full-diameter chord, D / sin(θ); required for axial paths
    length_m: Optional[Positive] = None


class MeasurementInput(BaseModel):
    model_config = ConfigDict(extra="forbid")
    t_upstream: float
    t_downstream: float


class FlowInputs(BaseModel):
    model_config = ConfigDict(extra="forbid")
    pipe_diameter_m: Positive
    topology: Optional[Topology] = None
    paths: Optional[List[PathInput]] = None
    measurements: List[MeasurementInput]
    strict: bool = False

    @model_validator(mode="after")
    def _one_layout(self) -> "FlowInputs":
        if (self.topology is None) == (self.paths is None):
            raise ValueError("give exactly one of 'topology' or 'paths'")
        if self.paths is not None and not self.paths:
            raise ValueError("'paths' must not be empty")
        return self


class SimulationInputs(BaseModel):
    model_config = ConfigDict(extra="forbid")
    topology: Topology
    pipe_diameter_m: Positive
    true_velocity_m_s: float
    sound_speed_m_s: Optional[Positive] = None
