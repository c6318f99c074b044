import math

from . import calibration as CAL

# =============================
# Unit helpers
# =============================

def to_liters_per_second(q_m3s: float) -> float:
    """m³/s → L/s."""
    return q_m3s * CAL.L_PER_M3

def to_liters_per_minute(q_m3s: float) -> float:
    """m³/s → L/min."""
    return q_m3s * (CAL.L_PER_M3 * CAL.S_PER_MIN)

def to_cubic_meters_per_hour(q_m3s: float) -> float:
    """m³/s → m³/h."""
    return q_m3s * CAL.S_PER_H

def deg_to_rad(deg: float) -> float:
    """Degrees → radians."""
    return deg * math.pi / 180.0

def rad_to_deg(rad: float) -> float:
    """Radians → degrees."""
    return rad * 180.0 / math.pi


# =============================
# Pipe geometry
# =============================

def pipe_area(pipe_diameter_m: float) -> float:
    """
    Circular cross-section area [m²]:
        A = π * (D/2)²
    No range check: a non-positive diameter gives a non-physical area.
    """
    radius = pipe_diameter_m / 2.0
    return math.pi * radius * radius

def chord_length(pipe_diameter_m: float, angle_rad: float) -> float:
    """
    Acoustic path length [m] for a path crossing the full diameter:
        L = D / sin(θ)
    Args:
        pipe_diameter_m: pipe diameter [m]
        angle_rad: angle between path and pipe axis [rad]
    """
    return pipe_diameter_m / math.sin(angle_rad)


# =============================
# Transit-time differential
# =============================

def degenerate_reason(angle_rad: float, t_up_s: float, t_down_s: float) -> str | None:
    """Return why (t_up, t_down, θ) cannot give a velocity, or None if it can.

    Checked in order: upstream time, downstream time, zero sine.
    """
    if t_up_s <= 0:
        return "t_upstream <= 0"
    if t_down_s <= 0:
        return "t_downstream <= 0"
    if math.sin(angle_rad) == 0:
        return "sin(angle) == 0"
    return None

def transit_time_velocity(length_m: float, angle_rad: float, t_up_s: float, t_down_s: float) -> float:
    """
    Axial velocity [m/s] from one acoustic path:
        v = (L / (2 * sin(θ))) * ((t_up - t_down) / (t_up * t_down))
    Args:
        length_m: acoustic path length [m]
        angle_rad: angle between path and pipe axis [rad]
        t_up_s: transit time against the flow [s]
        t_down_s: transit time with the flow [s]
    Returns:
        float: axial velocity [m/s]; negative for reverse flow, 0.0 for
        non-positive transit times or zero-sine geometry
    """
    if t_up_s <= 0 or t_down_s <= 0:
        return 0.0
    delta_t = t_up_s - t_down_s
    sin_theta = math.sin(angle_rad)
    if sin_theta == 0:
        return 0.0
    return (length_m / (2.0 * sin_theta)) * (delta_t / (t_up_s * t_down_s))

def transit_times(path_component_m: float, true_velocity_m_s: float, sound_speed_m_s: float) -> tuple[float, float]:
    """
    Ideal (t_up, t_down) [s] for a path whose flow-aligned component is given:
        t_up = Lc / (c - v),  t_down = Lc / (c + v)
    """
    if sound_speed_m_s <= abs(true_velocity_m_s):
        raise ValueError("sound_speed > |true_velocity|")
    return (path_component_m / (sound_speed_m_s - true_velocity_m_s),
            path_component_m / (sound_speed_m_s + true_velocity_m_s))

def percent_change(after: float, before: float) -> float:
    """Return percent change from before to after."""
    if before == 0:
        return 0.0
    return 100.0 * (after - before) / before
