"""Tests for transcript formatting and measurement CSV parsing."""

import pytest

from ultrasonic_flowmeter import io
from ultrasonic_flowmeter.analysis import integrate_flow, simulate_measurements


class TestFormatting:

    def test_config_2path(self, config_2path):
        text = io.format_config(config_2path)
        assert text.splitlines()[:4] == [
            "Flow Meter Configuration:",
            "  Pipe diameter: 0.100 m",
            "  Number of paths: 2",
            "  Pipe area: 0.007854 m²",
        ]
        assert "    Position: -0.25 D" in text
        assert "    Angle: 45.00° (0.7854 rad)" in text
        assert "    Path length: 0.1414 m" in text
        assert "    Weight: 0.500" in text

    def test_config_4path(self, config_4path):
        text = io.format_config(config_4path)
        assert "  Path 4:" in text
        assert "    Angle: 60.00° (1.0472 rad)" in text
        assert "    Path length: 0.1155 m" in text
        assert "    Weight: 0.250" in text

    def test_measurements(self, config_2path, true_velocity):
        ms = simulate_measurements(config_2path, true_velocity)
        lines = io.format_measurements(ms, true_velocity).splitlines()
        assert lines[0] == "Simulated Measurements (True flow velocity: 2.00 m/s):"
        assert lines[1].startswith("  Path 1: t_upstream = 0.00006766 s, t_downstream = 0.00006748 s, Δt = ")
        assert lines[1].endswith("e-07 s")

    def test_results(self, config_2path, true_velocity):
        result = integrate_flow(config_2path, simulate_measurements(config_2path, true_velocity))
        assert io.format_results(result).splitlines() == [
            "Flow Calculation Results:",
            "  Path 1 velocity: 4.0000 m/s",
            "  Path 2 velocity: 4.0000 m/s",
            "",
            "Volumetric Flow Rate:",
            "  0.031416 m³/s",
            "  1884.9556 L/min",
            "  31.42 L/s",
        ]

    def test_result_to_dict(self, config_4path, true_velocity):
        result = integrate_flow(config_4path, simulate_measurements(config_4path, true_velocity))
        d = io.result_to_dict(config_4path, result)
        assert d["num_paths"] == 4
        assert d["path_velocities_m_s"] == list(result.path_velocities)
        assert d["liters_per_minute"] == result.liters_per_minute
        assert d["cubic_meters_per_hour"] == pytest.approx(0.026180 * 3600.0, abs=1e-3)


class TestParseMeasurementsCsv:

    def test_comma_separated(self):
        text = "t_upstream,t_downstream\n6.766e-05,6.748e-05\n0.0001,0.00009\n"
        assert io.parse_measurements_csv(text) == [
            {"t_upstream": 6.766e-05, "t_downstream": 6.748e-05},
            {"t_upstream": 0.0001, "t_downstream": 0.00009},
        ]

    def test_semicolon_decimal_comma(self):
        text = "T_Upstream; T_Downstream\n0,0001;0,00009\n\n"
        assert io.parse_measurements_csv(text) == [{"t_upstream": 0.0001, "t_downstream": 0.00009}]

    def test_empty(self):
        assert io.parse_measurements_csv("  \n") == []

    def test_missing_column(self):
        with pytest.raises(ValueError, match="missing columns"):
            io.parse_measurements_csv("t_upstream\n1e-4\n")

    def test_bad_number(self):
        with pytest.raises(ValueError, match="Invalid numeric value"):
            io.parse_measurements_csv("t_upstream,t_downstream\nabc,1e-4\n")

    def test_short_row(self):
        with pytest.raises(ValueError, match="row 2 has fewer fields"):
            io.parse_measurements_csv("t_upstream,t_downstream\n1e-4,0.9e-4\n1e-4\n")
