"""Exception types raised by the flow meter package."""
from __future__ import annotations


class FlowMeterError(Exception):
    """Base class for every error raised on purpose by this package."""
    pass


class InvalidArgument(FlowMeterError, ValueError):
    """Caller passed inputs that cannot be combined, e.g. mismatched lengths."""
    pass


class InvalidConfiguration(FlowMeterError, ValueError):
    """A FlowMeterConfig (or topology name) is not physically usable."""
    pass


class DegenerateMeasurementError(InvalidArgument):
    """Strict mode only: a path measurement would otherwise yield a silent 0.0."""

    def __init__(self, reason: str, index: int | None = None):
        self.reason = reason
        self.index = index
        where = f"path {index + 1}: " if index is not None else ""
        super().__init__(f"{where}{reason}")
