"""Entity package: Vehicle."""

from .entity import VEHICLE, Vehicle

__all__ = ["VEHICLE", "Vehicle"]
