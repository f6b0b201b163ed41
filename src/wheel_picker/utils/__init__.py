"""Utility helpers for wheel_picker."""

from .geometry import FULL_TURN_DEGREES, clamp, normalize_degrees, rotate_point

__all__ = ["FULL_TURN_DEGREES", "clamp", "normalize_degrees", "rotate_point"]
