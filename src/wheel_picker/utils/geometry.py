"""Geometry helpers shared by the mapper and the renderer."""

import math
from typing import Optional, Tuple

FULL_TURN_DEGREES = 360.0


def rotate_point(
    x: float, y: float, cx: float, cy: float, angle_deg: float
) -> Tuple[float, float]:
    """Rotate a point around ``(cx, cy)`` by ``angle_deg`` degrees."""
    theta = math.radians(angle_deg)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    x0 = x - cx
    y0 = y - cy
    xr = x0 * cos_t - y0 * sin_t + cx
    yr = x0 * sin_t + y0 * cos_t + cy
    return xr, yr


def clamp(value: float, lo: Optional[float], hi: Optional[float]) -> float:
    """Clamp ``value`` to ``[lo, hi]``; a ``None`` bound is open."""
    if lo is not None and value < lo:
        return lo
    if hi is not None and value > hi:
        return hi
    return value


def normalize_degrees(angle: float) -> float:
    """Wrap ``angle`` into ``[0, 360)``."""
    angle %= FULL_TURN_DEGREES
    if angle < 0.0:
        angle += FULL_TURN_DEGREES
    # -1e-20 % 360 rounds up to a full turn
    if angle >= FULL_TURN_DEGREES:
        angle = 0.0
    return angle


__all__ = ["rotate_point", "clamp", "normalize_degrees", "FULL_TURN_DEGREES"]
