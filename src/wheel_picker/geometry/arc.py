"""Circular arcs approximated with cubic Bezier segments.

Arcs are emitted as cubic curves only, with their boundary points computed
here rather than by the canvas.

A single cubic is a good fit for a quarter turn at most. Longer sweeps are
split either on a fixed global grid of angles (``overlap_points=True``) so
overlapping arcs share boundary points, or into equal sub-sweeps.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Protocol

from .path import ArcPath, Point

FULL_CIRCLE_RADIANS = 2.0 * math.pi
DEFAULT_POINTS_ON_CIRCLE = 8
_EPSILON = 1e-9


class ArcCanvas(Protocol):
    def draw_point(self, point: Point, paint: Any) -> None: ...

    def draw_path(self, path: ArcPath, paint: Any) -> None: ...


def normalize_radians(radians: float) -> float:
    """Wrap ``radians`` into ``[0, 2*pi)``."""
    radians %= FULL_CIRCLE_RADIANS
    if radians < 0.0:
        radians += FULL_CIRCLE_RADIANS
    if radians >= FULL_CIRCLE_RADIANS:
        radians = 0.0
    return radians


def point_from_angle_radians(center: Point, radius: float, angle: float) -> Point:
    return Point(
        center.x + radius * math.cos(angle), center.y + radius * math.sin(angle)
    )


def point_from_angle_degrees(center: Point, radius: float, angle: float) -> Point:
    return point_from_angle_radians(center, radius, math.radians(angle))


def add_bezier_arc_to_path(
    path: ArcPath, center: Point, start: Point, end: Point, move_to_start: bool
) -> None:
    """Append one cubic approximating the arc ``start -> end`` around ``center``.

    Both points must lie on the same circle. Equal points add no curve.
    """
    if move_to_start:
        path.move_to(start.x, start.y)
    if start == end:
        return

    ax = start.x - center.x
    ay = start.y - center.y
    bx = end.x - center.x
    by = end.y - center.y
    cross = ax * by - ay * bx
    q1 = ax * ax + ay * ay
    q2 = q1 + ax * bx + ay * by
    if abs(cross) <= _EPSILON * q1:
        # coincident or opposite points, no finite k2: straight chord
        k2 = 0.0
    else:
        k2 = 4.0 / 3.0 * (math.sqrt(max(0.0, 2.0 * q1 * q2)) - q2) / cross

    path.cubic_to(
        center.x + ax - k2 * ay,
        center.y + ay + k2 * ax,
        center.x + bx + k2 * by,
        center.y + by - k2 * bx,
        end.x,
        end.y,
    )


def create_bezier_arc_radians(
    center: Point,
    radius: float,
    start_angle: float,
    sweep_angle: float,
    points_on_circle: int = DEFAULT_POINTS_ON_CIRCLE,
    overlap_points: bool = False,
    add_to_path: Optional[ArcPath] = None,
) -> ArcPath:
    """Build an arc path, positive sweeps run clockwise on a y-down canvas.

    ``points_on_circle`` below 1 disables splitting entirely.
    """
    path = add_to_path if add_to_path is not None else ArcPath()
    if sweep_angle == 0.0:
        return path

    if points_on_circle >= 1:
        threshold = FULL_CIRCLE_RADIANS / points_on_circle
        if abs(sweep_angle) > threshold:
            angle = normalize_radians(start_angle)
            start = point_from_angle_radians(center, radius, angle)
            path.move_to(start.x, start.y)
            if overlap_points:
                _add_grid_aligned(path, center, radius, angle, sweep_angle, threshold)
            else:
                _add_equal_parts(path, center, radius, angle, sweep_angle, threshold)
            return path

    start = point_from_angle_radians(center, radius, start_angle)
    end = point_from_angle_radians(center, radius, start_angle + sweep_angle)
    add_bezier_arc_to_path(path, center, start, end, True)
    return path


def _add_grid_aligned(
    path: ArcPath,
    center: Point,
    radius: float,
    angle: float,
    sweep_angle: float,
    threshold: float,
) -> None:
    clockwise = sweep_angle > 0.0
    direction = 1 if clockwise else -1
    angle_end = angle + sweep_angle

    # Grid angles are rebuilt from integer indices so boundaries never drift.
    index = angle / threshold
    nearest = round(index)
    if abs(index - nearest) < _EPSILON:
        k = nearest + direction
    else:
        k = math.ceil(index) if clockwise else math.floor(index)

    start = point_from_angle_radians(center, radius, angle)
    while True:
        next_angle = k * threshold
        if clockwise:
            is_end = angle_end <= next_angle + _EPSILON
        else:
            is_end = angle_end >= next_angle - _EPSILON
        end = point_from_angle_radians(
            center, radius, angle_end if is_end else next_angle
        )
        add_bezier_arc_to_path(path, center, start, end, False)
        if is_end:
            break
        start = end
        k += direction


def _add_equal_parts(
    path: ArcPath,
    center: Point,
    radius: float,
    angle: float,
    sweep_angle: float,
    threshold: float,
) -> None:
    n = max(1, int(math.ceil(abs(sweep_angle) / threshold - _EPSILON)))
    sweep = sweep_angle / n
    start = point_from_angle_radians(center, radius, angle)
    for i in range(1, n + 1):
        end = point_from_angle_radians(center, radius, angle + sweep * i)
        add_bezier_arc_to_path(path, center, start, end, False)
        start = end


def create_bezier_arc_degrees(
    center: Point,
    radius: float,
    start_angle: float,
    sweep_angle: float,
    points_on_circle: int = DEFAULT_POINTS_ON_CIRCLE,
    overlap_points: bool = False,
    add_to_path: Optional[ArcPath] = None,
) -> ArcPath:
    return create_bezier_arc_radians(
        center,
        radius,
        math.radians(start_angle),
        math.radians(sweep_angle),
        points_on_circle,
        overlap_points,
        add_to_path,
    )


def draw_arc(
    canvas: ArcCanvas,
    center: Point,
    radius: float,
    start_angle: float,
    sweep_angle: float,
    paint: Any,
    points_on_circle: int = DEFAULT_POINTS_ON_CIRCLE,
    overlap_points: bool = False,
) -> None:
    """Draw an arc given in degrees; a zero sweep draws its start point."""
    if sweep_angle == 0.0:
        canvas.draw_point(point_from_angle_degrees(center, radius, start_angle), paint)
        return
    canvas.draw_path(
        create_bezier_arc_degrees(
            center,
            radius,
            start_angle,
            sweep_angle,
            points_on_circle,
            overlap_points,
        ),
        paint,
    )


__all__ = [
    "FULL_CIRCLE_RADIANS",
    "DEFAULT_POINTS_ON_CIRCLE",
    "ArcCanvas",
    "normalize_radians",
    "point_from_angle_radians",
    "point_from_angle_degrees",
    "add_bezier_arc_to_path",
    "create_bezier_arc_radians",
    "create_bezier_arc_degrees",
    "draw_arc",
]
