"""Arc geometry used to draw the wheel."""

from .arc import (
    DEFAULT_POINTS_ON_CIRCLE,
    FULL_CIRCLE_RADIANS,
    ArcCanvas,
    add_bezier_arc_to_path,
    create_bezier_arc_degrees,
    create_bezier_arc_radians,
    draw_arc,
    normalize_radians,
    point_from_angle_degrees,
    point_from_angle_radians,
)
from .path import ArcPath, CubicTo, MoveTo, PathCommand, Point

__all__ = [
    "DEFAULT_POINTS_ON_CIRCLE",
    "FULL_CIRCLE_RADIANS",
    "ArcCanvas",
    "ArcPath",
    "CubicTo",
    "MoveTo",
    "PathCommand",
    "Point",
    "add_bezier_arc_to_path",
    "create_bezier_arc_degrees",
    "create_bezier_arc_radians",
    "draw_arc",
    "normalize_radians",
    "point_from_angle_degrees",
    "point_from_angle_radians",
]
