"""Tests for the cubic Bezier arc approximation."""

import math
from typing import List

import numpy as np
import pytest
from hypothesis import given, strategies as st
from numpy.testing import assert_allclose

from wheel_picker.geometry import (
    ArcPath,
    CubicTo,
    MoveTo,
    Point,
    add_bezier_arc_to_path,
    create_bezier_arc_degrees,
    draw_arc,
    normalize_radians,
    point_from_angle_degrees,
    point_from_angle_radians,
)
from wheel_picker.render import DrawPath, DrawPoint, Paint, RecordingCanvas
from wheel_picker.utils import normalize_degrees

CENTER = Point(0.0, 0.0)
RADIUS = 100.0

finite_angles = st.floats(
    min_value=-1e4, max_value=1e4, allow_nan=False, allow_infinity=False
)


def _angle_of(p: Point, center: Point = CENTER) -> float:
    return math.degrees(math.atan2(p.y - center.y, p.x - center.x)) % 360.0


def _boundary_angles(path: ArcPath) -> List[float]:
    angles = []
    for cmd in path.commands:
        point = cmd.point if isinstance(cmd, MoveTo) else cmd.end
        angles.append(round(_angle_of(point), 6) % 360.0)
    return angles


def _circular_distance(a: float, b: float, full: float) -> float:
    d = abs(a - b) % full
    return min(d, full - d)


# ------------------------------- Normalization --------------------------------


@given(finite_angles)
def test_normalize_radians_range(angle: float) -> None:
    result = normalize_radians(angle)
    assert 0.0 <= result < 2.0 * math.pi


@given(finite_angles, st.integers(min_value=-50, max_value=50))
def test_normalize_radians_is_periodic(angle: float, k: int) -> None:
    a = normalize_radians(angle)
    b = normalize_radians(angle + 2.0 * math.pi * k)
    assert _circular_distance(a, b, 2.0 * math.pi) < 1e-9


@given(finite_angles, st.integers(min_value=-50, max_value=50))
def test_normalize_degrees_range_and_period(angle: float, k: int) -> None:
    a = normalize_degrees(angle)
    b = normalize_degrees(angle + 360.0 * k)
    assert 0.0 <= a < 360.0
    assert _circular_distance(a, b, 360.0) < 1e-7


def test_normalize_edge_values() -> None:
    assert normalize_radians(2.0 * math.pi) == 0.0
    assert normalize_radians(-1e-20) == 0.0
    assert normalize_degrees(360.0) == 0.0
    assert normalize_degrees(-1e-20) == 0.0
    assert normalize_degrees(-90.0) == 270.0


@given(finite_angles)
def test_point_on_circle_is_periodic(angle: float) -> None:
    center = Point(12.0, -7.5)
    direct = point_from_angle_radians(center, RADIUS, angle)
    wrapped = point_from_angle_radians(center, RADIUS, normalize_radians(angle))
    assert_allclose(direct, wrapped, atol=1e-6)


def test_point_from_degrees_matches_radians() -> None:
    p = point_from_angle_degrees(Point(1.0, 2.0), 10.0, 90.0)
    assert p.x == pytest.approx(1.0)
    assert p.y == pytest.approx(12.0)


# ------------------------------- Single segment -------------------------------


def test_quarter_arc_uses_k2_control_points() -> None:
    path = ArcPath()
    add_bezier_arc_to_path(path, CENTER, Point(1.0, 0.0), Point(0.0, 1.0), True)

    assert isinstance(path.commands[0], MoveTo)
    (segment,) = path.segments
    k = 4.0 / 3.0 * (math.sqrt(2.0) - 1.0)
    assert segment.control1 == pytest.approx((1.0, k))
    assert segment.control2 == pytest.approx((k, 1.0))
    assert segment.end == (0.0, 1.0)


def test_equal_points_add_no_segment() -> None:
    path = ArcPath()
    add_bezier_arc_to_path(path, CENTER, Point(5.0, 0.0), Point(5.0, 0.0), True)
    assert path.commands == [MoveTo(Point(5.0, 0.0))]

    path = ArcPath()
    add_bezier_arc_to_path(path, CENTER, Point(5.0, 0.0), Point(5.0, 0.0), False)
    assert path.is_empty


def test_opposite_points_give_a_finite_segment() -> None:
    path = ArcPath()
    add_bezier_arc_to_path(
        path, CENTER, Point(RADIUS, 0.0), Point(-RADIUS, 0.0), True
    )

    (segment,) = path.segments
    assert np.all(np.isfinite(path.sample(8)))
    assert segment.end == (-RADIUS, 0.0)


@pytest.mark.parametrize("points_on_circle", [0, 1, 2])
def test_unsplit_half_turn_is_one_segment(points_on_circle: int) -> None:
    path = create_bezier_arc_degrees(
        CENTER, 10.0, 0.0, 180.0, points_on_circle=points_on_circle
    )

    assert len(path.segments) == 1
    assert_allclose(path.anchor_points(), [[10.0, 0.0], [-10.0, 0.0]], atol=1e-9)
    assert np.all(np.isfinite(path.sample(8)))


# ----------------------------------- Arcs -------------------------------------


def test_zero_sweep_returns_path_unchanged() -> None:
    assert create_bezier_arc_degrees(CENTER, RADIUS, 30.0, 0.0).is_empty

    existing = ArcPath()
    existing.move_to(1.0, 2.0)
    before = list(existing.commands)
    result = create_bezier_arc_degrees(
        CENTER, RADIUS, 30.0, 0.0, add_to_path=existing
    )
    assert result is existing
    assert existing.commands == before


def test_grid_aligned_split_boundaries() -> None:
    path = create_bezier_arc_degrees(
        CENTER, RADIUS, 0.0, 100.0, points_on_circle=12, overlap_points=True
    )

    assert isinstance(path.commands[0], MoveTo)
    assert sum(isinstance(c, MoveTo) for c in path.commands) == 1
    assert len(path.segments) == 4
    assert_allclose(_boundary_angles(path), [0.0, 30.0, 60.0, 90.0, 100.0], atol=1e-6)


def test_equal_split_boundaries() -> None:
    path = create_bezier_arc_degrees(
        CENTER, RADIUS, 0.0, 100.0, points_on_circle=12, overlap_points=False
    )

    assert len(path.segments) == 4
    assert_allclose(_boundary_angles(path), [0.0, 25.0, 50.0, 75.0, 100.0], atol=1e-6)


def test_grid_aligned_counter_clockwise() -> None:
    path = create_bezier_arc_degrees(
        CENTER, RADIUS, 100.0, -100.0, points_on_circle=12, overlap_points=True
    )

    assert len(path.segments) == 4
    assert_allclose(_boundary_angles(path), [100.0, 90.0, 60.0, 30.0, 0.0], atol=1e-6)


def test_grid_aligned_start_on_grid_advances() -> None:
    path = create_bezier_arc_degrees(
        CENTER, RADIUS, 30.0, 60.0, points_on_circle=12, overlap_points=True
    )

    assert len(path.segments) == 2
    assert_allclose(_boundary_angles(path), [30.0, 60.0, 90.0], atol=1e-6)


def test_overlapping_arcs_share_grid_points() -> None:
    first = create_bezier_arc_degrees(
        CENTER, RADIUS, 10.0, 200.0, points_on_circle=12, overlap_points=True
    )
    second = create_bezier_arc_degrees(
        CENTER, RADIUS, 50.0, 200.0, points_on_circle=12, overlap_points=True
    )

    shared = set(_boundary_angles(first)) & set(_boundary_angles(second))
    assert {60.0, 90.0, 120.0, 150.0, 180.0}.issubset(shared)


def test_unsplit_when_splitting_disabled_or_short() -> None:
    no_split = create_bezier_arc_degrees(
        CENTER, RADIUS, 0.0, 100.0, points_on_circle=0
    )
    assert len(no_split.segments) == 1

    short = create_bezier_arc_degrees(CENTER, RADIUS, 0.0, 20.0, points_on_circle=12)
    assert len(short.segments) == 1
    assert_allclose(_boundary_angles(short), [0.0, 20.0], atol=1e-6)


def test_full_circle_default_split() -> None:
    path = create_bezier_arc_degrees(CENTER, RADIUS, -90.0, 360.0)
    assert len(path.segments) == 8
    first = path.commands[0]
    last = path.segments[-1]
    assert isinstance(first, MoveTo) and isinstance(last, CubicTo)
    assert_allclose(first.point, last.end, atol=1e-9)


@pytest.mark.parametrize("overlap", [True, False])
@pytest.mark.parametrize("start, sweep", [(0.0, 100.0), (-90.0, 270.0), (45.0, -300.0)])
def test_arcs_stay_on_the_circle(overlap: bool, start: float, sweep: float) -> None:
    center = Point(40.0, -25.0)
    path = create_bezier_arc_degrees(
        center, RADIUS, start, sweep, points_on_circle=8, overlap_points=overlap
    )

    samples = path.sample(32)
    distances = np.hypot(samples[:, 0] - center.x, samples[:, 1] - center.y)
    assert np.max(np.abs(distances - RADIUS)) < 1e-3 * RADIUS


def test_draw_arc_zero_sweep_draws_point() -> None:
    canvas = RecordingCanvas()
    paint = Paint((255, 0, 0, 255), 3.0)

    draw_arc(canvas, CENTER, RADIUS, 90.0, 0.0, paint)

    (command,) = canvas.commands
    assert isinstance(command, DrawPoint)
    expected = point_from_angle_degrees(CENTER, RADIUS, 90.0)
    assert command.point == pytest.approx(expected)
    assert command.paint is paint


def test_draw_arc_nonzero_sweep_draws_path() -> None:
    canvas = RecordingCanvas()
    draw_arc(canvas, CENTER, RADIUS, 0.0, 90.0, Paint((0, 0, 0, 255)))

    (command,) = canvas.commands
    assert isinstance(command, DrawPath)
    assert len(command.path.segments) == 2


def test_anchor_points_and_empty_sampling() -> None:
    assert ArcPath().sample().shape == (0, 2)
    assert ArcPath().anchor_points().shape == (0, 2)

    path = create_bezier_arc_degrees(CENTER, RADIUS, 0.0, 90.0, points_on_circle=4)
    anchors = path.anchor_points()
    assert_allclose(anchors, [[RADIUS, 0.0], [0.0, RADIUS]], atol=1e-9)
