"""Tests for the conversions between render primitives and Qt types."""

import pytest

QtGui = pytest.importorskip("PySide6.QtGui")
QtCore = pytest.importorskip("PySide6.QtCore")

from wheel_picker.geometry import Point, create_bezier_arc_degrees  # noqa: E402
from wheel_picker.render import Paint, PaintStyle  # noqa: E402
from wheel_picker.utils.qt import (  # noqa: E402
    arc_path_to_qpainterpath,
    paint_to_brush,
    paint_to_pen,
    to_qcolor,
)


def test_arc_path_becomes_painter_path() -> None:
    arc = create_bezier_arc_degrees(Point(0.0, 0.0), 50.0, 0.0, 180.0)

    qpath = arc_path_to_qpainterpath(arc)

    # one moveTo plus three elements per cubic
    assert qpath.elementCount() == 1 + 3 * len(arc.segments)
    start = qpath.elementAt(0)
    assert (start.x, start.y) == pytest.approx((50.0, 0.0))
    end = qpath.currentPosition()
    assert (end.x(), end.y()) == pytest.approx((-50.0, 0.0), abs=1e-9)


def test_colour_conversion_keeps_alpha() -> None:
    color = to_qcolor((10, 20, 30, 40))
    assert (color.red(), color.green(), color.blue(), color.alpha()) == (10, 20, 30, 40)


def test_stroke_paint_maps_to_pen() -> None:
    paint = Paint((0, 255, 255, 255), 8.0)

    pen = paint_to_pen(paint)

    assert pen.widthF() == 8.0
    assert pen.capStyle() == QtCore.Qt.PenCapStyle.FlatCap
    assert paint_to_brush(paint).style() == QtCore.Qt.BrushStyle.NoBrush


def test_fill_paint_maps_to_brush() -> None:
    paint = Paint((68, 68, 68, 255), style=PaintStyle.FILL)

    assert paint_to_pen(paint).style() == QtCore.Qt.PenStyle.NoPen
    brush = paint_to_brush(paint)
    assert brush.style() == QtCore.Qt.BrushStyle.SolidPattern
    assert brush.color().red() == 68
