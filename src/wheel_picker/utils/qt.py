"""Qt helper utilities."""

from PySide6 import QtCore, QtGui

from ..geometry import ArcPath, CubicTo, MoveTo
from ..models import Color
from ..render import Paint, PaintStyle


def arc_path_to_qpainterpath(path: ArcPath) -> QtGui.QPainterPath:
    """Convert an :class:`~wheel_picker.geometry.ArcPath` into a ``QPainterPath``."""
    qpath = QtGui.QPainterPath()
    for cmd in path.commands:
        if isinstance(cmd, MoveTo):
            qpath.moveTo(cmd.point.x, cmd.point.y)
        elif isinstance(cmd, CubicTo):
            qpath.cubicTo(
                QtCore.QPointF(cmd.control1.x, cmd.control1.y),
                QtCore.QPointF(cmd.control2.x, cmd.control2.y),
                QtCore.QPointF(cmd.end.x, cmd.end.y),
            )
    return qpath


def to_qcolor(color: Color) -> QtGui.QColor:
    r, g, b, a = color
    return QtGui.QColor(r, g, b, a)


def paint_to_pen(paint: Paint) -> QtGui.QPen:
    """Stroke pen for ``paint``; fill paints get no outline."""
    if paint.style is PaintStyle.FILL:
        return QtGui.QPen(QtCore.Qt.PenStyle.NoPen)
    pen = QtGui.QPen(to_qcolor(paint.color))
    pen.setWidthF(max(0.0, float(paint.width)))
    pen.setCapStyle(QtCore.Qt.PenCapStyle.FlatCap)
    return pen


def paint_to_brush(paint: Paint) -> QtGui.QBrush:
    if paint.style is PaintStyle.FILL:
        return QtGui.QBrush(to_qcolor(paint.color))
    return QtGui.QBrush(QtCore.Qt.BrushStyle.NoBrush)


__all__ = ["arc_path_to_qpainterpath", "to_qcolor", "paint_to_pen", "paint_to_brush"]
