"""Turn the picker state into draw calls on an abstract canvas.

Coordinates are relative to the wheel center, y pointing down, angles in
degrees clockwise from 3 o'clock as on most 2-D canvases.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Protocol, Union

import numpy as np

from .formatting import SimpleValueFormatter, ValueFormatter
from .geometry import ArcPath, Point, draw_arc, point_from_angle_degrees
from .mapper import AngleValueMapper
from .models import Color, LabelPosition, WheelStyle
from .utils import FULL_TURN_DEGREES, rotate_point

ORIGIN = Point(0.0, 0.0)
TOP_ANGLE = -90.0
DIVIDER_OVERHANG = 2.0


class PaintStyle(Enum):
    STROKE = "stroke"
    FILL = "fill"


@dataclass(frozen=True)
class Paint:
    color: Color
    width: float = 0.0
    style: PaintStyle = PaintStyle.STROKE
    text_size: float = 0.0


class DrawPath(NamedTuple):
    path: ArcPath
    paint: Paint


class DrawPoint(NamedTuple):
    point: Point
    paint: Paint


class DrawLine(NamedTuple):
    start: Point
    end: Point
    paint: Paint


class DrawCircle(NamedTuple):
    center: Point
    radius: float
    paint: Paint


class DrawText(NamedTuple):
    """``origin`` is the left end of the text baseline."""

    text: str
    origin: Point
    paint: Paint


DrawCommand = Union[DrawPath, DrawPoint, DrawLine, DrawCircle, DrawText]


class Canvas(Protocol):
    def draw_path(self, path: ArcPath, paint: Paint) -> None: ...

    def draw_point(self, point: Point, paint: Paint) -> None: ...

    def draw_line(self, start: Point, end: Point, paint: Paint) -> None: ...

    def draw_circle(self, center: Point, radius: float, paint: Paint) -> None: ...

    def draw_text(self, text: str, origin: Point, paint: Paint) -> None: ...


class TextMetrics(NamedTuple):
    width: float
    height: float  # ascent of the glyphs above the baseline


class TextMeasurer(Protocol):
    def measure(self, text: str, paint: Paint) -> TextMetrics: ...


class ApproximateTextMeasurer:
    """Font-free estimate used when the backend has no text metrics."""

    def measure(self, text: str, paint: Paint) -> TextMetrics:
        if not text:
            return TextMetrics(0.0, 0.0)
        return TextMetrics(0.6 * paint.text_size * len(text), 0.7 * paint.text_size)


class RecordingCanvas:
    """Canvas that keeps the draw calls as a command list."""

    def __init__(self) -> None:
        self.commands: List[DrawCommand] = []

    def draw_path(self, path: ArcPath, paint: Paint) -> None:
        self.commands.append(DrawPath(path, paint))

    def draw_point(self, point: Point, paint: Paint) -> None:
        self.commands.append(DrawPoint(point, paint))

    def draw_line(self, start: Point, end: Point, paint: Paint) -> None:
        self.commands.append(DrawLine(start, end, paint))

    def draw_circle(self, center: Point, radius: float, paint: Paint) -> None:
        self.commands.append(DrawCircle(center, radius, paint))

    def draw_text(self, text: str, origin: Point, paint: Paint) -> None:
        self.commands.append(DrawText(text, origin, paint))

    def of_type(self, kind: type) -> List[DrawCommand]:
        return [c for c in self.commands if isinstance(c, kind)]


_NO_TEXT = TextMetrics(0.0, 0.0)


class Renderer:
    """Draw the value arc, dividers, pointer, value text and label."""

    def __init__(
        self,
        style: Optional[WheelStyle] = None,
        formatter: Optional[ValueFormatter] = None,
    ) -> None:
        self.formatter: ValueFormatter = formatter or SimpleValueFormatter("%.1f")
        self.wheel_radius = 0.0
        self.set_style(style or WheelStyle())

    def set_style(self, style: WheelStyle) -> None:
        self.style = style
        self.wheel_radius = style.wheel_radius
        self.background_paint = Paint(style.wheel_background_color, style.wheel_width)
        self.wheel_paint = Paint(style.wheel_color, style.wheel_width)
        self.divider_paint = Paint(style.divider_color, style.divider_width)
        self.halo_paint = Paint(
            style.pointer_halo_color, style.pointer_halo_width  # type: ignore[arg-type]
        )
        self.pointer_paint = Paint(
            style.pointer_color, style=PaintStyle.FILL  # type: ignore[arg-type]
        )
        self.text_paint = Paint(
            style.text_color,  # type: ignore[arg-type]
            style=PaintStyle.FILL,
            text_size=style.text_size,
        )
        self.label_paint = Paint(
            style.label_color,  # type: ignore[arg-type]
            style=PaintStyle.FILL,
            text_size=style.label_size,  # type: ignore[arg-type]
        )

    @property
    def pointer_extent(self) -> float:
        """Distance the pointer and its halo reach beyond the ring."""
        return self.style.pointer_radius + self.style.pointer_halo_width

    def draw(
        self,
        canvas: Canvas,
        mapper: AngleValueMapper,
        measurer: Optional[TextMeasurer] = None,
    ) -> None:
        rotation = mapper.wheel_rotation
        radius = self.wheel_radius
        value = mapper.get_value()

        color_start = TOP_ANGLE + rotation
        color_sweep = mapper.get_angle() % FULL_TURN_DEGREES
        if value > 0 and color_sweep == 0.0:
            color_sweep = FULL_TURN_DEGREES
        background_start = (color_start + color_sweep) % FULL_TURN_DEGREES
        background_sweep = FULL_TURN_DEGREES - color_sweep

        if value == 0:
            draw_arc(
                canvas, ORIGIN, radius, 0.0, FULL_TURN_DEGREES, self.background_paint
            )
        else:
            # A negative value fills the counter-clockwise remainder instead.
            if value > 0:
                active, rest = self.wheel_paint, self.background_paint
            else:
                active, rest = self.background_paint, self.wheel_paint
            draw_arc(canvas, ORIGIN, radius, background_start, background_sweep, rest)
            draw_arc(canvas, ORIGIN, radius, color_start, color_sweep, active)

        if self.style.show_divider:
            self._draw_dividers(canvas, mapper)
        if self.style.show_pointer:
            self._draw_pointer(canvas, background_start)
        self._draw_text(canvas, value, measurer or ApproximateTextMeasurer())

    def divider_angles(self, mapper: AngleValueMapper) -> np.ndarray:
        """Angles of the divider ticks, one per step, relative to 12 o'clock."""
        dpv = mapper.degree_per_value
        if dpv is None:
            return np.empty((0,), dtype=np.float64)
        degree_per_step = mapper.step * dpv
        return np.arange(
            0.0, FULL_TURN_DEGREES - degree_per_step / 2.0, degree_per_step
        )

    def _draw_dividers(self, canvas: Canvas, mapper: AngleValueMapper) -> None:
        length = self.style.wheel_width / 2.0 + DIVIDER_OVERHANG
        inner = self.wheel_radius - length
        outer = self.wheel_radius + length
        for angle in self.divider_angles(mapper):
            a = float(angle) + mapper.wheel_rotation
            x1, y1 = rotate_point(0.0, -inner, 0.0, 0.0, a)
            x2, y2 = rotate_point(0.0, -outer, 0.0, 0.0, a)
            canvas.draw_line(Point(x1, y1), Point(x2, y2), self.divider_paint)

    def _draw_pointer(self, canvas: Canvas, angle: float) -> None:
        center = point_from_angle_degrees(ORIGIN, self.wheel_radius, angle)
        radius = self.style.pointer_radius
        canvas.draw_circle(center, radius, self.halo_paint)
        canvas.draw_circle(center, radius, self.pointer_paint)

    def _draw_text(self, canvas: Canvas, value: float, measurer: TextMeasurer) -> None:
        position = self.style.label_position
        show_text = self.style.show_value_text
        show_label = position is not LabelPosition.NONE
        if not show_text and not show_label:
            return

        text = self.formatter.format(value) if show_text else ""
        label = self.style.label
        tm = measurer.measure(text, self.text_paint) if show_text else _NO_TEXT
        lm = measurer.measure(label, self.label_paint) if show_label else _NO_TEXT

        # Baselines sit half a glyph height below the line's center.
        if position in (LabelPosition.ABOVE, LabelPosition.BELOW):
            top = -(tm.height + lm.height) / 2.0
            if position is LabelPosition.ABOVE:
                label_y = top + lm.height
                text_y = label_y + tm.height
            else:
                text_y = top + tm.height
                label_y = text_y + lm.height
            label_x = -lm.width / 2.0
            text_x = -tm.width / 2.0
        elif position in (LabelPosition.START, LabelPosition.END):
            left = -(lm.width + tm.width) / 2.0
            if position is LabelPosition.START:
                label_x, text_x = left, left + lm.width
            else:
                text_x, label_x = left, left + tm.width
            label_y = lm.height / 2.0
            text_y = tm.height / 2.0
        else:
            text_x, text_y = -tm.width / 2.0, tm.height / 2.0
            label_x = label_y = 0.0

        if show_text:
            canvas.draw_text(text, Point(text_x, text_y), self.text_paint)
        if show_label:
            canvas.draw_text(label, Point(label_x, label_y), self.label_paint)


__all__ = [
    "ApproximateTextMeasurer",
    "Canvas",
    "DrawCircle",
    "DrawCommand",
    "DrawLine",
    "DrawPath",
    "DrawPoint",
    "DrawText",
    "Paint",
    "PaintStyle",
    "RecordingCanvas",
    "Renderer",
    "TextMeasurer",
    "TextMetrics",
]
