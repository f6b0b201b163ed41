"""Framework independent wheel picker controller.

``WheelPicker`` wires the pieces together: it feeds center-relative
pointer events to the :class:`~wheel_picker.mapper.AngleValueMapper`,
notifies listeners, requests redraws from the host and renders through
:class:`~wheel_picker.render.Renderer`. A GUI toolkit only has to forward
events, own the long-press timer and provide a canvas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol, Tuple

import logging

from .formatting import ValueFormatter
from .mapper import AngleValueMapper, TouchPosition
from .models import LabelPosition, WheelConfig, WheelStyle
from .render import Canvas, Renderer, TextMeasurer

logger = logging.getLogger(__name__)

STATE_ANGLE = "angle"


class OnValueChangeListener(Protocol):
    def on_value_changing(self, picker: "WheelPicker", value: float) -> None: ...

    def on_value_changed(self, picker: "WheelPicker", value: float) -> None: ...


@dataclass
class Padding:
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0


@dataclass
class Measurement:
    """Result of :meth:`WheelPicker.measure`.

    ``width``/``height`` are only set when a fixed radius asks for a size.
    """

    radius: float
    center_x: float
    center_y: float
    width: Optional[float] = None
    height: Optional[float] = None


def _noop() -> None:
    pass


class WheelPicker:
    def __init__(
        self,
        config: Optional[WheelConfig] = None,
        style: Optional[WheelStyle] = None,
        on_redraw: Callable[[], None] = _noop,
    ) -> None:
        config = config or WheelConfig(min_value=0.0, max_value=100.0)
        style = style or WheelStyle()
        self.on_redraw = on_redraw
        self.on_click: Callable[[], None] = _noop
        self.on_long_click: Callable[[], bool] = lambda: False
        self._listener: Optional[OnValueChangeListener] = None

        self._interactive = config.interactive
        self._pressed = False
        self._long_pressed = False
        self._center_x = 0.0
        self._center_y = 0.0

        self.renderer = Renderer(style)
        self.mapper = AngleValueMapper(
            self._update_value,
            min_value=config.min_value,
            max_value=config.max_value,
            step=config.step,
            cycle_value=config.cycle_value,
            wheel_rotation=config.wheel_rotation,
            wheel_radius=style.wheel_radius,
        )
        self.mapper.set_value(config.value)

    # ----------------------------- Listeners -----------------------------------

    def set_on_value_change_listener(
        self, listener: Optional[OnValueChangeListener]
    ) -> None:
        self._listener = listener

    def _update_value(self, value: float) -> None:
        if self.mapper.is_dragging and self._listener is not None:
            self._listener.on_value_changing(self, value)
        self.on_redraw()

    # ---------------------------- Configuration --------------------------------

    @property
    def interactive(self) -> bool:
        return self._interactive

    def set_interactive(self, enabled: bool) -> None:
        self._interactive = bool(enabled)
        if not self._interactive:
            self.pointer_cancel()

    def set_min_value(self, value: Optional[float]) -> None:
        self.mapper.set_min_value(value)
        self.on_redraw()

    def set_max_value(self, value: Optional[float]) -> None:
        self.mapper.set_max_value(value)
        self.on_redraw()

    def set_cycle_value(self, value: Optional[float]) -> None:
        self.mapper.set_cycle_value(value)
        self.on_redraw()

    def set_step(self, step: float) -> None:
        self.mapper.set_step(step)
        self.on_redraw()

    def set_wheel_rotation(self, degrees: float) -> None:
        """Rotate the zero position clockwise from 12 o'clock."""
        self.mapper.set_wheel_rotation(degrees)
        self.on_redraw()

    def set_wheel_radius(self, radius: float) -> None:
        self.mapper.set_wheel_radius(radius)
        self.renderer.wheel_radius = float(radius)
        self.on_redraw()

    def set_style(self, style: WheelStyle) -> None:
        self.renderer.set_style(style)
        self.mapper.set_wheel_radius(style.wheel_radius)
        self.on_redraw()

    def set_value_formatter(self, formatter: ValueFormatter) -> None:
        self.renderer.formatter = formatter
        self.on_redraw()

    def set_label(self, label: str, position: Optional[LabelPosition] = None) -> None:
        style = self.renderer.style
        style.label = label or ""
        if position is not None:
            style.label_position = position
        elif style.label and style.label_position is LabelPosition.NONE:
            style.label_position = LabelPosition.ABOVE
        self.on_redraw()

    def set_show_divider(self, enabled: bool) -> None:
        self.renderer.style.show_divider = bool(enabled)
        self.on_redraw()

    def set_show_pointer(self, enabled: bool) -> None:
        self.renderer.style.show_pointer = bool(enabled)
        self.on_redraw()

    def set_show_value_text(self, enabled: bool) -> None:
        self.renderer.style.show_value_text = bool(enabled)
        self.on_redraw()

    # ------------------------------- Value -------------------------------------

    def get_value(self) -> float:
        return self.mapper.get_value()

    def set_value(self, value: float) -> None:
        self.mapper.set_value(value)

    def get_angle(self) -> float:
        return self.mapper.get_angle()

    def save_state(self) -> Dict[str, float]:
        return {STATE_ANGLE: self.mapper.get_angle()}

    def restore_state(self, state: Dict[str, float]) -> None:
        if STATE_ANGLE in state:
            self.mapper.restore_angle(float(state[STATE_ANGLE]))

    # ----------------------------- Interaction ---------------------------------

    @property
    def is_pressed(self) -> bool:
        """``True`` while a press inside the wheel may become a click."""
        return self._pressed

    def pointer_down(self, x: float, y: float) -> TouchPosition:
        """Handle a press at center-relative ``(x, y)``.

        Returns where the press landed; ``INSIDE`` asks the host to start
        its long-press timer.
        """
        if not self._interactive:
            return TouchPosition.OUTSIDE
        self._long_pressed = False
        position = self.mapper.touch_down(x, y)
        self._pressed = position is TouchPosition.INSIDE
        return position

    def pointer_move(self, x: float, y: float) -> None:
        if self._interactive:
            self.mapper.drag(x, y)

    def pointer_up(self) -> None:
        value = self.mapper.release()
        if value is not None:
            if self._listener is not None:
                self._listener.on_value_changed(self, value)
            self.on_redraw()
        elif self._pressed and not self._long_pressed:
            self.on_click()
        self._pressed = False
        self._long_pressed = False

    def pointer_cancel(self) -> None:
        if self.mapper.cancel():
            self.on_redraw()
        self._pressed = False
        self._long_pressed = False

    def long_press_elapsed(self) -> None:
        """Called by the host's timer once the press-and-hold delay passed."""
        if self._pressed and self.on_long_click():
            self._long_pressed = True

    # ------------------------------- Layout ------------------------------------

    @property
    def center(self) -> Tuple[float, float]:
        return self._center_x, self._center_y

    def measure(
        self, width: float, height: float, padding: Optional[Padding] = None
    ) -> Measurement:
        """Compute the wheel radius and center for the available size."""
        padding = padding or Padding()
        smaller = min(width, height)
        extent = self.renderer.pointer_extent
        configured = self.renderer.style.wheel_radius

        result_width: Optional[float] = None
        result_height: Optional[float] = None
        if configured == 0:
            radius = smaller / 2.0 - extent
            radius -= max(
                (padding.top + padding.bottom) / 2.0,
                (padding.left + padding.right) / 2.0,
            )
            self._center_x = width / 2.0
            self._center_y = height / 2.0
            logger.debug("Automatic radius: %s", radius)
        else:
            radius = min(smaller, configured) if smaller > 0 else configured
            self._center_x = radius + extent + padding.left
            self._center_y = radius + extent + padding.top
            result_width = 2.0 * (radius + extent) + padding.left + padding.right
            result_height = 2.0 * (radius + extent) + padding.top + padding.bottom

        if smaller > 0:
            radius = max(0.0, radius)
            self.mapper.set_wheel_radius(radius)
            self.renderer.wheel_radius = radius
        return Measurement(
            self.renderer.wheel_radius,
            self._center_x,
            self._center_y,
            result_width,
            result_height,
        )

    def to_local(self, x: float, y: float) -> Tuple[float, float]:
        """Translate widget coordinates to center-relative ones."""
        return x - self._center_x, y - self._center_y

    # ------------------------------ Rendering ----------------------------------

    def render(self, canvas: Canvas, measurer: Optional[TextMeasurer] = None) -> None:
        self.renderer.draw(canvas, self.mapper, measurer)


__all__ = [
    "Measurement",
    "OnValueChangeListener",
    "Padding",
    "WheelPicker",
    "STATE_ANGLE",
]
