"""Tests for the toolkit-independent picker controller."""

from __future__ import annotations

import math
from typing import List, Tuple

import pytest

from wheel_picker import (
    GesturePhase,
    LabelPosition,
    TouchPosition,
    WheelConfig,
    WheelPicker,
    WheelStyle,
)
from wheel_picker.picker import STATE_ANGLE, Padding
from wheel_picker.render import DrawPath, DrawText, RecordingCanvas


def pointer_at(angle_deg: float, radius: float = 100.0) -> Tuple[float, float]:
    theta = math.radians(angle_deg - 90.0)
    return radius * math.cos(theta), radius * math.sin(theta)


class RecordingListener:
    def __init__(self) -> None:
        self.changing: List[float] = []
        self.changed: List[float] = []

    def on_value_changing(self, picker: WheelPicker, value: float) -> None:
        self.changing.append(value)

    def on_value_changed(self, picker: WheelPicker, value: float) -> None:
        self.changed.append(value)


class Counter:
    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> None:
        self.count += 1


def make_picker(interactive: bool = True) -> Tuple[WheelPicker, RecordingListener]:
    picker = WheelPicker(
        WheelConfig(
            min_value=0.0,
            max_value=100.0,
            step=1.0,
            cycle_value=100.0,
            interactive=interactive,
        ),
        WheelStyle(wheel_radius=100.0),
    )
    listener = RecordingListener()
    picker.set_on_value_change_listener(listener)
    return picker, listener


def test_default_picker_spans_zero_to_hundred() -> None:
    picker = WheelPicker()
    assert picker.mapper.cycle_value == 100.0
    assert picker.get_value() == 0.0
    assert picker.interactive


def test_initial_value_is_applied() -> None:
    picker = WheelPicker(WheelConfig(min_value=0.0, max_value=10.0, value=4.0))
    assert picker.get_value() == pytest.approx(4.0)


def test_drag_notifies_changing_then_changed() -> None:
    picker, listener = make_picker()

    assert picker.pointer_down(*pointer_at(90.0)) is TouchPosition.ON_WHEEL
    picker.pointer_move(*pointer_at(108.0))
    picker.pointer_up()

    assert listener.changing == [25.0, 30.0]
    assert listener.changed == [pytest.approx(30.0)]
    assert picker.mapper.phase is GesturePhase.IDLE


def test_programmatic_value_does_not_notify_listener() -> None:
    redraw = Counter()
    picker, listener = make_picker()
    picker.on_redraw = redraw

    picker.set_value(10.0)

    assert listener.changing == []
    assert listener.changed == []
    assert redraw.count == 1
    assert picker.get_value() == pytest.approx(10.0)


def test_cancel_ends_drag_without_commit() -> None:
    picker, listener = make_picker()
    picker.pointer_down(*pointer_at(90.0))
    picker.pointer_cancel()
    picker.pointer_up()

    assert listener.changed == []
    assert picker.get_value() == pytest.approx(25.0)


def test_press_inside_is_a_click() -> None:
    picker, listener = make_picker()
    clicks = Counter()
    picker.on_click = clicks

    assert picker.pointer_down(0.0, 0.0) is TouchPosition.INSIDE
    assert picker.is_pressed
    picker.pointer_up()

    assert clicks.count == 1
    assert not picker.is_pressed
    assert listener.changing == [] and listener.changed == []


def test_consumed_long_press_suppresses_click() -> None:
    picker, _ = make_picker()
    clicks = Counter()
    picker.on_click = clicks
    picker.on_long_click = lambda: True

    picker.pointer_down(0.0, 0.0)
    picker.long_press_elapsed()
    picker.pointer_up()

    assert clicks.count == 0


def test_unconsumed_long_press_still_clicks() -> None:
    picker, _ = make_picker()
    clicks = Counter()
    long_clicks = Counter()
    picker.on_click = clicks

    def on_long_click() -> bool:
        long_clicks()
        return False

    picker.on_long_click = on_long_click
    picker.pointer_down(0.0, 0.0)
    picker.long_press_elapsed()
    picker.pointer_up()

    assert long_clicks.count == 1
    assert clicks.count == 1


def test_long_press_needs_a_press_inside() -> None:
    picker, _ = make_picker()
    long_clicks = Counter()

    def on_long_click() -> bool:
        long_clicks()
        return True

    picker.on_long_click = on_long_click
    picker.pointer_down(*pointer_at(45.0))
    picker.long_press_elapsed()
    picker.pointer_up()

    assert long_clicks.count == 0


def test_press_outside_is_ignored() -> None:
    picker, listener = make_picker()
    clicks = Counter()
    picker.on_click = clicks

    assert picker.pointer_down(0.0, -300.0) is TouchPosition.OUTSIDE
    picker.pointer_move(*pointer_at(90.0))
    picker.pointer_up()

    assert clicks.count == 0
    assert listener.changing == [] and listener.changed == []
    assert picker.get_value() == 0.0


def test_non_interactive_picker_ignores_pointer() -> None:
    picker, listener = make_picker(interactive=False)

    assert picker.pointer_down(*pointer_at(90.0)) is TouchPosition.OUTSIDE
    picker.pointer_move(*pointer_at(120.0))
    picker.pointer_up()

    assert listener.changing == [] and listener.changed == []
    assert picker.get_value() == 0.0

    picker.set_value(40.0)
    assert picker.get_value() == pytest.approx(40.0)


def test_disabling_interaction_cancels_running_drag() -> None:
    picker, listener = make_picker()
    picker.pointer_down(*pointer_at(90.0))

    picker.set_interactive(False)
    picker.pointer_up()

    assert not picker.mapper.is_dragging
    assert listener.changed == []


def test_save_and_restore_state() -> None:
    picker, _ = make_picker()
    picker.set_value(42.0)
    state = picker.save_state()
    assert state[STATE_ANGLE] == pytest.approx(151.2)

    restored, _ = make_picker()
    restored.restore_state(state)
    assert restored.get_value() == pytest.approx(42.0)

    restored.restore_state({})
    assert restored.get_value() == pytest.approx(42.0)


def test_setters_request_redraw() -> None:
    picker, _ = make_picker()
    redraw = Counter()
    picker.on_redraw = redraw

    picker.set_show_divider(True)
    picker.set_wheel_rotation(45.0)
    picker.set_label("Speed", LabelPosition.BELOW)

    assert redraw.count == 3
    assert picker.renderer.style.show_divider
    assert picker.mapper.wheel_rotation == 45.0
    assert picker.renderer.style.label == "Speed"
    assert picker.renderer.style.label_position is LabelPosition.BELOW


def test_label_without_position_becomes_visible() -> None:
    picker, _ = make_picker()
    assert picker.renderer.style.label_position is LabelPosition.NONE

    picker.set_label("Speed")

    assert picker.renderer.style.label_position is LabelPosition.ABOVE
    canvas = RecordingCanvas()
    picker.render(canvas)
    assert "Speed" in [cmd.text for cmd in canvas.of_type(DrawText)]

    picker.set_label("Load", LabelPosition.END)
    picker.set_label("Torque")
    assert picker.renderer.style.label_position is LabelPosition.END


def test_step_change_resnaps_value() -> None:
    picker, _ = make_picker()
    picker.set_value(42.0)
    picker.set_step(5.0)
    assert picker.get_value() == pytest.approx(40.0)


# ---------------------------------- Layout ------------------------------------


def test_measure_automatic_radius() -> None:
    picker = WheelPicker()

    result = picker.measure(300.0, 200.0, Padding(10.0, 10.0, 10.0, 10.0))

    assert result.radius == pytest.approx(72.0)
    assert (result.center_x, result.center_y) == (150.0, 100.0)
    assert result.width is None and result.height is None
    assert picker.mapper.wheel_radius == pytest.approx(72.0)
    assert picker.to_local(150.0, 0.0) == (0.0, -100.0)


def test_measure_fixed_radius_requests_size() -> None:
    picker = WheelPicker(style=WheelStyle(wheel_radius=50.0))

    result = picker.measure(400.0, 400.0)

    assert result.radius == 50.0
    assert picker.center == (68.0, 68.0)
    assert result.width == 136.0
    assert result.height == 136.0


def test_measure_fixed_radius_shrinks_to_fit() -> None:
    picker = WheelPicker(style=WheelStyle(wheel_radius=500.0))
    result = picker.measure(120.0, 300.0)
    assert result.radius == 120.0


def test_render_draws_through_canvas() -> None:
    picker, _ = make_picker()
    picker.set_value(25.0)
    canvas = RecordingCanvas()

    picker.render(canvas)

    assert len(canvas.of_type(DrawPath)) == 2
    (text,) = canvas.of_type(DrawText)
    assert text.text == "25.0"
