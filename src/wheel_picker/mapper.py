"""Value <-> angle mapping and the touch/drag gesture state machine.

Angles are in degrees, measured clockwise from 12 o'clock after the wheel
rotation is compensated. One full turn spans ``cycle_value`` values, so a
cyclic range can be dragged around the wheel several times while the
value keeps growing.

The mapper stores the angle of the *snapped but unclamped* value. The
value reported to the host is clamped to the limits; keeping the raw
angle lets a drag past a limit continue to track the pointer without a
jump when the direction reverses.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Tuple

import logging
import math

from .models import InvalidConfigurationError
from .utils import FULL_TURN_DEGREES, clamp, normalize_degrees

logger = logging.getLogger(__name__)

ValueCallback = Callable[[float], None]

INSIDE_RADIUS_RATIO = 0.6
OUTSIDE_RADIUS_RATIO = 1.4


class TouchPosition(Enum):
    ON_WHEEL = "on_wheel"
    INSIDE = "inside"
    OUTSIDE = "outside"


class GesturePhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


def cycle_value_from_limits(min_value: float, max_value: float) -> float:
    """Value span of one turn implied by the limits."""
    if min_value < 0 < max_value:
        return max_value - min_value + 1
    return abs(max_value + min_value)


class AngleValueMapper:
    """Translate pointer positions to angles and snapped, clamped values.

    ``on_value_updated`` is called with the clamped value after every
    accepted value change.
    """

    def __init__(
        self,
        on_value_updated: ValueCallback,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        step: float = 0.1,
        cycle_value: Optional[float] = None,
        wheel_rotation: float = 0.0,
        wheel_radius: float = 0.0,
    ) -> None:
        self._on_value_updated = on_value_updated
        self._min_value = _optional_float(min_value)
        self._max_value = _optional_float(max_value)
        self._step = _checked_step(step)
        self._explicit_cycle_value: Optional[float] = None
        self._cycle_value: Optional[float] = None
        self._degree_per_value: Optional[float] = None
        self._wheel_rotation = float(wheel_rotation)
        self._wheel_radius = float(wheel_radius)

        self._angle = 0.0
        self._phase = GesturePhase.IDLE
        self._last_angle: Optional[float] = None

        if cycle_value is None:
            self._derive_cycle_value()
        else:
            self.set_cycle_value(cycle_value)

    # ----------------------------- Configuration -------------------------------

    @property
    def min_value(self) -> Optional[float]:
        return self._min_value

    @property
    def max_value(self) -> Optional[float]:
        return self._max_value

    @property
    def step(self) -> float:
        return self._step

    @property
    def cycle_value(self) -> Optional[float]:
        """Effective value span of one turn, ``None`` until it is known."""
        return self._cycle_value

    @property
    def degree_per_value(self) -> Optional[float]:
        return self._degree_per_value

    @property
    def wheel_rotation(self) -> float:
        return self._wheel_rotation

    @property
    def wheel_radius(self) -> float:
        return self._wheel_radius

    def set_min_value(self, min_value: Optional[float]) -> None:
        previous = self._known_value()
        self._min_value = _optional_float(min_value)
        self._derive_cycle_value()
        self._reapply_value(previous)

    def set_max_value(self, max_value: Optional[float]) -> None:
        previous = self._known_value()
        self._max_value = _optional_float(max_value)
        self._derive_cycle_value()
        self._reapply_value(previous)

    def set_cycle_value(self, cycle_value: Optional[float]) -> None:
        """Set the value span of one turn.

        ``None`` or ``0`` derive it from the limits again.
        """
        previous = self._known_value()
        if cycle_value is None or cycle_value == 0:
            self._explicit_cycle_value = None
            self._apply_cycle_value(self._limits_cycle_value())
        elif cycle_value < 0:
            raise InvalidConfigurationError(
                f"Cycle value must be positive, got {cycle_value!r}."
            )
        else:
            self._explicit_cycle_value = float(cycle_value)
            self._apply_cycle_value(self._explicit_cycle_value)
        self._reapply_value(previous)

    def set_step(self, step: float) -> None:
        """Change the value granularity and re-snap the current value."""
        self._step = _checked_step(step)
        logger.debug("Step set to %s", self._step)
        if self._degree_per_value is not None:
            self._set_angle(self._angle)

    def set_wheel_rotation(self, degrees: float) -> None:
        self._wheel_rotation = float(degrees)

    def set_wheel_radius(self, radius: float) -> None:
        self._wheel_radius = float(radius)

    def _known_value(self) -> Optional[float]:
        if self._degree_per_value is None:
            return None
        return self.get_value()

    def _reapply_value(self, previous: Optional[float]) -> None:
        """Keep the picked value across a change of cycle or limits."""
        if previous is not None and self._degree_per_value is not None:
            self.set_value(previous)

    def _is_unbounded(self) -> bool:
        return self._min_value is None or self._max_value is None

    def _derive_cycle_value(self) -> None:
        if self._explicit_cycle_value is not None or self._is_unbounded():
            return
        self._apply_cycle_value(self._limits_cycle_value())

    def _limits_cycle_value(self) -> float:
        if self._min_value is None or self._max_value is None:
            raise InvalidConfigurationError(
                "Either the limits or the cycle value should be set."
            )
        return cycle_value_from_limits(self._min_value, self._max_value)

    def _apply_cycle_value(self, cycle_value: float) -> None:
        if cycle_value == 0:
            raise InvalidConfigurationError(
                "The limits describe an empty cycle; set an explicit cycle value."
            )
        self._cycle_value = float(cycle_value)
        self._degree_per_value = FULL_TURN_DEGREES / self._cycle_value
        logger.debug(
            "Cycle value %s (%s degrees per value)",
            self._cycle_value,
            self._degree_per_value,
        )

    # ---------------------------- Value <-> angle ------------------------------

    def _require_degree_per_value(self) -> float:
        if self._degree_per_value is None:
            raise InvalidConfigurationError(
                "Either the limits or the cycle value should be set."
            )
        return self._degree_per_value

    def value_to_degree(self, value: float) -> float:
        return value * self._require_degree_per_value()

    def degree_to_value(self, angle: float) -> float:
        return angle / self._require_degree_per_value()

    def closest_value(self, value: float) -> float:
        """Round ``value`` half up to the nearest multiple of the step."""
        return math.floor(value / self._step + 0.5) * self._step

    def angle_limits(self) -> Tuple[Optional[float], Optional[float]]:
        lo = None if self._min_value is None else self.value_to_degree(self._min_value)
        hi = None if self._max_value is None else self.value_to_degree(self._max_value)
        return lo, hi

    def set_value(self, value: float) -> None:
        snapped = self.closest_value(value)
        self._angle = self.value_to_degree(snapped)
        self._on_value_updated(clamp(snapped, self._min_value, self._max_value))

    def get_value(self) -> float:
        return self.degree_to_value(self.get_angle())

    def get_angle(self) -> float:
        """Current angle limited to the angles of the value limits."""
        lo, hi = self.angle_limits()
        return clamp(self._angle, lo, hi)

    @property
    def raw_angle(self) -> float:
        return self._angle

    def restore_angle(self, angle: float) -> None:
        """Re-inject a saved angle verbatim, skipping snapping and clamping."""
        self._angle = float(angle)
        self._on_value_updated(self.get_value())

    def _set_angle(self, angle: float) -> None:
        self.set_value(self.degree_to_value(angle))

    # ------------------------------ Gestures -----------------------------------

    @property
    def phase(self) -> GesturePhase:
        return self._phase

    @property
    def is_dragging(self) -> bool:
        return self._phase is GesturePhase.DRAGGING

    @property
    def last_angle(self) -> Optional[float]:
        """Unwrapped pointer angle of the running drag, ``None`` when idle."""
        return self._last_angle

    def angle_from_pointer(self, x: float, y: float) -> float:
        """Angle of a center-relative pointer, 0 at 12 o'clock, clockwise."""
        return math.degrees(math.atan2(y, x)) + 90.0 - self._wheel_rotation

    def classify_touch(self, x: float, y: float) -> TouchPosition:
        distance = math.hypot(x, y)
        if distance < self._wheel_radius * INSIDE_RADIUS_RATIO:
            return TouchPosition.INSIDE
        if distance > self._wheel_radius * OUTSIDE_RADIUS_RATIO:
            return TouchPosition.OUTSIDE
        return TouchPosition.ON_WHEEL

    def touch_down(self, x: float, y: float) -> TouchPosition:
        """Start a gesture; only a touch on the wheel band starts dragging."""
        position = self.classify_touch(x, y)
        if position is TouchPosition.ON_WHEEL:
            self._phase = GesturePhase.DRAGGING
            self._last_angle = self._angle
            logger.debug("Drag started at (%.1f, %.1f)", x, y)
            self._set_angle(self.angle_for_touch(self.angle_from_pointer(x, y)))
        return position

    def drag(self, x: float, y: float) -> bool:
        if self._phase is not GesturePhase.DRAGGING:
            return False
        self._set_angle(self.angle_for_move(self.angle_from_pointer(x, y)))
        return True

    def release(self) -> Optional[float]:
        """Finish the drag and return the committed value."""
        if self._phase is not GesturePhase.DRAGGING:
            return None
        self._end_drag()
        value = self.get_value()
        logger.debug("Drag committed value %s", value)
        return value

    def cancel(self) -> bool:
        if self._phase is not GesturePhase.DRAGGING:
            return False
        self._end_drag()
        logger.debug("Drag cancelled")
        return True

    def _end_drag(self) -> None:
        self._phase = GesturePhase.IDLE
        self._last_angle = None

    def angle_for_touch(self, angle: float) -> float:
        """Jump along the shortest rotation from the current angle to ``angle``."""
        diff = normalize_degrees(angle) - normalize_degrees(self._angle)
        if diff <= -180.0:
            diff += FULL_TURN_DEGREES
        elif diff > 180.0:
            diff -= FULL_TURN_DEGREES

        self._last_angle = self._angle + diff
        lo, hi = self.angle_limits()
        return clamp(self._angle + diff, lo, hi)

    def angle_for_move(self, angle: float) -> float:
        """Follow a drag, unwrapping across the 0/360 seam.

        The fold window is (-90, 270] rather than +-180 so a slow clockwise
        drag over the seam never flips direction.
        """
        last = self._angle if self._last_angle is None else self._last_angle
        diff = normalize_degrees(angle) - normalize_degrees(last)
        if diff <= -90.0:
            diff += FULL_TURN_DEGREES
        elif diff > 270.0:
            diff -= FULL_TURN_DEGREES

        last += diff
        if last > self._angle + FULL_TURN_DEGREES:
            last -= FULL_TURN_DEGREES
        elif last < self._angle - FULL_TURN_DEGREES:
            last += FULL_TURN_DEGREES
        self._last_angle = last

        lo, hi = self.angle_limits()
        return clamp(last, lo, hi)


def _optional_float(value: Optional[float]) -> Optional[float]:
    return None if value is None else float(value)


def _checked_step(step: float) -> float:
    if step <= 0:
        raise InvalidConfigurationError(f"Step must be positive, got {step!r}.")
    return float(step)


__all__ = [
    "AngleValueMapper",
    "GesturePhase",
    "TouchPosition",
    "ValueCallback",
    "cycle_value_from_limits",
    "INSIDE_RADIUS_RATIO",
    "OUTSIDE_RADIUS_RATIO",
]
