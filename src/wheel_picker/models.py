"""Dataclasses describing picker configuration, style and persisted state."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import json

Color = Tuple[int, int, int, int]  # RGBA, 0..255

CYAN: Color = (0, 255, 255, 255)
DARK_GRAY: Color = (68, 68, 68, 255)


class InvalidConfigurationError(ValueError):
    """Raised when picker limits, step or cycle cannot describe a wheel."""


class LabelPosition(Enum):
    NONE = "none"
    ABOVE = "above"
    BELOW = "below"
    START = "start"
    END = "end"


@dataclass
class WheelConfig:
    """Value range and orientation of a picker.

    ``None`` limits are unbounded; ``cycle_value`` of ``None`` derives the
    value span of one turn from the limits.
    """

    min_value: Optional[float] = None
    max_value: Optional[float] = None
    step: float = 0.1
    cycle_value: Optional[float] = None
    wheel_rotation: float = 0.0  # degrees, clockwise
    value: float = 0.0
    interactive: bool = True


@dataclass
class WheelStyle:
    """Visual options; ``None`` colours follow the colour they default to."""

    wheel_radius: float = 0.0  # 0 = fit the available space
    wheel_width: float = 8.0
    wheel_color: Color = CYAN
    wheel_background_color: Color = DARK_GRAY
    divider_color: Color = DARK_GRAY
    divider_width: float = 2.0
    pointer_color: Optional[Color] = None
    pointer_halo_color: Optional[Color] = None
    pointer_radius: float = 8.0
    pointer_halo_width: float = 10.0
    text_color: Optional[Color] = None
    text_size: float = 25.0
    label: str = ""
    label_color: Optional[Color] = None
    label_size: Optional[float] = None
    label_position: Optional[LabelPosition] = None
    show_divider: bool = False
    show_pointer: bool = True
    show_value_text: bool = True

    def __post_init__(self) -> None:
        if self.pointer_color is None:
            self.pointer_color = self.wheel_color
        if self.pointer_halo_color is None:
            self.pointer_halo_color = self.wheel_background_color
        if self.text_color is None:
            self.text_color = self.wheel_color
        if self.label_color is None:
            self.label_color = self.text_color
        if self.label_size is None:
            self.label_size = self.text_size
        if self.label_position is None:
            self.label_position = (
                LabelPosition.ABOVE if self.label else LabelPosition.NONE
            )


@dataclass
class AppConfig:
    """Persisted configuration for the demo application."""

    wheel: WheelConfig = field(
        default_factory=lambda: WheelConfig(
            min_value=0.0, max_value=100.0, step=1.0, cycle_value=100.0
        )
    )
    style: WheelStyle = field(
        default_factory=lambda: WheelStyle(label="Value", show_divider=True)
    )
    saved_state: Dict[str, float] = field(default_factory=dict)

    def to_json(self) -> str:
        data = asdict(self)
        position = self.style.label_position or LabelPosition.NONE
        data["style"]["label_position"] = position.value
        return json.dumps(data, indent=2)

    @staticmethod
    def from_json(text: str) -> "AppConfig":
        data: Dict[str, Any] = json.loads(text)
        w = data.get("wheel", {})
        s = data.get("style", {})
        default_style = WheelStyle()
        label_position = s.get("label_position")
        return AppConfig(
            wheel=WheelConfig(
                min_value=_optional_float(w.get("min_value", 0.0)),
                max_value=_optional_float(w.get("max_value", 100.0)),
                step=float(w.get("step", 1.0)),
                cycle_value=_optional_float(w.get("cycle_value", 100.0)),
                wheel_rotation=float(w.get("wheel_rotation", 0.0)),
                value=float(w.get("value", 0.0)),
                interactive=bool(w.get("interactive", True)),
            ),
            style=WheelStyle(
                wheel_radius=float(s.get("wheel_radius", 0.0)),
                wheel_width=float(s.get("wheel_width", default_style.wheel_width)),
                wheel_color=_color(s.get("wheel_color"), CYAN),
                wheel_background_color=_color(
                    s.get("wheel_background_color"), DARK_GRAY
                ),
                divider_color=_color(s.get("divider_color"), DARK_GRAY),
                divider_width=float(s.get("divider_width", 2.0)),
                pointer_color=_optional_color(s.get("pointer_color")),
                pointer_halo_color=_optional_color(s.get("pointer_halo_color")),
                pointer_radius=float(s.get("pointer_radius", 8.0)),
                pointer_halo_width=float(s.get("pointer_halo_width", 10.0)),
                text_color=_optional_color(s.get("text_color")),
                text_size=float(s.get("text_size", 25.0)),
                label=str(s.get("label", "Value")),
                label_color=_optional_color(s.get("label_color")),
                label_size=_optional_float(s.get("label_size")),
                label_position=(
                    LabelPosition(label_position) if label_position else None
                ),
                show_divider=bool(s.get("show_divider", True)),
                show_pointer=bool(s.get("show_pointer", True)),
                show_value_text=bool(s.get("show_value_text", True)),
            ),
            saved_state={
                str(k): float(v) for k, v in data.get("saved_state", {}).items()
            },
        )


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _optional_color(value: Any) -> Optional[Color]:
    if value is None:
        return None
    r, g, b, a = (int(c) for c in value)
    return (r, g, b, a)


def _color(value: Any, default: Color) -> Color:
    return _optional_color(value) or default


__all__ = [
    "Color",
    "CYAN",
    "DARK_GRAY",
    "InvalidConfigurationError",
    "LabelPosition",
    "WheelConfig",
    "WheelStyle",
    "AppConfig",
]
