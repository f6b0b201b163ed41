"""Qt widget and demo application for the wheel picker."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import logging
import os
import sys

from PySide6 import QtCore, QtGui, QtWidgets

APP_VERSION: str

if __package__ in (None, ""):
    PACKAGE_ROOT = Path(__file__).resolve().parents[1]
    if str(PACKAGE_ROOT) not in sys.path:
        sys.path.insert(0, str(PACKAGE_ROOT))

    import wheel_picker as _pkg

    from wheel_picker.formatting import (
        DecimalValueFormatter,
        PercentValueFormatter,
        SimpleValueFormatter,
        ValueFormatter,
    )
    from wheel_picker.geometry import ArcPath, Point
    from wheel_picker.mapper import TouchPosition
    from wheel_picker.models import AppConfig, LabelPosition, WheelConfig, WheelStyle
    from wheel_picker.picker import Padding, WheelPicker
    from wheel_picker.render import Paint, TextMetrics
    from wheel_picker.utils.qt import (
        arc_path_to_qpainterpath,
        paint_to_brush,
        paint_to_pen,
        to_qcolor,
    )

    APP_VERSION = getattr(_pkg, "__version__", "0.0.0")
else:
    from . import __version__ as APP_VERSION
    from .formatting import (
        DecimalValueFormatter,
        PercentValueFormatter,
        SimpleValueFormatter,
        ValueFormatter,
    )
    from .geometry import ArcPath, Point
    from .mapper import TouchPosition
    from .models import AppConfig, LabelPosition, WheelConfig, WheelStyle
    from .picker import Padding, WheelPicker
    from .render import Paint, TextMetrics
    from .utils.qt import (
        arc_path_to_qpainterpath,
        paint_to_brush,
        paint_to_pen,
        to_qcolor,
    )

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "WHEEL_PICKER_LOG_LEVEL"


# ------------------------------- Qt Canvas ------------------------------------


def _font_for(paint: Paint) -> QtGui.QFont:
    font = QtGui.QFont()
    font.setPixelSize(max(1, int(round(paint.text_size))))
    return font


class QtCanvas:
    """Canvas protocol implemented on top of a ``QPainter``."""

    def __init__(self, painter: QtGui.QPainter) -> None:
        self._painter = painter

    def _apply(self, paint: Paint) -> None:
        self._painter.setPen(paint_to_pen(paint))
        self._painter.setBrush(paint_to_brush(paint))

    def draw_path(self, path: ArcPath, paint: Paint) -> None:
        self._apply(paint)
        self._painter.drawPath(arc_path_to_qpainterpath(path))

    def draw_point(self, point: Point, paint: Paint) -> None:
        pen = QtGui.QPen(to_qcolor(paint.color))
        pen.setWidthF(max(1.0, float(paint.width)))
        pen.setCapStyle(QtCore.Qt.PenCapStyle.RoundCap)
        self._painter.setPen(pen)
        self._painter.drawPoint(QtCore.QPointF(point.x, point.y))

    def draw_line(self, start: Point, end: Point, paint: Paint) -> None:
        self._apply(paint)
        self._painter.drawLine(
            QtCore.QPointF(start.x, start.y), QtCore.QPointF(end.x, end.y)
        )

    def draw_circle(self, center: Point, radius: float, paint: Paint) -> None:
        self._apply(paint)
        self._painter.drawEllipse(QtCore.QPointF(center.x, center.y), radius, radius)

    def draw_text(self, text: str, origin: Point, paint: Paint) -> None:
        self._painter.setFont(_font_for(paint))
        self._painter.setPen(QtGui.QPen(to_qcolor(paint.color)))
        self._painter.drawText(QtCore.QPointF(origin.x, origin.y), text)


class QtTextMeasurer:
    def measure(self, text: str, paint: Paint) -> TextMetrics:
        if not text:
            return TextMetrics(0.0, 0.0)
        metrics = QtGui.QFontMetricsF(_font_for(paint))
        return TextMetrics(
            float(metrics.horizontalAdvance(text)),
            float(metrics.tightBoundingRect(text).height()),
        )


# ------------------------------ Picker Widget ---------------------------------


class WheelPickerWidget(QtWidgets.QWidget):
    valueChanging = QtCore.Signal(float)
    valueChanged = QtCore.Signal(float)
    clicked = QtCore.Signal()
    longClicked = QtCore.Signal()

    def __init__(
        self,
        config: Optional[WheelConfig] = None,
        style: Optional[WheelStyle] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._picker = WheelPicker(config, style, on_redraw=self.update)
        self._picker.set_on_value_change_listener(self)
        self._picker.on_click = self.clicked.emit
        self._picker.on_long_click = self._on_long_click
        self._measurer = QtTextMeasurer()

        self._long_press_timer = QtCore.QTimer(self)
        self._long_press_timer.setSingleShot(True)
        self._long_press_timer.setInterval(
            QtGui.QGuiApplication.styleHints().mousePressAndHoldInterval()
        )
        self._long_press_timer.timeout.connect(self._picker.long_press_elapsed)

        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(120, 120)
        self.setSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding,
        )

    # ----------------------------- Properties ---------------------------------

    @property
    def picker(self) -> WheelPicker:
        return self._picker

    def value(self) -> float:
        return self._picker.get_value()

    def set_value(self, value: float) -> None:
        self._picker.set_value(value)

    def set_wheel_rotation(self, degrees: float) -> None:
        self._picker.set_wheel_rotation(degrees)

    def set_value_formatter(self, formatter: ValueFormatter) -> None:
        self._picker.set_value_formatter(formatter)

    # ------------------------------ Listener ----------------------------------

    def on_value_changing(self, picker: WheelPicker, value: float) -> None:
        self.valueChanging.emit(float(value))

    def on_value_changed(self, picker: WheelPicker, value: float) -> None:
        self.valueChanged.emit(float(value))

    def _on_long_click(self) -> bool:
        self.longClicked.emit()
        return True

    # ----------------------------- Interaction --------------------------------

    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() != QtCore.Qt.MouseButton.LeftButton:
            e.ignore()
            return
        pos = e.position()
        x, y = self._picker.to_local(pos.x(), pos.y())
        if self._picker.pointer_down(x, y) is TouchPosition.INSIDE:
            self._long_press_timer.start()
        e.accept()

    def mouseMoveEvent(self, e: QtGui.QMouseEvent) -> None:
        if not self._picker.mapper.is_dragging:
            e.ignore()
            return
        pos = e.position()
        self._picker.pointer_move(*self._picker.to_local(pos.x(), pos.y()))
        e.accept()

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        self._long_press_timer.stop()
        self._picker.pointer_up()
        e.accept()

    def keyPressEvent(self, e: QtGui.QKeyEvent) -> None:
        if e.key() == QtCore.Qt.Key.Key_Escape and self._picker.mapper.is_dragging:
            self._long_press_timer.stop()
            self._picker.pointer_cancel()
            e.accept()
            return
        super().keyPressEvent(e)

    def focusOutEvent(self, e: QtGui.QFocusEvent) -> None:
        self._long_press_timer.stop()
        self._picker.pointer_cancel()
        super().focusOutEvent(e)

    # ------------------------------- Layout -----------------------------------

    def resizeEvent(self, e: QtGui.QResizeEvent) -> None:
        margins = self.contentsMargins()
        self._picker.measure(
            float(self.width()),
            float(self.height()),
            Padding(margins.left(), margins.top(), margins.right(), margins.bottom()),
        )
        super().resizeEvent(e)

    def sizeHint(self) -> QtCore.QSize:
        style = self._picker.renderer.style
        if style.wheel_radius > 0:
            side = 2.0 * (style.wheel_radius + self._picker.renderer.pointer_extent)
            return QtCore.QSize(int(side) + 1, int(side) + 1)
        return QtCore.QSize(220, 220)

    # ----------------------------- Painting -----------------------------------

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        cx, cy = self._picker.center
        painter.translate(cx, cy)
        self._picker.render(QtCanvas(painter), self._measurer)
        painter.end()


# ------------------------------ Demo Window -----------------------------------


FORMATTERS = {
    "Decimal (1 digit)": lambda: DecimalValueFormatter(1),
    "Integer": lambda: SimpleValueFormatter("%.0f"),
    "Percent": PercentValueFormatter,
}


class DemoWindow(QtWidgets.QWidget):
    """Main picker plus a rotation picker that turns its zero position."""

    def __init__(self, cfg: AppConfig, app_version: str) -> None:
        super().__init__(None)
        self._app_version = app_version or "unknown"
        self.setWindowTitle(f"wheel_picker {self._app_version}")
        self.setMinimumWidth(520)

        self.main_picker = WheelPickerWidget(cfg.wheel, cfg.style, self)
        self.rotation_picker = WheelPickerWidget(
            WheelConfig(
                min_value=0.0,
                max_value=360.0,
                step=1.0,
                cycle_value=360.0,
                value=cfg.wheel.wheel_rotation,
            ),
            WheelStyle(
                wheel_width=6.0,
                text_size=16.0,
                label="Rotation",
                label_position=LabelPosition.BELOW,
                pointer_radius=6.0,
                pointer_halo_width=6.0,
            ),
            self,
        )
        self.rotation_picker.set_value_formatter(SimpleValueFormatter("%.0f°"))
        self.rotation_picker.setMaximumWidth(180)

        self.formatter_combo = QtWidgets.QComboBox()
        self.formatter_combo.addItems(list(FORMATTERS))
        self.formatter_combo.currentTextChanged.connect(self._on_formatter_chosen)

        self.divider_check = QtWidgets.QCheckBox("Show dividers")
        self.divider_check.setChecked(cfg.style.show_divider)
        self.divider_check.toggled.connect(self.main_picker.picker.set_show_divider)

        self.status_label = QtWidgets.QLabel("Drag the ring to pick a value.")
        self.status_label.setWordWrap(True)

        self.main_picker.valueChanging.connect(
            lambda v: self.set_status(f"Picking: {v:g}")
        )
        self.main_picker.valueChanged.connect(
            lambda v: self.set_status(f"Committed value: {v:g}")
        )
        self.main_picker.clicked.connect(
            lambda: self.set_status(f"Current value: {self.main_picker.value():g}")
        )
        self.main_picker.longClicked.connect(self._on_long_click)
        self.rotation_picker.valueChanging.connect(self.main_picker.set_wheel_rotation)

        side = QtWidgets.QFormLayout()
        side.addRow(self.rotation_picker)
        side.addRow("Text format:", self.formatter_combo)
        side.addRow(self.divider_check)

        top = QtWidgets.QHBoxLayout()
        top.addWidget(self.main_picker, stretch=1)
        top.addLayout(side, stretch=0)

        v = QtWidgets.QVBoxLayout(self)
        v.addLayout(top)
        v.addWidget(self.status_label)

        self._on_formatter_chosen(self.formatter_combo.currentText())

    def set_status(self, text: str) -> None:
        self.status_label.setText(text)

    def _on_formatter_chosen(self, name: str) -> None:
        factory = FORMATTERS.get(name)
        if factory is not None:
            self.main_picker.set_value_formatter(factory())

    def _on_long_click(self) -> None:
        self.main_picker.set_value(0.0)
        self.set_status("Reset to 0.")


# ---------------------------- Main Controller ---------------------------------


class MainController(QtCore.QObject):
    def __init__(self, app: QtWidgets.QApplication) -> None:
        super().__init__(None)
        self.app = app
        self.cfg = self._load_config()

        self._app_version = app.applicationVersion() or APP_VERSION
        self.window = DemoWindow(self.cfg, self._app_version)
        if self.cfg.saved_state:
            self.window.main_picker.picker.restore_state(self.cfg.saved_state)

        self.window.main_picker.valueChanged.connect(self._on_value_committed)
        self.window.rotation_picker.valueChanged.connect(self._on_rotation_committed)
        self.window.show()

    # ---------------------------- Config I/O ----------------------------------

    def _config_path(self) -> Path:
        home = Path.home()
        return home / ".wheel_picker_config.json"

    def _load_config(self) -> AppConfig:
        p = self._config_path()
        if p.exists():
            try:
                return AppConfig.from_json(p.read_text(encoding="utf-8"))
            except (OSError, ValueError, TypeError, AttributeError) as exc:
                logger.warning("Ignoring unreadable config %s: %s", p, exc)
        return AppConfig()

    def _save_config(self) -> None:
        p = self._config_path()
        self.cfg.saved_state = self.window.main_picker.picker.save_state()
        try:
            p.write_text(self.cfg.to_json(), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save config to %s: %s", p, exc)

    # ---------------------------- Event Handlers ------------------------------

    def _on_value_committed(self, value: float) -> None:
        self.cfg.wheel.value = float(value)
        self._save_config()

    def _on_rotation_committed(self, value: float) -> None:
        self.cfg.wheel.wheel_rotation = float(value)
        self._save_config()


# ---------------------------------- Main --------------------------------------


def main() -> None:
    logging.basicConfig(
        level=os.environ.get(LOG_LEVEL_ENV, "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("wheel_picker")
    app.setApplicationVersion(APP_VERSION)

    ctrl = MainController(app)
    ret = app.exec()
    ctrl._save_config()

    sys.exit(ret)


if __name__ == "__main__":
    main()
