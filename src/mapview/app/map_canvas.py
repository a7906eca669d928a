"""Qt widget hosting a headless :class:`MapEngine`."""

from __future__ import annotations

import logging
from typing import Optional

from qtpy import QtCore, QtGui, QtWidgets

from mapview.engine.gestures import GestureDriver
from mapview.engine.map_engine import MapEngine
from mapview.viewport import Pixel, TooltipState

logger = logging.getLogger(__name__)

# Qt reports wheel rotation in 1/8 degree units; one notch is 15 degrees.
_ANGLE_PER_NOTCH = 120.0
_TOOLTIP_OFFSET_PX = 10


def _pointer_xy(event) -> Pixel:  # type: ignore[no-untyped-def]
    if hasattr(event, "position"):
        pos = event.position()
        return float(pos.x()), float(pos.y())
    pos = event.pos()
    return float(pos.x()), float(pos.y())


class MapCanvasWidget(QtWidgets.QWidget):
    """Forward mouse input to the gesture driver and show the tooltip label."""

    def __init__(
        self,
        engine: MapEngine,
        driver: GestureDriver,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._driver = driver
        self.setMouseTracking(True)
        self.setMinimumSize(200, 200)
        self.setSizePolicy(QtWidgets.QSizePolicy.Expanding, QtWidgets.QSizePolicy.Expanding)

        self._tooltip = QtWidgets.QLabel(self)
        self._tooltip.setObjectName("mapTooltip")
        self._tooltip.setStyleSheet("background: #f9fafb; padding: 4px; border-radius: 4px;")
        self._tooltip.hide()

    @property
    def engine(self) -> MapEngine:
        return self._engine

    @property
    def tooltip_label(self) -> QtWidgets.QLabel:
        return self._tooltip

    # ------------------------------------------------------------------ tooltip
    def show_tooltip(self, tooltip: TooltipState) -> None:
        if not tooltip.visible or tooltip.anchor is None:
            self._tooltip.hide()
            return
        self._tooltip.setText(str(tooltip.label))
        self._tooltip.adjustSize()
        x, y = self._coordinate_to_pixel(tooltip.anchor)
        # bottom-center positioning above the anchor
        left = int(x - self._tooltip.width() / 2)
        top = int(y - self._tooltip.height() - _TOOLTIP_OFFSET_PX)
        self._tooltip.move(left, top)
        self._tooltip.show()
        self._tooltip.raise_()

    def _coordinate_to_pixel(self, coordinate) -> Pixel:  # type: ignore[no-untyped-def]
        width, height = self._engine.size
        scale = self._engine.degrees_per_pixel()
        lon0, lat0 = self._engine.view.center
        return (
            width / 2.0 + (float(coordinate[0]) - lon0) / scale,
            height / 2.0 - (float(coordinate[1]) - lat0) / scale,
        )

    # ------------------------------------------------------------------ Qt events
    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:  # noqa: N802
        size = event.size()
        self._engine.resize(size.width(), size.height())
        super().resizeEvent(event)

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # noqa: N802
        painter = QtGui.QPainter(self)
        painter.fillRect(self.rect(), QtGui.QColor("#202020"))
        painter.end()

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: N802
        if event.button() == QtCore.Qt.LeftButton:
            self._driver.pointer_down(_pointer_xy(event))
            self.setCursor(QtCore.Qt.ClosedHandCursor)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: N802
        self._driver.pointer_move(_pointer_xy(event))
        event.accept()

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: N802
        if event.button() == QtCore.Qt.LeftButton:
            self._driver.pointer_up(_pointer_xy(event))
            self.unsetCursor()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QtGui.QWheelEvent) -> None:  # noqa: N802
        notches = event.angleDelta().y() / _ANGLE_PER_NOTCH
        if notches:
            self._driver.wheel(notches)
        event.accept()


__all__ = ["MapCanvasWidget"]
