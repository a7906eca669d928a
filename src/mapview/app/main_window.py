"""Main window: coordinate readout, imagery select, zoom slider and map canvas."""

from __future__ import annotations

import logging
from typing import Optional

from qtpy import QtCore, QtWidgets

from mapview.app.map_canvas import MapCanvasWidget
from mapview.control.viewport_store import ViewportStore
from mapview.viewport import ZOOM_MAX, ZOOM_MIN, BaseImagery, Viewport

logger = logging.getLogger(__name__)

# Slider positions are integers; 100 ticks per zoom level gives a 0.01 step.
SLIDER_SCALE = 100


def zoom_to_slider(zoom: float) -> int:
    return int(round(float(zoom) * SLIDER_SCALE))


def slider_to_zoom(value: int) -> float:
    return int(value) / SLIDER_SCALE


class MapViewWindow(QtWidgets.QMainWindow):
    """Bind the store to plain Qt controls around a :class:`MapCanvasWidget`.

    Control edits write to the store; store changes are mirrored back into
    the controls with their signals blocked so the mirror never re-enters
    the store.
    """

    def __init__(
        self,
        store: ViewportStore,
        canvas: MapCanvasWidget,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Map View")
        self.resize(1100, 760)
        self._store = store
        self._canvas = canvas

        self.lon_label = QtWidgets.QLabel()
        self.lat_label = QtWidgets.QLabel()
        self.zoom_label = QtWidgets.QLabel()

        self.imagery_select = QtWidgets.QComboBox()
        self.imagery_select.setObjectName("imagery-select")
        for imagery in BaseImagery:
            self.imagery_select.addItem(imagery.value)

        self.zoom_slider = QtWidgets.QSlider(QtCore.Qt.Vertical)
        self.zoom_slider.setRange(zoom_to_slider(ZOOM_MIN), zoom_to_slider(ZOOM_MAX))
        self.zoom_slider.setSingleStep(1)

        header = QtWidgets.QVBoxLayout()
        header.addWidget(self.lon_label)
        header.addWidget(self.lat_label)
        imagery_row = QtWidgets.QHBoxLayout()
        imagery_row.addWidget(QtWidgets.QLabel("Imagery: "))
        imagery_row.addWidget(self.imagery_select)
        imagery_row.addStretch(1)
        header.addLayout(imagery_row)

        zoom_column = QtWidgets.QVBoxLayout()
        zoom_column.addWidget(self.zoom_label)
        zoom_column.addWidget(self.zoom_slider, 1, QtCore.Qt.AlignHCenter)

        body = QtWidgets.QHBoxLayout()
        body.addLayout(zoom_column)
        body.addWidget(canvas, 1)

        root = QtWidgets.QVBoxLayout()
        root.addLayout(header)
        root.addLayout(body, 1)
        central = QtWidgets.QWidget()
        central.setLayout(root)
        self.setCentralWidget(central)

        self.imagery_select.currentTextChanged.connect(self._on_imagery_selected)
        self.zoom_slider.valueChanged.connect(self._on_slider_moved)
        store.viewport_changed.connect(self._mirror_viewport)
        store.base_imagery_changed.connect(self._mirror_imagery)

        self._mirror_viewport(store.viewport)
        self._mirror_imagery(store.base_imagery)

    @property
    def canvas(self) -> MapCanvasWidget:
        return self._canvas

    # ------------------------------------------------------------------ controls -> store
    def _on_imagery_selected(self, text: str) -> None:
        self._store.set_base_imagery(text)

    def _on_slider_moved(self, value: int) -> None:
        self._store.set_zoom(slider_to_zoom(value))

    # ------------------------------------------------------------------ store -> controls
    def _mirror_viewport(self, viewport: Viewport) -> None:
        lon, lat = viewport.center
        self.lon_label.setText(f"Longitude: {lon}")
        self.lat_label.setText(f"Latitude: {lat}")
        self.zoom_label.setText(f"Zoom {viewport.zoom:.2f}")
        with QtCore.QSignalBlocker(self.zoom_slider):
            self.zoom_slider.setValue(zoom_to_slider(viewport.zoom))

    def _mirror_imagery(self, imagery: BaseImagery) -> None:
        with QtCore.QSignalBlocker(self.imagery_select):
            self.imagery_select.setCurrentText(imagery.value)


__all__ = ["MapViewWindow", "SLIDER_SCALE", "slider_to_zoom", "zoom_to_slider"]
