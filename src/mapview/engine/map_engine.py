"""Headless map engine: view state, tile source and pointer/lifecycle signals.

The engine does not draw. It keeps the state a rendering backend would read
and emits the notifications the sync core listens to:

- ``MapView.center_changed`` / ``MapView.zoom_changed`` fire synchronously
  whenever the value actually changes, whoever changed it.
- ``MapEngine.movestart`` / ``MapEngine.moveend`` bracket a movement. They
  are raised by the gesture pipeline, never by programmatic view setters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from qtpy import QtCore

from mapview.engine.features import FeatureIndex, MapFeature
from mapview.viewport import (
    BaseImagery,
    Coordinate,
    MapPointerEvent,
    Pixel,
    Viewport,
    same_coordinate,
)

logger = logging.getLogger(__name__)

# Tile edge in pixels; one tile spans 360 degrees of longitude at zoom 0.
_TILE_SIZE_PX = 256.0


@dataclass(frozen=True)
class TileSourceConfig:
    imagery_set: BaseImagery
    key: str = ""
    max_zoom: int = 19
    cache_size: int = 100


class MapView(QtCore.QObject):
    """Live center/zoom of the engine."""

    center_changed = QtCore.Signal(object)
    zoom_changed = QtCore.Signal(float)

    def __init__(self, viewport: Optional[Viewport] = None, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent)
        initial = viewport or Viewport(center=(0.0, 0.0), zoom=2.0)
        self._center: Coordinate = initial.center
        self._zoom: float = initial.zoom

    @property
    def center(self) -> Coordinate:
        return self._center

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def viewport(self) -> Viewport:
        return Viewport(center=self._center, zoom=self._zoom)

    def set_center(self, center: Coordinate) -> bool:
        new_center = (float(center[0]), float(center[1]))
        if same_coordinate(new_center, self._center):
            return False
        self._center = new_center
        self.center_changed.emit(new_center)
        return True

    def set_zoom(self, zoom: float) -> bool:
        new_zoom = float(zoom)
        if new_zoom == self._zoom:
            return False
        self._zoom = new_zoom
        self.zoom_changed.emit(new_zoom)
        return True

    def set_viewport(self, viewport: Viewport) -> bool:
        moved = self.set_center(viewport.center)
        zoomed = self.set_zoom(viewport.zoom)
        return moved or zoomed


class MapEngine(QtCore.QObject):
    """Engine facade owned by a single mounted map view."""

    movestart = QtCore.Signal()
    moveend = QtCore.Signal()
    click = QtCore.Signal(object)
    pointermove = QtCore.Signal(object)
    tile_source_changed = QtCore.Signal(object)

    def __init__(
        self,
        *,
        tile_source: Optional[TileSourceConfig] = None,
        viewport: Optional[Viewport] = None,
        size: tuple[int, int] = (800, 600),
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._view = MapView(viewport, parent=self)
        self._features = FeatureIndex()
        self._tile_source = tile_source or TileSourceConfig(imagery_set=BaseImagery.AERIAL)
        self._size = (int(size[0]), int(size[1]))
        self._move_depth = 0

    # ------------------------------------------------------------------ state
    @property
    def view(self) -> MapView:
        return self._view

    @property
    def features(self) -> FeatureIndex:
        return self._features

    @property
    def tile_source(self) -> TileSourceConfig:
        return self._tile_source

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    @property
    def is_moving(self) -> bool:
        return self._move_depth > 0

    def resize(self, width: int, height: int) -> None:
        self._size = (max(1, int(width)), max(1, int(height)))

    # ---------------------------------------------------------------- tiles
    def set_base_imagery(self, imagery: Union[BaseImagery, str]) -> TileSourceConfig:
        """Replace the tile source with one for ``imagery``."""

        current = self._tile_source
        source = TileSourceConfig(
            imagery_set=BaseImagery.coerce(imagery),
            key=current.key,
            max_zoom=current.max_zoom,
            cache_size=current.cache_size,
        )
        self._tile_source = source
        logger.debug("tile source replaced: imagery=%s", source.imagery_set.value)
        self.tile_source_changed.emit(source)
        return source

    # ------------------------------------------------------------ movement
    def begin_move(self) -> None:
        self._move_depth += 1
        if self._move_depth == 1:
            self.movestart.emit()

    def end_move(self) -> None:
        if self._move_depth == 0:
            return
        self._move_depth -= 1
        if self._move_depth == 0:
            self.moveend.emit()

    # -------------------------------------------------------------- pixels
    def degrees_per_pixel(self) -> float:
        return 360.0 / (_TILE_SIZE_PX * (2.0 ** self._view.zoom))

    def pixel_to_coordinate(self, pixel: Pixel) -> Coordinate:
        width, height = self._size
        scale = self.degrees_per_pixel()
        lon0, lat0 = self._view.center
        dx = float(pixel[0]) - width / 2.0
        dy = float(pixel[1]) - height / 2.0
        return lon0 + dx * scale, lat0 - dy * scale

    def feature_at_pixel(self, pixel: Pixel) -> Optional[MapFeature]:
        return self._features.query(self.pixel_to_coordinate(pixel))

    # -------------------------------------------------------------- events
    def emit_click(self, pixel: Pixel) -> MapPointerEvent:
        event = MapPointerEvent(
            kind="click",
            pixel=(float(pixel[0]), float(pixel[1])),
            coordinate=self.pixel_to_coordinate(pixel),
        )
        self.click.emit(event)
        return event

    def emit_pointer_move(self, pixel: Pixel, *, dragging: bool = False) -> MapPointerEvent:
        event = MapPointerEvent(
            kind="pointermove",
            pixel=(float(pixel[0]), float(pixel[1])),
            coordinate=self.pixel_to_coordinate(pixel),
            dragging=bool(dragging),
        )
        self.pointermove.emit(event)
        return event


__all__ = ["MapEngine", "MapView", "TileSourceConfig"]
