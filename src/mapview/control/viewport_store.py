"""Application-side reactive state for the map viewport and imagery."""

from __future__ import annotations

import logging
from typing import Optional, Union

from qtpy import QtCore

from mapview.viewport import BaseImagery, Coordinate, Viewport

logger = logging.getLogger(__name__)


class ViewportStore(QtCore.QObject):
    """Canonical viewport + base imagery held by the application.

    Setters are idempotent: assigning an unchanged value emits nothing.
    """

    viewport_changed = QtCore.Signal(object)
    base_imagery_changed = QtCore.Signal(object)

    def __init__(
        self,
        viewport: Optional[Viewport] = None,
        base_imagery: Union[BaseImagery, str] = BaseImagery.CANVAS_LIGHT,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._viewport = viewport or Viewport()
        self._base_imagery = BaseImagery.coerce(base_imagery)

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def center(self) -> Coordinate:
        return self._viewport.center

    @property
    def zoom(self) -> float:
        return self._viewport.zoom

    @property
    def base_imagery(self) -> BaseImagery:
        return self._base_imagery

    def set_center(self, center: Coordinate) -> bool:
        return self.set_viewport(self._viewport.with_center(center))

    def set_zoom(self, zoom: float) -> bool:
        return self.set_viewport(self._viewport.with_zoom(zoom))

    def set_viewport(self, viewport: Viewport) -> bool:
        if viewport.same_as(self._viewport):
            return False
        self._viewport = viewport
        self.viewport_changed.emit(viewport)
        return True

    def set_base_imagery(self, imagery: Union[BaseImagery, str]) -> bool:
        value = BaseImagery.coerce(imagery)
        if value is self._base_imagery:
            return False
        self._base_imagery = value
        self.base_imagery_changed.emit(value)
        return True


__all__ = ["ViewportStore"]
