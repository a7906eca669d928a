"""Translate pointer and wheel input into engine view mutations.

The driver mirrors the engine's own gesture pipeline: each gesture sample
updates the view first and only afterwards classifies it as a movement, so
the first ``center_changed``/``zoom_changed`` of a gesture is emitted before
``movestart``. Zoom requests are clamped here, at the input boundary.
"""

from __future__ import annotations

import logging
from typing import Optional

from mapview.engine.map_engine import MapEngine
from mapview.viewport import Pixel, clamp_zoom

logger = logging.getLogger(__name__)


class GestureDriver:
    """Drag-pan and wheel-zoom state for one engine."""

    def __init__(
        self,
        engine: MapEngine,
        *,
        wheel_step: float = 1.0,
        wheel_frames: int = 4,
        log_info: bool = False,
    ) -> None:
        self._engine = engine
        self._wheel_step = float(wheel_step)
        self._wheel_frames = max(1, int(wheel_frames))
        self._log_info = bool(log_info)
        self._dragging = False
        self._moved = False
        self._last_px: Pixel = (0.0, 0.0)

    @property
    def dragging(self) -> bool:
        return self._dragging

    # ------------------------------------------------------------------ drag
    def pointer_down(self, pixel: Pixel) -> None:
        self._dragging = True
        self._moved = False
        self._last_px = (float(pixel[0]), float(pixel[1]))

    def pointer_move(self, pixel: Pixel) -> None:
        engine = self._engine
        engine.emit_pointer_move(pixel, dragging=self._dragging)
        if not self._dragging:
            return
        x, y = float(pixel[0]), float(pixel[1])
        dx = x - self._last_px[0]
        dy = y - self._last_px[1]
        self._last_px = (x, y)
        if dx == 0.0 and dy == 0.0:
            return
        scale = engine.degrees_per_pixel()
        lon, lat = engine.view.center
        engine.view.set_center((lon - dx * scale, lat + dy * scale))
        if not self._moved:
            self._moved = True
            engine.begin_move()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("drag->pan dx=%.1f dy=%.1f center=%s", dx, dy, engine.view.center)

    def pointer_up(self, pixel: Pixel) -> None:
        if not self._dragging:
            return
        self._dragging = False
        if self._moved:
            self._moved = False
            self._engine.end_move()
            if self._log_info:
                logger.info("drag finished: center=%s", self._engine.view.center)
            return
        self._engine.emit_click(pixel)

    # ------------------------------------------------------------------ zoom
    def wheel(self, notches: float) -> bool:
        if notches == 0:
            return False
        target = self._engine.view.zoom + float(notches) * self._wheel_step
        return self.zoom_to(target, origin="wheel")

    def zoom_to(self, zoom: float, *, frames: Optional[int] = None, origin: str = "zoom") -> bool:
        """Animate the view zoom to ``zoom`` in ``frames`` steps."""

        view = self._engine.view
        start = view.zoom
        target = clamp_zoom(zoom)
        if target == start:
            return False
        n = self._wheel_frames if frames is None else max(1, int(frames))
        self._engine_zoom_frames(start, target, n)
        if self._log_info:
            logger.info("%s->zoom %.2f -> %.2f frames=%d", origin, start, target, n)
        return True

    def _engine_zoom_frames(self, start: float, target: float, frames: int) -> None:
        engine = self._engine
        for i in range(1, frames + 1):
            value = target if i == frames else start + (target - start) * i / frames
            engine.view.set_zoom(value)
            if i == 1:
                engine.begin_move()
        engine.end_move()


__all__ = ["GestureDriver"]
