"""Two-way viewport binding between the application store and the map engine."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional, Union

from qtpy import QtCore

from mapview.control.interaction_gate import InteractionGate
from mapview.control.viewport_store import ViewportStore
from mapview.engine.map_engine import MapEngine
from mapview.viewport import (
    HIDDEN_TOOLTIP,
    BaseImagery,
    Coordinate,
    MapPointerEvent,
    TooltipState,
    Viewport,
)

logger = logging.getLogger(__name__)


class ViewportController:
    """Arbitrate write direction between application state and the engine.

    While the gate is idle the application owns the viewport and external
    values are pushed into the engine; engine notifications caused by those
    pushes are not echoed back. While the gate is moving the engine owns the
    viewport: its notifications are forwarded outward and external values
    are held. At ``moveend`` the latest application value is re-applied, so
    a gesture whose samples never reached the application snaps back.
    """

    def __init__(
        self,
        *,
        engine: Optional[MapEngine] = None,
        gate: Optional[InteractionGate] = None,
        on_center_change: Optional[Callable[[Coordinate], None]] = None,
        on_zoom_change: Optional[Callable[[float], None]] = None,
        on_click: Optional[Callable[[MapPointerEvent], None]] = None,
        on_tooltip: Optional[Callable[[TooltipState], None]] = None,
        log_viewport_info: bool = False,
    ) -> None:
        app = QtCore.QCoreApplication.instance()
        assert app is not None, "Qt application instance must exist"
        self._ui_thread = app.thread()
        self._gate = gate or InteractionGate()
        self._on_center_change = on_center_change
        self._on_zoom_change = on_zoom_change
        self._on_click = on_click
        self._on_tooltip = on_tooltip
        self._log_viewport_info = bool(log_viewport_info)
        self._engine: Optional[MapEngine] = None
        self._store: Optional[ViewportStore] = None
        self._app_viewport: Optional[Viewport] = None
        self._pending_imagery: Optional[BaseImagery] = None
        self._tooltip = HIDDEN_TOOLTIP
        if engine is not None:
            self.attach_engine(engine)

    # ------------------------------------------------------------------ configuration
    def set_logging(self, enabled: bool) -> None:
        self._log_viewport_info = bool(enabled)

    @property
    def gate(self) -> InteractionGate:
        return self._gate

    @property
    def engine(self) -> Optional[MapEngine]:
        return self._engine

    @property
    def tooltip(self) -> TooltipState:
        return self._tooltip

    # ------------------------------------------------------------------ lifecycle
    def attach_engine(self, engine: MapEngine) -> None:
        """Subscribe to ``engine`` and flush values buffered before mount."""

        self._assert_gui_thread()
        if self._engine is not None:
            raise RuntimeError("an engine is already attached; detach it first")
        engine.movestart.connect(self._on_movestart)
        engine.moveend.connect(self._on_moveend)
        engine.view.center_changed.connect(self.on_engine_center_changed)
        engine.view.zoom_changed.connect(self.on_engine_zoom_changed)
        engine.click.connect(self.dispatch_click)
        engine.pointermove.connect(self.dispatch_pointer_move)
        self._engine = engine
        logger.debug("viewport controller attached to engine")

        imagery, self._pending_imagery = self._pending_imagery, None
        if imagery is not None:
            self.set_base_imagery(imagery)
        if self._app_viewport is not None:
            self.apply_external_viewport(self._app_viewport)

    def detach_engine(self) -> None:
        self._assert_gui_thread()
        engine = self._engine
        if engine is None:
            return
        engine.movestart.disconnect(self._on_movestart)
        engine.moveend.disconnect(self._on_moveend)
        engine.view.center_changed.disconnect(self.on_engine_center_changed)
        engine.view.zoom_changed.disconnect(self.on_engine_zoom_changed)
        engine.click.disconnect(self.dispatch_click)
        engine.pointermove.disconnect(self.dispatch_pointer_move)
        self._engine = None
        # No moveend can arrive from a detached engine.
        self._gate.reset()
        self._tooltip = HIDDEN_TOOLTIP
        logger.debug("viewport controller detached from engine")

    def bind_store(self, store: ViewportStore) -> None:
        """Follow ``store`` and push its current values into the engine."""

        self._assert_gui_thread()
        self.unbind_store()
        store.viewport_changed.connect(self.apply_external_viewport)
        store.base_imagery_changed.connect(self.set_base_imagery)
        self._store = store
        self.set_base_imagery(store.base_imagery)
        self.apply_external_viewport(store.viewport)

    def unbind_store(self) -> None:
        store = self._store
        if store is None:
            return
        store.viewport_changed.disconnect(self.apply_external_viewport)
        store.base_imagery_changed.disconnect(self.set_base_imagery)
        self._store = None

    def shutdown(self) -> None:
        self.unbind_store()
        self.detach_engine()

    # ------------------------------------------------------------------ application -> engine
    def apply_external_viewport(self, viewport: Viewport) -> bool:
        """Push ``viewport`` into the engine unless a gesture owns it.

        Returns ``True`` when the engine view actually changed.
        """

        self._assert_gui_thread()
        self._app_viewport = viewport
        engine = self._engine
        if engine is None:
            logger.debug("external viewport buffered until engine attach: %s", viewport)
            return False
        if self._gate.is_moving():
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("external viewport held during gesture: %s", viewport)
            return False
        changed = engine.view.set_viewport(viewport)
        if changed and self._log_viewport_info:
            logger.info(
                "viewport applied: center=(%.6f, %.6f) zoom=%.2f",
                viewport.center[0],
                viewport.center[1],
                viewport.zoom,
            )
        return changed

    def set_base_imagery(self, imagery: Union[BaseImagery, str]) -> bool:
        self._assert_gui_thread()
        value = BaseImagery.coerce(imagery)
        engine = self._engine
        if engine is None:
            self._pending_imagery = value
            return False
        if engine.tile_source.imagery_set is value:
            return False
        engine.set_base_imagery(value)
        if self._log_viewport_info:
            logger.info("base imagery -> %s", value.value)
        return True

    # ------------------------------------------------------------------ engine -> application
    def on_engine_center_changed(self, center: Coordinate) -> bool:
        if not self._gate.is_moving():
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("engine center change while idle not forwarded: %s", center)
            return False
        value = (float(center[0]), float(center[1]))
        if self._log_viewport_info:
            logger.info("engine center -> app: (%.6f, %.6f)", value[0], value[1])
        if self._on_center_change is not None:
            self._on_center_change(value)
        return True

    def on_engine_zoom_changed(self, zoom: float) -> bool:
        if not self._gate.is_moving():
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("engine zoom change while idle not forwarded: %s", zoom)
            return False
        value = float(zoom)
        if self._log_viewport_info:
            logger.info("engine zoom -> app: %.2f", value)
        if self._on_zoom_change is not None:
            self._on_zoom_change(value)
        return True

    # ------------------------------------------------------------------ pointer events
    def dispatch_click(self, event: MapPointerEvent) -> None:
        if self._log_viewport_info:
            logger.info("click at pixel=%s coordinate=%s", event.pixel, event.coordinate)
        if self._on_click is not None:
            self._on_click(event)

    def dispatch_pointer_move(self, event: MapPointerEvent) -> TooltipState:
        engine = self._engine
        tooltip = HIDDEN_TOOLTIP
        if engine is not None:
            feature = engine.feature_at_pixel(event.pixel)
            label = feature.name if feature is not None else None
            if label is not None:
                tooltip = TooltipState(label=label, anchor=event.coordinate)
        if tooltip != self._tooltip:
            self._tooltip = tooltip
            if self._on_tooltip is not None:
                self._on_tooltip(tooltip)
        return tooltip

    # ------------------------------------------------------------------ helpers
    def _on_movestart(self) -> None:
        self._gate.on_gesture_start()

    def _on_moveend(self) -> None:
        self._gate.on_gesture_end()
        # The application owns the viewport again; restore its latest value.
        if self._app_viewport is not None and self._engine is not None:
            self.apply_external_viewport(self._app_viewport)

    def _assert_gui_thread(self) -> None:
        current = QtCore.QThread.currentThread()
        assert current is self._ui_thread, "ViewportController methods must run on the Qt GUI thread"


__all__ = ["ViewportController"]
