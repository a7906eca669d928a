"""
Launcher for the map view application.

Wires the application store, the headless engine, the gesture driver and the
viewport controller into a Qt window and runs the event loop.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from qtpy import QtWidgets

from mapview.app.main_window import MapViewWindow
from mapview.app.map_canvas import MapCanvasWidget
from mapview.config import MapViewConfig
from mapview.control.viewport_controller import ViewportController
from mapview.control.viewport_store import ViewportStore
from mapview.engine.gestures import GestureDriver
from mapview.engine.map_engine import MapEngine, TileSourceConfig
from mapview.viewport import BaseImagery, MapPointerEvent

logger = logging.getLogger(__name__)

# Rough country extents (min_lon, min_lat, max_lon, max_lat) for hover tooltips.
DEMO_FEATURES: tuple[tuple[str, tuple[float, float, float, float]], ...] = (
    ("France", (-5.1, 42.3, 8.2, 51.1)),
    ("Brazil", (-74.0, -33.8, -34.8, 5.3)),
    ("Kenya", (33.9, -4.7, 41.9, 5.0)),
    ("Japan", (129.4, 31.0, 145.5, 45.5)),
    ("Australia", (113.3, -43.6, 153.6, -10.7)),
)


@dataclass
class MapViewSession:
    """Everything owned by one mounted map view."""

    config: MapViewConfig
    store: ViewportStore
    engine: MapEngine
    driver: GestureDriver
    controller: ViewportController
    canvas: MapCanvasWidget
    window: MapViewWindow

    def shutdown(self) -> None:
        self.controller.shutdown()


def _log_click(event: MapPointerEvent) -> None:
    logger.info("clicked %s", event.coordinate)


def build_session(config: MapViewConfig, *, demo_features: bool = False) -> MapViewSession:
    """Build store, engine and controller; requires a running QApplication."""

    store = ViewportStore(config.initial_viewport, config.base_imagery)
    engine = MapEngine(
        tile_source=TileSourceConfig(
            imagery_set=BaseImagery.AERIAL,
            key=config.tile_key,
            max_zoom=config.tile_max_zoom,
            cache_size=config.tile_cache_size,
        ),
    )
    if demo_features:
        for name, extent in DEMO_FEATURES:
            engine.features.add(extent, name=name)
    driver = GestureDriver(
        engine,
        wheel_step=config.wheel_step,
        wheel_frames=config.wheel_frames,
        log_info=config.log_viewport_info,
    )
    canvas = MapCanvasWidget(engine, driver)
    controller = ViewportController(
        on_center_change=store.set_center,
        on_zoom_change=store.set_zoom,
        on_click=_log_click,
        on_tooltip=canvas.show_tooltip,
        log_viewport_info=config.log_viewport_info,
    )
    # Store first: its values are buffered and replayed when the engine mounts.
    controller.bind_store(store)
    controller.attach_engine(engine)
    window = MapViewWindow(store, canvas)
    return MapViewSession(
        config=config,
        store=store,
        engine=engine,
        driver=driver,
        controller=controller,
        canvas=canvas,
        window=window,
    )


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="mapview", description="Interactive map view")
    parser.add_argument(
        "--imagery",
        choices=[member.value for member in BaseImagery],
        help="initial base imagery (default: MAPVIEW_BASE_IMAGERY or CanvasLight)",
    )
    parser.add_argument("--center", nargs=2, type=float, metavar=("LON", "LAT"))
    parser.add_argument("--zoom", type=float)
    parser.add_argument("--demo-features", action="store_true", help="register sample hover features")
    parser.add_argument("--log-viewport", action="store_true", help="log viewport sync traffic")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace, base: MapViewConfig) -> MapViewConfig:
    overrides: dict[str, object] = {}
    if args.imagery is not None:
        overrides["base_imagery"] = BaseImagery.coerce(args.imagery)
    if args.center is not None:
        overrides["center"] = (float(args.center[0]), float(args.center[1]))
    if args.zoom is not None:
        overrides["zoom"] = float(args.zoom)
    if args.log_viewport:
        overrides["log_viewport_info"] = True
    if args.debug:
        overrides["debug"] = True
    return replace(base, **overrides) if overrides else base


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    config = config_from_args(args, MapViewConfig.from_env())
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(
        "launching map view: imagery=%s center=%s zoom=%.2f",
        config.base_imagery.value,
        config.center,
        config.zoom,
    )

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv[:1])
    session = build_session(config, demo_features=args.demo_features)
    session.window.show()
    try:
        return int(app.exec_())
    finally:
        session.shutdown()


if __name__ == "__main__":
    sys.exit(main())
