from __future__ import annotations

import pytest

from mapview.control.viewport_controller import ViewportController
from mapview.control.viewport_store import ViewportStore
from mapview.engine.gestures import GestureDriver
from mapview.engine.map_engine import MapEngine
from mapview.viewport import ZOOM_MAX, ZOOM_MIN, Viewport


def _trace(engine: MapEngine) -> list[str]:
    events: list[str] = []
    engine.view.center_changed.connect(lambda _c: events.append("center"))
    engine.view.zoom_changed.connect(lambda _z: events.append("zoom"))
    engine.movestart.connect(lambda: events.append("movestart"))
    engine.moveend.connect(lambda: events.append("moveend"))
    engine.click.connect(lambda _e: events.append("click"))
    return events


@pytest.mark.usefixtures("qtbot")
def test_drag_updates_view_before_movestart() -> None:
    engine = MapEngine(viewport=Viewport(center=(0.0, 0.0), zoom=3.0))
    driver = GestureDriver(engine)
    events = _trace(engine)

    driver.pointer_down((400.0, 300.0))
    driver.pointer_move((410.0, 300.0))
    driver.pointer_move((420.0, 290.0))
    driver.pointer_up((420.0, 290.0))

    assert events == ["center", "movestart", "center", "moveend"]
    scale = 360.0 / (256.0 * 2.0 ** 3.0)
    lon, lat = engine.view.center
    assert lon == pytest.approx(-20.0 * scale)
    assert lat == pytest.approx(-10.0 * scale)
    assert driver.dragging is False


@pytest.mark.usefixtures("qtbot")
def test_press_release_without_motion_is_a_click() -> None:
    engine = MapEngine()
    driver = GestureDriver(engine)
    events = _trace(engine)

    driver.pointer_down((100.0, 100.0))
    driver.pointer_move((100.0, 100.0))
    driver.pointer_up((100.0, 100.0))

    assert events == ["click"]


@pytest.mark.usefixtures("qtbot")
def test_hover_emits_pointermove_only() -> None:
    engine = MapEngine()
    driver = GestureDriver(engine)
    events = _trace(engine)
    moves = []
    engine.pointermove.connect(moves.append)

    driver.pointer_move((5.0, 6.0))

    assert events == []
    assert len(moves) == 1 and moves[0].dragging is False


@pytest.mark.usefixtures("qtbot")
def test_wheel_zoom_animates_frames_and_clamps() -> None:
    engine = MapEngine(viewport=Viewport(center=(0.0, 0.0), zoom=ZOOM_MIN))
    driver = GestureDriver(engine, wheel_step=1.0, wheel_frames=4)
    events = _trace(engine)

    assert driver.wheel(1) is True
    assert events == ["zoom", "movestart", "zoom", "zoom", "zoom", "moveend"]
    assert engine.view.zoom == pytest.approx(ZOOM_MIN + 1.0)

    assert driver.wheel(-5) is True
    assert engine.view.zoom == ZOOM_MIN
    assert driver.wheel(-1) is False

    engine.view.set_zoom(19.5)
    assert driver.wheel(3) is True
    assert engine.view.zoom == ZOOM_MAX
    assert driver.wheel(0) is False


@pytest.mark.usefixtures("qtbot")
def test_drag_with_controller_drops_only_first_sample() -> None:
    engine = MapEngine(viewport=Viewport(center=(0.0, 0.0), zoom=3.0))
    driver = GestureDriver(engine)
    centers: list[tuple[float, float]] = []
    zooms: list[float] = []
    controller = ViewportController(on_center_change=centers.append, on_zoom_change=zooms.append)
    controller.attach_engine(engine)

    driver.pointer_down((400.0, 300.0))
    driver.pointer_move((401.0, 300.0))
    driver.pointer_move((402.0, 300.0))
    driver.pointer_move((403.0, 300.0))
    driver.pointer_up((403.0, 300.0))

    assert len(centers) == 2
    assert centers[-1] == engine.view.center
    assert controller.gate.is_moving() is False

    driver.wheel(1)
    assert len(zooms) == 3
    assert zooms[-1] == pytest.approx(engine.view.zoom)


@pytest.mark.usefixtures("qtbot")
def test_single_frame_zoom_is_not_forwarded_and_snaps_back() -> None:
    store = ViewportStore(Viewport(center=(0.0, 0.0), zoom=5.0))
    engine = MapEngine()
    driver = GestureDriver(engine)
    zooms: list[float] = []
    controller = ViewportController(on_zoom_change=zooms.append)
    controller.bind_store(store)
    controller.attach_engine(engine)
    assert engine.view.zoom == 5.0

    assert driver.zoom_to(6.0, frames=1) is True

    assert zooms == []
    assert engine.view.zoom == 5.0
    assert store.zoom == 5.0


@pytest.mark.usefixtures("qtbot")
def test_single_sample_drag_leaves_engine_matching_store() -> None:
    store = ViewportStore(Viewport(center=(0.0, 0.0), zoom=3.0))
    engine = MapEngine()
    driver = GestureDriver(engine)
    controller = ViewportController(on_center_change=store.set_center, on_zoom_change=store.set_zoom)
    controller.bind_store(store)
    controller.attach_engine(engine)

    driver.pointer_down((400.0, 300.0))
    driver.pointer_move((440.0, 300.0))
    driver.pointer_up((440.0, 300.0))

    assert store.center == (0.0, 0.0)
    assert engine.view.center == store.center

    store.set_zoom(4.0)
    assert engine.view.viewport == Viewport(center=(0.0, 0.0), zoom=4.0)
