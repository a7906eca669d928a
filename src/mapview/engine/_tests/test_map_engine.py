from __future__ import annotations

import math

import pytest

from mapview.engine.features import FeatureIndex
from mapview.engine.map_engine import MapEngine, TileSourceConfig
from mapview.viewport import BaseImagery, Viewport


def test_feature_index_returns_topmost_hit() -> None:
    index = FeatureIndex()
    index.add((0.0, 0.0, 10.0, 10.0), name="outer")
    index.add((2.0, 2.0, 4.0, 4.0), name="inner")

    assert index.query((3.0, 3.0)).name == "inner"
    assert index.query((8.0, 8.0)).name == "outer"
    assert index.query((10.0, 10.0)).name == "outer"
    assert index.query((11.0, 3.0)) is None
    assert len(index) == 2

    index.clear()
    assert index.query((3.0, 3.0)) is None


def test_feature_index_rejects_inverted_extent() -> None:
    index = FeatureIndex()

    with pytest.raises(ValueError):
        index.add((5.0, 0.0, 1.0, 1.0), name="bad")


@pytest.mark.usefixtures("qtbot")
def test_view_setters_emit_only_on_change() -> None:
    engine = MapEngine(viewport=Viewport(center=(0.0, 0.0), zoom=3.0))
    centers: list[tuple[float, float]] = []
    zooms: list[float] = []
    engine.view.center_changed.connect(centers.append)
    engine.view.zoom_changed.connect(zooms.append)

    assert engine.view.set_center((1.0, 2.0)) is True
    assert engine.view.set_center((1.0, 2.0)) is False
    assert engine.view.set_zoom(3.0) is False
    assert engine.view.set_viewport(Viewport(center=(1.0, 2.0), zoom=25.0)) is True

    assert centers == [(1.0, 2.0)]
    assert zooms == [25.0]


@pytest.mark.usefixtures("qtbot")
def test_movement_signals_collapse_nested_moves() -> None:
    engine = MapEngine()
    events: list[str] = []
    engine.movestart.connect(lambda: events.append("start"))
    engine.moveend.connect(lambda: events.append("end"))

    engine.begin_move()
    engine.begin_move()
    assert engine.is_moving is True
    engine.end_move()
    engine.end_move()
    engine.end_move()

    assert events == ["start", "end"]
    assert engine.is_moving is False


@pytest.mark.usefixtures("qtbot")
def test_set_base_imagery_replaces_source_and_keeps_key() -> None:
    engine = MapEngine(tile_source=TileSourceConfig(imagery_set=BaseImagery.AERIAL, key="abc", cache_size=50))

    source = engine.set_base_imagery("CanvasGray")

    assert source == TileSourceConfig(imagery_set=BaseImagery.CANVAS_GRAY, key="abc", max_zoom=19, cache_size=50)
    assert engine.tile_source is source


@pytest.mark.usefixtures("qtbot")
def test_pixel_to_coordinate_is_linear_around_center() -> None:
    engine = MapEngine(viewport=Viewport(center=(10.0, 20.0), zoom=0.0), size=(256, 256))

    assert engine.pixel_to_coordinate((128.0, 128.0)) == (10.0, 20.0)
    lon, lat = engine.pixel_to_coordinate((256.0, 0.0))
    assert math.isclose(lon, 10.0 + 180.0)
    assert math.isclose(lat, 20.0 + 180.0)


@pytest.mark.usefixtures("qtbot")
def test_feature_at_pixel_and_pointer_events() -> None:
    engine = MapEngine(viewport=Viewport(center=(0.0, 0.0), zoom=4.0))
    engine.features.add((-1.0, -1.0, 1.0, 1.0), name="Origin")
    clicks = []
    moves = []
    engine.click.connect(clicks.append)
    engine.pointermove.connect(moves.append)

    feature = engine.feature_at_pixel((400.0, 300.0))
    assert feature is not None and feature.get("name") == "Origin"
    assert engine.feature_at_pixel((0.0, 0.0)) is None

    click = engine.emit_click((400.0, 300.0))
    move = engine.emit_pointer_move((10.0, 20.0), dragging=True)

    assert clicks == [click]
    assert moves == [move]
    assert click.kind == "click"
    assert move.kind == "pointermove" and move.dragging is True
