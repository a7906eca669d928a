from __future__ import annotations

from mapview.config import MapViewConfig
from mapview.viewport import ZOOM_MIN, BaseImagery, Viewport


def test_defaults_without_env() -> None:
    config = MapViewConfig.from_env({})

    assert config == MapViewConfig()
    assert config.base_imagery is BaseImagery.CANVAS_LIGHT
    assert config.initial_viewport == Viewport(center=(0.0, 0.0), zoom=ZOOM_MIN)
    assert config.tile_max_zoom == 19
    assert config.tile_cache_size == 100


def test_env_values_are_parsed() -> None:
    env = {
        "MAPVIEW_BASE_IMAGERY": "CanvasDark",
        "MAPVIEW_BING_MAPS_KEY": " secret ",
        "MAPVIEW_CENTER": "12.5, -8",
        "MAPVIEW_ZOOM": "6.25",
        "MAPVIEW_WHEEL_FRAMES": "8",
        "MAPVIEW_LOG_VIEWPORT": "yes",
        "MAPVIEW_DEBUG": "1",
    }

    config = MapViewConfig.from_env(env)

    assert config.base_imagery is BaseImagery.CANVAS_DARK
    assert config.tile_key == "secret"
    assert config.center == (12.5, -8.0)
    assert config.zoom == 6.25
    assert config.wheel_frames == 8
    assert config.log_viewport_info is True
    assert config.debug is True


def test_malformed_env_values_fall_back_to_defaults() -> None:
    env = {
        "MAPVIEW_BASE_IMAGERY": "Hologram",
        "MAPVIEW_CENTER": "north",
        "MAPVIEW_ZOOM": "far",
        "MAPVIEW_TILE_MAX_ZOOM": "1.5",
        "MAPVIEW_WHEEL_FRAMES": "0",
        "MAPVIEW_LOG_VIEWPORT": "maybe",
    }

    config = MapViewConfig.from_env(env)

    assert config.base_imagery is BaseImagery.CANVAS_LIGHT
    assert config.center == (0.0, 0.0)
    assert config.zoom == ZOOM_MIN
    assert config.tile_max_zoom == 19
    assert config.wheel_frames == 1
    assert config.log_viewport_info is False
