"""Environment-driven configuration for the map view.

All env parsing lives here so the rest of the package consumes a structured,
immutable config instead of scattered ``os.getenv`` calls. Malformed values
fall back to their defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

from mapview.viewport import ZOOM_MIN, BaseImagery, Coordinate, Viewport

logger = logging.getLogger(__name__)


def _env_str(env: Mapping[str, str], name: str, default: Optional[str] = None) -> Optional[str]:
    raw = env.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    return raw if raw else default


def _env_bool(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "yes", "on"}:
        return True
    if val in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(env: Mapping[str, str], name: str, default: int = 0) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw, 10)
    except ValueError:
        return default


def _env_float(env: Mapping[str, str], name: str, default: float = 0.0) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_center(env: Mapping[str, str], name: str, default: Coordinate) -> Coordinate:
    raw = _env_str(env, name)
    if raw is None:
        return default
    parts = [p for p in raw.replace(" ", "").split(",") if p]
    if len(parts) != 2:
        logger.warning("ignoring %s=%r: expected 'lon,lat'", name, raw)
        return default
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        logger.warning("ignoring %s=%r: non-numeric coordinate", name, raw)
        return default


def _env_imagery(env: Mapping[str, str], name: str, default: BaseImagery) -> BaseImagery:
    raw = _env_str(env, name)
    if raw is None:
        return default
    try:
        return BaseImagery.coerce(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: unknown imagery set", name, raw)
        return default


@dataclass(frozen=True)
class MapViewConfig:
    """Runtime knobs for the engine, the gesture driver and logging."""

    base_imagery: BaseImagery = BaseImagery.CANVAS_LIGHT
    tile_key: str = ""
    tile_max_zoom: int = 19
    tile_cache_size: int = 100
    center: Coordinate = (0.0, 0.0)
    zoom: float = ZOOM_MIN
    wheel_step: float = 1.0
    wheel_frames: int = 4
    log_viewport_info: bool = False
    debug: bool = False

    @property
    def initial_viewport(self) -> Viewport:
        return Viewport(center=self.center, zoom=self.zoom)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> MapViewConfig:
        env = os.environ if env is None else env
        return cls(
            base_imagery=_env_imagery(env, "MAPVIEW_BASE_IMAGERY", BaseImagery.CANVAS_LIGHT),
            tile_key=_env_str(env, "MAPVIEW_BING_MAPS_KEY", "") or "",
            tile_max_zoom=_env_int(env, "MAPVIEW_TILE_MAX_ZOOM", 19),
            tile_cache_size=max(0, _env_int(env, "MAPVIEW_TILE_CACHE_SIZE", 100)),
            center=_env_center(env, "MAPVIEW_CENTER", (0.0, 0.0)),
            zoom=_env_float(env, "MAPVIEW_ZOOM", ZOOM_MIN),
            wheel_step=_env_float(env, "MAPVIEW_WHEEL_STEP", 1.0),
            wheel_frames=max(1, _env_int(env, "MAPVIEW_WHEEL_FRAMES", 4)),
            log_viewport_info=_env_bool(env, "MAPVIEW_LOG_VIEWPORT", False),
            debug=_env_bool(env, "MAPVIEW_DEBUG", False),
        )


__all__ = ["MapViewConfig"]
