"""Viewport value types shared by the sync core, the engine and the app."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Union

ZOOM_MIN = 2.7
ZOOM_MAX = 20.0

Coordinate = tuple[float, float]
Pixel = tuple[float, float]


class InteractionState(Enum):
    """Who currently drives the viewport."""

    IDLE = "idle"
    MOVING = "moving"


class BaseImagery(str, Enum):
    """Named imagery sets accepted by the tile source."""

    ROAD_ON_DEMAND = "RoadOnDemand"
    AERIAL = "Aerial"
    AERIAL_WITH_LABELS_ON_DEMAND = "AerialWithLabelsOnDemand"
    CANVAS_LIGHT = "CanvasLight"
    CANVAS_DARK = "CanvasDark"
    CANVAS_GRAY = "CanvasGray"

    @classmethod
    def coerce(cls, value: Union[BaseImagery, str]) -> BaseImagery:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            names = ", ".join(member.value for member in cls)
            raise ValueError(f"unknown imagery {value!r}; expected one of: {names}") from None


@dataclass(frozen=True)
class Viewport:
    """Center (lon, lat in degrees) plus zoom level.

    Zoom values outside ``[ZOOM_MIN, ZOOM_MAX]`` are kept as given; clamping
    happens where user input enters the engine.
    """

    center: Coordinate = (0.0, 0.0)
    zoom: float = ZOOM_MIN

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _as_coordinate(self.center))
        object.__setattr__(self, "zoom", float(self.zoom))

    def with_center(self, center: Coordinate) -> Viewport:
        return Viewport(center=center, zoom=self.zoom)

    def with_zoom(self, zoom: float) -> Viewport:
        return Viewport(center=self.center, zoom=zoom)

    def same_as(self, other: Viewport, *, tol: float = 1e-9) -> bool:
        return (
            same_coordinate(self.center, other.center, tol=tol)
            and math.isclose(self.zoom, other.zoom, rel_tol=0.0, abs_tol=tol)
        )


@dataclass(frozen=True)
class TooltipState:
    label: Optional[str] = None
    anchor: Optional[Coordinate] = None

    @property
    def visible(self) -> bool:
        return self.label is not None


HIDDEN_TOOLTIP = TooltipState()


@dataclass(frozen=True)
class MapPointerEvent:
    """Raw pointer sample delivered by the engine."""

    kind: Literal["click", "pointermove"]
    pixel: Pixel
    coordinate: Coordinate
    dragging: bool = False


def _as_coordinate(value) -> Coordinate:  # type: ignore[no-untyped-def]
    lon, lat = value
    return float(lon), float(lat)


def same_coordinate(a: Coordinate, b: Coordinate, *, tol: float = 1e-9) -> bool:
    return math.isclose(a[0], b[0], rel_tol=0.0, abs_tol=tol) and math.isclose(
        a[1], b[1], rel_tol=0.0, abs_tol=tol
    )


def clamp_zoom(zoom: float) -> float:
    return max(ZOOM_MIN, min(ZOOM_MAX, float(zoom)))


__all__ = [
    "BaseImagery",
    "Coordinate",
    "HIDDEN_TOOLTIP",
    "InteractionState",
    "MapPointerEvent",
    "Pixel",
    "TooltipState",
    "Viewport",
    "ZOOM_MAX",
    "ZOOM_MIN",
    "clamp_zoom",
    "same_coordinate",
]
