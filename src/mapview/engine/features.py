"""Bounding-box feature index used for pixel lookups."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

from mapview.viewport import Coordinate


@dataclass(frozen=True)
class MapFeature:
    """A hit-testable feature; ``extent`` is (min_lon, min_lat, max_lon, max_lat)."""

    extent: tuple[float, float, float, float]
    properties: Mapping[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    @property
    def name(self) -> Optional[str]:
        value = self.properties.get("name")
        return None if value is None else str(value)


class FeatureIndex:
    """Hold feature extents in an (N, 4) array and answer containment queries.

    When several extents contain a coordinate the most recently added
    feature wins, matching draw order (last drawn is on top).
    """

    def __init__(self) -> None:
        self._features: list[MapFeature] = []
        self._extents = np.empty((0, 4), dtype=np.float64)

    def __len__(self) -> int:
        return len(self._features)

    def add(self, extent: tuple[float, float, float, float], **properties: Any) -> MapFeature:
        min_x, min_y, max_x, max_y = (float(v) for v in extent)
        if min_x > max_x or min_y > max_y:
            raise ValueError(f"degenerate extent {extent!r}")
        feature = MapFeature(extent=(min_x, min_y, max_x, max_y), properties=dict(properties))
        self._features.append(feature)
        self._extents = np.vstack([self._extents, np.asarray(feature.extent, dtype=np.float64)])
        return feature

    def clear(self) -> None:
        self._features.clear()
        self._extents = np.empty((0, 4), dtype=np.float64)

    def query(self, coordinate: Coordinate) -> Optional[MapFeature]:
        if not self._features:
            return None
        x, y = float(coordinate[0]), float(coordinate[1])
        ext = self._extents
        hits = (ext[:, 0] <= x) & (x <= ext[:, 2]) & (ext[:, 1] <= y) & (y <= ext[:, 3])
        idx = np.flatnonzero(hits)
        if idx.size == 0:
            return None
        return self._features[int(idx[-1])]


__all__ = ["FeatureIndex", "MapFeature"]
