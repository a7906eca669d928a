"""Headless map engine collaborator and its gesture pipeline."""

from .features import FeatureIndex, MapFeature
from .gestures import GestureDriver
from .map_engine import MapEngine, MapView, TileSourceConfig

__all__ = ["FeatureIndex", "GestureDriver", "MapEngine", "MapFeature", "MapView", "TileSourceConfig"]
