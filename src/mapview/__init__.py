"""mapview: interactive map view with a two-way viewport binding."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    "BaseImagery",
    "InteractionGate",
    "MapEngine",
    "MapViewConfig",
    "Viewport",
    "ViewportController",
    "ViewportStore",
]


def _lazy_attr(name: str) -> Any:
    module_map = {
        "BaseImagery": ("mapview.viewport", "BaseImagery"),
        "Viewport": ("mapview.viewport", "Viewport"),
        "MapViewConfig": ("mapview.config", "MapViewConfig"),
        "InteractionGate": ("mapview.control.interaction_gate", "InteractionGate"),
        "ViewportController": ("mapview.control.viewport_controller", "ViewportController"),
        "ViewportStore": ("mapview.control.viewport_store", "ViewportStore"),
        "MapEngine": ("mapview.engine.map_engine", "MapEngine"),
    }
    if name not in module_map:
        raise AttributeError(name)
    module_path, attr = module_map[name]
    module = import_module(module_path)
    return getattr(module, attr)


def __getattr__(name: str) -> Any:  # pragma: no cover - trivial delegation
    return _lazy_attr(name)
