"""Viewport synchronization between application state and the map engine."""

from .interaction_gate import InteractionGate
from .viewport_controller import ViewportController
from .viewport_store import ViewportStore

__all__ = ["InteractionGate", "ViewportController", "ViewportStore"]
