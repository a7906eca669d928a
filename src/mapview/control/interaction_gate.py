"""Track whether the user is mid-gesture on the map."""

from __future__ import annotations

import logging

from mapview.viewport import InteractionState

logger = logging.getLogger(__name__)


class InteractionGate:
    """Idle/Moving flag written only by the engine's movement lifecycle.

    The engine reports value changes before it reports ``movestart`` for the
    same gesture. Callers must therefore query :meth:`is_moving` at the time
    each value notification arrives; the first sample of a gesture is seen
    while still idle and is dropped.
    """

    def __init__(self) -> None:
        self._state = InteractionState.IDLE

    @property
    def state(self) -> InteractionState:
        return self._state

    def is_moving(self) -> bool:
        return self._state is InteractionState.MOVING

    def on_gesture_start(self) -> None:
        if self._state is not InteractionState.MOVING:
            logger.debug("interaction gate: idle -> moving")
        self._state = InteractionState.MOVING

    def on_gesture_end(self) -> None:
        if self._state is InteractionState.IDLE:
            logger.debug("interaction gate: moveend while idle; ignored")
            return
        logger.debug("interaction gate: moving -> idle")
        self._state = InteractionState.IDLE

    def reset(self) -> None:
        """Force ``IDLE`` when the engine that would send ``moveend`` is gone."""

        if self._state is not InteractionState.IDLE:
            logger.debug("interaction gate: reset to idle on teardown")
        self._state = InteractionState.IDLE


__all__ = ["InteractionGate"]
