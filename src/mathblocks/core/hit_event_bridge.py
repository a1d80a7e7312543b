"""HitEventBridge — wires presentation-layer input events to the controller.

The presentation layer (AR scene, dev board) only ever publishes ``input.*``
events; this bridge turns them into :class:`RoundController` calls.  Because
the bus dispatches one event at a time, hits are judged strictly in order.
"""

from __future__ import annotations

import logging as _logging

from mathblocks.core import events
from mathblocks.core.event_bus import EventBus
from mathblocks.core.models.event import Event
from mathblocks.core.round_controller import RoundController

_log = _logging.getLogger(__name__)


class HitEventBridge:
    """Subscribes controller commands to input events.

    Args:
        event_bus: The global event bus.
        controller: The session's round controller.
    """

    def __init__(self, event_bus: EventBus, controller: RoundController) -> None:
        self._bus = event_bus
        self._controller = controller
        self._sub_ids = [
            event_bus.subscribe(events.BLOCK_HIT, self._on_block_hit),
            event_bus.subscribe(events.NEW_GAME_REQUESTED, self._on_new_game),
            event_bus.subscribe(events.CONFIGURE_REQUESTED, self._on_configure),
        ]

    def close(self) -> None:
        """Unsubscribe from all input events."""
        for sub_id in self._sub_ids:
            self._bus.unsubscribe(sub_id)
        self._sub_ids.clear()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_block_hit(self, event: Event) -> None:
        self._controller.handle_hit(event.payload.get("slot"))

    def _on_new_game(self, event: Event) -> None:
        lives = event.payload.get("lives")
        if lives is not None and (not isinstance(lives, int) or isinstance(lives, bool)):
            _log.warning("Ignoring non-integer lives %r in new-game request", lives)
            lives = None
        self._controller.reset(lives)
        self._controller.start_round()

    def _on_configure(self, event: Event) -> None:
        operation = event.payload.get("operation", self._controller.operation)
        max_result = event.payload.get("max_result", self._controller.max_result)
        try:
            max_result = int(max_result)
        except (TypeError, ValueError):
            _log.warning("Ignoring invalid max_result %r, keeping %d",
                         max_result, self._controller.max_result)
            max_result = self._controller.max_result
        self._controller.configure(operation, max_result)
        self._controller.start_round()
