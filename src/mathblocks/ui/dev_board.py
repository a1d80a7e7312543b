"""Dev board — browser stand-in for the AR presentation layer.

Renders the equation banner, four clickable answer blocks, the stats board
and the game settings.  It behaves like the real scene: block clicks are
published as ``input.block.hit`` events and the display only ever updates from
``game.*`` notifications, so the whole event flow is exercised exactly as it
is in the headset.
"""

from __future__ import annotations

import logging as _logging
from typing import Any

from nicegui import ui

from mathblocks.core import events
from mathblocks.core.event_bus import EventBus
from mathblocks.core.models.equation import Operation
from mathblocks.core.models.event import Event
from mathblocks.core.round_controller import RoundController

_log = _logging.getLogger(__name__)

# Result bounds offered by the settings dropdown.
MAX_RESULT_CHOICES = (10, 20, 50, 100)

_OPERATION_LABELS: dict[str, str] = {
    Operation.ADDITION.value: "Addition (+)",
    Operation.SUBTRACTION.value: "Subtraction (-)",
    Operation.MULTIPLICATION.value: "Multiplication (×)",
    Operation.DIVISION.value: "Division (÷)",
}

_BLOCK_COLORS = ("#cc3333", "#cccc00", "#33cc33", "#3333cc")


def format_stats(correct: int, wrong: int, lives: int) -> str:
    """Stats board text, e.g. ``"Correct: 3 | Wrong: 1 | Lives: 2"``."""
    return f"Correct: {correct} | Wrong: {wrong} | Lives: {lives}"


class DevBoard:
    """Presentation-layer simulation wired to the event bus.

    Args:
        controller: Round controller (read for the initial render and the
            current settings only).
        event_bus: The global event bus.
        show_answer: Highlight the correct block (dev mode).
    """

    def __init__(
        self,
        controller: RoundController,
        event_bus: EventBus,
        show_answer: bool = False,
    ) -> None:
        self._controller = controller
        self._bus = event_bus
        self._show_answer = show_answer

        # Elements (populated during build)
        self._equation_label: ui.label | None = None
        self._block_buttons: list[Any] = []
        self._stats_label: ui.label | None = None
        self._feedback_label: ui.label | None = None
        self._operation_select: Any = None
        self._max_result_select: Any = None
        self._sub_ids: list[str] = []

    def build(self) -> None:
        """Render the board and subscribe to round notifications."""
        snap = self._controller.snapshot()
        with ui.column().classes("w-full items-center").style("gap: 16px; padding: 12px;"):
            self._build_settings()
            self._equation_label = ui.label(snap.equation_text or "—").style(
                "font-size: 48px; font-weight: bold; color: #ffffff;"
            )
            with ui.row().style("gap: 16px;"):
                for slot in range(len(_BLOCK_COLORS)):
                    button = ui.button(
                        "?",
                        on_click=lambda _, s=slot: self._on_block_click(s),
                    ).style(
                        f"background: {_BLOCK_COLORS[slot]} !important; color: white; "
                        "font-size: 32px; font-weight: bold; width: 110px; height: 110px; "
                        "border-radius: 8px;"
                    ).tooltip(f"Strike block {slot + 1} (key: {slot + 1})")
                    self._block_buttons.append(button)
            self._feedback_label = ui.label("").style("font-size: 20px; min-height: 28px;")
            self._stats_label = ui.label(
                format_stats(snap.correct_count, snap.wrong_count, snap.lives_remaining)
            ).style("font-family: 'Courier New', monospace; font-size: 18px; color: #cccccc;")

        self._render_blocks(snap.slot_values, snap.correct_index)

        self._sub_ids = [
            self._bus.subscribe(events.EQUATION_CHANGED, self._on_equation_changed),
            self._bus.subscribe(events.STATS_CHANGED, self._on_stats_changed),
            self._bus.subscribe(events.ANSWER_CORRECT, self._on_answer_correct),
            self._bus.subscribe(events.ANSWER_WRONG, self._on_answer_wrong),
        ]
        self._build_keyboard_handler()

    def close(self) -> None:
        for sub_id in self._sub_ids:
            self._bus.unsubscribe(sub_id)
        self._sub_ids.clear()

    # ------------------------------------------------------------------
    # Build sections
    # ------------------------------------------------------------------

    def _build_settings(self) -> None:
        op = self._controller.operation
        op_value = op.value if isinstance(op, Operation) else Operation.ADDITION.value
        with ui.row().classes("items-center").style("gap: 12px;"):
            self._operation_select = ui.select(_OPERATION_LABELS, value=op_value, label="Operation")
            choices = list(MAX_RESULT_CHOICES)
            if self._controller.max_result not in choices:
                choices.append(self._controller.max_result)
            self._max_result_select = ui.select(
                choices, value=self._controller.max_result, label="Max result"
            )
            ui.button("Apply", on_click=self._on_apply_settings)
            ui.button("New game", on_click=self._on_new_game).props("color=red")

    def _build_keyboard_handler(self) -> None:
        """Keys 1-4 strike the matching block, N starts a new game."""

        async def handle_key(e) -> None:
            if not e.action.keydown:
                return
            key = str(e.key)
            if key in ("1", "2", "3", "4"):
                await self._on_block_click(int(key) - 1)
            elif key.lower() == "n":
                await self._on_new_game()

        ui.keyboard(on_key=handle_key)

    # ------------------------------------------------------------------
    # Actions (published as input events)
    # ------------------------------------------------------------------

    async def _on_block_click(self, slot: int) -> None:
        await self._bus.publish(events.BLOCK_HIT, {"slot": slot})

    async def _on_new_game(self, _=None) -> None:
        await self._bus.publish(events.NEW_GAME_REQUESTED)

    async def _on_apply_settings(self, _=None) -> None:
        payload = {
            "operation": self._operation_select.value if self._operation_select else None,
            "max_result": self._max_result_select.value if self._max_result_select else None,
        }
        await self._bus.publish(
            events.CONFIGURE_REQUESTED, {k: v for k, v in payload.items() if v is not None}
        )

    # ------------------------------------------------------------------
    # Event handlers (update UI from event bus)
    # ------------------------------------------------------------------
    # Elements may belong to a client that has already disconnected; writing
    # to them then raises RuntimeError, which would get the handler
    # auto-unsubscribed.  Those updates are dropped instead.

    async def _on_equation_changed(self, event: Event) -> None:
        payload = event.payload
        try:
            if self._equation_label:
                self._equation_label.text = payload.get("equation_text") or "—"
            self._render_blocks(payload.get("slot_values", ()), payload.get("correct_index"))
        except RuntimeError:
            _log.debug("equation client gone, ignoring update")

    async def _on_stats_changed(self, event: Event) -> None:
        p = event.payload
        if self._stats_label:
            try:
                self._stats_label.text = format_stats(
                    p.get("correct_count", 0), p.get("wrong_count", 0), p.get("lives_remaining", 0)
                )
            except RuntimeError:
                _log.debug("stats client gone, ignoring update")

    async def _on_answer_correct(self, event: Event) -> None:
        self._set_feedback(f"✅ {event.payload.get('value')} is correct", "#44ff44")

    async def _on_answer_wrong(self, event: Event) -> None:
        self._set_feedback(f"❌ {event.payload.get('value')} is wrong, try again", "#ff4444")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _set_feedback(self, text: str, color: str) -> None:
        if not self._feedback_label:
            return
        try:
            self._feedback_label.text = text
            self._feedback_label.style(f"color: {color};")
        except RuntimeError:
            _log.debug("feedback client gone, ignoring update")

    def _render_blocks(self, values: Any, correct_index: int | None) -> None:
        values = list(values or ())
        for slot, button in enumerate(self._block_buttons):
            if slot < len(values):
                button.text = str(values[slot])
                button.enable()
            else:
                button.text = "—"
                button.disable()
            if self._show_answer:
                border = "4px solid #ffffff" if slot == correct_index else "none"
                button.style(f"border: {border};")
