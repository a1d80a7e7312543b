"""RoundController — owns the session's RoundState and judges block hits.

The controller is synchronous: every call finishes its state change before it
returns, and the only outward effect is publishing notifications on the
(optional) event bus.  Display collaborators read :class:`RoundSnapshot`
objects and never touch the counters directly.

Only one transition advances the round: a correct hit replaces the equation
and distribution with freshly generated ones.  A wrong hit leaves the round in
place so the player keeps looking for the right block.
"""

from __future__ import annotations

import logging as _logging
import uuid
from typing import Any

from mathblocks.core import events
from mathblocks.core.event_bus import EventBus
from mathblocks.core.generator import MAX_SLOTS, ProblemGenerator
from mathblocks.core.models.equation import Distribution, Equation, Operation
from mathblocks.core.models.round import RoundSnapshot, RoundState
from mathblocks.log_config.logger import ContextualLogger

DEFAULT_LIVES = 3


class RoundController:
    """Session-scoped orchestration between generator and presentation.

    Args:
        generator: Problem source; a default unseeded one is created if omitted.
        event_bus: Bus to publish round notifications on.  ``None`` keeps the
            controller fully standalone (useful for tests and scripts).
        operation: Initial operation tag.
        max_result: Initial result bound.
        lives: Lives for the first game and the default for :meth:`reset`.
        slot_count: Number of answer blocks (clamped to 1–4 by the generator).
    """

    def __init__(
        self,
        generator: ProblemGenerator | None = None,
        event_bus: EventBus | None = None,
        *,
        operation: Operation | str = Operation.ADDITION,
        max_result: int = 20,
        lives: int = DEFAULT_LIVES,
        slot_count: int = MAX_SLOTS,
    ) -> None:
        self._generator = generator if generator is not None else ProblemGenerator()
        self._bus = event_bus
        self._slot_count = slot_count
        self._starting_lives = lives
        self._state = RoundState(lives_remaining=max(0, lives))
        self._log = ContextualLogger(
            _logging.getLogger(__name__), session=uuid.uuid4().hex[:8]
        )
        self.configure(operation, max_result)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def operation(self) -> Operation | str:
        return self._operation

    @property
    def max_result(self) -> int:
        return self._max_result

    @property
    def equation(self) -> Equation | None:
        return self._state.equation

    @property
    def distribution(self) -> Distribution | None:
        return self._state.distribution

    @property
    def equation_text(self) -> str:
        return self._state.equation.text if self._state.equation else ""

    @property
    def slot_values(self) -> tuple[int, ...]:
        return self._state.distribution.slot_values if self._state.distribution else ()

    @property
    def correct_index(self) -> int | None:
        return self._state.distribution.correct_index if self._state.distribution else None

    @property
    def correct_count(self) -> int:
        return self._state.correct_count

    @property
    def wrong_count(self) -> int:
        return self._state.wrong_count

    @property
    def lives_remaining(self) -> int:
        return self._state.lives_remaining

    def snapshot(self) -> RoundSnapshot:
        op = self._operation
        return RoundSnapshot(
            equation_text=self.equation_text,
            slot_values=self.slot_values,
            correct_index=self.correct_index,
            correct_count=self._state.correct_count,
            wrong_count=self._state.wrong_count,
            lives_remaining=self._state.lives_remaining,
            operation=op.value if isinstance(op, Operation) else str(op),
            max_result=self._max_result,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def configure(self, operation: Operation | str, max_result: int) -> None:
        """Set operation and result bound for subsequent rounds.

        Does not generate a round.  Unrecognised operations are accepted and
        use the generator's addition fallback.
        """
        parsed = Operation.parse(operation)
        self._operation = parsed if parsed is not None else operation
        self._max_result = max_result
        self._log.bind(op=self._operation.value if parsed else self._operation, max=max_result)
        if parsed is None:
            self._log.warning("Unrecognised operation %r, using addition fallback", operation)
        if max_result < 2:
            self._log.warning("max_result=%d is below 2, problems will be degenerate", max_result)
        self._log.info("Configured")

    def start_round(self) -> RoundSnapshot:
        """Generate a new problem and replace the current round with it."""
        problem = self._generator.generate(self._operation, self._max_result, self._slot_count)
        self._state.equation = problem.equation
        self._state.distribution = problem.distribution
        self._log.debug(
            "Round: %s slots=%s correct=%d",
            problem.equation.text,
            list(problem.distribution.slot_values),
            problem.distribution.correct_index,
        )
        snap = self.snapshot()
        self._publish(events.EQUATION_CHANGED, snap.model_dump(mode="json"))
        return snap

    def handle_hit(self, slot_index: Any) -> bool:
        """Judge a strike on *slot_index*; return ``True`` if it was correct.

        ``None``, non-integers and indices outside the current slots are a
        no-op returning ``False``.
        """
        distribution = self._state.distribution
        if (
            distribution is None
            or not isinstance(slot_index, int)
            or isinstance(slot_index, bool)
            or not 0 <= slot_index < distribution.slot_count
        ):
            self._log.debug("Ignoring hit on slot %r", slot_index)
            return False

        value = distribution.slot_values[slot_index]
        if slot_index == distribution.correct_index:
            self._state.correct_count += 1
            self._log.info("Correct hit on slot %d (%d)", slot_index, value)
            self._publish(events.ANSWER_CORRECT, {"slot": slot_index, "value": value})
            self._publish_stats()
            self.start_round()
            return True

        self._state.wrong_count += 1
        self._log.info("Wrong hit on slot %d (%d)", slot_index, value)
        self._publish(events.ANSWER_WRONG, {"slot": slot_index, "value": value})
        self._publish_stats()
        return False

    def reset(self, lives: int | None = None) -> None:
        """Start a new game: zero the counters and restore lives.

        Does not start a round; call :meth:`start_round` afterwards.
        """
        lives = self._starting_lives if lives is None else lives
        self._state.correct_count = 0
        self._state.wrong_count = 0
        self._log.info("Game reset (lives=%d)", lives)
        self._publish(events.GAME_RESET, {"lives": max(0, lives)})
        self.set_lives(lives)
        self._publish_stats()

    def set_lives(self, value: int) -> int:
        """Set the remaining lives (floored at 0) and announce the change."""
        old = self._state.lives_remaining
        new = max(0, value)
        self._state.lives_remaining = new
        self._publish(events.LIVES_CHANGED, {"old_value": old, "new_value": new})
        if new == 0 and old > 0:
            self._log.info("Lives exhausted")
            self._publish(events.LIVES_EXHAUSTED, {})
        return new

    def lose_life(self) -> int:
        """Take one life away; returns the lives left."""
        return self.set_lives(self._state.lives_remaining - 1)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _publish_stats(self) -> None:
        self._publish(
            events.STATS_CHANGED,
            {
                "correct_count": self._state.correct_count,
                "wrong_count": self._state.wrong_count,
                "lives_remaining": self._state.lives_remaining,
            },
        )

    def _publish(self, event_type: str, payload: dict[str, Any]) -> None:
        if self._bus is not None:
            self._bus.publish_nowait(event_type, payload)
