"""ProblemGenerator — equations plus plausible-but-wrong answer distributions.

Pure logic: the only side effects are draws from the injected
:class:`random.Random`, so a seeded generator replays the same sequence of
problems.

Key behaviours:
* One equation handler per :class:`Operation`.  Unrecognised operation tags
  use :func:`_fallback_equation` (an addition with small first operand).
* Every draw ``lo + randrange(max(1, n))`` clamps an empty or negative span to
  a single value, so ``max_result`` values below 2 still produce well-typed
  (if degenerate) problems instead of raising.
* Distractors come from an ordered candidate pool (near misses first, random
  top-up after) and are taken first-found.
"""

from __future__ import annotations

import logging as _logging
import random
from typing import Callable

from mathblocks.core.models.equation import Distribution, Equation, Operation, Problem

_log = _logging.getLogger(__name__)

MAX_SLOTS = 4
POOL_TARGET = 8

# Multiplication redraws when a*b overshoots max_result.
_MULTIPLICATION_ATTEMPTS = 32

# Near-miss offsets, in pool insertion order.
_ADDITIVE_OFFSETS = (-3, -2, -1, 1, 2, 3, 4, -4)
_FACTOR_OFFSETS = (-2, -1, 1, 2)
_QUOTIENT_OFFSETS = (-2, -1, 1, 2)


def _draw(rng: random.Random, lo: int, span: int) -> int:
    """Uniform integer in ``[lo, lo + span)``; spans below 1 count as 1."""
    return lo + rng.randrange(max(1, span))


# ---------------------------------------------------------------------------
# Equation handlers
# ---------------------------------------------------------------------------

def _addition_equation(rng: random.Random, max_result: int) -> Equation:
    a = _draw(rng, 1, min(max_result - 1, 20))
    b = _draw(rng, 1, min(max_result - a - 1, 20))
    return Equation(a=a, b=b, result=a + b, operator_symbol="+")


def _subtraction_equation(rng: random.Random, max_result: int) -> Equation:
    result = _draw(rng, 0, min(max_result, 20))
    b = _draw(rng, 1, min(20, max_result - result))
    return Equation(a=result + b, b=b, result=result, operator_symbol="-")


def _multiplication_equation(rng: random.Random, max_result: int) -> Equation:
    # a = max_result // 2 + 1 leaves no room for b >= 2; redraw those.
    for _ in range(_MULTIPLICATION_ATTEMPTS):
        a = _draw(rng, 2, min(10, max_result // 2))
        b = _draw(rng, 2, min(max_result // a - 1, 10))
        if a * b <= max_result:
            break
    else:
        _log.debug("No product <= %d after %d draws, keeping %d × %d",
                   max_result, _MULTIPLICATION_ATTEMPTS, a, b)
    return Equation(a=a, b=b, result=a * b, operator_symbol="×")


def _division_equation(rng: random.Random, max_result: int) -> Equation:
    result = _draw(rng, 2, min(max_result - 1, 15))
    b = _draw(rng, 2, min(10, max_result // result))
    return Equation(a=result * b, b=b, result=result, operator_symbol="÷")


def _fallback_equation(rng: random.Random, max_result: int) -> Equation:
    a = _draw(rng, 1, 10)
    b = _draw(rng, 1, max_result - a)
    return Equation(a=a, b=b, result=a + b, operator_symbol="+")


_EQUATION_HANDLERS: dict[Operation, Callable[[random.Random, int], Equation]] = {
    Operation.ADDITION: _addition_equation,
    Operation.SUBTRACTION: _subtraction_equation,
    Operation.MULTIPLICATION: _multiplication_equation,
    Operation.DIVISION: _division_equation,
}


# ---------------------------------------------------------------------------
# Distractor candidates
# ---------------------------------------------------------------------------

def _near_misses(operation: Operation | None, equation: Equation, max_result: int) -> list[int]:
    """Deterministic part of the candidate pool, in insertion order."""
    result = equation.result
    if operation is None:
        return []
    if operation is Operation.MULTIPLICATION:
        a, b = equation.a, equation.b
        values = []
        for d in _FACTOR_OFFSETS:
            values.extend(((a + d) * b, a * (b + d)))
        return [v for v in values if 0 <= v <= max_result and v != result]
    if operation is Operation.DIVISION:
        return [result + d for d in _QUOTIENT_OFFSETS if 1 <= result + d <= max_result]
    return [result + d for d in _ADDITIVE_OFFSETS if 0 <= result + d <= max_result]


def _value_floor(operation: Operation | None) -> int:
    return 1 if operation is Operation.DIVISION else 0


class ProblemGenerator:
    """Builds :class:`Problem` instances from ``(operation, max_result)``.

    Args:
        rng: Random source.  Pass a seeded :class:`random.Random` for
            reproducible output; defaults to a fresh unseeded instance.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    @property
    def rng(self) -> random.Random:
        return self._rng

    def generate(
        self,
        operation: Operation | str | None,
        max_result: int,
        slot_count: int = MAX_SLOTS,
    ) -> Problem:
        """Return a new equation and its answer distribution.

        Never raises for an unknown *operation* or a tiny *max_result*: the
        former selects the addition fallback, the latter yields degenerate
        problems whose slot values may repeat.
        """
        op = Operation.parse(operation)
        equation = self.make_equation(op, max_result)
        distribution = self.distribute(op, equation, max_result, slot_count)
        return Problem(equation=equation, distribution=distribution)

    def make_equation(self, operation: Operation | None, max_result: int) -> Equation:
        handler = _EQUATION_HANDLERS.get(operation, _fallback_equation)
        return handler(self._rng, max_result)

    def candidate_pool(
        self, operation: Operation | None, equation: Equation, max_result: int
    ) -> list[int]:
        """Ordered, de-duplicated distractor candidates.

        Near misses come first; uniform draws from ``[floor, max_result]``
        top the pool up to :data:`POOL_TARGET` values, or to every value in
        that range when it is smaller.
        """
        floor = _value_floor(operation)
        pool = dict.fromkeys(_near_misses(operation, equation, max_result))
        target = min(POOL_TARGET, max_result - floor + 1)
        while len(pool) < target:
            pool.setdefault(_draw(self._rng, floor, max_result - floor + 1))
        return list(pool)

    def pick_distractors(
        self,
        operation: Operation | None,
        equation: Equation,
        max_result: int,
        count: int = MAX_SLOTS - 1,
    ) -> list[int]:
        """First *count* pool values distinct from each other and the result.

        Short pools are padded with fresh draws, which may repeat.
        """
        taken = {equation.result}
        wrong: list[int] = []
        for value in self.candidate_pool(operation, equation, max_result):
            if len(wrong) >= count:
                break
            if value not in taken:
                wrong.append(value)
                taken.add(value)
        floor = _value_floor(operation)
        while len(wrong) < count:
            wrong.append(_draw(self._rng, floor, max_result - floor + 1))
        return wrong

    def distribute(
        self,
        operation: Operation | None,
        equation: Equation,
        max_result: int,
        slot_count: int = MAX_SLOTS,
    ) -> Distribution:
        slots = max(1, min(MAX_SLOTS, slot_count))
        correct_index = self._rng.randrange(slots)
        wrong = iter(self.pick_distractors(operation, equation, max_result, slots - 1))
        values = [equation.result if i == correct_index else next(wrong) for i in range(slots)]
        return Distribution(slot_values=tuple(values), correct_index=correct_index)
