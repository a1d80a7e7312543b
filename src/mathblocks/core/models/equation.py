"""Arithmetic operations, equations and answer distributions."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Operation(str, Enum):
    """The four arithmetic kinds the generator supports."""

    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def parse(cls, value: Operation | str | None) -> Operation | None:
        """Return the matching member, or ``None`` for an unrecognised tag.

        Matching is case-insensitive and ignores surrounding whitespace, so
        values read from settings dropdowns or env-vars work as-is.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


_SYMBOLS: dict[Operation, str] = {
    Operation.ADDITION: "+",
    Operation.SUBTRACTION: "-",
    Operation.MULTIPLICATION: "×",
    Operation.DIVISION: "÷",
}


class Equation(BaseModel):
    """``a <symbol> b = result`` with integer operands.

    Instances are immutable; a new round always gets a new ``Equation``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    a: int
    b: int
    result: int = Field(ge=0)
    operator_symbol: str = Field(pattern=r"^[+\-×÷]$")

    @model_validator(mode="after")
    def _check_consistent(self) -> Equation:
        if self.evaluate() != self.result:
            raise ValueError(
                f"{self.a} {self.operator_symbol} {self.b} does not equal {self.result}"
            )
        return self

    def evaluate(self) -> int | None:
        """Apply the operator to ``(a, b)``.

        Returns ``None`` for a division that does not come out even.
        """
        if self.operator_symbol == "+":
            return self.a + self.b
        if self.operator_symbol == "-":
            return self.a - self.b
        if self.operator_symbol == "×":
            return self.a * self.b
        if self.b == 0 or self.a % self.b:
            return None
        return self.a // self.b

    @property
    def text(self) -> str:
        """Display form shown to the player, e.g. ``"7 + 5 = ?"``."""
        return f"{self.a} {self.operator_symbol} {self.b} = ?"


class Distribution(BaseModel):
    """Values shown on the answer slots and which slot is correct."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    slot_values: tuple[int, ...] = Field(min_length=1, max_length=4)
    correct_index: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_index(self) -> Distribution:
        if self.correct_index >= len(self.slot_values):
            raise ValueError(
                f"correct_index {self.correct_index} out of range for "
                f"{len(self.slot_values)} slots"
            )
        return self

    @property
    def slot_count(self) -> int:
        return len(self.slot_values)

    @property
    def correct_value(self) -> int:
        return self.slot_values[self.correct_index]


class Problem(BaseModel):
    """One generated round: the equation plus its answer distribution."""

    model_config = ConfigDict(frozen=True)

    equation: Equation
    distribution: Distribution

    @model_validator(mode="after")
    def _check_correct_slot(self) -> Problem:
        if self.distribution.correct_value != self.equation.result:
            raise ValueError("correct slot does not hold the equation result")
        return self
