"""Round state owned by the controller and the snapshots it hands out."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mathblocks.core.models.equation import Distribution, Equation


class RoundState(BaseModel):
    """Mutable per-session state.

    ``equation`` and ``distribution`` are replaced wholesale on every round
    advance and never mutated in place.
    """

    model_config = ConfigDict(validate_assignment=True)

    equation: Equation | None = Field(default=None)
    distribution: Distribution | None = Field(default=None)
    correct_count: int = Field(default=0, ge=0)
    wrong_count: int = Field(default=0, ge=0)
    lives_remaining: int = Field(default=3, ge=0)

    @property
    def round_active(self) -> bool:
        return self.equation is not None and self.distribution is not None


class RoundSnapshot(BaseModel):
    """Read-only view of the current round for display collaborators."""

    model_config = ConfigDict(frozen=True)

    equation_text: str = Field(default="")
    slot_values: tuple[int, ...] = Field(default=())
    correct_index: int | None = Field(default=None)
    correct_count: int = Field(default=0)
    wrong_count: int = Field(default=0)
    lives_remaining: int = Field(default=0)
    operation: str = Field(description="Configured operation tag (may be unrecognised)")
    max_result: int
