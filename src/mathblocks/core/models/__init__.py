"""Pydantic models for configuration, equations, round state and events."""
from mathblocks.core.models.config import GameConfig, MathBlocksConfig, SystemConfig
from mathblocks.core.models.equation import Distribution, Equation, Operation, Problem
from mathblocks.core.models.event import Event
from mathblocks.core.models.round import RoundSnapshot, RoundState

__all__ = [
    "GameConfig",
    "MathBlocksConfig",
    "SystemConfig",
    "Distribution",
    "Equation",
    "Operation",
    "Problem",
    "Event",
    "RoundSnapshot",
    "RoundState",
]
