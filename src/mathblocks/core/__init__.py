"""Core services: problem generation, round control, event bus."""

from mathblocks.core.event_bus import EventBus
from mathblocks.core.generator import ProblemGenerator
from mathblocks.core.hit_event_bridge import HitEventBridge
from mathblocks.core.round_controller import RoundController

__all__ = [
    "EventBus",
    "HitEventBridge",
    "ProblemGenerator",
    "RoundController",
]
