"""Shared pytest fixtures for MathBlocks tests."""

from __future__ import annotations

import random

import pytest

from mathblocks.core.event_bus import EventBus
from mathblocks.core.generator import ProblemGenerator
from mathblocks.core.models.config import MathBlocksConfig


@pytest.fixture
async def event_bus():
    """Provide a started EventBus that is stopped after the test."""
    bus = EventBus(queue_size=100)
    await bus.start()
    yield bus
    await bus.stop()


@pytest.fixture(scope="session")
def mathblocks_config() -> MathBlocksConfig:
    """Session-scoped default config (no file I/O)."""
    return MathBlocksConfig()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so failures are reproducible."""
    return random.Random(1234)


@pytest.fixture
def generator(rng: random.Random) -> ProblemGenerator:
    return ProblemGenerator(rng)
