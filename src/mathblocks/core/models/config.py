"""Configuration Pydantic models: MathBlocksConfig, GameConfig, SystemConfig."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GameConfig(BaseModel):
    """Settings for a play session.

    ``operation`` is kept as a free string: unrecognised tags are not a
    validation error, the generator falls back to its addition policy.
    """

    model_config = ConfigDict(extra="forbid")

    operation: str = Field(default="addition", description="addition / subtraction / multiplication / division")
    max_result: int = Field(default=20, ge=1, description="Upper bound for results and answer values")
    starting_lives: int = Field(default=3, ge=0, description="Lives at the start of a new game")
    slot_count: int = Field(default=4, ge=1, le=4, description="Number of answer blocks")
    seed: int | None = Field(default=None, description="Seed for reproducible problem sequences")


class SystemConfig(BaseModel):
    """Non-game runtime settings."""

    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str = Field(default="logs", description="Directory for rotating log files")
    event_bus_queue_size: int = Field(default=1000, ge=1, description="Max queued events")
    webui_port: int = Field(default=8080, description="NiceGUI listen port")
    dev_mode: bool = Field(default=False, description="Show the answer key on the dev board")


class MathBlocksConfig(BaseModel):
    """Top-level configuration loaded from ``mathblocks_config.json``."""

    model_config = ConfigDict(extra="forbid")

    game: GameConfig = Field(default_factory=GameConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)
