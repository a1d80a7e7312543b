"""Pydantic model for event bus messages."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """One message on the bus.  ``seq`` is stamped by the bus at publish time."""

    model_config = ConfigDict(frozen=True)

    event_type: str = Field(description="Dot-separated event type, e.g. 'game.equation.changed'")
    payload: dict[str, Any] = Field(default_factory=dict)
    seq: int = Field(default=0, ge=0, description="Publish order, starting at 1 per bus")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
