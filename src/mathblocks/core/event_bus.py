"""Async event bus — ``asyncio.Queue``-based pub/sub.

Everything runs on the NiceGUI event loop.  The round controller is
synchronous and publishes through :meth:`EventBus.publish_nowait`; it never
waits for delivery.

Behaviour:

* handlers may be plain callables or coroutine functions;
* a handler that raises is logged and unsubscribed;
* ``filter_dict`` is AND-matched against the payload;
* the queue is bounded and drops its oldest event when full;
* events are dispatched one at a time in publish order.
"""

from __future__ import annotations

import asyncio
import contextlib
import itertools
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable

from mathblocks.core.models.event import Event

_log = logging.getLogger(__name__)

Handler = Callable[[Event], Any]


@dataclass
class _Subscription:
    sub_id: str
    handler: Handler
    filter_dict: dict[str, Any] | None = None

    def wants(self, event: Event) -> bool:
        if not self.filter_dict:
            return True
        return all(event.payload.get(k) == v for k, v in self.filter_dict.items())


class EventBus:
    """Bounded single-consumer event bus.

    Args:
        queue_size: Events held before the oldest is dropped.
    """

    def __init__(self, queue_size: int = 1000) -> None:
        self._queue_size = queue_size
        self._queue: asyncio.Queue[Event] | None = None
        self._consumer: asyncio.Task[None] | None = None
        # event_type → subscriptions in registration order
        self._by_type: dict[str, list[_Subscription]] = {}
        self._owner: dict[str, str] = {}
        self._seq = itertools.count(1)
        self._dropped = 0

    @property
    def running(self) -> bool:
        return self._consumer is not None

    @property
    def dropped(self) -> int:
        """Events discarded on queue overflow since construction."""
        return self._dropped

    def subscriber_count(self, event_type: str) -> int:
        return len(self._by_type.get(event_type, ()))

    # -- lifecycle ---------------------------------------------------------

    async def start(self) -> None:
        """Create the queue and the consumer task on the running loop."""
        self._queue = asyncio.Queue(maxsize=self._queue_size)
        self._consumer = asyncio.create_task(self._consume(), name="mathblocks-event-bus")
        _log.info("Event bus started (queue_size=%d)", self._queue_size)

    async def stop(self) -> None:
        """Cancel the consumer and forget every subscription."""
        if self._consumer is not None:
            self._consumer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._consumer
            self._consumer = None
        self._by_type.clear()
        self._owner.clear()
        _log.info("Event bus stopped (%d dropped)", self._dropped)

    # -- publish -----------------------------------------------------------

    async def publish(self, event_type: str, payload: dict[str, Any] | None = None) -> None:
        self.publish_nowait(event_type, payload)

    def publish_nowait(self, event_type: str, payload: dict[str, Any] | None = None) -> Event:
        """Enqueue an event without awaiting and return it."""
        assert self._queue is not None, "EventBus.start() has not been called"
        event = Event(event_type=event_type, payload=payload or {}, seq=next(self._seq))
        if self._queue.full():
            stale = self._queue.get_nowait()
            self._dropped += 1
            _log.warning("Event queue full, dropped %s (seq=%d)", stale.event_type, stale.seq)
        self._queue.put_nowait(event)
        return event

    # -- subscriptions -----------------------------------------------------

    def subscribe(
        self,
        event_type: str,
        handler: Handler,
        filter_dict: dict[str, Any] | None = None,
    ) -> str:
        """Register *handler* for *event_type* and return its subscription id."""
        sub = _Subscription(uuid.uuid4().hex, handler, filter_dict)
        self._by_type.setdefault(event_type, []).append(sub)
        self._owner[sub.sub_id] = event_type
        return sub.sub_id

    def unsubscribe(self, sub_id: str) -> None:
        """Remove a subscription; unknown ids are ignored."""
        event_type = self._owner.pop(sub_id, None)
        if event_type is None:
            return
        subs = self._by_type.get(event_type, [])
        self._by_type[event_type] = [s for s in subs if s.sub_id != sub_id]

    # -- consumer ----------------------------------------------------------

    async def _consume(self) -> None:
        assert self._queue is not None
        while True:
            event = await self._queue.get()
            await self._dispatch(event)

    async def _dispatch(self, event: Event) -> None:
        for sub in list(self._by_type.get(event.event_type, ())):
            if sub.sub_id not in self._owner or not sub.wants(event):
                continue
            try:
                result = sub.handler(event)
                if asyncio.iscoroutine(result):
                    await result
            except Exception:
                _log.exception(
                    "Handler %r failed on %s (seq=%d), unsubscribing",
                    sub.handler,
                    event.event_type,
                    event.seq,
                )
                self.unsubscribe(sub.sub_id)
