"""In-process publisher for the typed change feed."""

from __future__ import annotations

import inspect
import logging
from collections import abc, deque
from typing import TYPE_CHECKING, Any, Union


if TYPE_CHECKING:
    from live_notifier.models import Event


logger = logging.getLogger("LiveNotifier")

Subscriber = abc.Callable[["Event"], Union[None, abc.Awaitable[Any]]]


class EventBus:
    """
    Delivers batches of events, in order, to every subscriber.

    Subscribers can be plain functions or coroutine functions. A subscriber
    raising an exception is logged and skipped, the others still get the event.
    """

    def __init__(self, *, history_size: int = 100) -> None:
        self._subscribers: list[Subscriber] = []
        self._history: deque[Event] = deque(maxlen=history_size)

    def subscribe(self, callback: Subscriber) -> abc.Callable[[], None]:
        """Register a subscriber. Returns a callable that unsubscribes it again."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def recent(self, limit: int = 20) -> list[Event]:
        limit = max(0, limit)
        return list(self._history)[-limit:] if limit else []

    async def publish(self, events: abc.Iterable[Event]) -> None:
        for event in events:
            self._history.append(event)
            for callback in list(self._subscribers):
                try:
                    result = callback(event)
                    if inspect.isawaitable(result):
                        await result
                except Exception:
                    logger.exception(f"Subscriber {callback!r} failed on {event!r}")
