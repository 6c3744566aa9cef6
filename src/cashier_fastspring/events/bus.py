"""In-process event bus for webhook notifications.

Application code subscribes handlers to variant names (``Any``, ``OrderAny``,
``OrderCompleted``...). Handlers run synchronously in subscription order and
their exceptions propagate to the publisher.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class Publisher(Protocol):
    def publish(self, kind: str, payload: Any) -> None: ...


class EventBus:
    """In-memory registry of handlers keyed by event variant."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, kind: str, handler: Handler) -> Handler:
        self._handlers[kind].append(handler)
        return handler

    def unsubscribe(self, kind: str, handler: Handler) -> None:
        self._handlers[kind] = [h for h in self._handlers[kind] if h is not handler]

    def listen(self, kind: str) -> Callable[[Handler], Handler]:
        """Decorator form of :meth:`subscribe`."""

        def _decorator(handler: Handler) -> Handler:
            return self.subscribe(kind, handler)

        return _decorator

    def handlers(self, kind: str) -> list[Handler]:
        return list(self._handlers.get(kind, ()))

    def publish(self, kind: str, payload: Any) -> None:
        handlers = self.handlers(kind)
        logger.debug("Publishing %s to %d handler(s)", kind, len(handlers))
        for handler in handlers:
            handler(payload)

    def clear(self) -> None:
        self._handlers.clear()


# Module-level singleton
event_bus = EventBus()
