from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List

from tumblrcrawl.domain.crawl_events import CrawlEvent

Handler = Callable[[Any], None]


class CrawlNotifier:
    """Publishes crawl events to registered handlers.

    Handlers run synchronously, in subscription order, on the thread that
    emits. An exception raised by a handler propagates to the emitter.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._handlers: Dict[CrawlEvent, List[Handler]] = {event: [] for event in CrawlEvent}

    def subscribe(self, event, handler: Handler) -> Handler:
        event = CrawlEvent(event)
        with self._lock:
            self._handlers[event].append(handler)
        return handler

    def unsubscribe(self, event, handler: Handler) -> bool:
        event = CrawlEvent(event)
        with self._lock:
            try:
                self._handlers[event].remove(handler)
            except ValueError:
                return False
            return True

    def on(self, event) -> Callable[[Handler], Handler]:
        """Decorator form of subscribe()."""
        def register(handler: Handler) -> Handler:
            return self.subscribe(event, handler)
        return register

    def emit(self, event, payload: Any = None) -> None:
        event = CrawlEvent(event)
        with self._lock:
            handlers = list(self._handlers[event])
        for handler in handlers:
            handler(payload)

    def handler_count(self, event) -> int:
        with self._lock:
            return len(self._handlers[CrawlEvent(event)])
