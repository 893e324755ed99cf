"""Update notifications between household views.

Writers publish a topic such as ``schedule_updated`` after a batch is
stored; views subscribe to reload their data.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

SCHEDULE_UPDATED = "schedule_updated"

Listener = Callable[[str, dict[str, Any]], None]


class UpdateNotifier:
    """A minimal publish/subscribe hub."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, topic: str, listener: Listener) -> Callable[[], None]:
        """Register *listener* for *topic*.

        Returns:
            A callable that removes the subscription.
        """
        self._listeners[topic].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[topic]:
                self._listeners[topic].remove(listener)

        return unsubscribe

    def publish(self, topic: str, **payload: Any) -> int:
        """Call every listener of *topic*; a failing listener is logged and skipped.

        Returns:
            Number of listeners that ran without raising.
        """
        delivered = 0
        for listener in list(self._listeners.get(topic, ())):
            try:
                listener(topic, payload)
                delivered += 1
            except Exception:
                logger.exception("Listener for %s failed", topic)
        return delivered
