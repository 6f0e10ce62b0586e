import logging
import threading
from typing import Any, Callable, Dict, Hashable, List


class EventBus:
    """
    Synchronous publish/subscribe.

    Subscribers run on the publishing thread, in subscription order.
    A subscriber that raises is logged and skipped; the remaining
    subscribers still receive the event.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._subscribers: Dict[Hashable, List[Callable[[Any], None]]] = {}
        self._lock = threading.Lock()

    def subscribe(
        self,
        event_type: Hashable,
        callback: Callable[[Any], None],
    ) -> Callable[[], bool]:
        """
        Register a handler for an event type.

        Returns:
            A function that removes this subscription when called
        """
        with self._lock:
            self._subscribers.setdefault(event_type, []).append(callback)
        self.logger.debug(f"Subscribed to {event_type}")
        return lambda: self.unsubscribe(event_type, callback)

    def unsubscribe(self, event_type: Hashable, callback: Callable[[Any], None]) -> bool:
        with self._lock:
            handlers = self._subscribers.get(event_type, [])
            if callback not in handlers:
                return False
            handlers.remove(callback)
        return True

    def publish(self, event_type: Hashable, data: Any = None) -> int:
        """
        Deliver an event to every subscriber of its type.

        Returns:
            Number of subscribers that handled the event without error
        """
        with self._lock:
            handlers = list(self._subscribers.get(event_type, []))

        delivered = 0
        for handler in handlers:
            try:
                handler(data)
                delivered += 1
            except Exception as e:
                self.logger.error(f"Error in {event_type} subscriber: {e}")
        return delivered

    def subscriber_count(self, event_type: Hashable) -> int:
        with self._lock:
            return len(self._subscribers.get(event_type, []))

    def clear(self) -> None:
        with self._lock:
            self._subscribers.clear()
