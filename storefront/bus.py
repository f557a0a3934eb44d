"""
In-process event dispatch and the typed "cart changed" broadcast.

EventDispatcher is the generic name-keyed channel (``dispatch`` /
``listen``). BroadcastBus narrows it to the single event the cart cares
about. Events carry no payload: subscribers re-read the store, because
several producers can race and only the latest write matters.
"""

from collections import defaultdict
from typing import Callable, Dict, List

from storefront.config import CART_UPDATED_EVENT
from storefront.logging import get_logger

logger = get_logger(__name__)

Handler = Callable[[], None]
Unsubscribe = Callable[[], None]


class EventDispatcher:
    """Process-wide, fire-and-forget event channel."""

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = defaultdict(list)

    def listen(self, event_name: str, handler: Handler) -> Unsubscribe:
        """
        Register a handler for an event.

        Args:
            event_name: Event to listen for
            handler: Zero-argument callable

        Returns:
            Callable that removes this registration (safe to call twice)
        """
        self._handlers[event_name].append(handler)
        removed = False

        def unlisten() -> None:
            nonlocal removed
            if removed:
                return
            removed = True
            handlers = self._handlers.get(event_name, [])
            # Remove this registration only, even if the same handler was added twice
            for i, registered in enumerate(handlers):
                if registered is handler:
                    del handlers[i]
                    break

        return unlisten

    def dispatch(self, event_name: str) -> int:
        """
        Invoke every handler registered for the event, synchronously.

        Handlers are snapshotted first; a failing handler is logged and
        does not stop delivery to the rest.

        Returns:
            Number of handlers invoked
        """
        handlers = list(self._handlers.get(event_name, ()))
        for handler in handlers:
            try:
                handler()
            except Exception as e:
                logger.warning(f"Handler for '{event_name}' failed: {e}", exc_info=True)
        return len(handlers)

    def listener_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, ()))


class BroadcastBus:
    """Typed channel for the "cart changed" event."""

    def __init__(self, dispatcher: EventDispatcher | None = None, event_name: str = CART_UPDATED_EVENT):
        self.dispatcher = dispatcher or EventDispatcher()
        self.event_name = event_name

    def publish(self) -> None:
        """Announce that the cart changed. No-op without subscribers."""
        delivered = self.dispatcher.dispatch(self.event_name)
        logger.debug(f"Published {self.event_name} to {delivered} subscriber(s)")

    def subscribe(self, handler: Handler) -> Unsubscribe:
        """Subscribe to cart changes; returns the unsubscribe handle."""
        return self.dispatcher.listen(self.event_name, handler)

    @property
    def subscriber_count(self) -> int:
        return self.dispatcher.listener_count(self.event_name)
