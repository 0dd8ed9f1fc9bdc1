"""Single-loop event bus used by the local workflow and the tests."""

import logging
from typing import Any, List, NamedTuple, Type

from mealsnap.domain.meal.core.events.base import DomainEvent
from mealsnap.domain.shared.ports.event_bus import EventHandler, TEvent

logger = logging.getLogger(__name__)


class _Subscription(NamedTuple):
    event_type: Type[DomainEvent]
    handler: EventHandler[Any]

    @property
    def handler_name(self) -> str:
        return getattr(self.handler, "__name__", repr(self.handler))


class InMemoryEventBus:
    """
    IEventBus kept in a flat subscription list.

    Delivery is sequential on the publisher's loop and matches by
    ``isinstance``, so a DomainEvent subscriber sees everything. A handler
    that raises is logged and skipped. Not thread-safe.

    Example:
        >>> bus = InMemoryEventBus()
        >>> bus.subscribe(DomainEvent, audit_log)
        >>> bus.subscribe(MealCommitted, show_confirmation)
        >>> await bus.publish(MealCommitted.create(...))  # both run, in that order
    """

    def __init__(self) -> None:
        self._subscriptions: List[_Subscription] = []

    def subscribe(self, event_type: Type[TEvent], handler: EventHandler[TEvent]) -> None:
        subscription = _Subscription(event_type, handler)
        self._subscriptions.append(subscription)
        logger.debug(
            "Handler subscribed",
            extra={"event_type": event_type.__name__, "handler": subscription.handler_name},
        )

    def unsubscribe(self, event_type: Type[TEvent], handler: EventHandler[TEvent]) -> bool:
        # Drops the oldest matching subscription only.
        for index, subscription in enumerate(self._subscriptions):
            if subscription.event_type is event_type and subscription.handler == handler:
                del self._subscriptions[index]
                return True
        return False

    async def publish(self, event: DomainEvent) -> None:
        matching = [s for s in self._subscriptions if isinstance(event, s.event_type)]
        if not matching:
            logger.debug("Event had no subscribers", extra={"event_type": event.event_name})
            return

        for subscription in matching:
            try:
                await subscription.handler(event)
            except Exception as e:
                logger.error(
                    "Event handler failed",
                    extra={
                        "event_type": event.event_name,
                        "event_id": str(event.event_id),
                        "handler": subscription.handler_name,
                        "error": str(e),
                    },
                    exc_info=True,
                )

    def handler_count(self, event_type: Type[DomainEvent]) -> int:
        """Subscriptions registered for exactly ``event_type``."""
        return sum(1 for s in self._subscriptions if s.event_type is event_type)

    def clear(self) -> None:
        self._subscriptions.clear()
