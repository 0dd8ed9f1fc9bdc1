"""Port through which the workflow announces what happened."""

from typing import Awaitable, Callable, Protocol, Type, TypeVar

from mealsnap.domain.meal.core.events.base import DomainEvent

TEvent = TypeVar("TEvent", bound=DomainEvent)

EventHandler = Callable[[TEvent], Awaitable[None]]


class IEventBus(Protocol):
    """
    Delivers WorkflowStatusChanged and MealCommitted to the views.

    A handler subscribed to a base class also receives its subclasses, so
    ``subscribe(DomainEvent, audit)`` sees every event of a session.

    Example:
        >>> async def render(event: WorkflowStatusChanged) -> None:
        ...     view.show(event.current, event.error)
        >>> event_bus.subscribe(WorkflowStatusChanged, render)
    """

    def subscribe(self, event_type: Type[TEvent], handler: EventHandler[TEvent]) -> None:
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Await matching handlers in subscription order; a failing handler never reaches the publisher."""
        ...

    def unsubscribe(self, event_type: Type[TEvent], handler: EventHandler[TEvent]) -> bool:
        """Remove one subscription. Returns False if it was not registered."""
        ...
