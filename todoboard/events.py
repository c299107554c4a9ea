"""
Domain events and the in-process dispatcher that delivers them.

Events are immutable records of something that happened in the domain.
Subscribers are registered per concrete event type and are awaited inline by
``EventDispatcher.publish``, so handling completes before the publishing
operation returns.
"""
import inspect
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Awaitable, Callable, Dict, List, Type, Union

from todoboard.models import TodoItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainEvent:
    """Base class for domain events."""

    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC), kw_only=True)

    @property
    def event_type(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class TodoItemCreatedEvent(DomainEvent):
    """Raised when a new to-do item has been created."""

    item: TodoItem


EventHandler = Callable[[Any], Union[None, Awaitable[None]]]


class EventDispatcher:
    """Registry of subscriber callbacks keyed by event type."""

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Register ``handler`` for events of exactly ``event_type``."""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"Subscribed {getattr(handler, '__qualname__', handler)!s} to {event_type.__name__}")

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """Deliver ``event`` to its subscribers in registration order.

        Subscriber exceptions propagate to the publisher.
        """
        handlers = self._handlers.get(type(event), [])
        if not handlers:
            logger.debug(f"No handlers registered for {event.event_type}")
            return

        for handler in handlers:
            result = handler(event)
            if inspect.isawaitable(result):
                await result
