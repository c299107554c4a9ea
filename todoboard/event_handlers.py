"""
Event handlers for to-do items.
"""
import logging
from typing import Optional

from todoboard.events import EventDispatcher, TodoItemCreatedEvent


class TodoItemCreatedEventHandler:
    """Logs every created to-do item."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    async def handle(self, event: TodoItemCreatedEvent) -> None:
        self.logger.info("Todoboard Domain Event: %s", type(event).__name__)

    __call__ = handle


def build_event_dispatcher() -> EventDispatcher:
    """Return a dispatcher with the application's handlers registered."""
    dispatcher = EventDispatcher()
    dispatcher.subscribe(TodoItemCreatedEvent, TodoItemCreatedEventHandler())
    return dispatcher
