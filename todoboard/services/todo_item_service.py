"""
To-do item service - business logic for item operations.
Session calls are blocking, so the async entry point hands them to
starlette's threadpool.

Creating an item publishes ``TodoItemCreatedEvent``.  The event is published
after the insert is flushed and before the transaction is committed, so the
subscribers have finished by the time the save completes.
"""
import logging
import math
from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from todoboard.events import EventDispatcher, TodoItemCreatedEvent
from todoboard.exceptions import DatabaseError, TodoItemNotFoundError, TodoListNotFoundError, ValidationError
from todoboard.models import TodoItem, TodoList
from todoboard.schemas import TodoItemUpdate

logger = logging.getLogger(__name__)


class TodoItemService:
    """Service for to-do item business logic."""

    def __init__(self, session: Session, dispatcher: EventDispatcher):
        self.session = session
        self.dispatcher = dispatcher

    def _commit(self, operation: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to {operation} todo item: {str(e)}", exc_info=True)
            raise DatabaseError(f"Failed to {operation} todo item", original_error=e, operation=operation)

    def get_item(self, item_id: int) -> TodoItem:
        item = self.session.get(TodoItem, item_id)
        if item is None:
            raise TodoItemNotFoundError(item_id)
        return item

    def _add_item(self, list_id: int, title: str) -> TodoItem:
        if self.session.get(TodoList, list_id) is None:
            raise TodoListNotFoundError(list_id)

        item = TodoItem(list_id=list_id, title=title, done=False)
        self.session.add(item)
        try:
            self.session.flush()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to create todo item: {str(e)}", exc_info=True)
            raise DatabaseError("Failed to create todo item", original_error=e, operation="create")
        return item

    async def create_item(self, list_id: int, title: str) -> TodoItem:
        """
        Create an item in ``list_id`` and publish TodoItemCreatedEvent.

        Session work runs in the threadpool; only the subscribers run on the
        event loop.

        Raises:
            TodoListNotFoundError: If the list does not exist
        """
        item = await run_in_threadpool(self._add_item, list_id, title)
        try:
            await self.dispatcher.publish(TodoItemCreatedEvent(item))
        except Exception:
            await run_in_threadpool(self.session.rollback)
            raise
        await run_in_threadpool(self._commit, "create")
        logger.debug(f"Created todo item {item.id} in list {list_id}")
        return item

    def update_item(self, item_id: int, data: TodoItemUpdate) -> TodoItem:
        item = self.get_item(item_id)
        fields = data.model_fields_set
        if "title" in fields and data.title is not None:
            item.title = data.title
        if "done" in fields and data.done is not None:
            item.done = data.done
        if "note" in fields:
            item.note = data.note
        self._commit("update")
        return item

    def delete_item(self, item_id: int) -> None:
        item = self.get_item(item_id)
        self.session.delete(item)
        self._commit("delete")

    def get_items_page(
        self,
        list_id: Optional[int],
        page_number: int = 1,
        page_size: int = 10,
    ) -> Dict[str, Any]:
        """
        Return one page of items ordered by title.

        Args:
            list_id: Restrict to a list (None for all items)
            page_number: 1-based page number
            page_size: Items per page

        Returns:
            Dict with items, page_number, total_pages, total_count,
            has_previous_page, has_next_page
        """
        if page_number < 1:
            raise ValidationError("page_number must be at least 1", field="page_number", value=page_number)
        if page_size < 1:
            raise ValidationError("page_size must be at least 1", field="page_size", value=page_size)

        if list_id is not None and self.session.get(TodoList, list_id) is None:
            raise TodoListNotFoundError(list_id)

        count_stmt = select(func.count(TodoItem.id))
        items_stmt = select(TodoItem)
        if list_id is not None:
            count_stmt = count_stmt.where(TodoItem.list_id == list_id)
            items_stmt = items_stmt.where(TodoItem.list_id == list_id)

        total_count = self.session.scalar(count_stmt) or 0
        items = self.session.scalars(
            items_stmt.order_by(TodoItem.title, TodoItem.id)
            .offset((page_number - 1) * page_size)
            .limit(page_size)
        ).all()

        total_pages = math.ceil(total_count / page_size)
        return {
            "items": list(items),
            "page_number": page_number,
            "total_pages": total_pages,
            "total_count": total_count,
            "has_previous_page": page_number > 1,
            "has_next_page": page_number < total_pages,
        }
