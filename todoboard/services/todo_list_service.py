"""
To-do list service - business logic for list operations.
This layer contains no HTTP framework dependencies.
"""
import logging
from typing import List, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todoboard.exceptions import DatabaseError, DuplicateError, TodoListNotFoundError
from todoboard.models import TodoItem, TodoList

logger = logging.getLogger(__name__)


class TodoListService:
    """Service for to-do list business logic."""

    def __init__(self, session: Session):
        self.session = session

    def _commit(self, operation: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to {operation} todo list: {str(e)}", exc_info=True)
            raise DatabaseError(f"Failed to {operation} todo list", original_error=e, operation=operation)

    def _ensure_unique_title(self, title: str, exclude_id: int | None = None) -> None:
        stmt = select(TodoList.id).where(TodoList.title == title)
        if exclude_id is not None:
            stmt = stmt.where(TodoList.id != exclude_id)
        if self.session.scalar(stmt.limit(1)) is not None:
            raise DuplicateError("TodoList", "title", title)

    def get_list(self, list_id: int) -> TodoList:
        todo_list = self.session.get(TodoList, list_id)
        if todo_list is None:
            raise TodoListNotFoundError(list_id)
        return todo_list

    def list_lists(self) -> List[Tuple[TodoList, int]]:
        """Return every list with its item count, ordered by title."""
        stmt = (
            select(TodoList, func.count(TodoItem.id))
            .outerjoin(TodoItem, TodoItem.list_id == TodoList.id)
            .group_by(TodoList.id)
            .order_by(TodoList.title)
        )
        return [(todo_list, count) for todo_list, count in self.session.execute(stmt).all()]

    def create_list(self, title: str) -> TodoList:
        self._ensure_unique_title(title)
        todo_list = TodoList(title=title)
        self.session.add(todo_list)
        self._commit("create")
        logger.info(f"Created todo list {todo_list.id}: {title}")
        return todo_list

    def update_list(self, list_id: int, title: str) -> TodoList:
        todo_list = self.get_list(list_id)
        self._ensure_unique_title(title, exclude_id=list_id)
        todo_list.title = title
        self._commit("update")
        return todo_list

    def delete_list(self, list_id: int) -> None:
        """Delete a list together with its items."""
        todo_list = self.get_list(list_id)
        self.session.delete(todo_list)
        self._commit("delete")
        logger.info(f"Deleted todo list {list_id}")
