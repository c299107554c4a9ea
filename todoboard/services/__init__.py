"""
Service layer for business logic.
Services contain pure business logic without HTTP framework dependencies.
"""

from todoboard.services.todo_item_service import TodoItemService
from todoboard.services.todo_list_service import TodoListService

__all__ = ["TodoItemService", "TodoListService"]
