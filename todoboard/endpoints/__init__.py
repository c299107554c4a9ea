"""
HTTP endpoint groups mounted by the application factory.
"""
from todoboard.endpoints import todo_items, todo_lists, users

ROUTERS = [users.router, todo_lists.router, todo_items.router]

__all__ = ["ROUTERS", "todo_items", "todo_lists", "users"]
