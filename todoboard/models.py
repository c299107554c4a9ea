"""
SQLAlchemy models for to-do lists, items and identity records.
"""
from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from todoboard.database import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class TodoList(Base):
    """A named list that owns its items."""

    __tablename__ = "todo_lists"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    items = relationship(
        "TodoItem",
        back_populates="todo_list",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TodoItem.id",
    )

    def __repr__(self) -> str:
        return f"<TodoList id={self.id} title={self.title!r}>"


class TodoItem(Base):
    """A single entry of a to-do list."""

    __tablename__ = "todo_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    list_id = Column(Integer, ForeignKey("todo_lists.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(200), nullable=True)
    note = Column(Text, nullable=True)
    done = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    todo_list = relationship("TodoList", back_populates="items")

    def __repr__(self) -> str:
        return f"<TodoItem id={self.id} title={self.title!r} done={self.done}>"


class Role(Base):
    """Identity role, unique by normalized name."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(256), nullable=False, unique=True)
    normalized_name = Column(String(256), nullable=False, unique=True, index=True)

    users = relationship("User", secondary=user_roles, back_populates="roles")


class User(Base):
    """Identity account with a hashed password."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_name = Column(String(256), nullable=False, unique=True)
    normalized_user_name = Column(String(256), nullable=False, unique=True, index=True)
    email = Column(String(256), nullable=True)
    email_confirmed = Column(Boolean, nullable=False, default=False)
    password_hash = Column(String(512), nullable=True)
    security_stamp = Column(String(64), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    roles = relationship("Role", secondary=user_roles, back_populates="users")

    @property
    def role_names(self) -> list[str]:
        return sorted(role.name for role in self.roles)
