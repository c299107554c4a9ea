"""
Request and response schemas for the HTTP API.
"""
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


def _strip_title(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    s = v.strip()
    if not (1 <= len(s) <= 200):
        raise ValueError("title length must be between 1 and 200 characters")
    return s


# ============================================================================
# Identity
# ============================================================================

class RegisterRequest(BaseModel):
    email: str = Field(..., description="Email address, also used as the user name")
    password: str = Field(..., description="Password satisfying the password policy")


class LoginRequest(BaseModel):
    email: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class AccessTokenResponse(BaseModel):
    token_type: str = "Bearer"
    access_token: str
    expires_in: int
    refresh_token: str


class InfoResponse(BaseModel):
    email: Optional[str]
    roles: List[str]
    is_email_confirmed: bool


# ============================================================================
# To-do lists
# ============================================================================

class TodoListCreate(BaseModel):
    model_config = ConfigDict(json_schema_extra={"example": {"title": "Groceries"}})

    title: str = Field(..., description="Title of the list", min_length=1, max_length=200)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _strip_title(v)


class TodoListUpdate(TodoListCreate):
    pass


class TodoListOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    item_count: int = 0


# ============================================================================
# To-do items
# ============================================================================

class TodoItemCreate(BaseModel):
    model_config = ConfigDict(json_schema_extra={"example": {"list_id": 1, "title": "Buy milk"}})

    list_id: int = Field(..., description="Owning list")
    title: str = Field(..., description="Title of the item", min_length=1, max_length=200)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _strip_title(v)


class TodoItemUpdate(BaseModel):
    """All fields are optional; only provided fields are updated."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    done: Optional[bool] = None
    note: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        return _strip_title(v)


class TodoItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    list_id: int
    title: Optional[str]
    note: Optional[str] = None
    done: bool


class PaginatedList(BaseModel, Generic[T]):
    items: List[T]
    page_number: int
    total_pages: int
    total_count: int
    has_previous_page: bool
    has_next_page: bool


class CreatedResponse(BaseModel):
    id: int
