"""
To-do item routes.

Creating an item publishes ``TodoItemCreatedEvent``; its handlers have run by
the time the response is sent.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from todoboard.dependencies import get_current_user, get_todo_item_service
from todoboard.schemas import CreatedResponse, PaginatedList, TodoItemCreate, TodoItemOut, TodoItemUpdate
from todoboard.services import TodoItemService

router = APIRouter(
    prefix="/api/TodoItems",
    tags=["TodoItems"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=PaginatedList[TodoItemOut])
def get_todo_items_with_pagination(
    request: Request,
    list_id: Optional[int] = Query(None, description="Restrict to one list"),
    page_number: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, description="Defaults to the configured page size"),
    service: TodoItemService = Depends(get_todo_item_service),
):
    settings = request.app.state.settings
    size = min(page_size or settings.default_page_size, settings.max_page_size)
    page = service.get_items_page(list_id, page_number=page_number, page_size=size)
    page["items"] = [TodoItemOut.model_validate(item) for item in page["items"]]
    return PaginatedList[TodoItemOut](**page)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_todo_item(
    request: TodoItemCreate,
    service: TodoItemService = Depends(get_todo_item_service),
):
    item = await service.create_item(request.list_id, request.title)
    return CreatedResponse(id=item.id)


@router.put("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_todo_item(
    item_id: int,
    request: TodoItemUpdate,
    service: TodoItemService = Depends(get_todo_item_service),
):
    service.update_item(item_id, request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_todo_item(item_id: int, service: TodoItemService = Depends(get_todo_item_service)):
    service.delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
