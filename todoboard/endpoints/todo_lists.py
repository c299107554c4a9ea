"""
To-do list routes.
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from todoboard.dependencies import get_current_user, get_todo_list_service
from todoboard.schemas import CreatedResponse, TodoListCreate, TodoListOut, TodoListUpdate
from todoboard.services import TodoListService

router = APIRouter(
    prefix="/api/TodoLists",
    tags=["TodoLists"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[TodoListOut])
def get_todo_lists(service: TodoListService = Depends(get_todo_list_service)):
    return [
        TodoListOut(id=todo_list.id, title=todo_list.title, item_count=count)
        for todo_list, count in service.list_lists()
    ]


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_todo_list(
    request: TodoListCreate,
    service: TodoListService = Depends(get_todo_list_service),
):
    todo_list = service.create_list(request.title)
    return CreatedResponse(id=todo_list.id)


@router.put("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_todo_list(
    list_id: int,
    request: TodoListUpdate,
    service: TodoListService = Depends(get_todo_list_service),
):
    service.update_list(list_id, request.title)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_todo_list(list_id: int, service: TodoListService = Depends(get_todo_list_service)):
    service.delete_list(list_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
