"""
Tests for the to-do list and item routes.
"""
import asyncio
import logging

import pytest
from sqlalchemy.orm import Session

from todoboard.data.seed_data import BIG_LIST_TITLE


@pytest.fixture
def lists(client, auth_headers):
    response = client.get("/api/TodoLists", headers=auth_headers)
    assert response.status_code == 200
    return {todo_list["title"]: todo_list for todo_list in response.json()}


@pytest.fixture
def big_list_id(lists):
    return lists[BIG_LIST_TITLE]["id"]


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.parametrize("method, path", [
    ("GET", "/api/TodoLists"),
    ("POST", "/api/TodoLists"),
    ("GET", "/api/TodoItems"),
    ("POST", "/api/TodoItems"),
    ("DELETE", "/api/TodoItems/1"),
])
def test_routes_require_token(client, method, path):
    response = client.request(method, path, json={})

    assert response.status_code == 401


def test_invalid_token(client):
    response = client.get("/api/TodoLists", headers={"Authorization": "Bearer nonsense"})

    assert response.status_code == 401


class TestTodoLists:
    def test_seeded_lists(self, lists):
        assert len(lists) == 5
        assert lists[BIG_LIST_TITLE]["item_count"] == 35
        assert lists["Todo List"]["item_count"] == 4

    def test_create(self, client, auth_headers):
        response = client.post("/api/TodoLists", json={"title": "  Errands  "}, headers=auth_headers)

        assert response.status_code == 201
        new_id = response.json()["id"]
        titles = {l["id"]: l["title"] for l in client.get("/api/TodoLists", headers=auth_headers).json()}
        assert titles[new_id] == "Errands"

    def test_create_duplicate(self, client, auth_headers):
        response = client.post("/api/TodoLists", json={"title": "Todo List"}, headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["error"] == "DuplicateError"

    @pytest.mark.parametrize("title", ["", "   ", "x" * 201])
    def test_create_invalid_title(self, client, auth_headers, title):
        response = client.post("/api/TodoLists", json={"title": title}, headers=auth_headers)

        assert response.status_code == 422

    def test_update(self, client, auth_headers, lists):
        list_id = lists["Home 🏠"]["id"]

        response = client.put(f"/api/TodoLists/{list_id}", json={"title": "House"}, headers=auth_headers)

        assert response.status_code == 204
        titles = [l["title"] for l in client.get("/api/TodoLists", headers=auth_headers).json()]
        assert "House" in titles
        assert "Home 🏠" not in titles

    def test_update_to_existing_title(self, client, auth_headers, lists):
        list_id = lists["Home 🏠"]["id"]

        response = client.put(f"/api/TodoLists/{list_id}", json={"title": "Work 💼"}, headers=auth_headers)

        assert response.status_code == 409

    def test_update_missing(self, client, auth_headers):
        response = client.put("/api/TodoLists/9999", json={"title": "Nope"}, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["context"]["resource_type"] == "TodoList"

    def test_delete_cascades_to_items(self, client, auth_headers, big_list_id):
        response = client.delete(f"/api/TodoLists/{big_list_id}", headers=auth_headers)
        assert response.status_code == 204

        items = client.get("/api/TodoItems", headers=auth_headers).json()
        assert items["total_count"] == 4 + 6 + 8 + 10
        missing = client.get(f"/api/TodoItems?list_id={big_list_id}", headers=auth_headers)
        assert missing.status_code == 404


class TestTodoItems:
    def test_first_page(self, client, auth_headers, big_list_id):
        response = client.get(
            f"/api/TodoItems?list_id={big_list_id}&page_number=1&page_size=10",
            headers=auth_headers,
        )

        assert response.status_code == 200
        page = response.json()
        assert [item["title"] for item in page["items"]] == [f"Task #{i:02d}" for i in range(1, 11)]
        assert page["page_number"] == 1
        assert page["total_pages"] == 4
        assert page["total_count"] == 35
        assert page["has_previous_page"] is False
        assert page["has_next_page"] is True

    def test_last_page(self, client, auth_headers, big_list_id):
        page = client.get(
            f"/api/TodoItems?list_id={big_list_id}&page_number=4&page_size=10",
            headers=auth_headers,
        ).json()

        assert [item["title"] for item in page["items"]] == [f"Task #{i:02d}" for i in range(31, 36)]
        assert page["has_previous_page"] is True
        assert page["has_next_page"] is False

    def test_default_page_size(self, client, auth_headers, big_list_id):
        page = client.get(f"/api/TodoItems?list_id={big_list_id}", headers=auth_headers).json()

        assert len(page["items"]) == 10

    def test_page_size_is_capped(self, client, auth_headers):
        page = client.get("/api/TodoItems?page_size=1000", headers=auth_headers).json()

        assert page["total_count"] == 63
        assert len(page["items"]) == 63
        assert page["total_pages"] == 1

    def test_page_number_must_be_positive(self, client, auth_headers):
        response = client.get("/api/TodoItems?page_number=0", headers=auth_headers)

        assert response.status_code == 422

    def test_create_publishes_event(self, client, auth_headers, lists, caplog):
        caplog.set_level(logging.INFO, logger="todoboard")
        list_id = lists["Todo List"]["id"]

        response = client.post(
            "/api/TodoItems",
            json={"list_id": list_id, "title": "Write tests"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert isinstance(response.json()["id"], int)
        messages = [r.getMessage() for r in caplog.records if r.name == "todoboard.event_handlers"]
        assert messages == ["Todoboard Domain Event: TodoItemCreatedEvent"]

    def test_create_in_missing_list(self, client, auth_headers, caplog):
        caplog.set_level(logging.INFO, logger="todoboard")

        response = client.post(
            "/api/TodoItems",
            json={"list_id": 9999, "title": "Orphan"},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert not [r for r in caplog.records if r.name == "todoboard.event_handlers"]

    def test_update_and_delete(self, client, auth_headers, lists):
        list_id = lists["Todo List"]["id"]
        item_id = client.post(
            "/api/TodoItems",
            json={"list_id": list_id, "title": "Temporary"},
            headers=auth_headers,
        ).json()["id"]

        response = client.put(
            f"/api/TodoItems/{item_id}",
            json={"title": "Renamed", "done": True, "note": "later"},
            headers=auth_headers,
        )
        assert response.status_code == 204

        page = client.get(f"/api/TodoItems?list_id={list_id}&page_size=100", headers=auth_headers).json()
        updated = next(item for item in page["items"] if item["id"] == item_id)
        assert updated == {"id": item_id, "list_id": list_id, "title": "Renamed", "note": "later", "done": True}

        assert client.delete(f"/api/TodoItems/{item_id}", headers=auth_headers).status_code == 204
        assert client.delete(f"/api/TodoItems/{item_id}", headers=auth_headers).status_code == 404

    def test_update_missing(self, client, auth_headers):
        response = client.put("/api/TodoItems/9999", json={"done": True}, headers=auth_headers)

        assert response.status_code == 404


def running_on_event_loop():
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def test_create_item_keeps_session_work_off_the_event_loop(client, auth_headers, lists, monkeypatch):
    flushes = []
    original_flush = Session.flush

    def recording_flush(self, *args, **kwargs):
        flushes.append(running_on_event_loop())
        return original_flush(self, *args, **kwargs)

    monkeypatch.setattr(Session, "flush", recording_flush)

    response = client.post(
        "/api/TodoItems",
        json={"list_id": lists["Todo List"]["id"], "title": "Stay responsive"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert flushes
    assert not any(flushes)
