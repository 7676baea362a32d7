"""Tests for task endpoints."""

from fastapi.testclient import TestClient

USER_HEADERS = {"X-User-Id": "user-1"}
OTHER_HEADERS = {"X-User-Id": "user-2"}


def _create(client: TestClient, headers: dict[str, str] = USER_HEADERS, **fields: object) -> dict:
    payload = {"title": "프로젝트 발표 준비", **fields}
    response = client.post("/tasks", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]


def test_create_task_returns_201(client: TestClient) -> None:
    """Test that a parsed task can be stored as-is."""
    response = client.post(
        "/tasks",
        json={
            "title": "프로젝트 발표 준비",
            "description": "발표 자료를 준비합니다",
            "due_at": "2024-06-11T15:00:00+09:00",
            "priority": "High",
            "category": "Work",
        },
        headers=USER_HEADERS,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["data"]["id"]
    assert data["data"]["owner_id"] == "user-1"
    assert data["data"]["priority"] == "High"
    assert data["data"]["completed"] is False


def test_tasks_require_identity(client: TestClient) -> None:
    """Test that every task endpoint needs the caller identity."""
    assert client.get("/tasks").status_code == 401
    assert client.post("/tasks", json={"title": "x"}).status_code == 401
    assert client.get("/tasks", headers={"X-User-Id": "  "}).status_code == 401


def test_create_task_validates_fields(client: TestClient) -> None:
    """Test that out-of-range fields are rejected."""
    assert client.post("/tasks", json={"title": ""}, headers=USER_HEADERS).status_code == 422
    assert client.post("/tasks", json={"title": "x" * 101}, headers=USER_HEADERS).status_code == 422
    assert client.post(
        "/tasks", json={"title": "ok", "priority": "Urgent"}, headers=USER_HEADERS
    ).status_code == 422


def test_list_tasks_is_scoped_to_caller(client: TestClient) -> None:
    """Test that listings only contain the caller's tasks."""
    _create(client, title="Mine")
    _create(client, headers=OTHER_HEADERS, title="Theirs")

    response = client.get("/tasks", headers=USER_HEADERS)

    assert response.status_code == 200
    assert [task["title"] for task in response.json()["data"]] == ["Mine"]


def test_list_tasks_filters_and_sorts(client: TestClient) -> None:
    """Test that query parameters drive search, status and ordering."""
    _create(client, title="Low report", priority="Low")
    _create(client, title="High report", priority="High")
    _create(client, title="Done chore", priority="Medium", completed=True)

    searched = client.get("/tasks", params={"search": "REPORT"}, headers=USER_HEADERS).json()["data"]
    completed = client.get("/tasks", params={"status": "completed"}, headers=USER_HEADERS).json()["data"]
    by_priority = client.get("/tasks", params={"sort_by": "priority"}, headers=USER_HEADERS).json()["data"]

    assert {task["title"] for task in searched} == {"Low report", "High report"}
    assert [task["title"] for task in completed] == ["Done chore"]
    assert [task["title"] for task in by_priority] == ["High report", "Done chore", "Low report"]


def test_list_tasks_rejects_unknown_filter(client: TestClient) -> None:
    """Test that an unknown status is a validation error."""
    response = client.get("/tasks", params={"status": "archived"}, headers=USER_HEADERS)
    assert response.status_code == 422


def test_get_and_update_task(client: TestClient) -> None:
    """Test partial updates keep untouched fields."""
    task = _create(client, description="원래 설명")

    response = client.patch(f"/tasks/{task['id']}", json={"title": "새 제목"}, headers=USER_HEADERS)

    assert response.status_code == 200
    assert response.json()["data"]["title"] == "새 제목"
    assert response.json()["data"]["description"] == "원래 설명"

    fetched = client.get(f"/tasks/{task['id']}", headers=USER_HEADERS).json()["data"]
    assert fetched["title"] == "새 제목"


def test_toggle_task(client: TestClient) -> None:
    """Test that toggle sets the completion state."""
    task = _create(client)

    response = client.post(f"/tasks/{task['id']}/toggle", json={"completed": True}, headers=USER_HEADERS)

    assert response.status_code == 200
    assert response.json()["data"]["completed"] is True


def test_delete_task(client: TestClient) -> None:
    """Test that a deleted task is gone."""
    task = _create(client)

    response = client.delete(f"/tasks/{task['id']}", headers=USER_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(f"/tasks/{task['id']}", headers=USER_HEADERS).status_code == 404


def test_other_owner_gets_404(client: TestClient) -> None:
    """Test that another user's task cannot be read or changed."""
    task = _create(client)

    assert client.get(f"/tasks/{task['id']}", headers=OTHER_HEADERS).status_code == 404
    assert client.patch(f"/tasks/{task['id']}", json={"title": "x"}, headers=OTHER_HEADERS).status_code == 404

    response = client.delete(f"/tasks/{task['id']}", headers=OTHER_HEADERS)
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_due_date_key_is_accepted(client: TestClient) -> None:
    """Test that due_date sets the due timestamp on create and update."""
    task = _create(client, due_date="2024-06-11T15:00:00+09:00")
    assert task["due_at"] is not None

    response = client.patch(
        f"/tasks/{task['id']}", json={"due_date": "2024-06-12T09:00:00+09:00"}, headers=USER_HEADERS
    )

    assert response.status_code == 200
    assert response.json()["data"]["due_at"].startswith("2024-06-12T09:00:00")
