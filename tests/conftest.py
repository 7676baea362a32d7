"""Shared pytest fixtures."""

from collections.abc import Callable, Iterator
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from src.todo_service.main import app
from src.todo_service.models.task import Category, Priority, Task
from src.todo_service.services.generation import get_generation_client
from src.todo_service.services.task_store import InMemoryTaskStore, get_task_store

SEOUL = ZoneInfo("Asia/Seoul")

# Monday
FIXED_NOW = datetime(2024, 6, 10, 10, 30, tzinfo=SEOUL)


class FakeGenerationClient:
    """Generation client returning canned responses."""

    def __init__(self) -> None:
        self.extract_result: dict[str, Any] = {}
        self.narrate_result: str = ""
        self.error: Exception | None = None
        self.extract_calls: list[str] = []
        self.narrate_calls: list[str] = []

    async def extract(self, prompt: str, schema: dict[str, Any]) -> dict[str, Any]:
        self.extract_calls.append(prompt)
        if self.error:
            raise self.error
        return dict(self.extract_result)

    async def narrate(self, prompt: str) -> str:
        self.narrate_calls.append(prompt)
        if self.error:
            raise self.error
        return self.narrate_result


@pytest.fixture
def fake_generation() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def task_store() -> InMemoryTaskStore:
    return InMemoryTaskStore("Asia/Seoul")


@pytest.fixture
def fixed_now(monkeypatch: pytest.MonkeyPatch) -> datetime:
    """Pin the service clock to Monday 2024-06-10 10:30 in Seoul."""
    monkeypatch.setattr("src.todo_service.services.task_parser.current_time", lambda: FIXED_NOW)
    monkeypatch.setattr("src.todo_service.services.task_analyzer.current_time", lambda: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture
def client(fake_generation: FakeGenerationClient, task_store: InMemoryTaskStore) -> Iterator[TestClient]:
    app.dependency_overrides[get_generation_client] = lambda: fake_generation
    app.dependency_overrides[get_task_store] = lambda: task_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for Task records with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(
        title: str = "Task",
        due_at: datetime | None = None,
        priority: Priority = Priority.MEDIUM,
        category: Category = Category.WORK,
        completed: bool = False,
        owner_id: str = "user-1",
    ) -> Task:
        return Task(
            id=f"task-{next(counter)}",
            owner_id=owner_id,
            title=title,
            due_at=due_at,
            priority=priority,
            category=category,
            completed=completed,
            created_at=datetime(2024, 6, 1, 9, 0, tzinfo=SEOUL),
        )

    return _make
