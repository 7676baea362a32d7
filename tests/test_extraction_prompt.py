"""Tests for the extraction prompt and keyword rules."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from src.todo_service.models.extraction import EXTRACTION_TOOL_DESCRIPTION, ExtractionResult
from src.todo_service.models.task import Category, Priority
from src.todo_service.services.date_anchors import resolve_date_anchors
from src.todo_service.services.extraction_prompt import EXTRACTION_SCHEMA, build_extraction_prompt
from src.todo_service.services.keywords import CATEGORY_RULES, PRIORITY_RULES, classify_category, classify_priority

NOW = datetime(2024, 6, 10, 10, 30, tzinfo=ZoneInfo("Asia/Seoul"))


@pytest.fixture
def prompt() -> str:
    return build_extraction_prompt("급하게 보고서 제출하기", resolve_date_anchors(NOW), NOW)


def test_prompt_states_today_and_input(prompt: str) -> None:
    assert '"급하게 보고서 제출하기"' in prompt
    assert "**Today: 2024-06-10" in prompt
    assert "Never produce a date earlier than today (2024-06-10)" in prompt
    assert "No date expression -> 2024-06-10" in prompt


def test_prompt_maps_relative_dates_to_anchors(prompt: str) -> None:
    assert '"내일" / "tomorrow" -> 2024-06-11' in prompt
    assert '"모레" / "the day after tomorrow" -> 2024-06-12' in prompt
    assert '"이번 주 금요일" / "이번주 금요일" / "this Friday" -> 2024-06-14' in prompt
    assert '"다음 주 월요일" / "다음주 월요일" / "next Monday" -> 2024-06-17' in prompt


def test_prompt_lists_time_defaults(prompt: str) -> None:
    for expected in ('"아침" / "morning" -> 09:00', '"점심" / "lunch" -> 12:00', '"오후" / "afternoon" -> 14:00',
                     '"저녁" / "evening" -> 18:00', '"밤" / "night" -> 21:00'):
        assert expected in prompt
    assert "No time expression at all -> 09:00" in prompt


def test_prompt_renders_keyword_tables(prompt: str) -> None:
    assert PRIORITY_RULES.render() in prompt
    assert CATEGORY_RULES.render() in prompt
    assert '"급하게"' in prompt
    assert '"보고서"' in prompt


def test_prompt_includes_examples_with_resolved_dates(prompt: str) -> None:
    assert '"due_date": "2024-06-11"' in prompt
    assert '"due_time": "15:00"' in prompt
    assert "no date expression -> today (2024-06-10)" in prompt


def test_schema_requires_every_field_but_description() -> None:
    assert EXTRACTION_SCHEMA["required"] == ["title", "due_date", "due_time", "priority", "category"]
    assert set(EXTRACTION_SCHEMA["properties"]) == {
        "title", "description", "due_date", "due_time", "priority", "category",
    }


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("급하게 보고서 제출하기", Priority.HIGH),
        ("내일 오후 3시까지 프로젝트 발표 준비하기", Priority.MEDIUM),
        ("시간 있을 때 천천히 책 읽기", Priority.LOW),
        ("Urgent: send the invoice", Priority.HIGH),
    ],
)
def test_classify_priority(text: str, expected: Priority) -> None:
    assert classify_priority(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("급하게 보고서 제출하기", Category.WORK),
        ("내일 오후 3시까지 프로젝트 발표 준비하기", Category.WORK),
        ("친구랑 저녁 약속", Category.PERSONAL),
        ("다음 주 월요일 아침에 운동하기", Category.HEALTH),
        ("자격증 시험 공부", Category.STUDY),
        ("방 청소", Category.PERSONAL),
    ],
)
def test_classify_category(text: str, expected: Category) -> None:
    assert classify_category(text) == expected


def test_schema_limits_priority_and_category_to_enums() -> None:
    properties = EXTRACTION_SCHEMA["properties"]

    assert properties["priority"]["type"] == "string"
    assert properties["priority"]["enum"] == ["High", "Medium", "Low"]
    assert properties["category"]["enum"] == ["Work", "Personal", "Study", "Health"]
    assert "anyOf" not in properties["priority"]
    assert "anyOf" not in properties["category"]


def test_schema_description_is_written_for_the_model() -> None:
    assert EXTRACTION_SCHEMA["description"] == EXTRACTION_TOOL_DESCRIPTION
    assert "post-processing" not in EXTRACTION_SCHEMA["description"]


def test_lenient_validation_of_model_output() -> None:
    """The strict schema is only the request contract; missing enums are defaulted later."""
    result = ExtractionResult.model_validate({"title": "회의", "due_date": "2024-06-10", "due_time": "09:00"})

    assert result.priority is None
    assert result.category is None
