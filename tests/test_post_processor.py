"""Tests for extraction post-processing."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from src.todo_service.errors import ExtractionSchemaViolation, InvalidExtractedDateError
from src.todo_service.models.task import Category, Priority
from src.todo_service.services.post_processor import (
    TITLE_PLACEHOLDER,
    clamp_description,
    clamp_title,
    correct_extraction,
    post_process_extraction,
)

SEOUL = ZoneInfo("Asia/Seoul")
TODAY = date(2024, 6, 10)
NOW = datetime(2024, 6, 10, 10, 30, tzinfo=SEOUL)


def _raw(**overrides: object) -> dict[str, object]:
    raw: dict[str, object] = {
        "title": "보고서 제출",
        "description": "보고서를 준비하고 제출합니다",
        "due_date": "2024-06-10",
        "due_time": "09:00",
        "priority": "High",
        "category": "Work",
    }
    raw.update(overrides)
    return raw


def test_valid_extraction_is_unchanged() -> None:
    corrected = correct_extraction(_raw(), TODAY)

    assert corrected.due_date == "2024-06-10"
    assert corrected.due_time == "09:00"
    assert corrected.title == "보고서 제출"
    assert corrected.priority == "High"
    assert corrected.category == "Work"


def test_yesterday_is_corrected_to_today_keeping_time() -> None:
    corrected = correct_extraction(_raw(due_date="2024-06-09", due_time="15:30"), TODAY)

    assert corrected.due_date == "2024-06-10"
    assert corrected.due_time == "15:30"


def test_future_date_is_kept() -> None:
    corrected = correct_extraction(_raw(due_date="2024-06-14"), TODAY)
    assert corrected.due_date == "2024-06-14"


@pytest.mark.parametrize("due_date", ["not a date", "2024-13-45", "", "tomorrow"])
def test_unparsable_date_fails(due_date: str) -> None:
    with pytest.raises(InvalidExtractedDateError):
        correct_extraction(_raw(due_date=due_date), TODAY)


@pytest.mark.parametrize("due_time", ["25:00", "9:00", "", "12:60", "noon", "09:00:00"])
def test_invalid_time_falls_back_to_nine(due_time: str) -> None:
    corrected = correct_extraction(_raw(due_time=due_time), TODAY)
    assert corrected.due_time == "09:00"


@pytest.mark.parametrize("due_time", ["00:00", "23:59", "15:00"])
def test_valid_time_is_kept(due_time: str) -> None:
    assert correct_extraction(_raw(due_time=due_time), TODAY).due_time == due_time


def test_short_title_becomes_placeholder() -> None:
    assert clamp_title("a") == TITLE_PLACEHOLDER
    assert clamp_title("   ") == TITLE_PLACEHOLDER
    assert clamp_title(None) == TITLE_PLACEHOLDER


def test_long_title_is_truncated_to_limit() -> None:
    title = clamp_title("가" * 150)

    assert len(title) == 100
    assert title.endswith("...")
    assert title.startswith("가" * 97)


def test_title_is_trimmed() -> None:
    assert clamp_title("  회의 준비  ") == "회의 준비"


def test_description_clamp() -> None:
    assert clamp_description(None) == ""
    assert clamp_description("  설명  ") == "설명"

    long_description = clamp_description("x" * 600)
    assert len(long_description) == 500
    assert long_description.endswith("...")


@pytest.mark.parametrize("priority", [None, "Urgent", "높음"])
def test_unknown_priority_defaults_to_medium(priority: str | None) -> None:
    assert correct_extraction(_raw(priority=priority), TODAY).priority == "Medium"


@pytest.mark.parametrize("category", [None, "Errands", "업무"])
def test_unknown_category_defaults_to_personal(category: str | None) -> None:
    assert correct_extraction(_raw(category=category), TODAY).category == "Personal"


def test_missing_required_field_is_schema_violation() -> None:
    raw = _raw()
    del raw["due_time"]

    with pytest.raises(ExtractionSchemaViolation):
        correct_extraction(raw, TODAY)


def test_post_process_combines_date_and_time() -> None:
    parsed = post_process_extraction(_raw(due_date="2024-06-11", due_time="15:00"), NOW)

    assert parsed.due_date == datetime(2024, 6, 11, 15, 0, tzinfo=SEOUL)
    assert parsed.due_date.isoformat() == "2024-06-11T15:00:00+09:00"
    assert parsed.priority == Priority.HIGH
    assert parsed.category == Category.WORK
    assert parsed.description == "보고서를 준비하고 제출합니다"


def test_post_process_missing_description_is_empty() -> None:
    parsed = post_process_extraction(_raw(description=None), NOW)
    assert parsed.description == ""
