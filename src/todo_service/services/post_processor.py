"""Validation and repair of model-extracted tasks."""

import logging
import re
from datetime import date, datetime, time
from typing import Any

from pydantic import ValidationError

from ..errors import ExtractionSchemaViolation, InvalidExtractedDateError
from ..models.extraction import ExtractionResult, ParsedTask
from ..models.task import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, Category, Priority
from .date_anchors import DATE_FORMAT, format_date
from .extraction_prompt import DEFAULT_DUE_TIME

logger = logging.getLogger(__name__)

TITLE_MIN_LENGTH = 2
TITLE_PLACEHOLDER = "New task"
ELLIPSIS = "..."

TIME_PATTERN = re.compile(r"([01][0-9]|2[0-3]):([0-5][0-9])")

DEFAULT_PRIORITY = Priority.MEDIUM
DEFAULT_CATEGORY = Category.PERSONAL


def _parse_due_date(value: str) -> date:
    value = value.strip()
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError as e:
        logger.error(f"Invalid extracted due date: {value!r}")
        raise InvalidExtractedDateError(
            "The AI produced an invalid date. Please try again."
        ) from e


def _clamp(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return text[: max_length - len(ELLIPSIS)] + ELLIPSIS
    return text


def clamp_title(title: str | None) -> str:
    """Trim the title, substitute a placeholder when too short and truncate when too long."""
    processed = (title or "").strip()
    if len(processed) < TITLE_MIN_LENGTH:
        return TITLE_PLACEHOLDER
    return _clamp(processed, TITLE_MAX_LENGTH)


def clamp_description(description: str | None) -> str:
    """Trim the description, treat missing as empty and truncate when too long."""
    if not description:
        return ""
    return _clamp(description.strip(), DESCRIPTION_MAX_LENGTH)


def _resolve_priority(value: str | None) -> Priority:
    try:
        return Priority(value)
    except ValueError:
        logger.warning(f"Unrecognized priority {value!r}, using {DEFAULT_PRIORITY.value}")
        return DEFAULT_PRIORITY


def _resolve_category(value: str | None) -> Category:
    try:
        return Category(value)
    except ValueError:
        logger.warning(f"Unrecognized category {value!r}, using {DEFAULT_CATEGORY.value}")
        return DEFAULT_CATEGORY


def _validate_raw(raw: ExtractionResult | dict[str, Any]) -> ExtractionResult:
    if isinstance(raw, ExtractionResult):
        return raw.model_copy()
    try:
        return ExtractionResult.model_validate(raw)
    except ValidationError as e:
        logger.error(f"Extraction output does not match the schema: {e}")
        raise ExtractionSchemaViolation(
            "The AI response could not be processed. Please rephrase the task and try again."
        ) from e


def correct_extraction(raw: ExtractionResult | dict[str, Any], today: date) -> ExtractionResult:
    """Apply date, time, title, description and enum corrections.

    Args:
        raw: Model output, as returned by the generation service
        today: Local calendar date of the reference instant used for the prompt

    Returns:
        A corrected copy of the extraction

    Raises:
        ExtractionSchemaViolation: If required fields are missing
        InvalidExtractedDateError: If due_date cannot be parsed
    """
    result = _validate_raw(raw)

    due_date = _parse_due_date(result.due_date)
    if due_date < today:
        logger.warning(f"Past due date {result.due_date} corrected to today {format_date(today)}")
        due_date = today
    result.due_date = format_date(due_date)

    if not TIME_PATTERN.fullmatch(result.due_time or ""):
        logger.warning(f"Invalid due time {result.due_time!r}, using default {DEFAULT_DUE_TIME}")
        result.due_time = DEFAULT_DUE_TIME

    result.title = clamp_title(result.title)
    result.description = clamp_description(result.description)
    result.priority = _resolve_priority(result.priority).value
    result.category = _resolve_category(result.category).value

    return result


def combine_due_at(due_date: str, due_time: str, now: datetime) -> datetime:
    """Merge a corrected date and time into one timestamp in the timezone of ``now``."""
    day = datetime.strptime(due_date, DATE_FORMAT).date()
    hours, minutes = (int(part) for part in due_time.split(":"))
    return datetime.combine(day, time(hours, minutes), tzinfo=now.tzinfo)


def post_process_extraction(raw: ExtractionResult | dict[str, Any], now: datetime) -> ParsedTask:
    """Turn raw model output into a valid task payload.

    Args:
        raw: Model output
        now: Reference instant used to build the extraction prompt

    Returns:
        ParsedTask with due_date combining the corrected date and time
    """
    corrected = correct_extraction(raw, now.date())

    return ParsedTask(
        title=corrected.title,
        description=corrected.description or "",
        due_date=combine_due_at(corrected.due_date, corrected.due_time, now),
        priority=Priority(corrected.priority),
        category=Category(corrected.category),
    )
