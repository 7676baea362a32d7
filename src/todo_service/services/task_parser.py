"""AI-powered natural-language task parsing."""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from ..config import settings
from ..models.extraction import ParsedTask
from .date_anchors import resolve_date_anchors
from .extraction_prompt import EXTRACTION_SCHEMA, build_extraction_prompt
from .generation import GenerationClient
from .input_normalizer import normalize_input, validate_input
from .post_processor import post_process_extraction

logger = logging.getLogger(__name__)


def current_time() -> datetime:
    """Reference instant in the service timezone."""
    return datetime.now(ZoneInfo(settings.timezone))


async def parse_task(text: str, client: GenerationClient, now: datetime | None = None) -> ParsedTask:
    """
    Extract a structured task from natural language.

    Args:
        text: Raw input like "내일 오후 3시까지 프로젝트 발표 준비하기"
        client: Generation service used for the extraction call
        now: Reference instant; defaults to the current time in the service timezone

    Returns:
        ParsedTask ready to be passed on to task creation

    Raises:
        InputValidationError: If the input is empty, too short, too long or has no text
        ExtractionSchemaViolation: If the model did not return a conforming object
        InvalidExtractedDateError: If the extracted date cannot be parsed
        GenerationError: If the generation call fails
    """
    now = now or current_time()

    processed = normalize_input(text)
    validate_input(processed)

    anchors = resolve_date_anchors(now)
    prompt = build_extraction_prompt(processed, anchors, now)

    logger.debug(f"Extracting task from {processed!r} (today={anchors.today})")
    raw = await client.extract(prompt, EXTRACTION_SCHEMA)
    logger.debug(f"Raw extraction: {raw}")

    parsed = post_process_extraction(raw, now)

    logger.info(
        f"Parsed task: title='{parsed.title}', due={parsed.due_date.isoformat()}, "
        f"priority={parsed.priority.value}, category={parsed.category.value}"
    )
    return parsed
