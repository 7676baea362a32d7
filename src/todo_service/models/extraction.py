"""Models for natural-language task extraction."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .task import Category, Priority

EXTRACTION_TOOL_DESCRIPTION = "One to-do item extracted from the user's natural-language input."


def _strict_tool_schema(schema: dict[str, Any]) -> None:
    """Demand every field but description, with priority and category limited to their enums."""
    schema["description"] = EXTRACTION_TOOL_DESCRIPTION
    properties = schema["properties"]
    for name, allowed in (("priority", Priority), ("category", Category)):
        properties[name] = {
            "title": properties[name].get("title", name.title()),
            "description": properties[name]["description"],
            "type": "string",
            "enum": [member.value for member in allowed],
        }
    schema["required"] = [name for name in properties if name != "description"]


class ExtractionResult(BaseModel):
    """Structured task as extracted by the model, before correction.

    The JSON schema of this model is the output contract handed to the
    generation service and is strict. Validation of the returned object is
    lenient: priority and category stay plain optional strings so an
    out-of-range value can be defaulted during post-processing instead of
    rejecting the whole object.
    """

    model_config = ConfigDict(json_schema_extra=_strict_tool_schema)

    title: str = Field(..., description="Concise task title (10-30 characters recommended)")
    description: str | None = Field(
        None,
        description="Task details adding the context and extra information from the input; avoid empty strings",
    )
    due_date: str = Field(..., description="Due date in YYYY-MM-DD format; today when no date is mentioned")
    due_time: str = Field(..., description="Due time in 24-hour HH:MM format; 09:00 when no time is mentioned")
    priority: str | None = Field(
        None,
        description="One of High, Medium, Low (urgency words -> High, leisure words -> Low, otherwise Medium)",
    )
    category: str | None = Field(
        None,
        description="One of Work, Personal, Study, Health, chosen from keywords and context",
    )


class ParseTaskRequest(BaseModel):
    """Request to parse natural language task input."""

    input: str = Field(..., description="Free-form task text like '내일 오후 3시까지 프로젝트 발표 준비하기'")


class ParsedTask(BaseModel):
    """Post-processed task payload ready for task creation."""

    title: str
    description: str = ""
    due_date: datetime = Field(..., description="Due timestamp (ISO-8601)")
    priority: Priority
    category: Category


class ParseTaskResponse(BaseModel):
    """Envelope for a parsed task."""

    success: bool = True
    data: ParsedTask
