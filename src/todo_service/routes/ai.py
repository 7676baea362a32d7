"""AI task parsing and analysis endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from ..dependencies import OWNER_HEADER, require_owner
from ..errors import (
    GenerationConfigError,
    GenerationQuotaError,
    InvalidRequestError,
    TaskStoreError,
    TodoServiceError,
)
from ..models.analysis import AnalysisPeriod, AnalyzeTasksResponse
from ..models.extraction import ParseTaskResponse
from ..services.generation import GenerationClient, get_generation_client
from ..services.task_analyzer import analyze_tasks
from ..services.task_parser import parse_task
from ..services.task_store import TaskStore, get_task_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])

# Failures the analysis endpoint reports as themselves; anything else is a generic 500
ANALYSIS_REPORTED_ERRORS = (
    InvalidRequestError,
    GenerationConfigError,
    GenerationQuotaError,
    TaskStoreError,
)


async def _read_json_object(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as e:
        raise InvalidRequestError("Invalid request format. Please send the data as JSON.") from e

    if not isinstance(body, dict):
        raise InvalidRequestError("Invalid request format. Please send the data as a JSON object.")
    return body


@router.post("/parse-task", response_model=ParseTaskResponse)
async def parse_task_endpoint(
    request: Request,
    client: GenerationClient = Depends(get_generation_client),
) -> ParseTaskResponse:
    """
    Convert free-form task text into a structured task.

    Body: ``{"input": "내일 오후 3시까지 프로젝트 발표 준비하기"}``

    The result is not stored; pass it on to ``POST /tasks`` to create the task.
    Relative dates are resolved against today in the service timezone and a
    due date in the past is moved to today.
    """
    body = await _read_json_object(request)

    text = body.get("input")
    if not isinstance(text, str):
        raise InvalidRequestError("Task text must be a string.")

    try:
        parsed = await parse_task(text, client)
    except TodoServiceError:
        raise
    except Exception as e:
        logger.exception("Unexpected error while parsing task")
        raise TodoServiceError(
            "An unexpected error occurred while creating the task with AI. Please try again."
        ) from e

    return ParseTaskResponse(data=parsed)


@router.post("/analyze-tasks", response_model=AnalyzeTasksResponse)
async def analyze_tasks_endpoint(
    request: Request,
    client: GenerationClient = Depends(get_generation_client),
    store: TaskStore = Depends(get_task_store),
) -> AnalyzeTasksResponse:
    """
    Summarize the caller's tasks for today or this week.

    Body: ``{"period": "today" | "week"}``

    Returns a summary, up to five urgent tasks, insights and recommendations.
    Having no tasks, or none in the period, is not an error.
    """
    body = await _read_json_object(request)

    try:
        period = AnalysisPeriod(body.get("period"))
    except ValueError as e:
        raise InvalidRequestError("Please choose an analysis period (today or week).") from e

    owner_id = require_owner(request.headers.get(OWNER_HEADER))

    try:
        result = await analyze_tasks(owner_id, period, store, client)
    except ANALYSIS_REPORTED_ERRORS:
        raise
    except Exception as e:
        logger.exception("Error analyzing tasks")
        raise TodoServiceError("An error occurred during AI analysis. Please try again.") from e

    return AnalyzeTasksResponse(data=result)
