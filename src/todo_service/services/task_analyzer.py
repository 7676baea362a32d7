"""AI-generated analysis of a user's tasks over a period."""

import logging
from datetime import datetime

from ..errors import TaskStoreError, TodoServiceError
from ..models.analysis import AnalysisPeriod, AnalysisResult
from .analysis_prompt import build_analysis_prompt
from .analysis_resolver import build_empty_analysis, resolve_analysis_response
from .generation import GenerationClient
from .period_aggregator import summarize_period
from .task_parser import current_time
from .task_store import TaskStore

logger = logging.getLogger(__name__)


async def analyze_tasks(
    owner_id: str,
    period: AnalysisPeriod,
    store: TaskStore,
    client: GenerationClient,
    now: datetime | None = None,
) -> AnalysisResult:
    """
    Summarize the owner's tasks for a period.

    Tasks are read once at the start. When the owner has no tasks, or none
    fall in the period, a canned result is returned without calling the
    model. Otherwise the model's narrative is parsed, with a templated
    fallback when the response is not usable.

    Args:
        owner_id: Identity of the requesting user
        period: today or week
        store: Task record store
        client: Generation service
        now: Reference instant; defaults to the current time in the service timezone

    Returns:
        AnalysisResult

    Raises:
        TaskStoreError: If the tasks cannot be read
        GenerationError: If the generation call fails
    """
    now = now or current_time()

    try:
        tasks = store.list_tasks(owner_id, now=now)
    except TodoServiceError:
        raise
    except Exception as e:
        logger.exception("Failed to load tasks for analysis")
        raise TaskStoreError("Failed to load task data.") from e

    if not tasks:
        logger.info(f"No tasks for owner {owner_id}, returning empty analysis")
        return build_empty_analysis(period, has_any_tasks=False)

    window, in_period, stats = summarize_period(period, tasks, now)

    if not in_period:
        logger.info(f"No tasks in period {period.value} for owner {owner_id}")
        return build_empty_analysis(period, has_any_tasks=True)

    logger.info(
        f"Analyzing {stats.total} tasks ({period.value}): completed={stats.completed}, "
        f"rate={stats.completion_rate}%, overdue={stats.overdue}"
    )

    prompt = build_analysis_prompt(period, window, now, stats, in_period)
    text = await client.narrate(prompt)

    return resolve_analysis_response(text, stats, in_period, period)
