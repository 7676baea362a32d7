"""Parsing of narrative analysis responses, with deterministic fallbacks."""

import json
import logging
import re

from pydantic import ValidationError

from ..config import settings
from ..models.analysis import URGENT_TASKS_LIMIT, AnalysisPeriod, AnalysisResult, PeriodStats
from ..models.task import Task
from .period_aggregator import high_priority_pending

logger = logging.getLogger(__name__)

LEADING_FENCE = re.compile(r"^```[a-zA-Z]*\s*")
TRAILING_FENCE = re.compile(r"\s*```$")


# Canned texts per response language; other languages fall back to English.
ANALYSIS_TEXTS: dict[str, dict[str, object]] = {
    "Korean": {
        "periods": {AnalysisPeriod.TODAY: "오늘", AnalysisPeriod.WEEK: "이번 주"},
        "no_tasks": {
            "summary": "아직 등록된 할 일이 없습니다.",
            "insights": ["새로운 할 일을 추가해보세요!"],
            "recommendations": ["할 일을 추가하고 효율적으로 관리해보세요."],
        },
        "empty_period": {
            "summary": "{period}에 예정된 할 일이 없습니다.",
            "insights": ["{period}의 일정이 비어있습니다."],
            "recommendations": ["새로운 할 일을 계획해보세요."],
        },
        "fallback": {
            "summary": "{period} 총 {total}개의 할 일 중 {completed}개 완료 ({rate}%)",
            "insights": ["완료율은 {rate}%입니다.", "{pending}개의 할 일이 아직 남아있습니다."],
            "recommendations": [
                "우선순위가 높은 작업부터 처리해보세요.",
                "작은 할 일부터 하나씩 완료하며 성취감을 느껴보세요.",
            ],
        },
    },
    "English": {
        "periods": {AnalysisPeriod.TODAY: "today", AnalysisPeriod.WEEK: "this week"},
        "no_tasks": {
            "summary": "No tasks have been added yet.",
            "insights": ["Try adding a new task!"],
            "recommendations": ["Add a few tasks and start managing them efficiently."],
        },
        "empty_period": {
            "summary": "No tasks are scheduled for {period}.",
            "insights": ["Your schedule for {period} is open."],
            "recommendations": ["Plan a new task to make good use of the time."],
        },
        "fallback": {
            "summary": "{completed} of {total} tasks completed {period} ({rate}%)",
            "insights": ["Your completion rate is {rate}%.", "{pending} tasks are still pending."],
            "recommendations": [
                "Start with the high-priority tasks.",
                "Finish small tasks one at a time and enjoy the sense of progress.",
            ],
        },
    },
}


def _texts() -> dict[str, object]:
    return ANALYSIS_TEXTS.get(settings.response_language, ANALYSIS_TEXTS["English"])


def _render(template: dict[str, object], urgent: list[str], **values: object) -> AnalysisResult:
    return AnalysisResult(
        summary=str(template["summary"]).format(**values),
        urgent_tasks=urgent,
        insights=[line.format(**values) for line in template["insights"]],
        recommendations=[line.format(**values) for line in template["recommendations"]],
    )


def build_empty_analysis(period: AnalysisPeriod, has_any_tasks: bool) -> AnalysisResult:
    """Canned result when there is nothing to analyze. No model call is made for these."""
    texts = _texts()
    if not has_any_tasks:
        return _render(texts["no_tasks"], [])
    return _render(texts["empty_period"], [], period=texts["periods"][period])


def build_fallback_analysis(stats: PeriodStats, tasks: list[Task], period: AnalysisPeriod) -> AnalysisResult:
    """Template an analysis from the statistics alone, in the configured response language."""
    texts = _texts()
    urgent = [task.title for task in high_priority_pending(tasks)[:URGENT_TASKS_LIMIT]]

    return _render(
        texts["fallback"],
        urgent,
        period=texts["periods"][period],
        total=stats.total,
        completed=stats.completed,
        pending=stats.pending,
        rate=stats.completion_rate,
    )


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    cleaned = LEADING_FENCE.sub("", cleaned)
    cleaned = TRAILING_FENCE.sub("", cleaned)
    return cleaned.strip()


def resolve_analysis_response(
    text: str,
    stats: PeriodStats,
    tasks: list[Task],
    period: AnalysisPeriod,
) -> AnalysisResult:
    """Parse the model's analysis, falling back to a templated one.

    Never raises: a response that is not a JSON object of the expected shape
    is replaced by build_fallback_analysis.
    """
    try:
        payload = json.loads(strip_code_fences(text))
        if not isinstance(payload, dict):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")

        urgent = payload.get("urgentTasks")
        if isinstance(urgent, list):
            payload["urgentTasks"] = urgent[:URGENT_TASKS_LIMIT]

        return AnalysisResult.model_validate(payload)

    except (ValueError, ValidationError) as e:
        logger.warning(f"Failed to parse analysis response, using fallback: {e}")
        logger.debug(f"Raw analysis response: {text!r}")
        return build_fallback_analysis(stats, tasks, period)
