"""Pydantic models for request/response schemas."""

from .analysis import (
    AnalysisPeriod,
    AnalysisResult,
    AnalyzeTasksRequest,
    AnalyzeTasksResponse,
    CompletionStat,
    DateWindow,
    PeriodStats,
)
from .extraction import ExtractionResult, ParsedTask, ParseTaskRequest, ParseTaskResponse
from .task import (
    Category,
    Priority,
    SortOrder,
    Task,
    TaskCreate,
    TaskFilters,
    TaskListResponse,
    TaskResponse,
    TaskSortField,
    TaskStatus,
    TaskToggleRequest,
    TaskUpdate,
)

__all__ = [
    "AnalysisPeriod",
    "AnalysisResult",
    "AnalyzeTasksRequest",
    "AnalyzeTasksResponse",
    "Category",
    "CompletionStat",
    "DateWindow",
    "ExtractionResult",
    "ParseTaskRequest",
    "ParseTaskResponse",
    "ParsedTask",
    "PeriodStats",
    "Priority",
    "SortOrder",
    "Task",
    "TaskCreate",
    "TaskFilters",
    "TaskListResponse",
    "TaskResponse",
    "TaskSortField",
    "TaskStatus",
    "TaskToggleRequest",
    "TaskUpdate",
]
