"""Models for period analysis."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .task import Priority

URGENT_TASKS_LIMIT = 5


class AnalysisPeriod(str, Enum):
    """Analysis window selector."""

    TODAY = "today"
    WEEK = "week"


class DateWindow(BaseModel):
    """Inclusive local-calendar window."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


class CompletionStat(BaseModel):
    """Total and completed counts for one slice of tasks."""

    total: int = 0
    completed: int = 0

    @property
    def rate(self) -> float | None:
        """Completion percentage, or None when the slice is empty."""
        if self.total == 0:
            return None
        return round(self.completed / self.total * 100, 1)


class PeriodStats(BaseModel):
    """Aggregated statistics over the tasks of one window."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    completion_rate: float = 0.0
    by_priority: dict[Priority, CompletionStat] = Field(
        default_factory=lambda: {p: CompletionStat() for p in Priority}
    )
    by_category: dict[str, CompletionStat] = Field(default_factory=dict)
    overdue: int = 0
    due_today: int = 0
    morning: int = 0
    afternoon: int = 0
    evening: int = 0


class AnalysisResult(BaseModel):
    """Narrative analysis returned to the caller."""

    model_config = ConfigDict(populate_by_name=True)

    summary: str
    urgent_tasks: list[str] = Field(default_factory=list, alias="urgentTasks", max_length=URGENT_TASKS_LIMIT)
    insights: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class AnalyzeTasksRequest(BaseModel):
    """Request to analyze the caller's tasks."""

    period: AnalysisPeriod


class AnalyzeTasksResponse(BaseModel):
    """Envelope for an analysis result."""

    success: bool = True
    data: AnalysisResult
