"""Prompt construction for period analysis."""

import json
from datetime import datetime

from ..config import settings
from ..models.analysis import URGENT_TASKS_LIMIT, AnalysisPeriod, CompletionStat, DateWindow, PeriodStats
from ..models.task import Priority, Task
from .period_aggregator import AFTERNOON_HOURS, EVENING_HOURS, MORNING_HOURS

PERIOD_LABELS = {
    AnalysisPeriod.TODAY: "today",
    AnalysisPeriod.WEEK: "this week",
}

PERIOD_FOCUS = {
    AnalysisPeriod.TODAY: """**Today-focused analysis**
Concentrate on the rest of today:
- Priorities to focus on for the remaining hours of the day
- How far the day has progressed so far
- Tasks that can realistically be finished today
- Tasks better moved to tomorrow""",
    AnalysisPeriod.WEEK: """**Week-focused analysis**
Look at the whole week:
- Weekly productivity patterns (tendencies by weekday)
- How well this week's goals are being met
- What to prepare for next week
- How to improve the balance of work across the week""",
}


def _rate_suffix(stat: CompletionStat) -> str:
    rate = stat.rate
    return f" ({rate}%)" if rate is not None else ""


def _hours(bounds: tuple[int, int]) -> str:
    return f"{bounds[0]}-{bounds[1]}h"


def task_snapshot(task: Task) -> dict[str, object]:
    """Fields of a task shared with the model as supporting context."""
    return {
        "title": task.title,
        "description": task.description,
        "due_date": task.due_at.isoformat() if task.due_at else None,
        "priority": task.priority.value,
        "category": task.category.value,
        "completed": task.completed,
        "created_at": task.created_at.isoformat(),
    }


def build_analysis_prompt(
    period: AnalysisPeriod,
    window: DateWindow,
    now: datetime,
    stats: PeriodStats,
    tasks: list[Task],
) -> str:
    """Build the narrative analysis prompt.

    Args:
        period: Selected period
        window: Resolved window for the period
        now: Reference instant
        stats: Aggregated statistics of ``tasks``
        tasks: Tasks inside the window

    Returns:
        Prompt asking for a strict JSON analysis object
    """
    period_label = PERIOD_LABELS[period]

    priority_lines = "\n".join(
        f"- {priority.value}: {stat.completed}/{stat.total} completed{_rate_suffix(stat)}"
        for priority, stat in ((p, stats.by_priority.get(p, CompletionStat())) for p in Priority)
    )
    category_lines = "\n".join(
        f"- {category}: {stat.completed}/{stat.total} completed{_rate_suffix(stat)}"
        for category, stat in stats.by_category.items()
    ) or "- (none)"

    tasks_json = json.dumps([task_snapshot(t) for t in tasks], ensure_ascii=False, indent=2)

    return f"""You are a productivity coach and data analyst. Analyze the user's tasks in depth and give practical, positive feedback.

### Period and current status
**Period**: {period_label} ({window.start.strftime("%Y-%m-%d")} ~ {window.end.strftime("%Y-%m-%d")})
**Current time**: {now.strftime("%Y-%m-%d %H:%M")}

### Statistics

**Overall**
- Total tasks: {stats.total}
- Completed: {stats.completed}
- Pending: {stats.pending}
- Completion rate: {stats.completion_rate}%

**Completion by priority**
{priority_lines}

**Distribution by category**
{category_lines}

**Due dates**
- Due today: {stats.due_today}
- Overdue: {stats.overdue}

**Distribution by time of day**
- Morning ({_hours(MORNING_HOURS)}): {stats.morning}
- Afternoon ({_hours(AFTERNOON_HOURS)}): {stats.afternoon}
- Evening ({_hours(EVENING_HOURS)}): {stats.evening}

### Task details
{tasks_json}

### What to analyze

{PERIOD_FOCUS[period]}

#### 1. summary
- Frame the completion rate and progress positively.
- Mention what the user is doing well first.
- One concise sentence (e.g. "5 of 8 done! 62.5% is solid progress").

#### 2. urgentTasks
- Incomplete tasks with priority High.
- Incomplete tasks whose due time is close or already past.
- At most {URGENT_TASKS_LIMIT}, ordered by importance.
- Return an empty array when none apply.

#### 3. insights (3-6 entries)
Concrete, data-driven observations about:
- Completion rate: overall assessment, patterns by priority and by category.
- Time management: due-date adherence, overdue patterns, time-of-day concentration.
- Productivity patterns: task types that get done, what tends to stay pending, how work is spread across categories.
Use a friendly, encouraging tone; lead with the positives and frame improvements gently.

#### 4. recommendations (3-6 entries)
Concrete, actionable advice covering:
- Priority ordering: which urgent tasks to tackle first, time for important but not urgent work.
- Time blocks: placing work in high-focus hours, spreading load, rescheduling overdue tasks.
- Practical tips that can be applied {period_label}, starting from small wins, keeping time to rest.
- A motivating closing message that acknowledges the user's effort.

### Output format
Respond with only this JSON object:
{{
  "summary": "one positive, encouraging sentence",
  "urgentTasks": ["urgent task 1", "urgent task 2"],
  "insights": ["insight 1", "insight 2", "insight 3"],
  "recommendations": ["recommendation 1", "recommendation 2", "recommendation 3"]
}}

**Rules**:
1. Return pure JSON only, no markdown and no code fences.
2. Write every text value in natural {settings.response_language}.
3. Keep a positive, encouraging tone.
4. Be concrete and actionable.
5. Acknowledge the user's effort.
"""
