"""Statistics over the tasks due within an analysis period."""

from collections.abc import Iterable
from datetime import datetime, time, timedelta, tzinfo

from ..models.analysis import AnalysisPeriod, CompletionStat, DateWindow, PeriodStats
from ..models.task import Priority, Task

# (start hour inclusive, end hour exclusive)
MORNING_HOURS = (6, 12)
AFTERNOON_HOURS = (12, 18)
EVENING_HOURS = (18, 24)


def to_local(moment: datetime, tz: tzinfo | None) -> datetime:
    """Express ``moment`` in ``tz``; naive values are taken to already be local."""
    if tz is None:
        return moment
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def resolve_period_window(period: AnalysisPeriod, now: datetime) -> DateWindow:
    """Resolve the local-calendar window for a period.

    Today runs from midnight to the last microsecond of the day. The week
    always starts on Monday and ends on Sunday, whatever the locale.
    """
    today = now.date()
    tz = now.tzinfo

    if period == AnalysisPeriod.TODAY:
        start_day = end_day = today
    else:
        start_day = today - timedelta(days=today.weekday())
        end_day = start_day + timedelta(days=6)

    return DateWindow(
        start=datetime.combine(start_day, time.min, tzinfo=tz),
        end=datetime.combine(end_day, time.max, tzinfo=tz),
    )


def filter_tasks_in_window(tasks: Iterable[Task], window: DateWindow) -> list[Task]:
    """Keep tasks whose due timestamp falls inside the window. Undated tasks are dropped."""
    tz = window.start.tzinfo
    return [task for task in tasks if task.due_at is not None and window.contains(to_local(task.due_at, tz))]


def completion_rate(completed: int, total: int) -> float:
    """Completion percentage rounded to one decimal place, 0 when there are no tasks."""
    if total == 0:
        return 0.0
    return round(completed / total * 100, 1)


def aggregate_period_stats(tasks: list[Task], now: datetime) -> PeriodStats:
    """Compute counts, rates and distributions over already filtered tasks.

    Args:
        tasks: Tasks inside the analysis window
        now: Reference instant; decides overdue and due-today

    Returns:
        PeriodStats for the tasks
    """
    stats = PeriodStats()
    today = now.date()

    for task in tasks:
        stats.total += 1
        if task.completed:
            stats.completed += 1

        priority_stat = stats.by_priority.setdefault(task.priority, CompletionStat())
        priority_stat.total += 1
        if task.completed:
            priority_stat.completed += 1

        category_stat = stats.by_category.setdefault(task.category.value, CompletionStat())
        category_stat.total += 1
        if task.completed:
            category_stat.completed += 1

        if task.due_at is None:
            continue

        due = to_local(task.due_at, now.tzinfo)
        if due < now and not task.completed:
            stats.overdue += 1
        if due.date() == today:
            stats.due_today += 1

        if MORNING_HOURS[0] <= due.hour < MORNING_HOURS[1]:
            stats.morning += 1
        elif AFTERNOON_HOURS[0] <= due.hour < AFTERNOON_HOURS[1]:
            stats.afternoon += 1
        elif EVENING_HOURS[0] <= due.hour < EVENING_HOURS[1]:
            stats.evening += 1

    stats.pending = stats.total - stats.completed
    stats.completion_rate = completion_rate(stats.completed, stats.total)
    return stats


def summarize_period(
    period: AnalysisPeriod,
    tasks: Iterable[Task],
    now: datetime,
) -> tuple[DateWindow, list[Task], PeriodStats]:
    """Resolve the window, filter the tasks into it and aggregate them."""
    window = resolve_period_window(period, now)
    in_window = filter_tasks_in_window(tasks, window)
    return window, in_window, aggregate_period_stats(in_window, now)


def high_priority_pending(tasks: Iterable[Task]) -> list[Task]:
    """Incomplete High-priority tasks in their original order."""
    return [task for task in tasks if not task.completed and task.priority == Priority.HIGH]
