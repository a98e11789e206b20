"""
Human-readable rendering of parsed tasks.

Tasks render as the body followed by their metadata tags, e.g.:
    write report [goal: Work] [for: 1h30m] [repeat: d]
"""

from datetime import datetime, timedelta
from typing import Dict, Iterable, List

from destined.models.task import Task

DATE_TIME_DISPLAY = "%d %b %Y %H:%M %Z"


def format_date_time(value: datetime) -> str:
    return value.strftime(DATE_TIME_DISPLAY).strip()


def format_duration(value: timedelta) -> str:
    """Format a duration compactly ("2h", "1h30m", "45s")."""
    total = int(value.total_seconds())
    if not total:
        return "0m"

    hours, remainder = divmod(total, 3600)
    mins, secs = divmod(remainder, 60)

    parts = []
    if hours:
        parts.append(f"{hours}h")
    if mins:
        parts.append(f"{mins}m")
    if secs:
        parts.append(f"{secs}s")
    return "".join(parts)


def task_tags(task: Task) -> Dict[str, str]:
    """Collect the metadata a task carries, in display order."""
    tags: Dict[str, str] = {}
    if task.goal:
        tags["goal"] = task.goal
    if task.timestamp:
        tags["at"] = format_date_time(task.timestamp)
    if task.due:
        tags["due"] = format_date_time(task.due)
    if task.duration is not None:
        tags["for"] = format_duration(task.duration)
    if task.repeat:
        tags["repeat"] = task.repeat
    if task.tracking:
        tags["tracking"] = "yes"
    return tags


def format_task(task: Task) -> str:
    tag_str = " ".join(f"[{name}: {value}]" for name, value in task_tags(task).items())
    if tag_str:
        return f"{task.body} {tag_str}"
    return task.body


def format_tasks(tasks: Iterable[Task]) -> List[str]:
    return [f"- {format_task(task)}" for task in tasks]
