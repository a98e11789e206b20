"""
Core task data model.

A Task is built field by field while the task-line parser scans one line,
then handed to the todo reader, which may attach the current goal.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional


@dataclass
class Task:
    """A single actionable item parsed from a todo-file line."""

    body: str = ""
    goal: Optional[str] = None
    timestamp: Optional[datetime] = None
    due: Optional[datetime] = None
    tracking: Optional[bool] = None
    duration: Optional[timedelta] = None
    repeat: Optional[str] = None
    line_number: int = 0

    def set_goal(self, value: str) -> bool:
        """Attach a goal heading. Empty headings are ignored; returns whether it was set."""
        if not value:
            return False
        self.goal = value
        return True

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view: datetimes as ISO 8601, duration in seconds."""
        return {
            "body": self.body,
            "goal": self.goal,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "due": self.due.isoformat() if self.due else None,
            "tracking": self.tracking,
            "duration": int(self.duration.total_seconds()) if self.duration is not None else None,
            "repeat": self.repeat,
            "line_number": self.line_number,
        }
