from .task import Task
from .settings import DestinedSettings

__all__ = [
    "Task",
    "DestinedSettings",
]
