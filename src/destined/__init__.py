"""
destined: a personal todo-file parser.

Main API:
    read_config_file(path, required_keys, available_keys)  → Dict[str, str]
    read_todo_file(path)  → List[Task]
    parse_task_line(line)  → Task
"""

from .models import Task
from .parsers import (
    FileParsingError,
    ParseFailure,
    ParsingError,
    StringParsingError,
    parse_config_lines,
    parse_task_line,
    parse_todo_lines,
    read_config_file,
    read_todo_file,
)

__version__ = "0.1.0"

__all__ = [
    "Task",
    "ParsingError",
    "FileParsingError",
    "StringParsingError",
    "ParseFailure",
    "read_config_file",
    "parse_config_lines",
    "read_todo_file",
    "parse_todo_lines",
    "parse_task_line",
]
