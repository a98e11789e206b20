from .config_parser import parse_config_lines, read_config_file
from .errors import FileParsingError, ParseFailure, ParsingError, StringParsingError
from .task_parser import (
    parse_repeat,
    parse_task_line,
    parse_todo_lines,
    parse_tracking,
    read_todo_file,
)

__all__ = [
    "ParsingError",
    "FileParsingError",
    "StringParsingError",
    "ParseFailure",
    "read_config_file",
    "parse_config_lines",
    "read_todo_file",
    "parse_todo_lines",
    "parse_task_line",
    "parse_repeat",
    "parse_tracking",
]
