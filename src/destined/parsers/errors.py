"""
Error types raised while reading config and todo files.

ParsingError is the single family callers catch. File-level problems (an
unreadable file, a bad config line, a bad todo line) raise FileParsingError;
problems inside one task string raise StringParsingError.

ParseFailure is not part of that family: it is what a keyword classifier
raises when a token is not its kind, and the task-line parser consumes it.
"""

from typing import Optional


class ParsingError(Exception):
    """Base class for every error a read can surface."""

    kind = "input"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Error parsing {self.kind}: {self.message}"


class FileParsingError(ParsingError):
    """A file could not be read, or one of its lines broke the file grammar."""

    kind = "file"

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.line = line


class StringParsingError(ParsingError):
    """A task string had an unknown keyword or an empty body."""

    kind = "string"


class ParseFailure(ValueError):
    """A keyword token did not match the format a classifier tried."""

    def __init__(self, token: str, fmt: str, reason: str = ""):
        self.token = token
        self.fmt = fmt
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"'{token}' does not match {fmt}{detail}")
