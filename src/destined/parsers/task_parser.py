"""
Parser for todo files.

Main API:
    read_todo_file(path)  → List[Task]
    parse_todo_lines(lines)  → List[Task]
    parse_task_line(line)  → Task

File grammar:
    # Goal heading        sets the goal for every following task line
    - task words _kw ...  a task; underscore words are keyword tokens
    anything else         ignored

Keyword tokens are classified by trial: each classifier is tried in a fixed
order and the first one that accepts the token assigns its field.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Iterable, List, Tuple, Union

from destined.models.task import Task
from destined.parsers.errors import FileParsingError, ParseFailure, StringParsingError
from destined.utils.dates import parse_date_time, parse_duration

log = logging.getLogger(__name__)

REPEAT_CODES = frozenset({"d", "w", "m", "y"})

_LEADING_ALNUM = re.compile(r"^[^\W_]+")


# ---------------------------------------------------------------------------
# Keyword classifiers
# ---------------------------------------------------------------------------

def parse_due(token: str):
    """Parse a ``_due<date-time>`` token. Tokens without the prefix are not due dates."""
    cleaned = token.strip()
    if not cleaned.lower().startswith("_due"):
        raise ParseFailure(token, "_due<date-time>", "missing '_due' prefix")
    return parse_date_time(cleaned[len("_due"):])


def parse_repeat(token: str) -> str:
    """Parse ``_rd``/``_rw``/``_rm``/``_ry`` (any case) into its lower-case code."""
    cleaned = token.strip().lower()
    if cleaned.startswith("_r"):
        cleaned = cleaned[len("_r"):]
    if cleaned not in REPEAT_CODES:
        raise ParseFailure(token, "_r<d|w|m|y>", "repeat body must be 'D', 'W', 'M' or 'Y'")
    return cleaned


def parse_tracking(token: str) -> bool:
    """A ``_t...`` token switches tracking on. There is no token for off."""
    if token.strip().lower().startswith("_t"):
        return True
    raise ParseFailure(token, "_t", "tracking token must start with '_t'")


# Order matters: due must come before timestamp so "_due..." is never read
# as a plain date-time.
CLASSIFIERS: Tuple[Tuple[str, Callable[[str], object]], ...] = (
    ("due", parse_due),
    ("timestamp", parse_date_time),
    ("repeat", parse_repeat),
    ("tracking", parse_tracking),
    ("duration", parse_duration),
)


def classify_keyword(token: str) -> Tuple[str, object]:
    """
    Return (field, value) for the first classifier that accepts the token.

    Raises:
        StringParsingError: if no classifier accepts it
    """
    for field_name, classifier in CLASSIFIERS:
        try:
            return field_name, classifier(token)
        except ParseFailure as e:
            log.debug("%s rejected %r: %s", field_name, token, e)
    raise StringParsingError(f"Error parsing keyword '{token}'")


# ---------------------------------------------------------------------------
# Line and file parsers
# ---------------------------------------------------------------------------

def parse_task_line(line: str, line_number: int = 0) -> Task:
    """
    Parse one task line into a Task with no goal.

    A leading run of alphanumeric characters is dropped, a lone ``-`` word is
    discarded, underscore words are keyword tokens and every other word
    belongs to the body.

    Raises:
        StringParsingError: on an unknown keyword or an empty body
    """
    task = Task(line_number=line_number)
    text = _LEADING_ALNUM.sub("", line.strip(), count=1)

    words: List[str] = []
    for word in text.split(" "):
        if not word:
            continue
        if word.startswith("_"):
            field_name, value = classify_keyword(word)
            setattr(task, field_name, value)
        elif word != "-":
            words.append(word)

    task.body = " ".join(words).strip()
    if not task.body:
        raise StringParsingError("Task body should not be empty")
    return task


def parse_todo_lines(lines: Iterable[str]) -> List[Task]:
    """
    Parse todo-file lines into tasks, attaching the current goal to each.

    Raises:
        FileParsingError: on the first task line that fails to parse, with
            its 1-based line number
    """
    tasks: List[Task] = []
    current_goal = ""

    for line_num, raw in enumerate(lines, start=1):
        line = raw.strip()
        if line.startswith("-"):
            try:
                task = parse_task_line(line, line_num)
            except StringParsingError as e:
                raise FileParsingError(
                    f"Cannot parse todo on line {line_num}: {e}", line=line_num
                ) from e
            task.set_goal(current_goal)
            tasks.append(task)
        elif line.startswith("#"):
            current_goal = line.lstrip("# ")

    return tasks


def read_todo_file(file_path: Union[str, Path]) -> List[Task]:
    """Read and parse a todo file."""
    path = Path(file_path)
    try:
        with path.open(encoding="utf-8-sig") as f:
            tasks = parse_todo_lines(f)
    except (OSError, UnicodeDecodeError) as e:
        raise FileParsingError("Could not read todo file") from e

    log.debug("Parsed %d tasks from %s", len(tasks), path)
    return tasks
