"""
Tests for parsers/task_parser.py.

Covers:
- Keyword classifiers: due, repeat, tracking
- parse_task_line: body extraction, keyword classification order, failures
- parse_todo_lines / read_todo_file: goal propagation, line-numbered errors
- Round-trip scenario with goals, due dates and durations
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from destined.parsers.errors import FileParsingError, ParseFailure, StringParsingError
from destined.parsers.task_parser import (
    CLASSIFIERS,
    classify_keyword,
    parse_due,
    parse_repeat,
    parse_task_line,
    parse_todo_lines,
    parse_tracking,
    read_todo_file,
)


def _wall(value: datetime) -> datetime:
    return value.replace(tzinfo=None)


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "todo.txt"
    path.write_text(content, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Classifiers
# ---------------------------------------------------------------------------

class TestParseRepeat:
    @pytest.mark.parametrize("token", ["_rD", "_rd", "_RD", "_Rd"])
    def test_daily_any_case(self, token):
        assert parse_repeat(token) == "d"

    @pytest.mark.parametrize("code", ["d", "w", "m", "y"])
    def test_all_codes(self, code):
        assert parse_repeat(f"_r{code}") == code

    @pytest.mark.parametrize("token", ["_rx", "_r", "_rdd", "_t"])
    def test_rejects_other_codes(self, token):
        with pytest.raises(ParseFailure):
            parse_repeat(token)


class TestParseTracking:
    @pytest.mark.parametrize("token", ["_t", "_T", "_track", "_tracking"])
    def test_accepts(self, token):
        assert parse_tracking(token) is True

    @pytest.mark.parametrize("token", ["_rd", "_x", "t"])
    def test_rejects(self, token):
        with pytest.raises(ParseFailure):
            parse_tracking(token)


class TestParseDue:
    def test_due_date(self):
        assert _wall(parse_due("_due12jan2025")) == datetime(2025, 1, 12)

    def test_due_prefix_any_case(self):
        assert _wall(parse_due("_DUE12jan2025")) == datetime(2025, 1, 12)

    def test_due_date_and_time(self):
        assert _wall(parse_due("_due12jan2025_5:30pm")) == datetime(2025, 1, 12, 17, 30)

    def test_requires_prefix(self):
        with pytest.raises(ParseFailure):
            parse_due("_12jan2025")


class TestClassifyKeyword:
    def test_order(self):
        assert [name for name, _ in CLASSIFIERS] == [
            "due", "timestamp", "repeat", "tracking", "duration",
        ]

    def test_unknown_keyword(self):
        with pytest.raises(StringParsingError) as exc:
            classify_keyword("_bogus")
        assert "_bogus" in str(exc.value)

    def test_first_match_wins(self):
        # "_tam" is not a time, so it falls through to tracking.
        assert classify_keyword("_tam") == ("tracking", True)


# ---------------------------------------------------------------------------
# parse_task_line
# ---------------------------------------------------------------------------

class TestParseTaskLine:
    def test_plain_body(self):
        task = parse_task_line("- buy milk and eggs")
        assert task.body == "buy milk and eggs"
        assert task.goal is None
        assert task.due is None
        assert task.timestamp is None
        assert task.tracking is None
        assert task.duration is None
        assert task.repeat is None

    def test_extra_spaces_collapse(self):
        task = parse_task_line("-   buy   milk  ")
        assert task.body == "buy milk"

    def test_lone_dash_words_dropped(self):
        task = parse_task_line("- a - b")
        assert task.body == "a b"

    def test_due_sets_due_not_timestamp(self):
        task = parse_task_line("- pay rent _due12jan2025")
        assert _wall(task.due) == datetime(2025, 1, 12)
        assert task.timestamp is None

    def test_plain_date_sets_timestamp_not_due(self):
        task = parse_task_line("- pay rent _12jan2025")
        assert _wall(task.timestamp) == datetime(2025, 1, 12)
        assert task.due is None

    def test_all_keywords(self):
        task = parse_task_line("- task body words _due12jan2025 _for_2h _rd _t")
        assert task.body == "task body words"
        assert _wall(task.due) == datetime(2025, 1, 12)
        assert task.duration == timedelta(seconds=7200)
        assert task.repeat == "d"
        assert task.tracking is True

    def test_keywords_between_words(self):
        task = parse_task_line("- call _rw mum _for_10m back")
        assert task.body == "call mum back"
        assert task.repeat == "w"
        assert task.duration == timedelta(seconds=600)

    def test_last_keyword_of_a_kind_wins(self):
        task = parse_task_line("- stretch _rd _ry")
        assert task.repeat == "y"

    def test_date_time_timestamp(self):
        task = parse_task_line("- meeting _12jan2020_10:23pm")
        assert _wall(task.timestamp) == datetime(2020, 1, 12, 22, 23)

    def test_leading_alphanumeric_run_dropped(self):
        task = parse_task_line("x1 - read book")
        assert task.body == "read book"

    def test_leading_alphanumeric_strip_is_literal(self):
        # Only the first word's leading run goes; the rest of the word stays.
        task = parse_task_line("abc-def ghi")
        assert task.body == "-def ghi"

    def test_line_number_recorded(self):
        assert parse_task_line("- a", line_number=7).line_number == 7

    def test_unknown_keyword_fails(self):
        with pytest.raises(StringParsingError) as exc:
            parse_task_line("- water plants _rx")
        assert "_rx" in str(exc.value)
        assert str(exc.value).startswith("Error parsing string:")

    @pytest.mark.parametrize("line", ["-", "- ", "- _rd", "- _due12jan2025 _t", "- - -"])
    def test_empty_body_fails(self, line):
        with pytest.raises(StringParsingError, match="body should not be empty"):
            parse_task_line(line)


# ---------------------------------------------------------------------------
# parse_todo_lines / read_todo_file
# ---------------------------------------------------------------------------

class TestParseTodoLines:
    def test_tasks_before_goal_have_no_goal(self):
        tasks = parse_todo_lines(["- first", "# Goal", "- second"])
        assert tasks[0].goal is None
        assert tasks[1].goal == "Goal"

    def test_goal_spans_until_next_heading(self):
        tasks = parse_todo_lines(["# A", "- one", "- two", "# B", "- three"])
        assert [t.goal for t in tasks] == ["A", "A", "B"]

    def test_empty_heading_clears_goal(self):
        tasks = parse_todo_lines(["# A", "- one", "#", "- two", "#   ", "- three"])
        assert [t.goal for t in tasks] == ["A", None, None]

    def test_heading_hashes_and_spaces_stripped(self):
        tasks = parse_todo_lines(["### # Deep goal", "- task"])
        assert tasks[0].goal == "Deep goal"

    def test_other_lines_ignored(self):
        tasks = parse_todo_lines(["notes here", "", "   ", "- real task", "* bullet"])
        assert [t.body for t in tasks] == ["real task"]

    def test_indented_lines_are_trimmed(self):
        tasks = parse_todo_lines(["   # Goal  ", "\t- task\n"])
        assert tasks[0].goal == "Goal"
        assert tasks[0].body == "task"

    def test_line_numbers(self):
        tasks = parse_todo_lines(["# Goal", "", "- a", "- b"])
        assert [t.line_number for t in tasks] == [3, 4]

    def test_bad_line_aborts_with_line_number(self):
        with pytest.raises(FileParsingError) as exc:
            parse_todo_lines(["# Goal", "- fine", "- broken _zzz", "- never reached"])
        assert exc.value.line == 3
        assert "line 3" in str(exc.value)
        assert "_zzz" in str(exc.value)
        assert isinstance(exc.value.__cause__, StringParsingError)

    def test_empty_body_aborts(self):
        with pytest.raises(FileParsingError) as exc:
            parse_todo_lines(["- _t"])
        assert exc.value.line == 1


class TestReadTodoFile:
    def test_round_trip_scenario(self, tmp_path):
        path = _write(
            tmp_path,
            "# Errands\n"
            "- buy milk _due12jan2025\n"
            "- walk dog\n"
            "# Work\n"
            "- write report _for_1h30m\n",
        )
        tasks = read_todo_file(path)

        assert len(tasks) == 3

        assert tasks[0].body == "buy milk"
        assert tasks[0].goal == "Errands"
        assert _wall(tasks[0].due) == datetime(2025, 1, 12, 0, 0)
        assert tasks[0].due.tzinfo is not None

        assert tasks[1].body == "walk dog"
        assert tasks[1].goal == "Errands"
        assert tasks[1].due is None

        assert tasks[2].body == "write report"
        assert tasks[2].goal == "Work"
        assert tasks[2].duration == timedelta(seconds=5400)

    def test_accepts_str_path(self, tmp_path):
        path = _write(tmp_path, "- a\n")
        assert read_todo_file(str(path))[0].body == "a"

    def test_empty_file(self, tmp_path):
        assert read_todo_file(_write(tmp_path, "")) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileParsingError, match="Could not read todo file"):
            read_todo_file(tmp_path / "missing.txt")

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "todo.txt"
        path.write_bytes(b"- buy milk\n- caf\xe9 run\n")
        with pytest.raises(FileParsingError, match="Could not read todo file") as exc:
            read_todo_file(path)
        assert isinstance(exc.value.__cause__, UnicodeDecodeError)

    def test_byte_order_mark_ignored(self, tmp_path):
        path = tmp_path / "todo.txt"
        path.write_bytes(b"\xef\xbb\xbf# Goal\n- task\n")
        assert read_todo_file(path)[0].goal == "Goal"
