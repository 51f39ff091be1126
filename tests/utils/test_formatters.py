"""Tests for UI formatters."""

from datetime import date
from unittest.mock import patch

from minutemind.models import QuickLink, Subtask, Task
from minutemind.utils.ui.formatters import (
    format_due_date,
    format_links_table,
    format_task_detail,
    format_task_table,
    get_completion_color,
    get_progress_bar,
    short_id,
)


def test_progress_bar():
    assert get_progress_bar(0) == "░" * 10
    assert get_progress_bar(67) == "▓" * 6 + "░" * 4


def test_completion_color():
    assert get_completion_color(90) == "green"
    assert get_completion_color(50) == "yellow"
    assert get_completion_color(10) == "red"


def test_short_id():
    assert short_id("0123456789abcdef") == "01234567"


def test_due_date_styles():
    today = date(2026, 5, 10)
    assert format_due_date(date(2026, 5, 9), today).style == "bold red"
    assert format_due_date(today, today).style == "yellow"
    assert str(format_due_date(date(2026, 5, 11), today)) == "May 11, 2026"


def test_task_table_renders_all_rows():
    tasks = [
        Task(title="Alpha", pinned=True, color="rose"),
        Task(title="Beta", subtasks=[Subtask(status="completed")], due_date=date(2026, 1, 1)),
    ]
    with patch("minutemind.utils.ui.formatters.console") as mock_console:
        format_task_table(tasks)
    table = mock_console.print.call_args.args[0]
    assert table.row_count == 2


def test_compact_table_has_fewer_columns():
    with patch("minutemind.utils.ui.formatters.console") as mock_console:
        format_task_table([Task(title="Alpha")], compact=True)
    assert len(mock_console.print.call_args.args[0].columns) == 5


def test_task_detail_lists_subtasks():
    task = Task(title="Alpha", subtasks=[Subtask(title="one"), Subtask()], pomodoro_target=4)
    with patch("minutemind.utils.ui.formatters.console") as mock_console:
        format_task_detail(task)
    printed = " ".join(str(call.args[0]) for call in mock_console.print.call_args_list)
    assert "one" in printed
    assert "(untitled)" in printed
    assert "0 / 4" in printed


def test_links_table():
    links = [QuickLink(title="Docs", url="https://x.io", icon="📘")]
    with patch("minutemind.utils.ui.formatters.console") as mock_console:
        format_links_table(links)
    assert mock_console.print.call_args.args[0].row_count == 1
