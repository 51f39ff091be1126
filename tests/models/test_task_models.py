"""Unit tests for the task, subtask and quick-link models."""

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from minutemind.models import (
    AppSnapshot,
    QuickLink,
    Subtask,
    Task,
    compute_progress,
)


def _subtasks(*statuses: str) -> list[Subtask]:
    return [Subtask(title=f"s{i}", status=status) for i, status in enumerate(statuses)]


# ---------------------------------------------------------------------------
# compute_progress
# ---------------------------------------------------------------------------


class TestComputeProgress:
    def test_empty_is_zero(self):
        assert compute_progress([]) == 0

    def test_two_of_three_rounds_up(self):
        assert compute_progress(_subtasks("completed", "completed", "pending")) == 67

    def test_one_of_three_rounds_down(self):
        assert compute_progress(_subtasks("completed", "pending", "pending")) == 33

    def test_one_of_eight_rounds_half_up(self):
        # 12.5 -> 13
        statuses = ["completed"] + ["pending"] * 7
        assert compute_progress(_subtasks(*statuses)) == 13

    def test_in_progress_does_not_count(self):
        assert compute_progress(_subtasks("in-progress", "completed")) == 50

    def test_all_completed(self):
        assert compute_progress(_subtasks("completed", "completed")) == 100


# ---------------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------------


class TestTask:
    def test_defaults(self):
        task = Task(title="Write report")
        assert task.completed is False
        assert task.pinned is False
        assert task.priority == "medium"
        assert task.recurrence == "none"
        assert task.progress == 0
        assert task.pomodoro_count == 0
        assert task.pomodoro_target is None
        assert task.created_at.tzinfo is not None

    def test_ids_are_unique(self):
        assert Task(title="a").id != Task(title="b").id

    def test_progress_is_derived_not_trusted(self):
        task = Task(title="a", subtasks=_subtasks("completed", "pending"), progress=3)
        assert task.progress == 50

    def test_null_recurrence_loads_as_none(self):
        task = Task.model_validate({"title": "a", "recurrence": None})
        assert task.recurrence == "none"

    def test_null_pomodoro_count_loads_as_zero(self):
        task = Task.model_validate({"title": "a", "pomodoroCount": None})
        assert task.pomodoro_count == 0

    def test_rejects_unknown_priority(self):
        with pytest.raises(ValidationError):
            Task(title="a", priority="urgent")

    def test_rejects_negative_pomodoro_count(self):
        with pytest.raises(ValidationError):
            Task(title="a", pomodoro_count=-1)

    @pytest.mark.parametrize("color", ["red", "emerald", "violet-500"])
    def test_palette_colors_accepted(self, color):
        assert Task(title="a", color=color).color == color

    def test_unknown_color_rejected(self):
        with pytest.raises(ValidationError):
            Task(title="a", color="chartreuse")

    def test_serializes_with_camel_case_aliases(self):
        task = Task(title="a", due_date=date(2026, 3, 1))
        data = task.model_dump(mode="json", by_alias=True)
        assert data["dueDate"] == "2026-03-01"
        assert "createdAt" in data
        assert "pomodoroCount" in data

    def test_touch_never_moves_before_created_at(self):
        future = datetime(2999, 1, 1, tzinfo=UTC)
        task = Task(title="a", created_at=future, updated_at=future)
        task.touch()
        assert task.updated_at >= task.created_at


# ---------------------------------------------------------------------------
# QuickLink and AppSnapshot
# ---------------------------------------------------------------------------


def test_quick_link_requires_title_and_url():
    with pytest.raises(ValidationError):
        QuickLink(title="", url="https://example.com")
    with pytest.raises(ValidationError):
        QuickLink(title="Docs", url="")


def test_snapshot_storage_keys():
    snapshot = AppSnapshot(tasks=[Task(title="a")], dark_mode=True)
    data = snapshot.to_storage()
    assert set(data) == {"tasks", "links", "darkMode"}
    assert data["darkMode"] is True


def test_snapshot_from_partial_storage_keeps_defaults():
    snapshot = AppSnapshot.from_storage({"darkMode": True, "unrelated": 1})
    assert snapshot.tasks == []
    assert snapshot.links == []
    assert snapshot.dark_mode is True


def test_snapshot_from_storage_ignores_null_values():
    snapshot = AppSnapshot.from_storage({"tasks": None, "links": None})
    assert snapshot.tasks == []
