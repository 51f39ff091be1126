"""Tests for command-boundary validation and id resolution."""

import pytest

from minutemind.commands.decorators import AppError
from minutemind.exceptions import ValidationError
from minutemind.models import Task
from minutemind.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from minutemind.utils.task_helpers import resolve_id
from minutemind.utils.validation import validate_title, validate_url


def test_validate_title_strips():
    assert validate_title("  Buy milk ") == "Buy milk"


@pytest.mark.parametrize("value", ["", "   ", None])
def test_validate_title_rejects_empty(value):
    with pytest.raises(ValidationError, match="Title cannot be empty"):
        validate_title(value)


def test_validate_url_adds_scheme():
    assert validate_url("example.com") == "https://example.com"
    assert validate_url("http://x.io") == "http://x.io"


def test_validate_url_rejects_empty():
    with pytest.raises(ValidationError):
        validate_url(" ")


# ---------------------------------------------------------------------------
# resolve_id
# ---------------------------------------------------------------------------


@pytest.fixture()
def tasks():
    return [Task(id="abc123", title="a"), Task(id="abd456", title="b")]


def test_resolve_full_id(tasks):
    assert resolve_id("abd456", tasks) == "abd456"


def test_resolve_unique_prefix(tasks):
    assert resolve_id("abc", tasks) == "abc123"


def test_resolve_ambiguous_prefix(tasks):
    with pytest.raises(AppError) as exc:
        resolve_id("ab", tasks)
    assert exc.value.exit_code == ERROR_INVALID_ARGS


def test_resolve_missing(tasks):
    with pytest.raises(AppError) as exc:
        resolve_id("zzz", tasks, kind="Link")
    assert exc.value.exit_code == ERROR_NOT_FOUND
    assert "Link" in str(exc.value)
