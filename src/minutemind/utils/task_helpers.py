"""Helpers for resolving user-supplied task references."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from minutemind.commands.decorators import AppError
from minutemind.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND


class _HasId(Protocol):
    id: str


def resolve_id(reference: str, items: Iterable[_HasId], kind: str = "Task") -> str:
    """Resolve a full id or a unique id prefix.

    Raises:
        AppError: If nothing matches or the prefix is ambiguous
    """
    reference = reference.strip().lower()
    ids = [item.id for item in items]
    if reference in ids:
        return reference
    matches = [item_id for item_id in ids if item_id.lower().startswith(reference)]
    if not reference or not matches:
        raise AppError(f"{kind} '{reference}' not found", exit_code=ERROR_NOT_FOUND)
    if len(matches) > 1:
        raise AppError(
            f"{kind} id '{reference}' is ambiguous ({len(matches)} matches)",
            exit_code=ERROR_INVALID_ARGS,
        )
    return matches[0]
