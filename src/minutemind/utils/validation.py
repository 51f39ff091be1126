"""Input validation applied at the command boundary."""

from __future__ import annotations

from minutemind.exceptions import ValidationError


def validate_title(value: str | None, what: str = "Title") -> str:
    """Strip and check a title; empty titles never reach the store."""
    title = (value or "").strip()
    if not title:
        raise ValidationError(f"{what} cannot be empty")
    return title


def validate_url(value: str | None) -> str:
    url = (value or "").strip()
    if not url:
        raise ValidationError("URL cannot be empty")
    if "://" not in url:
        url = f"https://{url}"
    return url
