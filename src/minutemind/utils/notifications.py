"""Best-effort local notifications.

Delivery is never guaranteed. Callers must treat any exception raised by a
notifier as non-fatal.
"""

from __future__ import annotations

import platform
import shutil
import subprocess
from typing import Protocol

from rich.console import Console

from minutemind.utils.ui.console import get_console


class Notifier(Protocol):
    def notify(self, title: str, body: str) -> None: ...


class NullNotifier:
    """Swallows every notification."""

    def notify(self, title: str, body: str) -> None:
        return None


class ConsoleNotifier:
    """Rings the terminal bell and prints the message."""

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()

    def notify(self, title: str, body: str) -> None:
        self.console.bell()
        self.console.print(f"\n[bold green]🎉 {title}[/bold green] {body}\n")


class DesktopNotifier:
    """Sends a desktop notification through the platform's CLI tool.

    The tool is started detached and never waited for.
    """

    def command(self, title: str, body: str) -> list[str]:
        system = platform.system()
        if system == "Darwin":
            script = f'display notification "{body}" with title "{title}"'
            return ["osascript", "-e", script]
        if shutil.which("notify-send"):
            return ["notify-send", title, body]
        raise RuntimeError(f"No desktop notification tool available on {system}")

    def notify(self, title: str, body: str) -> None:
        # Fire and forget - no wait needed
        subprocess.Popen(
            self.command(title, body),
            start_new_session=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
        )


def build_notifier(kind: str) -> Notifier:
    """Notifier for a ``pomodoro.notifier`` config value."""
    if kind == "desktop":
        return DesktopNotifier()
    if kind == "none":
        return NullNotifier()
    return ConsoleNotifier()
