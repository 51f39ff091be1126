"""Quick link commands."""

from typing import Annotated

import typer

from minutemind.services import open_session
from minutemind.utils.task_helpers import resolve_id
from minutemind.utils.ui.formatters import format_info, format_links_table, format_success
from minutemind.utils.validation import validate_title, validate_url

from .decorators import command_wrapper

app = typer.Typer(help="Quick link (bookmark) commands")


@app.command("add")
@command_wrapper
async def add_link(
    title: Annotated[str, typer.Argument(help="Link title")],
    url: Annotated[str, typer.Argument(help="Link URL")],
    icon: Annotated[str | None, typer.Option("--icon", help="Emoji or short icon")] = None,
) -> None:
    """Add a quick link."""
    title = validate_title(title, "Link title")
    url = validate_url(url)
    async with open_session() as session:
        link = session.store.add_link(title, url, icon)
        format_success(f"Link added: {link.title} -> {link.url}")


@app.command("list")
@command_wrapper
async def list_links() -> None:
    """List quick links."""
    async with open_session() as session:
        if not session.store.links:
            format_info("No quick links yet.")
            return
        format_links_table(session.store.links)


@app.command("remove")
@command_wrapper
async def remove_link(
    link_ref: Annotated[str, typer.Argument(help="Link ID or prefix")],
) -> None:
    """Remove a quick link."""
    async with open_session() as session:
        link_id = resolve_id(link_ref, session.store.links, kind="Link")
        session.store.remove_link(link_id)
        format_success("Link removed")
