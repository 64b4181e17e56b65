"""Output rendering for discovered applications."""

import json
from dataclasses import asdict
from io import StringIO

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from app_picker.models import DiscoveredItem, ScanStats, SortOrder

SCHEMA_VERSION = "1.0"


def render_human(
    items: list[DiscoveredItem],
    sort: SortOrder = SortOrder.LAST_ACCESS,
    query: str | None = None,
    stats: ScanStats | None = None,
    cancelled: bool = False
) -> str:
    """
    Render discovered applications as a Rich table.

    Args:
        items: Items in display order
        sort: Order the items were sorted by (shown in the header)
        query: Search text applied, if any
        stats: Counters from the discovery session
        cancelled: True if discovery stopped before finishing

    Returns:
        Formatted string suitable for terminal display
    """
    output_buffer = StringIO()
    console = Console(file=output_buffer, width=120, force_terminal=True)

    console.print()
    header_text = Text()
    header_text.append("🎮 Application Picker", style="bold cyan")
    console.print(Panel(header_text, border_style="cyan", box=box.ROUNDED))

    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="bold cyan", justify="right")
    summary.add_column(style="white")
    summary.add_row("Sorted by:", sort.value.replace("_", " "))
    if query:
        summary.add_row("Search:", f"[bold]{escape(query)}[/bold]")
    if stats:
        summary.add_row("Directories:", f"{stats.directories_visited} [dim]({stats.directories_skipped} skipped)[/dim]")
        summary.add_row("Executables:", f"{stats.files_seen} seen, {stats.candidates} kept")
    if cancelled:
        summary.add_row("Status:", "[yellow]cancelled, results are incomplete[/yellow]")
    console.print(Panel(summary, border_style="blue", box=box.ROUNDED, padding=(0, 1)))
    console.print()

    if not items:
        empty_text = Text()
        empty_text.append("No applications found", style="bold yellow")
        console.print(Panel(empty_text, border_style="yellow", box=box.ROUNDED))
        console.print()
        return output_buffer.getvalue()

    console.print(f"[bold white]Applications[/bold white] [dim]({len(items)} total)[/dim]")
    console.print()

    table = Table(
        show_header=True,
        header_style="bold cyan",
        box=box.ROUNDED,
        border_style="blue",
        row_styles=["", "dim"],
        expand=False
    )
    table.add_column("Name", max_width=50, overflow="fold")
    table.add_column("Last access", style="cyan", no_wrap=True)
    table.add_column("Path", max_width=60, style="dim", overflow="ellipsis")

    for item in items:
        path_display = item.path
        if len(path_display) > 60:
            # Show the end of the path, where the game folder is
            path_display = "..." + path_display[-57:]

        # Names and paths are data, not markup
        table.add_row(
            escape(item.display_name),
            escape(item.last_access) or "[dim]unknown[/dim]",
            escape(path_display)
        )

    console.print(table)
    console.print()
    return output_buffer.getvalue()


def render_selection(item: DiscoveredItem) -> str:
    """Render a single chosen application."""
    output_buffer = StringIO()
    console = Console(file=output_buffer, width=120, force_terminal=True)

    content = [
        f"[bold cyan]Name:[/bold cyan] {escape(item.display_name)}",
        f"[bold cyan]Path:[/bold cyan] [dim]{escape(item.path)}[/dim]",
        f"[bold cyan]Last access:[/bold cyan] {item.last_access or 'unknown'}",
        f"[bold cyan]Icon:[/bold cyan] {'yes' if item.has_icon else 'none'}",
    ]
    console.print(Panel("\n".join(content), title="[bold]Selected application[/bold]", border_style="green", box=box.ROUNDED))
    return output_buffer.getvalue()


def render_json(
    items: list[DiscoveredItem],
    stats: ScanStats | None = None,
    cancelled: bool = False
) -> str:
    """
    Render discovered applications as JSON.

    Icons are not embedded; each record carries a ``has_icon`` flag.

    Returns:
        JSON string with sorted keys and indentation
    """
    document = {
        "schema_version": SCHEMA_VERSION,
        "complete": not cancelled,
        "applications": [item.to_record() for item in items],
    }
    if stats:
        document["stats"] = asdict(stats)

    return json.dumps(document, sort_keys=True, indent=2)
