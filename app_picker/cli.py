"""Command-line interface for the application picker."""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from app_picker import __version__
from app_picker.config import Config, load_config, save_example_config
from app_picker.models import SortOrder
from app_picker.output.render import render_human, render_json, render_selection
from app_picker.picker import AppPicker, manual_item

# How often the progress display polls the worker
POLL_INTERVAL = 0.1


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        print(f"app-picker version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through Rich."""
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True
    )


def run_discovery(picker: AppPicker, console: Console) -> bool:
    """
    Run one discovery session with a progress spinner.

    Returns:
        True if discovery completed, False if the worker stopped early

    Raises:
        KeyboardInterrupt: If the user interrupts; the caller cancels the worker
    """
    worker = picker.start()

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        console=console,
        transient=True
    ) as progress:
        task = progress.add_task("Discovering applications...", total=None)
        while not worker.join(POLL_INTERVAL):
            progress.update(
                task,
                description=f"Discovering applications... [cyan]{len(picker.catalog)}[/cyan] found"
            )

    console.print(f"[green]✓[/green] Found [bold]{len(picker.catalog)} applications[/bold]")
    return picker.catalog.completed.is_set()


def pick(
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        help="Use this executable directly instead of discovering applications"
    ),
    search: Optional[str] = typer.Option(
        None,
        "--search",
        "-s",
        help="Only list applications whose name or path contains this text"
    ),
    sort: Optional[str] = typer.Option(
        None,
        "--sort",
        help="Listing order: last_access, name, name_desc (default: from config)"
    ),
    root: Optional[list[Path]] = typer.Option(
        None,
        "--root",
        help="Additional directory to search. Can be specified multiple times."
    ),
    json: bool = typer.Option(
        False,
        "--json",
        help="Output results in JSON format"
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        help="Write output to file instead of stdout"
    ),
    no_icons: bool = typer.Option(
        False,
        "--no-icons",
        help="Skip icon extraction (faster)"
    ),
    recent: bool = typer.Option(
        False,
        "--recent",
        help="Also offer executables Windows recorded as recently run"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to configuration file (default: ~/.app-picker.yaml)"
    ),
    generate_config: Optional[Path] = typer.Option(
        None,
        "--generate-config",
        help="Generate example configuration file at specified path and exit"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log skipped directories, excluded files and probe failures"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """
    Discover installed applications and list them for selection.

    Install roots are located from Steam, Origin, Epic Games and GOG Galaxy,
    then searched in the background for executables. Installers, updaters,
    launchers and similar helpers are filtered out.

    Examples:
        app-picker                                  # List discovered applications
        app-picker --search witcher                 # Filter by name or path
        app-picker --sort name                      # Sort alphabetically
        app-picker --root D:\\Games                  # Search an extra directory
        app-picker --json --out apps.json           # Save JSON listing
        app-picker --path C:\\Games\\Foo\\foo.exe       # Skip discovery
        app-picker --generate-config ~/.app-picker.yaml
    """
    configure_logging(verbose)
    console = Console(stderr=True)

    if generate_config:
        try:
            save_example_config(generate_config)
            print(f"✓ Example configuration saved to {generate_config}", file=sys.stderr)
            sys.exit(0)
        except OSError as e:
            print(f"Error generating config: {e}", file=sys.stderr)
            sys.exit(2)

    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        print("Continuing with default settings...", file=sys.stderr)
        config = Config()

    if no_icons:
        config.extract_icons = False
    if recent:
        config.use_recent_executables = True

    try:
        sort_order = SortOrder.parse(sort) if sort else config.sort_order
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    interrupted = False
    complete = True
    if path:
        # Manual override bypasses discovery entirely
        try:
            item = manual_item(str(path), extract_icons=config.extract_icons)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(2)
        output = render_json([item]) if json else render_selection(item)
    else:
        picker = AppPicker(config, extra_roots=[str(directory) for directory in root or []])
        try:
            complete = run_discovery(picker, console)
        except KeyboardInterrupt:
            picker.close()
            console.print("[yellow]Discovery cancelled[/yellow]")
            interrupted = True
            complete = False
        except Exception as e:
            picker.close()
            print(f"Discovery failed: {e}", file=sys.stderr)
            sys.exit(3)

        items = picker.visible(search, sort_order)
        stats = picker.worker.stats if picker.worker else None
        if json:
            output = render_json(items, stats=stats, cancelled=not complete)
        else:
            output = render_human(items, sort=sort_order, query=search, stats=stats, cancelled=not complete)

    try:
        if out:
            if not out.parent.exists():
                print(f"Error: Directory does not exist: {out.parent}", file=sys.stderr)
                sys.exit(2)
            out.write_text(output, encoding="utf-8")
            print(f"✓ Results written to {out}", file=sys.stderr)
        else:
            print(output)
    except OSError as e:
        print(f"Output failed: {e}", file=sys.stderr)
        sys.exit(3)

    sys.exit(130 if interrupted else 0)


def main() -> None:
    """Entry point for the CLI."""
    typer.run(pick)


if __name__ == "__main__":
    main()
