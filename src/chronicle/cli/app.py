# src/chronicle/cli/app.py
"""Command-line interface for Chronicle.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Calls commands module functions
3. Renders results with Rich
"""

from __future__ import annotations

import json
import logging

try:
    import typer
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.table import Table
except ImportError as e:
    raise SystemExit(
        "CLI requires additional dependencies.\nInstall with: pip install chronicle-index[cli]"
    ) from e

from chronicle import __version__
from chronicle.commands import chunks, config_cmd, index, recent, remove, span, status
from chronicle.commands.base import ChunkInfo, ConfirmRequest, LinkInfo

app = typer.Typer(
    name="chronicle",
    help="Chronicle - hierarchical time index. Find records by when they happened.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"chronicle {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log index internals (chunk and tree activity).",
    ),
) -> None:
    """Chronicle - hierarchical time index."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _error(message: str | None, plain: bool) -> None:
    if plain:
        console.print(f"Error: {message}")
    else:
        console.print(f"[red]Error: {message}[/red]")


def _links_table(title: str, links: list[LinkInfo]) -> Table:
    table = Table(title=title)
    table.add_column("#", style="dim", width=3)
    table.add_column("Created", style="green")
    table.add_column("Address", style="cyan")

    for i, link in enumerate(links, 1):
        table.add_row(str(i), link.created, link.target)
    return table


def _chunk_text(chunk: ChunkInfo | None) -> str:
    if chunk is None:
        return "(none)"
    return f"{chunk.from_} -> {chunk.until}"


@app.command()
def index_cmd(
    index_name: str = typer.Argument(..., help="Index to write into"),
    content: str = typer.Argument(..., help="Entry content as a JSON object"),
    created: str = typer.Option(
        None,
        "--created",
        "-t",
        help="Creation time, ISO-8601 (default: now)",
    ),
    link_tag: str = typer.Option(
        None,
        "--tag",
        help="Label stored on the index link",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Store an entry and add it to an index."""
    result = index.index(
        index_name=index_name,
        content=content,
        created=created,
        link_tag=link_tag,
        data_dir=data_dir,
        config_path=config_file,
    )

    if not result.success:
        _error(result.error, plain)
        raise typer.Exit(1)

    if plain:
        console.print(result.address)
    else:
        console.print(
            f"[green]Indexed[/green] [cyan]{result.address}[/cyan] "
            f"in '{result.index}' at {result.created}"
        )


index_cmd.__name__ = "index"


@app.command()
def span_cmd(
    index_name: str = typer.Argument(..., help="Index to query"),
    from_: str = typer.Argument(..., metavar="FROM", help="Starting bound, ISO-8601"),
    until: str = typer.Argument(..., help="Ending bound, ISO-8601"),
    limit: int = typer.Option(
        None,
        "--limit",
        "-n",
        help="Maximum number of results (default: from settings)",
    ),
    load: bool = typer.Option(
        False,
        "--load",
        "-l",
        help="Load and print entry contents",
    ),
    link_tag: str = typer.Option(
        None,
        "--tag",
        help="Only entries indexed with this label",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """List entries between two times. Put the later time first for newest first."""
    result = span.span(
        index_name=index_name,
        from_=from_,
        until=until,
        limit=limit,
        load=load,
        link_tag=link_tag,
        data_dir=data_dir,
        config_path=config_file,
    )

    if not result.success:
        _error(result.error, plain)
        raise typer.Exit(1)

    if not result.links:
        if plain:
            console.print("No entries in span.")
        else:
            console.print("[dim]No entries in span.[/dim]")
        raise typer.Exit(0)

    order = "newest first" if result.descending else "oldest first"

    if load:
        if plain:
            for entry in result.entries:
                console.print(f"{entry.created} {entry.address} {json.dumps(entry.content)}")
        else:
            table = Table(title=f"{result.index}: {len(result.entries)} entries ({order})")
            table.add_column("Created", style="green")
            table.add_column("Address", style="cyan")
            table.add_column("Content")
            for entry in result.entries:
                table.add_row(entry.created, entry.address[:12], json.dumps(entry.content))
            console.print(table)
        for address in result.missing:
            message = f"Missing entry: {address}"
            console.print(message if plain else f"[yellow]{message}[/yellow]")
        return

    if plain:
        for link in result.links:
            console.print(f"{link.created} {link.target}")
    else:
        title = f"{result.index}: {len(result.links)} links ({order})"
        console.print(_links_table(title, result.links))


span_cmd.__name__ = "span"


@app.command()
def recent_cmd(
    index_name: str = typer.Argument(..., help="Index to query"),
    link_tag: str = typer.Option(
        None,
        "--tag",
        help="Only entries indexed with this label",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Show the most recent bucket of an index."""
    result = recent.recent(
        index_name=index_name,
        link_tag=link_tag,
        data_dir=data_dir,
        config_path=config_file,
    )

    if not result.success:
        _error(result.error, plain)
        raise typer.Exit(1)

    if not result.links:
        if plain:
            console.print("No entries indexed.")
        else:
            console.print(f"[dim]No entries indexed in '{index_name}'.[/dim]")
        raise typer.Exit(0)

    if plain:
        console.print(f"Bucket {result.bucket_from} -> {result.bucket_until}:")
        for link in result.links:
            console.print(f"  {link.created} {link.target}")
    else:
        console.print(
            _links_table(f"Most recent bucket ({result.bucket_from})", result.links)
        )


recent_cmd.__name__ = "recent"


@app.command()
def chunks_cmd(
    index_name: str = typer.Option(
        None,
        "--index",
        "-i",
        help="Only list chunks holding entries of this index",
    ),
    hops: int = typer.Option(
        None,
        "--hops",
        help="Also show the chunk this many steps back from the current one",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Inspect the chunk chain."""
    result = chunks.chunks(
        index_name=index_name,
        hops=hops,
        data_dir=data_dir,
        config_path=config_file,
    )

    if not result.success:
        _error(result.error, plain)
        raise typer.Exit(1)

    rows = [
        ("Interval (s)", str(result.interval_seconds)),
        ("Current", _chunk_text(result.current)),
        ("Genesis", _chunk_text(result.genesis)),
        ("Latest", _chunk_text(result.latest)),
    ]
    if hops is not None:
        rows.append((f"Back {hops}", _chunk_text(result.previous)))

    if plain:
        for name, value in rows:
            console.print(f"{name}: {value}")
        for chunk in result.chunks:
            console.print(f"  {chunk.from_} {chunk.address}")
        return

    table = Table(title="Chunk Chain")
    table.add_column("", style="cyan")
    table.add_column("Value", style="green")
    for name, value in rows:
        table.add_row(name, value)
    console.print(table)

    if result.chunks:
        title = "Materialized Chunks"
        if result.index:
            title += f" for '{result.index}'"
        chunk_table = Table(title=f"{title} ({len(result.chunks)})")
        chunk_table.add_column("From", style="green")
        chunk_table.add_column("Until")
        chunk_table.add_column("Address", style="cyan")
        for chunk in result.chunks:
            chunk_table.add_row(chunk.from_, chunk.until, chunk.address[:12])
        console.print(chunk_table)


chunks_cmd.__name__ = "chunks"


@app.command()
def remove_cmd(
    target: str = typer.Argument(..., help="Address of the entry to remove"),
    index_name: str = typer.Option(
        None,
        "--index",
        "-i",
        help="Only remove it from this index (default: every index)",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompt",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Remove an entry from the index. The entry itself is kept."""

    def cli_confirm(request: ConfirmRequest) -> bool:
        """CLI confirmation callback using typer.confirm."""
        if request.details:
            if plain:
                console.print(request.details)
            else:
                console.print(f"[yellow]{request.details}[/yellow]")
        return typer.confirm(request.message)

    # Use callback only if not --force
    on_confirm = None if force else cli_confirm

    result = remove.remove(
        target=target,
        index_name=index_name,
        data_dir=data_dir,
        config_path=config_file,
        on_confirm=on_confirm,
    )

    if not result.success:
        # Handle cancellation gracefully (exit 0, not error)
        if result.error == "Cancelled.":
            console.print("Cancelled.")
            raise typer.Exit(0)
        _error(result.error, plain)
        raise typer.Exit(1)

    if result.revoked == 0:
        message = f"{target} was not indexed; nothing to remove"
        console.print(message if plain else f"[dim]{message}[/dim]")
        return

    message = f"Removed {result.revoked} index link(s) to {target}"
    console.print(message if plain else f"[green]{message}[/green]")


remove_cmd.__name__ = "remove"


@app.command()
def status_cmd(
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Show database statistics."""
    result = status.status(
        data_dir=data_dir,
        config_path=config_file,
    )

    if not result.success:
        _error(result.error, plain)
        raise typer.Exit(1)

    if result.total_chunks == 0:
        if plain:
            console.print("No database found.")
        else:
            console.print("[dim]No database found. Run 'chronicle index' first.[/dim]")
        raise typer.Exit(0)

    rows = [
        ("Data directory", result.data_dir),
        ("Records", str(result.total_entries)),
        ("Live links", str(result.total_links)),
        ("Chunks", str(result.total_chunks)),
        ("Genesis", result.genesis or "(none)"),
        ("Latest", result.latest or "(none)"),
    ]

    if plain:
        console.print("Database Status:")
        for name, value in rows:
            console.print(f"  {name}: {value}")
    else:
        table = Table(title="Database Status")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green", justify="right")
        for name, value in rows:
            table.add_row(name, value)
        console.print(table)


status_cmd.__name__ = "status"


@app.command()
def config_cmd_handler(
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show current configuration settings."""
    result = config_cmd.config(config_path=config_file)

    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    table = Table(title="Chronicle Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")

    table.add_row("storage", result.storage, "yaml" if result.config_path else "default")
    table.add_row("data_dir", result.data_dir, "yaml" if result.config_path else "default")

    # Separator
    table.add_row("", "", "")

    for setting in result.settings:
        table.add_row(setting.name, setting.value, setting.source)

    console.print(table)

    if result.config_path:
        console.print(f"\n[dim]Config file: {result.config_path}[/dim]")
    else:
        console.print("\n[dim]No config file found. Using env vars / defaults.[/dim]")

    console.print("\n[dim]Precedence: env var > yaml settings > preset > default[/dim]")


config_cmd_handler.__name__ = "config"
