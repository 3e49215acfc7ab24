"""inspect command: show how each cached pull request will be treated."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from relnotes_cli.commands.generate import load_cli_config
from relnotes_core.release import resolve_pulls

console = Console()
logger = logging.getLogger(__name__)


@click.command("inspect")
@click.option("--cache-dir", default=None, help="Record cache directory. Overrides config file and NOTES_CACHE_PATH.")
@click.option("--component", "component_name", default=None, help="Only show pull requests in this component.")
@click.pass_context
def inspect_cmd(ctx, cache_dir: str | None, component_name: str | None):
    """List cached pull requests with their component and resolved note.

    Handy before a release to catch missing scope labels or notes that fell
    back to the pull request title.
    """
    from relnotes_cli.cli import _build_store

    config = load_cli_config(ctx, cache_dir)
    store = _build_store(config)
    try:
        resolutions = resolve_pulls(store, config)
    except ValueError as e:
        raise click.UsageError(str(e))
    except Exception as e:
        logger.debug("Pull request inspection failed", exc_info=True)
        raise click.ClickException(f"Could not inspect pull requests ({type(e).__name__}: {e})")
    finally:
        store.close()

    if component_name:
        resolutions = [r for r in resolutions if r.component.name == component_name]
    if not resolutions:
        console.print("[yellow]No pull requests found.[/yellow]")
        return

    table = Table(title="Pull requests", show_header=True, header_style="bold cyan")
    table.add_column("PR", style="bold", width=7)
    table.add_column("Component", max_width=24)
    table.add_column("Source", width=8)
    table.add_column("Note")

    _source_style = {"docs": "blue", "comment": "green", "body": "green", "title": "yellow"}

    for r in resolutions:
        if r.ignored:
            source, note = "[dim]ignored[/dim]", "[dim]-[/dim]"
        elif r.note.is_absent:
            source, note = "[dim]none[/dim]", "[dim]-[/dim]"
        else:
            style = _source_style.get(r.note.source.value, "white")
            source, note = f"[{style}]{r.note.source.value}[/{style}]", escape(r.note.text)
        table.add_row(f"#{r.pull.number}", escape(r.component.name), source, note)

    console.print(table)
