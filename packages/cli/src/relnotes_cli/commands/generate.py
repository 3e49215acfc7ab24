"""generate command: render the release-notes document for a version."""

from __future__ import annotations

import logging
from pathlib import Path

import click
import yaml
from rich.console import Console

from relnotes_core.markdown import render
from relnotes_core.release import build_release_plan

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def load_cli_config(ctx: click.Context, cache_dir: str | None) -> dict:
    """Load .relnotes.yml with CLI overrides, reporting bad files as usage errors."""
    from relnotes_core.config import load_config

    config_path = ctx.obj.get("config_path", ".relnotes.yml") if ctx.obj else ".relnotes.yml"
    try:
        return load_config(config_path, cli_overrides={"cache_dir": cache_dir})
    except (ValueError, yaml.YAMLError) as e:
        raise click.UsageError(f"Invalid configuration in {config_path}: {e}")


@click.command("generate")
@click.argument("version")
@click.option("--cache-dir", default=None, help="Record cache directory. Overrides config file and NOTES_CACHE_PATH.")
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the document to this file instead of stdout.",
)
@click.pass_context
def generate_cmd(ctx, version: str, cache_dir: str | None, output_path: str | None):
    """Generate release notes for VERSION.

    Reads pull requests, comments, reviews and user profiles from the record
    cache and prints a markdown document: highlights, one section per
    component, and a thank-you section crediting authors and reviewers.
    """
    from relnotes_cli.cli import _build_store

    config = load_cli_config(ctx, cache_dir)
    store = _build_store(config)

    try:
        plan = build_release_plan(store, config, version)
    except ValueError as e:
        raise click.UsageError(str(e))
    except Exception as e:
        logger.debug("Release notes generation failed", exc_info=True)
        raise click.ClickException(f"Could not generate release notes for {version} ({type(e).__name__}: {e})")
    finally:
        store.close()

    document = render(plan)
    if output_path:
        Path(output_path).write_text(document, encoding="utf-8")
        entries = sum(len(s.entries) for s in plan.sections) + len(plan.highlights)
        console.print(f"[green]Wrote {entries} note(s) to {output_path}[/green]")
    else:
        click.echo(document, nl=False)
