"""CLI entry point for relnotes.

Commands:
  generate: render release notes for a version from the record cache
  inspect:  show how every cached pull request is classified and resolved
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from relnotes_cli.commands.generate import generate_cmd
from relnotes_cli.commands.inspect import inspect_cmd

console = Console(stderr=True)


def _build_store(config: dict):
    """Instantiate the record store for the configured cache directory.

    This factory lives in cli.py so neither relnotes_core nor relnotes_store
    know about the CLI config format.
    """
    from relnotes_store.cache import CacheStore

    try:
        return CacheStore(cache_dir=config["cache_dir"])
    except FileNotFoundError as e:
        raise click.UsageError(f"{e}. Set cache_dir in .relnotes.yml, NOTES_CACHE_PATH or --cache-dir.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("relnotes"),
    prog_name="relnotes",
)
@click.option(
    "--config",
    "config_path",
    default=".relnotes.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="RELNOTES_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log resolution details to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Release notes from cached pull-request metadata."""
    ctx.ensure_object(dict)
    _configure_logging(verbose)
    ctx.obj["config_path"] = config_path


main.add_command(generate_cmd)
main.add_command(inspect_cmd)
