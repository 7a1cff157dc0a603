"""Command-line interface for Bloggo.

This module defines the CLI commands using the Click framework.

Commands:
- build: Build static site pages into the destination directory.
- clean: Remove the destination directory.

Settings come from an explicit option, then the matching environment
variable (BLOGGO_SOURCE, BLOGGO_DEST, BLOGGO_BASE_URL), then the default.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import click
import structlog

from . import __version__
from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_DEST_DIR,
    DEFAULT_SOURCE_DIR,
    ENV_BASE_URL,
    ENV_DEST_DIR,
    ENV_SOURCE_DIR,
    SiteConfig,
)
from .errors import BloggoError
from .log import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="bloggo")
@click.option(
    "-s",
    "--source",
    "source_dir",
    default=DEFAULT_SOURCE_DIR,
    envvar=ENV_SOURCE_DIR,
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory containing post and template source",
)
@click.option(
    "-o",
    "--dest",
    "dest_dir",
    default=DEFAULT_DEST_DIR,
    envvar=ENV_DEST_DIR,
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory where output will be stored",
)
@click.option(
    "-b",
    "--base-url",
    default=DEFAULT_BASE_URL,
    envvar=ENV_BASE_URL,
    help="URL prefix for links to posts",
)
@click.option("-v", "--verbose", is_flag=True, help="Provide verbose output")
@click.pass_context
def cli(ctx: click.Context, source_dir: Path, dest_dir: Path, base_url: str, verbose: bool):
    """Bloggo static site generator."""
    configure_logging(verbose=verbose)
    ctx.obj = SiteConfig(source_dir=source_dir, dest_dir=dest_dir, base_url=base_url)


@cli.command()
@click.pass_obj
def build(config: SiteConfig):
    """Build static site pages."""
    from .build import Site

    try:
        result = Site(config).build()
    except BloggoError as exc:
        _fail("Build failed:", exc)
    click.echo(f"Built {len(result.posts)} posts into {result.output_dir}")


@cli.command()
@click.pass_obj
def clean(config: SiteConfig):
    """Clean destination directory."""
    from .build import Site

    try:
        Site(config).clean()
    except BloggoError as exc:
        _fail("Clean failed:", exc)
    click.echo(f"Cleaned {config.dest_dir}")


def _fail(heading: str, exc: BloggoError) -> NoReturn:
    """Report an error on stderr and exit with status 1."""
    structlog.get_logger(__name__).debug("command failed", exc_info=True)
    click.echo(click.style(heading, fg="red", bold=True), err=True)
    if exc.source_path is not None:
        click.echo(click.style(f"  File: {exc.source_path}", fg="yellow"), err=True)
    click.echo(click.style(f"  Error: {exc}", fg="white"), err=True)
    raise SystemExit(1) from None


def main():
    """Entry point for the CLI application."""
    cli()
