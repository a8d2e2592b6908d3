"""
sysbak — CLI entrypoint.

Usage:
    python -m sysbak.main --help
    sysbak packages detect
    sysbak packages save
    sysbak packages install
"""

from __future__ import annotations

from pathlib import Path

import click

from sysbak import __version__
from sysbak.adapters.shell.command import ShellCommandAdapter
from sysbak.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="sysbak")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to sysbak.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """sysbak — back up and restore installed system packages."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    # Tests inject a MockAdapter here
    ctx.obj.setdefault("adapter", ShellCommandAdapter())

    setup_logging(level=resolve_level(debug=debug, verbose=verbose, quiet=quiet))


# ── Register sub-command groups from sysbak/ui/cli/ ───────────────

from sysbak.ui.cli.packages import packages  # noqa: E402

cli.add_command(packages)


if __name__ == "__main__":
    cli()
