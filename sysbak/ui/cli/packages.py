"""
CLI commands for package backup and restore.

Thin wrappers over ``sysbak.core.use_cases``.
"""

from __future__ import annotations

import json
import sys

import click

from sysbak.adapters.base import Adapter
from sysbak.core.config.loader import SysbakConfig, load_config
from sysbak.core.errors import ConfigError
from sysbak.core.models.catalog import Catalog, PackageRef


def _load_config(ctx: click.Context) -> SysbakConfig:
    """Load sysbak.yml from --config or by searching upward."""
    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


def _adapter(ctx: click.Context) -> Adapter:
    return ctx.obj["adapter"]


@click.group()
def packages() -> None:
    """Packages — detect, list, save, install, history."""


# ── Observe ─────────────────────────────────────────────────────


@packages.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, as_json: bool) -> None:
    """Show which package managers are available."""
    from sysbak.core.use_cases.detect import run_detect

    result = run_detect(_adapter(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho("📦 Package Managers:", fg="cyan", bold=True)
    for manager, present in result.availability.managers.items():
        icon = "✅" if present else "❌"
        click.echo(f"   {icon} {manager.value}")
    click.echo()


@packages.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_packages(ctx: click.Context, as_json: bool) -> None:
    """List installed packages for every available manager."""
    from sysbak.core.use_cases.catalog import run_list

    result = run_list(_adapter(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ Error listing packages: {result.error}", fg="red")
        sys.exit(1)

    catalog = result.catalog
    if not isinstance(catalog, Catalog):
        click.secho(f"⚠️  {catalog.message}", fg="yellow")
        return

    for manager, names in catalog.packages.items():
        click.secho(f"📦 {manager.value} ({len(names)}):", fg="cyan", bold=True)
        for name in names[:50]:  # Cap display
            click.echo(f"   {name}")
        if len(names) > 50:
            click.echo(f"   ... and {len(names) - 50} more")
    click.echo()


# ── Act ─────────────────────────────────────────────────────────


@packages.command()
@click.pass_context
def save(ctx: click.Context) -> None:
    """Save the package list of this host."""
    from sysbak.core.use_cases.catalog import run_save

    config = _load_config(ctx)
    result = run_save(config, _adapter(ctx))

    if result.error:
        click.secho(f"❌ Error saving package list: {result.error}", fg="red")
        sys.exit(1)

    if not result.saved:
        click.secho(f"⚠️  {result.message} Nothing saved.", fg="yellow")
        return

    assert result.catalog is not None  # guaranteed when saved
    click.secho(f"✅ Package list saved to {result.path}", fg="green", bold=True)
    click.echo(
        f"   {result.catalog.total} packages from "
        f"{', '.join(m.value for m in result.catalog.managers())}"
    )


@packages.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, as_json: bool) -> None:
    """Install every package from the saved list that is missing here."""
    from sysbak.core.use_cases.restore import run_restore

    config = _load_config(ctx)
    quiet = as_json or ctx.obj.get("quiet", False)

    def _progress(ref: PackageRef, outcome: str) -> None:
        if quiet:
            return
        marks = {
            "already_installed": ("•", "white"),
            "newly_installed": ("✓", "green"),
            "failed": ("✗", "red"),
        }
        mark, color = marks[outcome]
        click.secho(f"   {mark} {ref}", fg=color)

    result = run_restore(config, _adapter(ctx), on_progress=_progress)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error or (result.report and not result.report.all_ok):
            sys.exit(1)
        return

    if result.catalog_missing:
        click.secho(
            f"⚠️  {config.catalog_file} not found. Please save a package list first.",
            fg="yellow",
        )
        sys.exit(1)

    if result.error:
        click.secho(f"❌ Error installing packages: {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None

    click.secho("\n--- Installation Summary ---", fg="cyan", bold=True)
    for manager in report.skipped_managers:
        click.secho(f"   ⊘ Skipped {manager.value} (not detected on this system)", fg="yellow")

    sections = (
        ("Already Installed Packages:", report.already_installed, "white"),
        ("Successfully Installed Packages:", report.newly_installed, "green"),
        ("Failed to Install Packages:", report.failed, "red"),
    )
    for title, refs, color in sections:
        if refs:
            click.echo()
            click.secho(title, fg=color, bold=True)
            for ref in refs:
                click.echo(f"- {ref}")

    if not report.newly_installed and not report.failed:
        click.echo("\nNo new packages were installed.")

    click.echo()
    if not report.all_ok:
        sys.exit(1)


# ── History ─────────────────────────────────────────────────────


@packages.command()
@click.option(
    "-n", "count", type=click.IntRange(min=1), default=20, show_default=True,
    help="Number of entries.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def history(ctx: click.Context, count: int, as_json: bool) -> None:
    """Show recent save and install runs from the audit ledger."""
    from sysbak.core.persistence.audit import AuditWriter

    config = _load_config(ctx)
    entries = AuditWriter(config.audit_path).read_recent(count)

    if as_json:
        click.echo(json.dumps(
            {"entries": [e.model_dump(mode="json") for e in entries]}, indent=2,
        ))
        return

    if not entries:
        click.echo("No runs recorded yet.")
        return

    icons = {"ok": "✅", "partial": "⚠️ ", "failed": "❌", "skipped": "⊘"}
    for entry in entries:
        icon = icons.get(entry.status, "•")
        line = f"{icon} {entry.timestamp[:19]}  {entry.operation_type:<7} {entry.status}"
        if entry.operation_type == "install":
            line += (
                f"  ({entry.already_installed} present, "
                f"{entry.newly_installed} installed, {entry.failed} failed)"
            )
        else:
            line += f"  ({entry.packages_total} packages)"
        click.echo(line)
