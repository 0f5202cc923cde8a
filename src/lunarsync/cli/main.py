"""
lunarsync CLI - Click-based command line interface.

Usage:
    lunarsync convert People/mom.md     # Convert one note
    lunarsync sync                      # Convert every note in scope
    lunarsync sync --dry-run            # Show what would change
    lunarsync preview                   # Sample key / date for current settings
    lunarsync targets add People        # Restrict sync to a folder
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from lunarsync.calendar.formatting import PendulumFormatter, format_sample_date, format_sample_key
from lunarsync.core.config import Config
from lunarsync.core.exceptions import ConfigurationError
from lunarsync.core.settings import ConversionSettings, OutputMode, normalize_path
from lunarsync.notes.sync import LunarSync, SyncReport
from lunarsync.notes.vault import Vault

if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

logger = logging.getLogger(__name__)


def load_settings(ctx: click.Context) -> tuple[Config, ConversionSettings]:
    """Load config and settings for a command; configuration errors exit with status 1."""
    try:
        config = Config(ctx.obj["config_path"])
        return config, ConversionSettings.from_config(config)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        ctx.exit(1)


def echo_report(report: SyncReport, dry_run: bool) -> None:
    """Print per-note changes and the summary line."""
    for outcome in report.outcomes:
        if outcome.updates:
            prefix = "would update" if dry_run else "updated"
            click.echo(f"{prefix}: {outcome.path}")
            for key, value in outcome.updates.items():
                click.echo(f"  {key}: {value}")
    click.echo(report.summary())


@click.group()
@click.option("-c", "--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), help="YAML config file")
@click.option(
    "--vault",
    "vault_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Root directory of the notes",
)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, vault_root: Path, verbose: bool) -> None:
    """Lunar → solar date sync for Markdown front matter

    Reads lunar dates such as "农历2023-闰02-10" from each note's front
    matter and writes the Gregorian date(s) back into the same block.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["vault_root"] = vault_root


@cli.command()
@click.argument("note", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--dry-run", is_flag=True, help="Do not write, only report")
@click.pass_context
def convert(ctx: click.Context, note: Path, dry_run: bool) -> None:
    """Convert a single note."""
    _, settings = load_settings(ctx)
    vault = Vault(ctx.obj["vault_root"])

    path = note if note.is_absolute() or note.exists() else vault.path_of(str(note))
    if not path.is_file():
        click.echo(f"Note not found: {note}", err=True)
        ctx.exit(1)

    report = LunarSync(settings, vault, dry_run=dry_run).run_on_file(path)
    echo_report(report, dry_run)


@cli.command()
@click.option("--dry-run", is_flag=True, help="Do not write, only report")
@click.pass_context
def sync(ctx: click.Context, dry_run: bool) -> None:
    """Convert every note within the configured targets."""
    _, settings = load_settings(ctx)
    vault = Vault(ctx.obj["vault_root"])

    if settings.targets:
        click.echo(f"Targets: {', '.join(settings.targets)}")
    report = LunarSync(settings, vault, dry_run=dry_run).run_on_all()
    echo_report(report, dry_run)


@cli.command()
@click.pass_context
def preview(ctx: click.Context) -> None:
    """Show sample output for the current settings."""
    _, settings = load_settings(ctx)
    formatter = PendulumFormatter(settings.locale)

    click.echo(f"Source key: {settings.source_key}")
    click.echo(f"Mode: {settings.output_mode.value}")
    if settings.output_mode is OutputMode.SINGLE:
        click.echo(f"Output key: {settings.output_key_single}")
    else:
        click.echo(f"Key pattern: {settings.output_key_pattern}")
        click.echo(f"Sample key: {format_sample_key(formatter, settings.output_key_pattern)}")
        click.echo(f"Years: -{settings.range_past} / +{settings.range_future}")
    click.echo(f"Date format: {settings.output_date_format}")
    click.echo(f"Sample date: {format_sample_date(formatter, settings.output_date_format)}")
    click.echo(
        f"Leap strategy: {settings.default_leap_strategy.label} "
        f"({settings.default_leap_strategy.value}), override key: {settings.leap_strategy_key}"
    )


@cli.group()
def targets() -> None:
    """Manage the notes/folders that sync processes."""
    pass


@targets.command("list")
@click.pass_context
def targets_list(ctx: click.Context) -> None:
    """List configured targets."""
    _, settings = load_settings(ctx)
    if not settings.targets:
        click.echo("No targets: every note is processed.")
        return
    for index, target in enumerate(settings.targets, start=1):
        click.echo(f"{index}. {target}")


@targets.command("add")
@click.argument("path")
@click.pass_context
def targets_add(ctx: click.Context, path: str) -> None:
    """Add a file or folder (relative to the vault) to the targets."""
    config, settings = load_settings(ctx)
    vault = Vault(ctx.obj["vault_root"])

    target = normalize_path(path)
    if not target or not vault.exists(target):
        click.echo(f"Not found in vault: {path}", err=True)
        ctx.exit(1)
    if target in settings.targets:
        click.echo(f"Already a target: {target}")
        return

    config.set("targets", [*settings.targets, target])
    saved = config.save()
    click.echo(f"Added {target} ({saved})")


@targets.command("remove")
@click.argument("path")
@click.pass_context
def targets_remove(ctx: click.Context, path: str) -> None:
    """Remove a target."""
    config, settings = load_settings(ctx)

    target = normalize_path(path)
    if target not in settings.targets:
        click.echo(f"Not a target: {path}", err=True)
        ctx.exit(1)

    config.set("targets", [t for t in settings.targets if t != target])
    saved = config.save()
    click.echo(f"Removed {target} ({saved})")


if __name__ == "__main__":
    cli()
