"""Sync commands for datasync CLI.

Commands:
- sync: Bring the data directory in line with the reference snapshot
- reset: Delete the data directory and reinstall it
- plan: Show the operations a sync would apply
- configure: Store default source and data directory
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from datasync.cli.config import load_config, resolve_sync_config, save_config
from datasync.sync import DataManager, SyncError
from datasync.sync.types import Create, Modify, Remove, RemoveDir

F = TypeVar("F", bound=Callable[..., Any])

_LABELS = {
    Create: "create",
    Modify: "modify",
    Remove: "remove",
    RemoveDir: "rmdir",
}


def sync_options(func: F) -> F:
    """Attach the options shared by sync, reset and plan."""
    func = click.option(
        "--descriptor-name",
        default=None,
        help="Descriptor file name (default: descriptor.json).",
    )(func)
    func = click.option(
        "--data-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Data directory to keep in sync.",
    )(func)
    func = click.option(
        "--source",
        type=click.Path(exists=True, path_type=Path),
        default=None,
        help="Reference snapshot (directory or zip archive).",
    )(func)
    return func


def _manager(source: Path | None, data_dir: Path | None, descriptor_name: str | None) -> DataManager:
    return DataManager.from_config(resolve_sync_config(source, data_dir, descriptor_name))


@click.command()
@sync_options
def sync(source: Path | None, data_dir: Path | None, descriptor_name: str | None) -> None:
    """Synchronize the data directory with the reference snapshot.

    Only files whose hash changed are copied or removed.
    """
    manager = _manager(source, data_dir, descriptor_name)
    try:
        manager.sync()
    except (SyncError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Synced {manager.data_dir}")


@click.command()
@sync_options
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
def reset(
    source: Path | None,
    data_dir: Path | None,
    descriptor_name: str | None,
    yes: bool,
) -> None:
    """Delete the data directory and reinstall it from the reference snapshot."""
    manager = _manager(source, data_dir, descriptor_name)
    if not yes:
        click.confirm(f"This will delete everything in {manager.data_dir}. Continue?", abort=True)
    try:
        manager.reset_and_sync()
    except (SyncError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Reinstalled {manager.data_dir}")


@click.command()
@sync_options
def plan(source: Path | None, data_dir: Path | None, descriptor_name: str | None) -> None:
    """Show the operations a sync would apply, without applying them."""
    manager = _manager(source, data_dir, descriptor_name)
    try:
        operations = manager.plan()
    except SyncError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    if not operations:
        click.echo("Up to date.")
        return
    for op in operations:
        click.echo(f"{_LABELS[type(op)]:<7} {op.path}")
    click.echo(f"{len(operations)} operation(s)")


@click.command()
@click.option(
    "--source",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Reference snapshot (directory or zip archive).",
)
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Data directory to keep in sync.",
)
@click.option("--descriptor-name", default=None, help="Descriptor file name.")
def configure(source: Path | None, data_dir: Path | None, descriptor_name: str | None) -> None:
    """Store default settings in the config file.

    Without options, prints the current configuration.
    """
    config = load_config()
    if source is None and data_dir is None and descriptor_name is None:
        if not config:
            click.echo("No configuration set.")
        for key, value in sorted(config.items()):
            click.echo(f"{key} = {value}")
        return

    if source is not None:
        config["source"] = str(source.expanduser().resolve())
    if data_dir is not None:
        config["data_dir"] = str(data_dir.expanduser().resolve())
    if descriptor_name is not None:
        config["descriptor_name"] = descriptor_name
    save_config(config)
    click.echo("Configuration saved.")
