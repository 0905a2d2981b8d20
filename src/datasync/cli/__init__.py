"""Command-line interface for datasync.

This module provides the main CLI entry point and assembles all commands.

Commands:
- sync: Synchronize the data directory with the reference snapshot
- reset: Delete the data directory and reinstall it
- plan: Show pending operations without applying them
- configure: Store default source and data directory
- build-descriptor: Write the descriptor of a reference snapshot
"""

from __future__ import annotations

import logging
import sys

import click

from datasync.cli.build import build_descriptor_cmd
from datasync.cli.config import (
    get_config_dir,
    get_config_file,
    load_config,
    resolve_sync_config,
    save_config,
)
from datasync.cli.sync import configure, plan, reset, sync

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool) -> None:
    """Configure the datasync logger to write to stderr.

    Args:
        verbose: Log every operation (DEBUG) instead of INFO.
    """
    datasync_logger = logging.getLogger("datasync")
    for handler in datasync_logger.handlers[:]:
        datasync_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    datasync_logger.addHandler(handler)
    datasync_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    datasync_logger.propagate = False


@click.group()
@click.version_option(package_name="datasync")
@click.option("--verbose", "-v", is_flag=True, help="Log every sync operation.")
def cli(verbose: bool) -> None:
    """datasync - Keep a data directory in sync with a reference snapshot."""
    setup_logging(verbose)


# Sync commands
cli.add_command(sync)
cli.add_command(reset)
cli.add_command(plan)
cli.add_command(configure)

# Producer commands
cli.add_command(build_descriptor_cmd)


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = [
    # Main entry points
    "cli",
    "main",
    "setup_logging",
    # Config utilities
    "get_config_dir",
    "get_config_file",
    "load_config",
    "resolve_sync_config",
    "save_config",
]
