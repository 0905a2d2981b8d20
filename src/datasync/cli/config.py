"""Configuration utilities for datasync CLI.

This module provides shared configuration functions used across CLI commands.
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from datasync.core.config import DEFAULT_DESCRIPTOR_NAME, SyncConfig


def get_config_dir() -> Path:
    """Get the configuration directory for datasync.

    Returns:
        Path to ~/.datasync or equivalent.
    """
    return Path.home() / ".datasync"


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.json"


def load_config() -> dict[str, str]:
    """Load configuration from config file.

    Raises:
        click.ClickException: If the file is not a JSON object.
    """
    config_file = get_config_file()
    if not config_file.exists():
        return {}
    try:
        config = json.loads(config_file.read_text())
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Malformed config file {config_file}: {e}") from e
    if not isinstance(config, dict):
        raise click.ClickException(f"Malformed config file {config_file}: expected a JSON object")
    return config


def save_config(config: dict[str, str]) -> None:
    """Save configuration to config file."""
    config_file = get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(config, indent=2))


def resolve_sync_config(
    source: Path | None,
    data_dir: Path | None,
    descriptor_name: str | None,
) -> SyncConfig:
    """Merge command-line options over the config file.

    Args:
        source: --source option, if given.
        data_dir: --data-dir option, if given.
        descriptor_name: --descriptor-name option, if given.

    Returns:
        The effective SyncConfig.

    Raises:
        click.UsageError: If source or data directory is not set anywhere.
    """
    config = load_config()
    source = source or (Path(config["source"]) if config.get("source") else None)
    data_dir = data_dir or (Path(config["data_dir"]) if config.get("data_dir") else None)
    if source is None:
        raise click.UsageError("No reference source. Pass --source or run 'datasync configure'.")
    if data_dir is None:
        raise click.UsageError("No data directory. Pass --data-dir or run 'datasync configure'.")
    try:
        return SyncConfig(
            source=source,
            data_dir=data_dir,
            descriptor_name=descriptor_name
            or config.get("descriptor_name")
            or DEFAULT_DESCRIPTOR_NAME,
        )
    except ValueError as e:
        raise click.UsageError(str(e)) from e
