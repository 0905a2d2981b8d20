"""Descriptor building command for datasync CLI.

Commands:
- build-descriptor: Write the descriptor of a reference snapshot
"""

from __future__ import annotations

from pathlib import Path

import click

from datasync.builder import build_descriptor, write_descriptor
from datasync.core.config import DEFAULT_DESCRIPTOR_NAME


@click.command("build-descriptor")
@click.argument("root", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--name",
    default=DEFAULT_DESCRIPTOR_NAME,
    show_default=True,
    help="Descriptor file name, excluded from the snapshot.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write the descriptor (default: ROOT/NAME).",
)
def build_descriptor_cmd(root: Path, name: str, output: Path | None) -> None:
    """Hash every file under ROOT and write its descriptor."""
    descriptor = build_descriptor(root, exclude=(name,))
    target = output or root / name
    write_descriptor(descriptor, target)
    click.echo(f"Wrote {target} ({len(descriptor.entries)} entries, sha256 {descriptor.whole_hash})")
