"""Descriptor production for reference snapshots.

Walks a directory tree and writes the descriptor the sync core reads.
This is the one place where hashes are computed.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from datasync.core.config import DEFAULT_DESCRIPTOR_NAME
from datasync.core.hashing import compute_file_hash, compute_tree_hash
from datasync.sync.descriptor import Descriptor

logger = logging.getLogger(__name__)


def build_descriptor(
    root: Path,
    exclude: Iterable[str] = (DEFAULT_DESCRIPTOR_NAME,),
) -> Descriptor:
    """Build a descriptor for every file and directory under ``root``.

    Args:
        root: Directory holding the reference snapshot.
        exclude: Relative paths to leave out (the descriptor itself by
            default).

    Returns:
        Descriptor with SHA-256 file hashes and "" directory markers.

    Raises:
        NotADirectoryError: If root is not a directory.
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")
    excluded = set(exclude)

    entries: dict[str, str] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        kept = []
        for name in sorted(dirnames):
            rel = (current / name).relative_to(root).as_posix()
            if rel not in excluded:
                entries[rel] = ""
                kept.append(name)
        # Prune excluded directories from the walk
        dirnames[:] = kept
        for name in sorted(filenames):
            path = current / name
            rel = path.relative_to(root).as_posix()
            if rel in excluded or not path.is_file():
                continue
            entries[rel] = compute_file_hash(path)

    descriptor = Descriptor(whole_hash=compute_tree_hash(entries), entries=entries)
    logger.info(f"Built descriptor for {root}: {len(entries)} entries")
    return descriptor


def write_descriptor(descriptor: Descriptor, path: Path) -> None:
    """Write a descriptor as JSON using the on-disk key names."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(descriptor.to_json(indent=2) + "\n", encoding="utf-8")
