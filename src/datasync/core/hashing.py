"""Hashing functions for descriptor production.

This module provides:
- File hashing with SHA-256
- Whole-tree hashing over per-path hashes

Only the descriptor builder uses these; the sync core trusts the hashes
found in descriptors.
"""

import hashlib
from collections.abc import Mapping
from pathlib import Path

HASH_BLOCK_SIZE = 8192


def compute_file_hash(path: Path) -> str:
    """Compute SHA-256 hash of a file.

    Reads the file in blocks to handle large files efficiently.

    Args:
        path: Path to the file to hash.

    Returns:
        Hexadecimal SHA-256 hash string.
    """
    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(HASH_BLOCK_SIZE), b""):
            hasher.update(block)
    return hasher.hexdigest()


def compute_tree_hash(entries: Mapping[str, str]) -> str:
    """Compute the whole-snapshot hash of a set of entries.

    Hashes one ``path<TAB>hash`` line per entry, in sorted path order,
    so the result does not depend on mapping order.

    Args:
        entries: Relative path to entry hash ("" for directories).

    Returns:
        Hexadecimal SHA-256 hash string.
    """
    hasher = hashlib.sha256()
    for path in sorted(entries):
        hasher.update(f"{path}\t{entries[path]}\n".encode())
    return hasher.hexdigest()
