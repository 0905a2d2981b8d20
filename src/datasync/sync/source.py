"""Read-only reference sources.

A reference source provides named byte streams addressed by relative
path. Entries are enumerated through the descriptor, never by listing.

This module provides:
- ReferenceSource: Protocol implemented by all sources
- DirectorySource: Entries are files under a directory
- ZipSource: Entries are members of a zip archive
- open_source: Pick a source for a location on disk
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import BinaryIO, Protocol

logger = logging.getLogger(__name__)


class ReferenceSource(Protocol):
    """Protocol for read-only reference snapshots."""

    def open(self, path: str) -> BinaryIO:
        """Open the entry at ``path`` for binary reading.

        Raises:
            FileNotFoundError: If the entry does not exist.
        """
        ...


class DirectorySource:
    """Reference source backed by a plain directory."""

    def __init__(self, root: Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def open(self, path: str) -> BinaryIO:
        target = (self._root / path).resolve()
        if not target.is_relative_to(self._root):
            raise FileNotFoundError(f"{path!r} is outside of {self._root}")
        return open(target, "rb")

    def __repr__(self) -> str:
        return f"DirectorySource({str(self._root)!r})"


class ZipSource:
    """Reference source backed by a zip archive.

    Members are addressed by their archive name, optionally below a
    prefix (e.g. ``assets/``). The archive is opened once, on first use.
    """

    def __init__(self, archive: Path, prefix: str = "") -> None:
        self._archive = Path(archive)
        self._prefix = prefix.strip("/") + "/" if prefix.strip("/") else ""
        self._zipfile: zipfile.ZipFile | None = None

    def open(self, path: str) -> BinaryIO:
        name = self._prefix + path
        try:
            return self._open_archive().open(name)  # type: ignore[return-value]
        except KeyError as e:
            raise FileNotFoundError(f"{name!r} not in {self._archive}") from e

    def close(self) -> None:
        """Close the underlying archive."""
        if self._zipfile is not None:
            self._zipfile.close()
            self._zipfile = None

    def __enter__(self) -> ZipSource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _open_archive(self) -> zipfile.ZipFile:
        if self._zipfile is None:
            try:
                self._zipfile = zipfile.ZipFile(self._archive)
            except zipfile.BadZipFile as e:
                raise OSError(f"Not a valid zip archive: {self._archive}") from e
        return self._zipfile

    def __repr__(self) -> str:
        return f"ZipSource({str(self._archive)!r})"


def open_source(location: Path) -> ReferenceSource:
    """Create a reference source for a location on disk.

    Args:
        location: A directory or a ``.zip`` archive.

    Returns:
        ZipSource for zip files, DirectorySource otherwise.
    """
    location = Path(location).expanduser()
    if location.is_file() and zipfile.is_zipfile(location):
        logger.debug(f"Using zip archive {location} as reference source")
        return ZipSource(location)
    return DirectorySource(location)
