"""Apply change operations to the data directory.

This module provides:
- SyncExecutor: Executes sorted change operations against the filesystem
  and persists the reference descriptor as the new local state.

Filesystem errors are not caught: a failure aborts the run and the
operations already applied stay applied.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from datasync.sync.types import (
    ChangeOperation,
    Create,
    Modify,
    Remove,
    RemoveDir,
    UnsafePathError,
)

if TYPE_CHECKING:
    from datasync.sync.source import ReferenceSource

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 64 * 1024


class SyncExecutor:
    """Executes change operations inside a data directory."""

    def __init__(self, source: ReferenceSource, data_dir: Path) -> None:
        """Initialize the executor.

        Args:
            source: Reference source files are copied from.
            data_dir: Destination root kept in sync.
        """
        self._source = source
        self._data_dir = Path(data_dir).resolve()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def apply(self, operations: Iterable[ChangeOperation]) -> int:
        """Apply operations in the given order.

        Args:
            operations: Operations already sorted by priority.

        Returns:
            Number of operations applied.
        """
        count = 0
        for op in operations:
            logger.debug(f"Diff: {op}")
            match op:
                case Remove(path=path):
                    self._delete_file(path)
                case RemoveDir(path=path):
                    self._delete_dir(path)
                case Create(path=path) | Modify(path=path):
                    self._copy_file(path)
            count += 1
        return count

    def persist_descriptor(self, name: str) -> None:
        """Copy the reference descriptor into the data directory.

        Must only run once every operation has been applied, so the
        local record never describes files that are not there yet.
        """
        self._copy_file(name)

    def _resolve(self, path: str) -> Path:
        """Map ``path`` to its entry in the data directory.

        The entry itself is not resolved, so a symlink is acted on as a
        link. Its parent directory must resolve inside the data directory.
        """
        target = Path(os.path.normpath(self._data_dir / path))
        if target == self._data_dir or not target.is_relative_to(self._data_dir):
            raise UnsafePathError(path, self._data_dir)
        parent = target.parent.resolve()
        if not parent.is_relative_to(self._data_dir):
            raise UnsafePathError(path, self._data_dir)
        return parent / target.name

    def _delete_file(self, path: str) -> None:
        target = self._resolve(path)
        if target.is_symlink() or target.is_file():
            target.unlink()

    def _delete_dir(self, path: str) -> None:
        target = self._resolve(path)
        if target.is_symlink():
            target.unlink()
        elif target.is_dir():
            shutil.rmtree(target)

    def _copy_file(self, path: str) -> None:
        target = self._resolve(path)
        with self._source.open(path) as src:
            target.parent.mkdir(parents=True, exist_ok=True)
            # Replace a link instead of writing through it
            if target.is_symlink():
                target.unlink()
            with open(target, "wb") as dst:
                shutil.copyfileobj(src, dst, COPY_BUFFER_SIZE)
