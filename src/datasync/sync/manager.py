"""Data directory synchronization entry point.

This module provides:
- DataManager: Serializes sync and reset operations for a data directory

Every DataManager in the process shares one lock, so only one
read-diff-apply-persist sequence runs at a time. Callers arriving while
a sync is running block and then run their own full diff.
"""

from __future__ import annotations

import logging
import shutil
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from datasync.sync.descriptor import (
    DEFAULT_DESCRIPTOR_NAME,
    load_destination,
    load_reference,
)
from datasync.sync.domain.diff import plan
from datasync.sync.executor import SyncExecutor
from datasync.sync.source import open_source

if TYPE_CHECKING:
    from datasync.core.config import SyncConfig
    from datasync.sync.source import ReferenceSource
    from datasync.sync.types import ChangeOperation

logger = logging.getLogger(__name__)

# Process-wide; reentrant so reset_and_sync() can call sync()
_sync_lock = threading.RLock()


class DataManager:
    """Keeps a data directory in sync with a reference snapshot."""

    def __init__(
        self,
        source: ReferenceSource,
        data_dir: Path,
        descriptor_name: str = DEFAULT_DESCRIPTOR_NAME,
    ) -> None:
        """Initialize the manager.

        Args:
            source: Read-only reference snapshot.
            data_dir: Writable destination root.
            descriptor_name: Name of the descriptor in both the source
                and the data directory.
        """
        self._source = source
        self._data_dir = Path(data_dir)
        self._descriptor_name = descriptor_name

    @classmethod
    def from_config(cls, config: SyncConfig) -> DataManager:
        """Create a manager from a SyncConfig."""
        return cls(
            source=open_source(config.source),
            data_dir=config.data_dir,
            descriptor_name=config.descriptor_name,
        )

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def destination_descriptor(self) -> Path:
        """Path of the persisted local state descriptor."""
        return self._data_dir / self._descriptor_name

    def plan(self) -> list[ChangeOperation]:
        """Compute the operations sync() would apply, without applying them."""
        with _sync_lock:
            return self._plan()

    def sync(self) -> None:
        """Bring the data directory in line with the reference snapshot.

        The reference descriptor is copied into the data directory after
        all operations succeeded, even when nothing changed.

        Raises:
            ReferenceParseError: If the reference descriptor is missing or
                malformed. Nothing is modified in that case.
            OSError: If a filesystem operation fails. Operations applied
                before the failure are kept and the old descriptor stays.
        """
        with _sync_lock:
            operations = self._plan()
            executor = SyncExecutor(self._source, self._data_dir)
            executor.apply(operations)
            executor.persist_descriptor(self._descriptor_name)
            logger.info(f"Data synced ({len(operations)} operations)")

    def reset_and_sync(self) -> None:
        """Delete the whole data directory, then sync from scratch."""
        with _sync_lock:
            if self._data_dir.exists():
                logger.info(f"Removing data directory {self._data_dir}")
                shutil.rmtree(self._data_dir)
            self.sync()

    def _plan(self) -> list[ChangeOperation]:
        destination = load_destination(self.destination_descriptor)
        reference = load_reference(self._source, self._descriptor_name)
        return plan(destination, reference)
