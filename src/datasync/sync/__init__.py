"""Descriptor-based synchronization of a data directory.

Architecture:
    ReferenceSource → load_reference ┐
                                     ├→ plan() → SyncExecutor → persist
    data_dir       → load_destination┘

Components:
- **Descriptor**: Immutable manifest (whole hash + per-path hashes)
- **diff / plan**: Pure comparison producing ordered change operations
- **SyncExecutor**: Applies operations to the data directory
- **DataManager**: Lock-guarded sync() / reset_and_sync() entry point
- **DirectorySource / ZipSource**: Read-only reference snapshots
"""

from datasync.sync.descriptor import (
    DEFAULT_DESCRIPTOR_NAME,
    Descriptor,
    is_directory_marker,
    load,
    load_destination,
    load_reference,
)
from datasync.sync.domain import diff, plan, sort_operations
from datasync.sync.executor import SyncExecutor
from datasync.sync.manager import DataManager
from datasync.sync.source import DirectorySource, ReferenceSource, ZipSource, open_source
from datasync.sync.types import (
    ChangeOperation,
    ChangeType,
    Create,
    Modify,
    ParseError,
    ReferenceParseError,
    Remove,
    RemoveDir,
    SyncError,
    UnsafePathError,
)

__all__ = [
    # Descriptor
    "DEFAULT_DESCRIPTOR_NAME",
    "Descriptor",
    "is_directory_marker",
    "load",
    "load_destination",
    "load_reference",
    # Diff
    "diff",
    "plan",
    "sort_operations",
    # Execution
    "DataManager",
    "SyncExecutor",
    # Sources
    "DirectorySource",
    "ReferenceSource",
    "ZipSource",
    "open_source",
    # Types
    "ChangeOperation",
    "ChangeType",
    "Create",
    "Modify",
    "ParseError",
    "ReferenceParseError",
    "Remove",
    "RemoveDir",
    "SyncError",
    "UnsafePathError",
]
