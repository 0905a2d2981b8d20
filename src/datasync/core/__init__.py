"""Core module - Shared configuration and hashing."""

from datasync.core.config import DEFAULT_DESCRIPTOR_NAME, SyncConfig
from datasync.core.hashing import compute_file_hash, compute_tree_hash

__all__ = [
    # Config
    "DEFAULT_DESCRIPTOR_NAME",
    "SyncConfig",
    # Hashing
    "compute_file_hash",
    "compute_tree_hash",
]
