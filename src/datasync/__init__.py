"""datasync - Hash-based synchronization of a data directory against a reference snapshot."""

from datasync.core.config import SyncConfig
from datasync.sync import DataManager, Descriptor, ReferenceParseError, SyncError

__version__ = "0.1.0"

__all__ = [
    "DataManager",
    "Descriptor",
    "ReferenceParseError",
    "SyncConfig",
    "SyncError",
    "__version__",
]
