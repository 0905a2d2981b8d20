"""Shared types for data synchronization.

This module provides:
- SyncError, ParseError, ReferenceParseError, UnsafePathError: Exception classes
- ChangeType: Kind of change, value encodes apply priority
- Create, Modify, Remove, RemoveDir: Change operations
- ChangeOperation: Union of all change operations
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar


class SyncError(Exception):
    """Base exception for sync errors."""


class ParseError(SyncError):
    """Content could not be deserialized into a descriptor."""


class ReferenceParseError(ParseError):
    """The bundled reference descriptor is missing or malformed."""


class UnsafePathError(SyncError):
    """An operation path resolves outside the data directory."""

    def __init__(self, path: str, data_dir: object) -> None:
        self.path = path
        super().__init__(f"Refusing to touch {path!r}: outside of {data_dir}")


class ChangeType(IntEnum):
    """Types of change operations.

    Values are ordered by apply priority (lower = applied first).
    Files are removed before directories so nothing nested is left
    dangling, and all removals land before any write.
    """

    REMOVE = 0
    REMOVE_DIR = 1
    MODIFY = 2
    CREATE = 3


@dataclass(frozen=True)
class Create:
    """Path exists only in the reference snapshot."""

    path: str
    new_hash: str

    change_type: ClassVar[ChangeType] = ChangeType.CREATE

    @property
    def priority(self) -> int:
        return int(self.change_type)


@dataclass(frozen=True)
class Modify:
    """Path is a file on both sides with differing content."""

    path: str
    old_hash: str
    new_hash: str

    change_type: ClassVar[ChangeType] = ChangeType.MODIFY

    @property
    def priority(self) -> int:
        return int(self.change_type)


@dataclass(frozen=True)
class Remove:
    """File exists only in the destination."""

    path: str
    old_hash: str

    change_type: ClassVar[ChangeType] = ChangeType.REMOVE

    @property
    def priority(self) -> int:
        return int(self.change_type)


@dataclass(frozen=True)
class RemoveDir:
    """Directory marker exists only in the destination."""

    path: str

    change_type: ClassVar[ChangeType] = ChangeType.REMOVE_DIR

    @property
    def priority(self) -> int:
        return int(self.change_type)


ChangeOperation = Create | Modify | Remove | RemoveDir
