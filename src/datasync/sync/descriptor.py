"""Snapshot descriptors and their loaders.

A descriptor is the manifest of a file tree snapshot: a hash of the
whole snapshot plus a hash per relative path. A blank hash marks a
directory rather than file content.

The JSON layout is shared with the tool producing the bundled
descriptor (see datasync.builder); keep both in step.

This module provides:
- Descriptor: Immutable snapshot manifest
- load: Parse a descriptor, raising ParseError
- load_destination: Best-effort load of the local state record
- load_reference: Strict load of the bundled descriptor
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from datasync.core.config import DEFAULT_DESCRIPTOR_NAME
from datasync.sync.types import ParseError, ReferenceParseError

if TYPE_CHECKING:
    from datasync.sync.source import ReferenceSource

logger = logging.getLogger(__name__)


def is_directory_marker(entry_hash: str) -> bool:
    """Return True if the hash denotes a directory marker."""
    return not entry_hash.strip()


def _check_relative_path(path: str) -> str:
    if not path or "\\" in path or path.startswith("/"):
        raise ValueError(f"not a relative POSIX path: {path!r}")
    parts = path.split("/")
    if any(part in ("", ".", "..") for part in parts):
        raise ValueError(f"invalid path segment in {path!r}")
    return path


class Descriptor(BaseModel):
    """Manifest of a file tree snapshot.

    Attributes:
        whole_hash: Hash of the entire snapshot (JSON key ``sha256``).
        entries: Relative path to content hash (JSON key ``files``);
            a blank hash marks a directory.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        strict=True,
    )

    whole_hash: str = Field(alias="sha256")
    entries: Mapping[str, str] = Field(alias="files")

    @field_validator("entries")
    @classmethod
    def _validate_paths(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        for path in value:
            _check_relative_path(path)
        # Read-only view over a private copy
        return MappingProxyType(dict(value))

    @field_serializer("entries")
    def _serialize_entries(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @classmethod
    def empty(cls) -> Descriptor:
        """Descriptor of an empty snapshot."""
        return cls(whole_hash="", entries={})

    def to_json(self, indent: int | None = None) -> str:
        """Serialize using the on-disk key names."""
        return self.model_dump_json(by_alias=True, indent=indent)


def load(raw: str | bytes) -> Descriptor:
    """Parse a descriptor from JSON content.

    Args:
        raw: JSON text or UTF-8 bytes.

    Returns:
        The parsed Descriptor.

    Raises:
        ParseError: If the content is not valid JSON or does not match
            the descriptor schema.
    """
    try:
        return Descriptor.model_validate_json(raw)
    except ValidationError as e:
        raise ParseError(f"Invalid descriptor: {e}") from e


def load_destination(path: Path) -> Descriptor:
    """Load the local state descriptor.

    Destination state is best-effort: a missing, unreadable or corrupt
    file yields the empty descriptor, which makes the next sync a full
    install.

    Args:
        path: Location of the persisted descriptor.

    Returns:
        The parsed Descriptor, or Descriptor.empty().
    """
    path = Path(path)
    if not path.is_file():
        logger.debug(f"No destination descriptor at {path}")
        return Descriptor.empty()
    try:
        return load(path.read_bytes())
    except (OSError, ParseError) as e:
        logger.debug(f"Ignoring unusable destination descriptor {path}: {e}")
        return Descriptor.empty()


def load_reference(source: ReferenceSource, name: str = DEFAULT_DESCRIPTOR_NAME) -> Descriptor:
    """Load the bundled reference descriptor.

    Args:
        source: Reference source holding the descriptor.
        name: Entry name of the descriptor in the source.

    Returns:
        The parsed Descriptor.

    Raises:
        ReferenceParseError: If the descriptor is missing, unreadable or
            malformed.
    """
    try:
        with source.open(name) as f:
            raw = f.read()
    except OSError as e:
        raise ReferenceParseError(f"Cannot read reference descriptor {name!r}: {e}") from e
    try:
        return load(raw)
    except ParseError as e:
        raise ReferenceParseError(f"Malformed reference descriptor {name!r}: {e}") from e
