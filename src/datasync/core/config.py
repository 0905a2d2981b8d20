"""Configuration classes for datasync."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_DESCRIPTOR_NAME = "descriptor.json"


@dataclass
class SyncConfig:
    """Configuration of one synchronized data directory.

    Attributes:
        source: Reference snapshot location (directory or zip archive).
        data_dir: Writable destination root.
        descriptor_name: File name of the descriptor on both sides.
    """

    source: Path
    data_dir: Path
    descriptor_name: str = DEFAULT_DESCRIPTOR_NAME

    def __post_init__(self) -> None:
        """Normalize paths and validate the descriptor name."""
        self.source = Path(self.source).expanduser()
        self.data_dir = Path(self.data_dir).expanduser()
        name = self.descriptor_name
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise ValueError(f"descriptor_name must be a plain file name, got {name!r}")

    @property
    def destination_descriptor(self) -> Path:
        """Path of the persisted local descriptor."""
        return self.data_dir / self.descriptor_name
