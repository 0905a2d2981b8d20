"""Shared fixtures for datasync tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest


def write_reference(
    root: Path,
    files: dict[str, bytes | None],
    whole_hash: str,
    descriptor_name: str = "descriptor.json",
) -> Path:
    """Write a reference snapshot and its descriptor.

    Args:
        root: Directory to populate.
        files: Relative path to content; None marks a directory.
        whole_hash: Whole-snapshot hash stored in the descriptor.
        descriptor_name: File name of the descriptor.

    Returns:
        The root directory.
    """
    root.mkdir(parents=True, exist_ok=True)
    entries: dict[str, str] = {}
    for path, content in files.items():
        target = root / path
        if content is None:
            target.mkdir(parents=True, exist_ok=True)
            entries[path] = ""
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
            entries[path] = f"h-{content.decode(errors='replace')}"
    (root / descriptor_name).write_text(json.dumps({"sha256": whole_hash, "files": entries}))
    return root


@pytest.fixture
def reference_dir(tmp_path: Path) -> Path:
    """Empty directory for a reference snapshot."""
    return tmp_path / "reference"


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Path of the data directory (not created)."""
    return tmp_path / "data"


@pytest.fixture
def make_reference(reference_dir: Path) -> Callable[..., Path]:
    """Factory writing a reference snapshot into reference_dir."""

    def _make(files: dict[str, bytes | None], whole_hash: str = "A") -> Path:
        return write_reference(reference_dir, files, whole_hash)

    return _make


@pytest.fixture(autouse=True)
def reset_datasync_logger() -> Iterator[None]:
    """Undo handler changes made by the CLI's setup_logging()."""
    yield
    datasync_logger = logging.getLogger("datasync")
    for handler in datasync_logger.handlers[:]:
        datasync_logger.removeHandler(handler)
    datasync_logger.setLevel(logging.NOTSET)
    datasync_logger.propagate = True
