"""Tests for reference sources."""

from __future__ import annotations

import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest

from datasync.sync.descriptor import load_reference
from datasync.sync.source import DirectorySource, ZipSource, open_source
from datasync.sync.types import ReferenceParseError


class TestDirectorySource:
    """Tests for DirectorySource."""

    def test_open_file(self, tmp_path: Path) -> None:
        """Should open files by relative path."""
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "a.txt").write_bytes(b"content")
        source = DirectorySource(tmp_path)
        with source.open("sub/a.txt") as f:
            assert f.read() == b"content"

    def test_missing_raises(self, tmp_path: Path) -> None:
        """Missing entries raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            DirectorySource(tmp_path).open("nope")

    def test_refuses_escape(self, tmp_path: Path) -> None:
        """Paths escaping the root are not served."""
        (tmp_path / "secret").write_text("x")
        root = tmp_path / "root"
        root.mkdir()
        with pytest.raises(FileNotFoundError):
            DirectorySource(root).open("../secret")


class TestZipSource:
    """Tests for ZipSource."""

    @pytest.fixture
    def archive(self, tmp_path: Path) -> Path:
        path = tmp_path / "bundle.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("descriptor.json", '{"sha256": "A", "files": {}}')
            zf.writestr("dir/file.txt", b"zipped")
            zf.writestr("assets/inner.txt", b"prefixed")
        return path

    def test_open_member(self, archive: Path) -> None:
        """Should open archive members by name."""
        with ZipSource(archive).open("dir/file.txt") as f:
            assert f.read() == b"zipped"

    def test_prefix(self, archive: Path) -> None:
        """Should resolve names below a prefix."""
        with ZipSource(archive, prefix="assets/").open("inner.txt") as f:
            assert f.read() == b"prefixed"

    def test_missing_raises(self, archive: Path) -> None:
        """Missing members raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ZipSource(archive).open("nope")

    def test_corrupt_archive_raises_os_error(self, tmp_path: Path) -> None:
        """A file that is not a zip archive fails like any unreadable source."""
        path = tmp_path / "bundle.zip"
        path.write_bytes(b"not a zip")
        with pytest.raises(OSError, match="Not a valid zip archive"):
            ZipSource(path).open("descriptor.json")

    def test_corrupt_archive_is_reference_error(self, tmp_path: Path) -> None:
        """Loading the descriptor from a corrupt archive is a reference error."""
        path = tmp_path / "bundle.zip"
        path.write_bytes(b"not a zip")
        with pytest.raises(ReferenceParseError):
            load_reference(ZipSource(path))

    def test_archive_opened_once(self, archive: Path) -> None:
        """Several members are served from one open archive."""
        with patch("datasync.sync.source.zipfile.ZipFile", wraps=zipfile.ZipFile) as zip_cls:
            with ZipSource(archive) as source:
                with source.open("dir/file.txt") as f:
                    assert f.read() == b"zipped"
                with source.open("descriptor.json") as f:
                    assert f.read().startswith(b"{")
        assert zip_cls.call_count == 1

    def test_reopens_after_close(self, archive: Path) -> None:
        source = ZipSource(archive)
        source.open("dir/file.txt").close()
        source.close()
        with source.open("dir/file.txt") as f:
            assert f.read() == b"zipped"
        source.close()


class TestOpenSource:
    """Tests for open_source()."""

    def test_directory(self, tmp_path: Path) -> None:
        assert isinstance(open_source(tmp_path), DirectorySource)

    def test_zip(self, tmp_path: Path) -> None:
        path = tmp_path / "bundle.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("descriptor.json", "{}")
        assert isinstance(open_source(path), ZipSource)
