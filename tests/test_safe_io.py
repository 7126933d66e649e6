"""Tests for entgraph.common.safe_io -- read-only input access."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from entgraph.common.safe_io import SafeReader, validate_input_path


@pytest.fixture()
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.bin"
    path.write_bytes(bytes(range(256)) * 3)
    return path


class TestValidateInputPath:
    """Checks performed before a file is opened."""

    def test_valid_file(self, sample_file: Path) -> None:
        assert validate_input_path(sample_file) == sample_file.resolve()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="does not exist"):
            validate_input_path(tmp_path / "missing.bin")

    def test_directory_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(OSError, match="not a regular file"):
            validate_input_path(tmp_path)

    def test_symlink_resolved(self, sample_file: Path, tmp_path: Path) -> None:
        link = tmp_path / "link.bin"
        try:
            link.symlink_to(sample_file)
        except OSError:
            pytest.skip("symlinks not supported on this platform")
        assert validate_input_path(link) == sample_file.resolve()


class TestSafeReader:
    """Read-only reader behaviour."""

    def test_read_all(self, sample_file: Path) -> None:
        with SafeReader(sample_file) as reader:
            assert reader.read_all() == bytes(range(256)) * 3

    def test_read_all_empty(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.bin"
        empty.write_bytes(b"")
        with SafeReader(empty) as reader:
            assert reader.read_all() == b""

    def test_public_api(self) -> None:
        public = {name for name in vars(SafeReader) if not name.startswith("_")}
        assert public == {"close", "path", "read_all"}

    def test_closed_reader_raises(self, sample_file: Path) -> None:
        reader = SafeReader(sample_file)
        with pytest.raises(RuntimeError, match="not open"):
            reader.read_all()

    def test_does_not_modify_file(self, sample_file: Path) -> None:
        before = sample_file.stat()
        with SafeReader(sample_file) as reader:
            reader.read_all()
        after = sample_file.stat()
        assert before.st_size == after.st_size
        assert before.st_mtime_ns == after.st_mtime_ns

    def test_close_is_idempotent(self, sample_file: Path) -> None:
        reader = SafeReader(sample_file)
        with reader:
            pass
        reader.close()
        assert "closed" in repr(reader)

    def test_missing_file_raises_on_construction(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            SafeReader(tmp_path / "nope.bin")

    @pytest.mark.skipif(
        os.name != "posix" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced for root or on this platform",
    )
    def test_unreadable_file(self, sample_file: Path) -> None:
        sample_file.chmod(0o000)
        try:
            with pytest.raises(PermissionError):
                validate_input_path(sample_file)
        finally:
            sample_file.chmod(0o644)
