"""
Unit tests for the raw file system wrappers.
"""

import errno
import os
import shutil
import stat
import tempfile
from pathlib import Path

import aiofiles.os
import pytest

from safefs import primitives
from safefs.exceptions import PrimitiveError
from safefs.primitives import AccessMode


class TestPrimitives:
    """Test cases for the primitive access layer."""

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory for testing."""
        temp_dir = tempfile.mkdtemp()
        yield temp_dir
        shutil.rmtree(temp_dir, ignore_errors=True)

    def test_access_mode_values(self):
        assert AccessMode.EXISTS == os.F_OK
        assert AccessMode.READABLE == os.R_OK
        assert AccessMode.WRITABLE == os.W_OK
        assert AccessMode.EXECUTABLE == os.X_OK

    @pytest.mark.asyncio
    async def test_check_access_missing_path(self, temp_dir):
        """Test a missing path raises a not-found error for every mode."""
        missing = os.path.join(temp_dir, "missing.txt")
        for mode in AccessMode:
            with pytest.raises(FileNotFoundError) as exc_info:
                await primitives.check_access(missing, mode)
            assert exc_info.value.errno == errno.ENOENT
            assert exc_info.value.filename == missing

    @pytest.mark.asyncio
    async def test_check_access_existing_path(self, temp_dir):
        path = Path(temp_dir) / "present.txt"
        path.write_text("content")
        await primitives.check_access(path, AccessMode.EXISTS)
        await primitives.check_access(str(path), AccessMode.READABLE)

    @pytest.mark.asyncio
    async def test_check_access_denied(self, temp_dir, monkeypatch):
        """Test an existing path that fails the check raises a permission error."""
        path = Path(temp_dir) / "locked.txt"
        path.write_text("content")

        async def deny(path, mode):
            return False

        monkeypatch.setattr(aiofiles.os, "access", deny)

        with pytest.raises(PermissionError) as exc_info:
            await primitives.check_access(path, AccessMode.WRITABLE)
        assert exc_info.value.errno == errno.EACCES

    @pytest.mark.asyncio
    async def test_read_and_write(self, temp_dir):
        path = os.path.join(temp_dir, "data.txt")
        await primitives.write_file_raw(path, "Hello, World! 🌍")
        assert await primitives.read_file_raw(path) == "Hello, World! 🌍"

    @pytest.mark.asyncio
    async def test_write_bytes(self, temp_dir):
        path = os.path.join(temp_dir, "data.bin")
        await primitives.write_file_raw(path, b"\x00\x01binary")
        assert Path(path).read_bytes() == b"\x00\x01binary"

    @pytest.mark.asyncio
    async def test_write_applies_mode_on_create(self, temp_dir):
        path = os.path.join(temp_dir, "private.txt")
        await primitives.write_file_raw(path, "secret", mode=0o600)
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    @pytest.mark.asyncio
    async def test_read_missing_file(self, temp_dir):
        """Test read failures name the path and keep the OS error."""
        missing = os.path.join(temp_dir, "missing.txt")
        with pytest.raises(PrimitiveError) as exc_info:
            await primitives.read_file_raw(missing)

        error = exc_info.value
        assert str(error) == f"failed to read file at: {missing}"
        assert isinstance(error.__cause__, FileNotFoundError)
        assert error.errno == errno.ENOENT

    @pytest.mark.asyncio
    async def test_write_into_missing_directory(self, temp_dir):
        path = os.path.join(temp_dir, "no", "such", "dir.txt")
        with pytest.raises(PrimitiveError) as exc_info:
            await primitives.write_file_raw(path, "content")
        assert "failed to write file at" in str(exc_info.value)
        assert exc_info.value.errno == errno.ENOENT

    @pytest.mark.asyncio
    async def test_remove_file(self, temp_dir):
        path = Path(temp_dir) / "doomed.txt"
        path.write_text("content")
        await primitives.remove_file_raw(path)
        assert not path.exists()

        with pytest.raises(PrimitiveError) as exc_info:
            await primitives.remove_file_raw(path)
        assert str(exc_info.value) == f"failed to delete file at: {path}"
        assert exc_info.value.errno == errno.ENOENT

    @pytest.mark.asyncio
    async def test_list_directory(self, temp_dir):
        (Path(temp_dir) / "b.txt").write_text("b")
        (Path(temp_dir) / "a.txt").write_text("a")
        (Path(temp_dir) / "sub").mkdir()

        entries = await primitives.list_directory_raw(temp_dir)
        assert sorted(entries) == ["a.txt", "b.txt", "sub"]

    @pytest.mark.asyncio
    async def test_list_missing_directory(self, temp_dir):
        missing = os.path.join(temp_dir, "missing")
        with pytest.raises(PrimitiveError) as exc_info:
            await primitives.list_directory_raw(missing)
        assert str(exc_info.value) == f"failed to read directory at: {missing}"
