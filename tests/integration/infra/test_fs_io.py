from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates the host primitives, the recording filesystem and user data
directory resolution across OS conventions.
"""

import errno
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from mkfiletree.domain.operations import Operation
from mkfiletree.infra.fs import (
    HostFileSystem,
    RecordingFileSystem,
    get_user_data_dir,
    normalize_path,
)

# -----------------------------------------------------------------------------
# HOST PRIMITIVES
# -----------------------------------------------------------------------------

def test_create_dir_is_idempotent(tmp_path: Path):
    fs = HostFileSystem()
    target = tmp_path / "deep" / "nested"

    fs.create_dir(target)
    fs.create_dir(target)

    assert target.is_dir()


def test_create_dir_over_file_raises(tmp_path: Path):
    (tmp_path / "f").write_bytes(b"")

    with pytest.raises(FileExistsError):
        HostFileSystem().create_dir(tmp_path / "f")


def test_write_file_truncates(tmp_path: Path):
    fs = HostFileSystem()
    target = tmp_path / "a.bin"

    fs.write_file(target, b"long content")
    fs.write_file(target, b"short")

    assert target.read_bytes() == b"short"


def test_write_file_creates_missing_parents(tmp_path: Path):
    target = tmp_path / "path" / "as" / "name"
    HostFileSystem().write_file(target, b"x")

    assert target.read_bytes() == b"x"


def test_write_file_without_parent_creation(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        HostFileSystem(create_parents=False).write_file(tmp_path / "a" / "b", b"x")


def test_write_file_permission_error_propagates():
    with patch("mkfiletree.infra.fs.open", side_effect=PermissionError("denied"), create=True):
        with pytest.raises(PermissionError, match="denied"):
            HostFileSystem().write_file(Path("whatever.txt"), b"x")

# -----------------------------------------------------------------------------
# RECORDING FILESYSTEM
# -----------------------------------------------------------------------------

def test_recording_without_delegate_touches_nothing(tmp_path: Path):
    fs = RecordingFileSystem()
    fs.create_dir(tmp_path / "d")
    fs.write_file(tmp_path / "d" / "f", b"x")

    assert fs.operations == [Operation.dir(tmp_path / "d"), Operation.file(tmp_path / "d" / "f", b"x")]
    assert not (tmp_path / "d").exists()


def test_recording_forwards_to_delegate(tmp_path: Path):
    fs = RecordingFileSystem(HostFileSystem())
    fs.create_dir(tmp_path / "d")
    fs.write_file(tmp_path / "d" / "f", b"x")

    assert (tmp_path / "d" / "f").read_bytes() == b"x"
    assert len(fs.operations) == 2


def test_recording_failed_operations_are_not_recorded():
    fs = RecordingFileSystem()
    fs.fail_on("bad")

    with pytest.raises(OSError) as exc_info:
        fs.create_dir(Path("bad"))

    assert exc_info.value.errno == errno.EIO
    assert fs.operations == []


def test_recording_delegate_errors_are_not_recorded(tmp_path: Path):
    (tmp_path / "f").write_bytes(b"")
    fs = RecordingFileSystem(HostFileSystem())

    with pytest.raises(FileExistsError):
        fs.create_dir(tmp_path / "f")

    assert fs.operations == []

# -----------------------------------------------------------------------------
# PATH RESOLUTION
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows():
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            path = get_user_data_dir()
            assert path.replace("\\", "/").endswith("Local/mkfiletree")


def test_get_user_data_dir_unix():
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value="/home/testuser"):
            path = get_user_data_dir()
            assert path.replace("\\", "/").endswith("/home/testuser/.mkfiletree")


def test_normalize_path_expansion():
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback="")
        assert path.replace("\\", "/") == "my_folder/sub"


def test_normalize_path_keeps_empty_fallback():
    assert normalize_path("   ", fallback="") == ""
    assert normalize_path(None, fallback="base") == "base"
