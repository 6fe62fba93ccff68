from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the two host primitives the evaluator relies on (directory creation
and file writing), a recording implementation used for dry runs and tests,
and user data directory resolution for persistent configuration.
"""

import errno
import os
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from mkfiletree.domain.operations import Operation

PathLikeStr = Union[str, "os.PathLike[str]"]

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "mkfiletree"
UNIX_APP_DIR_NAME = ".mkfiletree"

# -----------------------------------------------------------------------------
# PRIMITIVES CONTRACT
# -----------------------------------------------------------------------------

class FileSystem(Protocol):
    """Directory Creator and File Writer consumed by the evaluator."""

    def create_dir(self, path: Path) -> None:
        ...

    def write_file(self, path: Path, data: bytes) -> None:
        ...

# -----------------------------------------------------------------------------
# HOST IMPLEMENTATION
# -----------------------------------------------------------------------------

class HostFileSystem:
    """
    Filesystem primitives backed by the operating system.

    Errors are the host's own OSError subclasses, raised unchanged.

    Args:
        create_parents: When a file write fails because its parent is missing
                        (a literal name holding separators), create the
                        parent hierarchy once and retry.
    """

    def __init__(self, create_parents: bool = True) -> None:
        self.create_parents = create_parents

    def create_dir(self, path: Path) -> None:
        # Existing directories are accepted; an existing file raises FileExistsError.
        os.makedirs(path, exist_ok=True)

    def write_file(self, path: Path, data: bytes) -> None:
        try:
            _write_bytes(path, data)
        except FileNotFoundError:
            parent = os.path.dirname(os.fspath(path))
            if not self.create_parents or not parent:
                raise
            os.makedirs(parent, exist_ok=True)
            _write_bytes(path, data)

    def __repr__(self) -> str:
        return f"HostFileSystem(create_parents={self.create_parents})"


def _write_bytes(path: PathLikeStr, data: bytes) -> None:
    with open(path, "wb") as f:
        f.write(data)

# -----------------------------------------------------------------------------
# RECORDING IMPLEMENTATION
# -----------------------------------------------------------------------------

class RecordingFileSystem:
    """
    Records every attempted operation in call order.

    Successful operations are forwarded to an optional delegate, so the same
    class serves dry runs (no delegate) and observed real runs. Paths
    registered with `fail_on` raise instead of being recorded.

    Args:
        delegate: Filesystem receiving the operations after recording.
    """

    def __init__(self, delegate: Optional[FileSystem] = None) -> None:
        self.delegate = delegate
        self.operations: List[Operation] = []
        self._failures: Dict[Path, OSError] = {}

    def fail_on(self, path: PathLikeStr, error: Optional[OSError] = None) -> None:
        """
        Make any operation on `path` raise.

        Args:
            path: Exact path (as composed by the evaluator) to fail.
            error: Exception instance to raise. Defaults to an EIO OSError.
        """
        p = Path(path)
        if error is None:
            error = OSError(errno.EIO, os.strerror(errno.EIO), os.fspath(p))
        self._failures[p] = error

    def create_dir(self, path: Path) -> None:
        self._check(path)
        if self.delegate is not None:
            self.delegate.create_dir(path)
        self.operations.append(Operation.dir(path))

    def write_file(self, path: Path, data: bytes) -> None:
        self._check(path)
        if self.delegate is not None:
            self.delegate.write_file(path, data)
        self.operations.append(Operation.file(path, data))

    def _check(self, path: Path) -> None:
        error = self._failures.get(Path(path))
        if error is not None:
            raise error

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/mkfiletree
    - Linux/Mac: ~/.mkfiletree

    Returns:
        str: Absolute path to the application data directory (not created).
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Expand environment variables and user shortcuts in a path string.

    Empty input falls back to `fallback`. The empty fallback is kept
    as-is since it denotes the current working directory.

    Args:
        path: Raw input path string.
        fallback: Value used when the input is empty.

    Returns:
        str: Expanded path.
    """
    p = (path or "").strip() or fallback
    if not p:
        return p
    return os.path.expandvars(os.path.expanduser(p))
