from __future__ import annotations

"""
Temporary-Root Integration.

Provisions a uniquely named temporary directory, materializes a tree into
it and hands back a handle governing the directory's lifetime.
"""

import logging
import os
import shutil
import tempfile
import weakref
from pathlib import Path
from typing import Any, Optional

from mkfiletree.core.evaluator import materialize
from mkfiletree.infra.fs import FileSystem

logger = logging.getLogger(__name__)


class TempRoot:
    """
    Handle over a provisioned temporary directory.

    The directory and everything below it is removed on `cleanup()`, when
    leaving a `with` block, when the handle is garbage collected, or at
    interpreter exit, unless `keep()` was called. The handle is path-like,
    so it can be passed to `open`, `os` functions or used as a computed key
    in another tree.
    """

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self._finalizer = weakref.finalize(self, shutil.rmtree, path, ignore_errors=True)

    def cleanup(self) -> None:
        """Remove the directory recursively. Safe to call more than once."""
        if self._finalizer.alive:
            logger.debug(f"Removing temporary root '{self.path}'")
        self._finalizer()

    def keep(self) -> Path:
        """Hand the directory over to the caller; it will not be removed."""
        self._finalizer.detach()
        return self.path

    @property
    def closed(self) -> bool:
        return not self.path.exists()

    def __fspath__(self) -> str:
        return str(self.path)

    def __enter__(self) -> "TempRoot":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.cleanup()

    def __repr__(self) -> str:
        return f"TempRoot({str(self.path)!r})"


def new_temp_root(
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        dir: Optional[str] = None,
) -> TempRoot:
    """Provision an empty temporary directory (Temporary-Root Provider)."""
    return TempRoot(tempfile.mkdtemp(suffix=suffix, prefix=prefix, dir=dir))


def materialize_temp(
        tree: Any,
        *,
        fs: Optional[FileSystem] = None,
        encoding: str = "utf-8",
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        dir: Optional[str] = None,
) -> TempRoot:
    """
    Materialize `tree` inside a fresh temporary directory.

    If provisioning fails its error is raised and nothing is materialized.
    If materialization fails the temporary directory is removed and the
    filesystem error is re-raised unchanged; no handle is returned.

    Args:
        tree: DirectoryNode or nested mapping describing the layout.
        fs: Filesystem primitives. Defaults to the host filesystem.
        encoding: Codec for text file contents.
        prefix: Optional prefix of the directory name.
        suffix: Optional suffix of the directory name.
        dir: Parent directory for the temporary root.

    Returns:
        TempRoot: Handle owning the populated directory.
    """
    root = new_temp_root(prefix=prefix, suffix=suffix, dir=dir)
    logger.debug(f"Provisioned temporary root '{root.path}'")
    try:
        materialize(os.fspath(root), tree, fs=fs, encoding=encoding)
    except BaseException:
        root.cleanup()
        raise
    return root
