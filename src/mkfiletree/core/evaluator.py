from __future__ import annotations

"""
Tree Materialization Engine.

Walks the Tree Model depth-first in insertion order and issues one
filesystem operation per node: a directory creation before any of its
children, a file write for each leaf. The first failure aborts the walk and
is re-raised unchanged; whatever was created before it stays on disk.
"""

import logging
import os
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple, Union

from mkfiletree.core.builder import build_tree
from mkfiletree.core.paths import join
from mkfiletree.domain.operations import Operation
from mkfiletree.domain.tree_models import DirectoryNode, FileNode, Key, TreeNode, count_nodes
from mkfiletree.infra.fs import FileSystem, HostFileSystem, RecordingFileSystem

logger = logging.getLogger(__name__)

PathLikeStr = Union[str, "os.PathLike[str]"]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def materialize(
        root: PathLikeStr,
        tree: Any,
        *,
        fs: Optional[FileSystem] = None,
        encoding: str = "utf-8",
) -> None:
    """
    Create every directory and file described by `tree` under `root`.

    The root itself is created first (it is the implicit key of the top-level
    directory) unless it is the empty path, which stands for the current
    working directory. A bare FileNode is written at `root` itself.

    The walk keeps its own stack, so nesting depth is not bounded by the
    interpreter's recursion limit.

    Args:
        root: Base path the tree is anchored to.
        tree: DirectoryNode, FileNode or nested mapping describing the layout.
        fs: Filesystem primitives. Defaults to the host filesystem.
        encoding: Codec for text file contents.

    Raises:
        OSError: The first error raised by a filesystem primitive, as is.
        TreeDefinitionError: If `tree` is a mapping that cannot be built.
    """
    target = fs if fs is not None else HostFileSystem()
    base = Path(root)

    if isinstance(tree, FileNode):
        logger.info(f"Materializing a single file at '{base}'")
        _write_file(target, base, tree.resolve(encoding))
        return

    node = build_tree(tree)
    logger.info(f"Materializing {count_nodes(node)} entries under '{base}'")

    if os.fspath(root):
        _create_dir(target, base)

    _walk(target, base, node, encoding)

    logger.info(f"Materialization complete under '{base}'")


def plan(root: PathLikeStr, tree: Any, *, encoding: str = "utf-8") -> List[Operation]:
    """
    Dry run: list the operations `materialize` would issue, in order.

    Content callables are evaluated so the reported sizes are exact.

    Args:
        root: Base path the tree is anchored to.
        tree: DirectoryNode, FileNode or nested mapping describing the layout.
        encoding: Codec for text file contents.

    Returns:
        List[Operation]: Ordered directory creations and file writes.
    """
    recorder = RecordingFileSystem()
    materialize(root, tree, fs=recorder, encoding=encoding)
    return recorder.operations

# -----------------------------------------------------------------------------
# DEPTH-FIRST WALK
# -----------------------------------------------------------------------------

def _walk(fs: FileSystem, base: Path, node: DirectoryNode, encoding: str) -> None:
    # One (parent path, children iterator) frame per open directory
    stack: List[Tuple[Path, Iterator[Tuple[Key, TreeNode]]]] = [(base, iter(node.children))]
    while stack:
        parent, children = stack[-1]
        entry = next(children, None)
        if entry is None:
            stack.pop()
            continue
        key, child = entry
        path = join(parent, key)
        if isinstance(child, DirectoryNode):
            _create_dir(fs, path)
            stack.append((path, iter(child.children)))
        elif isinstance(child, FileNode):
            _write_file(fs, path, child.resolve(encoding))
        else:
            raise TypeError(f"Unknown tree node {child!r} at '{path}'.")


def _create_dir(fs: FileSystem, path: Path) -> None:
    logger.debug(f"mkdir {path}")
    try:
        fs.create_dir(path)
    except OSError as e:
        logger.error(f"Failed to create directory '{path}': {e}")
        raise


def _write_file(fs: FileSystem, path: Path, data: bytes) -> None:
    logger.debug(f"write {path} ({len(data)} bytes)")
    try:
        fs.write_file(path, data)
    except OSError as e:
        logger.error(f"Failed to write file '{path}': {e}")
        raise
