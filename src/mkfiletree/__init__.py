from __future__ import annotations

"""
mkfiletree: materialize a declarative directory/file tree in one call.

    from mkfiletree import create, create_temp

    create({"docs": {"README.md": "# Project"}, "LICENSE": "MIT"})

    with create_temp({"x": "y"}) as root:
        ...
"""

from mkfiletree.core.builder import TreeDefinitionError, build_tree, load_tree_file
from mkfiletree.core.evaluator import materialize, plan
from mkfiletree.core.paths import compose, join
from mkfiletree.core.temp_root import TempRoot, materialize_temp, new_temp_root
from mkfiletree.domain.operations import Operation
from mkfiletree.domain.tree_models import (
    ComputedKey,
    DirectoryNode,
    FileNode,
    LiteralKey,
)
from mkfiletree.infra.fs import FileSystem, HostFileSystem, RecordingFileSystem

__version__ = "0.1.0"


def create(tree, **kwargs) -> None:
    """Materialize `tree` relative to the current working directory."""
    materialize("", tree, **kwargs)


create_temp = materialize_temp

__all__ = [
    "ComputedKey",
    "DirectoryNode",
    "FileNode",
    "FileSystem",
    "HostFileSystem",
    "LiteralKey",
    "Operation",
    "RecordingFileSystem",
    "TempRoot",
    "TreeDefinitionError",
    "build_tree",
    "compose",
    "create",
    "create_temp",
    "join",
    "load_tree_file",
    "materialize",
    "materialize_temp",
    "new_temp_root",
    "plan",
]
