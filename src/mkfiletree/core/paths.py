from __future__ import annotations

"""
Path Accumulator.

Composes the path under which each node's side effect happens by joining
keys onto a running base path. Pure functions, no filesystem access.
"""

import os
from pathlib import Path
from typing import Iterable, Union

from mkfiletree.domain.tree_models import Key

PathLikeStr = Union[str, "os.PathLike[str]"]


def join(base: PathLikeStr, key: Key) -> Path:
    """
    Append a key's segment(s) onto a base path.

    Uses pathlib joining only: separators inside a literal name produce
    several components, an absolute computed path replaces the base, and
    nothing is normalized or resolved.

    Args:
        base: Accumulated path so far. The empty path stands for the cwd.
        key: Literal or computed key of the child.

    Returns:
        Path: The composed path.
    """
    return Path(base) / os.fspath(key)


def compose(root: PathLikeStr, keys: Iterable[Key]) -> Path:
    """Fold `join` over a chain of keys, from the root down."""
    path = Path(root)
    for key in keys:
        path = join(path, key)
    return path
