from __future__ import annotations

"""
Declarative Tree Data Models.

Provides the recursive type definitions describing a layout to materialize:
directories holding ordered children and files holding resolvable content.
Keys identify a child under its parent, either as a literal path segment or
as a pre-computed path value.
"""

import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Tuple, Union

# -----------------------------------------------------------------------------
# KEYS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LiteralKey:
    """
    A plain path segment string, joined onto the parent path as-is.

    Attributes:
        name: Segment text. May contain separators ("path/as/name").
    """
    name: str

    def __fspath__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ComputedKey:
    """
    A path value computed by the caller and used as the join target.

    Typical values are a TempRoot handle or a pathlib.Path. An absolute
    path replaces the accumulated base, following host join semantics.

    Attributes:
        path: Any path-like value.
    """
    path: Union[str, "os.PathLike[str]"]

    def __fspath__(self) -> str:
        return os.fspath(self.path)

    @classmethod
    def from_segments(cls, *segments: Union[str, "os.PathLike[str]"]) -> "ComputedKey":
        """Build a key from several segments joined in order."""
        return cls(PurePath(*segments))


Key = Union[LiteralKey, ComputedKey]

# -----------------------------------------------------------------------------
# NODES
# -----------------------------------------------------------------------------

Content = Union[str, bytes, bytearray, memoryview, Callable[[], Union[str, bytes, bytearray, memoryview]]]


@dataclass(frozen=True)
class FileNode:
    """
    Represents a leaf entry (file) in the tree.

    Attributes:
        content: Text, bytes-like data, or a zero-argument callable producing
                 one of those. Callables run only when the node is visited.
    """
    content: Content

    def resolve(self, encoding: str = "utf-8") -> bytes:
        """
        Reduce the content to the bytes written on disk.

        Args:
            encoding: Codec used when the content is text.

        Returns:
            bytes: File payload.

        Raises:
            TypeError: If the (possibly produced) content is neither text nor bytes-like.
        """
        value = self.content
        if callable(value):
            value = value()
        if isinstance(value, str):
            return value.encode(encoding)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value)
        raise TypeError(
            f"File content must be str or bytes-like, got {type(value).__name__}."
        )


@dataclass(frozen=True)
class DirectoryNode:
    """
    Represents an interior entry (directory) in the tree.

    Attributes:
        children: Ordered (key, node) pairs. Order is the creation order;
                  duplicate keys are allowed.
    """
    children: Tuple[Tuple[Key, "TreeNode"], ...] = ()

    def __iter__(self):
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)


TreeNode = Union[DirectoryNode, FileNode]


def count_nodes(node: TreeNode) -> int:
    """Count every node below (and excluding) the given one."""
    total = 0
    pending = [node]
    while pending:
        current = pending.pop()
        if isinstance(current, DirectoryNode):
            total += len(current.children)
            pending.extend(child for _, child in current.children)
    return total
