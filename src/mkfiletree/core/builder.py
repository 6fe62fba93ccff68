from __future__ import annotations

"""
Tree Builder.

Turns the declarative notation (a nested mapping, written as a dict literal
or parsed from JSON) into the Tree Model. Validation happens here, before
any filesystem mutation is attempted.

Value conventions:
- mapping          -> directory
- None / False     -> entry skipped
- True             -> empty file
- str / bytes-like -> file content
- callable         -> lazily produced file content
"""

import json
import logging
import os
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from mkfiletree.domain.tree_models import (
    ComputedKey,
    DirectoryNode,
    FileNode,
    Key,
    LiteralKey,
    TreeNode,
)

logger = logging.getLogger(__name__)


class TreeDefinitionError(TypeError):
    """Raised when a tree description cannot be turned into a Tree Model."""

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(spec: Any) -> DirectoryNode:
    """
    Convert a nested mapping into a DirectoryNode, preserving key order.

    An already built DirectoryNode is checked (keys and node types, at every
    depth) and returned as is.

    Args:
        spec: Top-level mapping, or an already built DirectoryNode.

    Returns:
        DirectoryNode: Root of the Tree Model (its own key is implicit).

    Raises:
        TreeDefinitionError: On unsupported key or value types.
    """
    if isinstance(spec, DirectoryNode):
        _check_prebuilt(spec, trail=())
        return spec
    if not isinstance(spec, Mapping):
        raise TreeDefinitionError(
            f"Tree root must be a mapping, received {type(spec).__name__}."
        )
    return _build_directory(spec, trail=())


def to_key(raw: Any, trail: Tuple[str, ...] = ()) -> Key:
    """
    Classify a mapping key as a literal segment or a computed path value.

    Args:
        raw: str, os.PathLike, a tuple of those, or an existing Key.
        trail: Location in the tree, used in error messages.

    Returns:
        Key: LiteralKey or ComputedKey.
    """
    if isinstance(raw, (LiteralKey, ComputedKey)):
        return raw
    if isinstance(raw, str):
        return LiteralKey(raw)
    if isinstance(raw, os.PathLike):
        return ComputedKey(raw)
    if isinstance(raw, tuple) and raw and all(isinstance(p, (str, os.PathLike)) for p in raw):
        return ComputedKey.from_segments(*raw)
    raise TreeDefinitionError(
        f"Unsupported key {raw!r} at {_where(trail)}: expected str, path-like or tuple of segments."
    )


def load_tree_file(path: str) -> DirectoryNode:
    """
    Read a JSON tree description from disk.

    JSON objects keep their key order, null/false skip an entry and true
    creates an empty file.

    Args:
        path: Location of the JSON document.

    Returns:
        DirectoryNode: The parsed Tree Model.

    Raises:
        OSError: If the file cannot be read.
        TreeDefinitionError: If the document is not valid JSON or not a tree.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise TreeDefinitionError(f"Invalid JSON in '{path}': {e}") from e

    logger.debug(f"Loaded tree description from {path}")
    return build_tree(data)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _build_directory(spec: Mapping[Any, Any], trail: Tuple[str, ...]) -> DirectoryNode:
    # Frames: (pending items, built children, trail, key under the parent)
    stack: List[Tuple[Iterator[Tuple[Any, Any]], List[Tuple[Key, TreeNode]], Tuple[str, ...], Optional[Key]]] = [
        (iter(spec.items()), [], trail, None)
    ]
    while True:
        items, children, here, own_key = stack[-1]
        entry = next(items, None)
        if entry is None:
            stack.pop()
            built = DirectoryNode(tuple(children))
            if not stack:
                return built
            stack[-1][1].append((own_key, built))
            continue

        raw_key, value = entry
        key = to_key(raw_key, here)
        child_trail = here + (os.fspath(key),)
        if isinstance(value, Mapping):
            stack.append((iter(value.items()), [], child_trail, key))
            continue
        node = _build_leaf(value, child_trail)
        if node is not None:
            children.append((key, node))


def _build_leaf(value: Any, trail: Tuple[str, ...]) -> Optional[TreeNode]:
    # bool is checked before anything else, True must not reach FileNode as content
    if value is None or value is False:
        return None
    if value is True:
        return FileNode(b"")
    if isinstance(value, DirectoryNode):
        _check_prebuilt(value, trail)
        return value
    if isinstance(value, FileNode):
        return value
    if isinstance(value, (str, bytes, bytearray, memoryview)) or callable(value):
        return FileNode(value)
    raise TreeDefinitionError(
        f"Unsupported value of type {type(value).__name__} at {_where(trail)}."
    )


def _check_prebuilt(node: DirectoryNode, trail: Tuple[str, ...]) -> None:
    pending = [(node, trail)]
    while pending:
        current, here = pending.pop()
        for entry in current.children:
            if not (isinstance(entry, tuple) and len(entry) == 2):
                raise TreeDefinitionError(
                    f"Malformed child entry {entry!r} at {_where(here)}: expected a (key, node) pair."
                )
            key, child = entry
            if not isinstance(key, (LiteralKey, ComputedKey)):
                raise TreeDefinitionError(
                    f"Unsupported key {key!r} at {_where(here)}: expected LiteralKey or ComputedKey."
                )
            child_trail = here + (os.fspath(key),)
            if isinstance(child, DirectoryNode):
                pending.append((child, child_trail))
            elif not isinstance(child, FileNode):
                raise TreeDefinitionError(
                    f"Unsupported node of type {type(child).__name__} at {_where(child_trail)}."
                )


def _where(trail: Tuple[str, ...]) -> str:
    return "'" + "/".join(trail) + "'" if trail else "<root>"
