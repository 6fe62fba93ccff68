from __future__ import annotations

"""
Filesystem Operation Records.

Immutable descriptions of the side effects issued while materializing a
tree. Produced by dry runs and by the recording filesystem.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

DIR = "dir"
FILE = "file"


@dataclass(frozen=True)
class Operation:
    """
    A single directory creation or file write.

    Attributes:
        kind: Either "dir" or "file".
        path: Target path of the operation.
        data: Written bytes for files, None for directories.
    """
    kind: str
    path: Path
    data: Optional[bytes] = None

    @classmethod
    def dir(cls, path: Union[str, "os.PathLike[str]"]) -> "Operation":
        return cls(DIR, Path(path))

    @classmethod
    def file(cls, path: Union[str, "os.PathLike[str]"], data: Union[str, bytes] = b"") -> "Operation":
        if isinstance(data, str):
            data = data.encode("utf-8")
        return cls(FILE, Path(path), bytes(data))

    @property
    def is_dir(self) -> bool:
        return self.kind == DIR

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view used by the CLI JSON output."""
        out: Dict[str, Any] = {"kind": self.kind, "path": str(self.path)}
        if self.data is not None:
            out["size"] = len(self.data)
        return out

    def describe(self) -> str:
        if self.is_dir:
            return f"mkdir  {self.path}"
        size = len(self.data or b"")
        return f"write  {self.path} ({size} bytes)"
