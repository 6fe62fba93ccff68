from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Path manipulation so the 'src' directory is importable without install.
2. Shared tree descriptions and a recording filesystem.
"""

import os
import sys
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from mkfiletree.infra.fs import RecordingFileSystem  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def recorder() -> RecordingFileSystem:
    """A filesystem that only records operations (no disk access)."""
    return RecordingFileSystem()


@pytest.fixture
def project_tree() -> Dict[str, Any]:
    """
    A project scaffold exercising nesting, computed keys and value shortcuts.

    Returns:
        Dict[str, Any]: Tree description in mapping notation.
    """
    project_name = "Python project"
    adr_directory = "adr"
    adr_template = "\n".join(["# NUMBER. TITLE", "", "Date: DATE"])

    def markdown(name: str) -> str:
        return f"{name}.md"

    return {
        "/".join(["long", "path"]): {
            markdown("README"): f"# {project_name}",
            "docs": {
                markdown("README"): "# Documentation",
                "assets": {},
                "examples": {},
            },
            adr_directory: {
                "templates": {
                    markdown("template"): adr_template,
                },
            },
            "LICENSE": "MIT",
            ".adr-dir": adr_directory,
        },
        "other": {
            "not-create-1": False,
            "not-create-2": None,
            ".gitkeep": True,
            "path/as/file-name": "file path",
            "path": {
                "file": "existing path",
            },
        },
    }
