from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script in a separate process and validates exit
codes, stdout/stderr and the resulting filesystem side effects.
"""

import json
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "mkfiletree" / "main.py"


def run_cli(args: List[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with 'src' on PYTHONPATH.

    Args:
        args: Command line arguments (excluding interpreter and script path).
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: returncode, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    # Keep the user's stored configuration out of the picture
    env["HOME"] = str(cwd or PROJECT_ROOT)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def tree_file(tmp_path: Path) -> Path:
    doc = tmp_path / "tree.json"
    doc.write_text(json.dumps({
        "dir": {"b.txt": "world"},
        "a.txt": "hello",
        ".gitkeep": True,
        "skipped": None,
    }), encoding="utf-8")
    return doc


def test_materialize_into_root(tmp_path: Path, tree_file: Path):
    out = tmp_path / "out"
    result = run_cli([str(tree_file), "--root", str(out), "--use-defaults"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert "Created 2 directories and 3 files." in result.stdout
    assert (out / "dir" / "b.txt").read_text(encoding="utf-8") == "world"
    assert (out / "a.txt").read_text(encoding="utf-8") == "hello"
    assert (out / ".gitkeep").read_bytes() == b""
    assert not (out / "skipped").exists()


def test_dry_run_json_touches_nothing(tmp_path: Path, tree_file: Path):
    out = tmp_path / "out"
    result = run_cli([str(tree_file), "-r", str(out), "--dry-run", "--json", "--use-defaults"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    ops = json.loads(result.stdout)
    assert [op["kind"] for op in ops] == ["dir", "dir", "file", "file", "file"]
    assert ops[2]["path"].endswith("b.txt") and ops[2]["size"] == 5
    assert not out.exists()


def test_temp_root_is_removed_by_default(tmp_path: Path, tree_file: Path):
    result = run_cli([str(tree_file), "--temp", "--json", "--use-defaults"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["temporary"] is True
    assert payload["removed"] is True
    assert not Path(payload["root"]).exists()


def test_temp_root_kept_on_request(tmp_path: Path, tree_file: Path):
    result = run_cli([str(tree_file), "--temp", "--keep", "--json", "--use-defaults"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    root = Path(json.loads(result.stdout)["root"])
    try:
        assert (root / "dir" / "b.txt").read_text(encoding="utf-8") == "world"
    finally:
        shutil.rmtree(root, ignore_errors=True)


def test_invalid_tree_file_exit_code(tmp_path: Path):
    doc = tmp_path / "tree.json"
    doc.write_text("[1, 2]", encoding="utf-8")

    result = run_cli([str(doc), "--use-defaults"], cwd=tmp_path)

    assert result.returncode == 2
    assert "ERROR" in result.stderr


def test_filesystem_failure_exit_code(tmp_path: Path, tree_file: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    result = run_cli([str(tree_file), "--root", str(blocker), "--use-defaults"], cwd=tmp_path)

    assert result.returncode == 1
    assert "ERROR" in result.stderr
    assert blocker.read_text(encoding="utf-8") == "not a directory"


def test_stored_config_is_applied(tmp_path: Path, tree_file: Path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"dry_run": True}), encoding="utf-8")
    out = tmp_path / "out"

    result = run_cli([str(tree_file), "-r", str(out), "--config", str(config)], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert "operation(s) planned" in result.stdout
    assert not out.exists()


def test_unencodable_content_exit_code(tmp_path: Path):
    doc = tmp_path / "tree.json"
    doc.write_text(json.dumps({"a.txt": "é"}), encoding="utf-8")
    out = tmp_path / "out"

    result = run_cli([str(doc), "-r", str(out), "--encoding", "ascii", "--use-defaults"], cwd=tmp_path)

    assert result.returncode == 2
    assert "ERROR" in result.stderr
    assert "CRITICAL" not in result.stderr


def test_dry_run_with_temp_is_rejected(tmp_path: Path, tree_file: Path):
    result = run_cli([str(tree_file), "--temp", "--dry-run", "--use-defaults"], cwd=tmp_path)

    assert result.returncode == 2
    assert "--dry-run" in result.stderr
    assert not (tmp_path / "dir").exists()
    assert result.stdout == ""
