from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Resilience against missing and corrupted config files.
3. Save/Load round trip without touching real user data.
"""

import json
from unittest.mock import patch

from mkfiletree.domain.config import (
    get_config_path,
    get_default_config,
    load_config,
    save_config,
)


def test_default_config_targets_cwd():
    cfg = get_default_config()
    assert cfg["root"] == ""
    assert cfg["encoding"] == "utf-8"
    assert cfg["create_parents"] is True
    assert cfg["temp"] is False


def test_missing_file_returns_defaults(tmp_path):
    cfg = load_config(str(tmp_path / "nope.json"))
    assert cfg == get_default_config()


def test_corrupted_file_returns_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{ incomplete json ", encoding="utf-8")

    assert load_config(str(path)) == get_default_config()


def test_non_object_file_returns_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    assert load_config(str(path)) == get_default_config()


def test_stored_values_override_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"encoding": "latin-1", "dry_run": True}), encoding="utf-8")

    cfg = load_config(str(path))
    assert cfg["encoding"] == "latin-1"
    assert cfg["dry_run"] is True
    assert cfg["create_parents"] is True


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    cfg = get_default_config()
    cfg["keep_temp"] = True

    save_config(cfg, str(path))
    assert load_config(str(path))["keep_temp"] is True


def test_default_path_lives_in_user_data_dir(tmp_path):
    with patch("mkfiletree.domain.config.get_user_data_dir", return_value=str(tmp_path)):
        assert get_config_path() == str(tmp_path / "config.json")
