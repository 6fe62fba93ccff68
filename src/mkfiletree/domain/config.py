from __future__ import annotations

"""
Configuration Domain Management.

Default runtime settings for the command-line wrapper and JSON persistence
of user preferences. Missing or corrupted files fall back to defaults.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from mkfiletree.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
DEFAULT_ENCODING = "utf-8"


def get_config_path() -> str:
    """Location of the persistent configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Target
        "root": "",
        "temp": False,
        "keep_temp": False,

        # Writing
        "encoding": DEFAULT_ENCODING,
        "create_parents": True,
        "dry_run": False,

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from disk merged over the defaults.

    Args:
        path: JSON file to read. Defaults to the user data directory file.

    Returns:
        Dict[str, Any]: The merged configuration, defaults on any failure.
    """
    config = get_default_config()
    config_path = path or get_config_path()

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Returning defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    config.update(data)
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Persist the configuration to disk.

    Args:
        config: The configuration dictionary to save.
        path: Target JSON file. Defaults to the user data directory file.
    """
    config_path = path or get_config_path()
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
