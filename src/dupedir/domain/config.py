from __future__ import annotations

"""
Configuration Domain Management.

Holds the default analysis settings and persists the last used settings
as JSON in the user data directory, falling back to defaults when the
stored file is missing or corrupted.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from dupedir.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
CURRENT_CONFIG_VERSION = "1.0.0"

DEFAULT_MIN_SHARED_FILES = 3
DEFAULT_MAX_CANDIDATE_DIRS = 50

# Thresholds worth remembering between runs. Actions and modes (find,
# aggregate_hierarchy) are chosen per run on the command line.
PERSISTED_KEYS = ("min_shared_files", "max_candidate_dirs", "top")


def get_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Inputs
        "scan_dirs": [],
        "listing_files": [],

        # Analysis
        "find": False,
        "aggregate_hierarchy": False,
        "min_shared_files": DEFAULT_MIN_SHARED_FILES,
        "max_candidate_dirs": DEFAULT_MAX_CANDIDATE_DIRS,

        # Output (0 shows every candidate)
        "top": 0,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the persisted settings merged over the defaults.

    Args:
        config_path: Optional override of the configuration file location.

    Returns:
        Dict[str, Any]: The configuration, defaults on any failure.
    """
    path = config_path or get_config_path()
    config = get_default_config()

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    settings = data.get("settings", {})
    if isinstance(settings, dict):
        config.update({k: v for k, v in settings.items() if k in PERSISTED_KEYS})
    return config


def save_config(config: Dict[str, Any], config_path: Optional[str] = None) -> bool:
    """
    Persist the reusable part of a configuration.

    Args:
        config: The configuration to save.
        config_path: Optional override of the configuration file location.

    Returns:
        bool: True if the file was written.
    """
    path = config_path or get_config_path()
    state = {
        "version": CURRENT_CONFIG_VERSION,
        "settings": {k: config[k] for k in PERSISTED_KEYS if k in config},
    }
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
        return False

    logger.debug(f"Configuration saved to {path}")
    return True
