from __future__ import annotations

"""
Configuration Domain Management.

Holds the runtime configuration dictionary that drives the pipeline and its
optional persisted counterpart in the user data directory.

Only diagnostics preferences are persisted. Isolation is decided by the
command line of each run, and the file-format contracts (descriptor pattern,
source extension, directive prefix, aggregate name, global marker, staging
directory) are never read from disk.
"""

import json
import logging
import os
from typing import Any, Dict

from guext.domain.constants import (
    DEFAULT_AGGREGATE_FILE_NAME,
    DEFAULT_DESCRIPTOR_PATTERN,
    DEFAULT_DIRECTIVE_PREFIX,
    DEFAULT_GLOBAL_MARKER,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SOURCE_EXTENSION,
    DEFAULT_STAGING_DIR_NAME,
)
from guext.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")
CURRENT_CONFIG_VERSION = "1.1.0"

# The only keys read from or written to the config file
PERSISTED_KEYS = ("log_level", "log_file")


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Target
        "target_dir": "",
        "disable_isolation": False,
        "staging_dir_name": DEFAULT_STAGING_DIR_NAME,

        # File-format contracts
        "descriptor_pattern": DEFAULT_DESCRIPTOR_PATTERN,
        "source_extension": DEFAULT_SOURCE_EXTENSION,
        "directive_prefix": DEFAULT_DIRECTIVE_PREFIX,
        "aggregate_file_name": DEFAULT_AGGREGATE_FILE_NAME,
        "global_marker": DEFAULT_GLOBAL_MARKER,

        # Diagnostics
        "log_level": DEFAULT_LOG_LEVEL,
        "log_file": "",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """
    Load the persisted preferences merged over the defaults.

    A missing file yields the defaults. A corrupted file is reported and
    ignored. Keys outside PERSISTED_KEYS are dropped with a warning, so a
    stored file can never turn isolation off or change what gets rewritten.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Using defaults.")
        return config

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read config file '{CONFIG_FILE}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    stored = data.get("settings", {})
    if not isinstance(stored, dict):
        logger.warning("Corrupted 'settings' section in config file. Using defaults.")
        return config

    ignored = sorted(k for k in stored if k not in PERSISTED_KEYS)
    if ignored:
        logger.warning(f"Ignoring non-persistable settings in '{CONFIG_FILE}': {', '.join(ignored)}")

    for key in PERSISTED_KEYS:
        if key in stored:
            config[key] = stored[key]

    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the diagnostics preferences of a configuration.

    Args:
        config: Configuration to store; only PERSISTED_KEYS are written.

    Raises:
        OSError: If the file cannot be written.
    """
    settings = {k: config[k] for k in PERSISTED_KEYS if k in config}

    os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
    with open(CONFIG_FILE, "w", encoding="utf-8") as f:
        json.dump(
            {"version": CURRENT_CONFIG_VERSION, "settings": settings},
            f,
            ensure_ascii=False,
            indent=4,
        )
    logger.debug(f"Configuration saved to {CONFIG_FILE}")
