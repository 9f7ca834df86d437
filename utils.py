# utils.py
"""
Utility functions for the animation framework.

This module provides helper functions, such as logging setup and config
loading, that are used across different parts of the application but do
not belong to a specific domain like spawning or rendering.
"""
import copy
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

from settings import ConfigurationError

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates a log
#     directory if it doesn't exist. Sets up a console handler and a
#     rotating file handler.
#   - Invariants: After this function runs, the logging system is
#     initialized and ready for use throughout the application.
#
# merge_preset(config: Dict[str, Any], name: Optional[str]) -> Dict[str, Any]:
#   - Inputs:
#     - config: The full configuration dictionary.
#     - name: A key of config["presets"], or None for no preset.
#   - Outputs: A new configuration dictionary where the preset's
#     "animation" values override config["animation"] and its
#     "backdrop" replaces config["backdrop"].
#   - Side Effects: None. The input dictionary is not modified.
#   - Invariants: Raises ConfigurationError for unknown preset names.

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/floating_shapes.log')

    # Ensure the log directory exists
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Clear existing handlers to avoid duplication
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates when the log reaches 1MB, keeps 5 backup logs.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}.")
    logging.debug(f"Log file path: {log_file_path}")

def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
        logging.info("Configuration loaded successfully.")
        return config
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

def merge_preset(config: Dict[str, Any], name: str = None) -> Dict[str, Any]:
    """
    Returns a copy of the config with the named preset applied on top.

    Only the "animation" and "backdrop" sections are affected. Passing
    None returns an unmodified copy.
    """
    merged = copy.deepcopy(config)
    if name is None:
        return merged

    presets = config.get('presets', {})
    if name not in presets:
        available = ", ".join(sorted(presets)) or "none"
        msg = f"Configuration error: unknown preset '{name}' (available: {available})."
        logging.critical(msg)
        raise ConfigurationError(msg)

    preset = presets[name]
    animation = merged.setdefault('animation', {})
    animation.update(copy.deepcopy(preset.get('animation', {})))
    if 'backdrop' in preset:
        merged['backdrop'] = copy.deepcopy(preset['backdrop'])

    logging.info(f"Applied preset '{name}'.")
    return merged
