"""
Platform-layer utilities shared across canvas_alt.
"""

from .logging import COLORS, ColorFormatter, colorize, create_logger
from .config import (
    get_config_path,
    read_api_key,
    read_api_key_from_file,
    read_all_api_keys_from_file,
    save_api_key_to_file,
    delete_api_key_from_file,
)
from .config_loader import build_config, load_config_file

__all__ = [
    "COLORS",
    "ColorFormatter",
    "colorize",
    "create_logger",
    "get_config_path",
    "read_api_key",
    "read_api_key_from_file",
    "read_all_api_keys_from_file",
    "save_api_key_to_file",
    "delete_api_key_from_file",
    "build_config",
    "load_config_file",
]
