from __future__ import annotations

import os
import platform
from typing import Dict

KEY_FILE_NAME = ".canvas_alt_env_vars"


def get_config_path() -> str:
    """
    Locate the key file that stores provider API keys.

    The file lives in the user's home directory and holds one ``KEY=value``
    pair per line. It is only consulted when the environment does not
    provide the key.
    """
    system = platform.system()
    if system == "Windows":
        home = os.environ.get("USERPROFILE")
        if not home:
            raise RuntimeError("Unable to determine USERPROFILE on Windows")
        return os.path.join(home, KEY_FILE_NAME)
    if system in {"Darwin", "Linux"}:
        return os.path.join(os.path.expanduser("~"), KEY_FILE_NAME)
    raise ValueError(f"Unsupported operating system: {system}")


def read_all_api_keys_from_file() -> Dict[str, str]:
    config_path = get_config_path()
    if not os.path.exists(config_path):
        return {}

    keys: Dict[str, str] = {}
    with open(config_path, "r", encoding="utf-8") as file:
        for raw_line in file:
            line = raw_line.strip()
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            keys[key.strip()] = value.strip()
    return keys


def read_api_key_from_file(key_name: str) -> str | None:
    return read_all_api_keys_from_file().get(key_name)


def _write_api_keys(keys: Dict[str, str]) -> None:
    with open(get_config_path(), "w", encoding="utf-8") as file:
        file.writelines(f"{key}={value}\n" for key, value in keys.items())


def save_api_key_to_file(key_name: str, key_value: str) -> None:
    """Persist (or update) an API key in the key file."""
    keys = read_all_api_keys_from_file()
    keys[key_name] = key_value
    _write_api_keys(keys)


def delete_api_key_from_file(key_name: str) -> None:
    """Remove a key from the key file if present."""
    keys = read_all_api_keys_from_file()
    if keys.pop(key_name, None) is not None:
        _write_api_keys(keys)


def read_api_key(key_name: str) -> str | None:
    """
    Retrieve an API key from the environment, falling back to the key file.
    """
    return os.getenv(key_name) or read_api_key_from_file(key_name)


__all__ = [
    "KEY_FILE_NAME",
    "get_config_path",
    "read_all_api_keys_from_file",
    "read_api_key_from_file",
    "save_api_key_to_file",
    "delete_api_key_from_file",
    "read_api_key",
]
