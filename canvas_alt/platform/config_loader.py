from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Any, Dict, Mapping, Type, TypeVar

from canvas_alt._optional import require_extra

ConfigT = TypeVar("ConfigT")


def _parse_yaml(text: str) -> Any:
    try:
        import yaml
    except ImportError:  # pragma: no cover - optional dependency guard
        require_extra("YAML configuration parsing", extras="config")
    return yaml.safe_load(text)


def load_config_file(path: str | Path) -> Dict[str, Any]:
    """
    Load a JSON or YAML configuration file into a dictionary.

    Empty files yield an empty mapping. Anything other than a mapping at the
    top level is rejected.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    text = file_path.read_text(encoding="utf-8")
    suffix = file_path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        data = _parse_yaml(text)
        kind = "YAML"
    elif suffix == ".json" or not suffix:
        data = json.loads(text) if text.strip() else None
        kind = "JSON"
    else:
        raise ValueError(
            f"Unsupported configuration format '{file_path.suffix}'. Use JSON (.json) or YAML (.yaml/.yml)."
        )

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{kind} configuration must be a mapping at the top level.")
    return dict(data)


def build_config(config_cls: Type[ConfigT], data: Mapping[str, Any]) -> ConfigT:
    """Instantiate a config dataclass from ``data``, rejecting unknown keys."""
    known = {field.name for field in dataclasses.fields(config_cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown {config_cls.__name__} option(s): {', '.join(unknown)}")
    return config_cls(**data)


__all__ = ["build_config", "load_config_file"]
