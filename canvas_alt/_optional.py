from __future__ import annotations

from importlib import import_module
from typing import Iterable


class OptionalDependencyError(ImportError):
    """Raised when a provider or loader needs an extra that is not installed."""

    def __init__(self, feature: str, extras: Iterable[str]) -> None:
        self.feature = feature
        self.extras = list(dict.fromkeys(extras))
        hint = " or ".join(f"`pip install canvas_alt[{extra}]`" for extra in self.extras)
        super().__init__(f"{feature} needs optional dependencies; install them via {hint}.")


def _as_list(extras: str | Iterable[str]) -> list[str]:
    return [extras] if isinstance(extras, str) else list(extras)


def optional_import_attr(module: str, attribute: str, *, feature: str, extras: str | Iterable[str]):
    """Import ``module.attribute``, translating a missing dependency into OptionalDependencyError."""
    try:
        mod = import_module(module)
    except OptionalDependencyError:
        raise
    except ImportError as exc:
        raise OptionalDependencyError(feature, _as_list(extras)) from exc
    try:
        return getattr(mod, attribute)
    except AttributeError as exc:
        raise AttributeError(f"Module '{module}' has no attribute '{attribute}'") from exc


def require_extra(feature: str, *, extras: str | Iterable[str]) -> None:
    raise OptionalDependencyError(feature, _as_list(extras))
