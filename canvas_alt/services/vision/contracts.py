from __future__ import annotations

from typing import Protocol

DEFAULT_INSTRUCTION = "Generate a concise and helpful alt text for accessibility:"


class AltTextGeneratorPort(Protocol):
    async def describe(self, image_url: str, *, instruction: str = DEFAULT_INSTRUCTION) -> str:
        ...


__all__ = ["AltTextGeneratorPort", "DEFAULT_INSTRUCTION"]
