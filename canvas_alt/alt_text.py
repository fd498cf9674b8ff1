"""Alt text stack entry points for canvas_alt."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional

from canvas_alt._optional import optional_import_attr
from canvas_alt.platform.config import delete_api_key_from_file, save_api_key_to_file
from canvas_alt.platform.config_loader import build_config, load_config_file
from canvas_alt.platform.logging import create_logger
from canvas_alt.services.alt_text import (
    PLACEHOLDER_ALT_TEXT,
    ApplyService,
    GenerationService,
    ImageRegistry,
    ScanService,
)
from canvas_alt.services.canvas.contracts import CanvasGatewayPort
from canvas_alt.services.vision.contracts import DEFAULT_INSTRUCTION, AltTextGeneratorPort

__all__ = [
    "GroqVisionAltText",
    "OpenAIVisionAltText",
    "AltTextProviderRegistry",
    "AltTextServices",
    "AltTextStackConfig",
    "create_alt_text_generator",
    "create_alt_text_services",
    "default_provider_registry",
    "forget_provider_key",
    "store_provider_key",
]

_OPTIONAL_EXPORTS = {
    "GroqVisionAltText": ("canvas_alt.adapters.vision.groq_vision", "GroqVisionAltText"),
    "OpenAIVisionAltText": ("canvas_alt.adapters.vision.openai_vision", "OpenAIVisionAltText"),
}


def _load(name: str):
    module, attribute = _OPTIONAL_EXPORTS[name]
    return optional_import_attr(
        module,
        attribute,
        feature=name,
        extras="llm",
    )


def __getattr__(name: str):
    if name in _OPTIONAL_EXPORTS:
        value = _load(name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


@dataclass
class AltTextStackConfig:
    """
    Options for building the alt text stack.

    Attributes:
        provider: Provider name or alias (``"groq"`` or ``"openai"``).
        model: Model override; ``None`` keeps the adapter default.
        instruction: Text sent with every image.
        placeholder: Draft used when the provider returns nothing usable.
        temperature: Sampling temperature forwarded to the provider.
        max_tokens: Completion length cap forwarded to the provider.
        top_p: Nucleus sampling value forwarded to the provider.
    """

    provider: str = "groq"
    model: Optional[str] = None
    instruction: str = DEFAULT_INSTRUCTION
    placeholder: str = PLACEHOLDER_ALT_TEXT
    temperature: float = 0.7
    max_tokens: int = 200
    top_p: float = 1.0

    @classmethod
    def from_file(cls, path: str | Path) -> "AltTextStackConfig":
        return build_config(cls, load_config_file(path))


class AltTextProviderRegistry:
    """Map provider names (and aliases) to adapter exports."""

    def __init__(self) -> None:
        self._providers: Dict[str, str] = {}
        self._aliases: Dict[str, str] = {}
        self._key_names: Dict[str, str] = {}

    def register(
        self,
        name: str,
        export: str,
        *,
        key_name: Optional[str] = None,
        aliases: Optional[Iterable[str]] = None,
    ) -> None:
        canonical = name.lower()
        self._providers[canonical] = export
        if key_name:
            self._key_names[canonical] = key_name
        for alias in aliases or ():
            self._aliases[alias.lower()] = canonical

    def _canonical(self, name: str) -> str:
        key = name.lower()
        canonical = self._aliases.get(key, key)
        if canonical not in self._providers:
            raise KeyError(f"Unknown alt text provider '{name}'. Available: {', '.join(self.available())}")
        return canonical

    def resolve(self, name: str) -> str:
        return self._providers[self._canonical(name)]

    def key_name(self, name: str) -> Optional[str]:
        """Environment variable / key file entry holding the provider's API key."""
        return self._key_names.get(self._canonical(name))

    def available(self) -> list[str]:
        return sorted(self._providers.keys())


def default_provider_registry() -> AltTextProviderRegistry:
    registry = AltTextProviderRegistry()
    registry.register("groq", "GroqVisionAltText", key_name="GROQ_API_KEY", aliases=("llama", "llama4"))
    registry.register("openai", "OpenAIVisionAltText", key_name="OPENAI_API_KEY", aliases=("gpt",))
    return registry


def _provider_key_name(provider: str, providers: Optional[AltTextProviderRegistry]) -> str:
    key_name = (providers or default_provider_registry()).key_name(provider)
    if not key_name:
        raise ValueError(f"Provider '{provider}' does not use an API key")
    return key_name


def store_provider_key(provider: str, api_key: str, *, providers: Optional[AltTextProviderRegistry] = None) -> str:
    """Save ``api_key`` in the key file under the provider's key name and return that name."""
    key_name = _provider_key_name(provider, providers)
    save_api_key_to_file(key_name, api_key)
    return key_name


def forget_provider_key(provider: str, *, providers: Optional[AltTextProviderRegistry] = None) -> str:
    key_name = _provider_key_name(provider, providers)
    delete_api_key_from_file(key_name)
    return key_name


def create_alt_text_generator(
    config: Optional[AltTextStackConfig] = None,
    *,
    client=None,
    providers: Optional[AltTextProviderRegistry] = None,
) -> AltTextGeneratorPort:
    """Build the configured provider adapter once, for injection into the services."""
    cfg = config or AltTextStackConfig()
    export = (providers or default_provider_registry()).resolve(cfg.provider)
    kwargs = {
        "client": client,
        "temperature": cfg.temperature,
        "max_tokens": cfg.max_tokens,
        "top_p": cfg.top_p,
    }
    if cfg.model:
        kwargs["model"] = cfg.model
    return _load(export)(**kwargs)


@dataclass
class AltTextServices:
    registry: ImageRegistry
    scanner: ScanService
    generation: GenerationService
    applier: ApplyService
    generator: AltTextGeneratorPort


def create_alt_text_services(
    canvas: CanvasGatewayPort,
    *,
    generator: Optional[AltTextGeneratorPort] = None,
    config: Optional[AltTextStackConfig] = None,
    logger: Optional[logging.Logger] = None,
) -> AltTextServices:
    """
    Wire the registry and the three orchestrators around one canvas.

    When no generator is given, the provider named in ``config`` is built
    here. Either way every service shares the same registry and generator.
    """
    cfg = config or AltTextStackConfig()
    logger = logger if logger else create_logger(__name__)
    if generator is None:
        generator = create_alt_text_generator(cfg)
        logger.info("Using alt text provider '%s'", cfg.provider)

    registry = ImageRegistry(logger=logger)
    return AltTextServices(
        registry=registry,
        scanner=ScanService(canvas, registry, logger=logger),
        generation=GenerationService(
            generator,
            registry,
            instruction=cfg.instruction,
            placeholder=cfg.placeholder,
            logger=logger,
        ),
        applier=ApplyService(registry, logger=logger),
        generator=generator,
    )
