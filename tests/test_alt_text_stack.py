from __future__ import annotations

import asyncio
import json

import pytest

import canvas_alt.alt_text as alt_text
from canvas_alt.adapters.canvas import InMemoryCanvas
from canvas_alt.alt_text import (
    AltTextProviderRegistry,
    AltTextStackConfig,
    create_alt_text_generator,
    create_alt_text_services,
    default_provider_registry,
    forget_provider_key,
    store_provider_key,
)
from canvas_alt.platform import config
from tests.fakes import FakeAltTextGenerator


class RecordingAdapter:
    instances: list = []

    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs
        RecordingAdapter.instances.append(self)

    async def describe(self, image_url: str, *, instruction: str = "") -> str:
        return f"described {image_url}"


@pytest.fixture
def recorded_loads(monkeypatch):
    loads: list[str] = []
    RecordingAdapter.instances = []

    def fake_load(name: str):
        loads.append(name)
        return RecordingAdapter

    monkeypatch.setattr("canvas_alt.alt_text._load", fake_load)
    return loads


def test_provider_registry_resolves_aliases():
    registry = default_provider_registry()

    assert registry.resolve("groq") == "GroqVisionAltText"
    assert registry.resolve("LLAMA") == "GroqVisionAltText"
    assert registry.resolve("gpt") == "OpenAIVisionAltText"
    assert registry.available() == ["groq", "openai"]

    with pytest.raises(KeyError):
        registry.resolve("missing")


def test_provider_registry_knows_key_names():
    registry = default_provider_registry()

    assert registry.key_name("llama4") == "GROQ_API_KEY"
    assert registry.key_name("gpt") == "OPENAI_API_KEY"
    with pytest.raises(KeyError):
        registry.key_name("missing")


def test_store_and_forget_provider_key(tmp_path, monkeypatch):
    key_file = tmp_path / "keys"
    monkeypatch.setattr(config, "get_config_path", lambda: str(key_file))

    assert store_provider_key("llama", "gsk-1") == "GROQ_API_KEY"
    store_provider_key("openai", "sk-2")
    assert config.read_api_key_from_file("GROQ_API_KEY") == "gsk-1"

    forget_provider_key("groq")

    assert config.read_all_api_keys_from_file() == {"OPENAI_API_KEY": "sk-2"}


def test_store_key_for_provider_without_key_name_fails(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "get_config_path", lambda: str(tmp_path / "keys"))
    providers = AltTextProviderRegistry()
    providers.register("local", "OpenAIVisionAltText")

    with pytest.raises(ValueError):
        store_provider_key("local", "x", providers=providers)
    assert not (tmp_path / "keys").exists()


def test_create_generator_forwards_config(recorded_loads):
    config = AltTextStackConfig(provider="gpt", model="gpt-4o", temperature=0.2, max_tokens=64, top_p=0.9)

    generator = create_alt_text_generator(config, client="client")

    assert recorded_loads == ["OpenAIVisionAltText"]
    assert generator.kwargs == {
        "client": "client",
        "temperature": 0.2,
        "max_tokens": 64,
        "top_p": 0.9,
        "model": "gpt-4o",
    }


def test_create_generator_keeps_adapter_default_model(recorded_loads):
    generator = create_alt_text_generator()

    assert recorded_loads == ["GroqVisionAltText"]
    assert "model" not in generator.kwargs


def test_create_generator_with_custom_registry(recorded_loads):
    providers = AltTextProviderRegistry()
    providers.register("house", "OpenAIVisionAltText", aliases=("inhouse",))

    create_alt_text_generator(AltTextStackConfig(provider="inhouse"), providers=providers)

    assert recorded_loads == ["OpenAIVisionAltText"]


def test_services_share_registry_and_injected_generator():
    canvas = InMemoryCanvas()
    canvas.add_image("1", "https://img/1.png")
    generator = FakeAltTextGenerator({"https://img/1.png": "A cat"})
    config = AltTextStackConfig(instruction="Short description:", placeholder="(none)")

    services = create_alt_text_services(canvas, generator=generator, config=config)

    async def scenario():
        await services.scanner.scan()
        await services.generation.generate("1")
        await services.applier.apply("1")

    asyncio.run(scenario())

    assert services.generator is generator
    assert generator.calls == [("https://img/1.png", "Short description:")]
    assert services.generation.placeholder == "(none)"
    assert canvas.get_object("1").image_attachment.alt_text == "A cat"
    assert services.registry.get("1").committed_text == "A cat"


def test_services_build_generator_when_missing(recorded_loads):
    services = create_alt_text_services(InMemoryCanvas(), config=AltTextStackConfig(provider="openai"))

    assert isinstance(services.generator, RecordingAdapter)
    assert recorded_loads == ["OpenAIVisionAltText"]


def test_config_from_json_file(tmp_path):
    path = tmp_path / "alt_text.json"
    path.write_text(json.dumps({"provider": "openai", "max_tokens": 120}), encoding="utf-8")

    config = AltTextStackConfig.from_file(path)

    assert config.provider == "openai"
    assert config.max_tokens == 120
    assert config.temperature == 0.7


def test_config_from_yaml_file(tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "alt_text.yaml"
    path.write_text("provider: groq\nmodel: custom-vision\ntop_p: 0.5\n", encoding="utf-8")

    config = AltTextStackConfig.from_file(path)

    assert config.model == "custom-vision"
    assert config.top_p == 0.5


def test_config_rejects_unknown_options(tmp_path):
    path = tmp_path / "alt_text.json"
    path.write_text(json.dumps({"provider": "groq", "retries": 3}), encoding="utf-8")

    with pytest.raises(ValueError, match="retries"):
        AltTextStackConfig.from_file(path)


def test_unknown_module_attribute_raises():
    with pytest.raises(AttributeError):
        getattr(alt_text, "NotAnAdapter")
