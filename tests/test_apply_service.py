from __future__ import annotations

import asyncio

import pytest

from canvas_alt.adapters.canvas import InMemoryCanvas
from canvas_alt.services.alt_text import (
    APPLY_FAILED_MESSAGE,
    ApplyService,
    GenerationService,
    ImageRegistry,
    ImageStatus,
    ScanService,
    resolve_alt_text,
)
from tests.fakes import FakeAltTextGenerator, FakeAttachment, FakeCanvasGateway, FakeNode, image_node


def _scanned(*nodes):
    gateway = FakeCanvasGateway(list(nodes))
    registry = ImageRegistry()
    asyncio.run(ScanService(gateway, registry).scan())
    return gateway, registry, ApplyService(registry)


def test_apply_preserves_other_attachment_fields():
    node = FakeNode("1", FakeAttachment(url="x", crop="c"))
    _, registry, service = _scanned(node)
    registry.get("1").draft_text = "A lighthouse at dusk"

    asyncio.run(service.apply("1"))

    assert len(node.set_calls) == 1
    descriptor = node.set_calls[0]["image_attachment"]
    assert descriptor.fields == {"url": "x", "crop": "c", "alt_text": "A lighthouse at dusk"}
    assert registry.get("1").committed_text == "A lighthouse at dusk"


def test_apply_without_draft_recommits_existing_text():
    node = image_node("1", alt_text="cat")
    _, registry, service = _scanned(node)

    asyncio.run(service.apply("1"))

    assert node.set_calls[0]["image_attachment"].alt_text == "cat"
    item = registry.get("1")
    assert item.committed_text == "cat"
    assert item.draft_text is None
    assert item.status is ImageStatus.IDLE


def test_apply_trims_draft_and_leaves_it_in_place():
    node = image_node("1")
    _, registry, service = _scanned(node)
    registry.get("1").draft_text = "  A dog  "

    asyncio.run(service.apply("1"))

    item = registry.get("1")
    assert item.committed_text == "A dog"
    assert item.draft_text == "  A dog  "


@pytest.mark.parametrize(
    "draft, committed, expected",
    [
        ("  new  ", "old", "new"),
        ("   ", " old ", "old"),
        (None, "", ""),
        ("", "  ", ""),
    ],
)
def test_resolve_alt_text(draft, committed, expected):
    _, registry, _ = _scanned(image_node("1"))
    item = registry.get("1")
    item.draft_text = draft
    item.committed_text = committed

    assert resolve_alt_text(item) == expected


def test_missing_attachment_is_structural_failure():
    node = image_node("1", alt_text="old")
    _, registry, service = _scanned(node)
    node.image_attachment = None
    registry.get("1").draft_text = "new"

    asyncio.run(service.apply("1"))

    item = registry.get("1")
    assert node.set_calls == []
    assert item.status is ImageStatus.ERROR
    assert item.last_error == APPLY_FAILED_MESSAGE
    assert item.committed_text == "old"
    assert item.draft_text == "new"


def test_attachment_without_clone_support_is_structural_failure():
    class PlainAttachment:
        url = "https://img/1.png"
        alt_text = "old"

    node = FakeNode("1", PlainAttachment())
    _, registry, service = _scanned(node)

    asyncio.run(service.apply("1"))

    assert node.set_calls == []
    assert registry.get("1").last_error == APPLY_FAILED_MESSAGE


def test_mutation_failure_records_error_and_keeps_committed_text(caplog):
    node = image_node("1", alt_text="old")
    _, registry, service = _scanned(node)
    node.fail_with = PermissionError("read-only project")
    registry.get("1").draft_text = "new"

    with caplog.at_level("ERROR"):
        asyncio.run(service.apply("1"))

    item = registry.get("1")
    assert item.status is ImageStatus.ERROR
    assert item.last_error == APPLY_FAILED_MESSAGE
    assert item.committed_text == "old"
    assert "read-only project" in caplog.text


def test_successful_apply_clears_error():
    node = image_node("1")
    _, registry, service = _scanned(node)
    node.fail_with = RuntimeError("flaky")
    asyncio.run(service.apply("1"))

    node.fail_with = None
    asyncio.run(service.apply("1"))

    item = registry.get("1")
    assert item.status is ImageStatus.IDLE
    assert item.last_error is None


def test_apply_reads_the_live_attachment():
    node = image_node("1", fit="fill")
    _, registry, service = _scanned(node)
    node.image_attachment = FakeAttachment(url="https://img/replaced.png", fit="fit", alt_text="")
    registry.get("1").draft_text = "Replaced"

    asyncio.run(service.apply("1"))

    assert node.set_calls[0]["image_attachment"].fields == {
        "url": "https://img/replaced.png",
        "fit": "fit",
        "alt_text": "Replaced",
    }


def test_apply_is_ignored_while_generating():
    async def scenario():
        node = image_node("1", "https://img/1.png")
        gateway = FakeCanvasGateway([node])
        registry = ImageRegistry()
        await ScanService(gateway, registry).scan()
        generator = FakeAltTextGenerator({"https://img/1.png": "Done"})
        gate = generator.hold("https://img/1.png")
        task = asyncio.ensure_future(GenerationService(generator, registry).generate("1"))
        await asyncio.sleep(0)
        await ApplyService(registry).apply("1")
        gate.set()
        await task
        return node, registry

    node, registry = asyncio.run(scenario())

    assert node.set_calls == []
    assert registry.get("1").draft_text == "Done"


class GatedNode(FakeNode):
    """Node whose writes stay suspended until ``gate`` is set."""

    async def set_attributes(self, attributes):
        await self.gate.wait()
        await super().set_attributes(attributes)


async def _apply_then_generate(node):
    """Start an apply, start a generation while the write is pending, then let the write land."""
    node.gate = asyncio.Event()
    gateway = FakeCanvasGateway([node])
    registry = ImageRegistry()
    await ScanService(gateway, registry).scan()
    registry.get("1").draft_text = "new"
    generator = FakeAltTextGenerator({"https://img/1.png": "Done"})
    describe_gate = generator.hold("https://img/1.png")
    generation = GenerationService(generator, registry)

    apply_task = asyncio.ensure_future(ApplyService(registry).apply("1"))
    await asyncio.sleep(0)
    generate_task = asyncio.ensure_future(generation.generate("1"))
    await asyncio.sleep(0)
    node.gate.set()
    await apply_task

    after_apply = registry.snapshot()[0]
    await generation.generate("1")
    describe_gate.set()
    await generate_task
    return registry, generator, after_apply


def test_apply_landing_during_generation_keeps_item_generating():
    node = GatedNode("1", FakeAttachment(url="https://img/1.png", alt_text="old"))

    registry, generator, after_apply = asyncio.run(_apply_then_generate(node))

    assert after_apply.status is ImageStatus.GENERATING
    assert after_apply.committed_text == "new"
    assert len(generator.calls) == 1
    item = registry.get("1")
    assert item.status is ImageStatus.IDLE
    assert item.committed_text == "new"
    assert item.draft_text == "Done"


def test_apply_fault_landing_during_generation_keeps_item_generating(caplog):
    node = GatedNode("1", FakeAttachment(url="https://img/1.png", alt_text="old"))
    node.fail_with = PermissionError("read-only project")

    with caplog.at_level("WARNING"):
        registry, generator, after_apply = asyncio.run(_apply_then_generate(node))

    assert after_apply.status is ImageStatus.GENERATING
    assert after_apply.last_error is None
    assert after_apply.committed_text == "old"
    assert len(generator.calls) == 1
    item = registry.get("1")
    assert item.status is ImageStatus.IDLE
    assert item.last_error is None
    assert item.committed_text == "old"
    assert "read-only project" in caplog.text


def test_apply_completion_after_rescan_is_discarded():
    async def scenario():
        node = GatedNode("1", FakeAttachment(url="https://img/1.png", alt_text="old"))
        node.gate = asyncio.Event()
        gateway = FakeCanvasGateway([node])
        registry = ImageRegistry()
        await ScanService(gateway, registry).scan()
        registry.get("1").draft_text = "new"

        task = asyncio.ensure_future(ApplyService(registry).apply("1"))
        await asyncio.sleep(0)
        gateway.nodes = []
        await ScanService(gateway, registry).scan()
        node.gate.set()
        await task
        return registry

    registry = asyncio.run(scenario())

    assert len(registry) == 0


def test_apply_round_trip_on_in_memory_canvas():
    canvas = InMemoryCanvas()
    canvas.add_image("hero", "https://img/hero.png", alt_text="", fit="fill", crop="0,0,10,10", resolution="high")
    registry = ImageRegistry()
    asyncio.run(ScanService(canvas, registry).scan())
    registry.get("hero").draft_text = "Team photo in the office"

    asyncio.run(ApplyService(registry).apply("hero"))

    attachment = canvas.get_object("hero").image_attachment
    assert attachment.alt_text == "Team photo in the office"
    assert (attachment.url, attachment.fit, attachment.crop, attachment.resolution) == (
        "https://img/hero.png",
        "fill",
        "0,0,10,10",
        "high",
    )
