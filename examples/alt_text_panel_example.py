"""
Scan a small in-memory canvas, generate alt text for every image and apply it.

Uses the Groq provider (set GROQ_API_KEY) unless --offline is passed, in which
case a canned describer stands in for the remote model.

    python examples/alt_text_panel_example.py --offline

The provider key can be kept in ~/.canvas_alt_env_vars with --save-key and
removed again with --forget-key.
"""

from __future__ import annotations

import argparse
import asyncio

from canvas_alt.adapters.canvas import InMemoryCanvas
from canvas_alt.alt_text import AltTextStackConfig, create_alt_text_services, forget_provider_key, store_provider_key
from canvas_alt.presentation import AltTextPanel

SAMPLE_IMAGES = [
    ("hero", "https://images.example.com/hero.jpg", "Hero banner"),
    ("team", "https://images.example.com/team.jpg", None),
    ("logo", "https://images.example.com/logo.png", "Logo"),
]


class OfflineDescriber:
    async def describe(self, image_url: str, *, instruction: str = "") -> str:
        await asyncio.sleep(0.01)
        return f"Illustration from {image_url.rsplit('/', 1)[-1]}"


def build_canvas() -> InMemoryCanvas:
    canvas = InMemoryCanvas()
    for object_id, url, name in SAMPLE_IMAGES:
        canvas.add_image(object_id, url, name=name, fit="fill")
    return canvas


async def run(offline: bool, provider: str) -> InMemoryCanvas:
    canvas = build_canvas()
    generator = OfflineDescriber() if offline else None
    services = create_alt_text_services(canvas, generator=generator, config=AltTextStackConfig(provider=provider))
    panel = AltTextPanel(services)

    await panel.start()
    for row in panel.rows():
        panel.request_generate(row.id)
    await panel.wait_idle()
    print(panel.render(color=True))

    for row in panel.rows():
        panel.request_apply(row.id)
    await panel.wait_idle()
    print(panel.render(color=True))
    return canvas


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--offline", action="store_true", help="Use a canned describer instead of a remote model.")
    parser.add_argument("--provider", default="groq", help="Provider name when running online (groq or openai).")
    parser.add_argument("--save-key", metavar="API_KEY", help="Store the provider's API key in the key file before running.")
    parser.add_argument("--forget-key", action="store_true", help="Remove the provider's API key from the key file and exit.")
    args = parser.parse_args()

    if args.forget_key:
        print(f"Removed {forget_provider_key(args.provider)} from the key file")
        return 0
    if args.save_key:
        print(f"Saved {store_provider_key(args.provider, args.save_key)} to the key file")

    canvas = asyncio.run(run(args.offline, args.provider))
    for object_id, alt_text in canvas.alt_texts():
        print(f"{object_id}: {alt_text}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
