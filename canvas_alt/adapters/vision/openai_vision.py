from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from canvas_alt.platform.config import read_api_key
from canvas_alt.platform.logging import create_logger
from canvas_alt.services.vision.contracts import DEFAULT_INSTRUCTION


def build_vision_messages(image_url: str, instruction: str) -> List[Dict[str, Any]]:
    """Single user turn carrying the instruction and the image reference."""
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": instruction},
                {"type": "image_url", "image_url": {"url": image_url}},
            ],
        }
    ]


def first_choice_text(completion: Any) -> str:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content.strip() if isinstance(content, str) else ""


class OpenAIVisionAltText:
    """Describe images with an OpenAI vision chat model."""

    api_key_name = "OPENAI_API_KEY"
    base_url: Optional[str] = None

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        logger=None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 200,
        top_p: float = 1.0,
    ) -> None:
        if client is None:
            api_key = read_api_key(self.api_key_name)
            if not api_key:
                raise ValueError(f"No {self.api_key_name} found in environment variables")
            self.client = AsyncOpenAI(api_key=api_key, base_url=self.base_url)
        else:
            self.client = client

        self.logger = logger if logger else create_logger(__name__)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.top_p = top_p

    async def describe(self, image_url: str, *, instruction: str = DEFAULT_INSTRUCTION) -> str:
        self.logger.debug("%s: requesting alt text from %s", type(self).__name__, self.model)
        start_time = time.time()
        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=build_vision_messages(image_url, instruction),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            top_p=self.top_p,
            stream=False,
        )
        self.logger.info(
            "%s: description complete. Time taken: %.2f seconds",
            type(self).__name__,
            time.time() - start_time,
        )
        return first_choice_text(completion)
