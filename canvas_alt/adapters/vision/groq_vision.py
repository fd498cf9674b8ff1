from __future__ import annotations

from typing import Optional

from openai import AsyncOpenAI

from .openai_vision import OpenAIVisionAltText

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class GroqVisionAltText(OpenAIVisionAltText):
    """Llama 4 Scout on Groq, reached through its OpenAI-compatible endpoint."""

    api_key_name = "GROQ_API_KEY"
    base_url = GROQ_BASE_URL

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        logger=None,
        model: str = "meta-llama/llama-4-scout-17b-16e-instruct",
        temperature: float = 0.7,
        max_tokens: int = 200,
        top_p: float = 1.0,
    ) -> None:
        super().__init__(
            client=client,
            logger=logger,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=top_p,
        )
