from __future__ import annotations

from typing import Any

from openai import OpenAI

from .base import LLMClient
from src.config.settings import SETTINGS


class OpenRouterClient(LLMClient):
    """Wrapper around the OpenRouter API compatible with the OpenAI SDK."""

    BASE_URL = "https://openrouter.ai/api/v1"

    def __init__(self, api_key: str | None):
        if not api_key:
            raise ValueError("OpenRouter API key must be provided.")

        # Dedicated client instance to avoid global side-effects on the openai module.
        self._client = OpenAI(
            api_key=api_key,
            base_url=self.BASE_URL,
            default_headers={"X-Title": "PharmaControl"},
        )

    def chat(self, messages: Any, model: str | None = None, **kwargs: Any) -> str:  # type: ignore[override]
        """Return the assistant reply for *messages* using *model*."""
        if model is None:
            model = SETTINGS.openrouter_chat_model

        completion = self._client.chat.completions.create(  # type: ignore[arg-type]
            model=model,
            messages=messages,
            **kwargs,
        )
        return completion.choices[0].message.content or ""
