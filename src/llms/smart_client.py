"""LLM client with key rotation and provider fallback."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from .base import LLMClient, get_client
from src.config.settings import SETTINGS

logger = logging.getLogger(__name__)

PROVIDER_ORDER = ("gemini", "openrouter", "groq")


def configured_keys(settings=None) -> List[Tuple[str, str]]:
    """Return ``(provider, key)`` pairs in fallback order."""
    settings = settings or SETTINGS
    keys_by_provider = {
        "gemini": settings.gemini_api_keys or [],
        "openrouter": settings.openrouter_api_keys or [],
        "groq": settings.groq_api_keys or [],
    }
    return [(provider, key) for provider in PROVIDER_ORDER for key in keys_by_provider[provider]]


class SmartLLMClient(LLMClient):
    """LLM client that rotates keys and falls back between providers."""

    def __init__(self, settings=None):
        self._keys = configured_keys(settings)
        self._current_provider: str | None = None

    def chat(
        self,
        messages: List[Dict[str, Any]],
        *,
        provider_models: Dict[str, str] | None = None,
        **kwargs: Any,
    ) -> str:
        """Send chat messages, trying each configured key until one succeeds.

        *provider_models* maps a provider name to the model it should use;
        providers not listed keep their configured default.
        """
        if not self._keys:
            raise RuntimeError(
                "No LLM API keys configured. Set GEMINI_API_KEY, OPENROUTER_API_KEY or GROQ_API_KEY."
            )

        last_error: Exception | None = None
        for attempt, (provider, key) in enumerate(self._keys, start=1):
            try:
                client = get_client(provider, key)
                call_kwargs = dict(kwargs)
                if provider_models and provider in provider_models:
                    call_kwargs["model"] = provider_models[provider]
                result = client.chat(messages, **call_kwargs)
                self._current_provider = provider
                return result
            except Exception as e:
                logger.warning(
                    "LLM call failed on %s (attempt %d/%d): %s", provider, attempt, len(self._keys), e
                )
                last_error = e

        raise RuntimeError(f"All LLM providers failed: {last_error}") from last_error

    def get_current_provider(self) -> str | None:
        """Name of the provider that answered the last successful call."""
        return self._current_provider
