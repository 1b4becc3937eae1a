from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class LLMClient(ABC):
    """Abstract interface for language model providers (chat focus)."""

    @abstractmethod
    def chat(self, messages: List[Dict[str, Any]], **kwargs: Any) -> str:  # noqa: D401
        """Send chat messages and return the assistant reply text."""


# ---------------------------------------------------------------------------
# Factory helper
# ---------------------------------------------------------------------------

def get_client(provider: str, api_key: str | None = None) -> "LLMClient":
    """Return an LLMClient for *provider* ('openrouter', 'groq', or 'gemini')."""

    provider = provider.lower().strip()
    if provider == "openrouter":
        from .openrouter import OpenRouterClient  # local import to avoid heavy deps

        return OpenRouterClient(api_key=api_key)
    if provider == "groq":
        from .groq import GroqClient

        return GroqClient(api_key=api_key)
    if provider == "gemini":
        from .gemini import GeminiClient

        return GeminiClient(api_key=api_key)

    raise ValueError(f"Unknown LLM provider: {provider}")


def get_gemini_client() -> "LLMClient":
    """Gemini client for the first configured key.

    Vision extraction and search grounding are Gemini-only features, so the
    callers that need them bypass provider fallback.

    Raises:
        ValueError: If no GEMINI_API_KEY is configured.
    """
    from src.config.settings import SETTINGS

    return get_client("gemini", SETTINGS.gemini_api_key)


def get_smart_client() -> "LLMClient":
    """Get an LLM client with key rotation and provider fallback.

    Walks every configured key in the order Gemini → OpenRouter → Groq and
    moves on to the next one whenever a call fails.

    Raises:
        RuntimeError: If no keys are configured or all of them fail
    """
    from .smart_client import SmartLLMClient
    return SmartLLMClient()
