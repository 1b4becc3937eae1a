from .base import LLMClient, get_client, get_gemini_client, get_smart_client  # noqa: F401
from .smart_client import SmartLLMClient  # noqa: F401

__all__ = [
    "LLMClient",
    "SmartLLMClient",
    "get_client",
    "get_gemini_client",
    "get_smart_client",
]
