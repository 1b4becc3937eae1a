"""Google Gemini client using the official Google AI Python SDK.

Besides plain chat it exposes the two Gemini-specific calls the dashboard
needs: structured JSON extraction from an image and search-grounded answers
with their web sources. Grounded answers go through the newer google-genai
client, the only SDK that can send the `google_search` tool.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Tuple

from .base import LLMClient
from src.config.settings import SETTINGS

logger = logging.getLogger(__name__)

Source = Tuple[str, str]


class GeminiClient(LLMClient):
    """Wrapper for Google Gemini models via the Google AI Python SDK."""

    def __init__(self, api_key: str | None):
        if not api_key:
            raise ValueError("Gemini API key must be provided.")

        try:
            import google.generativeai as genai  # type: ignore
        except ImportError as exc:
            raise RuntimeError(
                "google-generativeai package not installed. "
                "Install with: pip install google-generativeai"
            ) from exc

        genai.configure(api_key=api_key)
        self._genai = genai
        self._api_key = api_key
        self._search = None

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------

    def chat(self, messages: Any, model: str | None = None, **kwargs: Any) -> str:  # type: ignore[override]
        """Send chat messages and return the assistant reply text."""
        if model is None:
            model = SETTINGS.gemini_chat_model

        system, contents = self._convert_messages(messages)
        try:
            gemini_model = self._genai.GenerativeModel(model, system_instruction=system or None)
            response = gemini_model.generate_content(
                contents,
                generation_config=self._generation_config(kwargs),
            )
            return response.text or ""
        except Exception as e:
            # Re-raise with provider context for better error handling
            error_msg = f"Gemini API error: {e}"
            logger.error(error_msg)
            raise Exception(error_msg) from e

    def extract_json(
        self,
        prompt: str,
        image_bytes: bytes,
        *,
        schema: Dict[str, Any],
        mime_type: str = "image/jpeg",
        model: str | None = None,
    ) -> Dict[str, Any]:
        """Ask the vision model for a JSON object matching *schema*."""
        if model is None:
            model = SETTINGS.gemini_vision_model

        try:
            gemini_model = self._genai.GenerativeModel(model)
            response = gemini_model.generate_content(
                [{"mime_type": mime_type, "data": image_bytes}, prompt],
                generation_config={
                    "response_mime_type": "application/json",
                    "response_schema": schema,
                },
            )
        except Exception as e:
            error_msg = f"Gemini API error: {e}"
            logger.error(error_msg)
            raise Exception(error_msg) from e

        return json.loads(response.text or "{}")

    def grounded_answer(
        self,
        query: str,
        *,
        system_instruction: str,
        model: str | None = None,
        use_search: bool | None = None,
    ) -> Tuple[str, List[Source]]:
        """Answer *query*, optionally grounded on Google Search.

        Returns the reply text and a list of ``(title, uri)`` sources. Search
        tools are only sent through the ``google-genai`` SDK, since
        ``google-generativeai`` cannot express ``google_search``. When the
        model rejects the tool (HTTP 400) the question is retried without it;
        any other failure is raised.
        """
        if model is None:
            model = SETTINGS.gemini_chat_model
        if use_search is None:
            use_search = SETTINGS.enable_search_grounding

        client = self._search_client()
        from google.genai import errors, types  # type: ignore

        if use_search:
            config = types.GenerateContentConfig(
                system_instruction=system_instruction,
                tools=[types.Tool(google_search=types.GoogleSearch())],
            )
            try:
                response = client.models.generate_content(model=model, contents=query, config=config)
                return response.text or "", self._grounding_sources(response)
            except errors.ClientError as e:
                if e.code != 400:
                    error_msg = f"Gemini API error: {e}"
                    logger.error(error_msg)
                    raise Exception(error_msg) from e
                logger.warning("Search grounding rejected for %s, answering without it: %s", model, e)

        try:
            response = client.models.generate_content(
                model=model,
                contents=query,
                config=types.GenerateContentConfig(system_instruction=system_instruction),
            )
        except Exception as e:
            error_msg = f"Gemini API error: {e}"
            logger.error(error_msg)
            raise Exception(error_msg) from e
        return response.text or "", []

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------

    def _search_client(self) -> Any:
        if self._search is None:
            try:
                from google import genai as google_genai  # type: ignore
            except ImportError as exc:
                raise RuntimeError(
                    "google-genai package not installed. Install with: pip install google-genai"
                ) from exc
            self._search = google_genai.Client(api_key=self._api_key)
        return self._search

    @staticmethod
    def _generation_config(kwargs: Dict[str, Any]) -> Dict[str, Any] | None:
        generation_config = {}
        if "temperature" in kwargs:
            generation_config["temperature"] = kwargs["temperature"]
        if "max_tokens" in kwargs:
            generation_config["max_output_tokens"] = kwargs["max_tokens"]
        return generation_config or None

    @staticmethod
    def _convert_messages(messages: List[Dict[str, Any]]) -> Tuple[str, List[Dict[str, Any]]]:
        """Split OpenAI-style messages into a system instruction and Gemini contents."""
        system_parts: List[str] = []
        contents: List[Dict[str, Any]] = []

        for msg in messages:
            role = msg.get("role", "user")
            content = msg.get("content", "")
            if role == "system":
                system_parts.append(content)
            elif role == "assistant":
                # Gemini uses "model" instead of "assistant"
                contents.append({"role": "model", "parts": [content]})
            else:
                contents.append({"role": "user", "parts": [content]})

        return "\n\n".join(system_parts), contents

    @staticmethod
    def _grounding_sources(response: Any) -> List[Source]:
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []
        metadata = getattr(candidates[0], "grounding_metadata", None)
        chunks = getattr(metadata, "grounding_chunks", None) or []

        sources: List[Source] = []
        for chunk in chunks:
            web = getattr(chunk, "web", None)
            uri = getattr(web, "uri", "") if web is not None else ""
            if not uri:
                continue
            sources.append((getattr(web, "title", "") or "Fuente Web", uri))
        return sources
