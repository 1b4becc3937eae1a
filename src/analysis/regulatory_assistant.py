"""Regulatory Q&A backed by a search-grounded Gemini model.

When no Gemini key is configured the question goes through the fallback
client instead and the reply carries no sources.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from src.config.settings import SETTINGS
from src.llms import get_gemini_client, get_smart_client
from src.prompts.regulatory import get_regulatory_system_prompt

logger = logging.getLogger(__name__)

NO_ANSWER = "No encontré información."
ERROR_REPLY = "Lo siento, hubo un error al consultar la regulación."


@dataclass
class AssistantReply:
    text: str
    sources: List[Tuple[str, str]] = field(default_factory=list)


def ask_regulatory_assistant(query: str) -> AssistantReply:
    """Answer a regulatory question. Provider errors propagate to the caller."""
    system_prompt = get_regulatory_system_prompt()
    try:
        if SETTINGS.gemini_api_key:
            text, sources = get_gemini_client().grounded_answer(
                query, system_instruction=system_prompt
            )
        else:
            text = get_smart_client().chat(
                [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": query},
                ],
                temperature=0.3,
            )
            sources = []
    except Exception as e:
        logger.error("Error in regulatory assistant: %s", e)
        raise

    return AssistantReply(text=text or NO_ANSWER, sources=sources)


__all__ = ["AssistantReply", "ask_regulatory_assistant", "ERROR_REPLY", "NO_ANSWER"]
