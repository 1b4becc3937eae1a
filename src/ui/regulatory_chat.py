"""Streamlit UI for the regulatory Q&A assistant."""
from __future__ import annotations

from typing import Any, Dict

import streamlit as st

from src.analysis.regulatory_assistant import ERROR_REPLY, ask_regulatory_assistant
from src.config.settings import SETTINGS
from src.prompts.regulatory import GREETING, INPUT_PLACEHOLDER


def _initialize_chat_session() -> None:
    if "regulatory_messages" not in st.session_state:
        st.session_state.regulatory_messages = [{"role": "assistant", "content": GREETING, "sources": []}]


def _format_message_for_display(message: Dict[str, Any]) -> None:
    with st.chat_message(message["role"]):
        st.write(message["content"])
        if message.get("sources"):
            st.caption("Fuentes:")
            for title, uri in message["sources"]:
                st.markdown(f"- [{title}]({uri})")


def _handle_chat_input(user_input: str) -> None:
    st.session_state.regulatory_messages.append({"role": "user", "content": user_input})
    try:
        reply = ask_regulatory_assistant(user_input)
        message = {"role": "assistant", "content": reply.text, "sources": reply.sources}
    except Exception:
        message = {"role": "assistant", "content": ERROR_REPLY, "sources": []}
    st.session_state.regulatory_messages.append(message)


def render_regulatory_chat() -> None:
    _initialize_chat_session()

    st.header("⚖️ Asistente Regulatorio")
    if SETTINGS.gemini_api_key and SETTINGS.enable_search_grounding:
        st.caption("Conectado a Google Search")

    if not SETTINGS.has_llm_keys:
        st.error("⚠️ No hay claves de IA configuradas. Define GEMINI_API_KEY en tu archivo `.env`.")
        return

    for message in st.session_state.regulatory_messages:
        _format_message_for_display(message)

    if user_input := st.chat_input(INPUT_PLACEHOLDER):
        if user_input.strip():
            with st.spinner("Consultando normatividad..."):
                _handle_chat_input(user_input.strip())
            st.rerun()

    if len(st.session_state.regulatory_messages) > 1 and st.button("🗑️ Limpiar chat"):
        st.session_state.pop("regulatory_messages", None)
        st.rerun()
