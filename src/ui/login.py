"""Streamlit UI for the login screen."""
from __future__ import annotations

import streamlit as st

from src.auth import login


def render_login() -> None:
    """Render the login form; reruns the app once a user is found."""
    _, col_form, _ = st.columns([1, 2, 1])
    with col_form:
        st.title("💊 PharmaControl")
        st.caption("Control de inventario y cumplimiento regulatorio")

        with st.form("login_form"):
            username = st.text_input("Usuario", placeholder="Ej: admin, pharma, viewer")
            submitted = st.form_submit_button("Ingresar", type="primary", use_container_width=True)

        if submitted:
            if not username.strip():
                st.error("Ingresa un nombre de usuario.")
                return
            with st.spinner("Verificando..."):
                user = login(username, st.session_state)
            if user:
                st.session_state.pop("current_view", None)
                st.rerun()
            else:
                st.error("Usuario no encontrado. Prueba con: admin, pharma, o viewer")
