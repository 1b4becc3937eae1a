import logging

import streamlit as st

from src.auth import allowed_views, get_current_user, logout, role_label
from src.config.settings import SETTINGS
from src.ui.dashboard import render_dashboard
from src.ui.login import render_login
from src.ui.notifications import render_notification_center
from src.ui.products import render_products
from src.ui.regulatory_chat import render_regulatory_chat
from src.ui.scanner import render_scanner
from src.ui.state import NAV_TARGET_KEY, get_notifications

logging.basicConfig(level=getattr(logging, SETTINGS.log_level.upper(), logging.INFO))

APP_VERSION = "1.1.0"


def _handle_logout() -> None:
    logout(st.session_state)
    get_notifications().clear()
    for key in ("current_view", "regulatory_messages", "financial_analysis", "show_product_form"):
        st.session_state.pop(key, None)


def main():
    st.set_page_config(
        page_title="PharmaControl",
        page_icon="💊",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    user = get_current_user(st.session_state)
    if user is None:
        render_login()
        return

    views = allowed_views(user)
    view_ids = [item.id for item in views]

    # Programmatic navigation requested by a view on the previous run
    if (target := st.session_state.pop(NAV_TARGET_KEY, None)) in view_ids:
        st.session_state.current_view = target
    if st.session_state.get("current_view") not in view_ids:
        st.session_state.current_view = view_ids[0]

    with st.sidebar:
        st.markdown("## 💊 PharmaControl")
        st.markdown(f"**{user.name}**")
        st.caption(role_label(user.role))

        labels = {item.id: f"{item.icon} {item.label}" for item in views}
        st.radio(
            "Navegación",
            view_ids,
            format_func=labels.get,
            key="current_view",
            label_visibility="collapsed",
        )

        st.divider()
        render_notification_center()

        st.divider()
        if st.button("🚪 Cerrar Sesión", use_container_width=True):
            _handle_logout()
            st.rerun()
        st.caption(f"Versión {APP_VERSION}")

    # Route to appropriate section
    section = st.session_state.current_view
    if section == "dashboard":
        render_dashboard()
    elif section == "products":
        render_products(user)
    elif section == "scan":
        render_scanner()
    elif section == "regulatory":
        render_regulatory_chat()


if __name__ == "__main__":
    main()
