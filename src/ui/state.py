"""Per-session state shared by the Streamlit views."""
from __future__ import annotations

import streamlit as st

from src.inventory.alerts import NotificationCenter
from src.inventory.catalog import ProductCatalog, ProductForm, seed_products

NAV_TARGET_KEY = "nav_target"
SCAN_PREFILL_KEY = "scan_prefill"


def get_catalog() -> ProductCatalog:
    if "catalog" not in st.session_state:
        st.session_state.catalog = ProductCatalog(seed_products())
    return st.session_state.catalog


def get_notifications() -> NotificationCenter:
    if "notifications" not in st.session_state:
        st.session_state.notifications = NotificationCenter()
    return st.session_state.notifications


def navigate(view_id: str) -> None:
    """Switch view on the next rerun (the menu widget is already rendered)."""
    st.session_state[NAV_TARGET_KEY] = view_id
    st.rerun()


def set_scan_prefill(form: ProductForm) -> None:
    st.session_state[SCAN_PREFILL_KEY] = form


def pop_scan_prefill() -> ProductForm | None:
    return st.session_state.pop(SCAN_PREFILL_KEY, None)
