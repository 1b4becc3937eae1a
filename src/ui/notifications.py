"""Sidebar notification center fed by the alert polling timer."""
from __future__ import annotations

import streamlit as st

from src.config.settings import SETTINGS
from src.inventory.alerts import check_alerts
from src.inventory.models import NotificationType
from src.ui.state import get_catalog, get_notifications

_TYPE_ICONS = {
    NotificationType.CRITICAL: "🔴",
    NotificationType.WARNING: "🟡",
    NotificationType.INFO: "🔵",
}


def poll_alerts() -> int:
    """Run one alert check against the session catalog and merge the results."""
    new = check_alerts(
        get_catalog(),
        low_stock_threshold=SETTINGS.low_stock_threshold,
        expiry_window_days=SETTINGS.expiry_window_days,
        regulatory_update_probability=SETTINGS.regulatory_update_probability,
    )
    return get_notifications().merge(new)


@st.fragment(run_every=SETTINGS.alert_poll_seconds)
def render_notification_center() -> None:
    """Render the inbox; the fragment timer re-runs the alert check."""
    poll_alerts()
    center = get_notifications()

    unread = center.unread_count
    label = f"🔔 Notificaciones ({unread})" if unread else "🔔 Notificaciones"
    with st.expander(label, expanded=False):
        if not len(center):
            st.caption("No hay notificaciones pendientes.")
            return

        if unread and st.button("Marcar todo como leído", key="notif_mark_read"):
            center.mark_all_read()
            st.rerun(scope="fragment")

        for notification in center.notifications:
            col_msg, col_btn = st.columns([5, 1])
            with col_msg:
                weight = "**" if not notification.read else ""
                st.markdown(f"{_TYPE_ICONS[notification.type]} {weight}{notification.message}{weight}")
                st.caption(notification.timestamp.strftime("%H:%M:%S"))
            with col_btn:
                if st.button("×", key=f"dismiss_{notification.id}", help="Descartar"):
                    center.dismiss(notification.id)
                    st.rerun(scope="fragment")
