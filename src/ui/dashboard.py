"""Streamlit UI for the financial & regulatory overview."""
from __future__ import annotations

import streamlit as st

from src.analysis.financial_health import analyze_financial_health
from src.config.settings import SETTINGS
from src.inventory.reports import (
    category_chart_frame,
    dashboard_stats,
    export_financial_report,
    financial_export_filename,
)
from src.ui.state import get_catalog


def _format_cop(value: float) -> str:
    return f"${value:,.0f}"


def render_dashboard() -> None:
    catalog = get_catalog()
    stats = dashboard_stats(catalog, SETTINGS.low_stock_threshold)

    col_title, col_export = st.columns([4, 1])
    with col_title:
        st.header("📊 Resumen Financiero y Regulatorio")
    with col_export:
        st.download_button(
            "📥 Exportar Excel",
            data=export_financial_report(stats),
            file_name=financial_export_filename(),
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

    # KPI cards
    col1, col2, col3 = st.columns(3)
    col1.metric("Valor Total Inventario", _format_cop(stats.total_value))
    col2.metric("Alertas Stock Bajo", stats.low_stock_count, help="Productos requieren reorden")
    col3.metric("Total Referencias", stats.total_references)

    col_chart, col_ai = st.columns(2)

    with col_chart:
        st.subheader("Distribución por Categoría")
        chart_df = category_chart_frame(stats)
        if chart_df.empty:
            st.info("No hay productos registrados.")
        else:
            st.bar_chart(chart_df.set_index("name")["count"])

    with col_ai:
        st.subheader("🧠 Análisis Estratégico")
        if st.button(
            "Analizar Rentabilidad",
            disabled=len(catalog) == 0 or not SETTINGS.has_llm_keys,
            help="Revisión de márgenes y rotación con IA",
        ):
            with st.spinner("Pensando..."):
                st.session_state.financial_analysis = analyze_financial_health(catalog)

        if result := st.session_state.get("financial_analysis"):
            with st.container(border=True):
                st.markdown(result)
        elif not SETTINGS.has_llm_keys:
            st.warning("⚠️ Configura GEMINI_API_KEY (u otro proveedor) para habilitar el análisis.")
        else:
            st.caption(
                'Haz clic en "Analizar Rentabilidad" para revisar tus márgenes y rotación con IA.'
            )
