"""Streamlit UI for product intake from a package photo."""
from __future__ import annotations

import streamlit as st

from src.analysis.product_scan import analyze_product_image
from src.config.settings import SETTINGS
from src.inventory.catalog import form_from_scan
from src.ui.state import navigate, set_scan_prefill


def render_scanner() -> None:
    st.header("📷 Escáner de Productos")
    st.markdown("Sube una foto del empaque para extraer nombre, lote, vencimiento y registro INVIMA.")

    if not SETTINGS.gemini_api_key:
        st.error("⚠️ El escáner requiere GEMINI_API_KEY en el entorno o en el archivo `.env`.")
        return

    upload = st.file_uploader("Imagen del medicamento", type=["jpg", "jpeg", "png", "webp"])
    if upload is None:
        return

    st.image(upload, width=320)

    if st.button("🔍 Analizar imagen", type="primary"):
        with st.spinner("Analizando imagen..."):
            scan = analyze_product_image(upload.getvalue(), upload.type or "image/jpeg")

        if scan is None:
            st.error("No se pudo analizar la imagen. Intenta con una foto más nítida.")
            return

        fields = scan.to_product_fields()
        set_scan_prefill(form_from_scan(fields))
        st.toast(f"Datos escaneados: {fields['name'] or 'sin nombre'} · Lote {fields['lot_number'] or '—'}")
        navigate("products")
