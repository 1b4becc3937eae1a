"""Streamlit UI for product registration and the inventory table.

The form recomputes the suggested sale price and validates the margin band on
every change; the save button stays disabled while the margin is out of band.
"""
from __future__ import annotations

from typing import List

import pandas as pd
import streamlit as st

from src.auth import can_edit
from src.config.settings import SETTINGS
from src.inventory.catalog import ProductForm, ProductValidationError
from src.inventory.models import CATEGORY_LABELS, MARGIN_LIMITS, Product, RegulatoryCategory, User
from src.inventory.pricing import (
    PricingError,
    financial_metrics,
    is_margin_compliant,
    unit_cost,
)
from src.inventory.reports import (
    category_badge_css,
    export_products_excel,
    products_export_filename,
    round_days,
)
from src.ui.state import get_catalog, pop_scan_prefill

# Widget keys of the registration form
_FIELD_KEYS = {
    "name": "pf_name",
    "category": "pf_category",
    "purchase_price": "pf_purchase_price",
    "associated_costs": "pf_associated_costs",
    "margin": "pf_margin",
    "stock": "pf_stock",
    "invima_registration": "pf_invima",
    "expiry_date": "pf_expiry",
    "lot_number": "pf_lot",
}


def _apply_prefill(form: ProductForm) -> None:
    """Seed the form widgets from a scanned package."""
    st.session_state[_FIELD_KEYS["name"]] = form.name
    st.session_state[_FIELD_KEYS["invima_registration"]] = form.invima_registration
    st.session_state[_FIELD_KEYS["lot_number"]] = form.lot_number or ""
    st.session_state[_FIELD_KEYS["expiry_date"]] = form.expiry_date
    st.session_state.show_product_form = True


def _reset_form() -> None:
    for key in _FIELD_KEYS.values():
        st.session_state.pop(key, None)


def _render_form() -> None:
    catalog = get_catalog()
    st.subheader("Registro con Validación Regulatoria")

    col_left, col_right = st.columns(2)
    with col_left:
        name = st.text_input("Nombre del Producto", key=_FIELD_KEYS["name"])
    with col_right:
        category = st.selectbox(
            "Categoría Regulatoria",
            list(RegulatoryCategory),
            index=list(RegulatoryCategory).index(RegulatoryCategory.LIBRE_VENTA),
            format_func=lambda c: CATEGORY_LABELS[c],
            key=_FIELD_KEYS["category"],
        )
        band = MARGIN_LIMITS[category]
        st.caption(f"Margen Permitido: {band.min:g}% - {band.max:g}%")

    col_a, col_b = st.columns(2)
    purchase_price = col_a.number_input(
        "Precio Compra ($)", min_value=0.0, step=100.0, key=_FIELD_KEYS["purchase_price"]
    )
    associated_costs = col_b.number_input(
        "Costos Asociados ($)", min_value=0.0, step=50.0, key=_FIELD_KEYS["associated_costs"]
    )

    form = ProductForm(
        name=name,
        category=category,
        purchase_price=purchase_price,
        associated_costs=associated_costs,
    )

    with st.container(border=True):
        col_m, col_p = st.columns(2)
        form.margin = col_m.number_input(
            "Margen de Beneficio (%)", value=20.0, step=0.1, key=_FIELD_KEYS["margin"]
        )
        margin_error = form.margin_error()
        if margin_error:
            col_m.error(margin_error)
        try:
            price_label = f"${form.sale_price():,}"
        except PricingError:
            price_label = "—"
        col_p.text_input("Precio Venta Sugerido ($)", value=price_label, disabled=True)

    col_s, col_i, col_e = st.columns(3)
    form.stock = int(col_s.number_input("Stock Inicial", min_value=0, step=1, key=_FIELD_KEYS["stock"]))
    form.invima_registration = col_i.text_input("Registro INVIMA", key=_FIELD_KEYS["invima_registration"])
    expiry_kwargs = {} if _FIELD_KEYS["expiry_date"] in st.session_state else {"value": None}
    form.expiry_date = col_e.date_input(
        "Fecha Vencimiento", key=_FIELD_KEYS["expiry_date"], **expiry_kwargs
    )
    form.lot_number = st.text_input(
        "Lote (opcional)", key=_FIELD_KEYS["lot_number"], help="Se genera automáticamente si se deja vacío"
    ) or None

    missing = not (form.name.strip() and form.invima_registration.strip() and form.expiry_date)
    if st.button("Guardar Producto", type="primary", disabled=bool(margin_error) or missing):
        try:
            product = catalog.add_from_form(form)
        except ProductValidationError as exc:
            st.error(str(exc))
            return
        st.success(f"Producto registrado: {product.name} (lote {product.lot_number})")
        st.session_state.show_product_form = False
        _reset_form()
        st.rerun()


def _products_table(products: List[Product]) -> pd.DataFrame:
    rows = []
    for p in products:
        metrics = financial_metrics(p, SETTINGS.rotation_period_days)
        rows.append(
            {
                "Producto": p.name,
                "Categoría": CATEGORY_LABELS[p.category],
                "Precio Compra (COP)": p.purchase_price,
                "Costo Total (Unitario)": unit_cost(p),
                "Cant. Inicial": p.initial_stock,
                "Cant. Vendida": p.sold_quantity,
                "Precio Venta (COP)": p.sale_price,
                "Margen (%)": round(metrics.margin_percent, 1),
                "En Banda": "✅" if is_margin_compliant(p) else "❌",
                "Acción Sugerida": metrics.action.value,
                "Rotación": round(metrics.rotation, 1),
                "Días Inventario": round_days(metrics.days_inventory),
            }
        )
    return pd.DataFrame(rows)


def render_products(user: User) -> None:
    """Render the product manager for *user* (editing requires admin/pharmacist)."""
    editable = can_edit(user)
    if prefill := pop_scan_prefill():
        _apply_prefill(prefill)

    col_title, col_export, col_new = st.columns([3, 1, 1])
    with col_title:
        st.header("💊 Gestión de Productos")
    with col_export:
        st.download_button(
            "📥 Exportar Excel",
            data=export_products_excel(get_catalog(), SETTINGS.rotation_period_days),
            file_name=products_export_filename(),
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
    with col_new:
        if editable:
            showing = st.session_state.get("show_product_form", False)
            if st.button("Cancelar" if showing else "+ Nuevo Producto"):
                st.session_state.show_product_form = not showing
                st.rerun()

    if editable and st.session_state.get("show_product_form"):
        with st.container(border=True):
            _render_form()

    products = get_catalog().products
    df = _products_table(products)
    if df.empty:
        st.info("No hay productos registrados.")
    else:
        badges = [category_badge_css(p.category) for p in products]
        st.dataframe(
            df.style.apply(lambda _: badges, subset=["Categoría"]),
            hide_index=True,
            use_container_width=True,
            column_config={
                "Precio Compra (COP)": st.column_config.NumberColumn(format="$%d"),
                "Costo Total (Unitario)": st.column_config.NumberColumn(format="$%d"),
                "Precio Venta (COP)": st.column_config.NumberColumn(format="$%d"),
                "Margen (%)": st.column_config.NumberColumn(format="%.1f%%"),
                "Días Inventario": st.column_config.NumberColumn(format="%.1f"),
            },
        )
