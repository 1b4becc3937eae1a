"""Unit tests for dashboard statistics and spreadsheet exports."""

import io
from datetime import date

from openpyxl import load_workbook

from src.inventory.models import RegulatoryCategory
from src.inventory.reports import (
    category_badge_css,
    category_chart_frame,
    dashboard_stats,
    export_financial_report,
    export_products_excel,
    financial_export_filename,
    products_export_filename,
    products_frame,
    round_days,
)


def test_dashboard_stats(seeded_products):
    stats = dashboard_stats(seeded_products)

    assert stats.total_value == 6875 * 5 + 1586 * 120
    assert stats.low_stock_count == 1
    assert stats.total_references == 2
    assert stats.by_category == {
        RegulatoryCategory.FONDO_NACIONAL: 1,
        RegulatoryCategory.MONOPOLIO_ESTADO: 1,
    }


def test_dashboard_stats_empty():
    stats = dashboard_stats([])
    assert stats.total_value == 0
    assert stats.by_category == {}
    assert category_chart_frame(stats).empty


def test_category_chart_labels(seeded_products, make_product):
    products = seeded_products + [make_product()]
    df = category_chart_frame(dashboard_stats(products))
    assert list(df["name"]) == ["FONDO NACIONAL", "MONOPOLIO ESTADO", "LIBRE VENTA"]
    assert list(df["count"]) == [1, 1, 1]


def test_products_frame_columns(seeded_products):
    df = products_frame(seeded_products)
    assert list(df.columns) == [
        "PRODUCTO",
        "CATEGORÍA",
        "PRECIO COMPRA (COP)",
        "COSTO TOTAL UNITARIO (COP)",
        "CANTIDAD INICIAL",
        "CANTIDAD VENDIDA",
        "PRECIO DE VENTA (COP)",
        "MARGEN (%)",
        "ACCIÓN SUGERIDA",
        "STOCK ACTUAL",
        "LOTE",
        "VENCIMIENTO",
        "DÍAS INVENTARIO",
    ]
    assert list(df["MARGEN (%)"]) == ["20.00", "18.03"]
    assert list(df["ACCIÓN SUGERIDA"]) == ["Revisar", "Revisar"]
    assert df.loc[0, "COSTO TOTAL UNITARIO (COP)"] == 5500
    assert df.loc[1, "VENCIMIENTO"] == "2024-10-20"
    assert list(df["DÍAS INVENTARIO"]) == [18.3, 135.0]


def test_export_products_excel(seeded_products):
    wb = load_workbook(io.BytesIO(export_products_excel(seeded_products)))
    ws = wb["Inventario"]

    assert ws["A1"].value == "PRODUCTO"
    assert ws["A2"].value == "Morfina 10mg Ampolla"
    assert ws["K3"].value == "L-221"
    assert ws.column_dimensions["A"].width == 15
    assert ws.column_dimensions["D"].width == len("COSTO TOTAL UNITARIO (COP)") + 5


def test_export_financial_report(seeded_products):
    wb = load_workbook(io.BytesIO(export_financial_report(dashboard_stats(seeded_products))))
    ws = wb["Resumen Financiero"]

    rows = [tuple(r) for r in ws.iter_rows(values_only=True)]
    assert rows[0] == ("Concepto", "Valor")
    assert rows[1] == ("Valor Total Inventario", 224695)
    assert rows[2] == ("Alertas Stock Bajo", 1)
    assert rows[3] == ("Total FONDO_NACIONAL", 1)
    assert rows[4] == ("Total MONOPOLIO_ESTADO", 1)


def test_export_filenames():
    day = date(2025, 1, 2)
    assert products_export_filename(day) == "Inventario_PharmaControl_2025-01-02.xlsx"
    assert financial_export_filename(day) == "Reporte_Financiero_2025-01-02.xlsx"


def test_days_inventory_without_sales_is_blank(make_product):
    df = products_frame([make_product(sold_quantity=0)])
    assert df.loc[0, "DÍAS INVENTARIO"] is None
    assert round_days(None) is None


def test_category_badge_css():
    assert category_badge_css(RegulatoryCategory.MONOPOLIO_ESTADO) == (
        "background-color: #dc2626; color: white"
    )
