"""Dashboard statistics and spreadsheet exports."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional

import pandas as pd
from openpyxl.utils import get_column_letter

from .models import CATEGORY_COLORS, Product, RegulatoryCategory
from .pricing import financial_metrics, unit_cost

PRODUCT_SHEET = "Inventario"
FINANCIAL_SHEET = "Resumen Financiero"


@dataclass
class DashboardStats:
    total_value: float = 0.0
    low_stock_count: int = 0
    total_references: int = 0
    by_category: Dict[RegulatoryCategory, int] = field(default_factory=dict)


def dashboard_stats(products: Iterable[Product], low_stock_threshold: int = 10) -> DashboardStats:
    stats = DashboardStats()
    for p in products:
        stats.total_value += p.sale_price * p.current_stock
        if p.current_stock < low_stock_threshold:
            stats.low_stock_count += 1
        stats.by_category[p.category] = stats.by_category.get(p.category, 0) + 1
        stats.total_references += 1
    return stats


def category_chart_frame(stats: DashboardStats) -> pd.DataFrame:
    """Counts per category, labelled for the bar chart."""
    rows = [
        {"name": cat.value.replace("_", " ", 1), "count": count}
        for cat, count in stats.by_category.items()
    ]
    return pd.DataFrame(rows, columns=["name", "count"])


def round_days(days: Optional[float]) -> Optional[float]:
    return None if days is None else round(days, 1)


def category_badge_css(category: RegulatoryCategory) -> str:
    """Cell style painting *category* in its badge colour."""
    return f"background-color: {CATEGORY_COLORS[category]}; color: white"


def products_frame(products: Iterable[Product], period_days: int = 30) -> pd.DataFrame:
    rows: List[dict] = []
    for p in products:
        metrics = financial_metrics(p, period_days)
        rows.append(
            {
                "PRODUCTO": p.name,
                "CATEGORÍA": p.category.value,
                "PRECIO COMPRA (COP)": p.purchase_price,
                "COSTO TOTAL UNITARIO (COP)": unit_cost(p),
                "CANTIDAD INICIAL": p.initial_stock,
                "CANTIDAD VENDIDA": p.sold_quantity,
                "PRECIO DE VENTA (COP)": p.sale_price,
                "MARGEN (%)": f"{metrics.margin_percent:.2f}",
                "ACCIÓN SUGERIDA": metrics.action.value,
                "STOCK ACTUAL": p.current_stock,
                "LOTE": p.lot_number,
                "VENCIMIENTO": p.expiry_date.isoformat(),
                "DÍAS INVENTARIO": round_days(metrics.days_inventory),
            }
        )
    return pd.DataFrame(rows)


def financial_frame(stats: DashboardStats) -> pd.DataFrame:
    rows = [
        {"Concepto": "Valor Total Inventario", "Valor": stats.total_value},
        {"Concepto": "Alertas Stock Bajo", "Valor": stats.low_stock_count},
    ]
    rows += [
        {"Concepto": f"Total {cat.value}", "Valor": count}
        for cat, count in stats.by_category.items()
    ]
    return pd.DataFrame(rows, columns=["Concepto", "Valor"])


def _to_xlsx(df: pd.DataFrame, sheet_name: str, *, fit_columns: bool = False) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)
        if fit_columns:
            ws = writer.sheets[sheet_name]
            for idx, header in enumerate(df.columns, start=1):
                ws.column_dimensions[get_column_letter(idx)].width = max(len(str(header)) + 5, 15)
    return buffer.getvalue()


def export_products_excel(products: Iterable[Product], period_days: int = 30) -> bytes:
    return _to_xlsx(products_frame(products, period_days), PRODUCT_SHEET, fit_columns=True)


def export_financial_report(stats: DashboardStats) -> bytes:
    return _to_xlsx(financial_frame(stats), FINANCIAL_SHEET)


def products_export_filename(day: date | None = None) -> str:
    return f"Inventario_PharmaControl_{(day or date.today()).isoformat()}.xlsx"


def financial_export_filename(day: date | None = None) -> str:
    return f"Reporte_Financiero_{(day or date.today()).isoformat()}.xlsx"
