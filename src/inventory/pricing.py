"""Margin, price and rotation calculations.

Margins are always expressed on the sale price::

    margin % = (sale price - unit cost) / sale price * 100

so a price suggested from a margin reads back as the same margin in the
product table and in the regulatory check.
"""

from __future__ import annotations

import math
from typing import Optional

from .models import (
    CATEGORY_LABELS,
    MARGIN_LIMITS,
    Action,
    FinancialMetrics,
    MarginBand,
    Product,
    RegulatoryCategory,
)


MARGIN_PRECISION = 1


class PricingError(ValueError):
    """Raised when a price cannot be derived from the supplied inputs."""


def unit_cost(product: Product) -> float:
    """Purchase price plus per-unit associated costs."""
    return product.purchase_price + product.associated_costs


def margin_percent(sale_price: float, cost: float) -> float:
    if sale_price <= 0:
        return 0.0
    return (sale_price - cost) / sale_price * 100


def product_margin(product: Product) -> float:
    return margin_percent(product.sale_price, unit_cost(product))


def suggested_sale_price(cost: float, margin: float, band: MarginBand | None = None) -> int:
    """Return the whole-peso sale price that yields *margin* percent on sale.

    Prices are rounded half-up. When *band* is given and the rounded price
    leaves it, the other whole-peso neighbour of the exact price is used if
    that one stays inside.
    """
    if margin >= 100:
        raise PricingError("El margen sobre el precio de venta debe ser menor a 100%")
    price = cost / (1 - margin / 100)
    # Half-up rounding to whole pesos
    rounded = int(math.floor(price + 0.5))
    if band is None or margin_in_band(band, rounded, cost):
        return rounded
    for candidate in (int(math.floor(price)), int(math.ceil(price))):
        if margin_in_band(band, candidate, cost):
            return candidate
    return rounded


def margin_in_band(band: MarginBand, sale_price: float, cost: float) -> bool:
    # Compared at display precision: whole-peso prices shift margins by a few hundredths.
    return band.contains(round(margin_percent(sale_price, cost), MARGIN_PRECISION))


def validate_margin(category: RegulatoryCategory, margin: float) -> Optional[str]:
    """Return an error message when *margin* falls outside the category band."""
    band = MARGIN_LIMITS[category]
    if band.contains(margin):
        return None
    return (
        f"El margen para {CATEGORY_LABELS[category]} debe estar entre "
        f"{band.min:g}% y {band.max:g}%"
    )


def is_margin_compliant(product: Product) -> bool:
    return margin_in_band(MARGIN_LIMITS[product.category], product.sale_price, unit_cost(product))


def rotation(product: Product) -> float:
    """Sold quantity divided by average inventory over the period."""
    avg_inventory = (product.initial_stock + product.current_stock) / 2
    if avg_inventory <= 0:
        return 0.0
    return product.sold_quantity / avg_inventory


def suggested_action(rot: float) -> Action:
    if rot > 3:
        return Action.REORDER
    if rot > 2:
        return Action.PROMOTE
    return Action.REVIEW


def days_inventory(rot: float, period_days: int) -> Optional[float]:
    """Days of cover implied by *rot* over a period of *period_days*."""
    if rot <= 0:
        return None
    return period_days / rot


def financial_metrics(product: Product, period_days: int = 30) -> FinancialMetrics:
    rot = rotation(product)
    return FinancialMetrics(
        margin_percent=product_margin(product),
        rotation=rot,
        days_inventory=days_inventory(rot, period_days),
        action=suggested_action(rot),
    )
