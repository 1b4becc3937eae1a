"""LLM review of inventory profitability and margin compliance."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from src.config.settings import SETTINGS
from src.inventory.models import Product
from src.inventory.pricing import financial_metrics, is_margin_compliant, unit_cost
from src.inventory.reports import round_days
from src.llms import get_smart_client
from src.prompts.financial_analysis import get_financial_analysis_prompt

logger = logging.getLogger(__name__)

MAX_PRODUCTS = 20
FAILURE_MESSAGE = "No se pudo realizar el análisis financiero en este momento."


def _serialise(product: Product, period_days: int) -> Dict[str, Any]:
    metrics = financial_metrics(product, period_days)
    return {
        "name": product.name,
        "category": product.category.value,
        "unitCost": unit_cost(product),
        "salePrice": product.sale_price,
        "currentStock": product.current_stock,
        "soldQuantity": product.sold_quantity,
        "marginPercent": round(metrics.margin_percent, 2),
        "marginCompliant": is_margin_compliant(product),
        "rotation": round(metrics.rotation, 2),
        "daysInventory": round_days(metrics.days_inventory),
        "expiryDate": product.expiry_date.isoformat(),
    }


def analyze_financial_health(products: Iterable[Product]) -> str:
    """Return the model's strategy text, or a fixed apology on failure."""
    rows: List[Dict[str, Any]] = [
        _serialise(p, SETTINGS.rotation_period_days) for p in list(products)[:MAX_PRODUCTS]
    ]
    try:
        client = get_smart_client()
        return client.chat(
            [{"role": "user", "content": get_financial_analysis_prompt(rows)}],
            provider_models={"gemini": SETTINGS.gemini_analysis_model},
        )
    except Exception as e:
        logger.error("Error in financial analysis: %s", e)
        return FAILURE_MESSAGE


__all__ = ["analyze_financial_health", "FAILURE_MESSAGE", "MAX_PRODUCTS"]
