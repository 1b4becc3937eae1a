"""Prompt for the inventory profitability review."""

import json
from typing import Any, Dict, List


def get_financial_analysis_prompt(inventory: List[Dict[str, Any]]) -> str:
    """Build the analysis request for a list of serialised products.

    Args:
        inventory: Product rows with their computed margin and rotation

    Returns:
        Prompt text embedding the rows as JSON
    """
    return (
        "Analiza este inventario farmacéutico y sugiere una estrategia de optimización "
        "financiera. Enfócate en productos con baja rotación y alto costo, y valida si "
        "los márgenes cumplen la regulación. "
        f"Datos: {json.dumps(inventory, ensure_ascii=False)}"
    )
