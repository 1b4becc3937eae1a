"""Prompt and response schema for reading a medicine package photo."""

PRODUCT_SCAN_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "productName": {"type": "STRING"},
        "activeIngredient": {"type": "STRING"},
        "expiryDate": {"type": "STRING"},
        "lotNumber": {"type": "STRING"},
        "registrationNumber": {"type": "STRING"},
    },
}


def get_product_scan_prompt() -> str:
    """Instruction sent alongside the package image.

    Returns:
        Prompt asking for the fields of ``PRODUCT_SCAN_SCHEMA`` in JSON
    """
    return (
        "Analiza esta imagen de un medicamento farmacéutico. Extrae la siguiente "
        "información en formato JSON: Nombre comercial, Principio activo, Fecha de "
        "vencimiento (YYYY-MM-DD), Lote, Registro Sanitario (INVIMA o equivalente). "
        "Si no encuentras algún dato, devuelve null."
    )
