"""Product intake from a photo of the medicine package.

analyze_product_image(image_bytes) -> ScanResult | None

Requires GEMINI_API_KEY; the extraction relies on Gemini's JSON response
schema support.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from src.llms import get_gemini_client
from src.prompts.product_scan import PRODUCT_SCAN_SCHEMA, get_product_scan_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanResult:
    product_name: Optional[str] = None
    active_ingredient: Optional[str] = None
    expiry_date: Optional[str] = None
    lot_number: Optional[str] = None
    registration_number: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ScanResult":
        def _clean(key: str) -> Optional[str]:
            value = payload.get(key)
            if value is None:
                return None
            value = str(value).strip()
            return value or None

        return cls(
            product_name=_clean("productName"),
            active_ingredient=_clean("activeIngredient"),
            expiry_date=_clean("expiryDate"),
            lot_number=_clean("lotNumber"),
            registration_number=_clean("registrationNumber"),
        )

    def parsed_expiry(self) -> Optional[date]:
        if not self.expiry_date:
            return None
        try:
            return date.fromisoformat(self.expiry_date)
        except ValueError:
            logger.info("Ignoring unparseable expiry date %r from scan", self.expiry_date)
            return None

    def to_product_fields(self) -> Dict[str, Any]:
        """Map the extracted values onto product attribute names."""
        return {
            "name": self.product_name or "",
            "invima_registration": self.registration_number or "",
            "lot_number": self.lot_number or "",
            "expiry_date": self.parsed_expiry(),
        }


def analyze_product_image(image_bytes: bytes, mime_type: str = "image/jpeg") -> Optional[ScanResult]:
    """Extract product details from *image_bytes*; ``None`` when the scan fails."""
    if not image_bytes:
        return None

    try:
        client = get_gemini_client()
        payload = client.extract_json(
            get_product_scan_prompt(),
            image_bytes,
            schema=PRODUCT_SCAN_SCHEMA,
            mime_type=mime_type,
        )
    except Exception as e:
        logger.error("Error analyzing image: %s", e)
        return None

    if not isinstance(payload, dict):
        logger.error("Unexpected scan payload type: %s", type(payload).__name__)
        return None
    return ScanResult.from_payload(payload)


__all__ = ["ScanResult", "analyze_product_image"]
