"""Domain records for the pharmacy inventory.

All records are plain dataclasses kept in memory; nothing here talks to
Streamlit or to an LLM.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional


class RegulatoryCategory(str, Enum):
    MONOPOLIO_ESTADO = "MONOPOLIO_ESTADO"
    FONDO_NACIONAL = "FONDO_NACIONAL"
    MONOPOLIO_CIRCULAR = "MONOPOLIO_CIRCULAR"
    LIBRE_VENTA = "LIBRE_VENTA"


class Action(str, Enum):
    """Suggested follow-up for a product based on its rotation."""

    REORDER = "Reordenar"
    PROMOTE = "Promocionar"
    REVIEW = "Revisar"


class Role(str, Enum):
    ADMIN = "admin"
    PHARMACIST = "pharmacist"
    VIEWER = "viewer"


class NotificationType(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class MarginBand:
    """Inclusive minimum / maximum profit percentage allowed for a category."""

    min: float
    max: float

    def contains(self, margin: float) -> bool:
        return self.min <= margin <= self.max


MARGIN_LIMITS: Dict[RegulatoryCategory, MarginBand] = {
    RegulatoryCategory.FONDO_NACIONAL: MarginBand(20, 25),
    RegulatoryCategory.MONOPOLIO_ESTADO: MarginBand(20, 22),
    RegulatoryCategory.MONOPOLIO_CIRCULAR: MarginBand(25, 35),
    RegulatoryCategory.LIBRE_VENTA: MarginBand(0, 100),
}

CATEGORY_LABELS: Dict[RegulatoryCategory, str] = {
    RegulatoryCategory.FONDO_NACIONAL: "Fondo Nacional de Estupefacientes",
    RegulatoryCategory.MONOPOLIO_ESTADO: "Monopolio del Estado",
    RegulatoryCategory.MONOPOLIO_CIRCULAR: "Monopolio Circular",
    RegulatoryCategory.LIBRE_VENTA: "Venta Libre / OTC",
}

CATEGORY_COLORS: Dict[RegulatoryCategory, str] = {
    RegulatoryCategory.FONDO_NACIONAL: "#7c3aed",
    RegulatoryCategory.MONOPOLIO_ESTADO: "#dc2626",
    RegulatoryCategory.MONOPOLIO_CIRCULAR: "#ea580c",
    RegulatoryCategory.LIBRE_VENTA: "#6b7280",
}


@dataclass
class Product:
    id: str
    name: str
    category: RegulatoryCategory
    purchase_price: float
    associated_costs: float  # transport, storage per unit
    sale_price: float
    current_stock: int
    initial_stock: int  # start of the rotation period
    sold_quantity: int  # within the rotation period
    expiry_date: date
    lot_number: str
    invima_registration: str


@dataclass(frozen=True)
class FinancialMetrics:
    margin_percent: float
    rotation: float
    days_inventory: Optional[float]
    action: Action


@dataclass(frozen=True)
class User:
    username: str
    name: str
    role: Role


@dataclass
class Notification:
    id: str
    type: NotificationType
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    read: bool = False
