"""Inventory alert generation and the notification inbox.

`check_alerts` is a pure function of the product list and a clock so it can
be called from the polling timer in the UI and from tests alike.
"""

from __future__ import annotations

import logging
import random
from datetime import date, datetime
from typing import Iterable, List, Optional

from .models import Notification, NotificationType, Product
from .pricing import is_margin_compliant, product_margin

logger = logging.getLogger(__name__)

REGULATORY_UPDATE_MESSAGE = "Actualización INVIMA: Nueva circular sobre Monopolio del Estado."


def _millis(now: datetime) -> int:
    return int(now.timestamp() * 1000)


def is_low_stock(product: Product, threshold: int = 10) -> bool:
    return product.current_stock < threshold


def days_to_expiry(product: Product, today: date) -> int:
    return (product.expiry_date - today).days


def is_near_expiry(product: Product, today: date, window_days: int = 90) -> bool:
    """True for lots that expire within *window_days* or have already expired."""
    return days_to_expiry(product, today) <= window_days


def check_alerts(
    products: Iterable[Product],
    *,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
    low_stock_threshold: int = 10,
    expiry_window_days: int = 90,
    regulatory_update_probability: float = 0.2,
) -> List[Notification]:
    """Return notifications for the current state of *products*."""
    now = now or datetime.now()
    rng = rng or random.Random()
    stamp = _millis(now)
    today = now.date()
    products = list(products)
    found: List[Notification] = []

    for p in products:
        if is_low_stock(p, low_stock_threshold):
            found.append(
                Notification(
                    id=f"stock-{p.id}-{stamp}",
                    type=NotificationType.CRITICAL,
                    message=f"Stock crítico: {p.name} ({p.current_stock} unidades)",
                    timestamp=now,
                )
            )

    for p in products:
        if not is_near_expiry(p, today, expiry_window_days):
            continue
        if days_to_expiry(p, today) < 0:
            kind, message = NotificationType.CRITICAL, f"Vencido: {p.name}"
        else:
            kind, message = NotificationType.WARNING, f"Próximo a vencer: {p.name}"
        found.append(
            Notification(id=f"exp-{p.id}-{stamp}", type=kind, message=message, timestamp=now)
        )

    for p in products:
        if not is_margin_compliant(p):
            found.append(
                Notification(
                    id=f"marg-{p.id}-{stamp}",
                    type=NotificationType.CRITICAL,
                    message=f"Desviación de margen: {p.name} ({product_margin(p):.1f}%)",
                    timestamp=now,
                )
            )

    # Simulated regulator feed
    if rng.random() < regulatory_update_probability:
        found.append(
            Notification(
                id=f"reg-{stamp}",
                type=NotificationType.INFO,
                message=REGULATORY_UPDATE_MESSAGE,
                timestamp=now,
            )
        )

    if found:
        logger.debug("Alert check produced %d notification(s)", len(found))
    return found


class NotificationCenter:
    """Newest-first notification inbox, deduplicated by message text."""

    def __init__(self) -> None:
        self._items: List[Notification] = []

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def notifications(self) -> List[Notification]:
        return list(self._items)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._items if not n.read)

    def merge(self, new: Iterable[Notification]) -> int:
        """Prepend notifications whose message is not already present."""
        seen = {n.message for n in self._items}
        unique = []
        for n in new:
            if n.message in seen:
                continue
            seen.add(n.message)
            unique.append(n)
        self._items = unique + self._items
        return len(unique)

    def dismiss(self, notification_id: str) -> bool:
        before = len(self._items)
        self._items = [n for n in self._items if n.id != notification_id]
        return len(self._items) < before

    def mark_all_read(self) -> None:
        for n in self._items:
            n.read = True

    def clear(self) -> None:
        self._items = []
