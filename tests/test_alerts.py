"""Unit tests for alert generation and the notification inbox."""

from datetime import datetime

from src.inventory.alerts import (
    REGULATORY_UPDATE_MESSAGE,
    NotificationCenter,
    check_alerts,
    is_near_expiry,
)
from src.inventory.models import Notification, NotificationType


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


NOW = datetime(2025, 11, 1, 12, 0, 0)
STAMP = int(NOW.timestamp() * 1000)


def _by_message(notifications):
    return {n.message: n for n in notifications}


class TestCheckAlerts:
    def test_seed_inventory_alerts(self, seeded_products):
        found = _by_message(check_alerts(seeded_products, now=NOW, rng=FixedRandom(0.9)))

        assert set(found) == {
            "Stock crítico: Morfina 10mg Ampolla (5 unidades)",
            "Próximo a vencer: Morfina 10mg Ampolla",
            "Vencido: Fenobarbital 100mg",
            "Desviación de margen: Fenobarbital 100mg (18.0%)",
        }
        assert found["Stock crítico: Morfina 10mg Ampolla (5 unidades)"].type is NotificationType.CRITICAL
        assert found["Próximo a vencer: Morfina 10mg Ampolla"].type is NotificationType.WARNING
        assert found["Vencido: Fenobarbital 100mg"].type is NotificationType.CRITICAL

    def test_ids_carry_kind_product_and_timestamp(self, seeded_products):
        ids = {n.id for n in check_alerts(seeded_products, now=NOW, rng=FixedRandom(0.9))}
        assert f"stock-1-{STAMP}" in ids
        assert f"exp-2-{STAMP}" in ids
        assert f"marg-2-{STAMP}" in ids

    def test_regulatory_update_is_random(self, seeded_products):
        with_update = check_alerts(seeded_products, now=NOW, rng=FixedRandom(0.1))
        assert with_update[-1].message == REGULATORY_UPDATE_MESSAGE
        assert with_update[-1].type is NotificationType.INFO
        assert with_update[-1].id == f"reg-{STAMP}"

        without = check_alerts(seeded_products, now=NOW, rng=FixedRandom(0.9))
        assert REGULATORY_UPDATE_MESSAGE not in _by_message(without)

    def test_healthy_product_raises_nothing(self, make_product):
        assert check_alerts([make_product()], now=NOW, rng=FixedRandom(0.9)) == []

    def test_thresholds_are_configurable(self, make_product):
        product = make_product(current_stock=15)
        found = check_alerts(
            [product], now=NOW, rng=FixedRandom(0.9), low_stock_threshold=20, expiry_window_days=90
        )
        assert [n.message for n in found] == ["Stock crítico: Acetaminofén 500mg (15 unidades)"]

    def test_stock_at_threshold_is_not_low(self, make_product):
        assert check_alerts([make_product(current_stock=10)], now=NOW, rng=FixedRandom(0.9)) == []

    def test_near_expiry_window(self, make_product):
        product = make_product(expiry_date=datetime(2026, 1, 30).date())  # 90 days out
        assert is_near_expiry(product, NOW.date(), 90)
        assert not is_near_expiry(product, NOW.date(), 89)


class TestNotificationCenter:
    def _n(self, id_, message):
        return Notification(id=id_, type=NotificationType.INFO, message=message, timestamp=NOW)

    def test_merge_prepends_and_dedupes_by_message(self):
        center = NotificationCenter()
        assert center.merge([self._n("a", "uno")]) == 1
        assert center.merge([self._n("b", "dos"), self._n("c", "uno")]) == 1

        assert [n.id for n in center] == ["b", "a"]
        assert len(center) == 2

    def test_merge_dedupes_within_batch(self):
        center = NotificationCenter()
        assert center.merge([self._n("a", "x"), self._n("b", "x")]) == 1

    def test_repeated_polls_do_not_duplicate(self, seeded_products):
        center = NotificationCenter()
        first = center.merge(check_alerts(seeded_products, now=NOW, rng=FixedRandom(0.9)))
        later = datetime(2025, 11, 1, 12, 0, 30)
        second = center.merge(check_alerts(seeded_products, now=later, rng=FixedRandom(0.9)))
        assert first == 4
        assert second == 0

    def test_dismiss_and_read_state(self):
        center = NotificationCenter()
        center.merge([self._n("a", "uno"), self._n("b", "dos")])
        assert center.unread_count == 2

        assert center.dismiss("a") is True
        assert center.dismiss("a") is False
        assert [n.id for n in center.notifications] == ["b"]

        center.mark_all_read()
        assert center.unread_count == 0

        center.clear()
        assert len(center) == 0
