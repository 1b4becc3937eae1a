"""Shared fixtures for the PharmaControl test-suite."""

from datetime import date

import pytest

from src.inventory.catalog import ProductCatalog, seed_products
from src.inventory.models import Product, RegulatoryCategory


@pytest.fixture
def seeded_products():
    return seed_products()


@pytest.fixture
def catalog(seeded_products):
    import random

    return ProductCatalog(seeded_products, rng=random.Random(7))


@pytest.fixture
def make_product():
    """Factory for products with sensible, band-compliant defaults."""

    def _make(**overrides):
        values = dict(
            id="p-1",
            name="Acetaminofén 500mg",
            category=RegulatoryCategory.LIBRE_VENTA,
            purchase_price=1000,
            associated_costs=0,
            sale_price=1250,
            current_stock=40,
            initial_stock=40,
            sold_quantity=0,
            expiry_date=date(2030, 1, 1),
            lot_number="L-1",
            invima_registration="INVIMA-2021M-0001",
        )
        values.update(overrides)
        return Product(**values)

    return _make
