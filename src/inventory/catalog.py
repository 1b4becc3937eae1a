"""In-memory product catalog.

The catalog is the only place where products are created or mutated. The UI
keeps one instance per Streamlit session.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .models import MARGIN_LIMITS, Product, RegulatoryCategory
from .pricing import (
    PricingError,
    is_margin_compliant,
    margin_in_band,
    margin_percent,
    product_margin,
    suggested_sale_price,
    validate_margin,
)

logger = logging.getLogger(__name__)


class ProductValidationError(ValueError):
    """Raised when a product cannot be registered."""


class InsufficientStockError(ValueError):
    """Raised when a sale exceeds the available stock."""


@dataclass
class ProductForm:
    """Values captured by the product registration form."""

    name: str = ""
    category: RegulatoryCategory = RegulatoryCategory.LIBRE_VENTA
    purchase_price: float = 0.0
    associated_costs: float = 0.0
    margin: float = 20.0
    stock: int = 0
    invima_registration: str = ""
    expiry_date: Optional[date] = None
    lot_number: Optional[str] = None

    @property
    def unit_cost(self) -> float:
        return self.purchase_price + self.associated_costs

    def margin_error(self) -> Optional[str]:
        """Error for the typed margin, or for the whole-peso price it rounds to."""
        if err := validate_margin(self.category, self.margin):
            return err
        try:
            price = self.sale_price()
        except PricingError as exc:
            return str(exc)
        if price > 0 and not margin_in_band(MARGIN_LIMITS[self.category], price, self.unit_cost):
            return (
                f"El precio redondeado ${price:,} deja el margen en "
                f"{margin_percent(price, self.unit_cost):.1f}%, fuera de la banda permitida"
            )
        return None

    def sale_price(self) -> int:
        return suggested_sale_price(self.unit_cost, self.margin, MARGIN_LIMITS[self.category])


def seed_products() -> List[Product]:
    """Demo inventory loaded into every new session."""
    return [
        Product(
            id="1",
            name="Morfina 10mg Ampolla",
            category=RegulatoryCategory.FONDO_NACIONAL,
            purchase_price=5000,
            associated_costs=500,
            sale_price=6875,
            current_stock=5,
            initial_stock=50,
            sold_quantity=45,
            expiry_date=date(2025, 12, 31),
            lot_number="L-998",
            invima_registration="INVIMA-2020M-0009",
        ),
        Product(
            id="2",
            name="Fenobarbital 100mg",
            category=RegulatoryCategory.MONOPOLIO_ESTADO,
            purchase_price=1200,
            associated_costs=100,
            sale_price=1586,
            current_stock=120,
            initial_stock=150,
            sold_quantity=30,
            expiry_date=date(2024, 10, 20),
            lot_number="L-221",
            invima_registration="INVIMA-2019M-1120",
        ),
    ]


def form_from_scan(fields: Dict[str, Any]) -> ProductForm:
    """Pre-fill a registration form from OCR-extracted product fields."""
    return ProductForm(
        name=fields.get("name") or "",
        invima_registration=fields.get("invima_registration") or "",
        lot_number=fields.get("lot_number") or None,
        expiry_date=fields.get("expiry_date"),
    )


class ProductCatalog:
    """Ordered collection of products with validated inserts."""

    def __init__(self, products: Iterable[Product] | None = None, *, rng: random.Random | None = None):
        # Existing stock is accepted as-is; non-compliant items surface as alerts.
        self._products: List[Product] = list(products or [])
        self._rng = rng or random.Random()

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    @property
    def products(self) -> List[Product]:
        return list(self._products)

    def get(self, product_id: str) -> Optional[Product]:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, product: Product) -> Product:
        self._validate(product)
        if self.get(product.id) is not None:
            raise ProductValidationError(f"Ya existe un producto con id {product.id}")
        self._products.append(product)
        logger.info("Registered product %s (%s)", product.name, product.category.value)
        return product

    def build_product(self, form: ProductForm) -> Product:
        """Turn a submitted form into a product ready for :meth:`add`."""
        if err := form.margin_error():
            raise ProductValidationError(err)
        if form.expiry_date is None:
            raise ProductValidationError("La fecha de vencimiento es obligatoria")
        return Product(
            id=self._next_id(),
            name=form.name.strip(),
            category=form.category,
            purchase_price=form.purchase_price,
            associated_costs=form.associated_costs,
            sale_price=form.sale_price(),
            current_stock=form.stock,
            initial_stock=form.stock,
            sold_quantity=0,
            expiry_date=form.expiry_date,
            lot_number=form.lot_number or f"L-{self._rng.randint(0, 9999)}",
            invima_registration=form.invima_registration.strip(),
        )

    def add_from_form(self, form: ProductForm) -> Product:
        return self.add(self.build_product(form))

    def record_sale(self, product_id: str, quantity: int) -> Product:
        product = self.get(product_id)
        if product is None:
            raise KeyError(product_id)
        if quantity <= 0:
            raise ValueError("La cantidad vendida debe ser positiva")
        if quantity > product.current_stock:
            raise InsufficientStockError(
                f"Stock insuficiente para {product.name}: {product.current_stock} disponibles"
            )
        product.current_stock -= quantity
        product.sold_quantity += quantity
        return product

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _next_id(self) -> str:
        candidate = int(time.time() * 1000)
        while self.get(str(candidate)) is not None:
            candidate += 1
        return str(candidate)

    @staticmethod
    def _validate(product: Product) -> None:
        if not product.name.strip():
            raise ProductValidationError("El nombre del producto es obligatorio")
        if product.sale_price <= 0:
            raise ProductValidationError("El precio de venta debe ser positivo")
        if product.purchase_price < 0 or product.associated_costs < 0:
            raise ProductValidationError("Los costos no pueden ser negativos")
        if min(product.current_stock, product.initial_stock, product.sold_quantity) < 0:
            raise ProductValidationError("Las cantidades no pueden ser negativas")
        if not is_margin_compliant(product):
            raise ProductValidationError(
                validate_margin(product.category, product_margin(product))
            )
