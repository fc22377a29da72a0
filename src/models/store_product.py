"""
Store product data models.

Pure data classes for the catalog service payloads.
Only the `from_api` constructors carry logic: they tolerate partial or
sloppy upstream payloads instead of failing on them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple


def _as_int(value: Any) -> Optional[int]:
    """Coerce an upstream integer field, returning None when it isn't one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_text(value: Any) -> str:
    """Decimal-as-text fields stay text; None becomes empty."""
    if value is None:
        return ""
    return str(value)


@dataclass
class Product:
    """Catalog product (referenced by store products, not owned)."""
    brand: str
    name: str
    flavor: str
    id: Optional[int] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            brand=_as_text(data.get("brand")),
            name=_as_text(data.get("name")),
            flavor=_as_text(data.get("flavor")),
            id=_as_int(data.get("id")),
        )


@dataclass
class ProductStockRecord:
    """
    Stock and pricing of one product in one store.

    Prices are kept as the exact text the API sent ("12.50") so that
    money never goes through float rounding until display time.
    `stock_quantity` is None when upstream sent something that isn't an
    integer; such records are never eligible.
    """
    store_id: Optional[int]
    product: Optional[Product] = None
    is_active: bool = False
    stock_quantity: Optional[int] = 0
    cost_price: str = ""
    sale_price: str = ""
    min_stock_level: int = 0
    id: Optional[int] = None
    product_id: Optional[int] = None

    @property
    def is_eligible(self) -> bool:
        """Has a product, is active and has at least one unit in stock."""
        return (
            self.product is not None
            and self.is_active is True
            and self.stock_quantity is not None
            and self.stock_quantity >= 1
        )

    @property
    def is_low_stock(self) -> bool:
        return (self.stock_quantity or 0) <= (self.min_stock_level or 0)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ProductStockRecord":
        product_data = data.get("product")
        product = Product.from_api(product_data) if isinstance(product_data, dict) else None

        return cls(
            id=_as_int(data.get("id")),
            store_id=_as_int(data.get("store_id")),
            product_id=_as_int(data.get("product_id")),
            product=product,
            is_active=data.get("is_active") is True,
            stock_quantity=_as_int(data.get("stock_quantity")),
            cost_price=_as_text(data.get("cost_price")),
            sale_price=_as_text(data.get("sale_price")),
            min_stock_level=_as_int(data.get("min_stock_level")) or 0,
        )


@dataclass
class CatalogPage:
    """One page of a paginated list response. Consumed immediately, never stored."""
    items: List[ProductStockRecord]
    page_number: int
    total_pages: Optional[int] = None
    current_page: Optional[int] = None

    @property
    def has_next(self) -> bool:
        if self.current_page is None or self.total_pages is None:
            return False
        return self.current_page < self.total_pages


@dataclass
class GroupedVariant:
    """
    One sellable price point of a product, spanning its flavors.

    Identity is (brand, name, sale_price) with the price as its exact
    string form.
    """
    brand: str
    name: str
    sale_price: str
    flavors: Set[str] = field(default_factory=set)

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.brand, self.name, self.sale_price)

    def sorted_flavors(self) -> List[str]:
        return sorted(self.flavors)


@dataclass
class Store:
    """Store as returned by the stores endpoint."""
    id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Store":
        return cls(
            id=_as_int(data.get("id")) or 0,
            name=_as_text(data.get("name")),
            address=data.get("address"),
            phone=data.get("phone"),
            is_active=data.get("is_active", True) is True,
        )
