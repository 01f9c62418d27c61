# storefront/logic/cart.py
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

ProductLookup = Callable[[str], Optional[dict]]


@dataclass
class CartItem:
    product_id: str
    quantity: int


class Cart:
    """Shopping cart lines. Prices are never stored here; they come from the product lookup."""

    def __init__(self, items: Optional[List[CartItem]] = None):
        self.items: List[CartItem] = list(items or [])

    @classmethod
    def from_payload(cls, payload) -> "Cart":
        """Build a cart from a JSON list of {product_id, quantity}. Duplicate ids are merged."""
        if not isinstance(payload, list):
            raise ValueError("items must be a list")
        cart = cls()
        for raw in payload:
            if not isinstance(raw, dict) or not raw.get("product_id"):
                raise ValueError("each item needs a product_id")
            quantity = raw.get("quantity", 1)
            # JSON true/false and 2.7 are not quantities
            if isinstance(quantity, bool) or (isinstance(quantity, float) and not quantity.is_integer()):
                raise ValueError(f"invalid quantity for product {raw['product_id']}")
            try:
                quantity = int(quantity)
            except (TypeError, ValueError):
                raise ValueError(f"invalid quantity for product {raw['product_id']}")
            if quantity <= 0:
                raise ValueError(f"quantity must be positive for product {raw['product_id']}")
            cart.add(str(raw["product_id"]), quantity)
        return cart

    def _find(self, product_id: str) -> Optional[CartItem]:
        return next((item for item in self.items if item.product_id == product_id), None)

    def add(self, product_id: str, quantity: int = 1) -> None:
        existing = self._find(product_id)
        if existing:
            existing.quantity += quantity
        else:
            self.items.append(CartItem(product_id, quantity))

    def remove(self, product_id: str) -> None:
        self.items = [item for item in self.items if item.product_id != product_id]

    def update_quantity(self, product_id: str, quantity: int) -> None:
        if quantity <= 0:
            self.remove(product_id)
            return
        existing = self._find(product_id)
        if existing:
            existing.quantity = quantity

    def clear(self) -> None:
        self.items = []

    def contains(self, product_id: str) -> bool:
        return self._find(product_id) is not None

    def count(self) -> int:
        return sum(item.quantity for item in self.items)

    def lines(self, lookup: ProductLookup) -> List[Tuple[CartItem, dict]]:
        """Cart lines joined with their product; unknown products are skipped."""
        joined = []
        for item in self.items:
            product = lookup(item.product_id)
            if product:
                joined.append((item, product))
        return joined

    def total(self, lookup: ProductLookup) -> float:
        return sum(float(product["price"]) * item.quantity for item, product in self.lines(lookup))

    def missing_products(self, lookup: ProductLookup) -> List[str]:
        return [item.product_id for item in self.items if not lookup(item.product_id)]


def lookup_from_products(products: List[dict]) -> ProductLookup:
    """Lookup over rows fetched from the products table."""
    by_id: Dict[str, dict] = {str(p["id"]): p for p in products}
    return by_id.get
