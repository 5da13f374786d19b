"""Repository for the Product aggregate."""

from shop.domain import shop
from shop.product.product import Product


@shop.repository(part_of=Product)
class ProductRepository:
    """Catalog lookups on top of the standard ``get``/``add`` operations."""

    def find_all(self) -> list[Product]:
        return self._dao.query.all().items

    def find_by_sku(self, sku: str) -> Product | None:
        results = self._dao.query.filter(sku=sku).all().items
        return results[0] if results else None
