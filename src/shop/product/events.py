"""Domain events for the Product aggregate."""

from protean.fields import Boolean, Identifier, String

from shop.domain import shop


@shop.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalog."""

    __version__ = 1

    product_id = Identifier(required=True)
    sku = String(required=True)
    name = String(required=True)
    price = String(required=True)
    requires_deposit = Boolean(default=False)


@shop.event(part_of="Product")
class ProductDetailsUpdated:
    """A product's catalog details were replaced."""

    __version__ = 1

    product_id = Identifier(required=True)
    sku = String(required=True)
    name = String(required=True)
    price = String(required=True)
    requires_deposit = Boolean(default=False)
