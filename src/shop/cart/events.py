"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from shop.domain import shop


@shop.event(part_of="Cart")
class CartItemAdded:
    """One unit of a product was added to the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)  # line quantity after the add
    subtotal = String(required=True)
    cart_total = String(required=True)


@shop.event(part_of="Cart")
class CartItemQuantityChanged:
    """The quantity of a cart line was set to a new positive value."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    subtotal = String(required=True)
    cart_total = String(required=True)


@shop.event(part_of="Cart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    cart_total = String(required=True)
