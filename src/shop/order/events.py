"""Domain events for the ClientOrder aggregate."""

from protean.fields import Identifier, String

from shop.domain import shop


@shop.event(part_of="ClientOrder")
class ClientOrderPlaced:
    """A cart was checked out into a client order."""

    __version__ = 1

    order_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    email = String(required=True)
    total = String(required=True)
