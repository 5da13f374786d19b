"""ClientOrder aggregate: a purchaser bound to a frozen copy of their cart.

The lines are stored as serialised JSON, so later changes to the live cart
(or to the catalog) never reach an order that has already been placed.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text, ValueObject

from shop.domain import shop
from shop.order.events import ClientOrderPlaced
from shop.shared.email import EmailAddress


@shop.aggregate
class ClientOrder:
    email = ValueObject(EmailAddress, required=True)
    cart_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of cart line snapshots
    total = String(required=True, max_length=20)
    placed_at = DateTime()

    @classmethod
    def place(cls, email, cart):
        snapshot = cart.snapshot()
        order = cls(
            email=EmailAddress(address=email),
            cart_id=snapshot["cart_id"],
            items=json.dumps(snapshot["items"]),
            total=snapshot["total"],
            placed_at=datetime.now(UTC),
        )
        order.raise_(
            ClientOrderPlaced(
                order_id=str(order.id),
                cart_id=snapshot["cart_id"],
                email=email,
                total=order.total,
            )
        )
        return order

    def snapshot(self) -> dict:
        return {
            "order_id": str(self.id),
            "email": self.email.address,
            "cart_id": str(self.cart_id),
            "items": json.loads(self.items),
            "total": self.total,
        }
