"""Checkout: command and handler that turn a cart into a client order."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shop.cart.cart import Cart
from shop.domain import shop
from shop.order.order import ClientOrder
from shop.utils.logging import get_logger, log_context

logger = get_logger(__name__)


@shop.command(part_of="ClientOrder")
class Checkout:
    cart_id = Identifier(required=True)
    email = String(required=True, max_length=254)


@shop.command_handler(part_of=ClientOrder)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        """Place an order from the cart and return the order's snapshot.

        The cart itself is only read; it stays open and can be reset or
        discarded by the caller.
        """
        with log_context(cart_id=str(command.cart_id)):
            cart = current_domain.repository_for(Cart).get(command.cart_id)

            order = ClientOrder.place(email=command.email, cart=cart)
            current_domain.repository_for(ClientOrder).add(order)

            logger.info(
                "client_order_placed",
                order_id=str(order.id),
                total=order.total,
                line_count=len(cart.items),
            )
            return order.snapshot()
