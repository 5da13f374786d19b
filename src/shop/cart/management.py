"""Cart creation: command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from shop.cart.cart import Cart
from shop.domain import shop
from shop.utils.logging import get_logger

logger = get_logger(__name__)


@shop.command(part_of="Cart")
class CreateCart:
    """Open a new, empty cart for a shopping session."""

    session_id = String(max_length=255)


@shop.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        cart = Cart.create(session_id=command.session_id)
        current_domain.repository_for(Cart).add(cart)
        logger.info("cart_created", cart_id=str(cart.id))
        return str(cart.id)
