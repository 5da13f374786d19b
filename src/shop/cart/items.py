"""Cart line management: commands and handler.

Every handler is a single read-modify-write of one cart. Nothing here guards
against two requests mutating the same cart concurrently; the last write wins.
Log lines emitted while a handler runs carry the ``cart_id``.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from shop.cart.cart import MAX_LINE_QUANTITY, Cart
from shop.domain import shop
from shop.product.product import Product
from shop.utils.logging import get_logger, log_context

logger = get_logger(__name__)


@shop.command(part_of="Cart")
class AddToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@shop.command(part_of="Cart")
class ChangeCartItemQuantity:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, max_value=MAX_LINE_QUANTITY)  # zero or less removes the line


@shop.command(part_of="Cart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@shop.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        with log_context(cart_id=str(command.cart_id)):
            product = current_domain.repository_for(Product).get(command.product_id)

            repo = current_domain.repository_for(Cart)
            cart = repo.get(command.cart_id)
            cart.add_product(product)
            repo.add(cart)

            logger.info(
                "cart_item_added",
                product_id=str(product.id),
                quantity=cart.item_for(product.id).quantity,
                total=cart.total,
            )

    @handle(ChangeCartItemQuantity)
    def change_cart_item_quantity(self, command):
        with log_context(cart_id=str(command.cart_id)):
            repo = current_domain.repository_for(Cart)
            cart = repo.get(command.cart_id)
            cart.change_quantity(command.product_id, command.quantity)
            repo.add(cart)

            logger.info(
                "cart_item_quantity_changed",
                product_id=str(command.product_id),
                quantity=command.quantity,
                total=cart.total,
            )

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        with log_context(cart_id=str(command.cart_id)):
            repo = current_domain.repository_for(Cart)
            cart = repo.get(command.cart_id)
            cart.remove_product(command.product_id)
            repo.add(cart)

            logger.info(
                "cart_item_removed",
                product_id=str(command.product_id),
                total=cart.total,
            )
