"""Catalog maintenance: commands and handler for upserting and deleting products."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from shop.domain import shop
from shop.product.product import Product
from shop.shared.money import is_whole_cents
from shop.utils.logging import get_logger

logger = get_logger(__name__)


@shop.command(part_of="Product")
class UpsertProduct:
    """Create a product, or replace the details of the product with ``product_id``."""

    product_id = Identifier()
    sku = String(required=True, max_length=50)
    name = String(required=True, max_length=255)
    description = Text()
    price = String(required=True, max_length=20)  # decimal string, e.g. "90.00"
    featured_image = String(max_length=255)
    requires_deposit = Boolean(default=False)


@shop.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@shop.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(UpsertProduct)
    def upsert_product(self, command):
        if not is_whole_cents(command.price, field="price"):
            raise ValidationError({"price": ["Price cannot have more than two fraction digits"]})

        repo = current_domain.repository_for(Product)

        product = None
        if command.product_id:
            try:
                product = repo.get(command.product_id)
            except ObjectNotFoundError:
                product = None

        details = dict(
            sku=command.sku,
            name=command.name,
            price=command.price,
            description=command.description,
            featured_image=command.featured_image,
            requires_deposit=command.requires_deposit,
        )

        if product is None:
            product = Product.create(product_id=command.product_id, **details)
            logger.info("product_created", product_id=str(product.id), sku=product.sku)
        else:
            product.update_details(**details)
            logger.info("product_updated", product_id=str(product.id), sku=product.sku)

        repo.add(product)
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_deleted", product_id=str(command.product_id))
