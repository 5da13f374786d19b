"""Product aggregate: a masterclass course listed in the catalog.

Prices are stored as decimal strings normalised to two fraction digits, so
every cart line priced from a product starts from the same rounded amount.
"""

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, String, Text

from shop.domain import shop
from shop.shared.money import ZERO, format_money, to_decimal


@shop.aggregate
class Product:
    sku = String(required=True, max_length=50)
    name = String(required=True, max_length=255)
    description = Text()
    price = String(required=True, max_length=20)
    featured_image = String(max_length=255)
    requires_deposit = Boolean(default=False)

    @invariant.post
    def price_must_be_a_non_negative_amount(self):
        amount = to_decimal(self.price, field="price")
        if amount < ZERO:
            raise ValidationError({"price": ["Price cannot be negative"]})
        if self.price != format_money(amount):
            raise ValidationError({"price": ["Price must have exactly two fraction digits"]})

    @classmethod
    def create(
        cls,
        sku,
        name,
        price,
        description=None,
        featured_image=None,
        requires_deposit=False,
        product_id=None,
    ):
        from shop.product.events import ProductAdded

        attributes = dict(
            sku=sku,
            name=name,
            description=description,
            price=format_money(to_decimal(price, field="price")),
            featured_image=featured_image,
            requires_deposit=bool(requires_deposit),
        )
        if product_id:
            attributes["id"] = product_id

        product = cls(**attributes)
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                sku=product.sku,
                name=product.name,
                price=product.price,
                requires_deposit=product.requires_deposit,
            )
        )
        return product

    def update_details(
        self,
        sku,
        name,
        price,
        description=None,
        featured_image=None,
        requires_deposit=False,
    ):
        """Replace the catalog details of this product.

        Cart lines keep their snapshot until the product is added to them
        again, so an update here never reprices them on its own.
        """
        from shop.product.events import ProductDetailsUpdated

        with atomic_change(self):
            self.sku = sku
            self.name = name
            self.description = description
            self.price = format_money(to_decimal(price, field="price"))
            self.featured_image = featured_image
            self.requires_deposit = bool(requires_deposit)

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                sku=self.sku,
                name=self.name,
                price=self.price,
                requires_deposit=self.requires_deposit,
            )
        )
