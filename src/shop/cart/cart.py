"""Cart aggregate: line items and a running total that never drift apart.

Each line holds a snapshot of the product (price, name, deposit flag), refreshed
from the catalog every time the product is added, plus a quantity and a
subtotal. After every mutation the touched line is repriced first and the
cart total second, so ``total == round2(sum(subtotals))`` holds whenever the
aggregate is observable.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer, String

from shop.cart.events import CartItemAdded, CartItemQuantityChanged, CartItemRemoved
from shop.domain import shop
from shop.shared.money import format_money, sum_money, to_decimal

DEPOSIT_WARNING = "One or more of your selected products requires a deposit."
MAX_LINE_QUANTITY = 10_000


@shop.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    sku = String(max_length=50)
    name = String(required=True, max_length=255)
    unit_price = String(required=True, max_length=20)
    requires_deposit = Boolean(default=False)
    quantity = Integer(required=True, min_value=1, max_value=MAX_LINE_QUANTITY)
    subtotal = String(required=True, max_length=20)

    def reprice(self):
        self.subtotal = format_money(to_decimal(self.unit_price) * self.quantity)


@shop.aggregate
class Cart:
    session_id = String(max_length=255)
    items = HasMany(CartItem)
    total = String(max_length=20, default="0.00")
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A cart holds at most one line per product"]})

    @invariant.post
    def total_must_match_line_subtotals(self):
        expected = sum_money(item.subtotal for item in self.items)
        if self.total != expected:
            raise ValidationError({"total": [f"Cart total {self.total} does not match line subtotals ({expected})"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id=None):
        now = datetime.now(UTC)
        return cls(session_id=session_id, total=format_money(0), created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------
    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def has_product(self, product_id) -> bool:
        return self.item_for(product_id) is not None

    def _recompute_total(self):
        self.total = sum_money(item.subtotal for item in self.items)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_product(self, product):
        """Add one unit of ``product``, opening a new line on first add.

        An existing line takes the current catalog price and flags before it
        is repriced.
        """
        now = datetime.now(UTC)
        item = self.item_for(product.id)
        if item is not None and item.quantity >= MAX_LINE_QUANTITY:
            raise ValidationError({"quantity": [f"Quantity cannot exceed {MAX_LINE_QUANTITY}"]})

        with atomic_change(self):
            if item is None:
                item = CartItem(
                    product_id=str(product.id),
                    sku=product.sku,
                    name=product.name,
                    unit_price=format_money(product.price),
                    requires_deposit=bool(product.requires_deposit),
                    quantity=1,
                    subtotal=format_money(product.price),
                )
                self.add_items(item)
            else:
                item.sku = product.sku
                item.name = product.name
                item.unit_price = format_money(product.price)
                item.requires_deposit = bool(product.requires_deposit)
                item.quantity += 1
                item.reprice()

            self._recompute_total()
            self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product.id),
                quantity=item.quantity,
                subtotal=item.subtotal,
                cart_total=self.total,
            )
        )

    def change_quantity(self, product_id, quantity):
        """Set the quantity of a line; zero or less removes the line.

        A product that is not in the cart leaves the lines untouched, and the
        total is still recomputed.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError({"quantity": ["Quantity must be a whole number"]})
        if quantity > MAX_LINE_QUANTITY:
            raise ValidationError({"quantity": [f"Quantity cannot exceed {MAX_LINE_QUANTITY}"]})

        now = datetime.now(UTC)
        item = self.item_for(product_id)
        previous_quantity = item.quantity if item is not None else 0

        with atomic_change(self):
            if item is not None:
                if quantity > 0:
                    item.quantity = quantity
                    item.reprice()
                else:
                    self.remove_items(item)

            self._recompute_total()
            self.updated_at = now

        if item is None:
            return

        if quantity > 0:
            self.raise_(
                CartItemQuantityChanged(
                    cart_id=str(self.id),
                    product_id=str(product_id),
                    previous_quantity=previous_quantity,
                    new_quantity=quantity,
                    subtotal=item.subtotal,
                    cart_total=self.total,
                )
            )
        else:
            self.raise_(
                CartItemRemoved(
                    cart_id=str(self.id),
                    product_id=str(product_id),
                    cart_total=self.total,
                )
            )

    def remove_product(self, product_id):
        """Drop the line for ``product_id``; absent products are ignored."""
        now = datetime.now(UTC)
        item = self.item_for(product_id)

        with atomic_change(self):
            if item is not None:
                self.remove_items(item)

            self._recompute_total()
            self.updated_at = now

        if item is not None:
            self.raise_(
                CartItemRemoved(
                    cart_id=str(self.id),
                    product_id=str(product_id),
                    cart_total=self.total,
                )
            )

    # -------------------------------------------------------------------
    # Read views
    # -------------------------------------------------------------------
    def warnings(self) -> list[str]:
        if any(item.requires_deposit for item in self.items):
            return [DEPOSIT_WARNING]
        return []

    def snapshot(self) -> dict:
        """Plain-data copy of the lines and total, detached from the aggregate."""
        return {
            "cart_id": str(self.id),
            "items": [
                {
                    "product_id": str(item.product_id),
                    "sku": item.sku,
                    "name": item.name,
                    "unit_price": item.unit_price,
                    "requires_deposit": bool(item.requires_deposit),
                    "quantity": item.quantity,
                    "subtotal": item.subtotal,
                }
                for item in self.items
            ],
            "total": self.total,
        }
