"""Tests for cart line management and total maintenance."""

import random

import pytest
from protean.exceptions import ValidationError
from shop.cart.cart import DEPOSIT_WARNING, MAX_LINE_QUANTITY, Cart
from shop.cart.events import CartItemAdded, CartItemQuantityChanged, CartItemRemoved
from shop.product.product import Product
from shop.shared.money import sum_money


def _make_cart():
    return Cart.create(session_id="sess-001")


def _make_product(sku="mc-react", price="90.00", requires_deposit=False):
    return Product.create(sku=sku, name=f"Masterclass {sku}", price=price, requires_deposit=requires_deposit)


def _assert_total_consistent(cart):
    assert cart.total == sum_money(item.subtotal for item in cart.items)


class TestAddProduct:
    def test_first_add_opens_a_line(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)

        assert len(cart.items) == 1
        item = cart.items[0]
        assert str(item.product_id) == str(product.id)
        assert item.quantity == 1
        assert item.subtotal == "90.00"
        assert cart.total == "90.00"

    def test_second_add_increments_the_same_line(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart.add_product(product)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].subtotal == "180.00"
        assert cart.total == "180.00"

    def test_add_snapshots_product_details(self):
        cart = _make_cart()
        product = _make_product(sku="mc-unity", price="360", requires_deposit=True)
        cart.add_product(product)

        item = cart.items[0]
        assert item.sku == "mc-unity"
        assert item.unit_price == "360.00"
        assert item.requires_deposit is True

    def test_add_leaves_other_lines_alone(self):
        cart = _make_cart()
        react = _make_product()
        unity = _make_product(sku="mc-unity", price="360.00")
        cart.add_product(react)
        cart.add_product(unity)
        cart.add_product(unity)

        assert cart.item_for(react.id).quantity == 1
        assert cart.item_for(unity.id).quantity == 2
        assert cart.total == "810.00"

    def test_subtotal_rounds_half_up(self):
        cart = _make_cart()
        product = _make_product(price="33.333")
        for _ in range(3):
            cart.add_product(product)

        assert cart.items[0].subtotal == "99.99"
        assert cart.total == "99.99"

    def test_add_raises_event(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart.add_product(product)

        added = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert len(added) == 2
        assert added[-1].quantity == 2
        assert added[-1].subtotal == "180.00"
        assert added[-1].cart_total == "180.00"


class TestChangeQuantity:
    def test_positive_quantity_reprices_line(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart.change_quantity(product.id, 4)

        assert cart.items[0].quantity == 4
        assert cart.items[0].subtotal == "360.00"
        assert cart.total == "360.00"

    def test_zero_quantity_removes_line(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart.change_quantity(product.id, 0)

        assert len(cart.items) == 0
        assert cart.total == "0.00"

    def test_negative_quantity_removes_line(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart.change_quantity(product.id, -3)

        assert not cart.has_product(product.id)
        assert cart.total == "0.00"

    def test_unknown_product_leaves_lines_untouched(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart._events.clear()

        cart.change_quantity("not-in-cart", 5)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 1
        assert cart.total == "90.00"
        assert len(cart._events) == 0

    def test_repeating_the_same_quantity_is_idempotent(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart.change_quantity(product.id, 3)
        first = cart.snapshot()
        cart.change_quantity(product.id, 3)

        assert cart.snapshot() == first

    @pytest.mark.parametrize("quantity", ["2", 2.5, None, True])
    def test_non_integer_quantity_is_rejected(self, quantity):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)

        with pytest.raises(ValidationError, match="quantity"):
            cart.change_quantity(product.id, quantity)

        assert cart.items[0].quantity == 1

    def test_change_raises_event(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart._events.clear()
        cart.change_quantity(product.id, 3)

        assert len(cart._events) == 1
        event = cart._events[0]
        assert isinstance(event, CartItemQuantityChanged)
        assert event.previous_quantity == 1
        assert event.new_quantity == 3
        assert event.cart_total == "270.00"

    def test_change_to_zero_raises_removed_event(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart._events.clear()
        cart.change_quantity(product.id, 0)

        assert len(cart._events) == 1
        assert isinstance(cart._events[0], CartItemRemoved)


class TestRemoveProduct:
    def test_remove_drops_line_and_recomputes_total(self):
        cart = _make_cart()
        react = _make_product()
        unity = _make_product(sku="mc-unity", price="360.00")
        cart.add_product(react)
        cart.add_product(unity)
        cart.remove_product(react.id)

        assert [str(i.product_id) for i in cart.items] == [str(unity.id)]
        assert cart.total == "360.00"

    def test_remove_is_idempotent(self):
        cart = _make_cart()
        react = _make_product()
        unity = _make_product(sku="mc-unity", price="360.00")
        cart.add_product(react)
        cart.add_product(unity)

        cart.remove_product(react.id)
        once = cart.snapshot()
        cart.remove_product(react.id)

        assert cart.snapshot() == once

    def test_remove_absent_product_raises_no_event(self):
        cart = _make_cart()
        cart.remove_product("not-in-cart")
        assert len(cart._events) == 0
        assert cart.total == "0.00"

    def test_remove_raises_event(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart._events.clear()
        cart.remove_product(product.id)

        assert len(cart._events) == 1
        assert isinstance(cart._events[0], CartItemRemoved)
        assert cart._events[0].cart_total == "0.00"


class TestWarnings:
    def test_deposit_product_triggers_single_warning(self):
        cart = _make_cart()
        cart.add_product(_make_product(sku="mc-unity", price="360.00", requires_deposit=True))
        cart.add_product(_make_product(sku="mc-deposit-2", price="10.00", requires_deposit=True))

        assert cart.warnings() == [DEPOSIT_WARNING]

    def test_no_deposit_products_no_warnings(self):
        cart = _make_cart()
        cart.add_product(_make_product())
        assert cart.warnings() == []

    def test_warnings_do_not_mutate(self):
        cart = _make_cart()
        cart.add_product(_make_product(requires_deposit=True))
        before = cart.snapshot()
        cart.warnings()
        assert cart.snapshot() == before


class TestTotalNeverDrifts:
    def test_random_mutation_sequence_keeps_total_consistent(self):
        rng = random.Random(20240501)
        products = [
            _make_product(sku="mc-a", price="90.00"),
            _make_product(sku="mc-b", price="360.00"),
            _make_product(sku="mc-c", price="33.333"),
            _make_product(sku="mc-d", price="0.10"),
        ]
        cart = _make_cart()

        for _ in range(200):
            product = rng.choice(products)
            operation = rng.choice(["add", "add", "change", "remove"])
            if operation == "add":
                cart.add_product(product)
            elif operation == "change":
                cart.change_quantity(product.id, rng.randint(-1, 5))
            else:
                cart.remove_product(product.id)

            _assert_total_consistent(cart)
            assert all(item.quantity > 0 for item in cart.items)
            product_ids = [str(item.product_id) for item in cart.items]
            assert len(product_ids) == len(set(product_ids))


class TestSnapshot:
    def test_snapshot_is_detached_from_cart(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        snapshot = cart.snapshot()

        cart.add_product(product)

        assert snapshot["items"][0]["quantity"] == 1
        assert snapshot["total"] == "90.00"
        assert snapshot["cart_id"] == str(cart.id)


class TestQuantityLimits:
    def test_huge_quantity_is_rejected_without_touching_the_line(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)

        with pytest.raises(ValidationError, match="quantity"):
            cart.change_quantity(product.id, 10**30)

        assert cart.items[0].quantity == 1
        assert cart.total == "90.00"

    def test_quantity_at_the_cap_is_accepted(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart.change_quantity(product.id, MAX_LINE_QUANTITY)

        assert cart.items[0].subtotal == "900000.00"
        _assert_total_consistent(cart)

    def test_add_beyond_the_cap_is_rejected(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)
        cart.change_quantity(product.id, MAX_LINE_QUANTITY)
        cart._events.clear()

        with pytest.raises(ValidationError, match="quantity"):
            cart.add_product(product)

        assert cart.items[0].quantity == MAX_LINE_QUANTITY
        assert len(cart._events) == 0


class TestReAddAfterCatalogChange:
    def test_re_add_takes_the_current_price(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)

        product.update_details(sku=product.sku, name=product.name, price="100.00")
        cart.add_product(product)

        item = cart.items[0]
        assert item.quantity == 2
        assert item.unit_price == "100.00"
        assert item.subtotal == "200.00"
        assert cart.total == "200.00"

    def test_re_add_refreshes_deposit_flag(self):
        cart = _make_cart()
        product = _make_product()
        cart.add_product(product)

        product.update_details(sku=product.sku, name=product.name, price=product.price, requires_deposit=True)
        cart.add_product(product)

        assert cart.warnings() == [DEPOSIT_WARNING]
