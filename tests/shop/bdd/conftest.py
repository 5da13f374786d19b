"""Shared BDD fixtures and step definitions for the shop domain."""

import pytest
from pytest_bdd import given, parsers, then
from shop.cart.cart import DEPOSIT_WARNING, Cart
from shop.product.product import Product


@pytest.fixture()
def products():
    """Products created during a scenario, keyed by sku."""
    return {}


@pytest.fixture()
def product_for(products):
    """Return the scenario product for a sku, creating it on first use."""

    def _product_for(sku, price, requires_deposit=False):
        if sku not in products:
            products[sku] = Product.create(sku=sku, name=sku, price=price, requires_deposit=requires_deposit)
        return products[sku]

    return _product_for


@given("an empty cart", target_fixture="cart")
def empty_cart():
    cart = Cart.create(session_id="sess-bdd")
    cart._events.clear()
    return cart


@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_lines(cart, count):
    assert len(cart.items) == count


@then(parsers.cfparse('the line for "{sku}" has quantity {qty:d} and subtotal {subtotal}'))
def line_has_quantity_and_subtotal(cart, products, sku, qty, subtotal):
    item = cart.item_for(products[sku].id)
    assert item is not None, f"No line for {sku}"
    assert item.quantity == qty
    assert item.subtotal == subtotal


@then(parsers.cfparse("the cart total is {total}"))
def cart_total_is(cart, total):
    assert cart.total == total


@then("the cart shows the deposit warning")
def cart_shows_deposit_warning(cart):
    assert cart.warnings() == [DEPOSIT_WARNING]


@then("the cart shows no warnings")
def cart_shows_no_warnings(cart):
    assert cart.warnings() == []
