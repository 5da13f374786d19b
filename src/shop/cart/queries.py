"""Read-only cart lookups used by the storefront pages."""

from protean.utils.globals import current_domain

from shop.cart.cart import Cart


def get_cart(cart_id) -> Cart:
    """Load a cart; raises ``ObjectNotFoundError`` for an unknown id."""
    return current_domain.repository_for(Cart).get(cart_id)


def get_cart_warnings(cart_id) -> list[str]:
    return get_cart(cart_id).warnings()
