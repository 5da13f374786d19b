"""Shop bounded context: product catalog, shopping cart and client orders.

Handles the masterclass catalog, the cart aggregation rules that keep item
subtotals and cart totals consistent, and checkout into client orders.
"""

from protean.domain import Domain

from shop.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
shop = Domain(name="shop")
