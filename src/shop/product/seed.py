"""Default catalog contents.

``ensure_seed_data`` is called once during application start-up, never from
query paths. It only inserts when the catalog is empty, so repeated calls
are harmless.
"""

from protean.utils.globals import current_domain

from shop.product.product import Product
from shop.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PRODUCTS = [
    {
        "sku": "mc-react",
        "name": "Getting Started with React",
        "price": "90.00",
        "featured_image": "masterclass_react.png",
        "description": "Get quickly up and running with React and create a profile website in just 3 hours!",
        "requires_deposit": False,
    },
    {
        "sku": "mc-ai-python",
        "name": "AI with TensorFlow & Python",
        "price": "90.00",
        "featured_image": "masterclass_ai.png",
        "description": (
            "Create a machine learning model using Python and TensorFlow, "
            "focusing on image recognition and classification."
        ),
        "requires_deposit": False,
    },
    {
        "sku": "mc-unity",
        "name": "Game Development with Unity",
        "price": "360.00",
        "featured_image": "masterclass_game.png",
        "description": (
            "Create a clone of the popular 2D platformer featuring an Italian plumber, "
            "starting from scratch and covering all aspects of game development."
        ),
        "requires_deposit": True,
    },
    {
        "sku": "mc-flexbox",
        "name": "Introduction to CSS FlexBox",
        "price": "90.00",
        "featured_image": "masterclass_css.png",
        "description": "FlexBox can revolutionise how you create responsive websites. Learn how in just 3 hours!",
        "requires_deposit": False,
    },
]


def ensure_seed_data() -> int:
    """Insert the default products if the catalog is empty.

    Returns:
        Number of products inserted (0 when the catalog already had products).
    """
    repo = current_domain.repository_for(Product)
    if repo.find_all():
        logger.debug("catalog_seed_skipped")
        return 0

    for data in DEFAULT_PRODUCTS:
        repo.add(Product.create(**data))

    logger.info("catalog_seeded", count=len(DEFAULT_PRODUCTS))
    return len(DEFAULT_PRODUCTS)
