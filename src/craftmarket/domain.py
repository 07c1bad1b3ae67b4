"""CraftMarket domain: a local marketplace for handmade food and craft items.

Buyers order from verified local sellers. The domain covers user profiles and
seller verification, the product catalogue, per-user shopping carts, the
multi-seller checkout that turns a cart into seller-scoped orders, the order
fulfillment state machine, and post-delivery reviews with rating aggregation.
"""

from protean.domain import Domain

from craftmarket.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
