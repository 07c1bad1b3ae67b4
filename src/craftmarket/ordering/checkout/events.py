"""Domain events for the Checkout aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from craftmarket.domain import marketplace


@marketplace.event(part_of="Checkout")
class CheckoutCompleted:
    """A buyer's cart was turned into one order per seller."""

    __version__ = 1

    checkout_token = String(required=True)
    buyer_id = Identifier(required=True)
    order_count = Integer(required=True)
    completed_at = DateTime(required=True)
