"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer

from craftmarket.domain import marketplace


@marketplace.event(part_of="Review")
class ReviewSubmitted:
    """A buyer rated a product from a delivered order."""

    __version__ = 1

    review_id = Identifier(required=True)
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    submitted_at = DateTime(required=True)
