"""Review aggregate: one buyer's rating of one product from one delivered order.

Reviews are write-once. Product and seller rating aggregates are updated by
the submission workflow in the same unit of work.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, Text

from craftmarket.domain import marketplace
from craftmarket.reviews.review.events import ReviewSubmitted

MIN_RATING = 1
MAX_RATING = 5


@marketplace.aggregate
class Review:
    order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True, min_value=MIN_RATING, max_value=MAX_RATING)
    comment = Text()
    created_at = DateTime()

    @classmethod
    def submit(cls, order_id, product_id, seller_id, user_id, rating, comment=None):
        now = datetime.now(UTC)
        review = cls(
            order_id=order_id,
            product_id=product_id,
            seller_id=seller_id,
            user_id=user_id,
            rating=rating,
            comment=comment or None,
            created_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                order_id=str(order_id),
                product_id=str(product_id),
                seller_id=str(seller_id),
                user_id=str(user_id),
                rating=rating,
                submitted_at=now,
            )
        )
        return review
