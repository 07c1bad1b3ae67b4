"""SubmitOrderReview: rate every line of a delivered order at once.

Each line becomes one Review. The product's and the seller's running means
absorb the new ratings in the same unit of work, so a rejected submission
leaves every aggregate untouched.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from craftmarket.catalogue.product import Product
from craftmarket.domain import marketplace
from craftmarket.identity.seller import Seller
from craftmarket.ordering.order.order import Order, OrderStatus
from craftmarket.reviews.review.review import MAX_RATING, MIN_RATING, Review
from craftmarket.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Review")
class SubmitOrderReview:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    ratings = Text(required=True)  # JSON object: product_id -> {"rating": int, "comment": str}


def _parse_ratings(raw, order):
    try:
        ratings = json.loads(raw)
    except ValueError:
        raise ValidationError({"ratings": ["Ratings must be a JSON object keyed by product id"]})
    if not isinstance(ratings, dict):
        raise ValidationError({"ratings": ["Ratings must be a JSON object keyed by product id"]})

    ordered = {str(item.product_id) for item in order.items}
    extra = sorted(set(ratings) - ordered)
    if extra:
        raise ValidationError({"ratings": [f"Products not in this order: {', '.join(extra)}"]})

    errors = []
    for item in order.items:
        entry = ratings.get(str(item.product_id)) or {}
        if not isinstance(entry, dict):
            errors.append(f"Rating for {item.product_title} must be an object with a rating")
            continue
        rating = entry.get("rating")
        if not isinstance(rating, int) or isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING:
            errors.append(f"Rate {item.product_title} from {MIN_RATING} to {MAX_RATING}")
    if errors:
        raise ValidationError({"ratings": errors})
    return ratings


@marketplace.command_handler(part_of=Review)
class SubmitOrderReviewHandler:
    @handle(SubmitOrderReview)
    def submit_order_review(self, command):
        order = current_domain.repository_for(Order).get(command.order_id)
        if str(order.buyer_id) != str(command.user_id):
            raise ValidationError({"order": ["Only the buyer of this order can review it"]})
        if order.status != OrderStatus.DELIVERED.value:
            raise ValidationError({"order": ["Only delivered orders can be reviewed"]})

        ratings = _parse_ratings(command.ratings, order)

        review_repo = current_domain.repository_for(Review)
        already = review_repo._dao.query.filter(order_id=str(order.id)).all().items
        if already:
            reviewed = sorted({str(r.product_id) for r in already})
            raise ValidationError({"review": [f"Already reviewed: {', '.join(reviewed)}"]})

        product_repo = current_domain.repository_for(Product)
        review_ids = []
        seller_ratings = []
        for item in order.items:
            entry = ratings[str(item.product_id)]
            review = Review.submit(
                order_id=str(order.id),
                product_id=str(item.product_id),
                seller_id=str(order.seller_id),
                user_id=str(command.user_id),
                rating=entry["rating"],
                comment=entry.get("comment"),
            )
            review_repo.add(review)
            review_ids.append(str(review.id))
            seller_ratings.append(entry["rating"])

            product = product_repo.get(item.product_id)
            product.record_rating(entry["rating"])
            product_repo.add(product)

        seller_repo = current_domain.repository_for(Seller)
        seller = seller_repo.get(order.seller_id)
        seller.record_ratings(seller_ratings)
        seller_repo.add(seller)

        logger.info("order_reviewed", order_id=str(order.id), reviews=len(review_ids))
        return review_ids
