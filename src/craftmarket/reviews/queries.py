"""Review reads."""

from craftmarket.store import get_store


def product_reviews(product_id, limit=None):
    reviews = get_store().list("reviews", filters={"product_id": str(product_id)}, order_by="-created_at", limit=limit)
    return [review.to_dict() for review in reviews]


def seller_reviews(seller_id, limit=None):
    reviews = get_store().list("reviews", filters={"seller_id": str(seller_id)}, order_by="-created_at", limit=limit)
    return [review.to_dict() for review in reviews]
