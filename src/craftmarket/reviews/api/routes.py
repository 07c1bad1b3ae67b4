"""FastAPI endpoints for the Reviews context."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from craftmarket.identity.api.dependencies import current_session, profile_session
from craftmarket.identity.session import Session
from craftmarket.reviews.api.schemas import ReviewIdsResponse, SubmitOrderReviewRequest
from craftmarket.reviews.queries import product_reviews, seller_reviews
from craftmarket.reviews.review.submission import SubmitOrderReview

review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.post("/orders/{order_id}", status_code=201, response_model=ReviewIdsResponse)
async def submit_order_review(
    order_id: str, body: SubmitOrderReviewRequest, session: Session = Depends(profile_session)
) -> ReviewIdsResponse:
    ratings = {product_id: line.model_dump(exclude_none=True) for product_id, line in body.ratings.items()}
    command = SubmitOrderReview(order_id=order_id, user_id=session.user_id, ratings=json.dumps(ratings))
    review_ids = current_domain.process(command, asynchronous=False)
    return ReviewIdsResponse(review_ids=review_ids)


@review_router.get("/products/{product_id}")
async def reviews_for_product(product_id: str, limit: int | None = None, session: Session = Depends(current_session)):
    return product_reviews(product_id, limit=limit)


@review_router.get("/sellers/{seller_id}")
async def reviews_for_seller(seller_id: str, limit: int | None = None, session: Session = Depends(current_session)):
    return seller_reviews(seller_id, limit=limit)
