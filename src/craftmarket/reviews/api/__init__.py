"""Reviews API package."""

from craftmarket.reviews.api.routes import review_router

__all__ = ["review_router"]
