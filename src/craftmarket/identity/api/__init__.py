"""Identity API package."""

from craftmarket.identity.api.routes import profile_router, seller_router

__all__ = ["profile_router", "seller_router"]
