"""Read side of the identity context: profiles and the admin seller listing."""

from craftmarket.store import get_store


def get_profile(user_id):
    """Profile plus, for sellers, the seller record."""
    store = get_store()
    user = store.get("users", user_id)
    seller = get_seller_for_user(user.id)
    return {"user": user.to_dict(), "seller": seller.to_dict() if seller else None}


def get_seller_for_user(user_id):
    return get_store().first("sellers", {"user_id": str(user_id)})


def list_sellers(verification_status=None, limit=None):
    """Sellers, newest first, each joined with the owning user's profile."""
    store = get_store()
    filters = {"verification_status": verification_status} if verification_status else {}
    sellers = store.list("sellers", filters=filters, order_by="-created_at", limit=limit)

    listing = []
    for seller in sellers:
        user = store.first("users", {"id": str(seller.user_id)})
        listing.append({**seller.to_dict(), "profile": user.to_dict() if user else None})
    return listing
