"""Order reads for buyers, sellers and administrators."""

from protean.exceptions import ValidationError

from craftmarket.store import get_store


def order_detail(order):
    data = order.to_dict()
    data["items"] = [item.to_dict() for item in order.items]
    upcoming = order.next_status()
    data["next_status"] = upcoming.value if upcoming else None
    return data


def buyer_orders(buyer_id):
    """The buyer's orders, newest first, each with its items and seller summary."""
    store = get_store()
    orders = store.list("orders", filters={"buyer_id": str(buyer_id)}, order_by="-created_at")

    listing = []
    for order in orders:
        data = order_detail(order)
        seller = store.first("sellers", {"id": str(order.seller_id)})
        data["seller"] = {"id": str(seller.id), "business_name": seller.business_name} if seller else None
        listing.append(data)
    return listing


def seller_orders(seller_id, limit=None):
    orders = get_store().list("orders", filters={"seller_id": str(seller_id)}, order_by="-created_at", limit=limit)
    return [order_detail(order) for order in orders]


def recent_orders(limit=50):
    """Latest orders across the marketplace, for administrators."""
    return [order_detail(order) for order in get_store().list("orders", order_by="-created_at", limit=limit)]


def get_order_for(session, order_id):
    """A single order, visible to its buyer, its seller and administrators."""
    order = get_store().get("orders", order_id)
    allowed = (
        session.is_admin
        or str(order.buyer_id) == str(session.user_id)
        or (session.seller_id is not None and str(order.seller_id) == str(session.seller_id))
    )
    if not allowed:
        raise ValidationError({"order": ["You cannot view this order"]})
    return order_detail(order)
