"""Catalogue reads: categories, product listing and search, storefronts.

Buyers only see available products of approved sellers. Product detail and
the seller's own dashboard listing are not filtered.
"""

from craftmarket.identity.seller import VerificationStatus
from craftmarket.store import get_store

DEFAULT_PAGE_SIZE = 20


def list_categories(category_type=None):
    filters = {"type": category_type} if category_type else {}
    return [c.to_dict() for c in get_store().list("categories", filters=filters, order_by="display_order")]


def product_card(product):
    data = product.to_dict()
    data["images"] = product.image_urls
    data["cover_image"] = product.cover_image
    return data


def _approved_seller_ids():
    sellers = get_store().list("sellers", filters={"verification_status": VerificationStatus.APPROVED.value})
    return {str(seller.id) for seller in sellers}


def _matches(product, search):
    needle = search.strip().lower()
    haystack = " ".join(filter(None, [product.title, product.description, product.ingredients])).lower()
    return needle in haystack


def browse_products(category_id=None, search=None, limit=DEFAULT_PAGE_SIZE):
    """Available products of approved sellers, newest first."""
    filters = {"is_available": True}
    if category_id:
        filters["category_id"] = category_id

    approved = _approved_seller_ids()
    cards = []
    for product in get_store().list("products", filters=filters, order_by="-created_at"):
        if str(product.seller_id) not in approved:
            continue
        if search and not _matches(product, search):
            continue
        cards.append(product_card(product))
        if limit and len(cards) >= limit:
            break
    return cards


def get_product_detail(product_id):
    store = get_store()
    product = store.get("products", product_id)
    seller = store.get("sellers", product.seller_id)
    category = store.first("categories", {"id": str(product.category_id)})

    detail = product_card(product)
    detail["seller"] = {
        "id": str(seller.id),
        "business_name": seller.business_name,
        "business_type": seller.business_type,
        "rating_average": seller.rating_average,
        "total_reviews": seller.total_reviews,
        "verification_status": seller.verification_status,
    }
    detail["category"] = category.to_dict() if category else None
    return detail


def seller_storefront(seller_id):
    """Public seller page: business details, owner's display name and location, live products."""
    store = get_store()
    seller = store.get("sellers", seller_id)
    owner = store.first("users", {"id": str(seller.user_id)})
    products = store.list(
        "products",
        filters={"seller_id": str(seller.id), "is_available": True},
        order_by="-created_at",
    )
    return {
        "seller": seller.to_dict(),
        "owner": {
            "display_name": owner.display_name if owner else None,
            "avatar": owner.avatar if owner else None,
            "location_city": owner.location_city if owner else None,
            "location_area": owner.location_area if owner else None,
        },
        "products": [product_card(p) for p in products],
    }


def seller_products(seller_id):
    """Every product of a seller, hidden ones included, for the seller's dashboard."""
    products = get_store().list("products", filters={"seller_id": str(seller_id)}, order_by="-created_at")
    return [product_card(p) for p in products]
