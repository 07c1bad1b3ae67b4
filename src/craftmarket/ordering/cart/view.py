"""Cart read: lines joined with the live product, plus the live total."""

from craftmarket.store import get_store


def list_cart(user_id):
    store = get_store()
    cart = store.first("carts", {"user_id": str(user_id)})
    if cart is None:
        return {"cart_id": None, "items": [], "total": 0.0}

    lines = []
    total = 0.0
    for item in sorted(cart.items, key=lambda i: i.added_at):
        product = store.first("products", {"id": str(item.product_id)})
        line_total = product.price * item.quantity if product else 0.0
        total += line_total
        lines.append(
            {
                "item_id": str(item.id),
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "product": {
                    "title": product.title,
                    "price": product.price,
                    "cover_image": product.cover_image,
                    "seller_id": str(product.seller_id),
                    "is_available": product.is_available,
                }
                if product
                else None,
                "line_total": line_total,
            }
        )

    return {"cart_id": str(cart.id), "items": lines, "total": total}
