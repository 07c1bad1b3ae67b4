"""Order placement: turn a buyer's cart into one order per seller.

Steps, all inside the command handler's unit of work:

1. Validate delivery details, payment method and cart contents.
2. Replay: a completed checkout token returns the orders it already placed.
3. Partition cart lines by seller, in order of first appearance.
4. Place one Order per partition with snapshotted lines.
5. Clear the cart and mark the checkout completed.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from craftmarket.catalogue.product import Product
from craftmarket.domain import marketplace
from craftmarket.identity.seller import Seller
from craftmarket.ordering.cart.cart import ShoppingCart
from craftmarket.ordering.cart.items import find_cart
from craftmarket.ordering.checkout.checkout import Checkout
from craftmarket.ordering.order.order import Order, PaymentMethod
from craftmarket.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BUYER_NAME = "Customer"


@marketplace.command(part_of="Checkout")
class PlaceOrder:
    checkout_token = String(required=True, max_length=100)
    buyer_id = Identifier(required=True)
    buyer_name = String(max_length=150)
    buyer_phone = String(max_length=20)
    delivery_address = Text()
    payment_method = String(max_length=30)


def _validate(command):
    errors = {}
    if not (command.delivery_address or "").strip():
        errors["delivery_address"] = ["Delivery address is required"]
    if not (command.buyer_phone or "").strip():
        errors["buyer_phone"] = ["Phone number is required"]
    if command.payment_method not in {m.value for m in PaymentMethod}:
        errors["payment_method"] = [f"Unknown payment method: {command.payment_method}"]
    if errors:
        raise ValidationError(errors)


def _existing_checkout(token):
    try:
        return current_domain.repository_for(Checkout).get(token)
    except ObjectNotFoundError:
        return None


def partition_by_seller(cart, products):
    """Group cart lines by the seller of their product, first appearance first."""
    partitions = {}
    for item in sorted(cart.items, key=lambda i: i.added_at):
        product = products[str(item.product_id)]
        partitions.setdefault(str(product.seller_id), []).append(
            {
                "product_id": str(product.id),
                "product_title": product.title,
                "product_price": product.price,
                "quantity": item.quantity,
            }
        )
    return partitions


@marketplace.command_handler(part_of=Checkout)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        _validate(command)

        checkout = _existing_checkout(command.checkout_token)
        if checkout is not None:
            if not checkout.belongs_to(command.buyer_id):
                raise ValidationError({"checkout_token": ["Checkout token belongs to another buyer"]})
            if checkout.is_completed:
                logger.info("checkout_replayed", checkout_token=command.checkout_token)
                return checkout.placed_order_ids
        else:
            checkout = Checkout.start(token=command.checkout_token, buyer_id=command.buyer_id)

        cart = find_cart(command.buyer_id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        product_repo = current_domain.repository_for(Product)
        seller_repo = current_domain.repository_for(Seller)
        products = {}
        for item in cart.items:
            product = product_repo.get(item.product_id)
            if not product.is_available:
                raise ValidationError({"cart": [f"{product.title} is no longer available"]})
            if not seller_repo.get(product.seller_id).is_approved:
                raise ValidationError({"cart": [f"The seller of {product.title} is not verified"]})
            products[str(item.product_id)] = product

        order_repo = current_domain.repository_for(Order)
        order_ids = []
        for seller_id, lines in partition_by_seller(cart, products).items():
            order = Order.place(
                buyer_id=command.buyer_id,
                seller_id=seller_id,
                buyer_name=(command.buyer_name or "").strip() or DEFAULT_BUYER_NAME,
                buyer_phone=command.buyer_phone.strip(),
                delivery_address=command.delivery_address.strip(),
                payment_method=command.payment_method,
                lines=lines,
                checkout_token=command.checkout_token,
            )
            order_repo.add(order)
            order_ids.append(str(order.id))

        cart.clear()
        current_domain.repository_for(ShoppingCart).add(cart)

        checkout.complete(order_ids)
        current_domain.repository_for(Checkout).add(checkout)

        logger.info(
            "checkout_completed",
            checkout_token=command.checkout_token,
            buyer_id=str(command.buyer_id),
            order_ids=order_ids,
        )
        return order_ids
