"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from craftmarket.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A seller-scoped order was created from a buyer's cart."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    total_amount = Float(required=True)
    payment_method = String(required=True)
    payment_status = String(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderConfirmed:
    """The seller accepted the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    confirmed_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderPreparationStarted:
    """The seller started preparing the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    started_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderReady:
    """The order is ready for hand-over."""

    __version__ = 1

    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    ready_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderDelivered:
    """The order reached the buyer."""

    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    total_amount = Float(required=True)
    delivered_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled before preparation started."""

    __version__ = 1

    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_by = Identifier(required=True)
    reason = String()
    cancelled_at = DateTime(required=True)


@marketplace.event(part_of="Order")
class CashPaymentCollected:
    """Cash was collected on delivery."""

    __version__ = 1

    order_id = Identifier(required=True)
    amount = Float(required=True)
    collected_at = DateTime(required=True)
