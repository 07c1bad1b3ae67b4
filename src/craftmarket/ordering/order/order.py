"""Order aggregate: a purchase from exactly one seller.

Buyer details, delivery address and every line are copied onto the order
when it is placed and never re-derived from the catalogue. After placement
only the status and payment status change.

State Machine:
    PENDING → CONFIRMED → PREPARING → READY → DELIVERED
    CANCELLED (from PENDING, CONFIRMED)
    DELIVERED, CANCELLED are terminal
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from craftmarket.domain import marketplace
from craftmarket.ordering.order.events import (
    CashPaymentCollected,
    OrderCancelled,
    OrderConfirmed,
    OrderDelivered,
    OrderPlaced,
    OrderPreparationStarted,
    OrderReady,
)
from craftmarket.ordering.order.numbers import generate_order_number


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    ONLINE = "online"
    CASH_ON_DELIVERY = "cash_on_delivery"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


# Happy path, one step at a time
_NEXT_STATUS = {
    OrderStatus.PENDING: OrderStatus.CONFIRMED,
    OrderStatus.CONFIRMED: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.DELIVERED,
}

_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY},
    OrderStatus.READY: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

TERMINAL_STATUSES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@marketplace.entity(part_of="Order")
class OrderItem:
    """A line of an order, snapshotting the product as it was at checkout."""

    product_id = Identifier(required=True)
    product_title = String(required=True, max_length=255)
    product_price = Float(required=True)
    quantity = Integer(required=True, min_value=1)
    subtotal = Float(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Order:
    order_number = String(required=True, max_length=50, unique=True)
    buyer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    buyer_name = String(required=True, max_length=150)
    buyer_phone = String(required=True, max_length=20)
    delivery_address = Text(required=True)
    items = HasMany(OrderItem)
    total_amount = Float(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    checkout_token = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_matches_items(self):
        if self.items and abs(self.total_amount - sum(item.subtotal for item in self.items)) > 1e-6:
            raise ValidationError({"total_amount": ["Total must equal the sum of item subtotals"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        buyer_id,
        seller_id,
        buyer_name,
        buyer_phone,
        delivery_address,
        payment_method,
        lines,
        checkout_token=None,
    ):
        """Create an order from cart lines of a single seller.

        Args:
            lines: List of dicts with product_id, product_title, product_price
                   and quantity, in cart order.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        method = PaymentMethod(payment_method)
        payment_status = PaymentStatus.PAID if method == PaymentMethod.ONLINE else PaymentStatus.PENDING

        items = [
            OrderItem(
                product_id=line["product_id"],
                product_title=line["product_title"],
                product_price=line["product_price"],
                quantity=line["quantity"],
                subtotal=line["product_price"] * line["quantity"],
            )
            for line in lines
        ]
        total_amount = sum(item.subtotal for item in items)
        now = datetime.now(UTC)

        order = cls(
            order_number=generate_order_number(),
            buyer_id=buyer_id,
            seller_id=seller_id,
            buyer_name=buyer_name,
            buyer_phone=buyer_phone,
            delivery_address=delivery_address,
            items=items,
            total_amount=total_amount,
            status=OrderStatus.PENDING.value,
            payment_method=method.value,
            payment_status=payment_status.value,
            checkout_token=checkout_token,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                buyer_id=str(buyer_id),
                seller_id=str(seller_id),
                total_amount=total_amount,
                payment_method=method.value,
                payment_status=payment_status.value,
                item_count=len(items),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    @property
    def is_terminal(self):
        return OrderStatus(self.status) in TERMINAL_STATUSES

    def next_status(self):
        """The single next happy-path status, or None once the order is terminal."""
        return _NEXT_STATUS.get(OrderStatus(self.status))

    def can_transition_to(self, target_status):
        return target_status in _VALID_TRANSITIONS[OrderStatus(self.status)]

    def _transition_to(self, target_status):
        current = OrderStatus(self.status)
        if current in TERMINAL_STATUSES:
            raise ValidationError({"status": [f"Order is already {current.value}"]})
        if target_status not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

        now = datetime.now(UTC)
        self.status = target_status.value
        self.updated_at = now
        return now

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def confirm(self):
        now = self._transition_to(OrderStatus.CONFIRMED)
        self.raise_(OrderConfirmed(order_id=str(self.id), seller_id=str(self.seller_id), confirmed_at=now))

    def start_preparing(self):
        now = self._transition_to(OrderStatus.PREPARING)
        self.raise_(OrderPreparationStarted(order_id=str(self.id), seller_id=str(self.seller_id), started_at=now))

    def mark_ready(self):
        now = self._transition_to(OrderStatus.READY)
        self.raise_(OrderReady(order_id=str(self.id), seller_id=str(self.seller_id), ready_at=now))

    def mark_delivered(self):
        now = self._transition_to(OrderStatus.DELIVERED)
        self.raise_(
            OrderDelivered(
                order_id=str(self.id),
                buyer_id=str(self.buyer_id),
                seller_id=str(self.seller_id),
                total_amount=self.total_amount,
                delivered_at=now,
            )
        )

        if self.payment_method == PaymentMethod.CASH_ON_DELIVERY.value:
            self.payment_status = PaymentStatus.PAID.value
            self.raise_(CashPaymentCollected(order_id=str(self.id), amount=self.total_amount, collected_at=now))

    def cancel(self, cancelled_by, reason=None):
        previous = self.status
        now = self._transition_to(OrderStatus.CANCELLED)
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                seller_id=str(self.seller_id),
                previous_status=previous,
                cancelled_by=str(cancelled_by),
                reason=reason,
                cancelled_at=now,
            )
        )

    def advance(self):
        """Move one step along the happy path."""
        target = self.next_status()
        if target is None:
            raise ValidationError({"status": [f"Order is already {self.status}"]})

        transitions = {
            OrderStatus.CONFIRMED: self.confirm,
            OrderStatus.PREPARING: self.start_preparing,
            OrderStatus.READY: self.mark_ready,
            OrderStatus.DELIVERED: self.mark_delivered,
        }
        transitions[target]()
        return target
