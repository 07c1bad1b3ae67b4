"""Seller-driven order progression and cancellation: commands and handler.

Only the seller who owns an order may move it forward. Cancellation is also
open to administrators. Delivery credits the seller's order count and
earnings in the same unit of work as the status change.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from craftmarket.domain import marketplace
from craftmarket.identity.seller import Seller
from craftmarket.identity.user import User
from craftmarket.ordering.order.order import Order, OrderStatus
from craftmarket.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Order")
class ConfirmOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


@marketplace.command(part_of="Order")
class StartPreparingOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


@marketplace.command(part_of="Order")
class MarkOrderReady:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


@marketplace.command(part_of="Order")
class MarkOrderDelivered:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


@marketplace.command(part_of="Order")
class AdvanceOrder:
    """Move the order to its next happy-path status."""

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)


@marketplace.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    reason = String(max_length=500)


def _is_owning_seller(user_id, order):
    sellers = current_domain.repository_for(Seller)._dao.query.filter(user_id=str(user_id)).all().items
    return bool(sellers) and str(sellers[0].id) == str(order.seller_id)


def _load_for_seller(command):
    order = current_domain.repository_for(Order).get(command.order_id)
    if not _is_owning_seller(command.user_id, order):
        raise ValidationError({"order": ["Only the seller of this order can update it"]})
    return order


def _credit_seller(order):
    repo = current_domain.repository_for(Seller)
    seller = repo.get(order.seller_id)
    seller.record_delivered_order(order.total_amount)
    repo.add(seller)


@marketplace.command_handler(part_of=Order)
class OrderFulfillmentHandler:
    def _save(self, order, delivered=False):
        current_domain.repository_for(Order).add(order)
        if delivered:
            _credit_seller(order)
        logger.info("order_status_changed", order_id=str(order.id), status=order.status)

    @handle(ConfirmOrder)
    def confirm_order(self, command):
        order = _load_for_seller(command)
        order.confirm()
        self._save(order)

    @handle(StartPreparingOrder)
    def start_preparing(self, command):
        order = _load_for_seller(command)
        order.start_preparing()
        self._save(order)

    @handle(MarkOrderReady)
    def mark_ready(self, command):
        order = _load_for_seller(command)
        order.mark_ready()
        self._save(order)

    @handle(MarkOrderDelivered)
    def mark_delivered(self, command):
        order = _load_for_seller(command)
        order.mark_delivered()
        self._save(order, delivered=True)

    @handle(AdvanceOrder)
    def advance_order(self, command):
        order = _load_for_seller(command)
        target = order.advance()
        self._save(order, delivered=target == OrderStatus.DELIVERED)
        return target.value

    @handle(CancelOrder)
    def cancel_order(self, command):
        order = current_domain.repository_for(Order).get(command.order_id)
        if not _is_owning_seller(command.user_id, order):
            actor = current_domain.repository_for(User).get(command.user_id)
            if not actor.is_admin:
                raise ValidationError({"order": ["Only the seller of this order or an administrator can cancel it"]})

        order.cancel(cancelled_by=command.user_id, reason=command.reason)
        self._save(order)
