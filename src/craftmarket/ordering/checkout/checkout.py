"""Checkout aggregate: idempotency marker for one order placement.

The client generates a checkout token per attempt. Replaying a completed
token returns the orders it produced instead of placing new ones.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from craftmarket.domain import marketplace
from craftmarket.ordering.checkout.events import CheckoutCompleted


class CheckoutStatus(Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@marketplace.aggregate
class Checkout:
    token = String(identifier=True, max_length=100)
    buyer_id = Identifier(required=True)
    status = String(choices=CheckoutStatus, default=CheckoutStatus.IN_PROGRESS.value)
    order_ids = Text()  # JSON array of order ids
    started_at = DateTime()
    completed_at = DateTime()

    @classmethod
    def start(cls, token, buyer_id):
        return cls(
            token=token,
            buyer_id=buyer_id,
            status=CheckoutStatus.IN_PROGRESS.value,
            order_ids=json.dumps([]),
            started_at=datetime.now(UTC),
        )

    @property
    def is_completed(self):
        return self.status == CheckoutStatus.COMPLETED.value

    @property
    def placed_order_ids(self):
        return json.loads(self.order_ids) if self.order_ids else []

    def belongs_to(self, buyer_id):
        return str(self.buyer_id) == str(buyer_id)

    def complete(self, order_ids):
        if self.is_completed:
            raise ValidationError({"checkout_token": ["Checkout already completed"]})

        now = datetime.now(UTC)
        self.status = CheckoutStatus.COMPLETED.value
        self.order_ids = json.dumps([str(order_id) for order_id in order_ids])
        self.completed_at = now
        self.raise_(
            CheckoutCompleted(
                checkout_token=self.token,
                buyer_id=str(self.buyer_id),
                order_count=len(order_ids),
                completed_at=now,
            )
        )
