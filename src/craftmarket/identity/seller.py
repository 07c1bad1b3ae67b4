"""Seller aggregate: business profile, verification state and running totals.

State Machine (verification):
    PENDING → APPROVED | REJECTED
    APPROVED → REJECTED
    REJECTED → APPROVED

Approval and rejection are administrative actions. Moving to the status a
seller already has is rejected.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from craftmarket.domain import marketplace
from craftmarket.identity.events import (
    SellerApproved,
    SellerDetailsUpdated,
    SellerRegistered,
    SellerRejected,
)
from craftmarket.shared.ratings import running_mean

_UNSET = object()


class VerificationStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class BusinessType(Enum):
    FOOD = "food"
    CRAFT = "craft"


_VALID_TRANSITIONS = {
    VerificationStatus.PENDING: {VerificationStatus.APPROVED, VerificationStatus.REJECTED},
    VerificationStatus.APPROVED: {VerificationStatus.REJECTED},
    VerificationStatus.REJECTED: {VerificationStatus.APPROVED},
}


@marketplace.aggregate
class Seller:
    """The business side of a user with the seller role.

    A seller's products are only purchasable once an administrator has
    approved them. Ratings and order totals are denormalized here and kept
    current by the review and delivery workflows.
    """

    user_id: Identifier(required=True, unique=True)
    business_name: String(max_length=255)
    business_type: String(choices=BusinessType)
    hygiene_declaration: Text()
    verification_documents: Text()  # JSON array of document URLs
    verification_status: String(choices=VerificationStatus, default=VerificationStatus.PENDING.value)
    rating_average: Float(default=0.0)
    total_reviews: Integer(default=0)
    total_orders: Integer(default=0)
    total_earnings: Float(default=0.0)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def totals_cannot_be_negative(self):
        if (self.total_reviews or 0) < 0 or (self.total_orders or 0) < 0:
            raise ValidationError({"totals": ["Seller totals cannot be negative"]})

    @classmethod
    def register(cls, user_id, business_name=None, business_type=None):
        now = datetime.now(UTC)
        seller = cls(
            user_id=user_id,
            business_name=business_name,
            business_type=business_type,
            verification_documents=json.dumps([]),
            created_at=now,
            updated_at=now,
        )
        seller.raise_(
            SellerRegistered(
                seller_id=seller.id,
                user_id=user_id,
                registered_at=now,
            )
        )
        return seller

    @property
    def is_approved(self):
        return self.verification_status == VerificationStatus.APPROVED.value

    @property
    def documents(self):
        return json.loads(self.verification_documents) if self.verification_documents else []

    def update_business_details(
        self,
        business_name=_UNSET,
        business_type=_UNSET,
        hygiene_declaration=_UNSET,
        verification_documents=_UNSET,
    ):
        if business_name is not _UNSET:
            self.business_name = business_name
        if business_type is not _UNSET:
            self.business_type = business_type
        if hygiene_declaration is not _UNSET:
            self.hygiene_declaration = hygiene_declaration
        if verification_documents is not _UNSET:
            self.verification_documents = json.dumps(list(verification_documents or []))

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(SellerDetailsUpdated(seller_id=self.id, updated_at=now))

    # -------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target):
        current = VerificationStatus(self.verification_status)
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError(
                {"verification_status": [f"Cannot move seller from {current.value} to {target.value}"]}
            )

    def approve(self, reviewed_by):
        self._assert_can_transition(VerificationStatus.APPROVED)

        previous = self.verification_status
        now = datetime.now(UTC)
        self.verification_status = VerificationStatus.APPROVED.value
        self.updated_at = now
        self.raise_(
            SellerApproved(
                seller_id=self.id,
                reviewed_by=reviewed_by,
                previous_status=previous,
                approved_at=now,
            )
        )

    def reject(self, reviewed_by, reason=None):
        self._assert_can_transition(VerificationStatus.REJECTED)

        previous = self.verification_status
        now = datetime.now(UTC)
        self.verification_status = VerificationStatus.REJECTED.value
        self.updated_at = now
        self.raise_(
            SellerRejected(
                seller_id=self.id,
                reviewed_by=reviewed_by,
                previous_status=previous,
                reason=reason,
                rejected_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Denormalized totals
    # -------------------------------------------------------------------
    def record_ratings(self, ratings):
        """Fold each rating into the seller's running mean, one review at a time."""
        average = self.rating_average or 0.0
        count = self.total_reviews or 0
        for rating in ratings:
            average = running_mean(average, count, rating)
            count += 1

        self.rating_average = average
        self.total_reviews = count
        self.updated_at = datetime.now(UTC)

    def record_delivered_order(self, amount):
        self.total_orders = (self.total_orders or 0) + 1
        self.total_earnings = (self.total_earnings or 0.0) + amount
        self.updated_at = datetime.now(UTC)
