"""Domain events for the User and Seller aggregates."""

from protean.fields import DateTime, Identifier, String

from craftmarket.domain import marketplace


@marketplace.event(part_of="User")
class UserRegistered:
    """A profile was created for an authenticated identity on first login."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@marketplace.event(part_of="User")
class ProfileUpdated:
    """Contact or location details on a profile changed."""

    __version__ = 1

    user_id: Identifier(required=True)
    updated_at: DateTime(required=True)


@marketplace.event(part_of="User")
class RoleChanged:
    """An administrator changed the role of a profile."""

    __version__ = 1

    user_id: Identifier(required=True)
    previous_role: String(required=True)
    new_role: String(required=True)
    changed_at: DateTime(required=True)


@marketplace.event(part_of="Seller")
class SellerRegistered:
    """A seller record was opened and is awaiting verification."""

    __version__ = 1

    seller_id: Identifier(required=True)
    user_id: Identifier(required=True)
    registered_at: DateTime(required=True)


@marketplace.event(part_of="Seller")
class SellerDetailsUpdated:
    """The seller changed business details or verification documents."""

    __version__ = 1

    seller_id: Identifier(required=True)
    updated_at: DateTime(required=True)


@marketplace.event(part_of="Seller")
class SellerApproved:
    """An administrator approved the seller; their products become sellable."""

    __version__ = 1

    seller_id: Identifier(required=True)
    reviewed_by: Identifier(required=True)
    previous_status: String(required=True)
    approved_at: DateTime(required=True)


@marketplace.event(part_of="Seller")
class SellerRejected:
    """An administrator rejected the seller."""

    __version__ = 1

    seller_id: Identifier(required=True)
    reviewed_by: Identifier(required=True)
    previous_status: String(required=True)
    reason: String()
    rejected_at: DateTime(required=True)
