"""User aggregate: the marketplace profile behind an authenticated identity."""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from craftmarket.domain import marketplace

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class UserRole(Enum):
    """Enumeration of marketplace roles."""

    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


# Roles a person may pick for themselves during onboarding
SELF_SELECTABLE_ROLES = {UserRole.BUYER, UserRole.SELLER}


@marketplace.aggregate
class User:
    """A person using the marketplace, keyed by the identity provider's user id.

    Exactly one profile exists per authenticated identity. It is created on
    first login, carries the role that decides which workflows the person may
    drive, and holds the contact details copied onto orders at checkout.
    """

    auth_user_id: String(required=True, max_length=255, unique=True)
    email: String(required=True, max_length=254)
    display_name: String(max_length=150)
    role: String(choices=UserRole, default=UserRole.BUYER.value)
    phone: String(max_length=20)
    avatar: String(max_length=500)
    location_city: String(max_length=100)
    location_area: String(max_length=100)
    location_address: Text()
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def register(cls, auth_user_id, email, role, display_name=None):
        from craftmarket.identity.events import UserRegistered

        try:
            chosen = UserRole(role)
        except ValueError:
            raise ValidationError({"role": [f"Unknown role: {role}"]})

        if chosen not in SELF_SELECTABLE_ROLES:
            raise ValidationError({"role": ["Role cannot be self-selected"]})

        now = datetime.now(UTC)
        user = cls(
            auth_user_id=auth_user_id,
            email=email,
            display_name=display_name,
            role=chosen.value,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=email,
                role=chosen.value,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    @property
    def is_seller(self):
        return self.role == UserRole.SELLER.value

    def update_profile(
        self,
        display_name=_UNSET,
        phone=_UNSET,
        avatar=_UNSET,
        location_city=_UNSET,
        location_area=_UNSET,
        location_address=_UNSET,
    ):
        from craftmarket.identity.events import ProfileUpdated

        changes = {
            "display_name": display_name,
            "phone": phone,
            "avatar": avatar,
            "location_city": location_city,
            "location_area": location_area,
            "location_address": location_address,
        }
        for field, value in changes.items():
            if value is not _UNSET:
                setattr(self, field, value)

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(ProfileUpdated(user_id=self.id, updated_at=now))

    def change_role(self, new_role):
        from craftmarket.identity.events import RoleChanged

        target = UserRole(new_role)
        if self.role == target.value:
            raise ValidationError({"role": [f"User already has role {target.value}"]})

        previous = self.role
        now = datetime.now(UTC)
        self.role = target.value
        self.updated_at = now
        self.raise_(
            RoleChanged(
                user_id=self.id,
                previous_role=previous,
                new_role=target.value,
                changed_at=now,
            )
        )
