"""Per-request session: who is calling and what they are allowed to do.

A Session is resolved once from the identity provider's AuthUser and handed
explicitly to every workflow, so no workflow reads ambient auth state.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError

from craftmarket.identity.auth.port import AuthUser
from craftmarket.identity.directory import get_seller_for_user
from craftmarket.identity.user import UserRole
from craftmarket.store import get_store


@dataclass(frozen=True)
class Session:
    auth_user: AuthUser
    user_id: str | None = None
    display_name: str | None = None
    role: str | None = None
    seller_id: str | None = None
    seller_status: str | None = None

    @property
    def email(self):
        return self.auth_user.email

    @property
    def has_profile(self):
        return self.user_id is not None

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    @property
    def is_seller(self):
        return self.role == UserRole.SELLER.value and self.seller_id is not None

    @property
    def buyer_name(self):
        """Name copied onto orders: profile name, then identity name, then a placeholder."""
        return self.display_name or self.auth_user.display_name or "Customer"

    def require_profile(self):
        if not self.has_profile:
            raise ValidationError({"profile": ["Complete your profile first"]})
        return self.user_id

    def require_seller(self):
        if not self.is_seller:
            raise ValidationError({"seller": ["Only sellers can perform this action"]})
        return self.seller_id

    def require_admin(self):
        if not self.is_admin:
            raise ValidationError({"role": ["Only administrators can perform this action"]})
        return self.user_id


def resolve_session(auth_user: AuthUser) -> Session:
    """Build the Session for an authenticated identity.

    Identities that have not completed onboarding get a Session without a
    profile; workflows that need one call `require_profile()`.
    """
    store = get_store()
    user = store.first("users", {"auth_user_id": auth_user.id})
    if user is None:
        return Session(auth_user=auth_user)

    seller = get_seller_for_user(user.id)
    return Session(
        auth_user=auth_user,
        user_id=str(user.id),
        display_name=user.display_name,
        role=user.role,
        seller_id=str(seller.id) if seller else None,
        seller_status=seller.verification_status if seller else None,
    )
