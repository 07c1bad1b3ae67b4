"""Profile onboarding and maintenance: commands and handlers.

A profile is created lazily the first time an identity completes onboarding.
Choosing the seller role also opens a pending Seller record.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from craftmarket.domain import marketplace
from craftmarket.identity.seller import Seller
from craftmarket.identity.user import User, UserRole
from craftmarket.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="User")
class CompleteProfile:
    """Create the profile for an authenticated identity, if it does not exist yet."""

    auth_user_id: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    role: String(required=True, max_length=20)
    display_name: String(max_length=150)


@marketplace.command(part_of="User")
class UpdateProfile:
    """Change contact and location details. Fields left empty are kept."""

    user_id: Identifier(required=True)
    display_name: String(max_length=150)
    phone: String(max_length=20)
    avatar: String(max_length=500)
    location_city: String(max_length=100)
    location_area: String(max_length=100)
    location_address: Text()


@marketplace.command(part_of="User")
class AssignRole:
    """Administrative role change, e.g. promoting a user to admin."""

    user_id: Identifier(required=True)
    role: String(required=True, max_length=20)


@marketplace.command(part_of="Seller")
class UpdateSellerDetails:
    user_id: Identifier(required=True)
    business_name: String(max_length=255)
    business_type: String(max_length=20)
    hygiene_declaration: Text()
    verification_documents: Text()  # JSON array of document URLs


@marketplace.command_handler(part_of=User)
class OnboardingHandler:
    @handle(CompleteProfile)
    def complete_profile(self, command):
        user_repo = current_domain.repository_for(User)
        existing = user_repo._dao.query.filter(auth_user_id=command.auth_user_id).all().items
        if existing:
            return str(existing[0].id)

        user = User.register(
            auth_user_id=command.auth_user_id,
            email=command.email,
            role=command.role,
            display_name=command.display_name,
        )
        user_repo.add(user)

        if user.role == UserRole.SELLER.value:
            seller = Seller.register(user_id=str(user.id), business_name=command.display_name)
            current_domain.repository_for(Seller).add(seller)

        logger.info("profile_created", user_id=str(user.id), role=user.role)
        return str(user.id)

    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        fields = (
            "display_name",
            "phone",
            "avatar",
            "location_city",
            "location_area",
            "location_address",
        )
        changes = {name: getattr(command, name) for name in fields if getattr(command, name) is not None}
        user.update_profile(**changes)
        repo.add(user)

    @handle(AssignRole)
    def assign_role(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_role(command.role)
        repo.add(user)
        logger.info("role_assigned", user_id=str(user.id), role=user.role)


@marketplace.command_handler(part_of=Seller)
class SellerDetailsHandler:
    @handle(UpdateSellerDetails)
    def update_seller_details(self, command):
        repo = current_domain.repository_for(Seller)
        sellers = repo._dao.query.filter(user_id=str(command.user_id)).all().items
        if not sellers:
            raise ValidationError({"seller": ["No seller record for this user"]})

        seller = sellers[0]
        changes = {}
        for name in ("business_name", "business_type", "hygiene_declaration"):
            value = getattr(command, name)
            if value is not None:
                changes[name] = value
        if command.verification_documents is not None:
            changes["verification_documents"] = json.loads(command.verification_documents)

        seller.update_business_details(**changes)
        repo.add(seller)
