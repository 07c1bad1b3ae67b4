"""Seller verification: administrator approves or rejects a seller."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from craftmarket.domain import marketplace
from craftmarket.identity.seller import Seller
from craftmarket.identity.user import User
from craftmarket.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Seller")
class ApproveSeller:
    seller_id: Identifier(required=True)
    admin_user_id: Identifier(required=True)


@marketplace.command(part_of="Seller")
class RejectSeller:
    seller_id: Identifier(required=True)
    admin_user_id: Identifier(required=True)
    reason: String(max_length=500)


def _assert_admin(user_id):
    admin = current_domain.repository_for(User).get(user_id)
    if not admin.is_admin:
        raise ValidationError({"role": ["Only administrators can review sellers"]})


@marketplace.command_handler(part_of=Seller)
class VerifySellerHandler:
    @handle(ApproveSeller)
    def approve_seller(self, command):
        _assert_admin(command.admin_user_id)

        repo = current_domain.repository_for(Seller)
        seller = repo.get(command.seller_id)
        seller.approve(reviewed_by=command.admin_user_id)
        repo.add(seller)
        logger.info("seller_approved", seller_id=str(seller.id), admin_user_id=str(command.admin_user_id))

    @handle(RejectSeller)
    def reject_seller(self, command):
        _assert_admin(command.admin_user_id)

        repo = current_domain.repository_for(Seller)
        seller = repo.get(command.seller_id)
        seller.reject(reviewed_by=command.admin_user_id, reason=command.reason)
        repo.add(seller)
        logger.info("seller_rejected", seller_id=str(seller.id), admin_user_id=str(command.admin_user_id))
