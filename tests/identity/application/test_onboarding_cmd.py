"""Application tests for profile onboarding and maintenance commands."""

import json

import pytest
from craftmarket.identity.onboarding import AssignRole, CompleteProfile, UpdateProfile, UpdateSellerDetails
from craftmarket.identity.seller import Seller, VerificationStatus
from craftmarket.identity.user import User
from protean import current_domain
from protean.exceptions import ValidationError


def _complete(**overrides):
    defaults = {
        "auth_user_id": "auth-001",
        "email": "asha@example.com",
        "role": "buyer",
        "display_name": "Asha",
    }
    defaults.update(overrides)
    return current_domain.process(CompleteProfile(**defaults), asynchronous=False)


def _sellers_for(user_id):
    return current_domain.repository_for(Seller)._dao.query.filter(user_id=user_id).all().items


class TestCompleteProfile:
    def test_creates_buyer_profile(self):
        user_id = _complete()
        user = current_domain.repository_for(User).get(user_id)
        assert user.auth_user_id == "auth-001"
        assert user.role == "buyer"
        assert _sellers_for(user_id) == []

    def test_seller_role_opens_pending_seller(self):
        user_id = _complete(role="seller", display_name="Asha's Kitchen")
        sellers = _sellers_for(user_id)
        assert len(sellers) == 1
        assert sellers[0].verification_status == VerificationStatus.PENDING.value
        assert sellers[0].business_name == "Asha's Kitchen"

    def test_second_call_returns_existing_profile(self):
        first = _complete(role="seller")
        second = _complete(role="seller")
        assert first == second
        assert len(current_domain.repository_for(User)._dao.query.all().items) == 1
        assert len(_sellers_for(first)) == 1

    def test_admin_cannot_be_self_selected(self):
        with pytest.raises(ValidationError):
            _complete(role="admin")
        assert current_domain.repository_for(User)._dao.query.all().items == []


class TestUpdateProfile:
    def test_updates_contact_details(self):
        user_id = _complete()
        current_domain.process(
            UpdateProfile(user_id=user_id, phone="+91 98450 00000", location_area="Kothrud"),
            asynchronous=False,
        )
        user = current_domain.repository_for(User).get(user_id)
        assert user.phone == "+91 98450 00000"
        assert user.location_area == "Kothrud"
        assert user.display_name == "Asha"


class TestAssignRole:
    def test_promote_to_admin(self):
        user_id = _complete()
        current_domain.process(AssignRole(user_id=user_id, role="admin"), asynchronous=False)
        assert current_domain.repository_for(User).get(user_id).is_admin


class TestUpdateSellerDetails:
    def test_seller_edits_business_details(self):
        user_id = _complete(role="seller")
        current_domain.process(
            UpdateSellerDetails(
                user_id=user_id,
                business_name="Asha's Pickles",
                business_type="food",
                hygiene_declaration="Prepared in a licensed kitchen",
                verification_documents=json.dumps(["https://docs.example.com/fssai.pdf"]),
            ),
            asynchronous=False,
        )
        seller = _sellers_for(user_id)[0]
        assert seller.business_name == "Asha's Pickles"
        assert seller.business_type == "food"
        assert seller.documents == ["https://docs.example.com/fssai.pdf"]

    def test_buyer_has_no_seller_details(self):
        user_id = _complete()
        with pytest.raises(ValidationError) as exc_info:
            current_domain.process(
                UpdateSellerDetails(user_id=user_id, business_name="Nope"),
                asynchronous=False,
            )
        assert "seller" in exc_info.value.messages
