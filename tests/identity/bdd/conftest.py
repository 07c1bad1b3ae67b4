"""Shared BDD fixtures and step definitions for the Identity context."""

import pytest
from craftmarket.identity.events import SellerApproved, SellerDetailsUpdated, SellerRegistered, SellerRejected
from craftmarket.identity.seller import Seller
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_EVENT_CLASSES = {
    "SellerRegistered": SellerRegistered,
    "SellerDetailsUpdated": SellerDetailsUpdated,
    "SellerApproved": SellerApproved,
    "SellerRejected": SellerRejected,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given("a newly registered seller", target_fixture="seller")
def newly_registered_seller():
    seller = Seller.register(user_id="user-001", business_name="Asha's Kitchen", business_type="food")
    seller._events.clear()
    return seller


@given("the seller was approved")
def seller_was_approved(seller):
    seller.approve(reviewed_by="admin-001")
    seller._events.clear()


@given("the seller was rejected")
def seller_was_rejected(seller):
    seller.reject(reviewed_by="admin-001", reason="Missing documents")
    seller._events.clear()


@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse('the seller verification status is "{status}"'))
def seller_status_is(seller, status):
    assert seller.verification_status == status


@then(parsers.cfparse("a {event_type} event is raised"))
def generic_event_raised(seller, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in seller._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in seller._events]}"
