"""BDD tests for seller verification."""

from craftmarket.identity.events import SellerRejected
from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/seller_verification.feature")


@when("an administrator approves the seller")
def approve_seller(seller, error):
    try:
        seller.approve(reviewed_by="admin-001")
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('an administrator rejects the seller with reason "{reason}"'))
def reject_seller(seller, reason, error):
    try:
        seller.reject(reviewed_by="admin-001", reason=reason)
    except ValidationError as exc:
        error["exc"] = exc


@then(parsers.cfparse('a SellerRejected event is raised with reason "{reason}"'))
def rejected_event_with_reason(seller, reason):
    events = [e for e in seller._events if isinstance(e, SellerRejected)]
    assert len(events) == 1
    assert events[0].reason == reason
