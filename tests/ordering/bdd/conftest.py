"""Shared BDD fixtures and step definitions for the Ordering context."""

import pytest
from craftmarket.ordering.order.events import (
    CashPaymentCollected,
    OrderCancelled,
    OrderConfirmed,
    OrderDelivered,
    OrderPlaced,
    OrderPreparationStarted,
    OrderReady,
)
from protean.exceptions import ValidationError
from pytest_bdd import then

_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "OrderConfirmed": OrderConfirmed,
    "OrderPreparationStarted": OrderPreparationStarted,
    "OrderReady": OrderReady,
    "OrderDelivered": OrderDelivered,
    "OrderCancelled": OrderCancelled,
    "CashPaymentCollected": CashPaymentCollected,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@pytest.fixture()
def event_classes():
    return _EVENT_CLASSES
