"""Shared BDD fixtures and step definitions for the Catalogue context."""

import pytest
from craftmarket.catalogue.events import ProductAdded, ProductAvailabilityToggled, ProductRated, ProductUpdated
from craftmarket.catalogue.product import Product
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_EVENT_CLASSES = {
    "ProductAdded": ProductAdded,
    "ProductUpdated": ProductUpdated,
    "ProductAvailabilityToggled": ProductAvailabilityToggled,
    "ProductRated": ProductRated,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given(parsers.cfparse("a listed product priced at {price:f}"), target_fixture="product")
def listed_product(price):
    product = Product.create(
        seller_id="seller-001",
        user_id="user-001",
        title="Mango Pickle",
        category_id="cat-001",
        price=price,
        stock_quantity=12,
    )
    product._events.clear()
    return product


@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} event is raised"))
def generic_event_raised(product, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in product._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in product._events]}"
