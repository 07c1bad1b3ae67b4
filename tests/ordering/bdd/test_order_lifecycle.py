"""BDD tests for the order state machine."""

from craftmarket.ordering.order.order import Order
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/order_lifecycle.feature")


@given(parsers.cfparse('a pending "{payment_method}" order totalling {total:f}'), target_fixture="order")
def pending_order(payment_method, total):
    order = Order.place(
        buyer_id="buyer-001",
        seller_id="seller-001",
        buyer_name="Meera",
        buyer_phone="+91 98450 00000",
        delivery_address="12 Lake Road",
        payment_method=payment_method,
        lines=[{"product_id": "prod-001", "product_title": "Mango Pickle", "product_price": total, "quantity": 1}],
    )
    order._events.clear()
    return order


@given(parsers.cfparse('the order is "{status}"'))
def order_is(order, status):
    while order.status != status:
        order.advance()
    order._events.clear()


@when("the seller advances the order")
def advance(order, error):
    try:
        order.advance()
    except ValidationError as exc:
        error["exc"] = exc


@when("the seller marks the order delivered")
def mark_delivered(order, error):
    try:
        order.mark_delivered()
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the order is cancelled with reason "{reason}"'))
def cancel(order, reason, error):
    try:
        order.cancel(cancelled_by="seller-user", reason=reason)
    except ValidationError as exc:
        error["exc"] = exc


@then(parsers.cfparse('the order status is "{status}"'))
def status_is(order, status):
    assert order.status == status


@then(parsers.cfparse('the payment status is "{status}"'))
def payment_status_is(order, status):
    assert order.payment_status == status


@then("the order has no next status")
def no_next_status(order):
    assert order.next_status() is None


@then(parsers.cfparse("a {event_type} event is raised"))
def event_raised(order, event_type, event_classes):
    event_cls = event_classes[event_type]
    assert any(isinstance(e, event_cls) for e in order._events), (
        f"No {event_type} event found. Events: {[type(e).__name__ for e in order._events]}"
    )
