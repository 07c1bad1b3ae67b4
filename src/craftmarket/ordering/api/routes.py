"""FastAPI routes for the Ordering context: cart, checkout and orders."""

from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from craftmarket.identity.api.dependencies import profile_session
from craftmarket.identity.session import Session
from craftmarket.ordering.api.schemas import (
    AddToCartRequest,
    CancelOrderRequest,
    CartItemIdResponse,
    CheckoutRequest,
    CheckoutResponse,
    OrderStatusResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
)
from craftmarket.ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from craftmarket.ordering.cart.view import list_cart
from craftmarket.ordering.checkout.placement import PlaceOrder
from craftmarket.ordering.order.fulfillment import (
    AdvanceOrder,
    CancelOrder,
    ConfirmOrder,
    MarkOrderDelivered,
    MarkOrderReady,
    StartPreparingOrder,
)
from craftmarket.ordering.order.queries import buyer_orders, get_order_for, recent_orders, seller_orders
from craftmarket.store import get_store

cart_router = APIRouter(prefix="/cart", tags=["cart"])
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


# ---------------------------------------------------------------------------
# Cart endpoints
# ---------------------------------------------------------------------------
@cart_router.get("")
async def view_cart(session: Session = Depends(profile_session)):
    return list_cart(session.user_id)


@cart_router.post("/items", status_code=201, response_model=CartItemIdResponse)
async def add_to_cart(body: AddToCartRequest, session: Session = Depends(profile_session)) -> CartItemIdResponse:
    command = AddToCart(user_id=session.user_id, product_id=body.product_id, quantity=body.quantity)
    item_id = current_domain.process(command, asynchronous=False)
    return CartItemIdResponse(item_id=item_id)


@cart_router.put("/items/{item_id}", response_model=StatusResponse)
async def update_cart_quantity(
    item_id: str, body: UpdateCartQuantityRequest, session: Session = Depends(profile_session)
) -> StatusResponse:
    command = UpdateCartQuantity(user_id=session.user_id, item_id=item_id, new_quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/items/{item_id}", response_model=StatusResponse)
async def remove_from_cart(item_id: str, session: Session = Depends(profile_session)) -> StatusResponse:
    current_domain.process(RemoveFromCart(user_id=session.user_id, item_id=item_id), asynchronous=False)
    return StatusResponse()


@cart_router.delete("", response_model=StatusResponse)
async def clear_cart(session: Session = Depends(profile_session)) -> StatusResponse:
    current_domain.process(ClearCart(user_id=session.user_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Checkout endpoint
# ---------------------------------------------------------------------------
@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
async def checkout(body: CheckoutRequest, session: Session = Depends(profile_session)) -> CheckoutResponse:
    command = PlaceOrder(
        checkout_token=body.checkout_token,
        buyer_id=session.user_id,
        buyer_name=session.buyer_name,
        buyer_phone=body.buyer_phone,
        delivery_address=body.delivery_address,
        payment_method=body.payment_method,
    )
    order_ids = current_domain.process(command, asynchronous=False)
    return CheckoutResponse(order_ids=order_ids)


# ---------------------------------------------------------------------------
# Order endpoints
# ---------------------------------------------------------------------------
@order_router.get("")
async def my_orders(session: Session = Depends(profile_session)):
    return buyer_orders(session.user_id)


@order_router.get("/selling")
async def selling_orders(limit: int | None = None, session: Session = Depends(profile_session)):
    return seller_orders(session.require_seller(), limit=limit)


@order_router.get("/recent")
async def admin_recent_orders(limit: int = 50, session: Session = Depends(profile_session)):
    session.require_admin()
    return recent_orders(limit=limit)


@order_router.get("/{order_id}")
async def order_detail(order_id: str, session: Session = Depends(profile_session)):
    return get_order_for(session, order_id)


def _status_of(order_id):
    return OrderStatusResponse(order_id=order_id, status=get_store().get("orders", order_id).status)


_TRANSITIONS = {
    "confirm": ConfirmOrder,
    "prepare": StartPreparingOrder,
    "ready": MarkOrderReady,
    "deliver": MarkOrderDelivered,
    "advance": AdvanceOrder,
}


@order_router.put("/{order_id}/cancel", response_model=OrderStatusResponse)
async def cancel_order(
    order_id: str, body: CancelOrderRequest, session: Session = Depends(profile_session)
) -> OrderStatusResponse:
    command = CancelOrder(order_id=order_id, user_id=session.user_id, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return _status_of(order_id)


@order_router.put("/{order_id}/{transition}", response_model=OrderStatusResponse)
async def transition_order(
    order_id: str, transition: str, session: Session = Depends(profile_session)
) -> OrderStatusResponse:
    command_cls = _TRANSITIONS.get(transition)
    if command_cls is None:
        raise ValidationError({"transition": [f"Unknown transition: {transition}"]})

    current_domain.process(command_cls(order_id=order_id, user_id=session.user_id), asynchronous=False)
    return _status_of(order_id)
