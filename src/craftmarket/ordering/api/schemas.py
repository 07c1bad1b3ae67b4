"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartQuantityRequest(BaseModel):
    # Lower bound is a domain rule, enforced by the cart itself
    quantity: int


# ---------------------------------------------------------------------------
# Checkout Request Schemas
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "checkout_token": "5f0c1d9a-checkout-001",
                    "delivery_address": "12 Lake Road, Block B",
                    "buyer_phone": "+91 98450 00000",
                    "payment_method": "cash_on_delivery",
                }
            ]
        }
    }

    checkout_token: str = Field(..., max_length=100)
    delivery_address: str | None = None
    buyer_phone: str | None = Field(None, max_length=20)
    payment_method: str | None = Field(None, max_length=30)


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class CancelOrderRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartItemIdResponse(BaseModel):
    item_id: str


class CheckoutResponse(BaseModel):
    order_ids: list[str]


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str


class StatusResponse(BaseModel):
    status: str = "ok"
