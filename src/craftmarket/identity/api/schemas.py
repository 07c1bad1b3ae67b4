"""Pydantic request/response schemas for the Identity API.

These are external contracts (anti-corruption layer) and stay separate from
the internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Profile Request Schemas
# ---------------------------------------------------------------------------
class CompleteProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"role": "seller", "display_name": "Asha's Kitchen"},
            ]
        }
    }

    role: str = Field(..., max_length=20)
    display_name: str | None = Field(None, max_length=150)


class UpdateProfileRequest(BaseModel):
    display_name: str | None = Field(None, max_length=150)
    phone: str | None = Field(None, max_length=20)
    avatar: str | None = Field(None, max_length=500)
    location_city: str | None = Field(None, max_length=100)
    location_area: str | None = Field(None, max_length=100)
    location_address: str | None = None


# ---------------------------------------------------------------------------
# Seller Request Schemas
# ---------------------------------------------------------------------------
class UpdateSellerDetailsRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "business_name": "Asha's Kitchen",
                    "business_type": "food",
                    "hygiene_declaration": "Prepared in a home kitchen inspected in 2025.",
                    "verification_documents": ["https://storage.fake.local/docs/licence.pdf"],
                }
            ]
        }
    }

    business_name: str | None = Field(None, max_length=255)
    business_type: str | None = Field(None, max_length=20)
    hygiene_declaration: str | None = None
    verification_documents: list[str] | None = None


class RejectSellerRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class UserIdResponse(BaseModel):
    user_id: str


class LoginUrlResponse(BaseModel):
    login_url: str


class StatusResponse(BaseModel):
    status: str = "ok"
