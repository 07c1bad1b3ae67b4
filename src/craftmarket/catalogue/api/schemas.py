"""Pydantic request/response schemas for the Catalogue API."""

from pydantic import BaseModel, Field


# --- Product Request Schemas ---


class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Mango Pickle",
                    "description": "Sun-cured raw mango pickle in mustard oil.",
                    "category_id": "cat-pickles",
                    "price": 180.0,
                    "stock_quantity": 12,
                    "ingredients": "Raw mango, mustard oil, chilli, salt",
                    "handmade_process": "Cut, salted and sun-cured for a week.",
                    "images": ["https://storage.fake.local/products/u1/1700000000000-jar.jpg"],
                }
            ]
        }
    }

    title: str = Field(..., max_length=255)
    category_id: str
    price: float = Field(..., gt=0)
    description: str | None = None
    stock_quantity: int = Field(0, ge=0)
    ingredients: str | None = None
    handmade_process: str | None = None
    images: list[str] = Field(default_factory=list)


class UpdateProductRequest(BaseModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    category_id: str | None = None
    price: float | None = Field(None, gt=0)
    stock_quantity: int | None = Field(None, ge=0)
    ingredients: str | None = None
    handmade_process: str | None = None
    is_available: bool | None = None
    images: list[str] | None = None


class ImageUpload(BaseModel):
    filename: str = Field(..., max_length=255)
    content_base64: str


class UploadImagesRequest(BaseModel):
    files: list[ImageUpload] = Field(..., min_length=1)


# --- Response Schemas ---


class ProductIdResponse(BaseModel):
    product_id: str


class AvailabilityResponse(BaseModel):
    product_id: str
    is_available: bool


class ImageUrlsResponse(BaseModel):
    urls: list[str]


class StatusResponse(BaseModel):
    status: str = "ok"
