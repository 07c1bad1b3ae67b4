"""FastAPI endpoints for the Catalogue: products, images and categories."""

import base64
import binascii
import json

from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from craftmarket.catalogue.api.schemas import (
    AddProductRequest,
    AvailabilityResponse,
    ImageUrlsResponse,
    ProductIdResponse,
    StatusResponse,
    UpdateProductRequest,
    UploadImagesRequest,
)
from craftmarket.catalogue.browser import (
    DEFAULT_PAGE_SIZE,
    browse_products,
    get_product_detail,
    list_categories,
    seller_products,
)
from craftmarket.catalogue.listing import (
    AddProduct,
    ToggleProductAvailability,
    UpdateProduct,
    upload_product_images,
)
from craftmarket.identity.api.dependencies import current_session, profile_session
from craftmarket.identity.session import Session

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


# --- Product endpoints ---


@product_router.get("")
async def list_products(
    category_id: str | None = None,
    search: str | None = None,
    limit: int = DEFAULT_PAGE_SIZE,
    session: Session = Depends(current_session),
):
    return browse_products(category_id=category_id, search=search, limit=limit)


@product_router.get("/mine")
async def my_products(session: Session = Depends(profile_session)):
    return seller_products(session.require_seller())


@product_router.get("/{product_id}")
async def product_detail(product_id: str, session: Session = Depends(current_session)):
    return get_product_detail(product_id)


@product_router.post("/images", status_code=201, response_model=ImageUrlsResponse)
async def upload_images(body: UploadImagesRequest, session: Session = Depends(profile_session)) -> ImageUrlsResponse:
    session.require_seller()
    try:
        files = [(f.filename, base64.b64decode(f.content_base64, validate=True)) for f in body.files]
    except binascii.Error:
        raise ValidationError({"files": ["Image content must be base64 encoded"]})
    return ImageUrlsResponse(urls=upload_product_images(session.user_id, files))


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest, session: Session = Depends(profile_session)) -> ProductIdResponse:
    session.require_seller()
    command = AddProduct(
        user_id=session.user_id,
        title=body.title,
        category_id=body.category_id,
        price=body.price,
        description=body.description,
        stock_quantity=body.stock_quantity,
        ingredients=body.ingredients,
        handmade_process=body.handmade_process,
        images=json.dumps(body.images),
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, session: Session = Depends(profile_session)
) -> StatusResponse:
    changes = body.model_dump(exclude_none=True)
    if "images" in changes:
        changes["images"] = json.dumps(changes["images"])
    command = UpdateProduct(product_id=product_id, user_id=session.user_id, **changes)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/toggle-availability", response_model=AvailabilityResponse)
async def toggle_availability(product_id: str, session: Session = Depends(profile_session)) -> AvailabilityResponse:
    command = ToggleProductAvailability(product_id=product_id, user_id=session.user_id)
    is_available = current_domain.process(command, asynchronous=False)
    return AvailabilityResponse(product_id=product_id, is_available=is_available)


# --- Category endpoints ---


@category_router.get("")
async def categories(category_type: str | None = None):
    return list_categories(category_type=category_type)
