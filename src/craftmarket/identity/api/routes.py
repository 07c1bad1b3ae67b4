"""FastAPI endpoints for profiles, sellers and seller verification."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from craftmarket.catalogue.browser import seller_storefront
from craftmarket.identity.api.dependencies import bearer_token, current_session, profile_session
from craftmarket.identity.api.schemas import (
    CompleteProfileRequest,
    LoginUrlResponse,
    RejectSellerRequest,
    StatusResponse,
    UpdateProfileRequest,
    UpdateSellerDetailsRequest,
    UserIdResponse,
)
from craftmarket.identity.auth import get_identity_provider
from craftmarket.identity.directory import get_profile, list_sellers
from craftmarket.identity.onboarding import CompleteProfile, UpdateProfile, UpdateSellerDetails
from craftmarket.identity.session import Session
from craftmarket.identity.verification import ApproveSeller, RejectSeller

profile_router = APIRouter(prefix="/profiles", tags=["profiles"])
seller_router = APIRouter(prefix="/sellers", tags=["sellers"])


# --- Profile endpoints ---


@profile_router.get("/login-url", response_model=LoginUrlResponse)
async def login_url(redirect_path: str = "/") -> LoginUrlResponse:
    return LoginUrlResponse(login_url=get_identity_provider().login_url(redirect_path))


@profile_router.post("/sign-out", response_model=StatusResponse)
async def sign_out(token: str | None = Depends(bearer_token)) -> StatusResponse:
    if token:
        get_identity_provider().sign_out(token)
    return StatusResponse()


@profile_router.post("", status_code=201, response_model=UserIdResponse)
async def complete_profile(body: CompleteProfileRequest, session: Session = Depends(current_session)) -> UserIdResponse:
    command = CompleteProfile(
        auth_user_id=session.auth_user.id,
        email=session.email,
        role=body.role,
        display_name=body.display_name or session.auth_user.display_name,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@profile_router.get("/me")
async def my_profile(session: Session = Depends(profile_session)):
    return get_profile(session.user_id)


@profile_router.put("/me", response_model=StatusResponse)
async def update_profile(body: UpdateProfileRequest, session: Session = Depends(profile_session)) -> StatusResponse:
    command = UpdateProfile(user_id=session.user_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# --- Seller endpoints ---


@seller_router.get("")
async def admin_seller_listing(verification_status: str | None = None, session: Session = Depends(profile_session)):
    session.require_admin()
    return list_sellers(verification_status=verification_status)


@seller_router.put("/me", response_model=StatusResponse)
async def update_seller_details(
    body: UpdateSellerDetailsRequest, session: Session = Depends(profile_session)
) -> StatusResponse:
    session.require_seller()
    command = UpdateSellerDetails(
        user_id=session.user_id,
        business_name=body.business_name,
        business_type=body.business_type,
        hygiene_declaration=body.hygiene_declaration,
        verification_documents=(
            json.dumps(body.verification_documents) if body.verification_documents is not None else None
        ),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@seller_router.get("/{seller_id}")
async def storefront(seller_id: str, session: Session = Depends(current_session)):
    return seller_storefront(seller_id)


@seller_router.put("/{seller_id}/approve", response_model=StatusResponse)
async def approve_seller(seller_id: str, session: Session = Depends(profile_session)) -> StatusResponse:
    current_domain.process(ApproveSeller(seller_id=seller_id, admin_user_id=session.user_id), asynchronous=False)
    return StatusResponse()


@seller_router.put("/{seller_id}/reject", response_model=StatusResponse)
async def reject_seller(
    seller_id: str, body: RejectSellerRequest, session: Session = Depends(profile_session)
) -> StatusResponse:
    command = RejectSeller(seller_id=seller_id, admin_user_id=session.user_id, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
