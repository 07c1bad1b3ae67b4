"""FastAPI dependencies resolving the caller's Session from the bearer token."""

from fastapi import Depends, Header, HTTPException

from craftmarket.identity.auth import get_identity_provider
from craftmarket.identity.session import Session, resolve_session
from craftmarket.utils.logging import add_context


def bearer_token(authorization: str = Header(default="")) -> str | None:
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def current_session(token: str | None = Depends(bearer_token)) -> Session:
    auth_user = get_identity_provider().current_user(token)
    if auth_user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    session = resolve_session(auth_user)
    add_context(auth_user_id=auth_user.id, user_id=session.user_id)
    return session


def profile_session(session: Session = Depends(current_session)) -> Session:
    session.require_profile()
    return session
