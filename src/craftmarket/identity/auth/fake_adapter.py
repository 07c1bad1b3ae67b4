"""Fake identity provider for development and testing.

Tokens are issued in memory with `sign_in()`; no network calls are made.
"""

from collections.abc import Callable
from urllib.parse import quote
from uuid import uuid4

from craftmarket.identity.auth.port import AuthState, AuthUser, IdentityProvider
from craftmarket.utils.logging import get_logger

logger = get_logger(__name__)


class FakeIdentityProvider(IdentityProvider):
    """In-memory identity provider."""

    def __init__(self, base_url: str = "https://auth.fake.local"):
        self.base_url = base_url
        self._sessions: dict[str, AuthUser] = {}
        self._subscribers: list[Callable[[AuthState], None]] = []

    def sign_in(self, email: str, display_name: str | None = None, user_id: str | None = None) -> str:
        """Start a session for `email` and return its bearer token."""
        user = AuthUser(id=user_id or str(uuid4()), email=email, display_name=display_name)
        token = f"fake-{uuid4().hex}"
        self._sessions[token] = user
        self._notify(AuthState(is_loading=False, is_authenticated=True, user=user))
        return token

    def current_user(self, token: str | None) -> AuthUser | None:
        if not token:
            return None
        return self._sessions.get(token)

    def login_url(self, redirect_path: str) -> str:
        return f"{self.base_url}/login?redirect_to={quote(redirect_path, safe='')}"

    def sign_out(self, token: str) -> None:
        user = self._sessions.pop(token, None)
        if user is None:
            return
        logger.info("identity_signed_out", auth_user_id=user.id)
        self._notify(AuthState(is_loading=False, is_authenticated=False, user=None))

    def on_auth_state_changed(self, callback: Callable[[AuthState], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, state: AuthState) -> None:
        for callback in list(self._subscribers):
            callback(state)
