"""Identity provider port (abstract interface).

Authentication and session management live outside the marketplace. The
domain only needs to know who is calling, where to send someone to log in,
how to end a session and when the signed-in identity changes.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class AuthUser:
    """An identity as reported by the provider."""

    id: str
    email: str
    display_name: str | None = None


@dataclass(frozen=True)
class AuthState:
    """Snapshot delivered to auth-state subscribers."""

    is_loading: bool
    is_authenticated: bool
    user: AuthUser | None = None


class IdentityProvider(ABC):
    """Abstract identity provider interface."""

    @abstractmethod
    def current_user(self, token: str | None) -> AuthUser | None:
        """Resolve a bearer token to the identity it belongs to, or None."""
        ...

    @abstractmethod
    def login_url(self, redirect_path: str) -> str:
        """URL that starts a login and returns to `redirect_path` afterwards."""
        ...

    @abstractmethod
    def sign_out(self, token: str) -> None:
        """Invalidate the session behind `token`."""
        ...

    @abstractmethod
    def on_auth_state_changed(self, callback: Callable[[AuthState], None]) -> Callable[[], None]:
        """Subscribe to auth-state changes. Returns an unsubscribe callable."""
        ...
