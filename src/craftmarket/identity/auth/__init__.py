"""Identity provider factory.

Provides get_identity_provider() / set_identity_provider() to swap
implementations. The adapter is chosen with the IDENTITY_ADAPTER environment
variable and defaults to the in-memory fake.
"""

import os

from craftmarket.identity.auth.port import IdentityProvider

_current_provider: IdentityProvider | None = None


def get_identity_provider() -> IdentityProvider:
    """Return the configured identity provider (singleton)."""
    global _current_provider
    if _current_provider is None:
        adapter = os.environ.get("IDENTITY_ADAPTER", "fake")
        if adapter == "fake":
            from craftmarket.identity.auth.fake_adapter import FakeIdentityProvider

            _current_provider = FakeIdentityProvider()
        else:
            raise ValueError(f"Unknown identity adapter: {adapter}")
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    """Override the active identity provider (useful for tests)."""
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    """Reset to the default provider."""
    global _current_provider
    _current_provider = None
