"""Tests for the in-memory identity provider and provider selection."""

import pytest
from craftmarket.identity.auth import get_identity_provider, reset_identity_provider, set_identity_provider
from craftmarket.identity.auth.fake_adapter import FakeIdentityProvider


class TestFakeIdentityProvider:
    def test_sign_in_issues_resolvable_token(self):
        provider = FakeIdentityProvider()
        token = provider.sign_in("asha@example.com", display_name="Asha", user_id="auth-asha")

        user = provider.current_user(token)
        assert user.id == "auth-asha"
        assert user.email == "asha@example.com"
        assert user.display_name == "Asha"

    def test_unknown_or_missing_token(self):
        provider = FakeIdentityProvider()
        assert provider.current_user("nope") is None
        assert provider.current_user(None) is None

    def test_sign_out_invalidates_token(self):
        provider = FakeIdentityProvider()
        token = provider.sign_in("asha@example.com")
        provider.sign_out(token)
        assert provider.current_user(token) is None

    def test_login_url_carries_redirect(self):
        provider = FakeIdentityProvider(base_url="https://auth.example.com")
        url = provider.login_url("/orders?tab=open")
        assert url == "https://auth.example.com/login?redirect_to=%2Forders%3Ftab%3Dopen"

    def test_subscribers_see_sign_in_and_sign_out(self):
        provider = FakeIdentityProvider()
        states = []
        provider.on_auth_state_changed(states.append)

        token = provider.sign_in("asha@example.com")
        provider.sign_out(token)

        assert [state.is_authenticated for state in states] == [True, False]
        assert states[0].user.email == "asha@example.com"
        assert states[1].user is None

    def test_unsubscribe_stops_notifications(self):
        provider = FakeIdentityProvider()
        states = []
        unsubscribe = provider.on_auth_state_changed(states.append)
        unsubscribe()

        provider.sign_in("asha@example.com")
        assert states == []


class TestProviderSelection:
    def test_defaults_to_fake(self, monkeypatch):
        monkeypatch.delenv("IDENTITY_ADAPTER", raising=False)
        reset_identity_provider()
        assert isinstance(get_identity_provider(), FakeIdentityProvider)

    def test_singleton(self):
        assert get_identity_provider() is get_identity_provider()

    def test_override(self):
        provider = FakeIdentityProvider()
        set_identity_provider(provider)
        assert get_identity_provider() is provider

    def test_unknown_adapter(self, monkeypatch):
        monkeypatch.setenv("IDENTITY_ADAPTER", "carrier-pigeon")
        reset_identity_provider()
        with pytest.raises(ValueError):
            get_identity_provider()
