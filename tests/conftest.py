import json
import os
from pathlib import Path
from types import SimpleNamespace
from uuid import uuid4

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("ENVIRONMENT", "test")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def marketplace_bed():
    from craftmarket.domain import marketplace

    bed = DomainFixture(marketplace)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_bed):
    """Run every test inside the domain context and start from empty stores."""
    from craftmarket.catalogue.storage import reset_storage
    from craftmarket.identity.auth import reset_identity_provider
    from protean import current_domain

    with marketplace_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        for _, broker in current_domain.brokers.items():
            broker._data_reset()
        current_domain.event_store.store._data_reset()

    reset_identity_provider()
    reset_storage()


# ---------------------------------------------------------------------------
# Marketplace factories
# ---------------------------------------------------------------------------
def complete_profile(role, display_name, email=None, auth_user_id=None):
    from craftmarket.identity.onboarding import CompleteProfile
    from protean import current_domain

    return current_domain.process(
        CompleteProfile(
            auth_user_id=auth_user_id or f"auth-{uuid4().hex[:10]}",
            email=email or f"{uuid4().hex[:8]}@example.com",
            role=role,
            display_name=display_name,
        ),
        asynchronous=False,
    )


@pytest.fixture()
def make_buyer():
    def _make(display_name="Meera Buyer", **kwargs):
        return complete_profile("buyer", display_name, **kwargs)

    return _make


@pytest.fixture()
def admin_id():
    from craftmarket.identity.onboarding import AssignRole
    from protean import current_domain

    user_id = complete_profile("buyer", "Site Admin")
    current_domain.process(AssignRole(user_id=user_id, role="admin"), asynchronous=False)
    return user_id


@pytest.fixture()
def make_seller(admin_id):
    def _make(business_name="Asha's Kitchen", approved=True, **kwargs):
        from craftmarket.identity.verification import ApproveSeller
        from craftmarket.store import get_store
        from protean import current_domain

        user_id = complete_profile("seller", business_name, **kwargs)
        seller = get_store().first("sellers", {"user_id": user_id})
        if approved:
            current_domain.process(
                ApproveSeller(seller_id=str(seller.id), admin_user_id=admin_id),
                asynchronous=False,
            )
        return SimpleNamespace(user_id=user_id, seller_id=str(seller.id))

    return _make


@pytest.fixture()
def category_id():
    from craftmarket.store import get_store

    category = get_store().create("categories", {"name": "Pickles & Preserves", "type": "food", "icon": "🫙"})
    return str(category.id)


@pytest.fixture()
def make_product(category_id):
    def _make(seller, title="Mango Pickle", price=100.0, stock_quantity=10, images=None):
        from craftmarket.catalogue.listing import AddProduct
        from protean import current_domain

        return current_domain.process(
            AddProduct(
                user_id=seller.user_id,
                title=title,
                category_id=category_id,
                price=price,
                stock_quantity=stock_quantity,
                images=json.dumps(images or []),
            ),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def session_for():
    """Resolve the Session a user would get on their next request."""

    def _resolve(user_id):
        from craftmarket.identity.auth.port import AuthUser
        from craftmarket.identity.session import resolve_session
        from craftmarket.store import get_store

        user = get_store().get("users", user_id)
        return resolve_session(AuthUser(id=user.auth_user_id, email=user.email, display_name=user.display_name))

    return _resolve


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def client():
    from craftmarket.catalogue.api import category_router, product_router
    from craftmarket.identity.api import profile_router, seller_router
    from craftmarket.ordering.api import cart_router, checkout_router, order_router
    from craftmarket.reviews.api import review_router
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from protean.integrations.fastapi import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
    for router in (
        profile_router,
        seller_router,
        product_router,
        category_router,
        cart_router,
        checkout_router,
        order_router,
        review_router,
    ):
        app.include_router(router)
    return TestClient(app)


@pytest.fixture()
def identity_provider():
    from craftmarket.identity.auth import set_identity_provider
    from craftmarket.identity.auth.fake_adapter import FakeIdentityProvider

    provider = FakeIdentityProvider()
    set_identity_provider(provider)
    return provider


@pytest.fixture()
def auth_headers(identity_provider):
    """Sign an existing profile in and return its Authorization header."""

    def _headers(user_id):
        from craftmarket.store import get_store

        user = get_store().get("users", user_id)
        token = identity_provider.sign_in(user.email, display_name=user.display_name, user_id=user.auth_user_id)
        return {"Authorization": f"Bearer {token}"}

    return _headers


# ---------------------------------------------------------------------------
# Cart and checkout
# ---------------------------------------------------------------------------
@pytest.fixture()
def add_to_cart():
    def _add(user_id, product_id, quantity=1):
        from craftmarket.ordering.cart.items import AddToCart
        from protean import current_domain

        return current_domain.process(
            AddToCart(user_id=user_id, product_id=product_id, quantity=quantity),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def checkout():
    def _checkout(buyer_id, token=None, payment_method="cash_on_delivery", buyer_name="Meera Buyer", **overrides):
        from craftmarket.ordering.checkout.placement import PlaceOrder
        from protean import current_domain

        fields = {
            "checkout_token": token or f"chk-{uuid4().hex}",
            "buyer_id": buyer_id,
            "buyer_name": buyer_name,
            "buyer_phone": "+91 98450 00000",
            "delivery_address": "12 Lake Road, Block B",
            "payment_method": payment_method,
        }
        fields.update(overrides)
        return current_domain.process(PlaceOrder(**fields), asynchronous=False)

    return _checkout


@pytest.fixture()
def deliver_order():
    """Walk an order from pending to delivered as its seller."""

    def _deliver(order_id, seller_user_id):
        from craftmarket.ordering.order.fulfillment import AdvanceOrder
        from protean import current_domain

        for _ in range(4):
            current_domain.process(AdvanceOrder(order_id=order_id, user_id=seller_user_id), asynchronous=False)

    return _deliver
