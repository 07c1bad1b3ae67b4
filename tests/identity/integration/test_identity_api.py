"""Integration tests for the profile and seller endpoints."""

from craftmarket.identity.seller import Seller
from craftmarket.identity.user import User
from protean import current_domain


class TestAuthentication:
    def test_missing_token_is_unauthorized(self, client):
        response = client.get("/profiles/me")
        assert response.status_code == 401

    def test_unknown_token_is_unauthorized(self, client, identity_provider):
        response = client.get("/profiles/me", headers={"Authorization": "Bearer forged"})
        assert response.status_code == 401

    def test_login_url(self, client, identity_provider):
        response = client.get("/profiles/login-url", params={"redirect_path": "/cart"})
        assert response.status_code == 200
        assert response.json()["login_url"].endswith("redirect_to=%2Fcart")

    def test_sign_out(self, client, identity_provider):
        token = identity_provider.sign_in("asha@example.com")
        headers = {"Authorization": f"Bearer {token}"}

        assert client.post("/profiles/sign-out", headers=headers).status_code == 200
        assert identity_provider.current_user(token) is None


class TestOnboardingEndpoints:
    def test_complete_profile_as_seller(self, client, identity_provider):
        token = identity_provider.sign_in("asha@example.com", display_name="Asha", user_id="auth-asha")
        headers = {"Authorization": f"Bearer {token}"}

        response = client.post("/profiles", json={"role": "seller"}, headers=headers)
        assert response.status_code == 201
        user_id = response.json()["user_id"]

        user = current_domain.repository_for(User).get(user_id)
        assert user.auth_user_id == "auth-asha"
        assert user.display_name == "Asha"

        profile = client.get("/profiles/me", headers=headers).json()
        assert profile["seller"]["verification_status"] == "pending"

    def test_profile_required_before_other_calls(self, client, identity_provider):
        token = identity_provider.sign_in("new@example.com")
        response = client.get("/profiles/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 400

    def test_admin_role_rejected(self, client, identity_provider):
        token = identity_provider.sign_in("sneaky@example.com")
        response = client.post("/profiles", json={"role": "admin"}, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 400

    def test_update_profile(self, client, make_buyer, auth_headers):
        user_id = make_buyer()
        response = client.put("/profiles/me", json={"location_city": "Pune"}, headers=auth_headers(user_id))
        assert response.status_code == 200
        assert current_domain.repository_for(User).get(user_id).location_city == "Pune"


class TestSellerEndpoints:
    def test_update_seller_details(self, client, make_seller, auth_headers):
        seller = make_seller(approved=False)
        response = client.put(
            "/sellers/me",
            json={"business_type": "craft", "verification_documents": ["https://docs.example.com/id.pdf"]},
            headers=auth_headers(seller.user_id),
        )
        assert response.status_code == 200

        stored = current_domain.repository_for(Seller).get(seller.seller_id)
        assert stored.business_type == "craft"
        assert stored.documents == ["https://docs.example.com/id.pdf"]

    def test_admin_listing_and_approval(self, client, make_seller, admin_id, auth_headers):
        seller = make_seller(approved=False)
        headers = auth_headers(admin_id)

        pending = client.get("/sellers", params={"verification_status": "pending"}, headers=headers).json()
        assert [entry["id"] for entry in pending] == [seller.seller_id]

        assert client.put(f"/sellers/{seller.seller_id}/approve", headers=headers).status_code == 200
        assert current_domain.repository_for(Seller).get(seller.seller_id).is_approved

    def test_buyer_cannot_list_sellers(self, client, make_buyer, auth_headers):
        response = client.get("/sellers", headers=auth_headers(make_buyer()))
        assert response.status_code == 400

    def test_reject_with_reason(self, client, make_seller, admin_id, auth_headers):
        seller = make_seller(approved=False)
        response = client.put(
            f"/sellers/{seller.seller_id}/reject",
            json={"reason": "Documents unreadable"},
            headers=auth_headers(admin_id),
        )
        assert response.status_code == 200
        assert current_domain.repository_for(Seller).get(seller.seller_id).verification_status == "rejected"

    def test_unknown_seller_is_not_found(self, client, admin_id, auth_headers):
        response = client.put("/sellers/missing/approve", headers=auth_headers(admin_id))
        assert response.status_code == 404
