"""Integration tests for the review endpoints."""

import pytest


@pytest.fixture()
def delivered(make_seller, make_product, make_buyer, add_to_cart, checkout, deliver_order, auth_headers):
    seller = make_seller()
    buyer_id = make_buyer()
    product_id = make_product(seller, price=100.0)
    add_to_cart(buyer_id, product_id, 1)
    order_id = checkout(buyer_id)[0]
    deliver_order(order_id, seller.user_id)
    return {
        "order_id": order_id,
        "product_id": product_id,
        "seller_id": seller.seller_id,
        "headers": auth_headers(buyer_id),
    }


class TestReviewEndpoints:
    def test_submit_and_read(self, client, delivered):
        response = client.post(
            f"/reviews/orders/{delivered['order_id']}",
            json={"ratings": {delivered["product_id"]: {"rating": 5, "comment": "Lovely"}}},
            headers=delivered["headers"],
        )
        assert response.status_code == 201
        assert len(response.json()["review_ids"]) == 1

        by_product = client.get(f"/reviews/products/{delivered['product_id']}", headers=delivered["headers"]).json()
        by_seller = client.get(f"/reviews/sellers/{delivered['seller_id']}", headers=delivered["headers"]).json()
        assert [r["comment"] for r in by_product] == ["Lovely"]
        assert len(by_seller) == 1

    def test_duplicate_submission(self, client, delivered):
        body = {"ratings": {delivered["product_id"]: {"rating": 4}}}
        url = f"/reviews/orders/{delivered['order_id']}"
        client.post(url, json=body, headers=delivered["headers"])

        assert client.post(url, json=body, headers=delivered["headers"]).status_code == 400

    def test_out_of_range_rating(self, client, delivered):
        response = client.post(
            f"/reviews/orders/{delivered['order_id']}",
            json={"ratings": {delivered["product_id"]: {"rating": 9}}},
            headers=delivered["headers"],
        )
        assert response.status_code == 400
