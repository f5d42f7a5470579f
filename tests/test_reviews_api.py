"""Review endpoints and the product rating aggregate they maintain."""

import pytest

from core.auth import CUSTOMER, issue_token
from core.extensions import db
from models.productModels import Products
from models.reviewModels import ProductReview

from conftest import make_customer, place_order, set_status


def delivered_order(client, catalog, headers):
    order = place_order(client, catalog, headers=headers)
    set_status(order["id"], "delivered")
    return order


def post_review(client, headers, product_id, order_id, rating=5, comment="Segar dan bersih"):
    return client.post(
        "/api/reviews",
        json={"productId": product_id, "orderId": order_id, "rating": rating, "comment": comment},
        headers=headers,
    )


def product_rating(client, product_id):
    data = client.get(f"/api/products/{product_id}").get_json()["data"]
    return data["rating"], data["reviewCount"]


def test_review_on_delivered_order(client, catalog, customer, customer_headers):
    order = delivered_order(client, catalog, customer_headers)

    response = post_review(client, customer_headers, catalog["chicken"], order["id"], rating=4)
    data = response.get_json()["data"]

    assert response.status_code == 201
    assert data["verified"] is True
    assert data["customerId"] == customer.id
    assert data["customerName"] == "Siti Aminah"
    assert product_rating(client, catalog["chicken"]) == (4.0, 1)


def test_rating_is_recomputed_across_reviews(client, catalog, customer_headers):
    for rating in (5, 4, 4):
        order = delivered_order(client, catalog, customer_headers)
        assert post_review(client, customer_headers, catalog["chicken"], order["id"], rating=rating).status_code == 201

    assert product_rating(client, catalog["chicken"]) == (4.3, 3)
    assert product_rating(client, catalog["eggs"]) == (0.0, 0)


@pytest.mark.parametrize("status", ["pending", "confirmed", "processing", "cancelled"])
def test_undelivered_order_cannot_be_reviewed(client, catalog, customer_headers, status):
    order = place_order(client, catalog, headers=customer_headers)
    set_status(order["id"], status)

    response = post_review(client, customer_headers, catalog["chicken"], order["id"])

    assert response.status_code == 404
    assert ProductReview.query.count() == 0


def test_someone_elses_order_cannot_be_reviewed(client, catalog, customer_headers):
    order = delivered_order(client, catalog, customer_headers)
    other = make_customer(name="Budi", email="budi@example.com")
    other_headers = {"Authorization": f"Bearer {issue_token(other.id, CUSTOMER)}"}

    assert post_review(client, other_headers, catalog["chicken"], order["id"]).status_code == 404


def test_product_must_be_in_the_order(client, catalog, customer_headers):
    order = delivered_order(client, catalog, customer_headers)
    items = [{"productId": catalog["eggs"], "productVariantId": catalog["eggs_variant"], "quantity": 1}]
    eggs_only = place_order(client, catalog, headers=customer_headers, items=items)
    set_status(eggs_only["id"], "delivered")

    response = post_review(client, customer_headers, catalog["chicken"], eggs_only["id"])

    assert response.status_code == 404
    assert response.get_json()["message"] == "Product not found in this order"
    assert post_review(client, customer_headers, catalog["chicken"], order["id"]).status_code == 201


def test_duplicate_review_is_rejected(client, catalog, customer_headers):
    order = delivered_order(client, catalog, customer_headers)
    assert post_review(client, customer_headers, catalog["chicken"], order["id"]).status_code == 201

    response = post_review(client, customer_headers, catalog["chicken"], order["id"], rating=1)

    assert response.status_code == 400
    assert ProductReview.query.count() == 1
    assert product_rating(client, catalog["chicken"]) == (5.0, 1)


@pytest.mark.parametrize("body", [
    {"rating": 0, "comment": "x"},
    {"rating": 6, "comment": "x"},
    {"rating": 4, "comment": ""},
    {"rating": 4, "comment": "x" * 1001},
    {"rating": "4", "comment": "x"},
    {"rating": True, "comment": "x"},
    {"rating": 4},
])
def test_review_body_validation(client, catalog, customer_headers, body):
    order = delivered_order(client, catalog, customer_headers)
    body.update(productId=catalog["chicken"], orderId=order["id"])

    assert client.post("/api/reviews", json=body, headers=customer_headers).status_code == 400


def test_review_requires_customer_token(client, catalog, admin_headers):
    assert client.post("/api/reviews", json={}).status_code == 401
    assert client.post("/api/reviews", json={}, headers=admin_headers).status_code == 403


def test_check_endpoint(client, catalog, customer_headers):
    order = delivered_order(client, catalog, customer_headers)
    url = f"/api/reviews/check?productId={catalog['chicken']}&orderId={order['id']}"

    body = client.get(url, headers=customer_headers).get_json()
    assert body["exists"] is False
    assert body["review"] is None

    post_review(client, customer_headers, catalog["chicken"], order["id"], rating=3)
    body = client.get(url, headers=customer_headers).get_json()
    assert body["exists"] is True
    assert body["review"]["rating"] == 3

    assert client.get("/api/reviews/check?productId=1", headers=customer_headers).status_code == 400


def test_update_recomputes_rating(client, catalog, customer_headers):
    order = delivered_order(client, catalog, customer_headers)
    review_id = post_review(client, customer_headers, catalog["chicken"], order["id"], rating=2).get_json()["data"]["id"]

    response = client.put(f"/api/reviews/{review_id}", json={"rating": 5}, headers=customer_headers)

    assert response.status_code == 200
    assert response.get_json()["data"]["comment"] == "Segar dan bersih"
    assert product_rating(client, catalog["chicken"]) == (5.0, 1)


def test_only_the_author_can_update(client, catalog, customer_headers):
    order = delivered_order(client, catalog, customer_headers)
    review_id = post_review(client, customer_headers, catalog["chicken"], order["id"]).get_json()["data"]["id"]
    other = make_customer(name="Budi", email="budi@example.com")
    other_headers = {"Authorization": f"Bearer {issue_token(other.id, CUSTOMER)}"}

    response = client.put(f"/api/reviews/{review_id}", json={"rating": 1}, headers=other_headers)

    assert response.status_code == 404
    assert db.session.get(ProductReview, review_id).rating == 5


def test_delete_resets_rating_when_last_review_goes(client, catalog, customer_headers, admin_headers):
    order = delivered_order(client, catalog, customer_headers)
    review_id = post_review(client, customer_headers, catalog["chicken"], order["id"]).get_json()["data"]["id"]

    assert client.delete(f"/api/reviews/{review_id}", headers=customer_headers).status_code == 403
    assert client.delete(f"/api/reviews/{review_id}", headers=admin_headers).status_code == 200

    assert product_rating(client, catalog["chicken"]) == (0.0, 0)
    assert client.delete(f"/api/reviews/{review_id}", headers=admin_headers).status_code == 404


def test_recompute_failure_does_not_fail_the_write(client, catalog, customer_headers, monkeypatch):
    from services import rating

    def broken(total, count):
        raise ArithmeticError("boom")

    monkeypatch.setattr(rating, "average_rating", broken)
    order = delivered_order(client, catalog, customer_headers)

    response = post_review(client, customer_headers, catalog["chicken"], order["id"])

    assert response.status_code == 201
    assert ProductReview.query.count() == 1
    product = db.session.get(Products, catalog["chicken"])
    assert (product.rating, product.review_count) == (0.0, 0)


def test_public_product_reviews(client, catalog, customer_headers):
    for rating in (3, 5):
        order = delivered_order(client, catalog, customer_headers)
        post_review(client, customer_headers, catalog["chicken"], order["id"], rating=rating)

    data = client.get(f"/api/reviews/product/{catalog['chicken']}?limit=1").get_json()["data"]

    assert len(data["reviews"]) == 1
    assert data["pagination"]["total"] == 2


def test_admin_review_listing(client, catalog, customer, customer_headers, admin_headers):
    order = delivered_order(client, catalog, customer_headers)
    post_review(client, customer_headers, catalog["chicken"], order["id"])
    manual = ProductReview(product_id=catalog["eggs"], customer_id=customer.id, order_id=order["id"],
                           customer_name="Siti Aminah", rating=3, comment="Lumayan", date="2024-01-15",
                           verified=False)
    db.session.add(manual)
    db.session.commit()

    data = client.get("/api/admin/reviews?status=unverified", headers=admin_headers).get_json()["data"]
    assert [r["id"] for r in data["reviews"]] == [manual.id]
    assert data["reviews"][0]["productName"] == "Telur Ayam Negeri"
    assert data["reviews"][0]["orderNumber"] == order["orderNumber"]

    assert client.patch(f"/api/reviews/{manual.id}/verify", headers=admin_headers).status_code == 200
    data = client.get("/api/admin/reviews?status=verified", headers=admin_headers).get_json()["data"]
    assert data["pagination"]["total"] == 2

    by_customer = client.get(f"/api/reviews/customer/{customer.id}", headers=admin_headers).get_json()["data"]
    assert by_customer["pagination"]["total"] == 2
