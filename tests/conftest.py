"""Pytest fixtures: an isolated app on in-memory SQLite plus a small catalog."""

import pytest

from core.auth import ADMIN, CUSTOMER, issue_token
from core.config import TestConfig
from core.extensions import db, bcrypt
from main import create_app
from models.orderModels import Order
from models.productModels import Category, Products, ProductVariant
from models.userModel import Admins, Customers
from services.mailer import Mailer
from services.notifier import Notifier


class RecordingMailer(Mailer):
    """Renders messages like the real mailer but keeps them instead of sending."""

    def __init__(self):
        self.sent = []

    def send(self, to, subject, html, text=None):
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})
        return True


class RecordingNotifier(Notifier):
    def __init__(self):
        self.calls = []

    def notify_admin(self, type_, title, message, related_id=None):
        self.calls.append(("admin", type_, related_id))
        return super().notify_admin(type_, title, message, related_id)

    def notify_customer(self, customer_id, type_, title, message, related_id=None):
        self.calls.append(("customer", type_, related_id))
        return super().notify_customer(customer_id, type_, title, message, related_id)


class BrokenNotifier(Notifier):
    def notify_admin(self, *args, **kwargs):
        raise RuntimeError("notification store unavailable")

    def notify_customer(self, *args, **kwargs):
        raise RuntimeError("notification store unavailable")


class BrokenMailer(Mailer):
    def send(self, *args, **kwargs):
        raise RuntimeError("smtp down")


@pytest.fixture
def app():
    app = create_app(TestConfig)
    app.extensions["storefront_notifier"] = RecordingNotifier()
    app.extensions["storefront_mailer"] = RecordingMailer()
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def notifier(app):
    return app.extensions["storefront_notifier"]


@pytest.fixture
def mailer(app):
    return app.extensions["storefront_mailer"]


@pytest.fixture
def catalog(app):
    category = Category(name="Unggas")
    db.session.add(category)
    db.session.flush()

    chicken = Products(name="Ayam Kampung Utuh", slug="ayam-kampung", base_price=15300,
                       category_id=category.id, image_url="/uploads/ayam.jpg")
    chicken.variants = [ProductVariant(sku="AYAM-800", weight="800 gr", price=15300, original_price=17000)]
    eggs = Products(name="Telur Ayam Negeri", slug="telur", base_price=8500, category_id=category.id)
    eggs.variants = [ProductVariant(sku="TELUR-10", weight="10 butir", price=8500)]
    db.session.add_all([chicken, eggs])
    db.session.commit()

    return {
        "chicken": chicken.id,
        "chicken_variant": chicken.variants[0].id,
        "eggs": eggs.id,
        "eggs_variant": eggs.variants[0].id,
    }


def make_customer(name="Siti Aminah", email="siti@example.com", password="rahasia123"):
    customer = Customers(
        name=name,
        email=email,
        password=bcrypt.generate_password_hash(password).decode("utf-8") if password else None,
        whatsapp="081234567890",
    )
    db.session.add(customer)
    db.session.commit()
    return customer


@pytest.fixture
def customer(app):
    return make_customer()


@pytest.fixture
def customer_headers(customer):
    return {"Authorization": f"Bearer {issue_token(customer.id, CUSTOMER)}"}


@pytest.fixture
def admin(app):
    admin = Admins(username="admin", email="admin@pasarantar.com",
                   password=bcrypt.generate_password_hash("admin123").decode("utf-8"))
    db.session.add(admin)
    db.session.commit()
    return admin


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {issue_token(admin.id, ADMIN)}"}


def order_payload(catalog, **overrides):
    payload = {
        "customerName": "Siti Aminah",
        "customerWhatsapp": "081234567890",
        "customerAddress": "Jl. Melati No. 5, Bandung",
        "shippingMethod": "express",
        "deliveryDay": "kamis",
        "paymentMethod": "transfer",
        "items": [
            {"productId": catalog["chicken"], "productVariantId": catalog["chicken_variant"], "quantity": 2},
            {"productId": catalog["eggs"], "productVariantId": catalog["eggs_variant"], "quantity": 1},
        ],
    }
    payload.update(overrides)
    return payload


def place_order(client, catalog, headers=None, **overrides):
    response = client.post("/api/orders", json=order_payload(catalog, **overrides), headers=headers or {})
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


def set_status(order_id, status):
    order = db.session.get(Order, order_id)
    order.status = status
    db.session.commit()
    return order
