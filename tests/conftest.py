import os
import tempfile

import pytest

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="campus-trader-logs-"))

from app import create_app  # noqa: E402
from database_init import db  # noqa: E402
from models.product import Product  # noqa: E402
from service import order_service, user_service  # noqa: E402
from util.constant import ROLE  # noqa: E402
from util.misc import make_slug  # noqa: E402

PASSWORD = "password123"


@pytest.fixture
def app():
    app = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "WTF_CSRF_ENABLED": False,
            "SESSION_COOKIE_SECURE": False,
        }
    )
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """App context cho các test gọi thẳng service."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_customer():
    def _make(email="customer@campus.edu", name="Casey Customer"):
        return user_service.create_user(
            name=name,
            email=email,
            password=PASSWORD,
            role=ROLE.CUSTOMER,
            address="1 College Ave",
            phone_no="5550001",
        )

    return _make


@pytest.fixture
def make_admin():
    def _make(email="admin@campus.edu"):
        return user_service.create_user(
            name="Ada Admin", email=email, password=PASSWORD, role=ROLE.ADMIN
        )

    return _make


@pytest.fixture
def make_seller():
    def _make(email="seller@campus.edu", name="Sam Seller", approved=True):
        return user_service.create_seller(
            name=name,
            email=email,
            password=PASSWORD,
            seller_type="Student",
            address="2 Dorm Rd",
            phone_no="5550002",
            approved=approved,
        )

    return _make


@pytest.fixture
def make_product():
    def _make(seller, name="Calculus Textbook", price=30.0, quantity=5, approved=True,
              category=None):
        product = Product(
            name=name,
            description=f"{name} for sale",
            image="https://img.example/p.jpg",
            price=price,
            commission=1.5,
            quantity=quantity,
            category=category or ["Books"],
            approved=approved,
            slug=make_slug(name),
            seller_id=seller.id,
        )
        db.session.add(product)
        db.session.commit()
        return product

    return _make


@pytest.fixture
def make_order():
    def _make(customer, products, quantity=1):
        return order_service.create_order(
            customer,
            items=[{"productId": p.id, "quantity": quantity} for p in products],
            order_type="DELIVERY",
            payment_method="CASH",
            address="1 College Ave",
        )

    return _make


@pytest.fixture
def login(client):
    def _login(email, password=PASSWORD, **extra):
        data = {"email": email, "password": password}
        data.update(extra)
        return client.post("/login", data=data)

    return _login
