"""
Shared fixtures: an app on in-memory SQLite with a fixed "today".

2026-10-19 is a Monday, which the date tests rely on.
"""

from datetime import date

import pytest

from app import create_app
from database import db
from models import User
from auth import hash_password

TODAY = date(2026, 10, 19)

ADMIN_EMAIL = "admin@sfc.test"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "ASSISTANT_CLOCK": lambda: TODAY,
        "ADMIN_EMAIL": ADMIN_EMAIL,
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
        "ADMIN_NAME": "Admin",
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


def make_user(name="Priya", email="priya@sfc.test", role="user"):
    user = User(name=name, email=email, phone="9876543210", password=hash_password("secret"), role=role)
    db.session.add(user)
    db.session.commit()
    return user


def signup(client, name="Priya", email="priya@sfc.test", password="secret"):
    resp = client.post("/auth/signup", json={
        "name": name, "email": email, "phone": "9876543210", "password": password,
    })
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_token(client):
    return signup(client)["token"]


@pytest.fixture
def admin_token(client):
    resp = client.post("/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return resp.get_json()["token"]
