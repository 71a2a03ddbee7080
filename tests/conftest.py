"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from app import create_app
from config import TestConfig
from extensions import db


@pytest.fixture
def app():
    """Fresh application backed by an in-memory SQLite database."""
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def anon_client(app):
    return app.test_client()


@pytest.fixture
def client(app):
    """Test client logged in as a freshly registered user."""
    client = app.test_client()
    resp = client.post("/auth/register", data={
        "email": "budi@example.com",
        "password": "rahasia",
        "full_name": "Budi",
    })
    assert resp.status_code == 201
    return client


def make_account(client, name="BCA", type="bank", balance=1000):
    resp = client.post("/actions/accounts/create", data={"name": name, "type": type, "balance": str(balance)})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["account"]["id"]


def make_category(client, name="Groceries", type="expense"):
    resp = client.post("/actions/categories/create", data={"name": name, "type": type})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["category"]["id"]


def make_transaction(client, amount, category_id, account_id, when=None, description="Test"):
    resp = client.post("/actions/transactions/create", data={
        "amount": str(amount),
        "description": description,
        "date": (when or date.today()).isoformat(),
        "category_id": str(category_id),
        "account_id": str(account_id),
    })
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["transaction"]["id"]


def balance_of(client, account_id):
    accounts = client.get("/accounts").get_json()["accounts"]
    return next(a["balance"] for a in accounts if a["id"] == account_id)
