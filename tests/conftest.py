import hashlib
import hmac
import json
import time

import pytest
from renda_shop import create_app
from renda_shop.models import db, create_tables
from renda_shop.product_service import fetch_and_cache_products

WEBHOOK_SECRET = "whsec_test_secret"


@pytest.fixture
def app(tmp_path):
    app = create_app()
    app.config.update(
        DATABASE = str(tmp_path / "test.db"),
        TESTING = True,
        CATALOG_URL = None,
        DOMAIN = "https://shop.example",
        STRIPE_SECRET_KEY = "sk_test_123",
        STRIPE_PUBLISHABLE_KEY = "pk_test_123",
        STRIPE_WEBHOOK_SECRET = WEBHOOK_SECRET,
        STRIPE_SHIPPING_RATE_ID = None,
        ALLOWED_COUNTRIES = ["US", "CA"],
    )
    db.init(app.config["DATABASE"])
    with app.app_context():
        create_tables()
        fetch_and_cache_products()
        yield app
    db.close()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def stripe_sessions(monkeypatch):
    """Remplace `stripe.checkout.Session.create` ; retourne la liste des appels."""
    import stripe

    calls = []

    def fake_create(**kwargs):
        calls.append(kwargs)
        return {"id": f"cs_test_{len(calls)}"}

    monkeypatch.setattr(stripe.checkout.Session, "create", fake_create)
    return calls


def _sign(payload, secret, timestamp):
    signed = f"{timestamp}.".encode() + payload
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


@pytest.fixture
def signed_event():
    """Construit un événement Stripe et son en-tête `Stripe-Signature`."""

    def build(event_type, obj=None, secret=WEBHOOK_SECRET, timestamp=None):
        body = json.dumps({
            "id": "evt_test_1",
            "object": "event",
            "type": event_type,
            "data": {"object": obj or {"id": "cs_test_42", "object": "checkout.session"}},
        }).encode()
        timestamp = int(time.time()) if timestamp is None else timestamp
        return body, _sign(body, secret, timestamp)

    return build
