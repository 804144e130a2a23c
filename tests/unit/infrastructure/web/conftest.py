"""
Fixtures for API tests: the real application on an in-memory SQLite
database, with Firebase, Stripe and R2 replaced by in-process fakes.
"""

import dataclasses
import json
from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.domain.models.base import ValidationError
from app.domain.services.gateways import (
    FileStorage,
    IdentityProvider,
    PaymentGateway,
    PaymentIntent,
    StoredObject,
    VerifiedIdentity,
)
from app.infrastructure.auth.dependencies import get_identity_provider
from app.infrastructure.db.database import Database, get_db
from app.infrastructure.web.dependencies import get_app_settings, get_file_storage, get_payment_gateway
from app.main import create_application


WEBHOOK_SIGNATURE = "valid-signature"


class FakeIdentityProvider(IdentityProvider):
    """Accepts only the tokens it has been told about."""

    def __init__(self):
        self.identities: Dict[str, VerifiedIdentity] = {}
        self.reset_requests = []

    def add(self, token: str, uid: str, email: Optional[str]) -> None:
        self.identities[token] = VerifiedIdentity(uid=uid, email=email, claims={"uid": uid})

    def verify_token(self, token: str) -> VerifiedIdentity:
        if token not in self.identities:
            raise ValidationError("Invalid or expired token")
        return self.identities[token]

    def generate_password_reset_link(self, email: str) -> str:
        self.reset_requests.append(email)
        return f"https://example.com/reset?email={email}"

    def create_custom_token(self, uid: str) -> str:
        return f"custom-{uid}"


class FakePaymentGateway(PaymentGateway):
    """Payment intents kept in a dict; tests move them between statuses."""

    signature = WEBHOOK_SIGNATURE

    def __init__(self):
        self.intents: Dict[str, PaymentIntent] = {}
        self.refunds = []

    def create_payment_intent(self, amount: int, currency: str,
                              metadata: Optional[Dict[str, Any]] = None) -> PaymentIntent:
        intent_id = f"pi_test_{len(self.intents) + 1}"
        intent = PaymentIntent(
            id=intent_id,
            amount=amount,
            currency=currency,
            status="requires_payment_method",
            client_secret=f"{intent_id}_secret",
            metadata=dict(metadata or {}),
        )
        self.intents[intent_id] = intent
        return intent

    def set_status(self, intent_id: str, status: str, amount: Optional[int] = None) -> None:
        changes = {"status": status}
        if amount is not None:
            changes["amount"] = amount
        self.intents[intent_id] = dataclasses.replace(self.intents[intent_id], **changes)

    def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        return self.intents[intent_id]

    def refund(self, intent_id: str, amount: Optional[int] = None) -> Dict[str, Any]:
        self.refunds.append((intent_id, amount))
        return {"id": f"re_{intent_id}", "amount": amount or self.intents[intent_id].amount}

    def construct_event(self, payload: bytes, signature: str) -> Dict[str, Any]:
        if signature != WEBHOOK_SIGNATURE:
            raise ValidationError("Invalid webhook signature")
        return json.loads(payload)


class FakeFileStorage(FileStorage):

    def __init__(self):
        self.objects: Dict[str, StoredObject] = {}
        self.deleted = []

    def generate_upload_url(self, key: str, content_type: str, expires_in: int) -> str:
        return f"https://uploads.example.com/{key}?expires={expires_in}"

    def head_object(self, key: str) -> Optional[StoredObject]:
        return self.objects.get(key)

    def delete_object(self, key: str) -> None:
        self.deleted.append(key)
        self.objects.pop(key, None)

    def public_url(self, key: str) -> str:
        return f"https://files.example.com/{key}"


class ApiClient:
    """TestClient wrapper that knows how to sign users in."""

    def __init__(self, client: TestClient, identity_provider: FakeIdentityProvider,
                 payment_gateway: FakePaymentGateway, storage: FakeFileStorage):
        self.client = client
        self.identity_provider = identity_provider
        self.payment_gateway = payment_gateway
        self.storage = storage

    def headers_for(self, name: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer token-{name}"}

    def sign_up(self, name: str) -> Dict[str, str]:
        """Register a Firebase identity and sync it; returns auth headers."""
        self.identity_provider.add(f"token-{name}", f"firebase-{name}", f"{name}@example.com")
        headers = self.headers_for(name)
        response = self.client.post("/api/auth/sync", headers=headers)
        assert response.status_code == 200, response.text
        return headers

    def create_company(self, name: str = "acme") -> Dict[str, str]:
        headers = self.sign_up(name)
        response = self.client.post("/api/company/profile", headers=headers, json={
            "name": f"{name.title()} Inc",
            "country": "United States",
            "industry": "Software",
        })
        assert response.status_code == 201, response.text
        return headers

    def create_va(self, name: str = "maria", **overrides) -> Dict[str, Any]:
        """Returns the auth headers and the created profile."""
        headers = self.sign_up(name)
        body = {
            "name": name.title(),
            "country": "Philippines",
            "hourlyRate": 12,
            "skills": ["Customer Support", "Data Entry"],
            "bio": "Experienced virtual assistant.",
        }
        body.update(overrides)
        response = self.client.post("/api/va/profile", headers=headers, json=body)
        assert response.status_code == 201, response.text
        return {"headers": headers, "profile": response.json()["data"]}

    def create_job(self, headers: Dict[str, str], title: str = "Customer support assistant") -> Dict[str, Any]:
        response = self.client.post("/api/jobs/marketplace", headers=headers, json={
            "title": title,
            "description": "Answer customer emails and keep the help desk tidy.",
            "rateRange": "$10-15/hr",
            "skillsRequired": ["Customer Support"],
        })
        assert response.status_code == 201, response.text
        return response.json()["data"]

    def vote(self, headers: Dict[str, str], job_id: int, va_profile_id: Optional[int] = None,
             vote: bool = True):
        body = {"jobPostingId": job_id, "vote": vote}
        if va_profile_id is not None:
            body["vaProfileId"] = va_profile_id
        return self.client.post("/api/matches/vote", headers=headers, json=body)


@pytest.fixture
def settings():
    return Settings(
        environment="testing",
        database_url="sqlite://",
        firebase_project_id="blytzwork-test",
        stripe_secret_key="sk_test_123",
        rate_limit_enabled=False,
        payment_amount=29.99,
        payment_currency="usd",
        platform_fee_percentage=10,
    )


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_tables()
    yield database
    database.drop_tables()
    database.dispose()


@pytest.fixture
def api(settings, database):
    identity_provider = FakeIdentityProvider()
    payment_gateway = FakePaymentGateway()
    storage = FakeFileStorage()

    def override_get_db():
        session = database.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app = create_application(settings)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_payment_gateway] = lambda: payment_gateway
    app.dependency_overrides[get_file_storage] = lambda: storage
    app.dependency_overrides[get_app_settings] = lambda: settings

    with TestClient(app) as client:
        yield ApiClient(client, identity_provider, payment_gateway, storage)
