"""
Shared fixtures. Every test runs against the in-memory LocalStore and the
local identity service, so no Firebase project or network is needed.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.dependencies import Clients
from app.main import create_app
from app.services.local_identity import LocalIdentityService
from app.services.local_store import LocalStore


SIGNUP_PAYLOAD: Dict[str, Any] = {
    "contractCode": "gym-0001",
    "firstName": "A",
    "lastName": "B",
    "dateOfBirth": "1990-01-01",
    "trainingFrequency": "3-4/week",
    "email": "a@b.com",
    "password": "secret1",
    "confirmPassword": "secret1",
}


@pytest.fixture
def settings() -> Settings:
    settings = Settings()
    settings.local_mode = True
    settings.secret_key = "test-secret"
    settings.cors_origins = ["*"]
    return settings


@pytest.fixture
def store() -> LocalStore:
    return LocalStore()


@pytest.fixture
def identity(store, settings) -> LocalIdentityService:
    return LocalIdentityService(store, settings)


@pytest.fixture
def clients(store, identity) -> Clients:
    return Clients(db=store, identity=identity, credentials=identity)


@pytest.fixture
def app(settings, clients):
    return create_app(settings=settings, clients=clients)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seed_code(store):
    """Insert a contract code document."""

    def _seed(
        code: str = "GYM-0001",
        status: Optional[str] = "ACTIVE",
        plan_id: Optional[str] = "pro",
        expires_at: Optional[Any] = None,
    ) -> str:
        data: Dict[str, Any] = {"planId": plan_id}
        if status is not None:
            data["status"] = status
        if expires_at is not None:
            data["expiresAt"] = expires_at
        store.collection("contractCodes").document(code).set(data)
        return code

    return _seed


@pytest.fixture
def member(client, seed_code, store):
    """Sign up the example member and return ``(uid, token)``."""
    seed_code()
    response = client.post("/api/auth/signup", json=SIGNUP_PAYLOAD)
    assert response.status_code == 201
    uid = next(iter(store.collections["users"]))
    return uid, response.json()["token"]


def code_doc(store: LocalStore, code: str = "GYM-0001") -> Dict[str, Any]:
    return store.collection("contractCodes").document(code).get().to_dict()


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)
