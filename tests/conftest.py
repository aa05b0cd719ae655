"""
Shared fixtures: an in-memory Mongo database and user/donor factories.
"""
import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("ADMIN_PASS", "admin-pass")
os.environ.setdefault("ADMIN_NAME", "Site Admin")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from database import get_db
from models import User, Donor, UserRole
from services.auth import Identity, hash_password


@pytest.fixture
def db():
    return AsyncMongoMockClient()["blood_donation_test"]


@pytest.fixture
def make_user(db):
    """Insert a user (plus donor profile for donors) and return (doc, identity)."""
    counter = {"n": 0}

    async def _make(role="user", blood_type="O+", region="North", full_name=None, phone=None, **donor_fields):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            full_name=full_name or f"{role.title()} {n}",
            email=f"{role}{n}@example.com",
            phone=phone or f"555-000{n}",
            password_hash=hash_password("secret"),
            role=role,
            blood_type=blood_type,
            region=region,
        )
        doc = user.model_dump(mode="json")
        await db.users.insert_one(dict(doc))
        if role == UserRole.DONOR.value:
            await db.donors.insert_one(Donor(user_id=user.id, **donor_fields).model_dump(mode="json"))
        return doc, Identity(id=user.id, role=role)

    return _make


@pytest.fixture
def client(db):
    from server import app
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
