"""
Pytest configuration and fixtures
"""

import os
import pytest
from unittest.mock import MagicMock

# Set test environment variables before importing app modules
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SUPERADMIN_SECRET", "test-superadmin-secret")
os.environ.setdefault("SARVAM_API_KEY", "test-sarvam-key")
os.environ.setdefault("BOT_API_URL", "https://bot.example.test/message")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-google-client-id")
os.environ.setdefault("S3_BUCKET_NAME", "test-bucket")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from voicecrm.core.jwt_auth import create_user_token
from voicecrm.core.security import hash_password
from voicecrm.db import get_db
from voicecrm.db.base import create_db_engine
from voicecrm.db.models import Admin, Base, Client, HumanAgent


@pytest.fixture
def db_session():
    """Fresh in-memory database per test"""
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def mock_storage():
    """Fixture for mocked S3 storage service"""
    storage = MagicMock()
    storage.put_object_url.return_value = "https://signed.example.test/put"
    storage.get_object_url.return_value = "https://signed.example.test/get"
    return storage


@pytest.fixture
def mock_google_verifier():
    """Fixture for mocked Google token verifier"""
    verifier = MagicMock()
    verifier.verify.return_value = {
        "email": "owner@acme.test",
        "name": "Acme Owner",
        "picture": "https://pictures.example.test/owner.png",
        "emailVerified": True,
        "googleId": "google-sub-1",
    }
    return verifier


@pytest.fixture
def test_client(db_session, mock_storage, mock_google_verifier):
    """Fixture for test client bound to the per-test database"""
    from voicecrm.main import app
    from voicecrm.services import get_google_verifier, get_storage_service

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_service] = lambda: mock_storage
    app.dependency_overrides[get_google_verifier] = lambda: mock_google_verifier

    yield TestClient(app)

    app.dependency_overrides.clear()


# ============================================
# FACTORIES
# ============================================

@pytest.fixture
def make_client(db_session):
    """Factory for persisted clients"""
    counter = {"n": 0}

    def _make(
        email=None,
        password="secret123",
        approved=True,
        completed=True,
        **fields
    ) -> Client:
        counter["n"] += 1
        client = Client(
            name=fields.pop("name", f"Client {counter['n']}"),
            email=email or f"client{counter['n']}@acme.test",
            password=hash_password(password) if password else "",
            is_approved=approved,
            isprofile_completed=completed,
            **fields
        )
        db_session.add(client)
        db_session.commit()
        db_session.refresh(client)
        return client

    return _make


@pytest.fixture
def make_admin(db_session):
    """Factory for persisted admins and superadmins"""
    def _make(email="admin@voicecrm.test", password="adminpass", role="admin") -> Admin:
        admin = Admin(name="Ops", email=email, password=hash_password(password), role=role)
        db_session.add(admin)
        db_session.commit()
        db_session.refresh(admin)
        return admin

    return _make


@pytest.fixture
def make_human_agent(db_session):
    def _make(client: Client, email="agent@acme.test", approved=True, name="Asha") -> HumanAgent:
        human_agent = HumanAgent(
            client_id=client.id,
            human_agent_name=name,
            email=email,
            mobile_number="+919800000000",
            did="080-1000",
            is_approved=approved,
            isprofile_completed=True
        )
        db_session.add(human_agent)
        db_session.commit()
        db_session.refresh(human_agent)
        return human_agent

    return _make


@pytest.fixture
def client_account(make_client):
    return make_client(email="owner@acme.test")


@pytest.fixture
def client_headers(client_account):
    """Bearer headers for the default client"""
    token = create_user_token(client_account.id, "client")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(make_admin):
    admin = make_admin()
    return {"Authorization": f"Bearer {create_user_token(admin.id, 'admin', email=admin.email)}"}


@pytest.fixture
def superadmin_headers(make_admin):
    admin = make_admin(email="root@voicecrm.test", role="superadmin")
    return {"Authorization": f"Bearer {create_user_token(admin.id, 'superadmin', email=admin.email)}"}


@pytest.fixture
def sample_agent_request():
    """Sample agent create body"""
    return {
        "agentName": "Reception Bot",
        "description": "Answers inbound calls",
        "systemPrompt": "You are a polite receptionist.",
        "personality": "friendly",
        "voiceSelection": "anushka",
        "startingMessages": [
            {"text": "Hello, thanks for calling!", "audioBase64": "SGVsbG8="},
            {"text": "Namaste!", "audioBase64": None},
        ],
        "defaultStartingMessageIndex": 0,
    }


@pytest.fixture
def sample_profile_request():
    """Complete profile body"""
    return {
        "businessName": "Acme Tours",
        "businessType": "Travel",
        "contactNumber": "+919811111111",
        "contactName": "Ravi",
        "pincode": "560001",
        "city": "Bengaluru",
        "state": "Karnataka",
        "pancard": "ABCDE1234F",
        "gst": "29ABCDE1234F1Z5",
    }
