"""
Tests for client account settings, the provider catalog and API keys
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from voicecrm.core.jwt_auth import create_user_token
from voicecrm.db.models import ApiKey

OPENAI_KEY = "sk-test-1234567890abcd"


def mock_key_check(mock_cls, status_code=200, error=None):
    """Patched httpx.AsyncClient whose get answers with the given status"""
    client = MagicMock()
    client.get = AsyncMock(return_value=MagicMock(status_code=status_code), side_effect=error)
    mock_cls.return_value.__aenter__ = AsyncMock(return_value=client)
    mock_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    return client


class TestClientAccount:

    def test_get_account(self, test_client, client_account, client_headers):
        response = test_client.get("/api/v1/client/", headers=client_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["_id"] == client_account.id
        assert data["settings"] == {}
        assert "password" not in data

    def test_update_merges_settings(self, test_client, db_session, client_account, client_headers):
        client_account.settings = {"timezone": "Asia/Kolkata", "theme": "light"}
        db_session.commit()

        response = test_client.put(
            "/api/v1/client/",
            json={"name": "Acme Voice", "email": "Ops@Acme.test", "settings": {"theme": "dark"}},
            headers=client_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Client information updated successfully"
        assert body["data"]["name"] == "Acme Voice"
        assert body["data"]["email"] == "ops@acme.test"
        assert body["data"]["settings"] == {"timezone": "Asia/Kolkata", "theme": "dark"}

    def test_update_leaves_omitted_fields(self, test_client, client_account, client_headers):
        response = test_client.put("/api/v1/client/", json={"name": "Renamed"}, headers=client_headers)

        data = response.json()["data"]
        assert data["name"] == "Renamed"
        assert data["email"] == "owner@acme.test"

    def test_email_taken_by_another_client(self, test_client, make_client, client_account, client_headers):
        make_client(email="taken@acme.test")

        response = test_client.put("/api/v1/client/", json={"email": "taken@acme.test"}, headers=client_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Email already registered"

    @pytest.mark.parametrize("body,message", [
        ({"email": "  "}, "Email cannot be empty"),
        ({"settings": ["dark"]}, "settings must be an object"),
    ])
    def test_invalid_updates(self, test_client, client_account, client_headers, body, message):
        response = test_client.put("/api/v1/client/", json=body, headers=client_headers)

        assert response.status_code == 400
        assert response.json()["message"] == message

    def test_deleted_client_not_found(self, test_client):
        headers = {"Authorization": f"Bearer {create_user_token('gone', 'client')}"}
        assert test_client.get("/api/v1/client/", headers=headers).status_code == 404


class TestProviders:

    def test_catalog_without_token(self, test_client):
        response = test_client.get("/api/v1/client/providers")

        assert response.status_code == 200
        catalog = {entry["provider"]: entry for entry in response.json()["data"]}
        assert catalog["openai"]["categories"] == ["tts", "llm"]
        assert catalog["openai"]["supportsKeyCheck"] is True
        assert catalog["sarvam"]["supportsKeyCheck"] is False
        assert catalog["twilio"]["categories"] == ["telephony"]
        assert len(catalog) == len(response.json()["data"])


class TestApiKeys:

    def test_save_masks_key(self, test_client, client_account, client_headers):
        response = test_client.post(
            "/api/v1/client/api-keys/openai",
            json={"key": OPENAI_KEY, "configuration": {"model": "gpt-4o"}},
            headers=client_headers
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["maskedKey"] == "****abcd"
        assert data["configuration"] == {"model": "gpt-4o"}
        assert data["isActive"] is True
        assert OPENAI_KEY not in response.text

    def test_save_again_replaces(self, test_client, db_session, client_account, client_headers):
        test_client.post("/api/v1/client/api-keys/openai", json={"key": OPENAI_KEY}, headers=client_headers)
        test_client.post("/api/v1/client/api-keys/OpenAI", json={"key": "sk-second-key-9999"}, headers=client_headers)

        listed = test_client.get("/api/v1/client/api-keys", headers=client_headers).json()["data"]

        assert len(listed) == 1
        assert listed[0]["maskedKey"] == "****9999"
        assert db_session.query(ApiKey).one().key == "sk-second-key-9999"

    def test_unknown_provider(self, test_client, client_account, client_headers):
        response = test_client.post("/api/v1/client/api-keys/acme-ai", json={"key": OPENAI_KEY}, headers=client_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Unsupported provider: acme-ai"
        assert "openai" in body["allowedProviders"]

    def test_blank_key(self, test_client, client_account, client_headers):
        response = test_client.post("/api/v1/client/api-keys/openai", json={"key": "   "}, headers=client_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "API key is required"

    def test_delete(self, test_client, client_account, client_headers):
        test_client.post("/api/v1/client/api-keys/openai", json={"key": OPENAI_KEY}, headers=client_headers)

        first = test_client.delete("/api/v1/client/api-keys/openai", headers=client_headers)
        second = test_client.delete("/api/v1/client/api-keys/openai", headers=client_headers)

        assert first.status_code == 200
        assert first.json()["message"] == "API key deleted successfully"
        assert second.status_code == 404
        assert second.json()["message"] == "No API key stored for openai"

    def test_keys_scoped_to_client(self, test_client, make_client, client_account, client_headers):
        other = make_client(email="other@acme.test")
        other_headers = {"Authorization": f"Bearer {create_user_token(other.id, 'client')}"}
        test_client.post("/api/v1/client/api-keys/openai", json={"key": OPENAI_KEY}, headers=client_headers)

        assert test_client.get("/api/v1/client/api-keys", headers=other_headers).json()["data"] == []
        assert test_client.delete("/api/v1/client/api-keys/openai", headers=other_headers).status_code == 404

    def test_requires_client_token(self, test_client, admin_headers):
        response = test_client.get("/api/v1/client/api-keys", headers=admin_headers)
        assert response.status_code == 401


class TestApiKeyCheck:

    def test_valid_key_in_body(self, test_client, client_account, client_headers):
        with patch("voicecrm.services.api_key_service.httpx.AsyncClient") as mock_cls:
            client = mock_key_check(mock_cls, status_code=200)
            response = test_client.post(
                "/api/v1/client/api-keys/openai/test", json={"key": OPENAI_KEY}, headers=client_headers
            )

        data = response.json()["data"]
        assert data["valid"] is True
        assert data["message"] == "API key is valid"
        args, kwargs = client.get.call_args
        assert args[0] == "https://api.openai.com/v1/models"
        assert kwargs["headers"] == {"Authorization": f"Bearer {OPENAI_KEY}"}

    def test_stored_key_outcome_recorded(self, test_client, client_account, client_headers):
        test_client.post("/api/v1/client/api-keys/anthropic", json={"key": "sk-ant-stored-0001"}, headers=client_headers)

        with patch("voicecrm.services.api_key_service.httpx.AsyncClient") as mock_cls:
            client = mock_key_check(mock_cls, status_code=401)
            response = test_client.post("/api/v1/client/api-keys/anthropic/test", headers=client_headers)

        data = response.json()["data"]
        assert data["valid"] is False
        assert data["message"] == "anthropic rejected the key (401)"
        assert client.get.call_args.kwargs["headers"]["x-api-key"] == "sk-ant-stored-0001"

        stored = test_client.get("/api/v1/client/api-keys", headers=client_headers).json()["data"][0]
        assert stored["lastTestOk"] is False
        assert stored["lastTestedAt"] is not None

    def test_nothing_stored(self, test_client, client_account, client_headers):
        response = test_client.post("/api/v1/client/api-keys/openai/test", headers=client_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "API key is required"

    def test_provider_without_live_check(self, test_client, client_account, client_headers):
        with patch("voicecrm.services.api_key_service.httpx.AsyncClient") as mock_cls:
            response = test_client.post(
                "/api/v1/client/api-keys/sarvam/test", json={"key": "sarvam-key-1234"}, headers=client_headers
            )

        assert response.json()["data"]["valid"] is None
        mock_cls.assert_not_called()

    def test_provider_unreachable(self, test_client, client_account, client_headers):
        with patch("voicecrm.services.api_key_service.httpx.AsyncClient") as mock_cls:
            mock_key_check(mock_cls, error=httpx.ConnectError("connection refused"))
            response = test_client.post(
                "/api/v1/client/api-keys/deepgram/test", json={"key": "dg-key-12345678"}, headers=client_headers
            )

        assert response.status_code == 500
        assert response.json()["error"] == "DEEPGRAM_ERROR"
