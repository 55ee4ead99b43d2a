"""
Tests for agent configuration endpoints
"""

import pytest

from voicecrm.db.models import Agent

AGENTS_URL = "/api/v1/client/agents"


class TestAgentCreate:

    def test_create_uses_default_message(self, test_client, db_session, client_headers, sample_agent_request):
        response = test_client.post(AGENTS_URL, json=sample_agent_request, headers=client_headers)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["firstMessage"] == "Hello, thanks for calling!"
        assert data["audioMetadata"]["size"] == 6
        assert "audioBytes" not in data

        agent = db_session.query(Agent).one()
        assert agent.audio_bytes == "SGVsbG8="

    def test_second_message_without_audio(self, test_client, client_headers, sample_agent_request):
        response = test_client.post(
            AGENTS_URL,
            json={**sample_agent_request, "defaultStartingMessageIndex": 1},
            headers=client_headers
        )
        assert response.json()["data"]["firstMessage"] == "Namaste!"

    def test_starting_messages_required(self, test_client, client_headers, sample_agent_request):
        response = test_client.post(
            AGENTS_URL,
            json={**sample_agent_request, "startingMessages": []},
            headers=client_headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == "At least one starting message is required."

    @pytest.mark.parametrize("index", [2, -1, "0", None, 1.5])
    def test_invalid_default_index(self, test_client, client_headers, sample_agent_request, index):
        response = test_client.post(
            AGENTS_URL,
            json={**sample_agent_request, "defaultStartingMessageIndex": index},
            headers=client_headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid default starting message index."

    def test_invalid_enum(self, test_client, client_headers, sample_agent_request):
        response = test_client.post(
            AGENTS_URL,
            json={**sample_agent_request, "sttSelection": "morse"},
            headers=client_headers
        )
        assert response.status_code == 400
        assert response.json()["field"] == "sttSelection"

    def test_duplicate_name(self, test_client, client_headers, sample_agent_request):
        test_client.post(AGENTS_URL, json=sample_agent_request, headers=client_headers)
        response = test_client.post(AGENTS_URL, json=sample_agent_request, headers=client_headers)
        assert response.status_code == 400

    def test_requires_client_token(self, test_client, admin_headers, sample_agent_request):
        response = test_client.post(AGENTS_URL, json=sample_agent_request, headers=admin_headers)
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token: userType must be client"


class TestAgentLifecycle:

    @pytest.fixture
    def agent_id(self, test_client, client_headers, sample_agent_request):
        response = test_client.post(AGENTS_URL, json=sample_agent_request, headers=client_headers)
        return response.json()["data"]["_id"]

    def test_list_excludes_audio(self, test_client, client_headers, agent_id):
        response = test_client.get(AGENTS_URL, headers=client_headers)
        agents = response.json()["data"]
        assert [a["_id"] for a in agents] == [agent_id]
        assert "audioBytes" not in agents[0]

    def test_audio_endpoint(self, test_client, client_headers, agent_id):
        response = test_client.get(f"{AGENTS_URL}/{agent_id}/audio", headers=client_headers)

        assert response.status_code == 200
        assert response.headers["content-type"] == "audio/mpeg"
        assert response.content == b"Hello"

    def test_audio_missing(self, test_client, client_headers, sample_agent_request, agent_id):
        test_client.put(
            f"{AGENTS_URL}/{agent_id}",
            json={**sample_agent_request, "defaultStartingMessageIndex": 1},
            headers=client_headers
        )
        response = test_client.get(f"{AGENTS_URL}/{agent_id}/audio", headers=client_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "No audio available for this agent"

    def test_update(self, test_client, client_headers, sample_agent_request, agent_id):
        response = test_client.put(
            f"{AGENTS_URL}/{agent_id}",
            json={**sample_agent_request, "description": "After hours line", "defaultStartingMessageIndex": 1},
            headers=client_headers
        )
        data = response.json()["data"]
        assert data["description"] == "After hours line"
        assert data["firstMessage"] == "Namaste!"

    def test_mobile_update_appends_messages(self, test_client, client_headers, agent_id):
        response = test_client.put(
            f"{AGENTS_URL}/mob/{agent_id}",
            json={"voiceSelection": "meera", "startingMessages": ["Welcome back!"]},
            headers=client_headers
        )

        data = response.json()["data"]
        assert data["voiceSelection"] == "meera"
        assert len(data["startingMessages"]) == 3
        assert data["startingMessages"][-1] == {"text": "Welcome back!", "audioBase64": None}

    def test_other_client_cannot_see_agent(self, test_client, make_client, agent_id):
        from voicecrm.core.jwt_auth import create_user_token
        other = make_client()
        headers = {"Authorization": f"Bearer {create_user_token(other.id, 'client')}"}

        response = test_client.delete(f"{AGENTS_URL}/{agent_id}", headers=headers)
        assert response.status_code == 404

    def test_delete(self, test_client, client_headers, agent_id):
        response = test_client.delete(f"{AGENTS_URL}/{agent_id}", headers=client_headers)
        assert response.status_code == 200
        assert test_client.get(AGENTS_URL, headers=client_headers).json()["data"] == []
