"""
Tests for business profiles and the client completion flag
"""

import uuid

import pytest

from voicecrm.db.models import Client, Profile
from voicecrm.services.profile_service import check_profile_completed, validate_profile_data

PROFILE_URL = "/api/v1/auth/client/profile"


class TestCompletionRules:

    def test_all_nine_fields_required(self):
        fields = {
            "business_name": "Acme", "business_type": "Travel", "contact_number": "1",
            "contact_name": "R", "pincode": "5", "city": "B", "state": "K",
            "pancard": "P", "gst": "G",
        }
        assert check_profile_completed(fields)

        for name in fields:
            assert not check_profile_completed({**fields, name: "   "})

    def test_optional_fields_do_not_matter(self):
        fields = {
            "business_name": "Acme", "business_type": "Travel", "contact_number": "1",
            "contact_name": "R", "pincode": "5", "city": "B", "state": "K",
            "pancard": "P", "gst": "G", "website": None, "annual_turnover": None,
        }
        assert check_profile_completed(fields)

    def test_write_validation_messages(self):
        errors = validate_profile_data({"business_name": "Acme"})
        assert "Business type is required" in errors
        assert "Business name is required" not in errors
        assert len(errors) == 6


class TestProfileEndpoints:

    def client_flag(self, db_session, client_id):
        db_session.expire_all()
        return db_session.query(Client).filter(Client.id == client_id).one().isprofile_completed

    def test_create_syncs_client_flag(
        self, test_client, db_session, make_client, sample_profile_request
    ):
        from voicecrm.core.jwt_auth import create_user_token
        client = make_client(completed=False)
        headers = {"Authorization": f"Bearer {create_user_token(client.id, 'client')}"}

        response = test_client.post(PROFILE_URL + "/", json=sample_profile_request, headers=headers)

        assert response.status_code == 201
        assert response.json()["data"]["isProfileCompleted"] is True
        assert self.client_flag(db_session, client.id) is True

    def test_incomplete_profile_clears_flag(
        self, test_client, db_session, client_account, client_headers, sample_profile_request
    ):
        body = {k: v for k, v in sample_profile_request.items() if k != "gst"}
        response = test_client.post(PROFILE_URL + "/", json=body, headers=client_headers)

        assert response.status_code == 201
        assert response.json()["data"]["isProfileCompleted"] is False
        assert self.client_flag(db_session, client_account.id) is False

    def test_validation_failure(self, test_client, client_headers):
        response = test_client.post(
            PROFILE_URL + "/",
            json={"businessName": "Acme", "city": " "},
            headers=client_headers
        )
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation failed"
        assert "City is required" in body["errors"]

    def test_duplicate_profile_conflicts(self, test_client, client_headers, sample_profile_request):
        test_client.post(PROFILE_URL + "/", json=sample_profile_request, headers=client_headers)
        response = test_client.post(PROFILE_URL + "/", json=sample_profile_request, headers=client_headers)
        assert response.status_code == 409

    def test_get_profile(self, test_client, client_account, client_headers, sample_profile_request):
        test_client.post(PROFILE_URL + "/", json=sample_profile_request, headers=client_headers)

        response = test_client.get(f"{PROFILE_URL}/{client_account.id}", headers=client_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["email"] == client_account.email
        assert data["profile"]["businessName"] == "Acme Tours"

    def test_get_invalid_id(self, test_client, client_headers):
        response = test_client.get(f"{PROFILE_URL}/not-a-valid-id", headers=client_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid client ID format"

    def test_get_missing_profile(self, test_client, client_account, client_headers):
        response = test_client.get(f"{PROFILE_URL}/{client_account.id}", headers=client_headers)
        assert response.status_code == 404

    def test_other_clients_profile_forbidden(self, test_client, client_headers):
        response = test_client.get(f"{PROFILE_URL}/{uuid.uuid4()}", headers=client_headers)
        assert response.status_code == 401

    def test_update_recomputes_completion(
        self, test_client, db_session, client_account, client_headers, sample_profile_request
    ):
        body = {k: v for k, v in sample_profile_request.items() if k != "pancard"}
        test_client.post(PROFILE_URL + "/", json=body, headers=client_headers)
        assert self.client_flag(db_session, client_account.id) is False

        response = test_client.put(
            f"{PROFILE_URL}/{client_account.id}",
            json={**body, "pancard": "ABCDE1234F"},
            headers=client_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["isProfileCompleted"] is True
        assert self.client_flag(db_session, client_account.id) is True

    def test_delete_clears_client_flag(
        self, test_client, db_session, client_account, client_headers, sample_profile_request
    ):
        test_client.post(PROFILE_URL + "/", json=sample_profile_request, headers=client_headers)
        assert self.client_flag(db_session, client_account.id) is True

        response = test_client.delete(f"{PROFILE_URL}/{client_account.id}", headers=client_headers)

        assert response.status_code == 200
        assert self.client_flag(db_session, client_account.id) is False
        assert db_session.query(Profile).count() == 0

    def test_human_agent_profile(
        self, test_client, db_session, client_account, client_headers, make_human_agent, sample_profile_request
    ):
        human_agent = make_human_agent(client_account)

        response = test_client.post(
            PROFILE_URL + "/",
            json={**sample_profile_request, "humanAgentId": human_agent.id},
            headers=client_headers
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["humanAgentId"] == human_agent.id
        assert data["clientId"] is None


class TestProfileListing:

    @pytest.fixture
    def profiles(self, db_session, make_client):
        for i, (name, kind) in enumerate([("Acme Tours", "Travel"), ("Zen Foods", "Food"), ("Acme Labs", "Tech")]):
            client = make_client()
            db_session.add(Profile(client_id=client.id, business_name=name, business_type=kind, contact_name=f"C{i}"))
        db_session.commit()

    def test_admin_search_and_paginate(self, test_client, admin_headers, profiles):
        response = test_client.get(
            PROFILE_URL + "/",
            params={"search": "acme", "page": 1, "limit": 1},
            headers=admin_headers
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total"] == 2
        assert data["totalPages"] == 2
        assert data["currentPage"] == 1
        assert len(data["profiles"]) == 1

    def test_client_token_rejected(self, test_client, client_headers):
        response = test_client.get(PROFILE_URL + "/", headers=client_headers)
        assert response.status_code == 401
