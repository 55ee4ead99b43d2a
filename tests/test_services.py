"""
Tests for external service wrappers and auth primitives
"""

import time

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import rsa
from botocore.exceptions import ClientError
from google.auth import crypt, jwt
from sqlalchemy.exc import OperationalError

from voicecrm.core.exceptions import AuthenticationError, ExternalServiceError, ValidationError
from voicecrm.core.jwt_auth import JWTValidator, create_user_token, extract_bearer_token
from voicecrm.core.security import hash_password, verify_password
from voicecrm.db import get_db
from voicecrm.main import app
from voicecrm.services.bot_proxy import BotProxyService, get_bot_proxy
from voicecrm.services.google_auth import GoogleTokenVerifier, get_google_verifier
from voicecrm.services.storage_service import StorageService
from voicecrm.services.voice_service import VoiceService, get_voice_service


def mock_async_client(mock_cls, response=None, error=None):
    """Wire a patched httpx.AsyncClient so `async with` yields a client whose post is awaited"""
    client = MagicMock()
    client.post = AsyncMock(return_value=response, side_effect=error)
    mock_cls.return_value.__aenter__ = AsyncMock(return_value=client)
    mock_cls.return_value.__aexit__ = AsyncMock(return_value=False)
    return client


class TestVoiceService:

    def test_build_request_language_defaults(self):
        service = VoiceService()

        hindi = service.build_request("Namaste", language="hi")
        english = service.build_request("Hello")

        assert hindi["target_language_code"] == "hi-IN"
        assert hindi["speaker"] == "anushka"
        assert english["target_language_code"] == "en-IN"
        assert english["speaker"] == "abhilash"
        assert english["inputs"] == ["Hello"]

    def test_explicit_speaker(self):
        assert VoiceService().build_request("Hi", speaker="meera")["speaker"] == "meera"

    @pytest.mark.asyncio
    async def test_text_to_speech(self):
        response = MagicMock()
        response.json.return_value = {"audios": ["SGVsbG8="]}

        with patch("voicecrm.services.voice_service.httpx.AsyncClient") as mock_cls:
            client = mock_async_client(mock_cls, response=response)
            result = await VoiceService().text_to_speech("Hello")

        assert result["audioBytes"] == b"Hello"
        assert result["format"] == "mp3"
        assert result["channels"] == 1
        headers = client.post.call_args.kwargs["headers"]
        assert headers["API-Subscription-Key"] == "test-sarvam-key"

    @pytest.mark.asyncio
    async def test_blank_text_rejected(self):
        with pytest.raises(ValidationError):
            await VoiceService().text_to_speech("   ")

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        service = VoiceService()
        service.api_key = ""
        with pytest.raises(ExternalServiceError):
            await service.text_to_speech("Hello")

    @pytest.mark.asyncio
    async def test_no_audio_returned(self):
        response = MagicMock()
        response.json.return_value = {"audios": []}

        with patch("voicecrm.services.voice_service.httpx.AsyncClient") as mock_cls:
            mock_async_client(mock_cls, response=response)
            with pytest.raises(ExternalServiceError):
                await VoiceService().text_to_speech("Hello")

    @pytest.mark.asyncio
    async def test_transport_error(self):
        with patch("voicecrm.services.voice_service.httpx.AsyncClient") as mock_cls:
            mock_async_client(mock_cls, error=httpx.ConnectError("connection refused"))
            with pytest.raises(ExternalServiceError):
                await VoiceService().text_to_speech("Hello")


class TestStorageService:

    def test_put_url(self):
        s3 = MagicMock()
        s3.generate_presigned_url.return_value = "https://s3.example.test/put"

        url = StorageService(client=s3).put_object_url("businessLogo/1_logo.png", "image/png")

        assert url == "https://s3.example.test/put"
        args, kwargs = s3.generate_presigned_url.call_args
        assert args[0] == "put_object"
        assert kwargs["Params"] == {
            "Bucket": "test-bucket",
            "Key": "businessLogo/1_logo.png",
            "ContentType": "image/png",
        }

    def test_client_error_wrapped(self):
        s3 = MagicMock()
        s3.generate_presigned_url.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "GeneratePresignedUrl"
        )
        with pytest.raises(ExternalServiceError):
            StorageService(client=s3).get_object_url("businessLogo/1_logo.png")

    def test_build_key(self):
        key = StorageService.build_key("businessLogo", "logo.png")
        prefix, name = key.split("/")
        assert prefix == "businessLogo"
        assert name.endswith("_logo.png")
        assert name.split("_")[0].isdigit()


class TestBotProxy:

    @pytest.mark.asyncio
    async def test_forward(self):
        response = MagicMock(status_code=202)
        response.json.return_value = {"queued": True}

        with patch("voicecrm.services.bot_proxy.httpx.AsyncClient") as mock_cls:
            client = mock_async_client(mock_cls, response=response)
            status, body = await BotProxyService().forward({"text": "hi"}, "client-1")

        assert status == 202
        assert body == {"queued": True}
        assert client.post.call_args.kwargs["headers"] == {"X-Client-Id": "client-1"}

    @pytest.mark.asyncio
    async def test_missing_url(self):
        with pytest.raises(ExternalServiceError):
            await BotProxyService(base_url="").forward({}, "client-1")

    def test_route_relays_status(self, test_client, client_headers):
        proxy = MagicMock()
        proxy.forward = AsyncMock(return_value=(422, {"error": "bad message"}))
        app.dependency_overrides[get_bot_proxy] = lambda: proxy

        response = test_client.post("/api/v1/client/bot/message", json={"text": "hi"}, headers=client_headers)

        assert response.status_code == 422
        assert response.json() == {"error": "bad message"}


class TestVoiceRoute:

    def test_synthesize(self, test_client, client_headers):
        voice = MagicMock()
        voice.text_to_speech = AsyncMock(return_value={
            "audioBase64": "SGVsbG8=",
            "audioBytes": b"Hello",
            "sampleRate": 22050,
            "channels": 1,
            "format": "mp3",
        })
        app.dependency_overrides[get_voice_service] = lambda: voice

        response = test_client.post(
            "/api/v1/client/voice/synthesize",
            json={"text": "Hello", "language": "en"},
            headers=client_headers
        )

        body = response.json()
        assert body["audioBuffer"] == "SGVsbG8="
        assert body["size"] == 5
        assert body["sampleRate"] == 22050


class TestGoogleTokenVerifier:
    """Real google-auth verification against locally signed ID tokens"""

    AUDIENCES = ["web-client.apps.googleusercontent.com", "android-client.apps.googleusercontent.com"]

    @pytest.fixture(scope="class")
    def signing_key(self):
        public_key, private_key = rsa.newkeys(1024)
        signer = crypt.RSASigner.from_string(private_key.save_pkcs1().decode("ascii"), key_id="test-key")
        return signer, {"test-key": public_key.save_pkcs1().decode("ascii")}

    def id_token_for(self, signer, audience, **claims):
        now = int(time.time())
        payload = {
            "iss": "https://accounts.google.com",
            "aud": audience,
            "sub": "google-sub-9",
            "email": "Owner@Acme.test",
            "email_verified": True,
            "name": "Acme Owner",
            "iat": now,
            "exp": now + 300,
        }
        payload.update(claims)
        return jwt.encode(signer, payload).decode("ascii")

    def test_accepts_configured_audience(self, signing_key):
        signer, certs = signing_key
        token = self.id_token_for(signer, self.AUDIENCES[1])

        with patch("google.oauth2.id_token._fetch_certs", return_value=certs):
            identity = GoogleTokenVerifier(audiences=self.AUDIENCES).verify(token)

        assert identity["email"] == "owner@acme.test"
        assert identity["googleId"] == "google-sub-9"
        assert identity["emailVerified"] is True

    def test_rejects_token_minted_for_another_app(self, signing_key):
        signer, certs = signing_key
        token = self.id_token_for(signer, "some-other-app.apps.googleusercontent.com")

        with patch("google.oauth2.id_token._fetch_certs", return_value=certs):
            with pytest.raises(AuthenticationError) as exc_info:
                GoogleTokenVerifier(audiences=self.AUDIENCES).verify(token)

        assert exc_info.value.status_code == 401

    def test_unconfigured_audiences_reject_every_token(self, signing_key):
        signer, certs = signing_key
        token = self.id_token_for(signer, "some-other-app.apps.googleusercontent.com")

        with patch("google.oauth2.id_token._fetch_certs", return_value=certs) as fetch_certs:
            with pytest.raises(AuthenticationError) as exc_info:
                GoogleTokenVerifier(audiences=[]).verify(token)

        assert exc_info.value.message == "Google sign-in is not configured"
        fetch_certs.assert_not_called()

    def test_passes_every_audience(self):
        with patch("voicecrm.services.google_auth.id_token.verify_oauth2_token") as verify:
            verify.return_value = {"email": "owner@acme.test", "sub": "1"}
            GoogleTokenVerifier(audiences=self.AUDIENCES).verify("token")

        assert verify.call_args.kwargs["audience"] == self.AUDIENCES

    def test_value_error_is_unauthorized(self):
        with patch("voicecrm.services.google_auth.id_token.verify_oauth2_token") as verify:
            verify.side_effect = ValueError("Token expired")
            with pytest.raises(AuthenticationError) as exc_info:
                GoogleTokenVerifier(audiences=self.AUDIENCES).verify("token")

        assert exc_info.value.message == "Invalid Google token"

    def test_payload_without_email_rejected(self):
        with patch("voicecrm.services.google_auth.id_token.verify_oauth2_token") as verify:
            verify.return_value = {"sub": "1"}
            with pytest.raises(AuthenticationError):
                GoogleTokenVerifier(audiences=self.AUDIENCES).verify("token")

    def test_route_reports_unconfigured_sign_in(self, test_client):
        app.dependency_overrides[get_google_verifier] = lambda: GoogleTokenVerifier(audiences=[])

        response = test_client.post("/api/v1/client/google-login", json={"token": "any"})

        assert response.status_code == 401
        assert response.json()["message"] == "Google sign-in is not configured"


class TestDatabaseErrors:

    def test_driver_failure_uses_database_envelope(self, test_client, client_headers):
        broken = MagicMock()
        broken.query.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
        app.dependency_overrides[get_db] = lambda: broken

        response = test_client.get("/api/v1/client/groups", headers=client_headers)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "DATABASE_ERROR",
            "message": "Database operation failed",
        }


class TestAuthPrimitives:

    def test_password_round_trip(self):
        hashed = hash_password("secret123")
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong", hashed)
        assert not verify_password("secret123", "")

    def test_validator_accepts_allowed_type(self):
        token = create_user_token("abc", "admin")
        assert JWTValidator(["admin", "superadmin"]).validate(token)["id"] == "abc"

    def test_validator_rejects_other_type(self):
        token = create_user_token("abc", "client")
        with pytest.raises(AuthenticationError) as exc_info:
            JWTValidator(["admin"]).validate(token)
        assert exc_info.value.message == "Invalid token: userType must be admin"

    def test_validator_rejects_garbage(self):
        with pytest.raises(AuthenticationError):
            JWTValidator().validate("not-a-jwt")

    def test_extract_bearer_token(self):
        assert extract_bearer_token("Bearer abc") == "abc"
        assert extract_bearer_token("Basic abc") is None
        assert extract_bearer_token(None) is None


class TestHealth:

    def test_health(self, test_client):
        response = test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, test_client):
        assert test_client.get("/health/ready").json()["checks"]["database"] is True

    def test_root(self, test_client):
        assert test_client.get("/").json()["endpoints"]["admin"] == "/api/v1/admin"
