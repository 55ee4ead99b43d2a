"""
Client Account Service
Registration, password and Google sign-in for clients and human agents
"""

from typing import Any, Dict, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import AuthenticationError, DuplicateError, NotFoundError, ValidationError
from voicecrm.core.jwt_auth import USER_TYPE_CLIENT, USER_TYPE_HUMAN_AGENT, create_user_token
from voicecrm.core.security import hash_password, verify_password
from voicecrm.db.models import Client, HumanAgent
from voicecrm.services.storage_service import StorageService

logger = get_logger(__name__)

LOGIN_CODE_READY = 202

# Registration payload keys -> Client attributes
REGISTER_FIELDS = {
    "name": "name",
    "businessName": "business_name",
    "businessLogoKey": "business_logo_key",
    "gstNo": "gst_no",
    "panNo": "pan_no",
    "mobileNo": "mobile_no",
    "address": "address",
    "city": "city",
    "pincode": "pincode",
    "websiteUrl": "website_url",
}


def login_code(client: Client) -> Optional[int]:
    """202 once the profile is complete; only approved clients get this far"""
    if not client.isprofile_completed:
        return None
    return LOGIN_CODE_READY


def human_agent_token(human_agent: HumanAgent) -> str:
    return create_user_token(
        human_agent.id,
        USER_TYPE_HUMAN_AGENT,
        client_id=human_agent.client_id,
        email=human_agent.email
    )


def human_agent_session(human_agent: HumanAgent, client: Client, message: str) -> Dict[str, Any]:
    """Login response shared by password-less and Google human-agent sign-in"""
    return {
        "success": True,
        "message": message,
        "token": human_agent_token(human_agent),
        "humanAgent": human_agent.to_dict(include_agents=False),
        "client": {"_id": client.id, "clientName": client.name, "email": client.email},
    }


class ClientAccountService:
    """
    Client and human-agent authentication flows
    """

    def __init__(self, db: Session, storage: Optional[StorageService] = None):
        self.db = db
        self.storage = storage

    def _find_client_by_email(self, email: str) -> Optional[Client]:
        return self.db.query(Client).filter(Client.email == email.strip().lower()).first()

    def register(self, data: Dict[str, Any], approved_by_admin: bool = False) -> Dict[str, Any]:
        """
        Register a client account

        Args:
            data: camelCase registration payload
            approved_by_admin: True when an admin token accompanied the request

        Raises:
            ValidationError: Missing email or password
            DuplicateError: Email, GST, PAN or mobile number already in use
        """
        email = (data.get("email") or "").strip().lower()
        password = data.get("password")
        if not email or not password:
            raise ValidationError("Email and password are required")

        if self._find_client_by_email(email):
            raise DuplicateError("Email already registered")

        identifiers = [
            column == data[key]
            for key, column in (("gstNo", Client.gst_no), ("panNo", Client.pan_no), ("mobileNo", Client.mobile_no))
            if data.get(key)
        ]
        if identifiers and self.db.query(Client).filter(or_(*identifiers)).first():
            raise DuplicateError("Client already exists with the same GST, PAN, or Mobile number")

        client = Client(
            email=email,
            password=hash_password(password),
            isprofile_completed=True,
            is_approved=approved_by_admin,
            **{attr: data.get(key) for key, attr in REGISTER_FIELDS.items()}
        )

        if client.business_logo_key and self.storage is not None:
            client.business_logo_url = self.storage.get_object_url(client.business_logo_key)

        self.db.add(client)
        self.db.commit()
        self.db.refresh(client)

        logger.info("Client registered", client_id=client.id, approved=client.is_approved)
        return {
            "success": True,
            "token": create_user_token(client.id, USER_TYPE_CLIENT),
            "client": client.to_dict(),
        }

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Password login; unknown email and wrong password are indistinguishable

        Raises:
            ValidationError: Missing credentials
            AuthenticationError: Bad credentials, or the account is not yet approved
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        client = self._find_client_by_email(email)
        if not client or not verify_password(password, client.password):
            logger.info("Client login rejected")
            raise AuthenticationError("Invalid email or password", error_code="INVALID_CREDENTIALS")

        if not client.is_approved:
            logger.info("Client login pending approval", client_id=client.id)
            raise AuthenticationError(
                "Your account is pending admin approval. Please contact your administrator.",
                error_code="NOT_APPROVED"
            )

        body = client.to_dict()
        body["code"] = login_code(client)

        logger.info("Client logged in", client_id=client.id)
        return {
            "success": True,
            "token": create_user_token(client.id, USER_TYPE_CLIENT),
            "client": body,
        }

    def google_login(self, identity: Dict[str, Any]) -> Dict[str, Any]:
        """
        Resolve a verified Google identity: human agent first, then an
        existing client, otherwise provision a new unapproved client
        """
        email = identity["email"].lower()

        human_agent = self.db.query(HumanAgent).filter(HumanAgent.email == email).first()
        if human_agent:
            if not human_agent.is_approved:
                raise AuthenticationError(
                    "Your human agent account is not yet approved. Please contact your administrator.",
                    error_code="NOT_APPROVED"
                )
            client = self.db.query(Client).filter(Client.id == human_agent.client_id).first()
            if not client:
                raise AuthenticationError("Associated client not found")

            logger.info("Google login as human agent", human_agent_id=human_agent.id)
            return {
                "success": True,
                "message": "Login successful",
                "token": human_agent_token(human_agent),
                "userType": USER_TYPE_HUMAN_AGENT,
                "isprofileCompleted": bool(human_agent.isprofile_completed),
                "id": human_agent.id,
                "email": human_agent.email,
                "name": human_agent.human_agent_name,
                "isApproved": bool(human_agent.is_approved),
            }

        client = self._find_client_by_email(email)
        if client is None:
            client = Client(
                name=identity.get("name"),
                email=email,
                password="",
                is_google_user=True,
                google_id=identity.get("googleId"),
                google_picture=identity.get("picture"),
                email_verified=bool(identity.get("emailVerified")),
                isprofile_completed=False,
                is_approved=False
            )
            self.db.add(client)
            self.db.commit()
            self.db.refresh(client)
            logger.info("Provisioned client from Google sign-in", client_id=client.id)

        completed = bool(client.isprofile_completed)
        return {
            "success": True,
            "message": "Login successful" if completed else "Profile incomplete",
            "token": create_user_token(client.id, USER_TYPE_CLIENT),
            "userType": USER_TYPE_CLIENT,
            "isprofileCompleted": completed,
            "id": client.id,
            "email": client.email,
            "name": client.name,
            "isApproved": bool(client.is_approved),
        }

    def profile(self, client_id: str) -> Dict[str, Any]:
        """Client record with a freshly signed logo URL"""
        client = self.db.query(Client).filter(Client.id == client_id).first()
        if not client:
            raise NotFoundError("Client")

        data = client.to_dict()
        data["businessLogoUrl"] = ""
        if client.business_logo_key and self.storage is not None:
            data["businessLogoUrl"] = self.storage.get_object_url(client.business_logo_key)
        return data

    def human_agent_login(self, email: str, client_email: str) -> Dict[str, Any]:
        """Human agents sign in with their own email plus their client's email"""
        if not email or not client_email:
            raise ValidationError("Email and Client Email are required")

        client = self._find_client_by_email(client_email)
        if not client:
            raise AuthenticationError("Invalid Client Email")

        human_agent = self.db.query(HumanAgent).filter(
            HumanAgent.email == email.strip().lower(),
            HumanAgent.client_id == client.id
        ).first()
        if not human_agent:
            raise AuthenticationError("Human agent not found. Please check your email and Client Email.")

        if not human_agent.is_approved:
            raise AuthenticationError(
                "Your account is not yet approved. Please contact your administrator.",
                error_code="NOT_APPROVED"
            )

        logger.info("Human agent logged in", human_agent_id=human_agent.id)
        return human_agent_session(human_agent, client, "Human agent login successful")

    def human_agent_google_login(self, identity: Dict[str, Any]) -> Dict[str, Any]:
        """Google sign-in restricted to registered human agents"""
        human_agent = self.db.query(HumanAgent).filter(
            HumanAgent.email == identity["email"].lower()
        ).first()
        if not human_agent:
            raise AuthenticationError(
                "Human agent not found. Please contact your administrator to register your email."
            )

        if not human_agent.is_approved:
            raise AuthenticationError(
                "Your account is not yet approved. Please contact your administrator.",
                error_code="NOT_APPROVED"
            )

        client = self.db.query(Client).filter(Client.id == human_agent.client_id).first()
        if not client:
            raise AuthenticationError("Associated client not found")

        logger.info("Human agent Google login", human_agent_id=human_agent.id)
        return human_agent_session(human_agent, client, "Human agent Google login successful")

    def update_account(self, client: Client, changes: Dict[str, Any]) -> Client:
        """
        Update display name, login email and the free-form settings document.
        Settings are merged shallowly; omitted fields are left unchanged.

        Raises:
            ValidationError: Blank email or non-object settings
            DuplicateError: Email already used by another client
        """
        if "name" in changes and changes["name"] is not None:
            client.name = changes["name"].strip()

        if "email" in changes:
            email = (changes["email"] or "").strip().lower()
            if not email:
                raise ValidationError("Email cannot be empty", field="email")
            if email != client.email:
                clash = self.db.query(Client).filter(Client.email == email, Client.id != client.id).first()
                if clash:
                    raise DuplicateError("Email already registered")
                client.email = email

        if changes.get("settings") is not None:
            if not isinstance(changes["settings"], dict):
                raise ValidationError("settings must be an object", field="settings")
            client.settings = {**(client.settings or {}), **changes["settings"]}

        self.db.commit()
        self.db.refresh(client)

        logger.info("Client account updated", client_id=client.id)
        return client
