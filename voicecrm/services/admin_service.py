"""
Admin Service
Back-office accounts (admins, superadmins) and client administration
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import AuthenticationError, DuplicateError, NotFoundError, ValidationError
from voicecrm.core.jwt_auth import USER_TYPE_CLIENT, create_user_token
from voicecrm.core.security import hash_password, verify_password
from voicecrm.db.models import Admin, AdminRole, Client

logger = get_logger(__name__)


class AdminService:
    """
    Service for admin account and client management operations
    """

    def __init__(self, db: Session):
        self.db = db

    # ============================================
    # ACCOUNTS
    # ============================================

    def get_admin(self, admin_id: str) -> Optional[Admin]:
        return self.db.query(Admin).filter(Admin.id == admin_id).first()

    def register(self, name: str, email: str, password: str, role: str = AdminRole.ADMIN.value) -> Admin:
        """
        Create an admin or superadmin account

        Raises:
            ValidationError: Missing name, email or password
            DuplicateError: Email already taken
        """
        if not name or not email or not password:
            raise ValidationError("Name, email and password are required")

        email = email.strip().lower()
        if self.db.query(Admin).filter(Admin.email == email).first():
            raise DuplicateError("Admin already exists")

        admin = Admin(
            name=name.strip(),
            email=email,
            password=hash_password(password),
            role=AdminRole(role).value
        )
        self.db.add(admin)
        self.db.commit()
        self.db.refresh(admin)

        logger.info("Admin registered", admin_id=admin.id, role=admin.role)
        return admin

    def login(self, email: str, password: str, role: str = AdminRole.ADMIN.value) -> Dict[str, Any]:
        """
        Verify credentials and mint a token carrying the account's role

        A superadmin may log in through the admin endpoint; an admin may not
        log in through the superadmin endpoint.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        admin = self.db.query(Admin).filter(Admin.email == email.strip().lower()).first()
        if not admin or not verify_password(password, admin.password):
            raise AuthenticationError("Invalid email or password", error_code="INVALID_CREDENTIALS")

        if role == AdminRole.SUPERADMIN.value and admin.role != AdminRole.SUPERADMIN.value:
            raise AuthenticationError("Invalid email or password", error_code="INVALID_CREDENTIALS")

        token = create_user_token(admin.id, admin.role, email=admin.email)
        logger.info("Admin logged in", admin_id=admin.id, role=admin.role)
        return {"token": token, "user": admin.to_dict()}

    def list_admins(self) -> List[Admin]:
        return self.db.query(Admin).order_by(Admin.created_at.desc()).all()

    def delete_admin(self, admin_id: str) -> None:
        admin = self.get_admin(admin_id)
        if not admin:
            raise NotFoundError("Admin")
        self.db.delete(admin)
        self.db.commit()
        logger.info("Admin deleted", admin_id=admin_id)

    # ============================================
    # CLIENTS
    # ============================================

    def list_clients(self) -> List[Client]:
        return self.db.query(Client).order_by(Client.created_at.desc()).all()

    def get_client(self, client_id: str) -> Client:
        client = self.db.query(Client).filter(Client.id == client_id).first()
        if not client:
            raise NotFoundError("Client")
        return client

    def delete_client(self, client_id: str) -> None:
        """Delete a client; agents, groups, campaigns, logs and profile cascade"""
        client = self.get_client(client_id)
        self.db.delete(client)
        self.db.commit()
        logger.info("Client deleted", client_id=client_id)

    def client_token(self, client_id: str) -> Dict[str, Any]:
        """Mint a client token so an admin can act as that client"""
        client = self.get_client(client_id)
        token = create_user_token(client.id, USER_TYPE_CLIENT)
        logger.info("Issued client token to admin", client_id=client_id)
        return {"token": token, "client": client.to_dict()}

    def approve_client(self, client_id: str) -> Client:
        client = self.get_client(client_id)
        client.is_approved = True
        self.db.commit()
        self.db.refresh(client)
        logger.info("Client approved", client_id=client_id)
        return client
