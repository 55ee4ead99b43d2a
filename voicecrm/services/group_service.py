"""
Group Service
Contact lists and their contacts
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from voicecrm.core.logging import get_logger
from voicecrm.core.exceptions import NotFoundError, ValidationError
from voicecrm.db.models import Contact, Group
from voicecrm.utils import is_blank

logger = get_logger(__name__)


class GroupService:

    def __init__(self, db: Session, client_id: str):
        self.db = db
        self.client_id = client_id

    def list(self) -> List[Group]:
        return (
            self.db.query(Group)
            .filter(Group.client_id == self.client_id)
            .order_by(Group.created_at.desc())
            .all()
        )

    def get(self, group_id: str) -> Group:
        group = self.db.query(Group).filter(Group.id == group_id, Group.client_id == self.client_id).first()
        if not group:
            raise NotFoundError("Group")
        return group

    def create(self, name: Optional[str], description: Optional[str] = None) -> Group:
        if is_blank(name):
            raise ValidationError("Group name is required", field="name")

        group = Group(
            client_id=self.client_id,
            name=name.strip(),
            description=(description or "").strip()
        )
        self.db.add(group)
        self.db.commit()
        self.db.refresh(group)

        logger.info("Group created", group_id=group.id, client_id=self.client_id)
        return group

    def update(self, group_id: str, name: Optional[str], description: Optional[str] = None) -> Group:
        if is_blank(name):
            raise ValidationError("Group name is required", field="name")

        group = self.get(group_id)
        group.name = name.strip()
        group.description = (description or "").strip()
        self.db.commit()
        self.db.refresh(group)
        return group

    def delete(self, group_id: str) -> None:
        group = self.get(group_id)
        self.db.delete(group)
        self.db.commit()
        logger.info("Group deleted", group_id=group_id)

    def add_contact(
        self,
        group_id: str,
        name: Optional[str],
        phone: Optional[str],
        email: Optional[str] = None
    ) -> Contact:
        if is_blank(name) or is_blank(phone):
            raise ValidationError("Name and phone are required")

        group = self.get(group_id)
        contact = Contact(name=name.strip(), phone=phone.strip(), email=email or "")
        group.contacts.append(contact)
        self.db.commit()
        self.db.refresh(contact)
        return contact

    def remove_contact(self, group_id: str, contact_id: str) -> None:
        """Removing a contact that is not in the group is a no-op"""
        group = self.get(group_id)
        group.contacts = [c for c in group.contacts if c.id != contact_id]
        self.db.commit()
